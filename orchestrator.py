"""
Analysis session.

Sequences one analysis: sample a review, classify it, pick the business
action and hand the outcome to telemetry without waiting for it.
"""

import logging
import platform
import random
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

import config
from business_logic import Action, determine_action
from errors import ClassifierError
from reviews import sample_review
from sentiment_model import (
    ClassificationResult,
    SentimentClassifier,
    mock_classification,
    sentiment_bucket,
    sentiment_summary,
)
from telemetry import AnalysisLogRecord, EmitOutcome, TelemetryQueue, now_ms

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"review-actions/{platform.python_version()} ({platform.system()})"


@dataclass
class AnalysisOutcome:
    review: str
    result: ClassificationResult
    bucket: str
    summary: str
    action: Action
    log_future: Optional["Future[EmitOutcome]"] = None
    mocked: bool = False


def build_log_record(
    review: str,
    result: ClassificationResult,
    action: Action,
    user_id: str,
    model_name: str,
    user_agent: str = DEFAULT_USER_AGENT,
) -> AnalysisLogRecord:
    bucket = sentiment_bucket(result)
    meta = {
        "user_id": user_id,
        "model": model_name,
        "sentiment_bucket": bucket,
        "label": result.raw_label.upper(),
        "confidence": result.confidence,
        "user_agent": user_agent,
        "timestamp_iso": datetime.now(timezone.utc).isoformat(),
        "review_length": len(review),
        "business_decision": action.action_code.value,
    }
    return AnalysisLogRecord(
        timestamp=now_ms(),
        review_text=review,
        sentiment_summary=sentiment_summary(result),
        action_taken=action.action_code,
        metadata=meta,
    )


class AnalysisSession:
    """Everything one user session needs to run analyses."""

    def __init__(
        self,
        reviews: List[str],
        classifier: SentimentClassifier,
        telemetry: Optional[TelemetryQueue],
        user_id: str,
        model_name: str = config.MODEL_NAME,
        use_mock_fallback: bool = config.USE_MOCK_FALLBACK,
        user_agent: str = DEFAULT_USER_AGENT,
        rng: Optional[random.Random] = None,
    ):
        self.reviews = list(reviews)
        self.classifier = classifier
        self.telemetry = telemetry
        self.user_id = user_id
        self.model_name = model_name
        self.use_mock_fallback = use_mock_fallback
        self.user_agent = user_agent
        self.rng = rng or random.Random()
        self.history: List[AnalysisOutcome] = []

    def analyze_random_review(self) -> AnalysisOutcome:
        review = sample_review(self.reviews, self.rng)
        return self.analyze(review)

    def analyze(self, review: str) -> AnalysisOutcome:
        """
        Classify a review and decide on the action.

        Classifier errors propagate to the caller unless the mock fallback is
        enabled. Telemetry is submitted but not awaited.
        """
        mocked = False
        try:
            result = self.classifier.classify(review)
        except ClassifierError as e:
            if not self.use_mock_fallback:
                raise
            logger.warning(f"Sentiment analysis failed, using mock result: {e}")
            result = mock_classification(self.rng)
            mocked = True

        action = determine_action(result.confidence, result.raw_label)
        outcome = AnalysisOutcome(
            review=review,
            result=result,
            bucket=sentiment_bucket(result),
            summary=sentiment_summary(result),
            action=action,
            mocked=mocked,
        )

        if self.telemetry is not None:
            record = build_log_record(
                review, result, action, self.user_id, self.model_name, self.user_agent
            )
            outcome.log_future = self.telemetry.submit(record)

        self.history.append(outcome)
        return outcome

    def action_counts(self):
        counts = {}
        for outcome in self.history:
            code = outcome.action.action_code.value
            counts[code] = counts.get(code, 0) + 1
        return counts
