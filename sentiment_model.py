# Load and run the sentiment classifier here
import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, Optional

from transformers import pipeline

import config
from errors import ClassifierError, ClassifierNotReady, MalformedClassifierOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    raw_label: str
    confidence: float


def parse_classifier_output(output: Any) -> ClassificationResult:
    """
    Validate raw pipeline output and return the best-label result.

    Accepts the list of {'label', 'score'} dicts returned for a single text,
    or the nested list returned for a batch (first text only).
    """
    if isinstance(output, list) and output and isinstance(output[0], list):
        output = output[0]
    if not isinstance(output, list) or not output:
        raise MalformedClassifierOutput(f"Expected a non-empty list of results, got {output!r}")

    best = output[0]
    if not isinstance(best, dict):
        raise MalformedClassifierOutput(f"Expected a result dict, got {best!r}")

    label = best.get("label")
    score = best.get("score")
    if not isinstance(label, str) or not label:
        raise MalformedClassifierOutput(f"Missing or empty label in {best!r}")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise MalformedClassifierOutput(f"Missing or non-numeric score in {best!r}")
    if math.isnan(score) or not 0.0 <= score <= 1.0:
        raise MalformedClassifierOutput(f"Score out of range in {best!r}")

    return ClassificationResult(raw_label=label, confidence=float(score))


def sentiment_bucket(result: ClassificationResult) -> str:
    """Coarse positive / negative / neutral bucket used for display and logging."""
    label = result.raw_label.upper()
    if label == "POSITIVE" and result.confidence > 0.5:
        return "positive"
    if label == "NEGATIVE" and result.confidence > 0.5:
        return "negative"
    return "neutral"


def sentiment_summary(result: ClassificationResult) -> str:
    """e.g. 'POSITIVE (91.2% confidence)'"""
    return f"{result.raw_label.upper()} ({result.confidence * 100:.1f}% confidence)"


SENTIMENT_ICONS = {
    "positive": "👍",
    "negative": "👎",
    "neutral": "❓",
}


def mock_classification(rng: Optional[random.Random] = None) -> ClassificationResult:
    """Random stand-in result for when the real model is unavailable."""
    rng = rng or random.Random()
    return ClassificationResult(
        raw_label="POSITIVE" if rng.random() > 0.5 else "NEGATIVE",
        confidence=0.7 + rng.random() * 0.3,
    )


class SentimentClassifier:
    """Thin wrapper around a Hugging Face text-classification pipeline."""

    def __init__(
        self,
        model_name: str = config.MODEL_NAME,
        device: int = config.DEVICE,
        pipeline_factory: Callable[..., Any] = pipeline,
    ):
        self.model_name = model_name
        self.device = device
        self._pipeline_factory = pipeline_factory
        self._pipe = None
        self.load_error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self._pipe is not None

    def load(self) -> bool:
        """Load the pipeline once. Returns False (and keeps the error) on failure."""
        if self._pipe is not None:
            return True
        try:
            logger.info(f"Loading sentiment model {self.model_name}...")
            self._pipe = self._pipeline_factory(
                "text-classification",
                model=self.model_name,
                device=self.device,
                truncation=True,
            )
            self.load_error = None
            logger.info("Sentiment model ready")
            return True
        except Exception as e:
            logger.error(f"Failed to load sentiment model: {e}", exc_info=True)
            self.load_error = str(e)
            return False

    def classify(self, text: str) -> ClassificationResult:
        """Predict the sentiment of a single text."""
        if self._pipe is None:
            raise ClassifierNotReady("Sentiment model is not ready yet. Please wait a moment.")
        try:
            output = self._pipe(text)
        except Exception as e:
            raise ClassifierError(f"Failed to analyze sentiment: {e}") from e
        return parse_classifier_output(output)

    def classify_batch(self, texts, batch_size: int = config.BATCH_SIZE):
        """Predict a list of texts, yielding one result per text."""
        if self._pipe is None:
            raise ClassifierNotReady("Sentiment model is not ready yet. Please wait a moment.")
        try:
            predictions = self._pipe(list(texts), batch_size=batch_size)
        except RuntimeError as e:
            if "CUDA out of memory" not in str(e):
                raise ClassifierError(f"Failed to analyze sentiment: {e}") from e
            logger.warning("Reducing batch size due to memory constraints")
            predictions = self._pipe(list(texts), batch_size=max(1, batch_size // 2))
        for pred in predictions:
            yield parse_classifier_output([pred])


if __name__ == "__main__":
    config.setup_logging()
    classifier = SentimentClassifier()
    if classifier.load():
        prediction = classifier.classify("I absolutely loved the movie!")
        print(f"Sentiment: {sentiment_summary(prediction)}")
