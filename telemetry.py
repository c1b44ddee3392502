"""
Analysis telemetry.

Each analysis is appended as one row to a spreadsheet through a Google Apps
Script web app. Logging must never hold up or break the user-facing result,
so records go through a bounded in-memory queue drained by a background
thread, and every transmission resolves to an EmitOutcome instead of raising.
"""

import json
import logging
import threading
import time
from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Optional, Tuple

import httpx

import config
from business_logic import ActionCode

logger = logging.getLogger(__name__)


@dataclass
class AnalysisLogRecord:
    timestamp: int  # ms since epoch
    review_text: str
    sentiment_summary: str
    action_taken: Optional[ActionCode] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.review_text = self.review_text[:config.MAX_REVIEW_CHARS]


@dataclass(frozen=True)
class EmitOutcome:
    success: bool
    reason: Optional[str] = None


def now_ms() -> int:
    return int(time.time() * 1000)


def to_form(record: AnalysisLogRecord) -> Dict[str, str]:
    """Flatten a record into the string fields the web app expects."""
    form = {
        "ts": str(record.timestamp),
        "review": record.review_text[:config.MAX_REVIEW_CHARS],
        "sentiment": record.sentiment_summary,
    }
    if record.action_taken is not None:
        form["action_taken"] = ActionCode(record.action_taken).value
    form["meta"] = json.dumps(record.metadata, default=str)
    return form


class TelemetryEmitter:
    """Posts log records to the telemetry endpoint, one request per record."""

    def __init__(
        self,
        url: Optional[str] = config.TELEMETRY_URL,
        timeout: float = config.TELEMETRY_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self.url = url
        # Apps Script answers with a redirect to the actual response
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def emit(self, record: AnalysisLogRecord) -> EmitOutcome:
        """Send one record. Failures are logged and returned, never raised."""
        if not self.url:
            return EmitOutcome(False, "telemetry endpoint not configured")

        try:
            response = self._client.post(self.url, data=to_form(record))
        except httpx.HTTPError as e:
            logger.warning(f"Telemetry logging failed: {e}")
            return EmitOutcome(False, str(e))

        if not response.is_success:
            reason = f"HTTP {response.status_code}: {response.text[:200]}"
            logger.warning(f"Telemetry logging failed: {reason}")
            return EmitOutcome(False, reason)

        logger.info("Logged analysis to spreadsheet successfully")
        return EmitOutcome(True)

    def close(self):
        self._client.close()


@dataclass
class QueueStats:
    submitted: int = 0
    sent: int = 0
    failed: int = 0
    dropped: int = 0


class TelemetryQueue:
    """
    Bounded FIFO of log records drained by a single daemon worker thread.

    When the queue is full new records are dropped. Failed sends are not
    retried.
    """

    def __init__(self, emitter: TelemetryEmitter, maxsize: int = config.TELEMETRY_QUEUE_SIZE):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.emitter = emitter
        self.maxsize = maxsize
        self.stats = QueueStats()
        self._pending: Deque[Tuple[AnalysisLogRecord, Future]] = deque()
        self._cond = threading.Condition()
        self._busy = False
        self._closed = False
        self._worker = threading.Thread(target=self._drain, name="telemetry-worker", daemon=True)
        self._worker.start()

    def submit(self, record: AnalysisLogRecord) -> "Future[EmitOutcome]":
        """Queue a record without blocking. The future resolves once it is sent or dropped."""
        future: Future = Future()
        with self._cond:
            if self._closed:
                future.set_result(EmitOutcome(False, "queue closed"))
                return future
            if len(self._pending) >= self.maxsize:
                self.stats.dropped += 1
                logger.warning(f"Telemetry queue full ({self.maxsize}), dropping record")
                future.set_result(EmitOutcome(False, "queue full"))
                return future
            self.stats.submitted += 1
            self._pending.append((record, future))
            self._cond.notify_all()
        return future

    def _drain(self):
        while True:
            with self._cond:
                while not self._pending and not self._closed:
                    self._cond.wait()
                if not self._pending:
                    return
                record, future = self._pending.popleft()
                self._busy = True

            try:
                outcome = self.emitter.emit(record)
            except Exception as e:
                logger.error(f"Background logging error: {e}", exc_info=True)
                outcome = EmitOutcome(False, str(e))

            with self._cond:
                if outcome.success:
                    self.stats.sent += 1
                else:
                    self.stats.failed += 1
                future.set_result(outcome)
                self._busy = False
                self._cond.notify_all()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until every queued record has been handled. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: not self._pending and not self._busy, timeout)

    def close(self, timeout: Optional[float] = None):
        """Drain what is queued, then stop the worker."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        self._worker.join(timeout)
