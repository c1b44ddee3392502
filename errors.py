"""Exceptions raised by the review action demo."""


class ReviewActionError(Exception):
    """Base class for errors surfaced to the user as a failed attempt."""


class CorpusLoadError(ReviewActionError):
    """The review corpus could not be loaded or is empty."""


class ClassifierError(ReviewActionError):
    """The sentiment classifier failed to produce a result."""


class ClassifierNotReady(ClassifierError):
    """The classifier pipeline has not been (or could not be) loaded."""


class MalformedClassifierOutput(ClassifierError):
    """The classifier returned something other than a label/score result."""


class InvalidConfidence(ReviewActionError, ValueError):
    """A confidence value outside [0, 1] was passed to the decision engine."""

    def __init__(self, confidence):
        super().__init__(f"Confidence must be within [0, 1], got {confidence!r}")
        self.confidence = confidence
