"""
Exception taxonomy for the translation pipeline.

TransportError and QualityRejected are recovered inside the gateway and only
surface as attempt diagnostics. ConfigurationFault is fatal at startup.
CapacityExceeded reaches the caller as a retryable rejection.
"""

from typing import Optional


class TranslatorError(Exception):
    """Base class for all pipeline errors."""


class TransportError(TranslatorError):
    """An engine call failed: network error, timeout, or malformed response."""

    def __init__(self, engine: str, reason: str):
        super().__init__(f"{engine}: {reason}")
        self.engine = engine
        self.reason = reason


class QualityRejected(TranslatorError):
    """A cleaned engine response scored below the acceptance threshold."""

    def __init__(self, score: float, threshold: float, detail: str = ""):
        message = f"score {score:.1f} below threshold {threshold:.1f}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.score = score
        self.threshold = threshold
        self.detail = detail


class PurityViolation(QualityRejected):
    """Foreign-script share over threshold; always scores 0."""

    def __init__(self, threshold: float, detail: str):
        super().__init__(0.0, threshold, f"purity: {detail}")


class ConfigurationFault(TranslatorError):
    """Static configuration is unusable; the pipeline must not start."""


class CapacityExceeded(TranslatorError):
    """The dispatch queue is full; the caller may retry later."""

    retryable = True

    def __init__(self, queued: int, limit: int, retry_after: Optional[float] = None):
        super().__init__(
            f"dispatch queue full ({queued}/{limit} waiting), retry later"
        )
        self.queued = queued
        self.limit = limit
        self.retry_after = retry_after
