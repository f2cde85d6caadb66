"""
Request, attempt and outcome records passed through the gateway.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from arabic_legal_translator.config import DomainHint, Language
from arabic_legal_translator.quality.evaluator import QualityScore
from arabic_legal_translator.quality.purity import PurityVerdict


class AttemptOutcome(Enum):
    ACCEPTED = "accepted"
    TRANSPORT_ERROR = "transport_error"
    QUALITY_REJECTED = "quality_rejected"
    DISCARDED = "discarded"  # result arrived after the request was cancelled


class OutcomeStatus(Enum):
    ACCEPTED = "accepted"
    FALLBACK = "fallback"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"


@dataclass
class TranslationRequest:
    """One caller-initiated translation job."""
    text: str
    source_lang: Language
    target_lang: Language
    domain: DomainHint = DomainHint.GENERIC
    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    deadline_seconds: Optional[float] = None  # total budget for all engines

    def __post_init__(self):
        if self.source_lang is self.target_lang:
            raise ValueError("source and target language must differ")


@dataclass(frozen=True)
class TranslationAttempt:
    """One engine call within a request; immutable once recorded."""
    engine: str
    outcome: AttemptOutcome
    latency_seconds: float
    raw_response: str = ""
    cleaned_text: str = ""
    reason: str = ""
    fired_rules: tuple[str, ...] = ()
    verdict: Optional[PurityVerdict] = None
    score: Optional[QualityScore] = None

    def to_dict(self) -> dict:
        data = {
            "engine": self.engine,
            "outcome": self.outcome.value,
            "latency_seconds": round(self.latency_seconds, 4),
            "reason": self.reason,
            "fired_rules": list(self.fired_rules),
        }
        if self.verdict is not None:
            data["purity"] = {
                "passed": self.verdict.passed,
                "target_pct": round(self.verdict.target_pct, 2),
                "foreign_pct": round(self.verdict.foreign_pct, 2),
                "dominant_foreign_script": self.verdict.dominant_foreign_script,
            }
        if self.score is not None:
            data["score"] = round(self.score.overall, 2)
        return data


@dataclass
class TranslationOutcome:
    """What the caller receives: some text and an explicit status."""
    text: str
    status: OutcomeStatus
    correlation_id: str
    attempts: list[TranslationAttempt] = field(default_factory=list)
    skipped_engines: list[str] = field(default_factory=list)
    engine: Optional[str] = None
    cached: bool = False

    @property
    def reason_codes(self) -> list[str]:
        return [
            f"{attempt.engine}:{attempt.outcome.value}" for attempt in self.attempts
        ]

    def diagnostics(self) -> list[dict]:
        return [attempt.to_dict() for attempt in self.attempts]

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "status": self.status.value,
            "correlation_id": self.correlation_id,
            "engine": self.engine,
            "cached": self.cached,
            "skipped_engines": list(self.skipped_engines),
            "attempts": self.diagnostics(),
        }
