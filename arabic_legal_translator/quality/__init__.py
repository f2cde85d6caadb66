"""
Quality subsystem: purity validation, terminology and acceptance scoring.
"""

from arabic_legal_translator.quality.purity import (
    PurityThresholds,
    PurityVerdict,
    check_text,
    validate,
)

__all__ = [
    "PurityThresholds",
    "PurityVerdict",
    "QualityScore",
    "QualityScorer",
    "StaticTerminology",
    "check_text",
    "validate",
]


def __getattr__(name: str):
    if name in ("QualityScorer", "QualityScore"):
        from arabic_legal_translator.quality.evaluator import QualityScore, QualityScorer
        if name == "QualityScorer":
            return QualityScorer
        return QualityScore
    if name == "StaticTerminology":
        from arabic_legal_translator.quality.terminology import StaticTerminology
        return StaticTerminology
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
