"""
Purity validation.

A text is "pure" when at least ``min_target_pct`` of its meaningful
characters are in the script of the declared target language and at most
``max_foreign_pct`` are in any other script (defaults 95 / 5). Digits and
punctuation are neutral, see text.analyzer.
"""

from dataclasses import dataclass, field
from typing import Optional

from arabic_legal_translator.config import LANGUAGE_SCRIPTS, Language
from arabic_legal_translator.text.analyzer import ScriptProfile, analyze


@dataclass(frozen=True)
class PurityThresholds:
    min_target_pct: float = 95.0
    max_foreign_pct: float = 5.0


@dataclass(frozen=True)
class PurityVerdict:
    """Pass/fail judgement on a cleaned text."""
    passed: bool
    target_pct: float
    foreign_pct: float
    dominant_foreign_script: Optional[str] = None
    violations: tuple[str, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        if self.passed:
            return f"pure ({self.target_pct:.1f}% target script)"
        return "; ".join(self.violations)


def validate(
    profile: ScriptProfile,
    target_lang: Language,
    thresholds: PurityThresholds = PurityThresholds(),
) -> PurityVerdict:
    """Apply the purity thresholds to a script profile."""
    expected = LANGUAGE_SCRIPTS[target_lang]
    if profile.target_script is not expected:
        raise ValueError(
            f"profile computed for {profile.target_script.value}, "
            f"but {target_lang.value} expects {expected.value}"
        )

    violations = []
    if profile.is_empty:
        violations.append("no meaningful characters")
    else:
        if profile.target_pct < thresholds.min_target_pct:
            violations.append(
                f"target script {profile.target_pct:.1f}% "
                f"< {thresholds.min_target_pct:.1f}%"
            )
        if profile.foreign_pct > thresholds.max_foreign_pct:
            violations.append(
                f"foreign script {profile.foreign_pct:.1f}% "
                f"> {thresholds.max_foreign_pct:.1f}%"
            )

    passed = not violations
    dominant = None if passed else profile.dominant_foreign_script()
    if dominant:
        violations.append(f"dominant foreign script: {dominant}")

    return PurityVerdict(
        passed=passed,
        target_pct=profile.target_pct,
        foreign_pct=profile.foreign_pct,
        dominant_foreign_script=dominant,
        violations=tuple(violations),
    )


def check_text(
    text: str,
    target_lang: Language,
    thresholds: PurityThresholds = PurityThresholds(),
) -> PurityVerdict:
    """Analyze and validate ``text`` in one step."""
    profile = analyze(text, LANGUAGE_SCRIPTS[target_lang])
    return validate(profile, target_lang, thresholds)
