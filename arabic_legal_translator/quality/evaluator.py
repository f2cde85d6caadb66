"""
Translation Quality Scorer.

Scores one cleaned candidate translation against its source text.

Score components:
1. Purity gate: a candidate that failed purity validation scores 0
2. Structural fidelity: output/input length ratio
3. Terminology consistency: domain terms of the source carried into the output

overall = 100 * (0.6 * structural + 0.4 * terminology)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from arabic_legal_translator.config import DomainHint, Language
from arabic_legal_translator.quality.purity import PurityVerdict
from arabic_legal_translator.quality.terminology import (
    StaticTerminology,
    TerminologySource,
    contains_term,
)

logger = logging.getLogger(__name__)

DEFAULT_ACCEPTANCE_THRESHOLD = 70.0


@dataclass(frozen=True)
class QualityScore:
    """Composite acceptance score for one attempt (all values 0-100)."""
    overall: float
    purity_passed: bool
    structural: float = 0.0
    terminology: float = 0.0
    terms_found: int = 0
    terms_matched: int = 0

    def accepted(self, threshold: float = DEFAULT_ACCEPTANCE_THRESHOLD) -> bool:
        return self.purity_passed and self.overall >= threshold


class QualityScorer:
    """
    Heuristic quality scorer.

    The scorer does not judge meaning; that is the engines' job. It only
    catches outputs that are clearly truncated, padded, or missing the legal
    vocabulary of the source.
    """

    WEIGHTS = {
        "structural": 0.6,
        "terminology": 0.4,
    }

    # Length ratios inside this band are treated as fully faithful.
    RATIO_BAND = (0.4, 2.5)
    # Ratio at which the upper degradation reaches zero.
    RATIO_CEILING = 5.0

    def __init__(self, terminology: Optional[TerminologySource] = None):
        self.terminology = terminology or StaticTerminology()

    def score(
        self,
        candidate: str,
        source: str,
        verdict: PurityVerdict,
        domain: DomainHint = DomainHint.GENERIC,
        source_lang: Language = Language.FRENCH,
        target_lang: Language = Language.ARABIC,
    ) -> QualityScore:
        """
        Score a cleaned candidate.

        Args:
            candidate: Cleaned engine output.
            source: Cleaned source text.
            verdict: Purity verdict computed on ``candidate``.
            domain: Terminology set to check.
            source_lang: Language of ``source``.
            target_lang: Language of ``candidate``.

        Returns:
            QualityScore; overall is 0 whenever the purity gate failed.
        """
        if not verdict.passed:
            return QualityScore(overall=0.0, purity_passed=False)

        structural = self.structural_fidelity(candidate, source)
        found, matched = self._term_coverage(
            candidate, source, domain, source_lang, target_lang
        )
        terminology = matched / found if found else 1.0

        overall = 100.0 * (
            self.WEIGHTS["structural"] * structural
            + self.WEIGHTS["terminology"] * terminology
        )
        logger.debug(
            "Quality: overall=%.1f structural=%.2f terminology=%d/%d",
            overall, structural, matched, found,
        )
        return QualityScore(
            overall=overall,
            purity_passed=True,
            structural=structural * 100.0,
            terminology=terminology * 100.0,
            terms_found=found,
            terms_matched=matched,
        )

    def structural_fidelity(self, candidate: str, source: str) -> float:
        """Length-ratio score in [0, 1]."""
        source_len = len(source.strip())
        candidate_len = len(candidate.strip())
        if source_len == 0:
            return 1.0 if candidate_len == 0 else 0.0

        ratio = candidate_len / source_len
        low, high = self.RATIO_BAND
        if ratio < low:
            return ratio / low
        if ratio > high:
            return max(0.0, (self.RATIO_CEILING - ratio) / (self.RATIO_CEILING - high))
        return 1.0

    def _term_coverage(
        self,
        candidate: str,
        source: str,
        domain: DomainHint,
        source_lang: Language,
        target_lang: Language,
    ) -> tuple[int, int]:
        found = matched = 0
        pairs = self.terminology.terms_for(domain, source_lang, target_lang)
        # Sorted so diagnostics are stable across runs.
        for source_term, target_term in sorted(pairs):
            if not contains_term(source, source_term, source_lang):
                continue
            found += 1
            if contains_term(candidate, target_term, target_lang):
                matched += 1
        return found, matched
