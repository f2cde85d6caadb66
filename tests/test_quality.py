"""Tests for the translation quality scorer."""

import pytest

from arabic_legal_translator.config import DomainHint, Language
from arabic_legal_translator.quality.evaluator import QualityScore, QualityScorer
from arabic_legal_translator.quality.purity import check_text


class TestStructuralFidelity:
    def setup_method(self):
        self.scorer = QualityScorer()

    @pytest.mark.parametrize("candidate_len, source_len, expected", [
        (10, 10, 1.0),
        (4, 10, 1.0),
        (25, 10, 1.0),
        (2, 10, 0.5),
        (15, 4, 0.5),
        (60, 10, 0.0),
        (0, 10, 0.0),
    ])
    def test_length_ratio(self, candidate_len, source_len, expected):
        score = self.scorer.structural_fidelity("a" * candidate_len, "b" * source_len)
        assert score == pytest.approx(expected)

    def test_empty_source(self):
        assert self.scorer.structural_fidelity("", "") == 1.0
        assert self.scorer.structural_fidelity("abc", "  ") == 0.0


class TestQualityScorer:
    def setup_method(self):
        self.scorer = QualityScorer()

    def _score(self, candidate, source, source_lang, target_lang, domain=DomainHint.GENERIC):
        verdict = check_text(candidate, target_lang)
        return self.scorer.score(
            candidate, source, verdict, domain, source_lang, target_lang
        )

    def test_failed_purity_scores_zero(self):
        score = self._score(
            "العقد Гражданский", "Le contrat", Language.FRENCH, Language.ARABIC
        )
        assert score.overall == 0.0
        assert not score.purity_passed
        assert not score.accepted()

    def test_no_terms_found_counts_as_full_terminology(self):
        score = self._score(
            "مرحبا بالعالم", "Bonjour le monde", Language.FRENCH, Language.ARABIC
        )
        assert score.terms_found == 0
        assert score.terminology == pytest.approx(100.0)
        assert score.overall == pytest.approx(100.0)
        assert score.accepted()

    def test_missing_term_lowers_score(self):
        score = self._score(
            "العقد صحيح ويجب تنفيذه",
            "Le contrat et le jugement",
            Language.FRENCH,
            Language.ARABIC,
        )
        assert score.terms_found == 2
        assert score.terms_matched == 1
        assert score.terminology == pytest.approx(50.0)
        assert score.overall == pytest.approx(80.0)

    def test_arabic_to_french_terms(self):
        score = self._score(
            "Jugement d'appel", "حكم الاستئناف", Language.ARABIC, Language.FRENCH
        )
        assert score.terms_found == 2
        assert score.terms_matched == 2
        assert score.overall == pytest.approx(100.0)

    def test_domain_restricts_terms(self):
        score = self._score(
            "العقد صحيح ويجب تنفيذه",
            "Le contrat et le jugement",
            Language.FRENCH,
            Language.ARABIC,
            domain=DomainHint.CIVIL,
        )
        assert score.terms_found == 1
        assert score.terms_matched == 1

    def test_truncated_output_is_rejected(self):
        source = "Le contrat fait la loi des parties et doit être exécuté de bonne foi."
        score = self._score("عقد", source, Language.FRENCH, Language.ARABIC)
        assert score.purity_passed
        assert score.overall < 70.0
        assert not score.accepted()


class TestQualityScore:
    def test_threshold_is_inclusive(self):
        score = QualityScore(overall=70.0, purity_passed=True)
        assert score.accepted(70.0)
        assert not score.accepted(70.1)

    def test_purity_gate_overrides_score(self):
        assert not QualityScore(overall=100.0, purity_passed=False).accepted(0.0)
