"""Tests for character script analysis."""

import pytest

from arabic_legal_translator.config import Script
from arabic_legal_translator.text.analyzer import (
    analyze,
    count_scripts,
    detect_script,
    script_of,
)


class TestScriptOf:
    def test_arabic_letter(self):
        assert script_of("ع") == "ARABIC"

    def test_latin_letters(self):
        assert script_of("a") == "LATIN"
        assert script_of("É") == "LATIN"
        assert script_of("ç") == "LATIN"

    @pytest.mark.parametrize("char", [" ", "\n", ".", "،", "؟", "5", "٣", "°", "-", "/"])
    def test_neutral_characters(self, char):
        assert script_of(char) is None

    def test_tashkeel_is_neutral(self):
        assert script_of("َ") is None

    def test_other_scripts_use_unicode_name(self):
        assert script_of("Ж") == "CYRILLIC"
        assert script_of("α") == "GREEK"

    def test_multiplication_sign_is_not_latin(self):
        assert script_of("×") is None


class TestAnalyze:
    def test_pure_arabic(self):
        profile = analyze("مرحبا بالعالم", Script.ARABIC)
        assert profile.target_count == 12
        assert profile.target_pct == 100.0
        assert profile.foreign_pct == 0.0

    def test_digits_in_citation_are_neutral(self):
        profile = analyze("المادة 12 من القانون رقم 84-11", Script.ARABIC)
        assert profile.other_count == 0
        assert profile.target_pct == 100.0

    def test_latin_in_arabic_target(self):
        profile = analyze("عقد abc", Script.ARABIC)
        assert profile.target_count == 3
        assert profile.other_count == 3
        assert profile.target_pct == pytest.approx(50.0)
        assert profile.foreign_pct == pytest.approx(50.0)

    def test_unclassified_script_counts_as_foreign(self):
        profile = analyze("Contrat Жизнь", Script.LATIN)
        assert profile.unclassified_count == 5
        assert profile.other_count == 0
        assert profile.foreign_pct == pytest.approx(5 / 12 * 100)
        assert profile.dominant_foreign_script() == "CYRILLIC"

    def test_diacritics_do_not_count(self):
        profile = analyze("كِتَابٌ", Script.ARABIC)
        assert profile.meaningful_count == 4

    def test_empty_text(self):
        profile = analyze("", Script.LATIN)
        assert profile.is_empty
        assert profile.target_pct == 0.0
        assert profile.dominant_foreign_script() is None

    def test_neutral_only_text(self):
        profile = analyze("12 - 34 / 2024.", Script.ARABIC)
        assert profile.is_empty

    def test_script_counts_are_kept(self):
        profile = analyze("Loi عقد", Script.LATIN)
        assert profile.script_counts == {"LATIN": 3, "ARABIC": 3}
        assert profile.dominant_foreign_script() == "ARABIC"


class TestDetectScript:
    def test_latin(self):
        assert detect_script("Le contrat est nul") is Script.LATIN

    def test_arabic(self):
        assert detect_script("العقد شريعة المتعاقدين") is Script.ARABIC

    def test_majority_wins(self):
        assert detect_script("العقد شريعة Code") is Script.ARABIC

    def test_nothing_to_detect(self):
        assert detect_script("") is None
        assert detect_script("84-11") is None

    def test_count_scripts(self):
        counts = count_scripts("ab عق")
        assert counts["LATIN"] == 2
        assert counts["ARABIC"] == 2
