"""Tests for the content cleaner."""

import re

import pytest

from arabic_legal_translator.errors import ConfigurationFault
from arabic_legal_translator.text import cleaner as cleaner_module
from arabic_legal_translator.text.cleaner import (
    CleaningRule,
    ContentCleaner,
    RuleGroup,
)

SAMPLES = [
    "",
    "   ",
    "Here is the translation:\nالعقد شريعة المتعاقدين",
    "Sure! Here's the French translation:\n\nLe contrat est nul.",
    "Voici la traduction : Le contrat fait la loi des parties.",
    "إليك الترجمة: العقد شريعة المتعاقدين",
    "```\nالحكم نهائي\n```",
    "Le jugement est rendu.\n\nNote: traduit littéralement",
    "RULES:\n1. Output ONLY the translation\nالحكم نهائي",
    "محاميProتحليل ملفاتV2AUTO-TRANSLATE",
    "النص undefined NaN [object Object] الحكم",
    "متصلAvocat",
    "Avocatمتصل Tribunal",
    "المادة 12 من القانون رقم 84-11",
    "Art. 5-2 du Code civil, loi n° 84-11 du 9 juin 1984",
    "\u200fالحكم\u200e  نهائي\t\t\n\n\n\nجلسة  ",
    "العقد Гражданский кодекс",
    "Translation: \n\n  Traduction : ```text\nالعقد```  ",
]


class TestContentCleaner:
    def setup_method(self):
        self.cleaner = ContentCleaner()

    def test_empty_text(self):
        result = self.cleaner.clean("")
        assert result.text == ""
        assert result.fired_rules == ()

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_idempotent(self, sample):
        once = self.cleaner.clean(sample).text
        assert self.cleaner.clean(once).text == once
        assert self.cleaner.clean(once).fired_rules == ()

    def test_english_preamble(self):
        result = self.cleaner.clean("Here is the translation:\nالعقد شريعة المتعاقدين")
        assert result.text == "العقد شريعة المتعاقدين"
        assert result.fired_rules[0] == "assistant-preamble"

    def test_french_preamble(self):
        result = self.cleaner.clean("Voici la traduction : Le contrat fait la loi des parties.")
        assert result.text == "Le contrat fait la loi des parties."

    def test_arabic_preamble(self):
        result = self.cleaner.clean("إليك الترجمة: العقد شريعة المتعاقدين")
        assert result.text == "العقد شريعة المتعاقدين"

    def test_stacked_preambles_and_fences(self):
        result = self.cleaner.clean("Translation: \n\n  Traduction : ```text\nالعقد```  ")
        assert result.text == "العقد"

    def test_code_fence(self):
        assert self.cleaner.clean("```\nالحكم نهائي\n```").text == "الحكم نهائي"

    def test_trailing_note(self):
        result = self.cleaner.clean("Le jugement est rendu.\n\nNote: traduit littéralement")
        assert result.text == "Le jugement est rendu."
        assert "trailing-note" in result.fired_rules

    def test_parenthesized_translator_note(self):
        result = self.cleaner.clean("الحكم نهائي (ملاحظة: ترجمة حرفية)")
        assert result.text == "الحكم نهائي"

    @pytest.mark.parametrize("text", [
        "Article 1er : Le contrat fait la loi des parties.\n"
        "Remarque : les dispositions de l'article 2 restent applicables.",
        "Note : le délai court à compter de la signification.\nArticle 3 : abrogé.",
        "المادة 5: يعاقب على الجنحة.\nملاحظة: تطبق أحكام المادة 6.",
    ])
    def test_legal_notes_are_kept(self, text):
        result = self.cleaner.clean(text)
        assert result.text == text
        assert "trailing-note" not in result.fired_rules

    def test_echoed_prompt_rules(self):
        result = self.cleaner.clean(
            "RULES:\n1. Output ONLY the translation\n"
            "2. Preserve paragraph structure\nالحكم نهائي"
        )
        assert result.text == "الحكم نهائي"

    def test_ui_labels(self):
        result = self.cleaner.clean("محاميProتحليل ملفاتV2AUTO-TRANSLATE")
        assert result.text == "محامي تحليل ملفات"
        for rule_id in ("auto-translate-label", "glued-version-tag", "glued-pro-label"):
            assert rule_id in result.fired_rules

    def test_serialization_leftovers(self):
        result = self.cleaner.clean("النص undefined NaN [object Object] الحكم")
        assert result.text == "النص الحكم"

    def test_french_words_are_not_labels(self):
        text = "Le contrat est nul et non avenu. Procédure civile."
        assert self.cleaner.clean(text).text == text

    def test_arabic_glued_to_latin(self):
        result = self.cleaner.clean("متصلAvocat")
        assert result.text == "متصل Avocat"
        assert result.fired_rules == ("arabic-before-foreign-letter",)

    def test_latin_glued_to_arabic(self):
        result = self.cleaner.clean("Avocatمتصل")
        assert result.text == "Avocat متصل"
        assert result.fired_rules == ("foreign-before-arabic-letter",)

    def test_glued_word_with_tashkeel(self):
        assert self.cleaner.clean("كِتَابٌAvocat").text == "كِتَابٌ Avocat"

    def test_digits_are_never_split(self):
        for text in ("المادة12", "رقم 84-11", "Art.5"):
            assert self.cleaner.clean(text).text == text

    @pytest.mark.parametrize("citation", [
        "المادة 12 من القانون رقم 84-11",
        "Art. 5-2 du Code civil, loi n° 84-11 du 9 juin 1984",
        "الأمر رقم 75-58 المؤرخ في 26/09/1975",
    ])
    def test_citations_untouched(self, citation):
        result = self.cleaner.clean(citation)
        assert result.text == citation
        assert result.fired_rules == ()

    def test_foreign_script_is_not_removed(self):
        result = self.cleaner.clean("العقد Гражданский кодекс")
        assert "Гражданский" in result.text

    def test_whitespace_normalization(self):
        result = self.cleaner.clean("\u200fالحكم\u200e  نهائي\t\t\n\n\n\nجلسة  ")
        assert result.text == "الحكم نهائي\n\nجلسة"
        assert "invisible-marks" in result.fired_rules
        assert "blank-line-runs" in result.fired_rules

    def test_stats_count_fired_rules(self):
        self.cleaner.clean("متصلAvocat")
        self.cleaner.clean("عقدLoi")
        assert self.cleaner.stats["arabic-before-foreign-letter"] == 2

    def test_rules_are_verified(self):
        assert all(rule.idempotent for rule in self.cleaner.rules)

    def test_rules_run_in_group_order(self):
        groups = [rule.group.value for rule in self.cleaner.rules]
        assert groups == sorted(groups)


class TestConfiguredLabels:
    def test_extra_label_removed(self):
        cleaner = ContentCleaner(extra_ui_labels=["JuristDZ", "  "])
        result = cleaner.clean("الحكمJuristDZ نهائي")
        assert result.text == "الحكم نهائي"
        assert "configured-ui-label" in result.fired_rules

    def test_extra_label_is_literal(self):
        cleaner = ContentCleaner(extra_ui_labels=["v1.0 (beta)"])
        assert cleaner.clean("الحكم v1.0 (beta) نهائي").text == "الحكم نهائي"

    def test_extra_label_runs_with_ui_group(self):
        cleaner = ContentCleaner(extra_ui_labels=["JuristDZ"])
        ids = cleaner.rule_ids
        assert ids.index("configured-ui-label") < ids.index("arabic-before-foreign-letter")


class TestIdempotenceCheck:
    def test_growing_rule_is_rejected(self):
        rule = CleaningRule("grow", RuleGroup.WHITESPACE, re.compile(r"\Z"), "!")
        with pytest.raises(ConfigurationFault):
            rule.verified(["abc"])

    def test_cleaner_refuses_bad_table(self, monkeypatch):
        bad = CleaningRule("grow", RuleGroup.WHITESPACE, re.compile(r"\Z"), "!")
        monkeypatch.setattr(
            cleaner_module, "DEFAULT_RULES", cleaner_module.DEFAULT_RULES + (bad,)
        )
        with pytest.raises(ConfigurationFault, match="grow"):
            ContentCleaner()
