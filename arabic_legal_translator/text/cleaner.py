"""
Content cleaning for engine output.

Engines wrap translations in chatter ("Here is the translation:"), leak UI
labels from the pages they were trained on ("AUTO-TRANSLATE", "V2") and glue
Arabic words to Latin ones. The cleaner removes those artifacts with a fixed
table of rules, applied in group order and repeated until the text stops
changing, so cleaning an already clean text is a no-op.

Rule groups:
1. Preambles, trailing notes, code fences and echoed prompt rules
2. Interface labels and serialization leftovers
3. Separation of Arabic letters glued to letters of another script
4. Invisible marks and whitespace normalization

The cleaner never removes foreign-script words; rejecting those is the
purity validator's job.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Sequence

from arabic_legal_translator.errors import ConfigurationFault
from arabic_legal_translator.text.analyzer import ARABIC_RANGES
from arabic_legal_translator.translator.prompts import (
    PROMPT_RULES,
    PROMPT_RULES_HEADER,
)

logger = logging.getLogger(__name__)

_MAX_RULE_PASSES = 16
_MAX_TABLE_PASSES = 8


def _char_class(ranges: Iterable[tuple[int, int]]) -> str:
    parts = []
    for low, high in ranges:
        parts.append(chr(low) if low == high else f"{chr(low)}-{chr(high)}")
    return "[" + "".join(parts) + "]"


_AR_CHAR = _char_class(ARABIC_RANGES)
_AR_LETTER = rf"(?:(?=[^\W\d_]){_AR_CHAR})"
_AR_MARK = r"[\u064B-\u065F\u0670\u06D6-\u06ED]"
_OTHER_LETTER = rf"(?:(?!{_AR_CHAR})[^\W\d_])"
_INVISIBLE = r"[\u200B-\u200F\u202A-\u202E\u2066-\u2069\uFEFF]"
_HSPACE = r"[ \t\u00A0\u2009\u202F]"


class RuleGroup(Enum):
    PREAMBLE = 1
    UI_LABELS = 2
    SCRIPT_ADJACENCY = 3
    WHITESPACE = 4


@dataclass(frozen=True)
class CleaningRule:
    rule_id: str
    group: RuleGroup
    pattern: re.Pattern
    replacement: str
    idempotent: bool = False

    def apply(self, text: str) -> str:
        """Substitute repeatedly until the pattern no longer changes the text."""
        for _ in range(_MAX_RULE_PASSES):
            updated = self.pattern.sub(self.replacement, text)
            if updated == text:
                return updated
            text = updated
        return text

    def verified(self, samples: Sequence[str]) -> "CleaningRule":
        """Return a copy flagged idempotent, or raise if any sample disagrees."""
        for sample in samples:
            once = self.apply(sample)
            if self.apply(once) != once:
                raise ConfigurationFault(
                    f"cleaning rule {self.rule_id!r} is not idempotent "
                    f"on sample {sample[:40]!r}"
                )
        return replace(self, idempotent=True)


def _rule(rule_id, group, pattern, replacement="", flags=0) -> CleaningRule:
    return CleaningRule(rule_id, group, re.compile(pattern, flags), replacement)


_PREAMBLES = (
    # English
    r"(?:(?:sure|certainly|of course|okay)[,!.]?\s+)?"
    r"(?:here\s+is|here's)\s+(?:the|your|my)\s+(?:[\w-]+\s+){0,3}?"
    r"translation[^:\n]{0,40}:",
    r"(?:translation|translated text)(?:\s*\((?:ar|fr|arabic|french)\))?\s*:",
    # French
    r"(?:voici|ci-dessous)\s+(?:la|votre|ma)\s+traduction[^:\n]{0,40}:",
    r"traduction(?:\s+(?:en\s+)?(?:arabe|fran[cç]ais))?\s*:",
    # Arabic
    r"(?:إليك|اليك|هذه هي|فيما يلي)\s+(?:ال)?ترجمة[^:\n]{0,40}:",
    r"(?:ال)?ترجمة(?:\s+(?:إلى|الى)\s+(?:العربية|الفرنسية))?\s*:",
)

_RULE_ECHO = "|".join(
    [re.escape(PROMPT_RULES_HEADER.rstrip(":")) + r"\s*:"]
    + [re.escape(rule) for rule in PROMPT_RULES]
)

DEFAULT_RULES = (
    _rule(
        "code-fence",
        RuleGroup.PREAMBLE,
        r"\A\s*```[^\n]*\n|\n?```\s*\Z",
    ),
    _rule(
        "assistant-preamble",
        RuleGroup.PREAMBLE,
        r"\A\s*(?:" + "|".join(_PREAMBLES) + r")\s*",
        flags=re.IGNORECASE,
    ),
    _rule(
        "trailing-note",
        RuleGroup.PREAMBLE,
        r"(?:\n[ \t]*|[ \t]+(?=\())\(?\s*(?:note|remarque|n\.b\.|ملاحظة)\s*:"
        r"[^\n]*?(?:translat|tradu|ترجم)[^\n]*\Z",
        flags=re.IGNORECASE,
    ),
    _rule(
        "echoed-prompt-rule",
        RuleGroup.PREAMBLE,
        r"^[ \t]*(?:[-*]|\d+[.)])?[ \t]*(?:" + _RULE_ECHO + r")[^\n]*(?:\n|\Z)",
        flags=re.MULTILINE | re.IGNORECASE,
    ),
    _rule(
        "auto-translate-label",
        RuleGroup.UI_LABELS,
        r"AUTO[-_ ]?TRANSLATE",
        " ",
        flags=re.IGNORECASE,
    ),
    _rule(
        "glued-version-tag",
        RuleGroup.UI_LABELS,
        rf"(?<={_AR_CHAR})[Vv]\d+(?:\.\d+)*|(?<![\w.])[Vv]\d+(?:\.\d+)*(?={_AR_CHAR})",
        " ",
    ),
    _rule(
        "glued-pro-label",
        RuleGroup.UI_LABELS,
        rf"(?<={_AR_CHAR})Pro(?![a-z])|(?<![A-Za-z])Pro(?={_AR_CHAR})",
        " ",
    ),
    _rule(
        "serialization-leftover",
        RuleGroup.UI_LABELS,
        r"\[object Object\]|\b(?:undefined|NaN|null)\b",
        " ",
    ),
    _rule(
        "arabic-before-foreign-letter",
        RuleGroup.SCRIPT_ADJACENCY,
        rf"({_AR_LETTER}{_AR_MARK}*)(?={_OTHER_LETTER})",
        r"\1 ",
    ),
    _rule(
        "foreign-before-arabic-letter",
        RuleGroup.SCRIPT_ADJACENCY,
        rf"(?<=[^\W\d_])(?<!{_AR_CHAR})(?={_AR_LETTER})",
        " ",
    ),
    _rule("invisible-marks", RuleGroup.WHITESPACE, _INVISIBLE),
    _rule(
        "horizontal-space-runs",
        RuleGroup.WHITESPACE,
        rf"{_HSPACE}{{2,}}|[\t\u00A0\u2009\u202F]",
        " ",
    ),
    _rule(
        "line-edge-spaces",
        RuleGroup.WHITESPACE,
        r"[ \t]+(?=\n)|(?<=\n)[ \t]+",
    ),
    _rule("blank-line-runs", RuleGroup.WHITESPACE, r"\n{3,}", "\n\n"),
    _rule("trim", RuleGroup.WHITESPACE, r"\A\s+|\s+\Z"),
)

# Each rule must be a no-op on its own output for every sample.
IDEMPOTENCE_SAMPLES = (
    "",
    "   ",
    "Here is the translation:\nالعقد شريعة المتعاقدين",
    "Voici la traduction : Le contrat fait la loi des parties.",
    "الترجمة: يعاقب على الجنحة",
    "```\nالمادة 12\n```",
    "Le jugement est rendu.\n\nNote: translated literally",
    "Article 1er : Le contrat.\nRemarque : l'article 2 reste applicable.",
    "1. Output ONLY the translation\nالحكم نهائي",
    "محاميProتحليل ملفاتV2AUTO-TRANSLATE",
    "النص undefined NaN [object Object]",
    "متصلAvocat",
    "Avocatمتصل",
    "كِتَابٌAvocat",
    "المادة 12 من القانون رقم 84-11",
    "Art. 5-2 du Code civil, loi n° 84-11",
    "‏الحكم‎  نهائي\t\t\n\n\n\nجلسة  ",
    "Гражданский кодекс статья 12",
)


@dataclass(frozen=True)
class CleaningResult:
    text: str
    fired_rules: tuple[str, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        return bool(self.fired_rules)


class ContentCleaner:
    """
    Applies the rule table to engine output until a fixed point is reached.

    Every rule is checked for idempotence against IDEMPOTENCE_SAMPLES when
    the cleaner is built; a rule that fails raises ConfigurationFault, so a
    broken table never reaches a live request.
    """

    def __init__(self, extra_ui_labels: Sequence[str] = ()):
        rules = list(DEFAULT_RULES)
        labels = [label.strip() for label in extra_ui_labels if label.strip()]
        if labels:
            rules.append(_rule(
                "configured-ui-label",
                RuleGroup.UI_LABELS,
                "|".join(re.escape(label) for label in labels),
                " ",
            ))
        # Stable sort keeps table order within a group.
        rules.sort(key=lambda rule: rule.group.value)
        self.rules = tuple(rule.verified(IDEMPOTENCE_SAMPLES) for rule in rules)
        self.stats: Counter = Counter()
        logger.debug("Content cleaner ready with %d rules", len(self.rules))

    @property
    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self.rules]

    def clean(self, text: str) -> CleaningResult:
        """
        Clean ``text``.

        Args:
            text: Raw engine output (or request source text).

        Returns:
            CleaningResult with the cleaned text and the ids of the rules
            that changed it, in the order they first fired.
        """
        if not text:
            return CleaningResult(text="")

        fired: list[str] = []
        for _ in range(_MAX_TABLE_PASSES):
            changed = False
            for rule in self.rules:
                updated = rule.apply(text)
                if updated == text:
                    continue
                changed = True
                text = updated
                self.stats[rule.rule_id] += 1
                if rule.rule_id not in fired:
                    fired.append(rule.rule_id)
            if not changed:
                break
        else:
            logger.warning(
                "Cleaner did not converge after %d passes", _MAX_TABLE_PASSES
            )

        if fired:
            logger.debug("Cleaner fired: %s", ", ".join(fired))
        return CleaningResult(text=text, fired_rules=tuple(fired))
