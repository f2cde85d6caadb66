"""
Character script analysis.

Counts the meaningful characters of a text by script. Whitespace,
punctuation, symbols, combining marks and digits are neutral: Arabic legal
citations routinely embed Western digits ("المادة 12") and those must not
count against an Arabic text.
"""

import unicodedata
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from arabic_legal_translator.config import Script

ARABIC_RANGES = (
    (0x0600, 0x06FF),  # Arabic
    (0x0750, 0x077F),  # Arabic Supplement
    (0x08A0, 0x08FF),  # Arabic Extended-A
    (0xFB50, 0xFDFF),  # Arabic Presentation Forms-A
    (0xFE70, 0xFEFF),  # Arabic Presentation Forms-B
)

LATIN_RANGES = (
    (0x0041, 0x005A),  # Basic Latin uppercase
    (0x0061, 0x007A),  # Basic Latin lowercase
    (0x00AA, 0x00AA),  # feminine ordinal
    (0x00BA, 0x00BA),  # masculine ordinal
    (0x00C0, 0x00D6),  # Latin-1 Supplement (skips ×)
    (0x00D8, 0x00F6),  # (skips ÷)
    (0x00F8, 0x024F),  # Latin-1 tail, Extended-A, Extended-B
    (0x1E00, 0x1EFF),  # Latin Extended Additional
)

SCRIPT_RANGES = {
    Script.ARABIC: ARABIC_RANGES,
    Script.LATIN: LATIN_RANGES,
}

# Unicode major categories that never count toward any script:
# punctuation, symbols, marks, numbers, separators, control/format.
_NEUTRAL_CATEGORIES = frozenset("PSMNZC")


def _in_ranges(code_point: int, ranges: tuple) -> bool:
    for low, high in ranges:
        if low <= code_point <= high:
            return True
    return False


def script_of(char: str) -> Optional[str]:
    """
    Return the script label of a single character, or None if it is neutral.

    Known scripts are labelled with their Script value; anything else with the
    first word of its Unicode name (e.g. "CYRILLIC", "GREEK", "CJK").
    """
    if char.isspace():
        return None
    if unicodedata.category(char)[0] in _NEUTRAL_CATEGORIES:
        return None
    code_point = ord(char)
    for script, ranges in SCRIPT_RANGES.items():
        if _in_ranges(code_point, ranges):
            return script.value
    try:
        return unicodedata.name(char).split()[0]
    except ValueError:
        return "UNKNOWN"


@dataclass(frozen=True)
class ScriptProfile:
    """Character-class distribution of a text relative to a target script."""
    target_script: Script
    target_count: int = 0
    other_count: int = 0         # the other supported script
    unclassified_count: int = 0  # any script outside the range tables
    script_counts: dict[str, int] = field(default_factory=dict)

    @property
    def meaningful_count(self) -> int:
        return self.target_count + self.other_count + self.unclassified_count

    def _pct(self, count: int) -> float:
        total = self.meaningful_count
        return (count / total) * 100 if total else 0.0

    @property
    def target_pct(self) -> float:
        return self._pct(self.target_count)

    @property
    def other_pct(self) -> float:
        return self._pct(self.other_count)

    @property
    def unclassified_pct(self) -> float:
        return self._pct(self.unclassified_count)

    @property
    def foreign_pct(self) -> float:
        """Share of meaningful characters outside the target script."""
        return self._pct(self.other_count + self.unclassified_count)

    @property
    def is_empty(self) -> bool:
        return self.meaningful_count == 0

    def dominant_foreign_script(self) -> Optional[str]:
        foreign = {
            name: count
            for name, count in self.script_counts.items()
            if name != self.target_script.value
        }
        if not foreign:
            return None
        return max(sorted(foreign), key=foreign.get)


def count_scripts(text: str) -> Counter:
    """Count meaningful characters of ``text`` by script label."""
    counts: Counter = Counter()
    for char in text:
        label = script_of(char)
        if label is not None:
            counts[label] += 1
    return counts


def analyze(text: str, target_script: Script) -> ScriptProfile:
    """Build the script profile of ``text`` relative to ``target_script``."""
    if not text:
        return ScriptProfile(target_script=target_script)

    counts = count_scripts(text)
    known = {script.value for script in SCRIPT_RANGES}
    target = counts.get(target_script.value, 0)
    other = sum(
        count for name, count in counts.items()
        if name in known and name != target_script.value
    )
    unclassified = sum(
        count for name, count in counts.items() if name not in known
    )
    return ScriptProfile(
        target_script=target_script,
        target_count=target,
        other_count=other,
        unclassified_count=unclassified,
        script_counts=dict(counts),
    )


def detect_script(text: str) -> Optional[Script]:
    """Return the supported script with the most characters in ``text``."""
    counts = count_scripts(text)
    best: Optional[Script] = None
    best_count = 0
    for script in SCRIPT_RANGES:
        count = counts.get(script.value, 0)
        if count > best_count:
            best, best_count = script, count
    return best
