"""
Legal terminology lookup used by the quality scorer.

The full dictionary lives outside this package; StaticTerminology is a small
French/Arabic seed covering the most common terms of each branch of Algerian
law, good enough to check that an engine kept the key legal vocabulary.
"""

import re
from typing import Protocol

from arabic_legal_translator.config import DomainHint, Language
from arabic_legal_translator.utils import normalize_for_matching

TermPair = tuple[str, str]

# (French, Arabic) pairs per domain.
LEGAL_TERMS: dict[DomainHint, tuple[TermPair, ...]] = {
    DomainHint.CIVIL: (
        ("contrat", "عقد"),
        ("obligation", "التزام"),
        ("responsabilité civile", "المسؤولية المدنية"),
        ("dommages-intérêts", "التعويض"),
        ("propriété", "الملكية"),
    ),
    DomainHint.CRIMINAL: (
        ("crime", "جناية"),
        ("délit", "جنحة"),
        ("contravention", "مخالفة"),
        ("accusé", "متهم"),
        ("victime", "ضحية"),
    ),
    DomainHint.COMMERCIAL: (
        ("société", "شركة"),
        ("commerçant", "تاجر"),
        ("faillite", "إفلاس"),
    ),
    DomainHint.ADMINISTRATIVE: (
        ("décision administrative", "قرار إداري"),
        ("recours administratif", "طعن إداري"),
    ),
    DomainHint.FAMILY: (
        ("mariage", "زواج"),
        ("divorce", "طلاق"),
        ("garde des enfants", "حضانة الأطفال"),
    ),
    DomainHint.PROCEDURAL: (
        ("action en justice", "دعوى قضائية"),
        ("jugement", "حكم"),
        ("appel", "استئناف"),
    ),
}

# Definite article with an optional conjunction or preposition prefix.
_ARABIC_ARTICLE = re.compile(r"(?<!\S)[وفبك]?ال(?=\S\S)")


class TerminologySource(Protocol):
    def terms_for(
        self,
        domain: DomainHint,
        source_lang: Language,
        target_lang: Language,
    ) -> set[TermPair]:
        ...


class StaticTerminology:
    """In-memory French/Arabic legal terms, grouped by domain."""

    def __init__(self, terms: dict[DomainHint, tuple[TermPair, ...]] = LEGAL_TERMS):
        self._terms = terms

    def terms_for(
        self,
        domain: DomainHint,
        source_lang: Language,
        target_lang: Language,
    ) -> set[TermPair]:
        """Term pairs for ``domain`` oriented as (source term, target term)."""
        if domain is DomainHint.GENERIC:
            pairs = {pair for group in self._terms.values() for pair in group}
        else:
            pairs = set(self._terms.get(domain, ()))

        if source_lang is Language.FRENCH and target_lang is Language.ARABIC:
            return pairs
        if source_lang is Language.ARABIC and target_lang is Language.FRENCH:
            return {(arabic, french) for french, arabic in pairs}
        return set()


def normalize_term_text(text: str, lang: Language) -> str:
    text = normalize_for_matching(text)
    if lang is Language.ARABIC:
        text = _ARABIC_ARTICLE.sub("", text)
    return text


def contains_term(text: str, term: str, lang: Language) -> bool:
    """
    Whether ``term`` occurs in ``text``.

    Arabic is compared after diacritic, alef and article normalization as a
    substring, since prefixes attach to the word. French is case-folded and
    matched on word boundaries, allowing a plural -s or -x.
    """
    haystack = normalize_term_text(text, lang)
    needle = normalize_term_text(term, lang)
    if not needle:
        return False
    if lang is Language.ARABIC:
        return needle in haystack
    pattern = rf"(?<!\w){re.escape(needle)}[sx]?(?!\w)"
    return re.search(pattern, haystack) is not None
