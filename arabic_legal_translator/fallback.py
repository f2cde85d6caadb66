"""
Fallback content for requests no engine could translate acceptably.

Every template is a short, hand-written notice in a single script. The
templates are checked by the purity validator when the generator is built,
so the text handed to a caller on fallback is always pure.
"""

import logging
from typing import Optional

from arabic_legal_translator.config import DomainHint, Language
from arabic_legal_translator.errors import ConfigurationFault
from arabic_legal_translator.quality.purity import PurityThresholds, check_text

logger = logging.getLogger(__name__)

_UNAVAILABLE = {
    Language.ARABIC: "الترجمة غير متاحة حالياً.",
    Language.FRENCH: "Traduction momentanément indisponible.",
}

_DOMAIN_NOTICES = {
    Language.ARABIC: {
        DomainHint.GENERIC: (
            "يرجى الرجوع إلى النصوص القانونية الأصلية، "
            "وللحصول على معلومات دقيقة يرجى استشارة مختص قانوني."
        ),
        DomainHint.FAMILY: "يتعلق هذا المحتوى بأحكام قانون الأسرة الجزائري.",
        DomainHint.COMMERCIAL: "يتعلق هذا المحتوى بأحكام القانون التجاري الجزائري.",
        DomainHint.CIVIL: "يتعلق هذا المحتوى بأحكام القانون المدني الجزائري.",
        DomainHint.CRIMINAL: "يتعلق هذا المحتوى بأحكام قانون العقوبات الجزائري.",
        DomainHint.ADMINISTRATIVE: "يتعلق هذا المحتوى بأحكام القانون الإداري الجزائري.",
        DomainHint.PROCEDURAL: (
            "يتعلق هذا المحتوى بأحكام قانون الإجراءات المدنية والإدارية."
        ),
    },
    Language.FRENCH: {
        DomainHint.GENERIC: (
            "Veuillez vous référer aux textes légaux originaux ou consulter "
            "un spécialiste juridique."
        ),
        DomainHint.FAMILY: (
            "Ce contenu concerne les dispositions du Code de la famille algérien."
        ),
        DomainHint.COMMERCIAL: (
            "Ce contenu concerne les dispositions du Code de commerce algérien."
        ),
        DomainHint.CIVIL: (
            "Ce contenu concerne les dispositions du Code civil algérien."
        ),
        DomainHint.CRIMINAL: (
            "Ce contenu concerne les dispositions du Code pénal algérien."
        ),
        DomainHint.ADMINISTRATIVE: (
            "Ce contenu concerne les dispositions du droit administratif algérien."
        ),
        DomainHint.PROCEDURAL: (
            "Ce contenu concerne les dispositions du Code de procédure civile "
            "et administrative."
        ),
    },
}


def _build_templates() -> dict[Language, dict[DomainHint, str]]:
    return {
        lang: {
            domain: f"{_UNAVAILABLE[lang]} {notice}"
            for domain, notice in notices.items()
        }
        for lang, notices in _DOMAIN_NOTICES.items()
    }


class FallbackContentGenerator:
    """Static lookup of pure "translation unavailable" notices."""

    def __init__(
        self,
        templates: Optional[dict[Language, dict[DomainHint, str]]] = None,
        thresholds: PurityThresholds = PurityThresholds(),
    ):
        self.templates = templates if templates is not None else _build_templates()
        self._validate(thresholds)

    def _validate(self, thresholds: PurityThresholds) -> None:
        for lang in Language:
            notices = self.templates.get(lang, {})
            if DomainHint.GENERIC not in notices:
                raise ConfigurationFault(
                    f"no generic fallback template for {lang.value}"
                )
            for domain, text in notices.items():
                verdict = check_text(text, lang, thresholds)
                if not verdict.passed:
                    raise ConfigurationFault(
                        f"fallback template {lang.value}/{domain.value} is not "
                        f"pure: {verdict.describe()}"
                    )
        logger.debug(
            "Validated %d fallback templates",
            sum(len(notices) for notices in self.templates.values()),
        )

    def generate(
        self,
        target_lang: Language,
        domain: DomainHint = DomainHint.GENERIC,
    ) -> str:
        """Notice for ``target_lang``, falling back to the generic domain."""
        notices = self.templates[target_lang]
        return notices.get(domain, notices[DomainHint.GENERIC])
