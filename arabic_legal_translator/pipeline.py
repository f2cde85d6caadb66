"""
Pipeline facade for Arabic/French legal translation.

Builds every component from a TranslationConfig and refuses to start when the
static configuration is unusable (invalid options, an impure fallback
template, a non-idempotent cleaning rule, no engine available).
"""

import logging
from typing import Optional, Sequence

from arabic_legal_translator.config import (
    DomainHint,
    EngineName,
    Language,
    Script,
    TranslationConfig,
)
from arabic_legal_translator.errors import ConfigurationFault
from arabic_legal_translator.fallback import FallbackContentGenerator
from arabic_legal_translator.quality.evaluator import QualityScorer
from arabic_legal_translator.quality.purity import PurityThresholds
from arabic_legal_translator.quality.terminology import StaticTerminology, TerminologySource
from arabic_legal_translator.text.analyzer import detect_script
from arabic_legal_translator.text.cleaner import ContentCleaner
from arabic_legal_translator.translator.base import BaseEngine
from arabic_legal_translator.translator.claude_engine import ClaudeEngine
from arabic_legal_translator.translator.deepl_engine import DeepLEngine
from arabic_legal_translator.translator.gateway import TranslationGateway
from arabic_legal_translator.translator.google_engine import GoogleEngine
from arabic_legal_translator.translator.models import TranslationOutcome, TranslationRequest
from arabic_legal_translator.translator.openai_engine import OpenAIEngine

logger = logging.getLogger(__name__)

_SCRIPT_LANGUAGES = {
    Script.ARABIC: Language.ARABIC,
    Script.LATIN: Language.FRENCH,
}


def infer_source_language(text: str, target_lang: Language) -> Language:
    """Guess the source language from the dominant script of ``text``."""
    script = detect_script(text)
    if script is not None:
        detected = _SCRIPT_LANGUAGES[script]
        if detected is not target_lang:
            return detected
    return Language.FRENCH if target_lang is Language.ARABIC else Language.ARABIC


class LegalTranslationPipeline:
    """
    Complete Arabic/French legal translation pipeline.

    Usage:
        pipeline = LegalTranslationPipeline(TranslationConfig())
        outcome = await pipeline.translate("Le contrat est nul.", Language.ARABIC)
        print(outcome.status.value, outcome.text)
    """

    def __init__(
        self,
        config: Optional[TranslationConfig] = None,
        engines: Optional[Sequence[BaseEngine]] = None,
        terminology: Optional[TerminologySource] = None,
    ):
        self.config = config or TranslationConfig()

        errors = self.config.validate()
        if errors:
            raise ConfigurationFault("invalid configuration: " + "; ".join(errors))

        thresholds = PurityThresholds(
            min_target_pct=self.config.purity_target_threshold_pct,
            max_foreign_pct=self.config.purity_foreign_threshold_pct,
        )
        # Both run their startup checks here, before any request is served.
        self.cleaner = ContentCleaner(self.config.extra_ui_labels)
        self.fallback = FallbackContentGenerator(thresholds=thresholds)
        self.scorer = QualityScorer(terminology or StaticTerminology())

        self.engines = list(engines) if engines is not None else self._init_engines()
        if not self.engines:
            raise ConfigurationFault(
                "No translation engines available. "
                "Set at least one API key (ANTHROPIC_API_KEY, OPENAI_API_KEY, "
                "DEEPL_API_KEY, or GOOGLE_TRANSLATE_API_KEY)."
            )

        self.gateway = TranslationGateway(
            self.engines,
            config=self.config,
            cleaner=self.cleaner,
            scorer=self.scorer,
            fallback=self.fallback,
        )
        logger.info(
            "Legal translation pipeline ready with engines: %s",
            [engine.name for engine in self.engines],
        )

    def _init_engines(self) -> list[BaseEngine]:
        """Initialize all engines that have an API key, in priority order."""
        engine_factories = {
            EngineName.CLAUDE: lambda: ClaudeEngine(
                api_key=self.config.anthropic_api_key,
                model=self.config.claude_model,
            ),
            EngineName.OPENAI: lambda: OpenAIEngine(
                api_key=self.config.openai_api_key,
                model=self.config.openai_model,
            ),
            EngineName.DEEPL: lambda: DeepLEngine(
                api_key=self.config.deepl_api_key,
            ),
            EngineName.GOOGLE: lambda: GoogleEngine(
                api_key=self.config.google_api_key,
            ),
        }

        engines = []
        for name in self.config.get_available_engines():
            try:
                engines.append(engine_factories[name]())
                logger.info("Initialized engine: %s", name.value)
            except ImportError as e:
                logger.warning("Failed to initialize %s engine: %s", name.value, e)
        return engines

    async def translate(
        self,
        text: str,
        target_lang: Language,
        source_lang: Optional[Language] = None,
        domain: DomainHint = DomainHint.GENERIC,
        correlation_id: Optional[str] = None,
        deadline_seconds: Optional[float] = None,
    ) -> TranslationOutcome:
        """
        Translate a legal text fragment.

        Args:
            text: Source fragment.
            target_lang: Language of the returned text.
            source_lang: Language of ``text``; inferred from its script if None.
            domain: Legal domain for terminology and fallback text.
            correlation_id: Caller-chosen id, usable with cancel().
            deadline_seconds: Total time budget across all engines.

        Returns:
            TranslationOutcome; engine failures never raise.
        """
        if source_lang is None:
            source_lang = infer_source_language(text, target_lang)

        request = TranslationRequest(
            text=text,
            source_lang=source_lang,
            target_lang=target_lang,
            domain=DomainHint.parse(domain),
            deadline_seconds=deadline_seconds,
        )
        if correlation_id:
            request.correlation_id = correlation_id
        return await self.gateway.translate(request)

    def cancel(self, correlation_id: str) -> bool:
        return self.gateway.cancel(correlation_id)

    def engine_health(self) -> list[dict]:
        return self.gateway.engine_health()

    @property
    def stats(self) -> dict:
        return {
            **self.gateway.stats,
            "cleaner_rules_fired": dict(self.cleaner.stats),
            "cache": vars(self.gateway.cache.stats()),
        }

    async def aclose(self) -> None:
        """Close HTTP clients held by engines."""
        for engine in self.engines:
            close = getattr(engine, "aclose", None)
            if close is not None:
                await close()
