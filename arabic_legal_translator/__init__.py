"""
Arabic/French Legal Translation Pipeline
========================================

Translates short legal text fragments between Arabic and French through a
ranked set of third-party engines, and guarantees that what comes back is
single-script text without leaked prompts, preambles or UI labels.

Architecture:
    Request → Cache → Pre-clean → Engine (ranked, circuit-broken, rate-limited)
        → Post-clean → Purity check → Quality score → Accept / next engine / fallback

Engines:
    1. Claude (Anthropic)
    2. OpenAI GPT
    3. DeepL
    4. Google Cloud Translation

Guarantees:
    - Returned text is at least 95% target script (digits and punctuation neutral)
    - Cleaning is idempotent
    - When every engine fails, a pre-validated pure notice is returned
"""

__version__ = "1.0.0"

from arabic_legal_translator.config import DomainHint, Language, TranslationConfig


def __getattr__(name: str):
    """Lazy import so importing the package does not pull in engine SDKs."""
    if name == "LegalTranslationPipeline":
        from arabic_legal_translator.pipeline import LegalTranslationPipeline
        return LegalTranslationPipeline
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["DomainHint", "Language", "LegalTranslationPipeline", "TranslationConfig"]
