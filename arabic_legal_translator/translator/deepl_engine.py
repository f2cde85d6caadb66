"""
DeepL engine.

MT engine: sends the raw text with the language pair, no instructions. The
official ``deepl`` client is synchronous, so calls run in a worker thread.
"""

import asyncio
import logging

from arabic_legal_translator.config import Language
from arabic_legal_translator.translator.base import BaseEngine
from arabic_legal_translator.translator.prompts import TranslationPrompt

logger = logging.getLogger(__name__)

# DeepL language code mapping
DEEPL_LANG_MAP = {
    Language.ARABIC: "AR",
    Language.FRENCH: "FR",
}


class DeepLEngine(BaseEngine):
    """Translation using the DeepL API."""

    def __init__(self, api_key: str, client=None):
        if client is None:
            try:
                import deepl
                client = deepl.Translator(api_key)
            except ImportError:
                raise ImportError(
                    "deepl package required. Install with: pip install deepl"
                )
        self._client = client

    @property
    def name(self) -> str:
        return "deepl"

    async def translate(self, prompt: TranslationPrompt) -> str:
        logger.info("DeepL translation: sending %d chars", len(prompt.text))

        result = await asyncio.to_thread(
            self._client.translate_text,
            prompt.text,
            source_lang=DEEPL_LANG_MAP[prompt.source_lang],
            target_lang=DEEPL_LANG_MAP[prompt.target_lang],
            preserve_formatting=True,
        )

        translated = result.text.strip()
        logger.info(
            "DeepL translation: received %d chars (detected %s)",
            len(translated),
            result.detected_source_lang,
        )
        return translated
