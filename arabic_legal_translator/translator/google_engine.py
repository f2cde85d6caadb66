"""
Google Cloud Translation engine (v2 REST API over httpx).
"""

import html
import logging
from typing import Optional

import httpx

from arabic_legal_translator.errors import TransportError
from arabic_legal_translator.translator.base import BaseEngine
from arabic_legal_translator.translator.prompts import TranslationPrompt

logger = logging.getLogger(__name__)

GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"


class GoogleEngine(BaseEngine):
    """Translation using the Google Translate v2 API key endpoint."""

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=30.0)

    @property
    def name(self) -> str:
        return "google"

    async def translate(self, prompt: TranslationPrompt) -> str:
        logger.info("Google translation: sending %d chars", len(prompt.text))

        params = {
            "q": prompt.text,
            "source": prompt.source_lang.value,
            "target": prompt.target_lang.value,
            "format": "text",
            "key": self.api_key,
        }
        response = await self._client.post(GOOGLE_TRANSLATE_URL, data=params)
        response.raise_for_status()
        data = response.json()

        translations = data.get("data", {}).get("translations", [])
        if not translations:
            raise TransportError(self.name, "response contained no translations")

        translated = html.unescape(translations[0].get("translatedText", "")).strip()
        logger.info("Google translation: received %d chars", len(translated))
        return translated

    async def aclose(self) -> None:
        await self._client.aclose()
