"""
OpenAI GPT engine.

Generative engine; the instruction prompt goes in as the user message under
a short system prompt that fixes the translator role.
"""

import logging

from arabic_legal_translator.translator.base import BaseEngine
from arabic_legal_translator.translator.prompts import TranslationPrompt

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional legal translator working between Arabic and French. "
    "You reply with the translated text and nothing else."
)


class OpenAIEngine(BaseEngine):
    """Translation using OpenAI's chat completions API."""

    def __init__(self, api_key: str, model: str = "gpt-4o", client=None):
        if client is None:
            try:
                from openai import AsyncOpenAI
                client = AsyncOpenAI(api_key=api_key)
            except ImportError:
                raise ImportError(
                    "openai package required. Install with: pip install openai"
                )
        self.client = client
        self.model = model

    @property
    def name(self) -> str:
        return "openai"

    async def translate(self, prompt: TranslationPrompt) -> str:
        logger.info("OpenAI translation: sending %d chars", len(prompt.text))

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt.render()},
            ],
            temperature=0.3,  # Lower temperature for more consistent translation
            max_tokens=4096,
        )

        choice = response.choices[0]
        translated = (choice.message.content or "").strip()
        logger.info(
            "OpenAI translation: received %d chars (finish_reason=%s)",
            len(translated),
            choice.finish_reason,
        )
        return translated
