"""
Claude (Anthropic) engine.

Generative engine: receives the full instruction prompt. Most likely of the
engines to follow the "output only the translation" rule, so it ranks first
by default.
"""

import logging

from arabic_legal_translator.translator.base import BaseEngine
from arabic_legal_translator.translator.prompts import TranslationPrompt

logger = logging.getLogger(__name__)


class ClaudeEngine(BaseEngine):
    """Translation using Anthropic's Claude API."""

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-6", client=None):
        if client is None:
            try:
                import anthropic
                client = anthropic.AsyncAnthropic(api_key=api_key)
            except ImportError:
                raise ImportError(
                    "anthropic package required. Install with: pip install anthropic"
                )
        self.client = client
        self.model = model

    @property
    def name(self) -> str:
        return "claude"

    async def translate(self, prompt: TranslationPrompt) -> str:
        logger.info("Claude translation: sending %d chars", len(prompt.text))

        message = await self.client.messages.create(
            model=self.model,
            max_tokens=4096,
            messages=[{"role": "user", "content": prompt.render()}],
        )

        text_blocks = [
            block.text for block in message.content
            if getattr(block, "type", "text") == "text"
        ]
        translated = "".join(text_blocks).strip()
        logger.info(
            "Claude translation: received %d chars (stop_reason=%s)",
            len(translated),
            message.stop_reason,
        )
        return translated
