"""
Base engine interface.
"""

from abc import ABC, abstractmethod

from arabic_legal_translator.errors import TransportError
from arabic_legal_translator.translator.prompts import TranslationPrompt


class BaseEngine(ABC):
    """
    Abstract base for all translation backends.

    Engines are unreliable black boxes: whatever goes wrong inside
    ``translate`` comes out of ``generate`` as a TransportError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in routing, health tracking and diagnostics."""
        ...

    @abstractmethod
    async def translate(self, prompt: TranslationPrompt) -> str:
        """
        Call the backend.

        Args:
            prompt: Text, language pair and domain of the request.

        Returns:
            Raw response text, uncleaned.
        """
        ...

    async def generate(self, prompt: TranslationPrompt) -> str:
        """Translate and normalize every failure into TransportError."""
        try:
            response = await self.translate(prompt)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(self.name, f"{type(e).__name__}: {e}") from e

        if not isinstance(response, str):
            raise TransportError(
                self.name, f"non-text response ({type(response).__name__})"
            )
        if not response.strip():
            raise TransportError(self.name, "empty response")
        return response
