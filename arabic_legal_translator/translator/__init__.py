"""
Translation subsystem: engine adapters and the routing gateway.
"""

from arabic_legal_translator.translator.base import BaseEngine
from arabic_legal_translator.translator.prompts import TranslationPrompt

__all__ = [
    "BaseEngine",
    "TranslationPrompt",
    "ClaudeEngine",
    "GoogleEngine",
    "DeepLEngine",
    "OpenAIEngine",
    "TranslationGateway",
]


def __getattr__(name: str):
    if name == "ClaudeEngine":
        from arabic_legal_translator.translator.claude_engine import ClaudeEngine
        return ClaudeEngine
    if name == "GoogleEngine":
        from arabic_legal_translator.translator.google_engine import GoogleEngine
        return GoogleEngine
    if name == "DeepLEngine":
        from arabic_legal_translator.translator.deepl_engine import DeepLEngine
        return DeepLEngine
    if name == "OpenAIEngine":
        from arabic_legal_translator.translator.openai_engine import OpenAIEngine
        return OpenAIEngine
    if name == "TranslationGateway":
        from arabic_legal_translator.translator.gateway import TranslationGateway
        return TranslationGateway
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
