"""
Text handling: script analysis and content cleaning.
"""

from arabic_legal_translator.text.analyzer import ScriptProfile, analyze, detect_script
from arabic_legal_translator.text.cleaner import CleaningResult, CleaningRule, ContentCleaner

__all__ = [
    "CleaningResult",
    "CleaningRule",
    "ContentCleaner",
    "ScriptProfile",
    "analyze",
    "detect_script",
]
