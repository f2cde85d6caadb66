"""
Utility functions for the legal translation pipeline.
"""

import hashlib
import logging
import re
import unicodedata

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the pipeline."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def normalize_arabic(text: str) -> str:
    """
    Normalize Arabic text for comparison purposes.
    Removes diacritics (tashkeel) and normalizes alef/yaa variants.
    """
    # Remove tashkeel (diacritical marks)
    tashkeel = re.compile(r'[\u0617-\u061A\u064B-\u0652\u0670]')
    text = tashkeel.sub('', text)

    # Normalize alef variants → plain alef
    text = re.sub(r'[\u0622\u0623\u0625\u0671]', '\u0627', text)

    # Normalize taa marbuta → haa
    text = text.replace('\u0629', '\u0647')

    # Normalize alef maqsura → yaa
    text = text.replace('\u0649', '\u064A')

    return text


def normalize_latin(text: str) -> str:
    """Case-fold Latin text and unify apostrophes for term matching."""
    text = unicodedata.normalize("NFC", text).casefold()
    return text.replace("\u2019", "'").replace("\u02bc", "'")


def normalize_for_matching(text: str) -> str:
    """Normalization used when looking up terminology in either script."""
    return normalize_latin(normalize_arabic(text))


def cache_key(text: str, source_lang: str, target_lang: str) -> str:
    """Stable hash of a translation request's identity."""
    digest = hashlib.sha256()
    for part in (source_lang, target_lang, text):
        digest.update(part.encode("utf-8", errors="surrogatepass"))
        digest.update(b"\x1f")
    return digest.hexdigest()
