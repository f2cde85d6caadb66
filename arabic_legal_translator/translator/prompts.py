"""
Prompt assembly for translation engines.

Generative engines receive the full instruction prompt; MT engines only use
the raw text and the language pair carried by the same TranslationPrompt.
"""

from dataclasses import dataclass

from arabic_legal_translator.config import DomainHint, Language

LANGUAGE_NAMES = {
    Language.ARABIC: "Arabic",
    Language.FRENCH: "French",
}

DOMAIN_DESCRIPTIONS = {
    DomainHint.GENERIC: "Algerian law",
    DomainHint.FAMILY: "Algerian family law (Code de la famille)",
    DomainHint.COMMERCIAL: "Algerian commercial law (Code de commerce)",
    DomainHint.CIVIL: "Algerian civil law (Code civil)",
    DomainHint.CRIMINAL: "Algerian criminal law (Code pénal)",
    DomainHint.ADMINISTRATIVE: "Algerian administrative law",
    DomainHint.PROCEDURAL: "Algerian civil and administrative procedure",
}

# Engines sometimes echo these back; text.cleaner strips any line that
# starts with one of them.
PROMPT_RULES_HEADER = "RULES:"
PROMPT_RULES = (
    "Output ONLY the translation",
    "Do NOT add explanations, notes, labels or a preamble",
    "Write every word in the target language script",
    "Keep article numbers, law numbers and dates exactly as written",
    "Preserve paragraph structure",
)

TRANSLATION_PROMPT = """You are an expert legal translator specialised in {domain}.

Translate the following {source} legal text into {target}.

{header}
{rules}

TEXT:
{text}"""


@dataclass(frozen=True)
class TranslationPrompt:
    """Everything an engine needs for one translation call."""
    text: str
    source_lang: Language
    target_lang: Language
    domain: DomainHint = DomainHint.GENERIC

    def render(self) -> str:
        """Full instruction prompt for generative engines."""
        rules = "\n".join(
            f"{index}. {rule}" for index, rule in enumerate(PROMPT_RULES, 1)
        )
        return TRANSLATION_PROMPT.format(
            domain=DOMAIN_DESCRIPTIONS[self.domain],
            source=LANGUAGE_NAMES[self.source_lang],
            target=LANGUAGE_NAMES[self.target_lang],
            header=PROMPT_RULES_HEADER,
            rules=rules,
            text=self.text,
        )
