"""
Configuration management for the Arabic/French legal translation pipeline.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Language(Enum):
    ARABIC = "ar"
    FRENCH = "fr"


class Script(Enum):
    ARABIC = "ARABIC"
    LATIN = "LATIN"


# Script expected in the output for each supported language
LANGUAGE_SCRIPTS = {
    Language.ARABIC: Script.ARABIC,
    Language.FRENCH: Script.LATIN,
}


class DomainHint(Enum):
    """Caller-supplied legal domain; selects terminology and fallback text."""
    GENERIC = "generic"
    FAMILY = "family"
    COMMERCIAL = "commercial"
    CIVIL = "civil"
    CRIMINAL = "criminal"
    ADMINISTRATIVE = "administrative"
    PROCEDURAL = "procedural"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DomainHint":
        """Map a free-form hint to a member, defaulting to GENERIC."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.GENERIC
        normalized = value.strip().lower().replace("-law", "").replace("_law", "")
        for member in cls:
            if member.value == normalized:
                return member
        return cls.GENERIC


class EngineName(Enum):
    CLAUDE = "claude"
    OPENAI = "openai"
    DEEPL = "deepl"
    GOOGLE = "google"


def _env_number(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass
class TranslationConfig:
    """Translation pipeline configuration."""
    # API keys: loaded from env vars if not set
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    deepl_api_key: Optional[str] = None
    google_api_key: Optional[str] = None

    # Engines in priority order (first = highest rank)
    engines: list[EngineName] = field(
        default_factory=lambda: [
            EngineName.CLAUDE,
            EngineName.OPENAI,
            EngineName.DEEPL,
            EngineName.GOOGLE,
        ]
    )

    claude_model: str = "claude-sonnet-4-6"
    openai_model: str = "gpt-4o"

    # Purity policy (percent of meaningful characters)
    purity_target_threshold_pct: float = 95.0
    purity_foreign_threshold_pct: float = 5.0

    # Quality gate (0–100)
    acceptance_score_threshold: float = 70.0

    # Engine routing
    engine_timeout_ms: int = 10_000
    max_consecutive_failures_before_open: int = 3
    circuit_half_open_after_ms: int = 60_000

    # Result cache
    cache_ttl_ms: int = 3_600_000
    cache_max_entries: int = 1000

    # Dispatch limiter
    global_concurrency_limit: int = 8
    max_queued_requests: int = 64

    # Cleaning
    min_meaningful_chars: int = 2
    extra_ui_labels: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Load API keys and numeric overrides from environment variables."""
        if not self.anthropic_api_key:
            self.anthropic_api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not self.openai_api_key:
            self.openai_api_key = os.environ.get("OPENAI_API_KEY")
        if not self.deepl_api_key:
            self.deepl_api_key = os.environ.get("DEEPL_API_KEY")
        if not self.google_api_key:
            self.google_api_key = os.environ.get("GOOGLE_TRANSLATE_API_KEY")

        self.engine_timeout_ms = int(
            _env_number("LEGAL_TRANSLATOR_ENGINE_TIMEOUT_MS", self.engine_timeout_ms)
        )
        self.acceptance_score_threshold = _env_number(
            "LEGAL_TRANSLATOR_ACCEPTANCE_THRESHOLD", self.acceptance_score_threshold
        )

    def get_available_engines(self) -> list[EngineName]:
        """Return only engines that have API keys configured, in priority order."""
        available = []
        key_map = {
            EngineName.CLAUDE: self.anthropic_api_key,
            EngineName.OPENAI: self.openai_api_key,
            EngineName.DEEPL: self.deepl_api_key,
            EngineName.GOOGLE: self.google_api_key,
        }
        for engine in self.engines:
            if key_map.get(engine):
                available.append(engine)
        return available

    def validate(self) -> list[str]:
        """Return a list of configuration errors (empty when valid)."""
        errors = []
        for name in ("purity_target_threshold_pct", "purity_foreign_threshold_pct"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                errors.append(f"{name} must be between 0 and 100")
        if not 0 <= self.acceptance_score_threshold <= 100:
            errors.append("acceptance_score_threshold must be between 0 and 100")
        if self.engine_timeout_ms < 1:
            errors.append("engine_timeout_ms must be positive")
        if self.max_consecutive_failures_before_open < 1:
            errors.append("max_consecutive_failures_before_open must be at least 1")
        if self.circuit_half_open_after_ms < 0:
            errors.append("circuit_half_open_after_ms cannot be negative")
        if self.cache_ttl_ms < 0:
            errors.append("cache_ttl_ms cannot be negative")
        if self.cache_max_entries < 1:
            errors.append("cache_max_entries must be at least 1")
        if self.global_concurrency_limit < 1:
            errors.append("global_concurrency_limit must be at least 1")
        if self.max_queued_requests < 0:
            errors.append("max_queued_requests cannot be negative")
        if len(set(self.engines)) != len(self.engines):
            errors.append("engines must not contain duplicates")
        return errors
