# core/config.py
"""
Process‑wide settings.

Values come from environment variables with the ``PRSUM_`` prefix
(e.g. ``PRSUM_OPENAI_API_KEY``).  The model is validated by Pydantic so a
typo such as ``PRSUM_DEFAULT_MAX_CHARS=abc`` fails loudly at start‑up.

The public API mirrors the usual pattern:
* ``get_settings()`` – cached ``Settings`` instance.
* ``settings`` – module‑level shortcut for ``get_settings()``.
"""

import os
from enum import Enum
from functools import lru_cache
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import ConfigError

ENV_PREFIX = "PRSUM_"


# ----------------------------------------------------------------------
#  LLM engines understood by the service
# ----------------------------------------------------------------------
class Engine(str, Enum):
    CHATGPT = "chatgpt"
    GEMINI = "gemini"


DEFAULT_PR_INSTRUCTIONS = "\n".join(
    [
        "Summarize this GitHub Pull Request for replication by another LLM. Do not output JSON or YAML.",
        "Use only human-readable sections with headings and bullet points.",
        "Sections (in order):",
        "1) Summary: high-level what changed and why; note feature flags or config additions.",
        "2) Files Changed: list each file path with a one-line purpose.",
        "3) Added Code: for each file, include essential added lines in fenced code blocks.",
        "4) Removed Code: include only removed lines that are important to understand the change.",
        "Rules: Do not invent code; copy exact lines from the diff. Preserve identifiers, endpoints, constants, versions.",
        "Keep it concise but sufficient for another LLM to reproduce the change elsewhere.",
    ]
)

DEFAULT_PAGE_INSTRUCTIONS = "\n".join(
    [
        "Extract the main content and provide a precise, LLM-ready brief. Use headings and bullet points.",
        "Keep only important facts, entities, numbers, definitions, and steps.",
        "Do not output JSON or YAML. Use plain text and bullets.",
    ]
)


class Settings(BaseModel):
    """All tunables of the service.  Field names match the env var suffix."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    PROJECT_NAME: str = "PRSum"
    LOG_LEVEL: str = "INFO"
    PORT: int = 8000

    # ------------------------------------------------------------------
    #  LLM engines
    # ------------------------------------------------------------------
    DEFAULT_ENGINE: Optional[Engine] = None
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.0-flash"
    LLM_TIMEOUT: float = Field(default=60.0, gt=0)

    # ------------------------------------------------------------------
    #  Prompt templates & budgets
    # ------------------------------------------------------------------
    PR_INSTRUCTIONS: Optional[str] = DEFAULT_PR_INSTRUCTIONS
    PAGE_INSTRUCTIONS: Optional[str] = DEFAULT_PAGE_INSTRUCTIONS
    DEFAULT_MAX_CHARS: int = Field(default=1400, ge=1)
    PR_MAX_CHARS: int = Field(default=2400, ge=1)

    # ------------------------------------------------------------------
    #  Fetching & caching
    # ------------------------------------------------------------------
    FETCH_TIMEOUT: float = Field(default=15.0, gt=0)
    USER_AGENT: str = "Mozilla/5.0 (compatible; PRSum/1.0)"
    SUMMARY_CACHE_SIZE: int = Field(default=25, ge=1)

    @field_validator("OPENAI_API_KEY", "GEMINI_API_KEY", "PR_INSTRUCTIONS", "PAGE_INSTRUCTIONS", mode="before")
    @classmethod
    def _strip_and_nullify(cls, v):
        """Blank strings count as "not configured"."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("PR_INSTRUCTIONS", mode="after")
    @classmethod
    def _default_pr_instructions(cls, v: Optional[str]) -> str:
        return v or DEFAULT_PR_INSTRUCTIONS

    @field_validator("PAGE_INSTRUCTIONS", mode="after")
    @classmethod
    def _default_page_instructions(cls, v: Optional[str]) -> str:
        return v or DEFAULT_PAGE_INSTRUCTIONS

    @field_validator("DEFAULT_ENGINE", mode="before")
    @classmethod
    def _sanitize_engine(cls, v):
        # Unknown legacy values (e.g. "local") fall back to auto‑selection.
        if isinstance(v, str) and v.strip().lower() not in {e.value for e in Engine}:
            return None
        return v.strip().lower() if isinstance(v, str) else v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``PRSUM_*`` variables, raising ``ConfigError`` on bad values."""
        environ = os.environ if environ is None else environ
        raw = {
            key[len(ENV_PREFIX):]: value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX)
        }
        try:
            return cls(**raw)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached process settings."""
    return Settings.from_env()


settings = get_settings()
