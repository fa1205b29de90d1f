# services/extractor/lexicon.py
"""
Loads the word lists, selectors and pattern tables from
``configs/lexicon.yaml`` and validates them with Pydantic models.

Every extraction component receives a ``Lexicon`` at construction time, so
tests (or callers with other languages/sites in mind) can inject their own.

Public API:
* ``load_lexicon(path)`` – parse and validate an arbitrary YAML file.
* ``get_default_lexicon()`` – the bundled lexicon, cached per process.
* ``list_platforms(lexicon)`` – convenience helper for CLI / API.
"""

import re
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Pattern, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import ConfigError


# ----------------------------------------------------------------------
# Pydantic schemas
# ----------------------------------------------------------------------
class ContainerRules(BaseModel):
    """Candidate seeding and thresholds for the main‑container selector."""

    model_config = ConfigDict(frozen=True)

    seed_selectors: List[str] = Field(default_factory=list)
    block_selector: str = "div,section,article,main"
    min_block_chars: int = Field(default=400, ge=0)
    min_score_chars: int = Field(default=200, ge=0)


class PlatformSelectors(BaseModel):
    """CSS selectors describing one code‑hosting platform's PR/MR page."""

    model_config = ConfigDict(frozen=True)

    title: List[str] = Field(default_factory=list)
    description: List[str] = Field(default_factory=list)
    author: List[str] = Field(default_factory=list)
    branches: str
    file: str
    file_info: str
    file_path_attribute: str = "data-path"
    added_line: str
    removed_line: str
    raw_meta: List[str] = Field(default_factory=list)
    raw_discussion: List[str] = Field(default_factory=list)
    raw_diff: List[str] = Field(default_factory=list)


class Lexicon(BaseModel):
    """Immutable configuration data shared by all extraction components."""

    model_config = ConfigDict(frozen=True)

    stopwords: FrozenSet[str]
    boilerplate_hints: Tuple[str, ...]
    non_content_selector: str
    container: ContainerRules = Field(default_factory=ContainerRules)
    property_patterns: Tuple[str, ...] = ()
    platforms: Dict[str, PlatformSelectors]

    @field_validator("stopwords", "boilerplate_hints", mode="before")
    @classmethod
    def _lowercase_words(cls, words):
        """Comparisons are case‑insensitive, so store everything folded."""
        if words is None:
            return words
        return [str(w).strip().lower() for w in words if str(w).strip()]

    @field_validator("property_patterns", mode="before")
    @classmethod
    def _validate_regex(cls, patterns):
        """Ensure every pattern compiles and exposes a capture group."""
        for pattern in patterns or []:
            try:
                compiled = re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"Invalid regex pattern '{pattern}': {exc}") from exc
            if compiled.groups < 1:
                raise ValueError(f"Pattern '{pattern}' has no capture group")
        return patterns

    @field_validator("platforms")
    @classmethod
    def _require_known_platforms(cls, platforms: Dict[str, PlatformSelectors]):
        missing = {"github", "gitlab"} - set(platforms)
        if missing:
            raise ValueError(f"Missing platform selectors: {', '.join(sorted(missing))}")
        return platforms

    def compiled_patterns(self) -> List[Pattern]:
        return [re.compile(p, re.ASCII) for p in self.property_patterns]

    def platform(self, name: str) -> PlatformSelectors:
        return self.platforms[name]


# ----------------------------------------------------------------------
# Internal helpers & caching
# ----------------------------------------------------------------------
# Resolve the path relative to this file (two levels up → project root)
LEXICON_PATH = Path(__file__).resolve().parents[2] / "configs" / "lexicon.yaml"

# Simple in‑process cache so the bundled YAML is read/validated only once
_cached_default: Optional[Lexicon] = None


def _load_yaml(path: Path) -> dict:
    """Read the YAML file and return the inner ``lexicon`` mapping."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Lexicon file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Lexicon file {path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Lexicon file {path} must contain a mapping")
    # The file may wrap everything under a top‑level ``lexicon`` key.
    return raw.get("lexicon", raw)


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
def load_lexicon(path: Union[str, Path, None] = None) -> Lexicon:
    """
    Parse and validate a lexicon file.

    Raises
    ------
    ConfigError
        If the file is missing, is not YAML, or does not match the schema.
    """
    path = Path(path) if path is not None else LEXICON_PATH
    raw = _load_yaml(path)
    try:
        return Lexicon(**raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid lexicon file {path}: {exc}") from exc


def get_default_lexicon() -> Lexicon:
    """Return the bundled lexicon, loading it on first use."""
    global _cached_default
    if _cached_default is None:
        _cached_default = load_lexicon(LEXICON_PATH)
    return _cached_default


def list_platforms(lexicon: Optional[Lexicon] = None) -> List[str]:
    """Names of the platforms the PR/MR extractor knows about."""
    return sorted((lexicon or get_default_lexicon()).platforms)
