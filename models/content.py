# models/content.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class StructuredContent(BaseModel):
    """
    Decomposition of a page's main container.

    Built once per extraction call and never mutated afterwards.  List caps
    (5 lists × 12 items, 3 code blocks ≤ 1200 chars) are enforced by the
    extractor, not here, so callers may build smaller/larger fixtures freely.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str = ""
    headings: List[str] = Field(default_factory=list)
    paragraphs: List[str] = Field(default_factory=list)
    lists: List[List[str]] = Field(default_factory=list)
    code_blocks: List[str] = Field(default_factory=list)
    full_text: str = ""

    def stats(self) -> dict:
        """Counts reported alongside a summary."""
        return {
            "headings": len(self.headings),
            "paragraphs": len(self.paragraphs),
            "lists": len(self.lists),
            "code_blocks": len(self.code_blocks),
            "full_text_len": len(self.full_text),
        }


class ScoredSentence(BaseModel):
    """A sentence of the base text with its position and information score."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    text: str
    score: float = Field(default=0.0, ge=0)
