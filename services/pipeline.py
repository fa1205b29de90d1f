# services/pipeline.py
"""
Request‑level orchestration used by the API and the command line.

``run_extraction`` is the local (no LLM) path: PR/MR pages go straight to
the diff extractor and its renderer, everything else through container
selection, structured extraction and the extractive summarizer.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from models.content import StructuredContent
from models.pull_request import PRSnapshot
from services.extractor.content_extractor import ContentExtractor
from services.extractor.dom import Document
from services.extractor.lexicon import Lexicon, get_default_lexicon
from services.pr.extractor import maybe_extract_pr
from services.pr.renderer import render_pr_summary
from services.summarizer.extractive import DEFAULT_MAX_CHARS, ExtractiveSummarizer

# Caps applied when structured data is returned to a caller as‑is.
EXPORT_MAX_PARAGRAPHS = 40
EXPORT_MAX_LISTS = 3
EXPORT_MAX_LIST_ITEMS = 10
EXPORT_MAX_CODE_BLOCKS = 2
EXPORT_MAX_FULL_TEXT = 12_000
EXPORT_MAX_FILES = 80
EXPORT_MAX_ADDED_LINES = 400
EXPORT_MAX_REMOVED_LINES = 80
EXPORT_MAX_PROPERTIES = 200


class ExtractionResult(BaseModel):
    """Local summary plus whatever was extracted to build it."""

    model_config = ConfigDict(frozen=True)

    structured: StructuredContent
    summary: str
    pr: Optional[PRSnapshot] = None


def run_extraction(
    document: Document,
    location: Optional[str] = None,
    max_chars: Optional[int] = None,
    lexicon: Optional[Lexicon] = None,
) -> ExtractionResult:
    lexicon = lexicon or get_default_lexicon()
    pr = maybe_extract_pr(document, location, lexicon)
    if pr is not None:
        structured = StructuredContent(title=pr.title, url=pr.url, full_text=pr.description)
        return ExtractionResult(structured=structured, summary=render_pr_summary(pr, max_chars), pr=pr)

    structured = ContentExtractor(lexicon).extract_content(document)
    summary = ExtractiveSummarizer(lexicon).summarize(structured, max_chars or DEFAULT_MAX_CHARS)
    return ExtractionResult(structured=structured, summary=summary)


def export_structured(structured: StructuredContent) -> dict:
    """Structured content with large fields capped for transport."""
    full_text = structured.full_text
    if len(full_text) > EXPORT_MAX_FULL_TEXT:
        full_text = full_text[:EXPORT_MAX_FULL_TEXT] + "…"
    return {
        "title": structured.title,
        "url": structured.url,
        "headings": structured.headings,
        "paragraphs": structured.paragraphs[:EXPORT_MAX_PARAGRAPHS],
        "lists": [items[:EXPORT_MAX_LIST_ITEMS] for items in structured.lists[:EXPORT_MAX_LISTS]],
        "code_blocks": structured.code_blocks[:EXPORT_MAX_CODE_BLOCKS],
        "full_text": full_text,
    }


def export_pr(pr: PRSnapshot) -> dict:
    return pr.to_dict(
        max_files=EXPORT_MAX_FILES,
        max_added=EXPORT_MAX_ADDED_LINES,
        max_removed=EXPORT_MAX_REMOVED_LINES,
        max_properties=EXPORT_MAX_PROPERTIES,
    )
