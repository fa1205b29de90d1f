# services/payload/raw_payload.py
"""
Raw material for the LLM‑driven path.

No scoring or filtering happens here: the page's rendered text and markup
(plus, on PR/MR pages, the header, discussion and diff regions) are simply
bounded and handed over, leaving every judgement to the model.
"""

from typing import List, Optional

from loguru import logger

from models.payload import (
    PR_RAW_TEXT_CAP,
    RAW_HTML_CAP,
    RAW_TEXT_CAP,
    TRUNCATION_MARKER,
    RawPayload,
)
from models.pull_request import PayloadHint
from services.extractor.dom import Document
from services.extractor.lexicon import Lexicon, PlatformSelectors, get_default_lexicon
from services.extractor.text import clean_text
from services.pr.detector import detect_pr_context
from services.pr.extractor import first_match


def cap(text: Optional[str], limit: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cut *text* so that, marker included, it never exceeds *limit* characters."""
    text = text or ""
    if len(text) <= limit:
        return text
    return text[: max(0, limit - len(marker))] + marker[: limit]


def pr_region_text(document: Document, selectors: PlatformSelectors) -> str:
    """Rendered text of the metadata header, discussion and diff regions."""
    blocks: List[str] = []
    for region in (selectors.raw_meta, selectors.raw_discussion, selectors.raw_diff):
        node = first_match(document.root, region)
        if node is not None:
            text = node.rendered_text()
            if text:
                blocks.append(text)
    return "\n\n".join(blocks)


def build_raw_payload(
    document: Document,
    location: Optional[str] = None,
    lexicon: Optional[Lexicon] = None,
) -> RawPayload:
    lexicon = lexicon or get_default_lexicon()
    context = detect_pr_context(location or document.url)

    pr_raw_text = ""
    if context.hint == PayloadHint.PR:
        pr_raw_text = pr_region_text(document, lexicon.platform(context.platform))

    raw_text = clean_text(document.body.rendered_text())
    raw_html = document.root.markup()

    for name, value, limit in (
        ("pr_raw_text", pr_raw_text, PR_RAW_TEXT_CAP),
        ("raw_text", raw_text, RAW_TEXT_CAP),
        ("raw_html", raw_html, RAW_HTML_CAP),
    ):
        if len(value) > limit:
            logger.warning(f"Raw payload field {name} truncated from {len(value)} to {limit} characters")

    return RawPayload(
        title=clean_text(document.title),
        url=document.url or location or "",
        hint=context.hint,
        pr_raw_text=cap(pr_raw_text, PR_RAW_TEXT_CAP),
        raw_text=cap(raw_text, RAW_TEXT_CAP),
        raw_html=cap(raw_html, RAW_HTML_CAP),
    )
