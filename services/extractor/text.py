# services/extractor/text.py
"""Visibility test and text normalisation shared by every extractor."""

import re
from typing import Optional

from .dom import DocumentNode

_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\ufeff]")
_WHITESPACE_RE = re.compile(r"\s+")

DEFAULT_NON_CONTENT_SELECTOR = (
    "script,style,noscript,svg,canvas,iframe,button,input,select,"
    "textarea,form,aside,nav,footer,header"
)


def clean_text(s: Optional[str]) -> str:
    """Collapse whitespace, drop zero‑width/BOM characters and trim.

    Zero‑width characters go first so that ``"a \\u200b b"`` collapses to
    ``"a b"`` in one pass (keeps the function idempotent).
    """
    if not s:
        return ""
    return _WHITESPACE_RE.sub(" ", _ZERO_WIDTH_RE.sub("", s)).strip()


def is_visible(node: Optional[DocumentNode]) -> bool:
    """True when *node* is an element that would actually be painted."""
    if node is None or not getattr(node, "is_element", False):
        return False
    if node.style("display") == "none":
        return False
    if node.style("visibility") == "hidden":
        return False
    if node.style("opacity") == "0":
        return False
    width, height = node.box()
    if width == 0 or height == 0:
        return False
    return True


def element_text(node: Optional[DocumentNode], non_content_selector: str = DEFAULT_NON_CONTENT_SELECTOR) -> str:
    """Readable text of *node* without scripts, forms and page chrome.

    Works on a throwaway clone; the original tree is never touched.
    """
    if node is None:
        return ""
    return clean_text(node.without(non_content_selector).text())
