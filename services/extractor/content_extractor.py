# services/extractor/content_extractor.py
"""
Extract the main article of a page as ``StructuredContent``.

Pipeline:
* ``ContainerSelector`` picks the densest content node (body as fallback);
* headings, paragraphs, lists and code blocks are pulled from that node;
* paragraphs mentioning boilerplate words (cookie, newsletter, share …) are
  dropped – a blunt filter that also removes the odd legitimate paragraph.

Nothing here raises on odd markup: missing nodes simply yield empty lists.
"""

from typing import List, Optional

from loguru import logger

from models.content import StructuredContent

from .container import ContainerSelector
from .dom import Document, DocumentNode
from .lexicon import Lexicon, get_default_lexicon
from .text import clean_text, element_text

HEADING_SELECTOR = "h1,h2,h3"
PARAGRAPH_SELECTOR = "p"
LIST_SELECTOR = "ul,ol"
LIST_ITEM_SELECTOR = "li"
CODE_SELECTOR = "pre,code"

MIN_PARAGRAPH_CHARS = 40
MAX_LISTS = 5
MAX_LIST_ITEMS = 12
MAX_CODE_BLOCKS = 3
MAX_CODE_CHARS = 1200
ELLIPSIS = "…"


class ContentExtractor:
    """Turns a container node into a ``StructuredContent`` value."""

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or get_default_lexicon()
        self.container_selector = ContainerSelector(self.lexicon)

    # ------------------------------------------------------------------
    # Individual parts
    # ------------------------------------------------------------------
    def is_boilerplate(self, text: str) -> bool:
        lowered = text.lower()
        return any(hint in lowered for hint in self.lexicon.boilerplate_hints)

    def headings(self, container: DocumentNode) -> List[str]:
        texts = (clean_text(h.text()) for h in container.select(HEADING_SELECTOR))
        return [t for t in texts if t]

    def paragraphs(self, container: DocumentNode) -> List[str]:
        texts = (clean_text(p.text()) for p in container.select(PARAGRAPH_SELECTOR))
        return [
            t for t in texts
            if len(t) > MIN_PARAGRAPH_CHARS and not self.is_boilerplate(t)
        ]

    def lists(self, container: DocumentNode) -> List[List[str]]:
        result: List[List[str]] = []
        for list_node in container.select(LIST_SELECTOR):
            items = [clean_text(li.text()) for li in list_node.select(LIST_ITEM_SELECTOR)]
            items = [i for i in items if i][:MAX_LIST_ITEMS]
            if items:
                result.append(items)
            if len(result) >= MAX_LISTS:
                break
        return result

    def code_blocks(self, container: DocumentNode) -> List[str]:
        blocks: List[str] = []
        for node in container.select(CODE_SELECTOR):
            text = clean_text(node.text())
            if not text:
                continue
            if len(text) > MAX_CODE_CHARS:
                text = text[:MAX_CODE_CHARS] + ELLIPSIS
            blocks.append(text)
            if len(blocks) >= MAX_CODE_BLOCKS:
                break
        return blocks

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------
    def extract_structured(self, document: Document, container: DocumentNode) -> StructuredContent:
        """Decompose *container* (a node of *document*)."""
        return StructuredContent(
            title=clean_text(document.title),
            url=document.url,
            headings=self.headings(container),
            paragraphs=self.paragraphs(container),
            lists=self.lists(container),
            code_blocks=self.code_blocks(container),
            full_text=element_text(container, self.lexicon.non_content_selector),
        )

    def extract_content(self, document: Document) -> StructuredContent:
        """Select the main container of *document* and decompose it."""
        container = self.container_selector.select(document)
        structured = self.extract_structured(document, container)
        logger.debug(
            f"Extracted {len(structured.headings)} headings, {len(structured.paragraphs)} paragraphs, "
            f"{len(structured.lists)} lists, {len(structured.code_blocks)} code blocks from {document.url or '<document>'}"
        )
        return structured


def extract_main_content(document: Document, lexicon: Optional[Lexicon] = None) -> StructuredContent:
    """Module‑level shortcut for ``ContentExtractor(lexicon).extract_content(document)``."""
    return ContentExtractor(lexicon).extract_content(document)
