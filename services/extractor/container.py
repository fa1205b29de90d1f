# services/extractor/container.py
"""
Picks the single node that most likely holds the page's readable content.

Candidates are seeded from well‑known content selectors (``article``,
``main``, ``.entry-content`` …) plus every visible block whose cleaned text
is long enough.  Each candidate is scored by text length boosted by the
number of paragraphs, headings and lists it contains; the best one wins and
the document body is the fallback.
"""

from typing import Dict, List, Optional

from loguru import logger

from .dom import Document, DocumentNode
from .lexicon import Lexicon, get_default_lexicon
from .text import element_text, is_visible

PARAGRAPH_WEIGHT = 0.02
HEADING_WEIGHT = 0.01
LIST_WEIGHT = 0.005


class ContainerSelector:
    """Scores candidate nodes by content density."""

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or get_default_lexicon()
        self.rules = self.lexicon.container

    def _text(self, node: DocumentNode) -> str:
        return element_text(node, self.lexicon.non_content_selector)

    def score(self, node: DocumentNode, text: Optional[str] = None) -> float:
        """``len * (1 + 0.02*p + 0.01*h + 0.005*lists)``; 0 below the minimum length."""
        length = len(text if text is not None else self._text(node))
        if length < self.rules.min_score_chars:
            return 0.0
        paragraphs = len(node.select("p"))
        headings = len(node.select("h1,h2,h3"))
        lists = len(node.select("ul,ol"))
        return length * (
            1
            + PARAGRAPH_WEIGHT * paragraphs
            + HEADING_WEIGHT * headings
            + LIST_WEIGHT * lists
        )

    def candidates(self, document: Document) -> Dict[DocumentNode, str]:
        """Ordered, identity‑deduplicated candidates mapped to their cleaned text."""
        found: Dict[DocumentNode, str] = {}
        for selector in self.rules.seed_selectors:
            for node in document.root.select(selector):
                if node not in found:
                    found[node] = self._text(node)

        for node in document.root.select(self.rules.block_selector):
            if node in found or not is_visible(node):
                continue
            text = self._text(node)
            if len(text) > self.rules.min_block_chars:
                found[node] = text
        return found

    def select(self, document: Document) -> DocumentNode:
        candidates = self.candidates(document)
        best: Optional[DocumentNode] = None
        best_score = 0.0
        for node, text in candidates.items():
            s = self.score(node, text)
            if s > best_score:
                best, best_score = node, s

        if best is None:
            logger.debug(f"No container among {len(candidates)} candidates scored – using body")
            return document.body

        logger.debug(f"Selected {best!r} out of {len(candidates)} candidates (score={best_score:.1f})")
        return best


def select_main_container(document: Document, lexicon: Optional[Lexicon] = None) -> DocumentNode:
    """Best content container of *document*, never ``None`` (body fallback)."""
    return ContainerSelector(lexicon).select(document)


def rank_candidates(document: Document, lexicon: Optional[Lexicon] = None) -> List[tuple]:
    """``(node, score)`` pairs sorted best first – handy when debugging a page."""
    selector = ContainerSelector(lexicon)
    scored = [(node, selector.score(node, text)) for node, text in selector.candidates(document).items()]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)
