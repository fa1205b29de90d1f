# services/summarizer/extractive.py
"""
Frequency‑weighted extractive summarizer.

Given a ``StructuredContent`` it:

1. joins the first three headings and all paragraphs into a base text;
2. builds a max‑normalised term‑frequency table (stopwords excluded);
3. splits the base text into sentences with a simple punctuation rule;
4. scores every sentence (term weights + a small bonus per number, divided
   by ``log2(8 + tokens)`` so dense, moderate‑length sentences win);
5. greedily picks the best sentences inside a character budget and puts
   them back in document order;
6. renders a bulleted brief with a few list items and one code excerpt.

The budget only governs sentence selection – the title, URL, list items and
code excerpt are added on top of it.
"""

import math
import re
from collections import Counter
from typing import Dict, List, Optional

from loguru import logger

from models.content import ScoredSentence, StructuredContent
from services.extractor.lexicon import Lexicon, get_default_lexicon
from services.extractor.text import clean_text

DEFAULT_MAX_CHARS = 1400

_TOKEN_RE = re.compile(r"[a-z][a-z'\-]+")
_DIGITS_RE = re.compile(r"[0-9]+")
# Break after . ! ? when whitespace and an uppercase letter (or "[") follow.
# Abbreviations such as "U.S. Army" are split too; that is the known behaviour.
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+(?=[A-Z\[])")

MIN_SENTENCE_TOKENS = 6
MIN_SENTENCE_CHARS = 40
MAX_SENTENCES = 24
NUMBER_BONUS = 0.1

MAX_HEADINGS = 3
MAX_KEY_LISTS = 2
MAX_KEY_ITEMS = 6
MAX_KEY_ITEMS_CHARS = 600


class ExtractiveSummarizer:
    """Stateless; one instance can serve any number of calls."""

    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or get_default_lexicon()
        self.stopwords = self.lexicon.stopwords

    # ------------------------------------------------------------------
    # Text primitives
    # ------------------------------------------------------------------
    @staticmethod
    def tokenize(text: str) -> List[str]:
        """Lower‑cased alphabetic runs (``'`` and ``-`` allowed inside), length ≥ 2."""
        return _TOKEN_RE.findall((text or "").lower())

    @staticmethod
    def split_sentences(text: str) -> List[str]:
        fragments = (clean_text(s) for s in _SENTENCE_BREAK_RE.split(text or ""))
        return [s for s in fragments if s]

    @staticmethod
    def base_text(structured: StructuredContent) -> str:
        parts = [
            ". ".join(structured.headings[:MAX_HEADINGS]),
            " ".join(structured.paragraphs),
        ]
        return ". ".join(p for p in parts if p)

    def build_frequencies(self, text: str) -> Dict[str, float]:
        """Term → count / max count, stopwords excluded."""
        counts = Counter(w for w in self.tokenize(text) if w not in self.stopwords)
        top = max(counts.values(), default=1)
        return {term: count / top for term, count in counts.items()}

    def score_sentence(self, sentence: str, frequencies: Dict[str, float]) -> float:
        words = self.tokenize(sentence)
        if len(words) < MIN_SENTENCE_TOKENS:
            return 0.0
        score = sum(frequencies.get(w, 0.0) for w in words if w not in self.stopwords)
        score += NUMBER_BONUS * len(_DIGITS_RE.findall(sentence))
        return score / math.log2(8 + len(words))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def score_sentences(self, structured: StructuredContent) -> List[ScoredSentence]:
        """Every sentence with a positive score, in document order."""
        text = self.base_text(structured)
        frequencies = self.build_frequencies(text)
        scored = []
        for index, sentence in enumerate(self.split_sentences(text)):
            score = self.score_sentence(sentence, frequencies)
            if score > 0:
                scored.append(ScoredSentence(index=index, text=sentence, score=score))
        return scored

    def select_sentences(self, structured: StructuredContent, max_chars: int = DEFAULT_MAX_CHARS) -> List[ScoredSentence]:
        """Best sentences whose ``len + 1`` fits in *max_chars*, in document order."""
        ranked = sorted(self.score_sentences(structured), key=lambda s: s.score, reverse=True)
        picked: List[ScoredSentence] = []
        used = 0
        for candidate in ranked:
            if len(candidate.text) < MIN_SENTENCE_CHARS:
                continue
            if len(picked) >= MAX_SENTENCES:
                break
            cost = len(candidate.text) + 1
            if used + cost > max_chars:
                continue
            picked.append(candidate)
            used += cost
        picked.sort(key=lambda s: s.index)
        return picked

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    @staticmethod
    def key_items(structured: StructuredContent) -> List[str]:
        bullets: List[str] = []
        for items in structured.lists[:MAX_KEY_LISTS]:
            for item in items[:MAX_KEY_ITEMS]:
                if len(" ".join(bullets)) + len(item) + 2 > MAX_KEY_ITEMS_CHARS:
                    break
                bullets.append(f"- {item}")
        return bullets

    @staticmethod
    def code_excerpt(structured: StructuredContent) -> str:
        if not structured.code_blocks:
            return ""
        return f'\nCode snippet:\n"""\n{structured.code_blocks[0]}\n"""'

    def summarize(self, structured: StructuredContent, max_chars: int = DEFAULT_MAX_CHARS) -> str:
        picked = self.select_sentences(structured, max_chars)
        bullets = [f"- {s.text}" for s in picked]
        list_bullets = self.key_items(structured)

        header = f"{structured.title}\n{structured.url}" if structured.title else structured.url
        lines = [header, "", "Summary:", *bullets]
        if list_bullets:
            lines += ["", "Key items:", *list_bullets]
        lines.append(self.code_excerpt(structured))

        logger.debug(
            f"Summary for {structured.url or '<document>'}: {len(bullets)} sentences, "
            f"{len(list_bullets)} key items, budget {max_chars}"
        )
        return "\n".join(lines).strip()


def summarize_structured(
    structured: StructuredContent,
    max_chars: int = DEFAULT_MAX_CHARS,
    lexicon: Optional[Lexicon] = None,
) -> str:
    """Module‑level shortcut for ``ExtractiveSummarizer(lexicon).summarize(...)``."""
    return ExtractiveSummarizer(lexicon).summarize(structured, max_chars)
