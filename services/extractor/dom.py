# services/extractor/dom.py
"""
Narrow read‑only view over a document tree.

The extraction core only ever talks to ``DocumentNode`` objects: an element
test, a computed‑style lookup, a bounding box, text/markup access, attribute
lookup and selector‑scoped descendant queries.  ``SoupNode`` implements that
interface on top of BeautifulSoup; tests are free to plug in any other tree.

Static HTML has no layout engine, so ``SoupNode`` approximates what a browser
would compute:

* style – the inline ``style`` attribute (``hidden`` implies ``display:none``);
* box   – inline ``width``/``height`` (style or attribute); an ancestor with
  ``display:none`` collapses the box to zero.  Unknown sizes stay ``None``.
"""

import copy
import re
from typing import Dict, List, Optional, Protocol, Tuple

from bs4 import BeautifulSoup, Tag

_STYLE_DECL_RE = re.compile(r"\s*([-\w]+)\s*:\s*([^;]+)")
_LENGTH_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px)?\s*$", re.I)

# Removed before computing "rendered" text – a browser never paints them.
_NON_RENDERED_TAGS = ["script", "style", "noscript", "template", "head"]

# Block‑level tags: the rendered text puts a line break around each of them.
_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "dd", "details", "dialog",
    "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav",
    "ol", "p", "pre", "section", "summary", "table", "tr", "ul",
]


class DocumentNode(Protocol):
    """Capabilities the extraction core relies on – nothing more."""

    @property
    def is_element(self) -> bool: ...

    def style(self, prop: str) -> Optional[str]: ...

    def box(self) -> Tuple[Optional[float], Optional[float]]: ...

    def text(self) -> str: ...

    def rendered_text(self) -> str: ...

    def markup(self) -> str: ...

    def attr(self, name: str) -> Optional[str]: ...

    def select(self, selector: str) -> List["DocumentNode"]: ...

    def select_one(self, selector: str) -> Optional["DocumentNode"]: ...

    def without(self, selector: str) -> "DocumentNode": ...


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def _parse_inline_style(style: str) -> Dict[str, str]:
    declarations: Dict[str, str] = {}
    for chunk in (style or "").split(";"):
        match = _STYLE_DECL_RE.match(chunk)
        if not match:
            continue
        value = match.group(2).replace("!important", "").strip().lower()
        declarations[match.group(1).lower()] = value
    return declarations


def _parse_length(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    match = _LENGTH_RE.match(str(value))
    return float(match.group(1)) if match else None


def _is_display_none(tag: Tag) -> bool:
    if tag.has_attr("hidden"):
        return True
    return _parse_inline_style(tag.get("style", "")).get("display") == "none"


def _is_unpainted(tag: Tag) -> bool:
    """Collapsed or invisible by its own inline style."""
    if _is_display_none(tag):
        return True
    return _parse_inline_style(tag.get("style", "")).get("visibility") in ("hidden", "collapse")


# ----------------------------------------------------------------------
# BeautifulSoup adapter
# ----------------------------------------------------------------------
class SoupNode:
    """``DocumentNode`` backed by a BeautifulSoup ``Tag``.

    Wrappers are created on the fly, so identity is delegated to the
    underlying tag: two ``SoupNode`` objects over the same tag are equal.
    """

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"SoupNode(<{getattr(self._tag, 'name', '?')}>)"

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def is_element(self) -> bool:
        return isinstance(self._tag, Tag)

    def style(self, prop: str) -> Optional[str]:
        if prop == "display" and self._tag.has_attr("hidden"):
            return "none"
        return _parse_inline_style(self._tag.get("style", "")).get(prop)

    def box(self) -> Tuple[Optional[float], Optional[float]]:
        for ancestor in self._tag.parents:
            if isinstance(ancestor, BeautifulSoup):
                break
            if _is_display_none(ancestor):
                return 0.0, 0.0

        inline = _parse_inline_style(self._tag.get("style", ""))
        width = _parse_length(inline.get("width"))
        if width is None:
            width = _parse_length(self._tag.get("width"))
        height = _parse_length(inline.get("height"))
        if height is None:
            height = _parse_length(self._tag.get("height"))
        return width, height

    def text(self) -> str:
        return self._tag.get_text()

    def rendered_text(self) -> str:
        clone = copy.copy(self._tag)
        for hidden in clone.find_all(_NON_RENDERED_TAGS):
            hidden.extract()
        for hidden in [t for t in clone.find_all(True) if _is_unpainted(t)]:
            if hidden.parent is not None:
                hidden.extract()
        for block in clone.find_all(_BLOCK_TAGS):
            block.insert_before("\n")
            block.insert_after("\n")
        lines = (line.strip() for line in clone.get_text().splitlines())
        return "\n".join(line for line in lines if line)

    def markup(self) -> str:
        return str(self._tag)

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def select(self, selector: str) -> List["SoupNode"]:
        return [SoupNode(t) for t in self._tag.select(selector)]

    def select_one(self, selector: str) -> Optional["SoupNode"]:
        found = self._tag.select_one(selector)
        return SoupNode(found) if found is not None else None

    def without(self, selector: str) -> "SoupNode":
        """Deep copy of this subtree with every descendant matching *selector* removed."""
        clone = copy.copy(self._tag)
        for node in clone.select(selector):
            node.extract()
        return SoupNode(clone)


# ----------------------------------------------------------------------
# Whole document
# ----------------------------------------------------------------------
class Document:
    """A parsed page: its root, its body, its title and where it came from."""

    def __init__(self, root: DocumentNode, body: DocumentNode, title: str = "", url: str = ""):
        self.root = root
        self.body = body
        self.title = title or ""
        self.url = url or ""

    @classmethod
    def from_html(cls, html: str, url: str = "", parser: str = "html.parser") -> "Document":
        """Parse *html* with BeautifulSoup and wrap it for the extraction core."""
        soup = BeautifulSoup(html or "", parser)
        root = SoupNode(soup.html) if soup.html is not None else SoupNode(soup)
        body = SoupNode(soup.body) if soup.body is not None else root
        title = soup.title.get_text() if soup.title is not None else ""
        return cls(root=root, body=body, title=title, url=url)
