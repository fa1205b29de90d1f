# tests/test_text.py
import pytest

from services.extractor.dom import Document
from services.extractor.text import clean_text, element_text, is_visible

from fakes import FakeNode


# ----------------------------------------------------------------------
# clean_text
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("  hello   world \n", "hello world"),
        ("tab\tand\nnewline", "tab and newline"),
        ("zero\u200bwidth", "zerowidth"),
        ("\ufeffbom first", "bom first"),
        ("a \u200b b", "a b"),
        ("", ""),
        (None, ""),
        ("   ", ""),
    ],
)
def test_clean_text_normalises(raw, expected):
    assert clean_text(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["  x  y  ", "\u200b \u200b", "line\n\n\nline", " \u200c lead", "mixed\u00a0nbsp ", "a \u200b b \ufeff c"],
)
def test_clean_text_is_idempotent_and_trimmed(raw):
    """Applying it twice changes nothing and never leaves edge whitespace."""
    once = clean_text(raw)
    assert clean_text(once) == once
    assert once == once.strip()


# ----------------------------------------------------------------------
# is_visible – inline styles and attributes stand in for computed style
# ----------------------------------------------------------------------
def test_visibility_from_inline_styles():
    doc = Document.from_html(
        "<body>"
        "<div id='shown'>x</div>"
        "<div id='none' style='display: none'>x</div>"
        "<div id='hidden' style='visibility:hidden'>x</div>"
        "<div id='clear' style='opacity: 0'>x</div>"
        "<div id='flat' style='height: 0px'>x</div>"
        "<div id='attr' hidden>x</div>"
        "<div style='display:none'><p id='inner'>x</p></div>"
        "</body>"
    )
    root = doc.root
    assert is_visible(root.select_one("#shown"))
    for selector in ("#none", "#hidden", "#clear", "#flat", "#attr", "#inner"):
        assert not is_visible(root.select_one(selector)), selector


def test_is_visible_handles_missing_node():
    assert not is_visible(None)


def test_visibility_on_synthetic_tree():
    assert is_visible(FakeNode("div", box=(100, 20)))
    assert not is_visible(FakeNode("div", box=(0, 20)))
    assert not is_visible(FakeNode("div", style={"display": "none"}))


# ----------------------------------------------------------------------
# element_text
# ----------------------------------------------------------------------
def test_element_text_drops_chrome_and_leaves_tree_untouched():
    doc = Document.from_html(
        "<body><div id='c'>"
        "<nav>Menu</nav><p>Body   text</p><script>var x = 1;</script>"
        "<button>Click</button><footer>Foot</footer>"
        "</div></body>"
    )
    container = doc.root.select_one("#c")
    assert element_text(container) == "Body text"
    # the live tree still has its navigation and script
    assert container.select_one("nav") is not None
    assert container.select_one("script") is not None


def test_element_text_of_none_is_empty():
    assert element_text(None) == ""
