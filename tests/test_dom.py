# tests/test_dom.py
from services.extractor.dom import Document, SoupNode


def test_from_html_exposes_title_body_and_url():
    doc = Document.from_html("<html><head><title>Hi</title></head><body><p>x</p></body></html>", url="u")
    assert doc.title == "Hi"
    assert doc.url == "u"
    assert doc.body.select_one("p").text() == "x"


def test_wrappers_compare_by_underlying_tag():
    doc = Document.from_html("<body><div id='a'></div><div id='b'></div></body>")
    first = doc.root.select_one("#a")
    again = doc.root.select("div")[0]
    assert first == again
    assert len({first, again, doc.root.select_one("#b")}) == 2


def test_rendered_text_breaks_blocks_and_skips_scripts():
    doc = Document.from_html(
        "<body><h1>Title</h1><p>One <b>bold</b> line</p><script>var x;</script><ul><li>a</li><li>b</li></ul></body>"
    )
    assert doc.body.rendered_text() == "Title\nOne bold line\na\nb"


def test_box_reads_inline_sizes():
    doc = Document.from_html(
        "<body><img id='i' width='40' height='30'><div id='d' style='width: 120px'></div></body>"
    )
    assert doc.root.select_one("#i").box() == (40.0, 30.0)
    assert doc.root.select_one("#d").box() == (120.0, None)


def test_attr_joins_class_lists():
    node = Document.from_html("<body><p class='lead big' data-x='1'>t</p></body>").root.select_one("p")
    assert node.attr("class") == "lead big"
    assert node.attr("data-x") == "1"
    assert node.attr("missing") is None


def test_without_returns_a_pruned_copy():
    doc = Document.from_html("<body><div id='c'><nav>menu</nav><p>text</p></div></body>")
    container = doc.root.select_one("#c")
    pruned = container.without("nav")
    assert isinstance(pruned, SoupNode)
    assert pruned.text() == "text"
    assert container.text() == "menutext"


def test_rendered_text_skips_hidden_subtrees():
    doc = Document.from_html(
        "<body><p>kept</p><div hidden><p>gone</p></div>"
        "<section style='display: none'><div hidden>nested</div></section><em style='visibility:hidden'>ghost</em></body>"
    )
    assert doc.body.rendered_text() == "kept"
