# tests/test_pipeline.py
from models.content import StructuredContent
from services.pipeline import export_pr, export_structured, run_extraction

PR_URL = "https://github.com/octo/widgets/pull/42"


def test_generic_page_goes_through_the_summarizer(make_document, article_html):
    doc = make_document(article_html, title="Storage", url="https://example.com/storage")
    result = run_extraction(doc, doc.url)

    assert result.pr is None
    assert result.summary.startswith("Storage\nhttps://example.com/storage\n\nSummary:\n- ")
    assert "Key items:" in result.summary
    assert result.structured.headings[0] == "Log structured storage"


def test_pull_request_page_goes_straight_to_the_renderer(make_document, github_pr_html):
    doc = make_document(github_pr_html, url=PR_URL)
    result = run_extraction(doc, PR_URL)

    assert result.pr is not None
    assert result.summary.startswith("Add retry support\n" + PR_URL)
    assert "Files changed: 2, +3 -3" in result.summary
    assert result.structured.title == "Add retry support"


def test_empty_page_never_raises(make_document):
    result = run_extraction(make_document("", url="https://example.com/empty"))
    assert result.summary == "https://example.com/empty\n\nSummary:"


def test_export_structured_caps_large_fields():
    content = StructuredContent(
        paragraphs=[f"p{i}" for i in range(50)],
        lists=[[str(i) for i in range(12)]] * 5,
        code_blocks=["a", "b", "c"],
        full_text="t" * 13_000,
    )
    data = export_structured(content)
    assert len(data["paragraphs"]) == 40
    assert len(data["lists"]) == 3
    assert all(len(items) == 10 for items in data["lists"])
    assert data["code_blocks"] == ["a", "b"]
    assert data["full_text"] == "t" * 12_000 + "…"


def test_export_pr_uses_plain_totals(make_document, github_pr_html):
    result = run_extraction(make_document(github_pr_html, url=PR_URL), PR_URL)
    data = export_pr(result.pr)
    assert data["totals"] == {"add": 3, "del": 3}
    assert [f["path"] for f in data["files"]] == ["src/retry.ts", "app/client.py"]
