# tests/conftest.py
"""
Shared fixtures: the bundled lexicon, HTML document builders and a few
realistic page bodies.
"""

import pytest

from services.extractor.dom import Document
from services.extractor.lexicon import get_default_lexicon

from fakes import ARTICLE_PARAGRAPHS


@pytest.fixture
def lexicon():
    """The bundled lexicon (configs/lexicon.yaml)."""
    return get_default_lexicon()


@pytest.fixture
def make_document():
    """Factory: wrap an HTML body fragment in a full page and parse it."""

    def _make(body: str, title: str = "", url: str = "https://example.com/post", head: str = "") -> Document:
        html = (
            "<html><head>"
            f"<title>{title}</title>{head}"
            "</head><body>"
            f"{body}"
            "</body></html>"
        )
        return Document.from_html(html, url=url)

    return _make


@pytest.fixture
def article_html():
    """A typical blog page: chrome around one article."""
    paragraphs = "".join(f"<p>{p}</p>" for p in ARTICLE_PARAGRAPHS)
    return (
        "<header><nav><a href='/'>Home</a><a href='/blog'>Blog</a></nav></header>"
        "<div class='sidebar'><p>Short side note.</p></div>"
        "<article>"
        "<h1>Log structured storage</h1>"
        "<h2>Write path</h2>"
        f"{paragraphs}"
        "<ul><li>Append only log</li><li>Background compaction</li><li>Sealed segments</li></ul>"
        "<pre>db = Store(path='/var/data')\ndb.put('k', 'v')</pre>"
        "</article>"
        "<footer><p>Copyright Example Corp, all rights reserved worldwide forever.</p></footer>"
    )


@pytest.fixture
def github_pr_html():
    """Pull request page: two files, +3/-1 and +0/-2."""
    return """
<div class="gh-header-show">
  <h1><bdi class="js-issue-title">Add retry support</bdi></h1>
</div>
<div class="gh-header-meta">
  <a class="author">octocat</a> wants to merge into
  <span class="commit-ref head-ref">octocat:feature/retries</span> from
  <span class="commit-ref base-ref">octo:main</span>
</div>
<div class="discussion-timeline">
  <div class="comment-body"><p>Adds retries to the HTTP client.</p></div>
</div>
<div id="files_bucket">
  <div class="file" data-path="src/retry.ts">
    <div class="file-info"><a title="src/retry.ts">src/retry.ts</a></div>
    <table>
      <tr><td class="blob-code blob-code-addition"><span class="blob-code-inner">maxRetries: 5,</span></td></tr>
      <tr><td class="blob-code blob-code-addition"><span class="blob-code-inner">"backoffMs": 200,</span></td></tr>
      <tr><td class="blob-code blob-code-addition"><span class="blob-code-inner">export const DEFAULT_TIMEOUT = 30;</span></td></tr>
      <tr><td class="blob-code blob-code-deletion"><span class="blob-code-inner">retries: 1,</span></td></tr>
    </table>
  </div>
  <div class="file" data-path="app/client.py">
    <div class="file-info"></div>
    <table>
      <tr><td class="blob-code blob-code-deletion"><span class="blob-code-inner">self.timeout = 10</span></td></tr>
      <tr><td class="blob-code blob-code-deletion"><span class="blob-code-inner">self.retries = 0</span></td></tr>
    </table>
  </div>
</div>
"""


@pytest.fixture
def gitlab_mr_html():
    """Merge request page: one file, +2/-1."""
    return """
<div class="merge-request">
  <h1 class="title" data-testid="title-content">Fix cache eviction</h1>
  <div class="detail-page-description"><div class="description"><p>Evict by timestamp.</p></div></div>
  <a class="author-link"><span class="author">Jane</span></a>
  <span class="ref-name">feature/evict</span> into <span class="ref-name">main</span>
</div>
<div id="notes"><p>Looks good to me.</p></div>
<div id="diffs">
  <div class="diff-file" data-path="lib/cache.rb">
    <div class="file-title-name">lib/cache.rb</div>
    <table>
      <tr><td class="line_content new">MAX_ENTRIES = 25</td></tr>
      <tr><td class="line_content new">@ttl = 60</td></tr>
      <tr><td class="line_content old">MAX = 10</td></tr>
    </table>
  </div>
</div>
"""
