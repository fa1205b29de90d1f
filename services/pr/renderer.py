# services/pr/renderer.py
"""Plain‑text brief of a ``PRSnapshot``, bounded by a character budget."""

from typing import List, Optional

from models.pull_request import PRSnapshot

DEFAULT_PR_MAX_CHARS = 2400
MIN_PR_CHARS = 800
MAX_PR_CHARS = 8000

MAX_LISTED_FILES = 60
MAX_LISTED_PROPERTIES = 80
MAX_FILE_EXCERPT = 1200
MAX_CODE_BLOCKS = 12
# Reserved for section titles and separators around the lists.
LAYOUT_OVERHEAD = 200
BLOCK_OVERHEAD = 10


def _header(pr: PRSnapshot) -> str:
    lines: List[Optional[str]] = [
        pr.title or "(PR)",
        pr.url,
        f"Author: {pr.author}" if pr.author else None,
        f"Branches: {pr.head_branch or '?'} -> {pr.base_branch or '?'}"
        if (pr.head_branch or pr.base_branch) else None,
        f"Files changed: {len(pr.files)}, +{pr.totals.add} -{pr.totals.delete}",
    ]
    return "\n".join(line for line in lines if line)


def _code_blocks(pr: PRSnapshot, budget: int) -> List[str]:
    blocks: List[str] = []
    for f in pr.files:
        if budget <= 0:
            break
        excerpt = "\n".join(f.added_lines)[: min(MAX_FILE_EXCERPT, budget)]
        if not excerpt.strip():
            continue
        blocks.append("\n".join([f"File: {f.path}", '"""', excerpt, '"""']))
        budget -= len(excerpt) + len(f.path) + BLOCK_OVERHEAD
        if len(blocks) >= MAX_CODE_BLOCKS:
            break
    return blocks


def render_pr_summary(pr: PRSnapshot, max_chars: Optional[int] = None) -> str:
    """
    Header, file list, mined properties and per‑file added‑code excerpts.

    The requested budget is clamped to ``[800, 8000]``; header and lists are
    always emitted and the remaining budget is spent on code excerpts.
    """
    max_chars = max(MIN_PR_CHARS, min(MAX_PR_CHARS, max_chars or DEFAULT_PR_MAX_CHARS))

    header = _header(pr)
    files_list = "\n".join(
        f"- {f.path} (+{f.additions}/-{f.deletions})" for f in pr.files[:MAX_LISTED_FILES]
    )
    props = "\n".join(f"- {p}" for p in pr.properties[:MAX_LISTED_PROPERTIES])

    budget = max_chars - (len(header) + len(files_list) + len(props) + LAYOUT_OVERHEAD)
    blocks = _code_blocks(pr, budget)

    sections = [
        header,
        "Files:",
        files_list,
        "\nProperties:" if pr.properties else "",
        props,
        "\nAdded code:" if blocks else "",
        "\n\n".join(blocks),
    ]
    return "\n".join(s for s in sections if s)
