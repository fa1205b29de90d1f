# services/pr/extractor.py
"""
Builds a ``PRSnapshot`` from a GitHub pull‑request or GitLab merge‑request
page.

Metadata comes from per‑field selector fallbacks (first match wins), files
from the diff markup: one ``PRFile`` per file node carrying its added and
removed line texts in diff order.  Pages without diff markup produce an
empty ``files`` list – the caller treats that as low confidence.
"""

import re
from typing import List, Optional, Tuple

from loguru import logger

from models.pull_request import PayloadHint, PRFile, PRSnapshot
from services.extractor.dom import Document, DocumentNode
from services.extractor.lexicon import Lexicon, PlatformSelectors, get_default_lexicon
from services.extractor.text import clean_text

from .detector import detect_pr_context, repo_path
from .properties import PropertyMiner

# "octocat:feature-branch" → "feature-branch"
_BRANCH_OWNER_RE = re.compile(r"^\s*\w+:\s*")


def first_match(root: DocumentNode, selectors: List[str]) -> Optional[DocumentNode]:
    """First node matched by the first selector that matches anything."""
    for selector in selectors:
        node = root.select_one(selector)
        if node is not None:
            return node
    return None


def _first_text(root: DocumentNode, selectors: List[str]) -> str:
    node = first_match(root, selectors)
    return clean_text(node.text()) if node is not None else ""


class PullRequestExtractor:
    def __init__(self, lexicon: Optional[Lexicon] = None):
        self.lexicon = lexicon or get_default_lexicon()
        self.miner = PropertyMiner(self.lexicon)

    # ------------------------------------------------------------------
    # Pieces
    # ------------------------------------------------------------------
    @staticmethod
    def branches(root: DocumentNode, selectors: PlatformSelectors) -> Tuple[str, str]:
        """``(head, base)`` from the first two branch reference nodes."""
        refs = root.select(selectors.branches)
        if len(refs) < 2:
            return "", ""
        head = _BRANCH_OWNER_RE.sub("", clean_text(refs[0].text()), count=1)
        base = _BRANCH_OWNER_RE.sub("", clean_text(refs[1].text()), count=1)
        return head, base

    @staticmethod
    def file_path(file_node: DocumentNode, selectors: PlatformSelectors) -> str:
        path = ""
        info = file_node.select_one(selectors.file_info)
        if info is not None:
            path = clean_text(info.text()) or (info.attr("title") or "")
        if not path:
            path = file_node.attr(selectors.file_path_attribute) or ""
        return path

    def files(self, root: DocumentNode, selectors: PlatformSelectors) -> List[PRFile]:
        result: List[PRFile] = []
        for file_node in root.select(selectors.file):
            path = self.file_path(file_node, selectors)
            if not path:
                continue
            added = [clean_text(n.text()) for n in file_node.select(selectors.added_line)]
            removed = [clean_text(n.text()) for n in file_node.select(selectors.removed_line)]
            result.append(PRFile(path=path, added_lines=added, removed_lines=removed))
        return result

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------
    def extract(self, document: Document, location: Optional[str] = None) -> PRSnapshot:
        location = location or document.url
        context = detect_pr_context(location)
        selectors = self.lexicon.platform(context.platform)
        root = document.root

        head, base = self.branches(root, selectors)
        files = self.files(root, selectors)
        snapshot = PRSnapshot.build(
            files,
            self.miner.mine(files),
            title=_first_text(root, selectors.title),
            description=_first_text(root, selectors.description),
            author=_first_text(root, selectors.author),
            head_branch=head,
            base_branch=base,
            repo_path=repo_path(location),
            url=document.url or location or "",
        )

        if snapshot.is_low_confidence:
            logger.warning(f"No diff markup found on {snapshot.url or '<document>'} – PR snapshot has no files")
        else:
            logger.debug(
                f"PR snapshot: {len(files)} files, +{snapshot.totals.add} -{snapshot.totals.delete}, "
                f"{len(snapshot.properties)} properties"
            )
        return snapshot


def extract_pr(document: Document, location: Optional[str] = None, lexicon: Optional[Lexicon] = None) -> PRSnapshot:
    return PullRequestExtractor(lexicon).extract(document, location)


def maybe_extract_pr(document: Document, location: Optional[str] = None, lexicon: Optional[Lexicon] = None) -> Optional[PRSnapshot]:
    """Snapshot when *location* looks like a PR/MR page, ``None`` otherwise."""
    if detect_pr_context(location or document.url).hint != PayloadHint.PR:
        return None
    return extract_pr(document, location, lexicon)
