# services/pr/detector.py
"""
Pull/merge‑request detection from the URL shape alone.

* GitHub pull request: ``/{owner}/{repo}/pull/{digits}`` – trailing tabs such
  as ``/files`` or ``/commits`` are still the same pull request.
* GitLab merge request: a ``merge_requests`` segment (usually preceded by
  ``-``) followed by a numeric id, e.g. ``/group/project/-/merge_requests/7``.
"""

from typing import List, Optional
from urllib.parse import urlparse

from models.pull_request import PRContext

PULL_SEGMENT = "pull"
MR_SEGMENT = "merge_requests"
MR_SEPARATOR = "-"


def path_segments(location: Optional[str]) -> List[str]:
    """Non‑empty path segments of a full URL or a bare path."""
    if not location:
        return []
    path = urlparse(location).path if "://" in location else location.split("?", 1)[0].split("#", 1)[0]
    return [part for part in path.split("/") if part]


def is_github_pr_path(location: Optional[str]) -> bool:
    parts = path_segments(location)
    return len(parts) >= 4 and parts[2] == PULL_SEGMENT and parts[3].isdigit() and parts[3].isascii()


def is_gitlab_mr_path(location: Optional[str]) -> bool:
    parts = path_segments(location)
    if MR_SEGMENT not in parts:
        return False
    id_index = parts.index(MR_SEGMENT) + 1
    return id_index < len(parts) and parts[id_index].isdigit() and parts[id_index].isascii()


def repo_path(location: Optional[str]) -> str:
    """``/owner/repo`` for GitHub, ``/group/…/project`` for GitLab merge requests."""
    parts = path_segments(location)
    if MR_SEGMENT in parts:
        end = parts.index(MR_SEGMENT)
        if end > 0 and parts[end - 1] == MR_SEPARATOR:
            end -= 1
        parts = parts[:end]
    else:
        parts = parts[:2]
    return "/" + "/".join(parts) if parts else ""


def detect_pr_context(location: Optional[str]) -> PRContext:
    return PRContext(is_pr=is_github_pr_path(location), is_mr=is_gitlab_mr_path(location))
