# models/pull_request.py
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ----------------------------------------------------------------------
#  Page classification – also used as the raw payload hint
# ----------------------------------------------------------------------
class PayloadHint(str, Enum):
    PR = "pr"
    GENERIC = "generic"


class PRContext(BaseModel):
    """Result of URL‑shape detection: GitHub pull request and/or GitLab merge request."""

    model_config = ConfigDict(frozen=True)

    is_pr: bool = False
    is_mr: bool = False

    @property
    def hint(self) -> PayloadHint:
        return PayloadHint.PR if (self.is_pr or self.is_mr) else PayloadHint.GENERIC

    @property
    def platform(self) -> str:
        """Selector set to use: GitLab only for pure merge‑request paths."""
        return "gitlab" if (self.is_mr and not self.is_pr) else "github"


# ----------------------------------------------------------------------
#  Diff data
# ----------------------------------------------------------------------
class PRFile(BaseModel):
    """One changed file.  Counts always equal the length of the line lists."""

    model_config = ConfigDict(frozen=True)

    path: str
    added_lines: List[str] = Field(default_factory=list)
    removed_lines: List[str] = Field(default_factory=list)

    @property
    def additions(self) -> int:
        return len(self.added_lines)

    @property
    def deletions(self) -> int:
        return len(self.removed_lines)

    def to_dict(self, max_added: Optional[int] = None, max_removed: Optional[int] = None) -> dict:
        return {
            "path": self.path,
            "additions": self.additions,
            "deletions": self.deletions,
            "added_lines": self.added_lines[:max_added],
            "removed_lines": self.removed_lines[:max_removed],
        }


class PRTotals(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    add: int = Field(default=0, ge=0)
    delete: int = Field(default=0, ge=0, alias="del")

    @classmethod
    def of(cls, files: Sequence[PRFile]) -> "PRTotals":
        return cls(
            add=sum(f.additions for f in files),
            delete=sum(f.deletions for f in files),
        )


class PRSnapshot(BaseModel):
    """
    Everything extracted from a pull/merge‑request page.

    ``totals`` must equal the per‑file sums; use ``PRSnapshot.build`` to have
    them computed.  An empty ``files`` list means "low confidence" (the URL
    looked like a PR but the page carried no diff markup), not an error.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    author: str = ""
    base_branch: str = ""
    head_branch: str = ""
    repo_path: str = ""
    url: str = ""
    files: List[PRFile] = Field(default_factory=list)
    totals: PRTotals = Field(default_factory=PRTotals)
    properties: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_totals(self) -> "PRSnapshot":
        expected = PRTotals.of(self.files)
        if (self.totals.add, self.totals.delete) != (expected.add, expected.delete):
            raise ValueError(
                f"totals {self.totals.add}/{self.totals.delete} do not match "
                f"file sums {expected.add}/{expected.delete}"
            )
        return self

    @classmethod
    def build(cls, files: Sequence[PRFile], properties: Sequence[str] = (), **fields) -> "PRSnapshot":
        return cls(
            files=list(files),
            totals=PRTotals.of(files),
            properties=sorted(set(properties)),
            **fields,
        )

    @property
    def is_low_confidence(self) -> bool:
        return not self.files

    def to_dict(
        self,
        max_files: Optional[int] = None,
        max_added: Optional[int] = None,
        max_removed: Optional[int] = None,
        max_properties: Optional[int] = None,
    ) -> dict:
        """Plain dict, optionally capped to keep API payloads manageable."""
        return {
            "title": self.title,
            "description": self.description,
            "author": self.author,
            "base_branch": self.base_branch,
            "head_branch": self.head_branch,
            "repo_path": self.repo_path,
            "url": self.url,
            "files": [f.to_dict(max_added, max_removed) for f in self.files[:max_files]],
            "totals": {"add": self.totals.add, "del": self.totals.delete},
            "properties": self.properties[:max_properties],
        }
