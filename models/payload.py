# models/payload.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .pull_request import PayloadHint

TRUNCATION_MARKER = "\n…[truncated]"

PR_RAW_TEXT_CAP = 220_000
RAW_TEXT_CAP = 120_000
RAW_HTML_CAP = 100_000


class RawPayload(BaseModel):
    """
    Bounded raw material for an external LLM.

    Each text field is capped independently (the cap includes the truncation
    marker); ``hint`` tells the prompt builder which instructions to use.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str = ""
    hint: PayloadHint = PayloadHint.GENERIC
    pr_raw_text: str = ""
    raw_text: str = ""
    raw_html: str = ""

    @property
    def is_pr(self) -> bool:
        return self.hint == PayloadHint.PR
