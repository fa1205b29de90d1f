# models/summary_request.py
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from core.config import Engine


# ----------------------------------------------------------------------
#  Page request – body of every /api/v1 extraction endpoint
# ----------------------------------------------------------------------
class PageRequest(BaseModel):
    """
    A page to work on.

    ``url`` is always required (it drives PR/MR detection and is echoed in
    every summary).  When ``html`` is given it is used as‑is; otherwise the
    service downloads the page.
    """

    url: str = Field(..., min_length=1, description="Page URL (or path) the HTML belongs to")
    html: Optional[str] = Field(
        default=None,
        description="Rendered page markup; fetched from ``url`` when omitted",
    )
    max_chars: Optional[int] = Field(
        default=None,
        ge=1,
        description="Character budget; the service default applies when omitted",
    )

    @field_validator("url")
    @classmethod
    def _strip_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("url must not be blank")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "https://github.com/octo/widgets/pull/42/files",
                "max_chars": 2400,
            }
        }
    }


class LLMSummaryRequest(PageRequest):
    """Page request for the LLM path; ``engine`` overrides the configured default."""

    engine: Optional[Engine] = Field(default=None, description="chatgpt or gemini")
