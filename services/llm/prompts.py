# services/llm/prompts.py
"""Prompt text sent to the external summarization models."""

from typing import Optional

from core.config import DEFAULT_PAGE_INSTRUCTIONS, DEFAULT_PR_INSTRUCTIONS
from models.payload import RawPayload

SYSTEM_PROMPT = "You are a precise summarizer for LLM context preparation."

PR_BODY_LIMIT = 240_000
PAGE_BODY_LIMIT = 120_000

# Target length clamps: (min, max)
PR_TARGET_RANGE = (600, 6000)
PAGE_TARGET_RANGE = (400, 5000)


def _clamp(value: int, bounds: tuple) -> int:
    low, high = bounds
    return max(low, min(high, value))


def build_prompt(
    raw: RawPayload,
    max_chars: Optional[int] = None,
    pr_instructions: Optional[str] = None,
    page_instructions: Optional[str] = None,
) -> str:
    """
    Render the user prompt for *raw*.

    PR/MR payloads get the replication‑oriented instructions and the PR region
    text (falling back to the whole page text); everything else gets the page
    brief instructions.  A positive *max_chars* adds a target length line.
    """
    title = raw.title or "(untitled)"
    bounded = max_chars is not None and max_chars > 0

    if raw.is_pr:
        body = (raw.pr_raw_text or raw.raw_text)[:PR_BODY_LIMIT]
        instructions = [pr_instructions or DEFAULT_PR_INSTRUCTIONS]
        if bounded:
            instructions.append(
                f"Target length: ~{_clamp(max_chars, PR_TARGET_RANGE)} characters. "
                "Use bullet points and terse phrasing."
            )
        return "\n".join(
            [
                f"PR Title: {title}",
                f"URL: {raw.url}",
                "",
                "\n".join(instructions),
                "",
                "RAW PR TEXT START",
                body,
                "RAW PR TEXT END",
            ]
        )

    body = raw.raw_text[:PAGE_BODY_LIMIT]
    instructions = [page_instructions or DEFAULT_PAGE_INSTRUCTIONS]
    if bounded:
        instructions.append(f"Target length: ~{_clamp(max_chars, PAGE_TARGET_RANGE)} characters.")
    return "\n".join(
        [
            f"Title: {title}",
            f"URL: {raw.url}",
            "",
            "\n".join(instructions),
            "",
            "RAW PAGE TEXT START",
            body,
            "RAW PAGE TEXT END",
        ]
    )
