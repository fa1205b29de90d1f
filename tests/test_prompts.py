# tests/test_prompts.py
from core.config import DEFAULT_PAGE_INSTRUCTIONS, DEFAULT_PR_INSTRUCTIONS
from models.payload import RawPayload
from models.pull_request import PayloadHint
from services.llm.prompts import PAGE_BODY_LIMIT, build_prompt


def test_page_prompt_layout():
    raw = RawPayload(title="Storage", url="https://example.com/s", raw_text="body text")
    prompt = build_prompt(raw)
    assert prompt == "\n".join(
        [
            "Title: Storage",
            "URL: https://example.com/s",
            "",
            DEFAULT_PAGE_INSTRUCTIONS,
            "",
            "RAW PAGE TEXT START",
            "body text",
            "RAW PAGE TEXT END",
        ]
    )


def test_pr_prompt_prefers_region_text():
    raw = RawPayload(url="u", hint=PayloadHint.PR, pr_raw_text="diff regions", raw_text="whole page")
    prompt = build_prompt(raw)
    assert prompt.startswith("PR Title: (untitled)\nURL: u\n")
    assert DEFAULT_PR_INSTRUCTIONS in prompt
    assert "RAW PR TEXT START\ndiff regions\nRAW PR TEXT END" in prompt
    assert "whole page" not in prompt


def test_pr_prompt_falls_back_to_page_text():
    raw = RawPayload(url="u", hint=PayloadHint.PR, raw_text="whole page")
    assert "RAW PR TEXT START\nwhole page\n" in build_prompt(raw)


def test_target_length_is_clamped():
    page = RawPayload(url="u", raw_text="t")
    pr = RawPayload(url="u", hint=PayloadHint.PR, raw_text="t")
    assert "Target length: ~400 characters." in build_prompt(page, 10)
    assert "Target length: ~5000 characters." in build_prompt(page, 99_999)
    assert "Target length: ~600 characters." in build_prompt(pr, 10)
    assert "Target length: ~6000 characters." in build_prompt(pr, 99_999)
    assert "Target length" not in build_prompt(page, None)
    assert "Target length" not in build_prompt(page, 0)


def test_custom_instructions_and_body_limit():
    raw = RawPayload(url="u", raw_text="x" * (PAGE_BODY_LIMIT + 50))
    prompt = build_prompt(raw, page_instructions="Be brief.")
    assert "\nBe brief.\n" in prompt
    assert DEFAULT_PAGE_INSTRUCTIONS not in prompt
    assert "x" * PAGE_BODY_LIMIT + "\nRAW PAGE TEXT END" in prompt
    assert "x" * (PAGE_BODY_LIMIT + 1) not in prompt
