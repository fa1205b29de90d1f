# services/llm/summarizer.py
"""
LLM‑driven summarization of a ``RawPayload``.

Picks the engine (explicit request → configured default → whichever key is
set → ChatGPT), renders the prompt with the configured instruction templates
and calls the matching provider client.
"""

from typing import Optional, Tuple

import httpx
from loguru import logger

from core.config import Engine, Settings, get_settings
from core.exceptions import MissingAPIKeyError
from models.payload import RawPayload

from .clients import BaseLLMClient, GeminiClient, OpenAIClient
from .prompts import build_prompt


def resolve_engine(requested: Optional[Engine], settings: Settings) -> Engine:
    if requested is not None:
        return Engine(requested)
    if settings.DEFAULT_ENGINE is not None:
        return settings.DEFAULT_ENGINE
    if settings.OPENAI_API_KEY:
        return Engine.CHATGPT
    if settings.GEMINI_API_KEY:
        return Engine.GEMINI
    return Engine.CHATGPT


class LLMSummarizer:
    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self._transport = transport

    def client_for(self, engine: Engine) -> BaseLLMClient:
        """Provider client for *engine*; raises ``MissingAPIKeyError`` without a key."""
        s = self.settings
        if engine == Engine.GEMINI:
            if not s.GEMINI_API_KEY:
                raise MissingAPIKeyError("Gemini")
            return GeminiClient(s.GEMINI_API_KEY, s.GEMINI_MODEL, s.LLM_TIMEOUT, self._transport)
        if not s.OPENAI_API_KEY:
            raise MissingAPIKeyError("OpenAI")
        return OpenAIClient(s.OPENAI_API_KEY, s.OPENAI_MODEL, s.LLM_TIMEOUT, self._transport)

    async def summarize(
        self,
        raw: RawPayload,
        max_chars: Optional[int] = None,
        engine: Optional[Engine] = None,
    ) -> Tuple[str, str]:
        """Return ``(summary, provider)`` where provider is ``"openai"`` or ``"gemini"``."""
        use_engine = resolve_engine(engine, self.settings)
        client = self.client_for(use_engine)
        prompt = build_prompt(
            raw,
            max_chars,
            pr_instructions=self.settings.PR_INSTRUCTIONS,
            page_instructions=self.settings.PAGE_INSTRUCTIONS,
        )
        logger.info(f"Summarizing {raw.url or '<document>'} with {client.provider} ({len(prompt)} prompt chars)")
        summary = await client.complete(prompt)
        provider = "gemini" if use_engine == Engine.GEMINI else "openai"
        return summary, provider
