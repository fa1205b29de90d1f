# services/llm/clients.py
"""
Thin HTTP clients for the two summarization providers.

Both expose ``await client.complete(prompt) -> str``.  Transport failures are
retried with exponential back‑off; any non‑2xx answer is raised as
``LLMProviderError`` carrying the provider's status and body.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.exceptions import LLMProviderError

from .prompts import SYSTEM_PROMPT

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
TEMPERATURE = 0.2


class BaseLLMClient:
    provider = "LLM"

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _post(self, url: str, payload: Dict[str, Any], headers: Dict[str, str], params: Optional[Dict[str, str]] = None) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.post(url, json=payload, headers=headers, params=params)

    async def _request(self, url: str, payload: Dict[str, Any], headers: Dict[str, str], params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        try:
            response = await self._post(url, payload, headers, params)
        except httpx.TransportError as exc:
            logger.error(f"{self.provider} request failed: {exc}")
            raise LLMProviderError(self.provider, 0, str(exc)) from exc

        if response.status_code >= 400:
            logger.error(f"{self.provider} API error {response.status_code}")
            raise LLMProviderError(self.provider, response.status_code, response.text)
        try:
            return response.json()
        except ValueError as exc:
            raise LLMProviderError(self.provider, response.status_code, "response is not JSON") from exc

    async def complete(self, prompt: str) -> str:  # pragma: no cover – abstract
        raise NotImplementedError


class OpenAIClient(BaseLLMClient):
    provider = "OpenAI"

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": TEMPERATURE,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        data = await self._request(OPENAI_URL, payload, headers)
        choices = data.get("choices") or [{}]
        content = (choices[0].get("message") or {}).get("content") or ""
        return content.strip()


class GeminiClient(BaseLLMClient):
    provider = "Gemini"

    async def complete(self, prompt: str) -> str:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": TEMPERATURE},
        }
        url = GEMINI_URL.format(model=quote(self.model, safe=""))
        data = await self._request(url, payload, {}, params={"key": self.api_key})
        candidates = data.get("candidates") or [{}]
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts).strip()
