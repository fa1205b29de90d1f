# core/exceptions.py
"""
Tagged failures raised by the collaborators around the extraction core
(settings, LLM providers, page fetching).

The extraction/summarization functions themselves never raise for sparse or
malformed documents – they degrade to empty values.  Everything in this
module is reported upward as ``{"ok": false, "error": {...}}`` by the API.
"""

from typing import Any, Dict, Optional


class PRSumException(Exception):
    """Base class – carries a machine‑readable ``code`` and an HTTP status."""

    code: str = "PRSUM_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the error envelope used by every API response."""
        error: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "status": self.status_code,
        }
        if self.details:
            error["details"] = self.details
        return {"ok": False, "error": error}


class ConfigError(PRSumException):
    """The lexicon or settings could not be loaded/validated."""

    code = "CONFIG_ERROR"
    status_code = 500


class MissingAPIKeyError(PRSumException):
    """An LLM engine was selected but no key is configured for it."""

    code = "MISSING_API_KEY"
    status_code = 400

    def __init__(self, provider: str):
        super().__init__(
            f"Missing {provider} API key. Set it in settings.",
            details={"provider": provider},
        )
        self.provider = provider


class LLMProviderError(PRSumException):
    """Non‑2xx answer (or transport failure) from a summarization provider."""

    code = "LLM_PROVIDER_ERROR"
    status_code = 502

    def __init__(self, provider: str, status: int, body: str = ""):
        message = f"{provider} API error {status}"
        if body:
            message = f"{message}: {body}"
        super().__init__(
            message,
            details={"provider": provider, "upstream_status": status},
        )
        self.provider = provider
        self.upstream_status = status


class FetchError(PRSumException):
    """The page could not be downloaded."""

    code = "FETCH_ERROR"
    status_code = 502


class RestrictedURLError(PRSumException):
    """Browser/system pages that no extractor is allowed to read."""

    code = "RESTRICTED_URL"
    status_code = 400

    def __init__(self, url: str):
        super().__init__(
            "This appears to be a browser/system page (e.g., chrome:// or Web Store), "
            "which cannot be accessed for content. Try summarizing a normal webpage.",
            details={"url": url},
        )
        self.url = url
