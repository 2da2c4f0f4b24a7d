# healthguardian/services/gemini_client.py
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from healthguardian.config.logger import get_logger
from healthguardian.config.settings import AIServiceConfig

logger = get_logger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.7,
    "topP": 0.95,
    "topK": 40,
    "maxOutputTokens": 2048,
}


class GeminiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeminiRateLimitError(GeminiError):
    """HTTP 429 from the service; the only failure worth retrying."""


class GeminiClient:
    """Thin client for the Gemini generateContent API.

    One call is one attempt: retry policy lives with the caller.
    """

    def __init__(
        self,
        config: AIServiceConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.base_url = config.endpoint.rstrip("/")
        self.model = config.model
        # Single AsyncClient shared by every call; closed by aclose().
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=config.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def _payload(self, system_prompt: str, conversation_text: str) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": conversation_text}]}],
            "generationConfig": {**GENERATION_CONFIG, "temperature": self.config.temperature},
        }

    async def generate(self, system_prompt: str, conversation_text: str) -> str:
        """
        Send one generateContent request and return the reply text.
        Raises GeminiRateLimitError on 429 and GeminiError on any other failure.
        """
        if not self.config.api_key:
            raise GeminiError("GEMINI_API_KEY is not configured")

        try:
            res = await self._client.post(
                f"/models/{self.model}:generateContent",
                params={"key": self.config.api_key},
                json=self._payload(system_prompt, conversation_text),
            )
        except httpx.TimeoutException as e:
            raise GeminiError(f"Gemini request timed out after {self.config.timeout}s") from e
        except httpx.HTTPError as e:
            raise GeminiError(f"Gemini transport error: {e.__class__.__name__}") from e

        if res.status_code == 429:
            raise GeminiRateLimitError("Gemini rate limit exceeded", status_code=429)
        if res.status_code >= 400:
            raise GeminiError(f"Gemini HTTP {res.status_code}: {res.text[:200]}", status_code=res.status_code)

        try:
            data = res.json()
        except ValueError as e:
            raise GeminiError("Gemini returned a non-JSON body") from e

        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            raise GeminiError(f"Empty candidates: {str(data)[:200]}")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = parts[0].get("text") if parts else None
        if not isinstance(text, str) or not text.strip():
            raise GeminiError("Gemini reply has no text")
        return text

    async def ping(self) -> str:
        """Probe the service: "healthy", "rate_limited" or "error"."""
        try:
            await self.generate("Reply with the single word OK.", "ping")
        except GeminiRateLimitError:
            return "rate_limited"
        except GeminiError as e:
            logger.warning("Gemini health check failed: %s", e)
            return "error"
        return "healthy"
