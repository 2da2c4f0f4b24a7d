# healthguardian/runtime/nodes/gemini.py
from __future__ import annotations

import asyncio
import random
from typing import Any, Awaitable, Callable, Dict, Optional

from pocketflow import AsyncNode

from healthguardian.config.logger import get_logger
from healthguardian.config.settings import AIServiceConfig
from healthguardian.services.gemini_client import GeminiRateLimitError

logger = get_logger(__name__)


def backoff_delay(
    config: AIServiceConfig,
    attempt: int,
    rng: Callable[[], float] = random.random,
) -> float:
    """Seconds to wait after the rate-limited ``attempt`` (0-based)."""
    return config.backoff_base * (2 ** attempt) + rng() * config.backoff_jitter


class GeminiChatNode(AsyncNode):
    """Call Gemini, retrying only rate-limited attempts.

    Any other failure, or a rate limit on the last attempt, ends in
    ``exec_fallback_async`` and routes to "degraded".
    """

    def __init__(
        self,
        *,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        rng: Callable[[], float] = random.random,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.sleep = sleep or asyncio.sleep
        self.rng = rng

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "client": shared["client"],
            "config": shared["config"],
            "prompt": shared["prompt"],
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Dict[str, Any]:
        client = prep["client"]
        config: AIServiceConfig = prep["config"]
        prompt = prep["prompt"]

        attempts = config.max_retries + 1
        for attempt in range(attempts):
            try:
                reply = await asyncio.wait_for(
                    client.generate(prompt.system_prompt, prompt.conversation_text),
                    timeout=config.timeout,
                )
            except GeminiRateLimitError:
                if attempt == attempts - 1:
                    raise
                delay = backoff_delay(config, attempt, self.rng)
                logger.warning(
                    "Gemini rate limited (attempt %s/%s); retrying in %.2fs", attempt + 1, attempts, delay
                )
                await self.sleep(delay)
                continue
            logger.info("Gemini replied on attempt %s/%s", attempt + 1, attempts)
            return {"reply": reply, "attempts": attempt + 1}
        raise RuntimeError("no Gemini attempt was made")

    async def exec_fallback_async(self, prep: Dict[str, Any], exc: Exception) -> Dict[str, Any]:
        logger.warning("Gemini unavailable, degrading to local answer: %s", exc.__class__.__name__)
        return {"reply": None, "degraded": True, "error": str(exc)}

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Dict[str, Any]) -> str:
        if exec_res.get("degraded"):
            shared["degraded"] = True
            shared["ai_error"] = exec_res["error"]
            return "degraded"
        shared["raw_reply"] = exec_res["reply"]
        shared["attempts"] = exec_res["attempts"]
        return "ok"
