# healthguardian/runtime/assistant.py
"""AI orchestrator: one Gemini conversation per call, local answer on failure."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Sequence

from healthguardian.config.logger import get_logger
from healthguardian.config.settings import AIServiceConfig
from healthguardian.runtime.flow import make_assistant_flow, make_fallback_flow
from healthguardian.schemas.chat import ChatResponse, Message
from healthguardian.schemas.health import HealthMetrics, HealthProfile, MedicalReport, Symptom
from healthguardian.services.gemini_client import GeminiClient

logger = get_logger(__name__)


class HealthAssistant:
    """Answers health questions; ``respond`` never raises.

    Holds no per-conversation state, so one instance can serve concurrent
    sessions. Owns its GeminiClient unless one is injected.
    """

    def __init__(self, config: AIServiceConfig, client: Any = None, **gemini_kwargs: Any) -> None:
        self.config = config
        self._owns_client = client is None
        self.client = client if client is not None else GeminiClient(config)
        self._gemini_kwargs = gemini_kwargs

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HealthAssistant":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _shared(
        self,
        query: str,
        profile: Optional[HealthProfile],
        metrics: Optional[HealthMetrics],
        symptoms: Optional[Sequence[Symptom]],
        reports: Optional[Sequence[MedicalReport]],
        history: Optional[Sequence[Message]],
    ) -> Dict[str, Any]:
        return {
            "query": query or "",
            "profile": profile,
            "metrics": metrics,
            "symptoms": list(symptoms or []),
            "reports": list(reports or []),
            "history": list(history or []),
            "client": self.client,
            "config": self.config,
        }

    async def respond(
        self,
        query: str,
        profile: Optional[HealthProfile] = None,
        metrics: Optional[HealthMetrics] = None,
        symptoms: Optional[Sequence[Symptom]] = None,
        reports: Optional[Sequence[MedicalReport]] = None,
        history: Optional[Sequence[Message]] = None,
    ) -> ChatResponse:
        shared = self._shared(query, profile, metrics, symptoms, reports, history)
        try:
            await asyncio.wait_for(
                make_assistant_flow(**self._gemini_kwargs).run_async(shared),
                timeout=self.config.total_timeout,
            )
            if shared.get("degraded"):
                logger.info("answered from local rules: %s", shared.get("ai_error"))
            return shared["response"]
        except asyncio.TimeoutError:
            logger.warning("AI path exceeded %ss; using local answer", self.config.total_timeout)
        except Exception:
            logger.exception("AI path failed unexpectedly; using local answer")

        # fresh state: the abandoned run may have left partial results behind
        fallback = self._shared(query, profile, metrics, symptoms, reports, history)
        await make_fallback_flow().run_async(fallback)
        return fallback["response"]
