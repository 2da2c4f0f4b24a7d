# healthguardian/runtime/nodes/assistant.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from healthguardian.schemas.chat import ChatResponse
from healthguardian.schemas.health import PatientContext


class AssistantNode(AsyncNode):
    """Hand an ordinary turn to the HealthAssistant (AI with local fallback)."""

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        patient: PatientContext = shared.get("patient") or PatientContext()
        return {
            "assistant": shared["assistant"],
            "query": shared.get("text") or "",
            "patient": patient,
            "history": shared.get("history") or [],
        }

    async def exec_async(self, prep: Dict[str, Any]) -> ChatResponse:
        patient: PatientContext = prep["patient"]
        return await prep["assistant"].respond(
            prep["query"],
            profile=patient.profile,
            metrics=patient.metrics,
            symptoms=patient.symptoms,
            reports=patient.reports,
            history=prep["history"],
        )

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: ChatResponse) -> str:
        shared["response"] = exec_res
        return "ok"
