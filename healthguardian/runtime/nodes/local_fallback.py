# healthguardian/runtime/nodes/local_fallback.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from healthguardian.engine.rules import local_respond
from healthguardian.schemas.chat import AssessmentResult


class LocalFallbackNode(AsyncNode):
    """Answer from the offline rule engine when the AI path is unavailable."""

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "query": shared.get("query") or "",
            "profile": shared.get("profile"),
            "metrics": shared.get("metrics"),
            "symptoms": shared.get("symptoms") or [],
            "reports": shared.get("reports") or [],
        }

    async def exec_async(self, prep: Dict[str, Any]) -> AssessmentResult:
        return local_respond(**prep)

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: AssessmentResult) -> str:
        shared["assessment"] = exec_res
        shared["degraded"] = True
        return "ok"
