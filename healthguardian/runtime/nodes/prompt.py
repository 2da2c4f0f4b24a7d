# healthguardian/runtime/nodes/prompt.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from healthguardian.engine.context import Prompt, build_prompt


class PromptBuildNode(AsyncNode):
    """Render the system instruction, recent history and patient context."""

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "query": shared.get("query") or "",
            "profile": shared.get("profile"),
            "metrics": shared.get("metrics"),
            "symptoms": shared.get("symptoms") or [],
            "reports": shared.get("reports") or [],
            "history": shared.get("history") or [],
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Prompt:
        return build_prompt(**prep)

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Prompt) -> str:
        shared["prompt"] = exec_res
        return "ok"
