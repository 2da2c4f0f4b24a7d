# healthguardian/runtime/nodes/reply_parse.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from healthguardian.engine.parser import parse
from healthguardian.schemas.chat import AssessmentResult


class ReplyParseNode(AsyncNode):
    """Turn the raw AI reply into an AssessmentResult.
    - prep_async: raw reply + the query (picks the follow-up bank)
    - exec_async: pure parse, never raises
    - post_async: commit and route
    """

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "raw_reply": str(shared.get("raw_reply") or ""),
            "query": shared.get("query") or "",
        }

    async def exec_async(self, prep: Dict[str, Any]) -> AssessmentResult:
        return parse(prep["raw_reply"], prep["query"])

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: AssessmentResult) -> str:
        shared["assessment"] = exec_res
        return "ok"
