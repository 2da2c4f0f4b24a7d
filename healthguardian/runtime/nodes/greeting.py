# healthguardian/runtime/nodes/greeting.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from healthguardian.engine.canned import assessment_overview_text, greeting_text
from healthguardian.engine.quick_replies import ASSESSMENT_INTENTS, GREETING_INTENTS, labels
from healthguardian.schemas.chat import ChatResponse, Message, MessageKind
from healthguardian.schemas.health import PatientContext


class GreetingNode(AsyncNode):
    """Personalised greeting built from the patient's own data; no AI call."""

    async def prep_async(self, shared: Dict[str, Any]) -> PatientContext:
        return shared.get("patient") or PatientContext()

    async def exec_async(self, prep: PatientContext) -> ChatResponse:
        msg = Message(
            text=greeting_text(prep),
            kind=MessageKind.QUICK_REPLIES,
            quick_replies=labels(GREETING_INTENTS),
        )
        return ChatResponse(messages=[msg])

    async def post_async(self, shared: Dict[str, Any], prep: PatientContext, exec_res: ChatResponse) -> str:
        shared["response"] = exec_res
        return "ok"


class AssessmentOverviewNode(AsyncNode):
    """Health overview shown when the user starts an assessment."""

    async def prep_async(self, shared: Dict[str, Any]) -> PatientContext:
        return shared.get("patient") or PatientContext()

    async def exec_async(self, prep: PatientContext) -> ChatResponse:
        msg = Message(
            text=assessment_overview_text(prep),
            kind=MessageKind.QUICK_REPLIES,
            quick_replies=labels(ASSESSMENT_INTENTS),
        )
        return ChatResponse(messages=[msg])

    async def post_async(self, shared: Dict[str, Any], prep: PatientContext, exec_res: ChatResponse) -> str:
        shared["response"] = exec_res
        return "ok"
