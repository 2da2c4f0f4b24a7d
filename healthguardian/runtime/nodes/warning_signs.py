# healthguardian/runtime/nodes/warning_signs.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from healthguardian.engine.quick_replies import QuickReplyIntent, labels
from healthguardian.engine.risk import EMERGENCY_INSTRUCTIONS
from healthguardian.schemas.chat import ChatResponse, Message, MessageKind


class WarningSignsNode(AsyncNode):
    """Triggered by the "View Warning Signs" quick reply.
    Exec: produce the emergency instructions (pure)
    Post: commit to shared + route
    """

    def __init__(self, message: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.message = message or EMERGENCY_INSTRUCTIONS

    async def prep_async(self, shared: Dict[str, Any]) -> str:
        return self.message

    async def exec_async(self, prep: str) -> ChatResponse:
        return ChatResponse(
            is_emergency=True,
            messages=[
                Message(text=prep, kind=MessageKind.EMERGENCY),
                Message(
                    text="Would you like to:",
                    kind=MessageKind.QUICK_REPLIES,
                    quick_replies=labels([QuickReplyIntent.CALL_EMERGENCY, QuickReplyIntent.CONTACT_DOCTOR]),
                ),
            ]
        )

    async def post_async(self, shared: Dict[str, Any], prep: str, exec_res: ChatResponse) -> str:
        shared["response"] = exec_res
        # Always finish with "ok" so the flow can end cleanly
        return "ok"
