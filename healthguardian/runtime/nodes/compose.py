# healthguardian/runtime/nodes/compose.py
from __future__ import annotations

from typing import Any, Dict, List

from pocketflow import AsyncNode

from healthguardian.engine.quick_replies import risk_quick_replies
from healthguardian.engine.risk import EMERGENCY_INSTRUCTIONS
from healthguardian.schemas.chat import AssessmentResult, ChatResponse, Message, MessageKind


def compose_messages(assessment: AssessmentResult) -> List[Message]:
    """Answer, recommendations and a quick-reply prompt, in display order."""
    if assessment.is_emergency:
        main = Message(
            text=f"{assessment.answer}\n\n{EMERGENCY_INSTRUCTIONS}",
            kind=MessageKind.EMERGENCY,
        )
    else:
        main = Message(text=assessment.answer)
    messages = [main]

    if assessment.recommendations:
        bullets = "\n".join(f"• {r}" for r in assessment.recommendations)
        messages.append(Message(text=f"**Recommendations:**\n{bullets}"))

    messages.append(
        Message(
            text="Would you like to:",
            kind=MessageKind.QUICK_REPLIES,
            quick_replies=risk_quick_replies(assessment.risk_level, assessment.follow_up_questions),
        )
    )
    return messages


class MessageComposeNode(AsyncNode):
    async def prep_async(self, shared: Dict[str, Any]) -> AssessmentResult:
        return shared["assessment"]

    async def exec_async(self, prep: AssessmentResult) -> ChatResponse:
        return ChatResponse(
            messages=compose_messages(prep),
            is_emergency=prep.is_emergency,
            assessment=prep,
        )

    async def post_async(self, shared: Dict[str, Any], prep: AssessmentResult, exec_res: ChatResponse) -> str:
        shared["response"] = exec_res
        return "ok"
