# healthguardian/runtime/session.py
"""Conversation session state as a pure reducer, plus the per-turn controller."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Tuple, Union

from healthguardian.config.logger import get_logger
from healthguardian.runtime.flow import make_turn_flow
from healthguardian.schemas.chat import ChatResponse, Message
from healthguardian.schemas.health import PatientContext

logger = get_logger(__name__)


class SessionStatus(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    EMERGENCY_ACTIVE = "emergency_active"


@dataclass(frozen=True)
class SessionState:
    status: SessionStatus = SessionStatus.IDLE
    messages: Tuple[Message, ...] = field(default_factory=tuple)
    emergency_active: bool = False


@dataclass(frozen=True)
class UserTurn:
    message: Message


@dataclass(frozen=True)
class AssistantResult:
    messages: Tuple[Message, ...]
    is_emergency: bool = False


@dataclass(frozen=True)
class Reset:
    pass


SessionEvent = Union[UserTurn, AssistantResult, Reset]


def reduce(state: SessionState, event: SessionEvent) -> SessionState:
    if isinstance(event, Reset):
        return SessionState()
    if isinstance(event, UserTurn):
        return replace(
            state,
            status=SessionStatus.AWAITING_RESPONSE,
            messages=state.messages + (event.message,),
        )
    if isinstance(event, AssistantResult):
        # emergency stays on until a non-emergency result arrives
        return SessionState(
            status=SessionStatus.EMERGENCY_ACTIVE if event.is_emergency else SessionStatus.IDLE,
            messages=state.messages + tuple(event.messages),
            emergency_active=event.is_emergency,
        )
    raise TypeError(f"unknown session event: {event!r}")


class SessionController:
    """Runs one user turn through the turn flow and folds the result into state."""

    def __init__(self, assistant: Any) -> None:
        self.assistant = assistant

    async def handle_turn(
        self,
        state: SessionState,
        text: str,
        patient: PatientContext | None = None,
    ) -> Tuple[SessionState, ChatResponse]:
        if not (text or "").strip():
            return state, ChatResponse()

        history = list(state.messages)
        state = reduce(state, UserTurn(Message(text=text.strip(), is_from_assistant=False)))

        shared: Dict[str, Any] = {
            "text": text.strip(),
            "patient": patient or PatientContext(),
            "history": history,
            "assistant": self.assistant,
        }
        route = await make_turn_flow().run_async(shared)
        logger.debug("turn handled via %s", shared.get("route", route))

        response: ChatResponse = shared["response"]
        state = reduce(state, AssistantResult(tuple(response.messages), response.is_emergency))
        return state, response
