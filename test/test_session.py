# test/test_session.py
import pytest
from typing import Any, Dict, List

from healthguardian.engine.risk import EMERGENCY_INSTRUCTIONS
from healthguardian.runtime.session import (
    AssistantResult,
    Reset,
    SessionController,
    SessionState,
    SessionStatus,
    UserTurn,
    reduce,
)
from healthguardian.schemas.chat import ChatResponse, Message, MessageKind
from healthguardian.schemas.health import HealthMetrics, HealthProfile, PatientContext, Symptom


class FakeAssistant:
    def __init__(self, is_emergency: bool = False) -> None:
        self.is_emergency = is_emergency
        self.calls: List[Dict[str, Any]] = []

    async def respond(self, query, profile=None, metrics=None, symptoms=None, reports=None, history=None):
        self.calls.append({"query": query, "history": list(history or []), "metrics": metrics})
        return ChatResponse(messages=[Message(text=f"answer to {query}")], is_emergency=self.is_emergency)


def _msg(text: str, assistant: bool = True) -> Message:
    return Message(text=text, is_from_assistant=assistant)


# -----------------------------
# Reducer
# -----------------------------
def test_user_turn_awaits_response():
    state = reduce(SessionState(), UserTurn(_msg("hi", assistant=False)))
    assert state.status is SessionStatus.AWAITING_RESPONSE
    assert [m.text for m in state.messages] == ["hi"]


def test_emergency_is_sticky_until_non_emergency_result():
    state = reduce(SessionState(), AssistantResult((_msg("go to ER"),), is_emergency=True))
    assert state.status is SessionStatus.EMERGENCY_ACTIVE
    assert state.emergency_active is True

    state = reduce(state, UserTurn(_msg("ok", assistant=False)))
    assert state.emergency_active is True

    state = reduce(state, AssistantResult((_msg("glad you are safe"),), is_emergency=False))
    assert state.status is SessionStatus.IDLE
    assert state.emergency_active is False
    assert len(state.messages) == 3


def test_reset_clears_everything():
    state = reduce(SessionState(), AssistantResult((_msg("x"),), is_emergency=True))
    assert reduce(state, Reset()) == SessionState()


def test_reducer_does_not_mutate_input():
    state = SessionState()
    reduce(state, UserTurn(_msg("hello", assistant=False)))
    assert state.messages == ()


# -----------------------------
# Controller
# -----------------------------
@pytest.mark.asyncio
async def test_greeting_short_circuits_the_assistant():
    assistant = FakeAssistant()
    patient = PatientContext(
        profile=HealthProfile(name="Sam", conditions=["hypertension"]),
        metrics=HealthMetrics(blood_pressure_systolic=130, blood_pressure_diastolic=85, heart_rate=72),
        symptoms=[Symptom(type="Headache", severity=3)],
    )

    state, response = await SessionController(assistant).handle_turn(SessionState(), "Hello", patient)

    assert assistant.calls == []
    text = response.messages[0].text
    assert "130/85" in text
    assert text.startswith("Hello Sam!")
    assert "hypertension" in text
    assert "Headache" in text
    assert response.messages[0].kind is MessageKind.QUICK_REPLIES
    assert state.status is SessionStatus.IDLE
    assert [m.is_from_assistant for m in state.messages] == [False, True]


@pytest.mark.asyncio
async def test_ordinary_turn_goes_to_assistant_with_prior_history():
    assistant = FakeAssistant()
    controller = SessionController(assistant)

    state, _ = await controller.handle_turn(SessionState(), "What is diabetes?")
    state, response = await controller.handle_turn(state, "And cholesterol?")

    assert [c["query"] for c in assistant.calls] == ["What is diabetes?", "And cholesterol?"]
    # history excludes the current turn
    assert [m.text for m in assistant.calls[1]["history"]] == ["What is diabetes?", "answer to What is diabetes?"]
    assert response.messages[0].text == "answer to And cholesterol?"
    assert len(state.messages) == 4


@pytest.mark.asyncio
async def test_emergency_result_activates_emergency_mode():
    controller = SessionController(FakeAssistant(is_emergency=True))

    state, response = await controller.handle_turn(SessionState(), "crushing chest pain")

    assert response.is_emergency is True
    assert state.status is SessionStatus.EMERGENCY_ACTIVE


@pytest.mark.asyncio
async def test_quick_reply_labels_route_by_intent():
    assistant = FakeAssistant()
    controller = SessionController(assistant)

    _, warning = await controller.handle_turn(SessionState(), "⚠️ View Warning Signs")
    _, overview = await controller.handle_turn(
        SessionState(), "Start Health Assessment", PatientContext(metrics=HealthMetrics(heart_rate=64))
    )

    assert assistant.calls == []
    assert warning.messages[0].kind is MessageKind.EMERGENCY
    assert warning.messages[0].text == EMERGENCY_INSTRUCTIONS
    assert "Current Health Overview" in overview.messages[0].text
    assert "Heart Rate: 64 BPM" in overview.messages[0].text


@pytest.mark.asyncio
async def test_warning_signs_keep_emergency_mode_on():
    state = reduce(SessionState(), AssistantResult((_msg("go to ER"),), is_emergency=True))

    state, response = await SessionController(FakeAssistant()).handle_turn(state, "⚠️ View Warning Signs")

    assert response.is_emergency is True
    assert state.status is SessionStatus.EMERGENCY_ACTIVE
    assert state.emergency_active is True
    assert response.messages[1].quick_replies == ["Call Emergency", "Contact Doctor"]


@pytest.mark.asyncio
async def test_greeting_with_clinical_content_reaches_the_assistant():
    assistant = FakeAssistant()

    _, response = await SessionController(assistant).handle_turn(SessionState(), "Hi, I have chest pain")

    assert [c["query"] for c in assistant.calls] == ["Hi, I have chest pain"]
    assert response.messages[0].text == "answer to Hi, I have chest pain"


@pytest.mark.asyncio
async def test_blank_turn_is_ignored():
    assistant = FakeAssistant()
    state, response = await SessionController(assistant).handle_turn(SessionState(), "   ")
    assert state == SessionState()
    assert response.messages == []
    assert assistant.calls == []
