import pytest

from healthguardian.engine.risk import EMERGENCY_INSTRUCTIONS
from healthguardian.runtime.nodes.compose import compose_messages
from healthguardian.schemas.chat import AssessmentResult, MessageKind


def _assessment(**kw):
    data = dict(
        answer="Answer text",
        is_emergency=False,
        risk_level="low",
        recommendations=["Walk daily for 30 minutes"],
        follow_up_questions=["How often should I walk?"],
    )
    data.update(kw)
    return AssessmentResult(**data)


def test_answer_recommendations_and_quick_replies():
    messages = compose_messages(_assessment())

    assert [m.kind for m in messages] == [MessageKind.TEXT, MessageKind.TEXT, MessageKind.QUICK_REPLIES]
    assert messages[0].text == "Answer text"
    assert messages[1].text == "**Recommendations:**\n• Walk daily for 30 minutes"
    assert messages[2].text == "Would you like to:"
    assert messages[2].quick_replies == [
        "Track Progress",
        "View Health Tips",
        "Check Medications",
        "How often should I walk?",
    ]
    assert messages[0].quick_replies is None
    assert all(m.is_from_assistant for m in messages)


def test_emergency_answer_carries_instructions():
    messages = compose_messages(_assessment(is_emergency=True, recommendations=[]))

    assert messages[0].kind is MessageKind.EMERGENCY
    assert messages[0].text.endswith(EMERGENCY_INSTRUCTIONS)
    # no recommendations message
    assert len(messages) == 2
    assert messages[1].quick_replies[:3] == ["Call Emergency", "Contact Doctor", "View Warning Signs"]


@pytest.mark.parametrize("level", ["low", "medium", "high"])
def test_quick_replies_never_exceed_five(level):
    follow_ups = [f"Question number {i}?" for i in range(5)]
    messages = compose_messages(_assessment(risk_level=level, follow_up_questions=follow_ups))
    assert len(messages[-1].quick_replies) == 5
