from healthguardian.engine.quick_replies import (
    QuickReplyIntent,
    resolve_intent,
    risk_quick_replies,
)


def test_labels_with_or_without_emoji_resolve_to_the_same_intent():
    assert resolve_intent("View Warning Signs") is QuickReplyIntent.VIEW_WARNING_SIGNS
    assert resolve_intent("⚠️ View Warning Signs") is QuickReplyIntent.VIEW_WARNING_SIGNS
    assert resolve_intent("🩺 start health assessment") is QuickReplyIntent.START_ASSESSMENT
    assert resolve_intent("Schedule Check-up") is QuickReplyIntent.SCHEDULE_CHECKUP


def test_intent_keys_resolve_and_free_text_does_not():
    assert resolve_intent("call_emergency") is QuickReplyIntent.CALL_EMERGENCY
    assert resolve_intent("I have a headache") is None
    assert resolve_intent("") is None


def test_risk_based_replies_then_follow_ups_capped_at_five():
    follow_ups = ["Q1?", "Q2?", "Q3?"]
    assert risk_quick_replies("high", follow_ups) == [
        "Call Emergency",
        "Contact Doctor",
        "View Warning Signs",
        "Q1?",
        "Q2?",
    ]
    assert risk_quick_replies("medium")[:3] == ["Schedule Check-up", "Monitor Symptoms", "View Precautions"]
    assert risk_quick_replies("low") == ["Track Progress", "View Health Tips", "Check Medications"]
