"""Quick-reply intents.

Labels are presentation only. Anything the user taps or types is resolved
back to a stable ``QuickReplyIntent`` before business logic looks at it.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional, Sequence

from healthguardian.schemas.chat import RiskLevel


class QuickReplyIntent(str, Enum):
    CALL_EMERGENCY = "call_emergency"
    CONTACT_DOCTOR = "contact_doctor"
    VIEW_WARNING_SIGNS = "view_warning_signs"
    SCHEDULE_CHECKUP = "schedule_checkup"
    MONITOR_SYMPTOMS = "monitor_symptoms"
    VIEW_PRECAUTIONS = "view_precautions"
    TRACK_PROGRESS = "track_progress"
    VIEW_HEALTH_TIPS = "view_health_tips"
    CHECK_MEDICATIONS = "check_medications"
    START_ASSESSMENT = "start_assessment"
    DESCRIBE_SYMPTOMS = "describe_symptoms"
    FEELING_WELL = "feeling_well"
    NOT_FEELING_GREAT = "not_feeling_great"
    HEALTH_QUESTION = "health_question"
    DISCUSS_LIFESTYLE = "discuss_lifestyle"


LABELS: Dict[QuickReplyIntent, str] = {
    QuickReplyIntent.CALL_EMERGENCY: "Call Emergency",
    QuickReplyIntent.CONTACT_DOCTOR: "Contact Doctor",
    QuickReplyIntent.VIEW_WARNING_SIGNS: "View Warning Signs",
    QuickReplyIntent.SCHEDULE_CHECKUP: "Schedule Check-up",
    QuickReplyIntent.MONITOR_SYMPTOMS: "Monitor Symptoms",
    QuickReplyIntent.VIEW_PRECAUTIONS: "View Precautions",
    QuickReplyIntent.TRACK_PROGRESS: "Track Progress",
    QuickReplyIntent.VIEW_HEALTH_TIPS: "View Health Tips",
    QuickReplyIntent.CHECK_MEDICATIONS: "Check Medications",
    QuickReplyIntent.START_ASSESSMENT: "Start Health Assessment",
    QuickReplyIntent.DESCRIBE_SYMPTOMS: "Describe Symptoms",
    QuickReplyIntent.FEELING_WELL: "I'm feeling well",
    QuickReplyIntent.NOT_FEELING_GREAT: "Not feeling great",
    QuickReplyIntent.HEALTH_QUESTION: "Health question",
    QuickReplyIntent.DISCUSS_LIFESTYLE: "Discuss Lifestyle",
}

RISK_INTENTS: Dict[str, List[QuickReplyIntent]] = {
    "high": [
        QuickReplyIntent.CALL_EMERGENCY,
        QuickReplyIntent.CONTACT_DOCTOR,
        QuickReplyIntent.VIEW_WARNING_SIGNS,
    ],
    "medium": [
        QuickReplyIntent.SCHEDULE_CHECKUP,
        QuickReplyIntent.MONITOR_SYMPTOMS,
        QuickReplyIntent.VIEW_PRECAUTIONS,
    ],
    "low": [
        QuickReplyIntent.TRACK_PROGRESS,
        QuickReplyIntent.VIEW_HEALTH_TIPS,
        QuickReplyIntent.CHECK_MEDICATIONS,
    ],
}

GREETING_INTENTS = [
    QuickReplyIntent.FEELING_WELL,
    QuickReplyIntent.NOT_FEELING_GREAT,
    QuickReplyIntent.DESCRIBE_SYMPTOMS,
    QuickReplyIntent.HEALTH_QUESTION,
    QuickReplyIntent.START_ASSESSMENT,
]

ASSESSMENT_INTENTS = [
    QuickReplyIntent.DESCRIBE_SYMPTOMS,
    QuickReplyIntent.CHECK_MEDICATIONS,
    QuickReplyIntent.DISCUSS_LIFESTYLE,
    QuickReplyIntent.CONTACT_DOCTOR,
    QuickReplyIntent.HEALTH_QUESTION,
]

MAX_QUICK_REPLIES = 5

_NON_WORD_RE = re.compile(r"[^a-z0-9' ]+")


def _normalize(text: str) -> str:
    # drops emoji prefixes and punctuation
    return " ".join(_NON_WORD_RE.sub(" ", (text or "").lower()).split())


_BY_LABEL: Dict[str, QuickReplyIntent] = {_normalize(v): k for k, v in LABELS.items()}


def labels(intents: Sequence[QuickReplyIntent]) -> List[str]:
    return [LABELS[i] for i in intents]


def resolve_intent(text: str) -> Optional[QuickReplyIntent]:
    """Map a tapped label (with or without emoji) or an intent key to its intent."""
    norm = _normalize(text)
    if norm in _BY_LABEL:
        return _BY_LABEL[norm]
    try:
        return QuickReplyIntent(norm.replace(" ", "_"))
    except ValueError:
        return None


def risk_quick_replies(risk_level: RiskLevel, follow_ups: Sequence[str] = ()) -> List[str]:
    replies = labels(RISK_INTENTS.get(risk_level, RISK_INTENTS["low"]))
    for q in follow_ups:
        if len(replies) >= MAX_QUICK_REPLIES:
            break
        if q not in replies:
            replies.append(q)
    return replies[:MAX_QUICK_REPLIES]
