from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from healthguardian.schemas.health import HealthMetrics, HealthProfile, MedicalReport, Symptom

RiskLevel = Literal["low", "medium", "high"]

MAX_LIST_ITEMS = 5


def dedup_cap(items: List[str], limit: int = MAX_LIST_ITEMS) -> List[str]:
    out, seen = [], set()
    for x in items or []:
        s = str(x).strip()
        if not s:
            continue
        k = s.lower()
        if k not in seen:
            seen.add(k)
            out.append(s)
    return out[:limit]


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MessageKind(str, Enum):
    TEXT = "text"
    QUICK_REPLIES = "quickReplies"
    EMERGENCY = "emergency"


class Message(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    text: str
    is_from_assistant: bool = True
    timestamp: datetime = Field(default_factory=_now)
    kind: MessageKind = MessageKind.TEXT
    quick_replies: Optional[List[str]] = None

    @model_validator(mode="after")
    def _quick_replies_only_when_offered(self) -> "Message":
        if self.kind is not MessageKind.QUICK_REPLIES:
            self.quick_replies = None
        elif self.quick_replies is None:
            self.quick_replies = []
        return self


class AssessmentResult(BaseModel):
    """Structured answer shared by the live AI path and the local rule engine."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    answer: str
    is_emergency: bool
    risk_level: RiskLevel
    recommendations: List[str] = Field(default_factory=list)
    preventive_advice: List[str] = Field(default_factory=list)
    follow_up_questions: List[str] = Field(default_factory=list)

    @field_validator("risk_level", mode="before")
    @classmethod
    def _normalize_level(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v == "moderate":
                return "medium"
            if v == "severe":
                return "high"
        return v

    @field_validator("recommendations", "preventive_advice", "follow_up_questions")
    @classmethod
    def _dedup(cls, v: List[str]) -> List[str]:
        return dedup_cap(v)

    @model_validator(mode="after")
    def _emergency_is_high_risk(self) -> "AssessmentResult":
        if self.is_emergency and self.risk_level != "high":
            self.risk_level = "high"
        return self


class ChatResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: List[Message] = Field(default_factory=list)
    is_emergency: bool = False
    assessment: Optional[AssessmentResult] = None


class ChatIn(BaseModel):
    """Request body of POST /api/ai."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    query: str = ""
    profile: Optional[HealthProfile] = None
    metrics: Optional[HealthMetrics] = None
    symptoms: Optional[List[Symptom]] = None
    medical_reports: Optional[List[MedicalReport]] = None
    message_history: Optional[List[Message]] = None


class RiskIn(BaseModel):
    profile: Optional[HealthProfile] = None
    metrics: Optional[HealthMetrics] = None
