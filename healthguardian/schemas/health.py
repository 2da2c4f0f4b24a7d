from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _unique(items: List[str]) -> List[str]:
    out: List[str] = []
    for x in items or []:
        s = str(x).strip()
        if s and s not in out:
            out.append(s)
    return out


class Medication(_CamelModel):
    name: str = ""
    dosage: str = ""
    frequency: str = ""
    times_of_day: List[str] = Field(default_factory=list)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class Lifestyle(_CamelModel):
    smoker: bool = False
    alcohol_consumption: Literal["none", "light", "moderate", "heavy"] = "light"
    # days per week
    exercise_frequency: int = 3
    diet: str = ""
    stress_level: int = 5

    @field_validator("exercise_frequency")
    @classmethod
    def _clamp_exercise(cls, v: int) -> int:
        return max(0, min(7, v))

    @field_validator("stress_level")
    @classmethod
    def _clamp_stress(cls, v: int) -> int:
        return max(1, min(10, v))


class HealthProfile(_CamelModel):
    name: str = ""
    age: Optional[int] = None
    # cm
    height: Optional[float] = None
    # kg
    weight: Optional[float] = None
    has_heart_condition: bool = False
    had_heart_attack: bool = False
    last_heart_attack_date: Optional[datetime] = None
    medications: List[Medication] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    family_history: List[str] = Field(default_factory=list)
    lifestyle: Lifestyle = Field(default_factory=Lifestyle)

    @field_validator("allergies", "conditions", "family_history")
    @classmethod
    def _as_set(cls, v: List[str]) -> List[str]:
        return _unique(v)


class HealthMetrics(_CamelModel):
    """Current vitals snapshot. Missing readings fall back to neutral defaults
    inside the engine rather than here, so summaries can still say
    'not recorded'."""

    heart_rate: Optional[float] = None
    blood_pressure_systolic: Optional[float] = None
    blood_pressure_diastolic: Optional[float] = None
    cholesterol: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    last_updated: Optional[datetime] = None


class Symptom(_CamelModel):
    type: str = ""
    severity: int = 0
    timestamp: Optional[datetime] = None
    description: str = ""
    duration_minutes: int = 0
    accompanied_by: List[str] = Field(default_factory=list)

    @field_validator("severity")
    @classmethod
    def _clamp_severity(cls, v: int) -> int:
        return max(0, min(10, v))

    @field_validator("accompanied_by")
    @classmethod
    def _as_set(cls, v: List[str]) -> List[str]:
        return _unique(v)


class MedicalReport(_CamelModel):
    type: str = ""
    date: Optional[datetime] = None
    doctor: str = ""
    facility: str = ""
    findings: str = ""
    recommendations: str = ""
    follow_up: bool = False
    follow_up_date: Optional[datetime] = None


class PatientContext(_CamelModel):
    """Everything the patient store hands the assistant for one turn."""

    profile: Optional[HealthProfile] = None
    metrics: Optional[HealthMetrics] = None
    symptoms: List[Symptom] = Field(default_factory=list)
    reports: List[MedicalReport] = Field(default_factory=list)
