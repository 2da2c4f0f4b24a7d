from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from healthguardian.schemas.chat import RiskLevel

MetricState = Literal["normal", "warning", "critical"]


class RiskTier(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"

    @property
    def level(self) -> RiskLevel:
        """Collapse the four internal tiers onto the three-level external scale."""
        return {
            RiskTier.LOW: "low",
            RiskTier.MODERATE: "medium",
            RiskTier.HIGH: "high",
            RiskTier.SEVERE: "high",
        }[self]


class MetricStatus(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: MetricState = "normal"
    value: Optional[float] = None
    # e.g. "stage_2", "underweight"
    label: str = "normal"


class RiskAssessment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    risk_level: RiskLevel
    tier: RiskTier
    score: int
    points: int
    lifestyle_score: int
    bmi: Optional[float] = None
    is_emergency: bool = False
    metrics: Dict[str, MetricStatus] = Field(default_factory=dict)
    recommendations: List[str] = Field(default_factory=list)
