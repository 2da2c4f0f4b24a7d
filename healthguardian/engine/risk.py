"""Deterministic cardiovascular risk classification.

``classify`` accumulates integer points from independent rule sets (age,
history, lifestyle, per-metric status), scales them to a 0..100 score and
maps the score onto a four-tier internal scale that is surfaced as
low/medium/high. No I/O, no randomness: the same inputs always give the same
assessment.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from healthguardian.schemas.chat import dedup_cap
from healthguardian.schemas.health import HealthMetrics, HealthProfile, Lifestyle, Symptom
from healthguardian.schemas.risk import MetricStatus, RiskAssessment, RiskTier

DEFAULT_SYSTOLIC = 120
DEFAULT_DIASTOLIC = 80
DEFAULT_HEART_RATE = 75
DEFAULT_CHOLESTEROL = 180

CRITICAL_POINTS = {
    "blood_pressure": 3,
    "heart_rate": 2,
    "cholesterol": 2,
    "bmi": 1,
}

_TIER_THRESHOLDS: List[Tuple[int, RiskTier]] = [
    (30, RiskTier.LOW),
    (50, RiskTier.MODERATE),
    (70, RiskTier.HIGH),
]

_METRIC_ADVICE = {
    ("blood_pressure", "crisis"): "Seek immediate medical care for a blood pressure reading in the crisis range",
    ("blood_pressure", "stage_2"): "Monitor blood pressure regularly and consult with your doctor",
    ("blood_pressure", "stage_1"): "Consider lifestyle changes to improve blood pressure",
    ("blood_pressure", "elevated"): "Reduce sodium intake and keep monitoring your blood pressure",
    ("heart_rate", "tachycardia"): "Monitor heart rate and discuss with your healthcare provider",
    ("heart_rate", "bradycardia"): "Discuss your low resting heart rate with your healthcare provider",
    ("heart_rate", "low"): "Keep track of your resting heart rate and any dizziness",
    ("cholesterol", "high"): "Schedule a follow-up for cholesterol management",
    ("cholesterol", "borderline"): "Consider dietary changes to improve cholesterol levels",
    ("bmi", "underweight"): "Talk to your doctor about reaching a healthy weight",
    ("bmi", "overweight"): "Aim for gradual weight loss through diet and exercise",
    ("bmi", "obese"): "Discuss a structured weight management plan with your doctor",
}

EMERGENCY_SYMPTOMS = (
    "chest pain",
    "shortness of breath",
    "fainting",
    "severe dizziness",
    "cold sweat",
    "nausea",
    "jaw pain",
    "left arm pain",
)

EMERGENCY_INSTRUCTIONS = """If you experience:
- Severe chest pain or pressure
- Difficulty breathing
- Sudden weakness or dizziness
- Severe sweating with chest discomfort

IMMEDIATELY:
1. Call emergency services (911)
2. Take prescribed nitroglycerin if available
3. Chew an aspirin if recommended by your doctor
4. Stay calm and seated or lying down
5. Unlock your door for emergency responders"""


@dataclass(frozen=True)
class Vitals:
    """Metrics with neutral defaults filled in."""

    systolic: float
    diastolic: float
    heart_rate: float
    cholesterol: float
    weight: Optional[float]
    height_cm: Optional[float]

    @classmethod
    def resolve(cls, profile: Optional[HealthProfile], metrics: Optional[HealthMetrics]) -> "Vitals":
        m = metrics or HealthMetrics()
        weight = m.weight or (profile.weight if profile else None)
        height = (profile.height if profile else None) or m.height
        return cls(
            systolic=m.blood_pressure_systolic or DEFAULT_SYSTOLIC,
            diastolic=m.blood_pressure_diastolic or DEFAULT_DIASTOLIC,
            heart_rate=m.heart_rate or DEFAULT_HEART_RATE,
            cholesterol=m.cholesterol or DEFAULT_CHOLESTEROL,
            weight=weight or None,
            height_cm=height or None,
        )


# -----------------------------
# Per-metric rules
# -----------------------------
def blood_pressure_category(systolic: float, diastolic: float) -> str:
    if systolic > 180 or diastolic > 120:
        return "crisis"
    if systolic >= 140 or diastolic >= 90:
        return "stage_2"
    if systolic >= 130 or diastolic > 80:
        return "stage_1"
    if systolic > 120:
        return "elevated"
    return "normal"


def is_hypertensive_crisis(systolic: float, diastolic: float) -> bool:
    return blood_pressure_category(systolic, diastolic) == "crisis"


def interpret_blood_pressure(systolic: float, diastolic: float) -> str:
    """Human readable reading category used in chat answers."""
    return {
        "crisis": "in hypertensive crisis range - seek immediate medical attention",
        "stage_2": "in stage 2 hypertension range",
        "stage_1": "in stage 1 hypertension range",
        "elevated": "elevated",
        "normal": "within normal range",
    }[blood_pressure_category(systolic, diastolic)]


def _bp_status(systolic: float, diastolic: float) -> MetricStatus:
    label = blood_pressure_category(systolic, diastolic)
    status = {"crisis": "critical", "stage_2": "critical", "stage_1": "warning", "elevated": "warning"}.get(
        label, "normal"
    )
    return MetricStatus(status=status, value=systolic, label=label)


def _heart_rate_status(bpm: float) -> MetricStatus:
    if bpm > 100:
        return MetricStatus(status="critical", value=bpm, label="tachycardia")
    if bpm < 50:
        return MetricStatus(status="critical", value=bpm, label="bradycardia")
    if bpm < 60:
        return MetricStatus(status="warning", value=bpm, label="low")
    return MetricStatus(status="normal", value=bpm, label="normal")


def _cholesterol_status(total: float) -> MetricStatus:
    if total >= 240:
        return MetricStatus(status="critical", value=total, label="high")
    if total >= 200:
        return MetricStatus(status="warning", value=total, label="borderline")
    return MetricStatus(status="normal", value=total, label="normal")


def body_mass_index(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    if not weight_kg or not height_cm:
        return None
    # accept heights recorded in metres
    height_m = height_cm if height_cm <= 3 else height_cm / 100.0
    return round(weight_kg / (height_m * height_m), 1)


def _bmi_status(bmi: Optional[float]) -> MetricStatus:
    if bmi is None:
        return MetricStatus(status="normal", value=None, label="unknown")
    if bmi < 18.5:
        return MetricStatus(status="warning", value=bmi, label="underweight")
    if bmi < 25:
        return MetricStatus(status="normal", value=bmi, label="normal")
    if bmi < 30:
        return MetricStatus(status="warning", value=bmi, label="overweight")
    return MetricStatus(status="critical", value=bmi, label="obese")


# -----------------------------
# Profile rules
# -----------------------------
def _age_points(age: Optional[int]) -> int:
    if not age:
        return 0
    if age >= 60:
        return 2
    if age >= 40:
        return 1
    return 0


def has_family_heart_history(profile: Optional[HealthProfile]) -> bool:
    if profile is None:
        return False
    return any("heart" in item.lower() for item in profile.family_history)


def _history_points(profile: Optional[HealthProfile]) -> int:
    if profile is None:
        return 0
    points = 0
    if profile.has_heart_condition:
        points += 3
    if profile.had_heart_attack:
        points += 4
    if has_family_heart_history(profile):
        points += 2
    return points


def _lifestyle_rules(lifestyle: Lifestyle) -> Tuple[int, int, List[str]]:
    """Return (points, lifestyle score, recommendations)."""
    points, score, recs = 0, 10, []
    if lifestyle.smoker:
        points += 3
        score -= 3
        recs.append("Consider smoking cessation programs for better health")
    if lifestyle.alcohol_consumption == "heavy":
        points += 2
        score -= 2
        recs.append("Consider reducing alcohol consumption")
    if lifestyle.exercise_frequency < 3:
        points += 1
        score -= 2
        recs.append("Increase physical activity to at least 3 times per week")
    if lifestyle.stress_level > 7:
        points += 1
        score -= 1
        recs.append("Consider stress management techniques")
    return points, score, recs


def _tier_for(score: int) -> RiskTier:
    for limit, tier in _TIER_THRESHOLDS:
        if score < limit:
            return tier
    return RiskTier.SEVERE


def classify(profile: Optional[HealthProfile], metrics: Optional[HealthMetrics]) -> RiskAssessment:
    """Classify cardiovascular risk from a profile and the current metrics."""
    vitals = Vitals.resolve(profile, metrics)
    lifestyle = profile.lifestyle if profile else Lifestyle()

    bmi = body_mass_index(vitals.weight, vitals.height_cm)
    per_metric: Dict[str, MetricStatus] = {
        "blood_pressure": _bp_status(vitals.systolic, vitals.diastolic),
        "heart_rate": _heart_rate_status(vitals.heart_rate),
        "cholesterol": _cholesterol_status(vitals.cholesterol),
        "bmi": _bmi_status(bmi),
    }

    points = _age_points(profile.age if profile else None) + _history_points(profile)
    lifestyle_points, lifestyle_score, lifestyle_recs = _lifestyle_rules(lifestyle)
    points += lifestyle_points

    recommendations: List[str] = []
    for name, status in per_metric.items():
        if status.status == "critical":
            points += CRITICAL_POINTS[name]
        if status.status != "normal":
            recommendations.append(_METRIC_ADVICE[(name, status.label)])
    recommendations.extend(lifestyle_recs)

    is_emergency = is_hypertensive_crisis(vitals.systolic, vitals.diastolic)
    score = min(100, points * 10)
    tier = _tier_for(score)
    if is_emergency and tier in (RiskTier.LOW, RiskTier.MODERATE):
        tier = RiskTier.HIGH

    return RiskAssessment(
        risk_level=tier.level,
        tier=tier,
        score=score,
        points=points,
        lifestyle_score=lifestyle_score,
        bmi=bmi,
        is_emergency=is_emergency,
        metrics=per_metric,
        recommendations=dedup_cap(recommendations),
    )


# -----------------------------
# Helpers shared with the chat layer
# -----------------------------
def is_emergency_symptom(symptom: Symptom) -> bool:
    kind = symptom.type.lower()
    return (
        symptom.severity >= 7
        or any(s in kind for s in EMERGENCY_SYMPTOMS)
        or any(s.lower() in EMERGENCY_SYMPTOMS for s in symptom.accompanied_by)
    )


def health_tips(profile: Optional[HealthProfile]) -> List[str]:
    if profile is None:
        return []
    tips: List[str] = []
    lifestyle = profile.lifestyle
    if lifestyle.smoker:
        tips.append(
            "Consider joining a smoking cessation program. Quitting smoking can significantly "
            "reduce your heart attack risk."
        )
    if lifestyle.exercise_frequency < 3:
        tips.append(
            "Try to incorporate at least 30 minutes of moderate exercise, like brisk walking, "
            "5 times a week."
        )
    if lifestyle.stress_level > 7:
        tips.append(
            "High stress levels can impact heart health. Consider stress-reduction techniques "
            "like meditation or yoga."
        )
    if profile.had_heart_attack:
        tips.append(
            "Regular cardiac rehabilitation sessions can help strengthen your heart and reduce "
            "future risks."
        )
    return tips


def medication_schedule(profile: Optional[HealthProfile]) -> str:
    if profile is None:
        return ""
    return "\n".join(
        f"• {m.name} ({m.dosage}): {m.frequency}" + (f" - {', '.join(m.times_of_day)}" if m.times_of_day else "")
        for m in profile.medications
    )
