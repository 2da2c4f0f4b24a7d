from healthguardian.engine.risk import (
    body_mass_index,
    blood_pressure_category,
    classify,
    is_emergency_symptom,
)
from healthguardian.schemas.health import HealthMetrics, HealthProfile, Lifestyle, Symptom
from healthguardian.schemas.risk import RiskTier


def _scenario():
    profile = HealthProfile(lifestyle=Lifestyle(smoker=True, exercise_frequency=1, stress_level=9))
    metrics = HealthMetrics(
        blood_pressure_systolic=150,
        blood_pressure_diastolic=95,
        heart_rate=110,
        cholesterol=250,
        weight=95,
        height=170,
    )
    return profile, metrics


def test_worked_scenario_is_severe_with_all_metrics_critical():
    profile, metrics = _scenario()
    result = classify(profile, metrics)

    assert {k: v.status for k, v in result.metrics.items()} == {
        "blood_pressure": "critical",
        "heart_rate": "critical",
        "cholesterol": "critical",
        "bmi": "critical",
    }
    assert result.bmi == 32.9
    assert result.tier is RiskTier.SEVERE
    assert result.risk_level == "high"
    assert result.score == 100
    assert result.lifestyle_score == 4
    assert len(result.recommendations) == 5
    assert result.recommendations[0] == "Monitor blood pressure regularly and consult with your doctor"


def test_classify_is_deterministic():
    profile, metrics = _scenario()
    first = classify(profile, metrics)
    for _ in range(5):
        again = classify(profile, metrics)
        assert (again.risk_level, again.score, again.recommendations) == (
            first.risk_level,
            first.score,
            first.recommendations,
        )


def test_hypertensive_crisis_forces_high_and_emergency():
    for sys_, dia in [(181, 80), (120, 121), (200, 130)]:
        result = classify(None, HealthMetrics(blood_pressure_systolic=sys_, blood_pressure_diastolic=dia))
        assert result.metrics["blood_pressure"].status == "critical"
        assert result.metrics["blood_pressure"].label == "crisis"
        assert result.is_emergency is True
        assert result.risk_level == "high"


def test_missing_data_uses_neutral_defaults():
    result = classify(None, None)

    assert result.risk_level == "low"
    assert result.tier is RiskTier.LOW
    assert result.score == 0
    assert result.bmi is None
    assert all(s.status == "normal" for s in result.metrics.values())
    assert result.metrics["heart_rate"].value == 75
    assert result.recommendations == []


def test_age_and_history_points_reach_moderate():
    profile = HealthProfile(age=65, has_heart_condition=False, family_history=["Heart disease (father)"])
    result = classify(profile, HealthMetrics())
    # age 2 + family history 2
    assert result.points == 4
    assert result.tier is RiskTier.MODERATE
    assert result.risk_level == "medium"


def test_blood_pressure_bands():
    assert blood_pressure_category(118, 75) == "normal"
    assert blood_pressure_category(125, 75) == "elevated"
    assert blood_pressure_category(130, 85) == "stage_1"
    assert blood_pressure_category(140, 70) == "stage_2"
    assert blood_pressure_category(185, 100) == "crisis"


def test_heart_rate_bands():
    def status(bpm):
        return classify(None, HealthMetrics(heart_rate=bpm)).metrics["heart_rate"].status

    assert status(45) == "critical"
    assert status(55) == "warning"
    assert status(72) == "normal"
    assert status(100) == "normal"
    assert status(110) == "critical"


def test_bmi_accepts_metres_and_needs_both_values():
    assert body_mass_index(70, 175) == body_mass_index(70, 1.75) == 22.9
    assert body_mass_index(None, 175) is None
    assert body_mass_index(70, None) is None


def test_profile_height_preferred_over_metrics_height():
    profile = HealthProfile(height=180, weight=81)
    result = classify(profile, HealthMetrics(height=150))
    assert result.bmi == 25.0
    assert result.metrics["bmi"].label == "overweight"


def test_emergency_symptom_detection():
    assert is_emergency_symptom(Symptom(type="Chest pain", severity=3))
    assert is_emergency_symptom(Symptom(type="Headache", severity=8))
    assert is_emergency_symptom(Symptom(type="Fatigue", severity=2, accompanied_by=["shortness of breath"]))
    assert not is_emergency_symptom(Symptom(type="Headache", severity=2))
