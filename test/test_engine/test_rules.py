import pytest

from healthguardian.engine.rules import local_respond, mentions
from healthguardian.schemas.health import HealthMetrics, HealthProfile, Lifestyle, MedicalReport, Symptom

BRANCH_QUERIES = [
    "What is cancer?",
    "what is diabetes",
    "Can you explain hypertension",
    "tell me about heart disease",
    "what is cholesterol",
    "How does exercise help",
    "what is a good diet",
    "tell me about medication safety",
    "what is gout",
    "I was told I might have arthritis",
    "my insulin levels",
    "Show me my health data",
    "My back pain is getting worse",
    "how much workout per week",
    "any meal ideas",
    "I can't sleep at night",
    "stress at work",
    "which pills do I take",
    "what are my chances",
    "explain my lab results",
    "good evening",
]


@pytest.mark.parametrize("query", BRANCH_QUERIES)
def test_every_branch_returns_a_full_result(query):
    result = local_respond(query)
    assert 4 <= len(result.recommendations) <= 5
    assert len(result.preventive_advice) == 4
    assert len(result.follow_up_questions) == 4
    assert result.answer


@pytest.mark.parametrize("query", BRANCH_QUERIES)
def test_every_branch_with_patient_data(query):
    profile = HealthProfile(
        name="Ana",
        age=58,
        has_heart_condition=True,
        allergies=["penicillin"],
        lifestyle=Lifestyle(smoker=True, exercise_frequency=1, stress_level=9),
    )
    metrics = HealthMetrics(blood_pressure_systolic=150, blood_pressure_diastolic=95, heart_rate=88, cholesterol=250)
    symptoms = [Symptom(type="Chest pain", severity=6)]
    reports = [MedicalReport(type="Blood test", facility="City Lab", follow_up=True)]

    result = local_respond(query, profile, metrics, symptoms, reports)
    assert 4 <= len(result.recommendations) <= 5
    assert len(result.follow_up_questions) == 4


def test_what_is_diabetes_without_data_is_low_risk():
    result = local_respond("What is diabetes")
    assert result.risk_level == "low"
    assert result.is_emergency is False
    assert result.answer.startswith("Diabetes is a chronic condition")


def test_diabetes_with_elevated_cholesterol_is_medium():
    result = local_respond("What is diabetes", metrics=HealthMetrics(cholesterol=220))
    assert result.risk_level == "medium"
    assert "elevated cholesterol" in result.answer


def test_blood_pressure_crisis_is_emergency():
    metrics = HealthMetrics(blood_pressure_systolic=190, blood_pressure_diastolic=110)
    result = local_respond("what is blood pressure", metrics=metrics)
    assert result.is_emergency is True
    assert result.risk_level == "high"
    assert "190/110" in result.answer


def test_heart_condition_raises_heart_disease_risk():
    result = local_respond("tell me about heart disease", profile=HealthProfile(had_heart_attack=True))
    assert result.risk_level == "high"


def test_generic_topic_echoes_topic():
    result = local_respond("What is gout?")
    assert result.answer.startswith("Gout is an important health topic")
    assert "How does gout relate to my current health status?" in result.follow_up_questions


def test_personal_summary_lists_vitals_and_risk_factors():
    profile = HealthProfile(lifestyle=Lifestyle(smoker=True, exercise_frequency=0))
    metrics = HealthMetrics(blood_pressure_systolic=142, blood_pressure_diastolic=91, cholesterol=230)
    result = local_respond("how is my health", profile, metrics)

    assert "142/91 mmHg" in result.answer
    assert "• smoking" in result.answer
    # bp, cholesterol, smoking, low activity
    assert result.risk_level == "medium"


def test_severe_symptom_is_emergency():
    result = local_respond("I have severe pain in my arm")
    assert result.is_emergency is True
    assert result.risk_level == "high"


def test_moderate_symptom_is_medium():
    result = local_respond("moderate discomfort after running")
    assert result.risk_level == "medium"
    assert result.is_emergency is False


def test_risk_bucket_uses_classifier():
    metrics = HealthMetrics(blood_pressure_systolic=150, blood_pressure_diastolic=95)
    result = local_respond("what are my chances", metrics=metrics)
    assert result.risk_level == "medium"
    assert "moderate (score 30/100)" in result.answer


def test_default_answer_names_the_query():
    result = local_respond("good evening")
    assert '"good evening"' in result.answer
    assert result.risk_level == "low"


@pytest.mark.parametrize("query", ["I have a bad headache", "stomachache since lunch", "my toothache"])
def test_compound_ache_goes_to_symptom_triage(query):
    result = local_respond(query)
    assert "You asked about" not in result.answer
    assert result.answer == local_respond("I have some pain").answer


@pytest.mark.parametrize(
    "query,same_as",
    [
        ("what is a tumor", "what is cancer"),
        ("what is oncology", "what is cancer"),
        ("What is blood sugar", "what is diabetes"),
        ("what is glucose", "what is diabetes"),
        ("what is cardiovascular disease", "what is heart disease"),
        ("what is cardiac arrest", "what is heart disease"),
        ("what is lipids", "what is cholesterol"),
        ("what is physical activity", "what is exercise"),
        ("tell me about working out", "what is exercise"),
        ("what is healthy food", "what is diet"),
        ("what is this medicine", "what is medication"),
        ("what is a drug interaction", "what is medication"),
    ],
)
def test_topic_aliases_share_the_topic_answer(query, same_as):
    result = local_respond(query)
    assert "is an important health topic" not in result.answer
    assert result.answer == local_respond(same_as).answer


def test_terms_match_on_word_prefix():
    assert mentions("i got a flu shot", "flu")
    assert not mentions("under the influence", "flu")
    assert mentions("my heart rates", "heart rate")
