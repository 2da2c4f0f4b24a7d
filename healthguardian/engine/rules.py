"""Offline keyword rule engine.

Rules are ``(predicate, handler)`` pairs checked in order; the first
predicate that matches picks the handler. The last rule always matches.
"""
from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from healthguardian.config.logger import get_logger
from healthguardian.engine import canned
from healthguardian.engine.canned import RuleContext
from healthguardian.schemas.chat import AssessmentResult
from healthguardian.schemas.health import HealthMetrics, HealthProfile, MedicalReport, Symptom

logger = get_logger(__name__)

Handler = Callable[[RuleContext], AssessmentResult]
Predicate = Callable[[RuleContext], Optional[Handler]]

QUESTION_PREFIXES = ("what is", "how does", "can you explain", "tell me about")

MEDICAL_TERMS = (
    "cancer", "diabetes", "hypertension", "heart disease", "stroke", "alzheimer",
    "dementia", "asthma", "copd", "arthritis", "osteoporosis", "depression",
    "anxiety", "adhd", "autism", "flu", "influenza", "covid", "coronavirus",
    "infection", "virus", "bacterial", "antibiotic", "cholesterol",
    "blood pressure", "glucose", "insulin", "thyroid", "kidney", "liver", "lung",
    "heart attack", "cardiac", "brain", "nerve", "muscle", "joint", "bone",
    "skin", "rash",
)

PERSONAL_PHRASES = (
    "my health", "my data", "my metrics", "my vitals", "my blood pressure",
    "my heart rate", "my cholesterol", "my weight", "my bmi", "my risk",
)

SYMPTOM_WORDS = ("symptom", "feeling", "pain", "ache", "discomfort", "hurt")

# topic substring -> answer, checked in order
TOPIC_TABLE: List[Tuple[Tuple[str, ...], Handler]] = [
    (("cancer", "tumor", "oncology"), canned.cancer_info),
    (("diabetes", "blood sugar", "glucose"), canned.diabetes_info),
    (("blood pressure", "hypertension"), canned.blood_pressure_info),
    (("heart disease", "cardiac", "cardiovascular"), canned.heart_disease_info),
    (("cholesterol", "lipids"), canned.cholesterol_info),
    (("exercise", "physical activity", "working out"), canned.exercise_info),
    (("diet", "nutrition", "food"), canned.diet_info),
    (("medication", "medicine", "drug"), canned.medication_info),
]

CONDITION_TABLE = {
    "diabetes": canned.diabetes_info,
    "glucose": canned.diabetes_info,
    "insulin": canned.diabetes_info,
    "hypertension": canned.blood_pressure_info,
    "blood pressure": canned.blood_pressure_info,
    "heart disease": canned.heart_disease_info,
    "heart attack": canned.heart_disease_info,
    "cardiac": canned.heart_disease_info,
    "cholesterol": canned.cholesterol_info,
    "cancer": canned.cancer_info,
}

BUCKETS: List[Tuple[Tuple[str, ...], Handler]] = [
    (("exercise", "workout", "fitness", "active"), canned.exercise_advice),
    (("diet", "nutrition", "food", "eat", "meal"), canned.diet_advice),
    (("sleep", "insomnia", "rest", "tired", "fatigue"), canned.sleep_advice),
    (("stress", "anxiety", "worry", "mental health", "depression"), canned.mental_health),
    (("medication", "drug", "medicine", "pill", "prescription"), canned.medication_advice),
    (("risk", "chance", "likelihood", "prevention", "prevent"), canned.risk_assessment),
    (("lab", "test", "result", "report", "scan"), canned.report_review),
]


def mentions(text: str, term: str) -> bool:
    """Word-prefix match: "flu" hits "flu shot" but not "influence"."""
    return re.search(r"\b" + re.escape(term), text) is not None


def first_term(text: str, terms: Sequence[str]) -> Optional[str]:
    for term in terms:
        if mentions(text, term):
            return term
    return None


def has_symptom_word(text: str) -> bool:
    # plain substring: "ache" hits "headache"
    return any(w in text for w in SYMPTOM_WORDS)


def question_topic(text: str) -> str:
    for prefix in QUESTION_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix):].strip(" ?!.")
    return ""


# -----------------------------
# Rules
# -----------------------------
def _topic_rule(ctx: RuleContext) -> Optional[Handler]:
    topic = question_topic(ctx.text)
    if not topic:
        return None
    for keys, handler in TOPIC_TABLE:
        if any(k in topic for k in keys):
            return handler
    return lambda _ctx: canned.generic_topic(topic)


def _condition_rule(ctx: RuleContext) -> Optional[Handler]:
    term = first_term(ctx.text, MEDICAL_TERMS)
    if term is None:
        return None
    return CONDITION_TABLE.get(term) or (lambda _ctx: canned.generic_condition(term))


def _personal_rule(ctx: RuleContext) -> Optional[Handler]:
    if any(p in ctx.text for p in PERSONAL_PHRASES):
        return canned.personal_data_summary
    return None


def _symptom_rule(ctx: RuleContext) -> Optional[Handler]:
    if has_symptom_word(ctx.text):
        return canned.symptom_triage
    return None


def _bucket_rule(ctx: RuleContext) -> Optional[Handler]:
    for words, handler in BUCKETS:
        if first_term(ctx.text, words):
            return handler
    return None


def _default_rule(ctx: RuleContext) -> Optional[Handler]:
    return canned.general_wellness


RULES: List[Tuple[str, Predicate]] = [
    ("topic", _topic_rule),
    ("condition", _condition_rule),
    ("personal", _personal_rule),
    ("symptom", _symptom_rule),
    ("bucket", _bucket_rule),
    ("default", _default_rule),
]


def local_respond(
    query: str,
    profile: Optional[HealthProfile] = None,
    metrics: Optional[HealthMetrics] = None,
    symptoms: Optional[Sequence[Symptom]] = None,
    reports: Optional[Sequence[MedicalReport]] = None,
) -> AssessmentResult:
    """Answer a query from canned knowledge and the patient's own data."""
    ctx = RuleContext(
        query=query or "",
        profile=profile,
        metrics=metrics,
        symptoms=list(symptoms or []),
        reports=list(reports or []),
    )
    for name, rule in RULES:
        handler = rule(ctx)
        if handler is not None:
            logger.debug("local rule %s matched", name)
            return handler(ctx)
    # unreachable: the default rule always matches
    return canned.general_wellness(ctx)
