"""Compact text renderings of patient data and the Gemini prompt."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from healthguardian.schemas.chat import Message, MessageKind
from healthguardian.schemas.health import HealthMetrics, HealthProfile, MedicalReport, Symptom

HISTORY_LIMIT = 10
SYMPTOM_LIMIT = 5
REPORT_LIMIT = 3
SNIPPET_LIMIT = 150

SYSTEM_PROMPT = """You are Dr. Guardian, a helpful and knowledgeable AI assistant. Your primary expertise is in all areas of medicine, and you are part of the Health Guardian AI system.
Your main goal is to help users manage their health and answer their medical questions with detailed, accurate, and empathetic information.

You can also answer general knowledge questions. When the query is health-related, or health context (patient profile, metrics, symptoms, reports) is provided, use your medical expertise and the user's data to give personalized advice. For non-medical questions give a helpful general response.

GUIDELINES FOR HEALTH QUESTIONS:
1. Give clear, evidence-based medical information in a conversational, empathetic manner.
2. Explain medical terms, potential causes, treatment options and preventive measures.
3. When discussing symptoms, say when to seek medical attention and which self-care options exist.
4. Be specific and actionable, never vague or generic.
5. Never refuse with "I'm unable to provide medical advice"; answer fully while noting you do not replace professional care.
6. Recommend consulting a healthcare provider for personalized diagnosis.
7. Use the user's health profile where relevant, but answer the question first.

Your response MUST ALWAYS be a single VALID JSON object with exactly these fields:
- answer: (string) your complete answer to the query.
- isEmergency: (boolean) true only if the situation requires immediate medical attention.
- riskLevel: (string) "low", "medium" or "high".
- recommendations: (array of strings, at most 5) specific actions the user should consider.
- preventiveAdvice: (array of strings, at most 5) preventive measures relevant to the query.
- followUpQuestions: (array of strings, at most 5) follow-up questions the user might ask.
Do not wrap the JSON in markdown or add any text outside it."""


@dataclass(frozen=True)
class Prompt:
    system_prompt: str
    conversation_text: str


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "N/A"
    return value.strftime("%Y-%m-%d")


def _listing(items: Sequence[str]) -> str:
    return ", ".join(items) if items else "None reported"


def _snippet(text: str, limit: int = SNIPPET_LIMIT) -> str:
    text = text or ""
    return text[:limit] + ("..." if len(text) > limit else "")


def _num(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{value:g}"


def format_profile(profile: HealthProfile) -> str:
    lifestyle = profile.lifestyle
    meds = [f"{m.name} ({m.dosage})" for m in profile.medications]
    return "\n".join([
        f"- Age: {profile.age if profile.age is not None else 'N/A'}",
        f"- Height: {_num(profile.height)} cm",
        f"- Weight: {_num(profile.weight)} kg",
        f"- Medical Conditions: {_listing(profile.conditions)}",
        f"- Medications: {_listing(meds)}",
        f"- Allergies: {_listing(profile.allergies)}",
        f"- Family History: {_listing(profile.family_history)}",
        f"- Heart Condition: {'Yes' if profile.has_heart_condition else 'No'}",
        f"- Previous Heart Attack: {'Yes' if profile.had_heart_attack else 'No'}",
        "- Lifestyle:",
        f"  * Exercise: {lifestyle.exercise_frequency} times per week",
        f"  * Diet: {lifestyle.diet or 'Not specified'}",
        f"  * Stress Level: {lifestyle.stress_level}/10",
        f"  * Smoking: {'Yes' if lifestyle.smoker else 'No'}",
        f"  * Alcohol: {lifestyle.alcohol_consumption}",
    ])


def format_metrics(metrics: HealthMetrics) -> str:
    return "\n".join([
        f"- Heart Rate: {_num(metrics.heart_rate)} BPM",
        f"- Blood Pressure: {_num(metrics.blood_pressure_systolic)}/{_num(metrics.blood_pressure_diastolic)}",
        f"- Cholesterol: {_num(metrics.cholesterol)} mg/dL",
        f"- Weight: {_num(metrics.weight)} kg",
        f"- Last Updated: {format_date(metrics.last_updated)}",
    ])


def format_symptoms(symptoms: Sequence[Symptom]) -> str:
    blocks = []
    for s in list(symptoms)[:SYMPTOM_LIMIT]:
        blocks.append(
            f"- {s.type} (Severity: {s.severity}/10)\n"
            f"   * Duration: {s.duration_minutes} minutes\n"
            f"   * Description: {s.description}\n"
            f"   * Accompanied by: {_listing(s.accompanied_by)}\n"
            f"   * Reported: {format_date(s.timestamp)}"
        )
    return "\n".join(blocks)


def format_reports(reports: Sequence[MedicalReport]) -> str:
    blocks = []
    for r in list(reports)[:REPORT_LIMIT]:
        blocks.append(
            f"- {r.type} ({format_date(r.date)}) from {r.facility}\n"
            f"   * Doctor: {r.doctor}\n"
            f"   * Key Findings: {_snippet(r.findings)}\n"
            f"   * Recommendations: {_snippet(r.recommendations)}"
        )
    return "\n".join(blocks)


def health_context(
    profile: Optional[HealthProfile] = None,
    metrics: Optional[HealthMetrics] = None,
    symptoms: Optional[Sequence[Symptom]] = None,
    reports: Optional[Sequence[MedicalReport]] = None,
) -> str:
    """Render only the sections that have data."""
    ctx = ""
    if profile is not None:
        ctx += "\nHEALTH PROFILE:\n" + format_profile(profile)
    if metrics is not None:
        ctx += "\nHEALTH METRICS:\n" + format_metrics(metrics)
    if symptoms:
        ctx += "\nRECENT SYMPTOMS:\n" + format_symptoms(symptoms)
    if reports:
        ctx += "\nMEDICAL REPORTS:\n" + format_reports(reports)
    return ctx


def history_lines(history: Optional[Sequence[Message]], limit: int = HISTORY_LIMIT) -> List[str]:
    """Last ``limit`` non-emergency turns, oldest first."""
    kept = [m for m in (history or []) if m.kind is not MessageKind.EMERGENCY]
    return [f"{'AI' if m.is_from_assistant else 'User'}: {m.text}" for m in kept[-limit:]]


def build_prompt(
    query: str,
    profile: Optional[HealthProfile] = None,
    metrics: Optional[HealthMetrics] = None,
    symptoms: Optional[Sequence[Symptom]] = None,
    reports: Optional[Sequence[MedicalReport]] = None,
    history: Optional[Sequence[Message]] = None,
) -> Prompt:
    ctx = health_context(profile, metrics, symptoms, reports)
    user_text = query
    if ctx:
        user_text += "\n\nFor reference, my health information is:" + ctx
    lines = history_lines(history)
    lines.append(f"User: {user_text}")
    return Prompt(system_prompt=SYSTEM_PROMPT, conversation_text="\n".join(lines))
