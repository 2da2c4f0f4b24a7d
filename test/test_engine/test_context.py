from datetime import datetime

from healthguardian.engine.context import SYSTEM_PROMPT, build_prompt, health_context
from healthguardian.schemas.chat import Message, MessageKind
from healthguardian.schemas.health import HealthMetrics, HealthProfile, MedicalReport, Symptom


def test_prompt_without_data_is_just_the_query():
    prompt = build_prompt("What is asthma?")
    assert prompt.system_prompt == SYSTEM_PROMPT
    assert prompt.conversation_text == "User: What is asthma?"


def test_history_keeps_last_ten_non_emergency_messages():
    history = [Message(text=f"m{i}", is_from_assistant=i % 2 == 1) for i in range(12)]
    history.insert(11, Message(text="CALL 911", kind=MessageKind.EMERGENCY))

    lines = build_prompt("next", history=history).conversation_text.splitlines()

    assert len(lines) == 11
    assert lines[0] == "User: m2"
    assert lines[1] == "AI: m3"
    assert lines[-1] == "User: next"
    assert all("CALL 911" not in line for line in lines)


def test_only_sections_with_data_are_rendered():
    ctx = health_context(metrics=HealthMetrics(heart_rate=72, last_updated=datetime(2024, 5, 1)))
    assert "HEALTH METRICS" in ctx
    assert "Heart Rate: 72 BPM" in ctx
    assert "Last Updated: 2024-05-01" in ctx
    assert "HEALTH PROFILE" not in ctx
    assert "RECENT SYMPTOMS" not in ctx
    assert "MEDICAL REPORTS" not in ctx


def test_query_is_annotated_with_health_information():
    prompt = build_prompt("Is my diet ok?", profile=HealthProfile(age=40, conditions=["asthma"]))
    assert "For reference, my health information is:" in prompt.conversation_text
    assert "- Medical Conditions: asthma" in prompt.conversation_text


def test_symptoms_and_reports_are_capped_and_truncated():
    symptoms = [Symptom(type=f"s{i}", severity=3) for i in range(7)]
    reports = [MedicalReport(type=f"r{i}", findings="f" * 200) for i in range(4)]

    ctx = health_context(symptoms=symptoms, reports=reports)

    assert "- s4 " in ctx and "- s5 " not in ctx
    assert "- r2 " in ctx and "- r3 " not in ctx
    assert "f" * 150 + "..." in ctx
    assert "f" * 151 not in ctx
