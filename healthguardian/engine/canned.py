"""Canned, lightly personalised answers used when the AI service is unavailable.

Every builder returns a complete AssessmentResult with four recommendations,
four preventive items and four follow-up questions, the same shape a parsed
AI reply has.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from healthguardian.engine.context import format_date
from healthguardian.engine.risk import (
    DEFAULT_CHOLESTEROL,
    classify,
    has_family_heart_history,
    health_tips,
    interpret_blood_pressure,
    is_emergency_symptom,
    is_hypertensive_crisis,
    medication_schedule,
    blood_pressure_category,
)
from healthguardian.schemas.chat import AssessmentResult, RiskLevel
from healthguardian.schemas.health import (
    HealthMetrics,
    HealthProfile,
    MedicalReport,
    PatientContext,
    Symptom,
)


@dataclass
class RuleContext:
    query: str
    profile: Optional[HealthProfile] = None
    metrics: Optional[HealthMetrics] = None
    symptoms: List[Symptom] = field(default_factory=list)
    reports: List[MedicalReport] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.query.strip().lower()


def _result(
    answer: str,
    recommendations: List[str],
    preventive: List[str],
    follow_ups: List[str],
    *,
    risk_level: RiskLevel = "low",
    is_emergency: bool = False,
) -> AssessmentResult:
    return AssessmentResult(
        answer=answer.strip(),
        is_emergency=is_emergency,
        risk_level=risk_level,
        recommendations=recommendations,
        preventive_advice=preventive,
        follow_up_questions=follow_ups,
    )


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _exercise_days(profile: Optional[HealthProfile]) -> Optional[int]:
    if profile is None:
        return None
    return profile.lifestyle.exercise_frequency


def _cholesterol(metrics: Optional[HealthMetrics]) -> float:
    if metrics is None or not metrics.cholesterol:
        return DEFAULT_CHOLESTEROL
    return metrics.cholesterol


def _has_bp(metrics: Optional[HealthMetrics]) -> bool:
    return bool(metrics and metrics.blood_pressure_systolic and metrics.blood_pressure_diastolic)


def _bp_text(metrics: HealthMetrics) -> str:
    return f"{metrics.blood_pressure_systolic:g}/{metrics.blood_pressure_diastolic:g}"


# -----------------------------
# Topic answers ("what is ...", and matching medical terms)
# -----------------------------
def cancer_info(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Cancer is a disease characterized by abnormal cell growth. There are many types of cancer, "
        "each with different risk factors, symptoms, and treatments. Early detection is critical for "
        "successful treatment."
    )
    if ctx.profile and ctx.profile.lifestyle.smoker:
        answer += "\n\nBecause you smoke, quitting is one of the most effective ways to lower your cancer risk."
    return _result(
        answer,
        [
            "Schedule regular cancer screenings appropriate for your age and risk factors",
            "Maintain a healthy lifestyle to reduce risk factors",
            "Learn to recognize warning signs that might indicate cancer",
            "Discuss any unexplained weight loss, lumps or persistent changes with your doctor",
        ],
        [
            "Avoid tobacco use and excessive alcohol consumption",
            "Maintain a healthy weight through diet and exercise",
            "Protect your skin from excessive sun exposure",
            "Know your family history and discuss it with your doctor",
        ],
        [
            "What cancer screenings are recommended for someone my age?",
            "How does family history affect my cancer risk?",
            "What lifestyle changes can help reduce cancer risk?",
            "What are the warning signs I should watch for?",
        ],
    )


def diabetes_info(ctx: RuleContext) -> AssessmentResult:
    notes = []
    elevated_cholesterol = ctx.metrics is not None and _cholesterol(ctx.metrics) > 200
    if elevated_cholesterol:
        notes.append(
            "Based on your elevated cholesterol levels, you may have an increased risk for Type 2 "
            "diabetes. It's important to discuss this with your healthcare provider."
        )
    days = _exercise_days(ctx.profile)
    if days is not None and days < 3:
        notes.append(
            "Your current exercise frequency is below recommendations, which can increase diabetes "
            "risk. Consider gradually increasing physical activity."
        )
    answer = (
        "Diabetes is a chronic condition that affects how your body processes blood sugar (glucose). "
        "There are several types, with Type 2 being the most common and often related to lifestyle "
        "factors. Key management strategies include monitoring blood glucose, a healthy diet, regular "
        "physical activity, and medication if prescribed."
    )
    if notes:
        answer += "\n\n" + "\n".join(notes)
    return _result(
        answer,
        [
            "Monitor blood glucose levels regularly if at risk",
            "Maintain a balanced diet low in refined sugars",
            "Exercise regularly to improve insulin sensitivity",
            "Maintain a healthy weight",
        ],
        [
            "Choose complex carbohydrates over simple sugars",
            "Aim for at least 150 minutes of moderate exercise weekly",
            "Maintain a healthy weight through diet and exercise",
            "Limit alcohol consumption",
        ],
        [
            "What are the early warning signs of diabetes?",
            "How does diet affect blood sugar levels?",
            "What tests are used to diagnose diabetes?",
            "How can I prevent or delay type 2 diabetes onset?",
        ],
        risk_level="medium" if elevated_cholesterol else "low",
    )


def blood_pressure_info(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Blood pressure is the force of blood pushing against the walls of your arteries. Normal blood "
        "pressure is less than 120/80 mm Hg; readings consistently at or above 130/80 mm Hg indicate "
        "hypertension, which increases your risk of heart disease and stroke."
    )
    risk: RiskLevel = "low"
    emergency = False
    if _has_bp(ctx.metrics):
        sys_, dia = ctx.metrics.blood_pressure_systolic, ctx.metrics.blood_pressure_diastolic
        answer += f"\n\nYour latest reading of {_bp_text(ctx.metrics)} mmHg is {interpret_blood_pressure(sys_, dia)}."
        category = blood_pressure_category(sys_, dia)
        emergency = is_hypertensive_crisis(sys_, dia)
        if category == "stage_2":
            risk = "medium"
    else:
        answer += "\n\nI don't have your current blood pressure readings."
    return _result(
        answer,
        [
            "Monitor your blood pressure regularly",
            "Limit sodium intake to less than 2,300mg daily",
            "Engage in regular physical activity",
            "Manage stress through relaxation techniques",
        ],
        [
            "Follow the DASH diet (rich in fruits, vegetables, and low-fat dairy)",
            "Limit alcohol consumption",
            "Maintain a healthy weight",
            "Quit smoking if applicable",
        ],
        [
            "What's considered a healthy blood pressure range?",
            "How often should I check my blood pressure?",
            "What foods should I avoid for healthy blood pressure?",
            "When should I consider medication for blood pressure?",
        ],
        risk_level=risk,
        is_emergency=emergency,
    )


def heart_disease_info(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Heart disease refers to several conditions that affect heart function, with coronary artery "
        "disease being the most common. Risk factors include high blood pressure, high cholesterol, "
        "smoking, diabetes, obesity, and family history."
    )
    profile = ctx.profile
    risk: RiskLevel = "low"
    if profile and (profile.has_heart_condition or profile.had_heart_attack):
        risk = "high"
        answer += "\n\nBecause your profile records a heart condition, keep regular cardiology follow-ups."
    elif has_family_heart_history(profile):
        risk = "medium"
        answer += "\n\nYour family history of heart disease raises your risk, so regular screening matters."
    return _result(
        answer,
        [
            "Schedule regular check-ups to monitor heart health",
            "Follow a heart-healthy diet low in saturated fats",
            "Engage in regular aerobic exercise",
            "Take prescribed medications as directed",
        ],
        [
            "Maintain a healthy blood pressure and cholesterol level",
            "Avoid tobacco products and limit alcohol consumption",
            "Manage stress through relaxation techniques",
            "Maintain a healthy weight",
        ],
        [
            "What are the warning signs of a heart attack?",
            "How does exercise benefit heart health?",
            "What dietary changes promote heart health?",
            "What tests can assess my heart health?",
        ],
        risk_level=risk,
    )


def cholesterol_info(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Cholesterol is a waxy substance found in your blood. While your body needs cholesterol to "
        "build healthy cells, high cholesterol levels can increase your risk of heart disease."
    )
    risk: RiskLevel = "low"
    if ctx.metrics is not None and ctx.metrics.cholesterol:
        total = ctx.metrics.cholesterol
        answer += f"\n\nYour latest total cholesterol is {total:g} mg/dL."
        if total >= 240:
            risk = "medium"
    return _result(
        answer,
        [
            "Get your cholesterol levels checked regularly",
            "Eat a diet low in saturated and trans fats",
            "Exercise regularly to raise HDL (good) cholesterol",
            "Consider medication if lifestyle changes aren't enough",
        ],
        [
            "Eat foods rich in omega-3 fatty acids and soluble fiber",
            "Limit intake of red meat and full-fat dairy products",
            "Maintain a healthy weight",
            "Avoid smoking and excessive alcohol consumption",
        ],
        [
            "What's the difference between HDL and LDL cholesterol?",
            "How often should I get my cholesterol checked?",
            "What foods can help lower cholesterol?",
            "At what level should I be concerned about my cholesterol?",
        ],
        risk_level=risk,
    )


def exercise_info(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Regular physical activity is one of the most important things you can do for your health. It "
        "can help control weight, reduce risk of heart disease, strengthen bones and muscles, and "
        "improve mental health and mood."
    )
    days = _exercise_days(ctx.profile)
    if days is not None:
        answer += f"\n\nYou currently exercise about {days} day(s) per week."
    return _result(
        answer,
        [
            "Aim for at least 150 minutes of moderate aerobic activity weekly",
            "Include strength training exercises at least twice weekly",
            "Start slowly and gradually increase intensity if you're new to exercise",
            "Choose activities you enjoy to maintain motivation",
        ],
        [
            "Warm up before and cool down after exercise",
            "Stay hydrated before, during, and after physical activity",
            "Use proper form and equipment to prevent injuries",
            "Listen to your body and rest when needed",
        ],
        [
            "What type of exercise is best for my health goals?",
            "How can I fit exercise into my busy schedule?",
            "What exercises are safe if I have joint problems?",
            "How long before I see results from exercise?",
        ],
    )


def diet_info(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "A healthy diet is essential for overall health and can help prevent many chronic diseases. "
        "Focus on balanced nutrition with a variety of fruits, vegetables, whole grains, lean proteins, "
        "and healthy fats."
    )
    if ctx.profile and ctx.profile.lifestyle.diet:
        answer += f"\n\nYour profile describes your diet as: {ctx.profile.lifestyle.diet}."
    return _result(
        answer,
        [
            "Fill half your plate with fruits and vegetables",
            "Choose whole grains over refined grains",
            "Include a variety of protein sources",
            "Limit added sugars, sodium, and unhealthy fats",
        ],
        [
            "Practice mindful eating to avoid overeating",
            "Prepare more meals at home to control ingredients",
            "Stay hydrated by drinking water throughout the day",
            "Read nutrition labels when shopping for food",
        ],
        [
            "What dietary approach is best for my health goals?",
            "How can I reduce sugar in my diet?",
            "What are good sources of plant-based protein?",
            "How can I make healthy eating more affordable?",
        ],
    )


def _medication_names(profile: Optional[HealthProfile]) -> List[str]:
    if profile is None:
        return []
    return [m.name for m in profile.medications if m.name]


def medication_info(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Medications can be essential tools in managing and treating health conditions. Understanding "
        "how to use them properly and being aware of potential side effects is important for "
        "medication safety."
    )
    names = _medication_names(ctx.profile)
    if names:
        answer += f"\n\nYour recorded medications: {', '.join(names)}."
    return _result(
        answer,
        [
            "Always take medications as prescribed by your healthcare provider",
            "Keep an updated list of all medications you take",
            "Inform all healthcare providers about all medications you're taking",
            "Store medications according to instructions",
        ],
        [
            "Ask about potential side effects when starting new medications",
            "Don't stop taking prescribed medications without consulting your doctor",
            "Use the same pharmacy for all prescriptions when possible",
            "Dispose of unused medications properly",
        ],
        [
            "What should I do if I miss a dose of my medication?",
            "How can I manage potential side effects?",
            "Are there any foods or other medications I should avoid?",
            "Are there generic alternatives to my prescription?",
        ],
    )


def generic_topic(topic: str) -> AssessmentResult:
    return _result(
        f"{_capitalize(topic)} is an important health topic to understand. For personalized information "
        "about this topic, consider consulting with a healthcare professional who can provide guidance "
        "specific to your health situation.",
        [
            "Consult with a healthcare provider for personalized advice",
            "Research this topic from reputable medical sources",
            "Consider how this topic relates to your overall health plan",
            "Track any relevant symptoms or concerns",
        ],
        [
            "Maintain regular health check-ups",
            "Follow a balanced diet and regular exercise routine",
            "Get adequate sleep and manage stress",
            "Avoid tobacco and limit alcohol consumption",
        ],
        [
            f"How does {topic} relate to my current health status?",
            f"What lifestyle changes might help with {topic}?",
            f"Are there specific risk factors I should know about {topic}?",
            f"What are the latest medical advances regarding {topic}?",
        ],
    )


def generic_condition(condition: str) -> AssessmentResult:
    return _result(
        f"{_capitalize(condition)} is an important health topic. While I don't have specific personalized "
        "information about this condition in relation to your health profile, I can provide general "
        f"information.\n\nTo get detailed, personalized guidance about {condition} and how it might relate "
        "to your specific health situation, I recommend consulting with your healthcare provider.",
        [
            "Consult with your healthcare provider for personalized advice",
            "Keep track of any symptoms or concerns to discuss with your doctor",
            "Consider researching reputable medical sources like Mayo Clinic or CDC",
            "Bring a list of questions to your next appointment",
        ],
        [
            "Maintain regular health check-ups",
            "Follow a balanced diet and regular exercise routine",
            "Get adequate sleep and manage stress levels",
            "Avoid tobacco and limit alcohol consumption",
        ],
        [
            f"What are the most common symptoms of {condition}?",
            f"How is {condition} typically diagnosed?",
            f"What lifestyle factors affect {condition}?",
            f"What treatments are available for {condition}?",
        ],
    )


# -----------------------------
# Personal data summary
# -----------------------------
def risk_factors(profile: Optional[HealthProfile], metrics: Optional[HealthMetrics]) -> List[str]:
    factors: List[str] = []
    if metrics is not None:
        if (metrics.blood_pressure_systolic or 0) > 130 or (metrics.blood_pressure_diastolic or 0) > 80:
            factors.append("elevated blood pressure")
        if (metrics.heart_rate or 0) > 100:
            factors.append("elevated heart rate")
        if (metrics.cholesterol or 0) > 200:
            factors.append("elevated cholesterol")
    if profile is not None:
        lifestyle = profile.lifestyle
        if lifestyle.smoker:
            factors.append("smoking")
        if lifestyle.alcohol_consumption == "heavy":
            factors.append("high alcohol consumption")
        if lifestyle.exercise_frequency < 3:
            factors.append("low physical activity")
    return factors


def _recorded(value: Optional[float]) -> str:
    return f"{value:g}" if value else "not recorded"


def vitals_lines(metrics: Optional[HealthMetrics]) -> List[str]:
    if _has_bp(metrics):
        bp = f"{_bp_text(metrics)} mmHg ({interpret_blood_pressure(metrics.blood_pressure_systolic, metrics.blood_pressure_diastolic)})"
    else:
        bp = "not recorded (unknown)"
    m = metrics or HealthMetrics()
    return [
        f"• Blood Pressure: {bp}",
        f"• Heart Rate: {_recorded(m.heart_rate)} BPM",
        f"• Cholesterol: {_recorded(m.cholesterol)} mg/dL",
        f"• Weight: {_recorded(m.weight)} kg",
    ]


def symptom_lines(symptoms: List[Symptom], limit: int = 3) -> List[str]:
    lines = []
    for s in symptoms[:limit]:
        flag = " - warning sign" if is_emergency_symptom(s) else ""
        lines.append(f"• {s.type} (Severity: {s.severity}/10, reported {format_date(s.timestamp)}){flag}")
    return lines


def report_lines(reports: List[MedicalReport], limit: int = 2) -> List[str]:
    return [f"• {r.type} ({format_date(r.date)}) from {r.facility}" for r in reports[:limit]]


def personal_data_summary(ctx: RuleContext) -> AssessmentResult:
    factors = risk_factors(ctx.profile, ctx.metrics)
    parts = [
        "Based on your health data, here's a summary of your current health status:",
        "Vital Signs:\n" + "\n".join(vitals_lines(ctx.metrics)),
    ]
    if ctx.symptoms:
        parts.append("Recent Symptoms:\n" + "\n".join(symptom_lines(ctx.symptoms)))
    else:
        parts.append("No recent symptoms recorded.")
    if ctx.reports:
        parts.append("Recent Medical Reports:\n" + "\n".join(report_lines(ctx.reports)))
    else:
        parts.append("No recent medical reports available.")
    if factors:
        parts.append("Potential Health Risk Factors:\n" + "\n".join(f"• {f}" for f in factors))
    else:
        parts.append("No significant risk factors identified based on available data.")
    parts.append("Would you like more detailed information about any specific aspect of your health data?")

    return _result(
        "\n\n".join(parts),
        [
            "Continue monitoring your vital signs regularly",
            "Discuss any concerning trends with your healthcare provider",
            "Update your health profile with any new diagnoses or medications",
            "Schedule recommended health screenings for your age and gender",
        ],
        [
            "Maintain a balanced diet rich in fruits, vegetables, and whole grains",
            "Aim for at least 150 minutes of moderate exercise weekly",
            "Ensure adequate sleep (7-9 hours nightly)",
            "Practice stress management techniques like meditation or deep breathing",
        ],
        [
            "What do my blood pressure readings mean?",
            "How can I improve my cholesterol levels?",
            "What health screenings should I schedule?",
            "How can I reduce my health risk factors?",
        ],
        risk_level="medium" if len(factors) > 2 else "low",
    )


# -----------------------------
# Symptom triage and topical buckets
# -----------------------------
def symptom_triage(ctx: RuleContext) -> AssessmentResult:
    q = ctx.text
    emergency = "severe" in q or "extreme pain" in q or "chest pain" in q
    risk: RiskLevel = "high" if "severe" in q else "medium" if "moderate" in q else "low"
    answer = (
        "Based on the symptoms you've described, I can provide some general information. Remember that "
        "proper medical diagnosis requires an evaluation by a healthcare professional."
    )
    if emergency:
        answer += (
            "\n\nThe symptoms you describe may need immediate medical attention. If they are sudden or "
            "getting worse, call emergency services (911) now."
        )
    if ctx.symptoms:
        latest = ctx.symptoms[0]
        answer += f"\n\nYour most recent logged symptom is {latest.type} (severity {latest.severity}/10)."
    return _result(
        answer,
        [
            "Keep track of your symptoms, including timing, duration, and triggers",
            "Consider consulting a healthcare provider for proper evaluation",
            "Rest and stay hydrated while recovering",
            "Follow any treatment plans you've previously been given for similar symptoms",
        ],
        [
            "Maintain a healthy lifestyle with proper nutrition and exercise",
            "Ensure adequate sleep and stress management",
            "Avoid known triggers for your symptoms",
            "Stay up to date with recommended vaccinations and health screenings",
        ],
        [
            "How long have you been experiencing these symptoms?",
            "Have you noticed any patterns or triggers for your symptoms?",
            "Have you tried any treatments or remedies?",
            "Have you experienced similar symptoms in the past?",
        ],
        risk_level=risk,
        is_emergency=emergency,
    )


def exercise_advice(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Regular physical activity is crucial for maintaining good health. The right exercise program "
        "depends on your current fitness level, health conditions, and personal goals."
    )
    days = _exercise_days(ctx.profile)
    if days is not None and days < 3:
        answer += f"\n\nYou currently exercise {days} day(s) a week; building up to at least 3 is a good first goal."
    if ctx.profile and (ctx.profile.has_heart_condition or ctx.profile.had_heart_attack):
        answer += "\n\nWith your heart history, check with your cardiologist before starting a new program."
    return _result(
        answer,
        [
            "Aim for at least 150 minutes of moderate aerobic activity weekly",
            "Include strength training exercises at least twice weekly",
            "Start with low-intensity activities if you're new to exercise",
            "Consider activities you enjoy to maintain motivation",
        ],
        [
            "Always warm up before and cool down after exercise",
            "Stay hydrated during physical activity",
            "Use proper form and equipment to prevent injuries",
            "Increase intensity and duration gradually",
        ],
        [
            "What are your fitness goals?",
            "Do you have any physical limitations or health concerns?",
            "What types of exercise do you enjoy?",
            "How can you fit regular exercise into your schedule?",
        ],
    )


def diet_advice(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "A balanced diet plays a vital role in maintaining good health and preventing chronic diseases. "
        "Nutritional needs vary based on age, gender, activity level, and health conditions."
    )
    if ctx.profile and ctx.profile.allergies:
        answer += f"\n\nRemember to avoid your recorded allergens: {', '.join(ctx.profile.allergies)}."
    if ctx.metrics is not None and _cholesterol(ctx.metrics) > 200:
        answer += "\n\nWith your cholesterol above 200 mg/dL, limiting saturated fats is especially important."
    return _result(
        answer,
        [
            "Eat a variety of fruits and vegetables daily",
            "Choose whole grains over refined grains",
            "Include lean proteins and healthy fats",
            "Limit added sugars, sodium, and processed foods",
        ],
        [
            "Practice portion control to maintain a healthy weight",
            "Stay hydrated by drinking water throughout the day",
            "Plan meals ahead to make healthier choices",
            "Read nutrition labels when shopping",
        ],
        [
            "Are you following any specific dietary pattern?",
            "Do you have any food allergies or intolerances?",
            "Are there specific foods you struggle to include or avoid?",
            "How can you make healthy eating more practical for your lifestyle?",
        ],
    )


def sleep_advice(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Quality sleep is essential for physical health, mental well-being, and cognitive function. Most "
        "adults need 7-9 hours of sleep per night for optimal health."
    )
    if ctx.profile and ctx.profile.lifestyle.stress_level > 7:
        answer += "\n\nYour reported stress level is high, which often disrupts sleep."
    return _result(
        answer,
        [
            "Maintain a consistent sleep schedule, even on weekends",
            "Create a restful environment that's cool, quiet, and dark",
            "Limit exposure to screens before bedtime",
            "Avoid caffeine, large meals, and alcohol close to bedtime",
        ],
        [
            "Establish a relaxing bedtime routine",
            "Exercise regularly, but not too close to bedtime",
            "Manage stress through relaxation techniques",
            "Limit daytime naps to 20-30 minutes",
        ],
        [
            "How many hours of sleep do you typically get?",
            "Do you have trouble falling asleep or staying asleep?",
            "What's your bedtime routine like?",
            "How does your sleep environment affect your rest?",
        ],
    )


def mental_health(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Mental health is an essential component of overall well-being. Taking care of your mental "
        "health includes managing stress, understanding your emotions, and seeking support when needed."
    )
    if ctx.profile:
        answer += f"\n\nYou rated your stress level at {ctx.profile.lifestyle.stress_level}/10."
    return _result(
        answer,
        [
            "Practice stress management techniques like meditation or deep breathing",
            "Maintain social connections and supportive relationships",
            "Seek professional help if experiencing persistent mental health concerns",
            "Prioritize self-care activities that you enjoy",
        ],
        [
            "Establish healthy boundaries in work and personal life",
            "Get regular physical activity, which can improve mood",
            "Ensure adequate sleep and proper nutrition",
            "Limit alcohol and avoid recreational drugs",
        ],
        [
            "What stress management techniques work best for you?",
            "How do you practice self-care in your daily routine?",
            "Are there specific mental health concerns you're experiencing?",
            "What support systems do you have in place?",
        ],
    )


def medication_advice(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Medications can be important tools for managing health conditions. Using them safely and "
        "effectively requires understanding their purpose, proper dosing, potential side effects, and "
        "interactions."
    )
    schedule = medication_schedule(ctx.profile)
    if schedule:
        answer += "\n\nYour current medication schedule:\n" + schedule
    return _result(
        answer,
        [
            "Take medications exactly as prescribed",
            "Keep a current list of all medications you take",
            "Use one pharmacy for all prescriptions when possible",
            "Discuss any concerns about your medications with your healthcare provider",
        ],
        [
            "Store medications properly according to instructions",
            "Check expiration dates regularly",
            "Don't stop taking prescribed medications without consulting your doctor",
            "Dispose of unused medications properly",
        ],
        [
            "Are you experiencing any side effects from your medications?",
            "Do you have questions about how to take your medications?",
            "Are you taking any over-the-counter medications or supplements?",
            "How do you remember to take your medications as prescribed?",
        ],
    )


def risk_assessment(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Understanding your health risks can help you take preventive measures and make informed "
        "decisions about your health. Risk factors can be genetic, environmental, or lifestyle-related."
    )
    risk: RiskLevel = "low"
    emergency = False
    if ctx.profile is not None or ctx.metrics is not None:
        assessment = classify(ctx.profile, ctx.metrics)
        risk, emergency = assessment.risk_level, assessment.is_emergency
        answer += (
            f"\n\nBased on your data, your estimated cardiovascular risk is {assessment.tier.value} "
            f"(score {assessment.score}/100)."
        )
        tips = health_tips(ctx.profile)
        if tips:
            answer += "\n\n" + "\n".join(f"• {t}" for t in tips)
    return _result(
        answer,
        [
            "Schedule regular check-ups and recommended screenings",
            "Discuss your family health history with your healthcare provider",
            "Address modifiable risk factors through lifestyle changes",
            "Stay informed about health conditions you may be at risk for",
        ],
        [
            "Maintain a healthy weight through diet and exercise",
            "Avoid tobacco and limit alcohol consumption",
            "Manage stress through healthy coping mechanisms",
            "Follow safety precautions to prevent accidents and injuries",
        ],
        [
            "Are you aware of any specific health conditions in your family history?",
            "When was your last comprehensive health check-up?",
            "Are there specific health risks you're concerned about?",
            "What preventive measures are you currently taking?",
        ],
        risk_level=risk,
        is_emergency=emergency,
    )


def report_review(ctx: RuleContext) -> AssessmentResult:
    answer = (
        "Medical reports and test results provide valuable information about your health status. "
        "Understanding these reports can help you and your healthcare provider make informed decisions "
        "about your care."
    )
    if ctx.reports:
        answer += "\n\nYour most recent reports:\n" + "\n".join(report_lines(ctx.reports))
        pending = [r for r in ctx.reports if r.follow_up]
        if pending:
            answer += f"\n\n{len(pending)} report(s) call for a follow-up visit."
    return _result(
        answer,
        [
            "Keep copies of all your medical reports for your records",
            "Discuss any abnormal results with your healthcare provider",
            "Follow up with recommended additional testing if applicable",
            "Schedule follow-up appointments as advised",
        ],
        [
            "Attend all recommended screening tests for your age and risk factors",
            "Prepare questions about your reports before medical appointments",
            "Follow lifestyle recommendations based on your test results",
            "Stay consistent with monitoring if you have chronic conditions",
        ],
        [
            "Do you have questions about any specific test results?",
            "Has your doctor explained what your test results mean for your health?",
            "Are there any follow-up tests recommended?",
            "How frequently should you have these tests repeated?",
        ],
    )


def general_wellness(ctx: RuleContext) -> AssessmentResult:
    topic = ctx.query.strip().rstrip("?!.") or "your health"
    return _result(
        f'You asked about "{topic}". Overall health involves many interconnected factors, including '
        "physical activity, nutrition, sleep, stress management, and preventive care. A balanced approach "
        "to these factors contributes to well-being and disease prevention.",
        [
            "Maintain regular check-ups with healthcare providers",
            "Follow a balanced diet rich in fruits, vegetables, and whole grains",
            "Aim for at least 150 minutes of moderate exercise weekly",
            "Prioritize quality sleep and stress management",
        ],
        [
            "Stay up to date with recommended vaccinations",
            "Practice good hygiene habits",
            "Maintain a healthy weight",
            "Avoid tobacco and limit alcohol consumption",
        ],
        [
            "What aspect of your health would you like to focus on improving?",
            "Are there specific health goals you're working toward?",
            "What preventive health measures are you currently following?",
            "How balanced do you feel your approach to health is currently?",
        ],
    )


# -----------------------------
# Session replies that bypass the rule engine
# -----------------------------
def _conditions_phrase(profile: Optional[HealthProfile]) -> str:
    if profile and profile.conditions:
        return f"are managing {' and '.join(profile.conditions)}."
    return "have no major health conditions recorded."


def greeting_text(patient: PatientContext) -> str:
    name = patient.profile.name if patient.profile and patient.profile.name else ""
    hello = f"Hello{' ' + name if name else ''}!"
    parts = [
        f"{hello} I'm here to help you with your health concerns. I see from your profile that you "
        f"{_conditions_phrase(patient.profile)}"
    ]
    if patient.metrics is not None:
        parts.append("Your latest readings:\n" + "\n".join(vitals_lines(patient.metrics)))
    else:
        parts.append("I don't have any recent vitals for you yet.")
    if patient.symptoms:
        parts.append("Recently logged symptoms:\n" + "\n".join(symptom_lines(patient.symptoms)))
    if patient.reports:
        parts.append("Latest reports:\n" + "\n".join(report_lines(patient.reports)))
    parts.append(
        "How are you feeling today? Please feel free to describe how you're feeling or ask any "
        "health-related questions."
    )
    return "\n\n".join(parts)


def assessment_overview_text(patient: PatientContext) -> str:
    lines = vitals_lines(patient.metrics)
    profile = patient.profile
    if profile and profile.conditions:
        lines.append(f"• Conditions: {', '.join(profile.conditions)}")
    names = _medication_names(profile)
    if names:
        lines.append(f"• Medications: {', '.join(names)}")
    return (
        "I'll help you with a comprehensive health assessment. Based on your profile, let's focus on "
        "what's most relevant for you.\n\nCurrent Health Overview:\n"
        + "\n".join(lines)
        + "\n\nPlease tell me about any specific concerns or symptoms you're experiencing."
    )
