# healthguardian/engine/parser.py
"""Three-tier parsing of raw Gemini output into an AssessmentResult.

1. direct: the whole reply is the JSON object
2. embedded: the first ``{`` .. last ``}`` span is the JSON object
3. mined: heuristics over the plain text (total, never raises)
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import List, Sequence, Union

from pydantic import ValidationError

from healthguardian.config.logger import get_logger
from healthguardian.schemas.chat import AssessmentResult, RiskLevel

logger = get_logger(__name__)

REQUIRED_FIELDS = ("answer", "isEmergency", "riskLevel")

EMERGENCY_PHRASES = ("emergency", "immediate medical attention", "call 911")
MEDIUM_PHRASES = ("concerning", "moderate risk", "should consult", "consult your doctor")
RECOMMENDATION_KEYWORDS = ("recommend", "advised", "should", "suggestion")
RECOMMENDATION_SENTENCE_KEYWORDS = ("recommend", "should", "advised", "important to")
PREVENTION_KEYWORDS = ("prevent", "avoid", "reduce risk", "lifestyle")
PREVENTION_SENTENCE_KEYWORDS = ("prevent", "avoid", "reduce risk")

MIN_ITEM_LEN = 10
MAX_ITEM_LEN = 100
MAX_ITEMS = 5

_EMBEDDED_RE = re.compile(r"\{[\s\S]*\}")
_PARAGRAPH_RE = re.compile(r"\r?\n\s*\r?\n")
_BULLET_RE = re.compile(r"^\s*[•\-*]\s+(.*\S)")
_NUMBERED_RE = re.compile(r"^\s*\d+[.)]\s+(.*\S)")
# a trailing fragment without closing punctuation is not a sentence
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")

GENERIC_FOLLOW_UPS = [
    "What lifestyle changes can help with this condition?",
    "Are there any warning signs I should watch for?",
    "How is this typically diagnosed?",
    "What preventive measures are recommended?",
    "What treatment options are available?",
]

PAIN_FOLLOW_UPS = [
    "What might be causing this pain?",
    "When should I seek medical attention for this pain?",
    "What pain management techniques might help?",
    "Could this pain be related to a serious condition?",
    "What tests might a doctor order to diagnose the cause?",
]

MEDICATION_FOLLOW_UPS = [
    "What are the common side effects?",
    "Are there any serious side effects I should watch for?",
    "How does this medication interact with others I'm taking?",
    "What should I do if I miss a dose?",
    "Are there lifestyle modifications I should make while taking this?",
]

DIET_FOLLOW_UPS = [
    "What foods should I incorporate more of?",
    "Are there specific foods I should avoid?",
    "How might my diet affect my current health conditions?",
    "What dietary changes could help with my symptoms?",
    "Should I consider any supplements?",
]


@dataclass(frozen=True)
class Parsed:
    result: AssessmentResult
    tier: int


@dataclass(frozen=True)
class Unparseable:
    raw_text: str


ParseOutcome = Union[Parsed, Unparseable]


# -----------------------------
# Tiers 1 and 2
# -----------------------------
def _strict_decode(text: str) -> AssessmentResult | None:
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    if any(data.get(k) is None for k in REQUIRED_FIELDS) or not isinstance(data["answer"], str):
        return None
    try:
        return AssessmentResult.model_validate(data)
    except ValidationError:
        return None


def decode_structured(raw_text: str) -> ParseOutcome:
    """Try the direct and embedded-object tiers."""
    text = (raw_text or "").strip()
    result = _strict_decode(text)
    if result is not None:
        return Parsed(result, tier=1)

    m = _EMBEDDED_RE.search(text)
    if m:
        result = _strict_decode(m.group(0))
        if result is not None:
            return Parsed(result, tier=2)
    return Unparseable(raw_text or "")


# -----------------------------
# Tier 3
# -----------------------------
def _contains_any(text: str, words: Sequence[str]) -> bool:
    return any(w in text for w in words)


def detect_emergency(text: str) -> bool:
    return _contains_any(text.lower(), EMERGENCY_PHRASES)


def determine_risk_level(text: str) -> RiskLevel:
    lower = text.lower()
    if _contains_any(lower, EMERGENCY_PHRASES) or (
        "severe" in lower and ("risk" in lower or "condition" in lower)
    ):
        return "high"
    if _contains_any(lower, MEDIUM_PHRASES):
        return "medium"
    return "low"


def _list_items(section: str) -> List[str]:
    items: List[str] = []
    for line in section.splitlines():
        m = _BULLET_RE.match(line) or _NUMBERED_RE.match(line)
        if m:
            items.append(m.group(1).strip())
    return items


def _clean(items: List[str]) -> List[str]:
    out: List[str] = []
    for item in items:
        s = " ".join(item.split())
        if MIN_ITEM_LEN <= len(s) <= MAX_ITEM_LEN and s.lower() not in (x.lower() for x in out):
            out.append(s)
    return out[:MAX_ITEMS]


def extract_listed(text: str, keywords: Sequence[str], sentence_keywords: Sequence[str]) -> List[str]:
    """List lines inside, or directly after, a paragraph mentioning a keyword.

    Falls back to whole sentences containing ``sentence_keywords``.
    """
    sections = [s for s in _PARAGRAPH_RE.split(text) if s.strip()]
    found: List[str] = []
    for i, section in enumerate(sections):
        lower = section.lower()
        follows_keyword = i > 0 and _contains_any(sections[i - 1].lower(), keywords)
        if _contains_any(lower, keywords) or follows_keyword:
            found.extend(_list_items(section))

    items = _clean(found)
    if items:
        return items

    sentences = [s.strip() for s in _SENTENCE_RE.findall(text)]
    return _clean([s for s in sentences if _contains_any(s.lower(), sentence_keywords)])


def extract_recommendations(text: str) -> List[str]:
    return extract_listed(text, RECOMMENDATION_KEYWORDS, RECOMMENDATION_SENTENCE_KEYWORDS)


def extract_preventive_advice(text: str) -> List[str]:
    return extract_listed(text, PREVENTION_KEYWORDS, PREVENTION_SENTENCE_KEYWORDS)


def follow_up_questions(query: str) -> List[str]:
    q = (query or "").lower()
    if "pain" in q:
        return list(PAIN_FOLLOW_UPS)
    if "medication" in q or "drug" in q:
        return list(MEDICATION_FOLLOW_UPS)
    if "diet" in q or "nutrition" in q:
        return list(DIET_FOLLOW_UPS)
    return list(GENERIC_FOLLOW_UPS)


def mine_text(raw_text: str, query: str = "") -> AssessmentResult:
    text = raw_text or ""
    return AssessmentResult(
        answer=text,
        is_emergency=detect_emergency(text),
        risk_level=determine_risk_level(text),
        recommendations=extract_recommendations(text),
        preventive_advice=extract_preventive_advice(text),
        follow_up_questions=follow_up_questions(query),
    )


def parse(raw_text: str, query: str = "") -> AssessmentResult:
    """Parse an AI reply; always returns a complete AssessmentResult."""
    outcome = decode_structured(raw_text)
    if isinstance(outcome, Parsed):
        logger.debug("AI reply parsed at tier %s", outcome.tier)
        return outcome.result
    logger.info("AI reply is not structured JSON; mining %d chars of text", len(outcome.raw_text))
    return mine_text(outcome.raw_text, query)
