from __future__ import annotations

import re
from typing import Any, Dict

from pocketflow import AsyncNode

from healthguardian.engine.quick_replies import QuickReplyIntent, resolve_intent
from healthguardian.engine.rules import MEDICAL_TERMS, first_term, has_symptom_word

_GREETING_RE = re.compile(r"\b(hi|hello|hey|greetings|good (morning|afternoon|evening))\b", re.I)

_INTENT_ROUTES = {
    QuickReplyIntent.START_ASSESSMENT: "assessment",
    QuickReplyIntent.VIEW_WARNING_SIGNS: "warning_signs",
}


def _normalize(s: str) -> str:
    return (s or "").strip().lower()


def is_greeting(text: str) -> bool:
    """A greeting token with nothing clinical in the same turn."""
    text = _normalize(text)
    if not _GREETING_RE.search(text):
        return False
    return not has_symptom_word(text) and first_term(text, MEDICAL_TERMS) is None


def route_for(text: str) -> str:
    intent = resolve_intent(text)
    if intent in _INTENT_ROUTES:
        return _INTENT_ROUTES[intent]
    if is_greeting(text):
        return "greeting"
    return "ok"


class IntentRouteNode(AsyncNode):
    """Route a user turn: greeting | assessment | warning_signs | ok."""

    async def prep_async(self, shared: Dict[str, Any]) -> str:
        return shared.get("text") or ""

    async def exec_async(self, prep: str) -> Dict[str, Any]:
        # pure result; no shared mutation here
        return {"route": route_for(prep), "intent": resolve_intent(prep)}

    async def post_async(self, shared: Dict[str, Any], prep: str, exec_res: Dict[str, Any]) -> str:
        shared["intent"] = exec_res["intent"]
        shared["route"] = exec_res["route"]
        return exec_res["route"]
