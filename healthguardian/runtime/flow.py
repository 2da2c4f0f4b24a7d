# healthguardian/runtime/flow.py
from __future__ import annotations

from pocketflow import AsyncFlow

from healthguardian.runtime.nodes.assistant import AssistantNode
from healthguardian.runtime.nodes.compose import MessageComposeNode
from healthguardian.runtime.nodes.gemini import GeminiChatNode
from healthguardian.runtime.nodes.greeting import AssessmentOverviewNode, GreetingNode
from healthguardian.runtime.nodes.intent import IntentRouteNode
from healthguardian.runtime.nodes.local_fallback import LocalFallbackNode
from healthguardian.runtime.nodes.prompt import PromptBuildNode
from healthguardian.runtime.nodes.reply_parse import ReplyParseNode
from healthguardian.runtime.nodes.warning_signs import WarningSignsNode


def make_assistant_flow(**gemini_kwargs) -> AsyncFlow:
    """AI answer with local degradation:
    prompt → gemini → (ok → reply_parse → compose)
                    → (degraded → local_fallback → compose)
    """

    prompt = PromptBuildNode()
    gemini = GeminiChatNode(**gemini_kwargs)
    reply_parse = ReplyParseNode()
    local_fallback = LocalFallbackNode()
    compose = MessageComposeNode()

    prompt.successors = {"ok": gemini}
    gemini.successors = {
        "ok": reply_parse,
        "degraded": local_fallback,
    }
    reply_parse.successors = {"ok": compose}
    local_fallback.successors = {"ok": compose}

    return AsyncFlow(start=prompt)


def make_fallback_flow() -> AsyncFlow:
    """local_fallback → compose; used when the AI path is abandoned."""

    local_fallback = LocalFallbackNode()
    compose = MessageComposeNode()
    local_fallback.successors = {"ok": compose}
    return AsyncFlow(start=local_fallback)


def make_turn_flow() -> AsyncFlow:
    """One user turn:
    intent → (greeting → greeting)
           → (assessment → assessment_overview)
           → (warning_signs → warning_signs)
           → (ok → assistant)
    """

    intent = IntentRouteNode()
    intent.successors = {
        "greeting": GreetingNode(),
        "assessment": AssessmentOverviewNode(),
        "warning_signs": WarningSignsNode(),
        "ok": AssistantNode(),
    }
    return AsyncFlow(start=intent)
