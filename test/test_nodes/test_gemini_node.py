# test/test_nodes/test_gemini_node.py
import pytest
from typing import Any, Dict, List

try:
    from pocketflow import AsyncFlow as Flow
except ImportError:
    from pocketflow import Flow

from healthguardian.config.settings import AIServiceConfig
from healthguardian.engine.context import Prompt
from healthguardian.runtime.nodes.gemini import GeminiChatNode, backoff_delay
from healthguardian.services.gemini_client import GeminiError, GeminiRateLimitError


class ScriptedGeminiClient:
    """Plays back a list of outcomes: exceptions are raised, strings returned."""

    def __init__(self, outcomes: List[Any]) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[Dict[str, str]] = []

    async def generate(self, system_prompt: str, conversation_text: str) -> str:
        self.calls.append({"system_prompt": system_prompt, "conversation_text": conversation_text})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _shared(client, **config) -> Dict[str, Any]:
    return {
        "client": client,
        "config": AIServiceConfig(api_key="test", **config),
        "prompt": Prompt(system_prompt="SYS", conversation_text="User: hi"),
    }


def _run(node):
    node.successors = {}
    return Flow(start=node)


@pytest.mark.asyncio
async def test_rate_limited_twice_then_success_makes_three_calls():
    client = ScriptedGeminiClient([GeminiRateLimitError("429"), GeminiRateLimitError("429"), "REPLY"])
    delays: List[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    shared = _shared(client)
    action = await _run(GeminiChatNode(sleep=fake_sleep, rng=lambda: 0.5)).run_async(shared)

    assert action == "ok"
    assert len(client.calls) == 3
    assert shared["raw_reply"] == "REPLY"
    assert shared["attempts"] == 3
    # base * 2**attempt + 0.5 * jitter
    assert delays == [1.5, 2.5]
    assert client.calls[0] == {"system_prompt": "SYS", "conversation_text": "User: hi"}


@pytest.mark.asyncio
async def test_always_rate_limited_degrades_after_three_calls():
    client = ScriptedGeminiClient([GeminiRateLimitError("429")] * 5)

    async def fake_sleep(seconds: float) -> None:
        return None

    shared = _shared(client)
    action = await _run(GeminiChatNode(sleep=fake_sleep)).run_async(shared)

    assert action == "degraded"
    assert len(client.calls) == 3
    assert shared["degraded"] is True
    assert "raw_reply" not in shared


@pytest.mark.asyncio
async def test_other_errors_are_not_retried():
    client = ScriptedGeminiClient([GeminiError("HTTP 500", status_code=500), "never"])

    shared = _shared(client)
    action = await _run(GeminiChatNode()).run_async(shared)

    assert action == "degraded"
    assert len(client.calls) == 1
    assert "HTTP 500" in shared["ai_error"]


@pytest.mark.asyncio
async def test_max_retries_zero_means_single_attempt():
    client = ScriptedGeminiClient([GeminiRateLimitError("429"), "never"])

    shared = _shared(client, max_retries=0)
    action = await _run(GeminiChatNode()).run_async(shared)

    assert action == "degraded"
    assert len(client.calls) == 1


def test_backoff_delay_grows_exponentially_within_jitter():
    config = AIServiceConfig(backoff_base=1.0, backoff_jitter=1.0)
    assert backoff_delay(config, 0, rng=lambda: 0.0) == 1.0
    assert backoff_delay(config, 1, rng=lambda: 0.0) == 2.0
    assert backoff_delay(config, 2, rng=lambda: 0.999) == pytest.approx(4.999)
