# test/test_nodes/test_reply_parse.py
import json
import pytest
from typing import Any, Dict

try:
    from pocketflow import AsyncFlow as Flow
except ImportError:
    from pocketflow import Flow

from healthguardian.runtime.nodes.local_fallback import LocalFallbackNode
from healthguardian.runtime.nodes.reply_parse import ReplyParseNode
from healthguardian.engine.rules import local_respond


@pytest.mark.asyncio
async def test_reply_parse_from_json_object():
    shared: Dict[str, Any] = {
        "raw_reply": json.dumps(
            {
                "answer": "Stay hydrated.",
                "isEmergency": False,
                "riskLevel": "low",
                "recommendations": ["Drink water", "Drink water"],
            }
        ),
        "query": "I feel thirsty",
    }

    node = ReplyParseNode()
    node.successors = {}
    action = await Flow(start=node).run_async(shared)

    assert action == "ok"
    assert shared["assessment"].answer == "Stay hydrated."
    # dedup
    assert shared["assessment"].recommendations == ["Drink water"]


@pytest.mark.asyncio
async def test_reply_parse_handles_empty_reply_gracefully():
    shared: Dict[str, Any] = {"raw_reply": None, "query": ""}

    node = ReplyParseNode()
    node.successors = {}
    action = await Flow(start=node).run_async(shared)

    assert action == "ok"
    assert shared["assessment"].answer == ""
    assert shared["assessment"].risk_level == "low"


@pytest.mark.asyncio
async def test_local_fallback_matches_rule_engine():
    shared: Dict[str, Any] = {"query": "what is cholesterol"}

    node = LocalFallbackNode()
    node.successors = {}
    await Flow(start=node).run_async(shared)

    assert shared["assessment"] == local_respond("what is cholesterol")
    assert shared["degraded"] is True
