# tests/unit/conftest.py
"""Shared fixtures for roadmap pipeline unit tests."""

import json
import os
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

# Disable Langfuse for unit tests
os.environ["LANGFUSE_ENABLED"] = "0"


def structured_result(text: Optional[str]) -> Dict[str, Any]:
    """What ``with_structured_output(..., include_raw=True)`` returns for one call."""
    raw = AIMessage(content=text) if text is not None else None
    return {"raw": raw, "parsed": None, "parsing_error": None}


def make_chain(*outcomes) -> MagicMock:
    """Mock structured-output runnable.

    Each outcome is raw text (str/None) or an exception to raise. A single outcome is
    returned on every call; several are consumed in order.
    """
    results = [o if isinstance(o, BaseException) else structured_result(o) for o in outcomes]
    chain = MagicMock()
    if len(results) == 1 and not isinstance(results[0], BaseException):
        chain.invoke.return_value = results[0]
        chain.ainvoke = AsyncMock(return_value=results[0])
    else:
        chain.invoke.side_effect = list(results)
        chain.ainvoke = AsyncMock(side_effect=list(results))
    return chain


@pytest.fixture
def mock_llm():
    """Mock LLM whose with_structured_output returns a fresh mock chain."""
    llm = MagicMock()

    def default_with_structured_output(schema, **kwargs):
        mock_chain = MagicMock()
        mock_chain._schema = schema
        return mock_chain

    llm.with_structured_output = MagicMock(side_effect=default_with_structured_output)

    return llm


@pytest.fixture
def pipeline_llm():
    """Factory for a mock LLM that routes by schema: goal chain vs roadmap chain.

    Usage: llm, goal_chain, roadmap_chain = pipeline_llm(goal_chain, roadmap_chain)
    """

    def _make(goal_chain: MagicMock, roadmap_chain: MagicMock):
        llm = MagicMock()

        def with_structured_output_side_effect(schema, **kwargs):
            if "goal" in schema.get("properties", {}):
                return goal_chain
            return roadmap_chain

        llm.with_structured_output = MagicMock(side_effect=with_structured_output_side_effect)
        return llm, goal_chain, roadmap_chain

    return _make


@pytest.fixture
def goal_payload() -> Dict[str, Any]:
    return {
        "goal": "Learn TypeScript well enough to build typed React apps",
        "known": ["JavaScript", "HTML", "CSS"],
        "experienceLevel": "intermediate",
        "formatPreference": "project",
        "timeframe": "over 6 weeks",
        "specificFocus": ["generics", "avoid Angular"],
    }


def _resources(prefix: str) -> List[Dict[str, str]]:
    return [
        {
            "type": "video",
            "title": f"{prefix} crash course",
            "link": "https://www.youtube.com/watch?v=example",
            "description": "A fast walkthrough of the essentials.",
        },
        {
            "type": "article",
            "title": f"{prefix} handbook",
            "link": "https://www.typescriptlang.org/docs/handbook/intro.html",
            "description": "The official reference.",
        },
        {
            "type": "project",
            "title": f"Build a {prefix} todo app",
            "link": "https://www.freecodecamp.org/news/example",
            "description": "Apply the concepts end to end.",
        },
    ]


@pytest.fixture
def roadmap_stages() -> List[Dict[str, Any]]:
    return [
        {
            "id": "s1",
            "title": "Foundations",
            "description": "Types, interfaces and the compiler. Everything else builds on these.",
            "nodes": [
                {
                    "id": "s1-n1",
                    "title": "Basic types",
                    "description": "Primitive types, arrays and tuples. Learn how inference works.",
                    "resources": _resources("Basic types"),
                },
                {
                    "id": "s1-n2",
                    "title": "Interfaces",
                    "description": "Describe object shapes. Compare interfaces and type aliases.",
                    "resources": _resources("Interfaces"),
                },
            ],
        },
        {
            "id": "s2",
            "title": "Advanced types",
            "description": "Generics and utility types. These make libraries type-safe.",
            "nodes": [
                {
                    "id": "s2-n1",
                    "title": "Generics",
                    "description": "Write reusable typed functions. Constrain type parameters.",
                    "resources": _resources("Generics"),
                }
            ],
        },
    ]


@pytest.fixture
def roadmap_payload(roadmap_stages) -> Dict[str, Any]:
    return {
        "roadmap": roadmap_stages,
        "triggerCalendar": False,
        "calendarIntentReason": None,
    }


@pytest.fixture
def goal_text(goal_payload) -> str:
    return json.dumps(goal_payload)


@pytest.fixture
def roadmap_text(roadmap_payload) -> str:
    return json.dumps(roadmap_payload)


@pytest.fixture
def canned_chain():
    """Factory fixture around make_chain."""
    return make_chain
