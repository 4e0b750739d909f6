# src/roadmap_pipeline/schemas.py
"""Response schemas handed to the model for schema-constrained completion.

Each schema and the guideline text in its matching prompt module form one
versioned unit. Bump the version here and in the prompt together.
"""

from typing import Any, Dict

GOAL_EXTRACTION_SCHEMA_VERSION = "goal_extraction_v1"
ROADMAP_SCHEMA_VERSION = "roadmap_v1"

EXPERIENCE_LEVELS = ["beginner", "intermediate", "advanced"]
FORMAT_PREFERENCES = ["video", "article", "project", "mixed"]


GOAL_EXTRACTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "goal": {"type": "string"},
        "known": {
            "type": "array",
            "items": {"type": "string"},
        },
        "experienceLevel": {
            "type": ["string", "null"],
            "enum": EXPERIENCE_LEVELS + [None],
        },
        "formatPreference": {
            "type": ["string", "null"],
            "enum": FORMAT_PREFERENCES + [None],
        },
        "timeframe": {"type": ["string", "null"]},
        "specificFocus": {
            "type": ["array", "null"],
            "items": {"type": "string"},
        },
    },
    "required": ["goal", "known"],
}


_RESOURCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"type": "string"},
        "title": {"type": "string"},
        "link": {"type": "string"},
        "description": {"type": "string"},
    },
    "required": ["type", "title", "link", "description"],
}

_NODE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "title": {"type": "string"},
        "description": {"type": "string"},
        "resources": {"type": "array", "items": _RESOURCE_SCHEMA},
    },
    "required": ["id", "title", "description", "resources"],
}

_STAGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "title": {"type": "string"},
        "description": {"type": "string"},
        "nodes": {"type": "array", "items": _NODE_SCHEMA},
    },
    "required": ["id", "title", "description", "nodes"],
}

ROADMAP_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "roadmap": {"type": "array", "items": _STAGE_SCHEMA},
        "triggerCalendar": {"type": "boolean"},
        "calendarIntentReason": {"type": ["string", "null"]},
    },
    "required": ["roadmap", "triggerCalendar"],
}
