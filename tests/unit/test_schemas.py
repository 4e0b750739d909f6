# tests/unit/test_schemas.py
"""Schema catalog and its pairing with the prompt guideline text."""

from typing import Any, Dict, Set

from roadmap_pipeline.prompts import goal_extraction, roadmap
from roadmap_pipeline.schemas import (
    EXPERIENCE_LEVELS,
    FORMAT_PREFERENCES,
    GOAL_EXTRACTION_SCHEMA,
    GOAL_EXTRACTION_SCHEMA_VERSION,
    ROADMAP_SCHEMA,
    ROADMAP_SCHEMA_VERSION,
)
from roadmap_pipeline.state import GoalDescriptor, RoadmapGenerationModel


def _property_names(schema: Dict[str, Any]) -> Set[str]:
    names: Set[str] = set()
    for name, sub in (schema.get("properties") or {}).items():
        names.add(name)
        names |= _property_names(sub)
    if "items" in schema:
        names |= _property_names(schema["items"])
    return names


class TestGoalExtractionSchema:
    def test_required_fields(self):
        assert GOAL_EXTRACTION_SCHEMA["type"] == "object"
        assert GOAL_EXTRACTION_SCHEMA["required"] == ["goal", "known"]

    def test_optional_fields_admit_null(self):
        props = GOAL_EXTRACTION_SCHEMA["properties"]
        assert props["experienceLevel"]["type"] == ["string", "null"]
        assert props["formatPreference"]["type"] == ["string", "null"]
        assert props["timeframe"]["type"] == ["string", "null"]
        assert props["specificFocus"]["type"] == ["array", "null"]

    def test_nullable_enums_list_null(self):
        """A null type is rejected by an enum that does not list it."""
        props = GOAL_EXTRACTION_SCHEMA["properties"]
        assert None in props["experienceLevel"]["enum"]
        assert None in props["formatPreference"]["enum"]

    def test_enums_match_model_literals(self):
        props = GOAL_EXTRACTION_SCHEMA["properties"]
        assert props["experienceLevel"]["enum"] == EXPERIENCE_LEVELS + [None]
        assert props["formatPreference"]["enum"] == FORMAT_PREFERENCES + [None]
        assert None not in EXPERIENCE_LEVELS
        assert None not in FORMAT_PREFERENCES
        for level in EXPERIENCE_LEVELS:
            GoalDescriptor(goal="x", experience_level=level)
        for fmt in FORMAT_PREFERENCES:
            GoalDescriptor(goal="x", format_preference=fmt)

    def test_properties_match_model_aliases(self):
        aliases = {f.alias or name for name, f in GoalDescriptor.model_fields.items()}
        assert set(GOAL_EXTRACTION_SCHEMA["properties"]) == aliases


class TestRoadmapSchema:
    def test_required_fields(self):
        assert ROADMAP_SCHEMA["required"] == ["roadmap", "triggerCalendar"]
        assert ROADMAP_SCHEMA["properties"]["calendarIntentReason"]["type"] == ["string", "null"]

    def test_nested_required_fields(self):
        stage = ROADMAP_SCHEMA["properties"]["roadmap"]["items"]
        node = stage["properties"]["nodes"]["items"]
        resource = node["properties"]["resources"]["items"]
        assert stage["required"] == ["id", "title", "description", "nodes"]
        assert node["required"] == ["id", "title", "description", "resources"]
        assert resource["required"] == ["type", "title", "link", "description"]

    def test_properties_match_model_aliases(self):
        aliases = {f.alias or name for name, f in RoadmapGenerationModel.model_fields.items()}
        assert set(ROADMAP_SCHEMA["properties"]) == aliases


class TestSchemaPromptPairing:
    """A schema change must come with a matching prompt change."""

    def test_goal_prompt_written_against_current_schema(self):
        assert goal_extraction.GOAL_EXTRACTION_PROMPT_SCHEMA == GOAL_EXTRACTION_SCHEMA_VERSION

    def test_roadmap_prompt_written_against_current_schema(self):
        assert roadmap.ROADMAP_PROMPT_SCHEMA == ROADMAP_SCHEMA_VERSION

    def test_goal_prompt_names_every_property(self):
        for name in _property_names(GOAL_EXTRACTION_SCHEMA):
            assert name in goal_extraction.GOAL_EXTRACTION_PROMPT, name

    def test_roadmap_prompt_names_every_property(self):
        for name in _property_names(ROADMAP_SCHEMA):
            assert name in roadmap.ROADMAP_PROMPT, name


def _keywords(schema: Any) -> Set[str]:
    found: Set[str] = set()
    if isinstance(schema, dict):
        found |= set(schema)
        for name, sub in schema.items():
            if name == "properties":
                for prop in sub.values():
                    found |= _keywords(prop)
            elif isinstance(sub, dict):
                found |= _keywords(sub)
    return found


class TestJsonSchemaKeywords:
    """Schemas go out with method="json_schema", so only JSON Schema keywords are allowed."""

    def test_no_openapi_nullable_keyword(self):
        for schema in (GOAL_EXTRACTION_SCHEMA, ROADMAP_SCHEMA):
            assert "nullable" not in _keywords(schema)

    def test_only_json_schema_keywords(self):
        allowed = {"type", "properties", "items", "required", "enum"}
        for schema in (GOAL_EXTRACTION_SCHEMA, ROADMAP_SCHEMA):
            assert _keywords(schema) <= allowed
