# src/roadmap_pipeline/state.py
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_validator

ExperienceLevel = Literal["beginner", "intermediate", "advanced"]
FormatPreference = Literal["video", "article", "project", "mixed"]


# -------------------------
# Goal extraction output
# -------------------------


class GoalDescriptor(BaseModel):
    """Normalized description of what the user wants to learn.

    Accepts the camelCase keys the model emits and serialises back to them with ``by_alias=True``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    goal: str = Field(..., min_length=1)
    known: List[str] = Field(default_factory=list)
    experience_level: Optional[ExperienceLevel] = Field(None, alias="experienceLevel")
    format_preference: Optional[FormatPreference] = Field(None, alias="formatPreference")
    timeframe: Optional[str] = None
    specific_focus: Optional[List[str]] = Field(None, alias="specificFocus")

    @field_validator("known", mode="before")
    @classmethod
    def _null_known_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


# -------------------------
# Roadmap output
# -------------------------


class ResourceItem(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    title: str
    link: str
    description: str


class RoadmapNode(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    title: str
    description: str
    # exactly 3 is asked for in the prompt; not enforced here
    resources: List[ResourceItem]


class RoadmapStage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    title: str
    description: str
    nodes: List[RoadmapNode]


Roadmap = List[RoadmapStage]


class RoadmapGenerationModel(BaseModel):
    """Structured output returned by the roadmap generation call."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    # Values used when only the roadmap array could be recovered from the raw text.
    RECOVERY_DEFAULTS: ClassVar[Dict[str, Any]] = {
        "trigger_calendar": False,
        "calendar_intent_reason": None,
    }

    roadmap: List[RoadmapStage]
    trigger_calendar: bool = Field(..., alias="triggerCalendar")
    calendar_intent_reason: Optional[str] = Field(None, alias="calendarIntentReason")


class RoadmapResponse(BaseModel):
    """Terminal artifact of one pipeline run. Ownership passes to the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    roadmap: List[RoadmapStage]
    should_trigger_calendar: bool = Field(False, alias="shouldTriggerCalendar")
    calendar_intent_reason: Optional[str] = Field(None, alias="calendarIntentReason")
    recovered: bool = False


# -------------------------
# LangGraph state
# -------------------------


class RoadmapState(TypedDict, total=False):
    # Raw input
    message: str

    # extract_goal output
    goal: GoalDescriptor

    # generate_roadmap output
    response: RoadmapResponse
