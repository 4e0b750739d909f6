"""Prompts for the goal extraction and roadmap generation stages."""

from roadmap_pipeline.prompts.goal_extraction import (
    GOAL_EXTRACTION_PROMPT,
    GOAL_EXTRACTION_PROMPT_VERSION,
    build_goal_extraction_prompt,
)
from roadmap_pipeline.prompts.roadmap import ROADMAP_PROMPT, ROADMAP_PROMPT_VERSION, build_roadmap_prompt

__all__ = [
    "GOAL_EXTRACTION_PROMPT",
    "GOAL_EXTRACTION_PROMPT_VERSION",
    "ROADMAP_PROMPT",
    "ROADMAP_PROMPT_VERSION",
    "build_goal_extraction_prompt",
    "build_roadmap_prompt",
]
