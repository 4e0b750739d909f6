"""Pipeline stages: goal extraction, then roadmap generation."""

from roadmap_pipeline.stages.goal_extraction import GoalExtractionStage
from roadmap_pipeline.stages.roadmap_generation import RoadmapGenerationStage

__all__ = ["GoalExtractionStage", "RoadmapGenerationStage"]
