# src/roadmap_pipeline/stages/goal_extraction.py
from __future__ import annotations

import logging

from roadmap_pipeline.gateway import ModelGateway
from roadmap_pipeline.parser import ResponseParser
from roadmap_pipeline.prompts.goal_extraction import build_goal_extraction_prompt
from roadmap_pipeline.schemas import GOAL_EXTRACTION_SCHEMA
from roadmap_pipeline.state import GoalDescriptor

logger = logging.getLogger(__name__)

# Low temperature: extraction should be repeatable
GOAL_EXTRACTION_TEMPERATURE = 0.2


class GoalExtractionStage:
    """Raw user message -> GoalDescriptor.

    The payload is a single object, so there is no fallback recovery: any decode
    failure ends the pipeline run.
    """

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway
        self.parser = ResponseParser(GoalDescriptor)

    def run(self, message: str) -> GoalDescriptor:
        prompt = build_goal_extraction_prompt(message)
        raw_text = self.gateway.complete(prompt, GOAL_EXTRACTION_SCHEMA, GOAL_EXTRACTION_TEMPERATURE)
        goal = self.parser.parse(raw_text)
        logger.debug("Extracted goal: %s (level=%s)", goal.goal, goal.experience_level)
        return goal

    async def arun(self, message: str) -> GoalDescriptor:
        prompt = build_goal_extraction_prompt(message)
        raw_text = await self.gateway.acomplete(prompt, GOAL_EXTRACTION_SCHEMA, GOAL_EXTRACTION_TEMPERATURE)
        goal = self.parser.parse(raw_text)
        logger.debug("Extracted goal: %s (level=%s)", goal.goal, goal.experience_level)
        return goal
