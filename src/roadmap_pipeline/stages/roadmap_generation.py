# src/roadmap_pipeline/stages/roadmap_generation.py
from __future__ import annotations

import logging

from roadmap_pipeline.gateway import ModelGateway
from roadmap_pipeline.parser import ResponseParser
from roadmap_pipeline.prompts.roadmap import build_roadmap_prompt
from roadmap_pipeline.schemas import ROADMAP_SCHEMA
from roadmap_pipeline.state import GoalDescriptor, RoadmapGenerationModel, RoadmapResponse

logger = logging.getLogger(__name__)

# Higher temperature: more variety in roadmap content
ROADMAP_TEMPERATURE = 0.7


def to_response(output: RoadmapGenerationModel, *, recovered: bool = False) -> RoadmapResponse:
    return RoadmapResponse(
        roadmap=output.roadmap,
        should_trigger_calendar=output.trigger_calendar,
        calendar_intent_reason=output.calendar_intent_reason,
        recovered=recovered,
    )


class RoadmapGenerationStage:
    """GoalDescriptor + original message -> RoadmapResponse.

    The original message goes into the prompt as well because calendar intent
    ("remind me weekly") usually lives in the user's own words, not in the goal.
    """

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway
        self.parser = ResponseParser(RoadmapGenerationModel, fallback_field="roadmap")

    def _to_response(self, raw_text) -> RoadmapResponse:
        output, recovered = self.parser.parse_with_status(raw_text)
        response = to_response(output, recovered=recovered)
        logger.debug(
            "Generated roadmap: %d stage(s), calendar=%s, recovered=%s",
            len(response.roadmap),
            response.should_trigger_calendar,
            response.recovered,
        )
        return response

    def run(self, goal: GoalDescriptor, original_message: str) -> RoadmapResponse:
        prompt = build_roadmap_prompt(goal, original_message)
        raw_text = self.gateway.complete(prompt, ROADMAP_SCHEMA, ROADMAP_TEMPERATURE)
        return self._to_response(raw_text)

    async def arun(self, goal: GoalDescriptor, original_message: str) -> RoadmapResponse:
        prompt = build_roadmap_prompt(goal, original_message)
        raw_text = await self.gateway.acomplete(prompt, ROADMAP_SCHEMA, ROADMAP_TEMPERATURE)
        return self._to_response(raw_text)
