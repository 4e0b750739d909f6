# src/roadmap_pipeline/graph.py
from __future__ import annotations

import functools
import logging
from typing import Any, Dict, Optional

from langchain_core.runnables import RunnableLambda
from langgraph.graph import END, START, StateGraph
from langgraph.types import RetryPolicy

from roadmap_pipeline.errors import PipelineFailure, RoadmapPipelineError, UnparsableResponse, UpstreamFailure
from roadmap_pipeline.gateway import ModelGateway
from roadmap_pipeline.model import get_default_model
from roadmap_pipeline.stages import GoalExtractionStage, RoadmapGenerationStage
from roadmap_pipeline.state import RoadmapResponse, RoadmapState
from roadmap_pipeline.tracing import observe

logger = logging.getLogger(__name__)

RAW_TEXT_LOG_LIMIT = 500


def _log_node_failure(node: str, e: RoadmapPipelineError) -> None:
    logger.error("%s failed (%s): %s", node, type(e).__name__, e)
    if isinstance(e, UnparsableResponse) and e.raw_text is not None:
        raw = e.raw_text
        if len(raw) > RAW_TEXT_LOG_LIMIT:
            raw = raw[:RAW_TEXT_LOG_LIMIT] + f"... [{len(e.raw_text)} chars]"
        logger.error("%s raw model output: %r", node, raw)


def make_extract_goal_node(stage: GoalExtractionStage):
    @observe
    def extract_goal(state: RoadmapState) -> Dict[str, Any]:
        try:
            goal = stage.run(state.get("message", ""))
        except RoadmapPipelineError as e:
            _log_node_failure("extract_goal", e)
            raise
        return {"goal": goal}

    @observe
    async def aextract_goal(state: RoadmapState) -> Dict[str, Any]:
        try:
            goal = await stage.arun(state.get("message", ""))
        except RoadmapPipelineError as e:
            _log_node_failure("extract_goal", e)
            raise
        return {"goal": goal}

    return RunnableLambda(extract_goal, afunc=aextract_goal, name="extract_goal")


def make_generate_roadmap_node(stage: RoadmapGenerationStage):
    @observe
    def generate_roadmap(state: RoadmapState) -> Dict[str, Any]:
        try:
            response = stage.run(state["goal"], state.get("message", ""))
        except RoadmapPipelineError as e:
            _log_node_failure("generate_roadmap", e)
            raise
        return {"response": response}

    @observe
    async def agenerate_roadmap(state: RoadmapState) -> Dict[str, Any]:
        try:
            response = await stage.arun(state["goal"], state.get("message", ""))
        except RoadmapPipelineError as e:
            _log_node_failure("generate_roadmap", e)
            raise
        return {"response": response}

    return RunnableLambda(generate_roadmap, afunc=agenerate_roadmap, name="generate_roadmap")


def make_roadmap_graph(llm, max_retries: int = 1):
    """Compile the two-stage graph: extract_goal -> generate_roadmap.

    ``max_retries`` is the number of attempts per node. The default of 1 fails fast;
    higher values retry upstream failures only, never empty or unparsable output.
    """
    retry_policy = RetryPolicy(max_attempts=max(1, int(max_retries)), retry_on=UpstreamFailure)

    gateway = ModelGateway(llm)

    g = StateGraph(RoadmapState)
    g.add_node("extract_goal", make_extract_goal_node(GoalExtractionStage(gateway)), retry_policy=retry_policy)
    g.add_node(
        "generate_roadmap",
        make_generate_roadmap_node(RoadmapGenerationStage(gateway)),
        retry_policy=retry_policy,
    )

    g.add_edge(START, "extract_goal")
    g.add_edge("extract_goal", "generate_roadmap")
    g.add_edge("generate_roadmap", END)

    return g.compile()


class PipelineOrchestrator:
    """Public entry point: message in, RoadmapResponse out.

    Classified pipeline errors surface as PipelineFailure with the original error as ``cause``.
    """

    def __init__(self, llm, *, max_retries: int = 1):
        self.graph = make_roadmap_graph(llm, max_retries=max_retries)

    def generate_roadmap(self, message: str) -> RoadmapResponse:
        try:
            out = self.graph.invoke({"message": message})
        except RoadmapPipelineError as e:
            raise PipelineFailure(e) from e
        return out["response"]

    async def agenerate_roadmap(self, message: str) -> RoadmapResponse:
        try:
            out = await self.graph.ainvoke({"message": message})
        except RoadmapPipelineError as e:
            raise PipelineFailure(e) from e
        return out["response"]


@functools.lru_cache(maxsize=1)
def get_default_orchestrator() -> PipelineOrchestrator:
    return PipelineOrchestrator(get_default_model())


def generate_roadmap(message: str, llm: Optional[Any] = None) -> RoadmapResponse:
    orchestrator = PipelineOrchestrator(llm) if llm is not None else get_default_orchestrator()
    return orchestrator.generate_roadmap(message)
