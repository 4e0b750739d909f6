# src/roadmap_pipeline/errors.py
"""Failure classification for the roadmap pipeline.

Callers distinguish failure kinds by type, never by message text:

- EmptyResponse: the model returned no text
- UnparsableResponse: text came back but neither strict decode nor fallback recovery worked
- UpstreamFailure: the model call itself failed (network, auth, quota, rejected request)
- PipelineFailure: what the orchestrator raises; wraps one of the above as ``cause``
"""

from __future__ import annotations


class RoadmapPipelineError(Exception):
    """Base class for every error raised by the pipeline."""


class EmptyResponse(RoadmapPipelineError):
    def __init__(self, message: str = "Empty response from model"):
        super().__init__(message)


class UnparsableResponse(RoadmapPipelineError):
    def __init__(self, message: str, *, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class UpstreamFailure(RoadmapPipelineError):
    pass


class PipelineFailure(RoadmapPipelineError):
    def __init__(self, cause: RoadmapPipelineError):
        super().__init__(f"Failed to generate roadmap: {cause}")
        self.cause = cause

    @property
    def kind(self) -> str:
        return type(self.cause).__name__
