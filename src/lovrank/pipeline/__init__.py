"""Pipeline composition utilities."""

from .base import PhaseResult, PipelineContext, PipelinePhase, PipelineRunner

__all__ = [
    "PhaseResult",
    "PipelineContext",
    "PipelinePhase",
    "PipelineRunner",
]
