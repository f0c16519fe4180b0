"""Common abstractions for composing the search-and-rank phases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..models import AdoptionMetrics, DesignMetrics, RankedEntry, VocabularyEntry


@dataclass(slots=True)
class PipelineContext:
    """Runtime state shared across the phases of one search invocation."""

    term: str
    entries: List[VocabularyEntry] = field(default_factory=list)
    adoption: Dict[str, AdoptionMetrics] = field(default_factory=dict)
    design: Dict[str, DesignMetrics] = field(default_factory=dict)
    ranked: List[RankedEntry] = field(default_factory=list)
    # Remote call name -> error message for calls that degraded to empty.
    diagnostics: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass(slots=True)
class PhaseResult:
    """Represents the outcome of a pipeline phase.

    ``halt`` ends the run early without marking it as failed, e.g. when a search
    returns nothing to enrich.
    """

    name: str
    succeeded: bool
    halt: bool = False
    details: Dict[str, Any] = field(default_factory=dict)


class PipelinePhase(Protocol):
    """Interface that all pipeline phases must implement."""

    name: str

    async def run(self, context: PipelineContext) -> PhaseResult:
        ...


class PipelineRunner:
    """Execute a sequence of pipeline phases with shared context."""

    def __init__(self, phases: Sequence[PipelinePhase], context: PipelineContext):
        self._phases = list(phases)
        self._context = context
        self._results: List[PhaseResult] = []

    async def run(self) -> List[PhaseResult]:
        self._results.clear()
        for phase in self._phases:
            result = await phase.run(self._context)
            self._results.append(result)
            if not result.succeeded or result.halt:
                break
        return list(self._results)


__all__ = [
    "PhaseResult",
    "PipelineContext",
    "PipelinePhase",
    "PipelineRunner",
]
