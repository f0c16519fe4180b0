"""Pipeline phases for a single search-and-rank invocation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..models import RankedEntry, VocabularyEntry
from ..pipeline.base import PhaseResult, PipelineContext
from ..registry.queries import is_embeddable_iri
from .aggregator import merge_metadata
from .metadata import RegistryClient, fetch_adoption_metrics, fetch_design_metrics
from .scoring import connectivity_score

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class KeywordSearchPhase:
    """Query the LOV keyword search and load the hits into the context."""

    client: RegistryClient
    name: str = "search"

    async def run(self, context: PipelineContext) -> PhaseResult:
        result = await self.client.search_vocabularies(context.term)
        context.diagnostics[self.name] = result.error
        context.entries = [VocabularyEntry.from_search_row(row) for row in result.rows]
        if not context.entries:
            _LOGGER.info("No vocabularies found for %r", context.term)
            return PhaseResult(name=self.name, succeeded=True, halt=True, details={"hits": 0})
        return PhaseResult(name=self.name, succeeded=True, details={"hits": len(context.entries)})


@dataclass(slots=True)
class MetadataPhase:
    """Fetch both metadata facets concurrently and wait for both."""

    client: RegistryClient
    name: str = "metadata"

    async def run(self, context: PipelineContext) -> PhaseResult:
        uris = []
        for entry in context.entries:
            if not entry.uri:
                continue
            if not is_embeddable_iri(entry.uri):
                _LOGGER.warning("Skipping metadata lookup for malformed URI %r", entry.uri)
                continue
            uris.append(entry.uri)
        adoption, design = await asyncio.gather(
            fetch_adoption_metrics(self.client, uris),
            fetch_design_metrics(self.client, uris),
        )
        context.adoption = adoption.metrics
        context.design = design.metrics
        context.diagnostics["adoption"] = adoption.error
        context.diagnostics["design"] = design.error
        return PhaseResult(
            name=self.name,
            succeeded=True,
            details={
                "uris": len(uris),
                "adoption_rows": len(adoption.metrics),
                "design_rows": len(design.metrics),
            },
        )


@dataclass(slots=True)
class ScoringPhase:
    """Merge, score and order the search hits."""

    name: str = "scoring"

    async def run(self, context: PipelineContext) -> PhaseResult:
        merged = merge_metadata(context.entries, context.adoption, context.design)
        ranked = [
            RankedEntry(
                entry=record.entry,
                adoption=record.adoption,
                design=record.design,
                connectivity_score=connectivity_score(record.adoption, record.design),
            )
            for record in merged
        ]
        # sorted() is stable: equal scores keep their search order.
        context.ranked = sorted(ranked, key=lambda item: item.connectivity_score, reverse=True)
        return PhaseResult(name=self.name, succeeded=True, details={"ranked": len(context.ranked)})


__all__ = ["KeywordSearchPhase", "MetadataPhase", "ScoringPhase"]
