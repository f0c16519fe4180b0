"""Search, enrich, score and sort LOV vocabularies behind one async call."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..config import RegistrySettings, get_settings
from ..models import RankedEntry
from ..pipeline.base import PipelineContext, PipelineRunner
from ..registry.client import LOVClient
from .metadata import RegistryClient
from .phases import KeywordSearchPhase, MetadataPhase, ScoringPhase

_LOGGER = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Search failed. Please try again."


class SearchFailedError(RuntimeError):
    """Raised when a search cannot be completed. Carries a user-facing message."""

    def __init__(self, message: str = SEARCH_FAILED_MESSAGE) -> None:
        super().__init__(message)


class RankingPipeline:
    """Run keyword search, metadata enrichment and scoring for one term at a time."""

    def __init__(self, client: RegistryClient):
        self._client = client
        self._last_diagnostics: Dict[str, Optional[str]] = {}

    @property
    def last_diagnostics(self) -> Dict[str, Optional[str]]:
        """Errors of the remote calls made by the latest ``rank`` call, keyed by call name."""

        return dict(self._last_diagnostics)

    @property
    def last_call_degraded(self) -> bool:
        return any(error is not None for error in self._last_diagnostics.values())

    async def rank(self, term: str) -> List[RankedEntry]:
        self._last_diagnostics = {}
        if not term or not term.strip():
            return []
        context = PipelineContext(term=term)
        runner = PipelineRunner(
            [
                KeywordSearchPhase(self._client),
                MetadataPhase(self._client),
                ScoringPhase(),
            ],
            context,
        )
        try:
            await runner.run()
        except Exception as exc:
            _LOGGER.exception("Search error for %r", term)
            raise SearchFailedError() from exc
        finally:
            self._last_diagnostics = dict(context.diagnostics)
        return list(context.ranked)


async def search_and_rank(term: str, settings: Optional[RegistrySettings] = None) -> List[RankedEntry]:
    """Open a registry client, rank ``term`` and close the client again."""

    if not term or not term.strip():
        return []
    async with LOVClient(settings or get_settings()) as client:
        return await RankingPipeline(client).rank(term)


__all__ = [
    "RankingPipeline",
    "SEARCH_FAILED_MESSAGE",
    "SearchFailedError",
    "search_and_rank",
]
