"""Caller-owned search state: one current state, newest search wins."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Union

from ..models import RankedEntry
from .pipeline import SearchFailedError

_LOGGER = logging.getLogger(__name__)

SEARCH_CANCELLED_MESSAGE = "Search cancelled."


class Ranker(Protocol):
    async def rank(self, term: str) -> List[RankedEntry]:
        ...


@dataclass(frozen=True)
class Idle:
    """No search has run, or the term was cleared."""


@dataclass(frozen=True)
class Searching:
    term: str


@dataclass(frozen=True)
class Succeeded:
    term: str
    results: List[RankedEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Failed:
    term: str
    reason: str


PipelineState = Union[Idle, Searching, Succeeded, Failed]


class SearchSession:
    """Hold the state of the current search and supersede stale ones.

    Starting a search cancels the one in flight. A generation counter guards the
    state as well, so a search that finishes after being superseded never
    overwrites the newer state. A failure replaces the previous results.
    """

    def __init__(self, ranker: Ranker):
        self._ranker = ranker
        self._state: PipelineState = Idle()
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def results(self) -> List[RankedEntry]:
        if isinstance(self._state, Succeeded):
            return list(self._state.results)
        return []

    def _cancel_in_flight(self) -> None:
        if self._task is not None and not self._task.done():
            _LOGGER.debug("Cancelling superseded search")
            self._task.cancel()
        self._task = None

    def clear(self) -> PipelineState:
        self._generation += 1
        self._cancel_in_flight()
        self._state = Idle()
        return self._state

    async def submit(self, term: str) -> PipelineState:
        """Run a search for ``term`` and return the session state once it settles."""

        if not term or not term.strip():
            return self.clear()

        self._generation += 1
        generation = self._generation
        self._cancel_in_flight()
        self._state = Searching(term=term)
        task = asyncio.ensure_future(self._ranker.rank(term))
        self._task = task
        try:
            results = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return self._state
            # Cancelled from outside: never leave the session stuck in Searching.
            self._state = Failed(term=term, reason=SEARCH_CANCELLED_MESSAGE)
            raise
        except SearchFailedError as exc:
            if generation == self._generation:
                self._state = Failed(term=term, reason=str(exc))
            return self._state
        finally:
            if self._task is task:
                self._task = None

        if generation == self._generation:
            self._state = Succeeded(term=term, results=list(results))
        return self._state


__all__ = [
    "Failed",
    "Idle",
    "PipelineState",
    "Ranker",
    "SEARCH_CANCELLED_MESSAGE",
    "SearchSession",
    "Searching",
    "Succeeded",
]
