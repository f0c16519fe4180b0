"""Client utilities for the LOV keyword search API and SPARQL endpoint."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import aiohttp
from aiohttp import ClientResponse, ClientSession
from tenacity import AsyncRetrying, RetryError, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import RegistrySettings

_LOGGER = logging.getLogger(__name__)
_SPARQL_ACCEPT = "application/sparql-results+json"
_TRANSIENT_ERRORS = (aiohttp.ClientConnectionError, asyncio.TimeoutError)


class RegistryRequestError(RuntimeError):
    """Raised inside the client when a registry request cannot produce usable rows."""


@dataclass(slots=True)
class FetchResult:
    """Rows returned by a registry call.

    A failed call still carries an (empty) row list so callers can render it as
    "no results"; ``error`` keeps the reason for anyone who needs to tell the two apart.
    """

    rows: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, error: str) -> "FetchResult":
        return cls(rows=[], error=error)


async def _raise_for_status(response: ClientResponse) -> None:
    if 200 <= response.status < 300:
        return
    body = await response.text()
    raise RegistryRequestError(
        f"LOV request failed with {response.status}: {response.reason}. Body: {body[:200]}"
    )


def _rows_from(payload: Any, *path: str) -> List[Dict[str, Any]]:
    node = payload
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise RegistryRequestError(f"Response is missing '{'.'.join(path)}'")
        node = node[key]
    if node is None:
        return []
    if not isinstance(node, list):
        raise RegistryRequestError(f"Expected '{'.'.join(path)}' to be a list, got {type(node).__name__}")
    return [row for row in node if isinstance(row, dict)]


class LOVClient:
    """Asynchronous client for the Linked Open Vocabularies registry."""

    def __init__(self, settings: RegistrySettings):
        self._settings = settings
        self._session: Optional[ClientSession] = None

    async def __aenter__(self) -> "LOVClient":
        if self._settings.request_timeout_seconds:
            timeout = aiohttp.ClientTimeout(total=self._settings.request_timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        else:
            self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    def _require_session(self) -> ClientSession:
        if not self._session:
            raise RuntimeError("Client session not initialized. Use as an async context manager.")
        return self._session

    async def _get_json(
        self,
        url: str,
        params: Dict[str, str],
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        session = self._require_session()
        retrying = AsyncRetrying(
            reraise=False,
            stop=stop_after_attempt(self._settings.retry_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
        )
        try:
            async for attempt in retrying:
                with attempt:
                    async with session.get(url, params=params, headers=headers) as response:
                        await _raise_for_status(response)
                        # SPARQL endpoints answer with application/sparql-results+json.
                        return await response.json(content_type=None)
        except RetryError as exc:
            last = exc.last_attempt.exception()
            raise RegistryRequestError(
                f"Request to {url} failed after {self._settings.retry_attempts} attempt(s): {last!r}"
            ) from last

    async def search_vocabularies(self, term: str) -> FetchResult:
        """Run a keyword search. Blank terms return an empty result without a request."""

        if not term or not term.strip():
            return FetchResult()
        url = str(self._settings.search_api_url)
        try:
            payload = await self._get_json(url, params={"q": term})
            rows = _rows_from(payload, "results")
        except (RegistryRequestError, aiohttp.ClientError, ValueError) as exc:
            _LOGGER.warning("LOV search error for %r: %s", term, exc)
            return FetchResult.failure(str(exc))
        _LOGGER.debug("LOV search for %r returned %d rows", term, len(rows))
        return FetchResult(rows=rows)

    async def execute_sparql(self, query: str) -> FetchResult:
        """Execute a SPARQL SELECT and return its result bindings."""

        url = str(self._settings.sparql_endpoint)
        params = {"query": query, "format": self._settings.sparql_result_format}
        try:
            payload = await self._get_json(url, params=params, headers={"Accept": _SPARQL_ACCEPT})
            bindings = _rows_from(payload, "results", "bindings")
        except (RegistryRequestError, aiohttp.ClientError, ValueError) as exc:
            _LOGGER.warning("SPARQL error: %s", exc)
            return FetchResult.failure(str(exc))
        _LOGGER.debug("SPARQL query returned %d bindings", len(bindings))
        return FetchResult(rows=bindings)


__all__ = [
    "FetchResult",
    "LOVClient",
    "RegistryRequestError",
]
