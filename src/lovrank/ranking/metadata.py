"""Fetch adoption and design metadata for a set of vocabularies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Protocol, TypeVar

from ..models import AdoptionMetrics, DesignMetrics
from ..registry.client import FetchResult
from ..registry.queries import build_adoption_query, build_design_query, unique_uris
from .scoring import parse_count

_LOGGER = logging.getLogger(__name__)

MetricT = TypeVar("MetricT")

_DESIGN_FIELDS = {
    "extendsCount": "extends",
    "hasEquivalencesCount": "has_equivalences_with",
    "reliesOnCount": "relies_on",
    "usedByCount": "used_by",
    "specializesCount": "specializes",
    "generalizesCount": "generalizes",
}
_ADOPTION_FIELDS = {
    "reusedByVocabs": "reused_by_vocabularies",
    "reusedByDatasets": "reused_by_datasets",
    "occurrences": "occurrences_in_datasets",
}


class RegistryClient(Protocol):
    """The subset of :class:`~lovrank.registry.client.LOVClient` used by the ranking phases."""

    async def search_vocabularies(self, term: str) -> FetchResult:
        ...

    async def execute_sparql(self, query: str) -> FetchResult:
        ...


@dataclass
class FacetFetch(Generic[MetricT]):
    """Metrics for one facet keyed by vocabulary URI, plus the remote error if any."""

    metrics: Dict[str, MetricT] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def _binding_value(binding: Mapping[str, Any], name: str) -> Optional[str]:
    cell = binding.get(name)
    if isinstance(cell, Mapping):
        value = cell.get("value")
        return None if value is None else str(value)
    return None


def parse_adoption_bindings(bindings: Iterable[Mapping[str, Any]]) -> Dict[str, AdoptionMetrics]:
    metrics: Dict[str, AdoptionMetrics] = {}
    for binding in bindings:
        uri = _binding_value(binding, "vocab")
        if not uri:
            continue
        values = {attr: _binding_value(binding, var) or "0" for var, attr in _ADOPTION_FIELDS.items()}
        metrics[uri] = AdoptionMetrics(**values)
    return metrics


def parse_design_bindings(bindings: Iterable[Mapping[str, Any]]) -> Dict[str, DesignMetrics]:
    metrics: Dict[str, DesignMetrics] = {}
    for binding in bindings:
        uri = _binding_value(binding, "vocab")
        if not uri:
            continue
        values = {attr: parse_count(_binding_value(binding, var)) for var, attr in _DESIGN_FIELDS.items()}
        metrics[uri] = DesignMetrics(**values)
    return metrics


async def fetch_adoption_metrics(client: RegistryClient, uris: Iterable[str]) -> FacetFetch[AdoptionMetrics]:
    ordered: List[str] = unique_uris(uris)
    if not ordered:
        return FacetFetch()
    result = await client.execute_sparql(build_adoption_query(ordered))
    metrics = parse_adoption_bindings(result.rows)
    _LOGGER.debug("Adoption metrics resolved for %d/%d vocabularies", len(metrics), len(ordered))
    return FacetFetch(metrics=metrics, error=result.error)


async def fetch_design_metrics(client: RegistryClient, uris: Iterable[str]) -> FacetFetch[DesignMetrics]:
    ordered: List[str] = unique_uris(uris)
    if not ordered:
        return FacetFetch()
    result = await client.execute_sparql(build_design_query(ordered))
    metrics = parse_design_bindings(result.rows)
    _LOGGER.debug("Design metrics resolved for %d/%d vocabularies", len(metrics), len(ordered))
    return FacetFetch(metrics=metrics, error=result.error)


__all__ = [
    "FacetFetch",
    "RegistryClient",
    "fetch_adoption_metrics",
    "fetch_design_metrics",
    "parse_adoption_bindings",
    "parse_design_bindings",
]
