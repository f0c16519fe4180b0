"""Records exchanged between the registry client, the ranking phases and the renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

_DCTERMS = "http://purl.org/dc/terms/"
_UNTITLED = "Untitled"
_NO_DESCRIPTION = "No description"


def _first_value(raw: Any) -> Optional[str]:
    """Unwrap the value shapes returned by the LOV search API."""

    if isinstance(raw, (list, tuple)):
        for item in raw:
            value = _first_value(item)
            if value:
                return value
        return None
    if isinstance(raw, Mapping):
        return _first_value(raw.get("value"))
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _lookup(row: Mapping[str, Any], plain_key: str, namespaced_key: str) -> Optional[str]:
    value = _first_value(row.get(plain_key))
    if value:
        return value
    value = _first_value(row.get(namespaced_key))
    if value:
        return value
    # Language-tagged variants such as ``http://purl.org/dc/terms/title@en``.
    for key in sorted(k for k in row if isinstance(k, str) and k.startswith(namespaced_key + "@")):
        value = _first_value(row[key])
        if value:
            return value
    return None


@dataclass(slots=True)
class VocabularyEntry:
    """A single keyword-search hit. Identity is the ``uri``."""

    uri: Optional[str]
    title: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None
    prefix: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_search_row(cls, row: Mapping[str, Any]) -> "VocabularyEntry":
        return cls(
            uri=_first_value(row.get("uri")),
            title=_lookup(row, "title", _DCTERMS + "title"),
            description=_lookup(row, "description", _DCTERMS + "description"),
            homepage=_first_value(row.get("homepage")),
            prefix=_first_value(row.get("prefix")),
            raw=dict(row),
        )

    @property
    def display_title(self) -> str:
        return self.title or _UNTITLED

    @property
    def display_description(self) -> str:
        return self.description or _NO_DESCRIPTION


@dataclass(slots=True, frozen=True)
class AdoptionMetrics:
    """Evidence of real-world instantiation, kept as the registry's literal strings."""

    reused_by_vocabularies: str = "0"
    reused_by_datasets: str = "0"
    occurrences_in_datasets: str = "0"

    def to_dict(self) -> Dict[str, str]:
        return {
            "reusedByVocabularies": self.reused_by_vocabularies,
            "reusedByDatasets": self.reused_by_datasets,
            "occurrencesInDatasets": self.occurrences_in_datasets,
        }


@dataclass(slots=True, frozen=True)
class DesignMetrics:
    """Distinct related-vocabulary counts for the six VOAF relationship predicates."""

    extends: int = 0
    has_equivalences_with: int = 0
    relies_on: int = 0
    used_by: int = 0
    specializes: int = 0
    generalizes: int = 0

    def counts(self) -> Tuple[int, ...]:
        return (
            self.extends,
            self.has_equivalences_with,
            self.relies_on,
            self.used_by,
            self.specializes,
            self.generalizes,
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "extends": self.extends,
            "hasEquivalencesWith": self.has_equivalences_with,
            "reliesOn": self.relies_on,
            "usedBy": self.used_by,
            "specializes": self.specializes,
            "generalizes": self.generalizes,
        }


@dataclass(slots=True)
class MergedRecord:
    """A search hit joined with both metadata facets, before scoring."""

    entry: VocabularyEntry
    adoption: AdoptionMetrics
    design: DesignMetrics


@dataclass(slots=True)
class RankedEntry:
    """A merged record with its connectivity score."""

    entry: VocabularyEntry
    adoption: AdoptionMetrics
    design: DesignMetrics
    connectivity_score: float

    @property
    def uri(self) -> Optional[str]:
        return self.entry.uri

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uri": self.entry.uri,
            "title": self.entry.display_title,
            "description": self.entry.display_description,
            "homepage": self.entry.homepage,
            "adoptionData": self.adoption.to_dict(),
            "designData": self.design.to_dict(),
            "connectivityScore": self.connectivity_score,
        }


__all__ = [
    "AdoptionMetrics",
    "DesignMetrics",
    "MergedRecord",
    "RankedEntry",
    "VocabularyEntry",
]
