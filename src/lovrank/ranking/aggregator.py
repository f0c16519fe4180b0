"""Join keyword-search hits with their adoption and design metadata."""

from __future__ import annotations

from typing import Iterable, List, Mapping

from ..models import AdoptionMetrics, DesignMetrics, MergedRecord, VocabularyEntry

DEFAULT_ADOPTION = AdoptionMetrics()
DEFAULT_DESIGN = DesignMetrics()


def merge_metadata(
    entries: Iterable[VocabularyEntry],
    adoption: Mapping[str, AdoptionMetrics],
    design: Mapping[str, DesignMetrics],
) -> List[MergedRecord]:
    """Return one record per entry, in search order. Missing rows count as zero."""

    merged: List[MergedRecord] = []
    for entry in entries:
        uri = entry.uri
        merged.append(
            MergedRecord(
                entry=entry,
                adoption=adoption.get(uri, DEFAULT_ADOPTION) if uri else DEFAULT_ADOPTION,
                design=design.get(uri, DEFAULT_DESIGN) if uri else DEFAULT_DESIGN,
            )
        )
    return merged


__all__ = ["DEFAULT_ADOPTION", "DEFAULT_DESIGN", "merge_metadata"]
