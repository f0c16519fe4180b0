"""SPARQL query construction for the two connectivity facets."""

from __future__ import annotations

import re
from typing import Iterable, List

VOAF_PREFIX = "PREFIX voaf: <http://purl.org/vocommons/voaf#>"

# Characters that cannot appear inside a SPARQL IRIREF.
_ILLEGAL_IRI_CHARS = re.compile(r'[<>"{}|^`\\\s]')

# (predicate, projected count variable) for the design facet.
DESIGN_PREDICATES = (
    ("extends", "extendsCount"),
    ("hasEquivalencesWith", "hasEquivalencesCount"),
    ("reliesOn", "reliesOnCount"),
    ("usedBy", "usedByCount"),
    ("specializes", "specializesCount"),
    ("generalizes", "generalizesCount"),
)

# (predicate, bound variable) for the adoption facet.
ADOPTION_PREDICATES = (
    ("reusedByVocabularies", "reusedByVocabs"),
    ("reusedByDatasets", "reusedByDatasets"),
    ("occurrencesInDatasets", "occurrences"),
)


def unique_uris(uris: Iterable[str]) -> List[str]:
    """Return the non-empty URIs once each, in first-seen order."""

    seen = set()
    ordered: List[str] = []
    for uri in uris:
        if not uri or uri in seen:
            continue
        seen.add(uri)
        ordered.append(uri)
    return ordered


def is_embeddable_iri(uri: str) -> bool:
    return bool(uri) and not _ILLEGAL_IRI_CHARS.search(uri)


def _values_clause(uris: Iterable[str]) -> str:
    ordered = unique_uris(uris)
    if not ordered:
        raise ValueError("At least one vocabulary URI is required to build a query")
    for uri in ordered:
        if not is_embeddable_iri(uri):
            raise ValueError(f"Cannot embed {uri!r} as an IRI reference")
    return "VALUES ?vocab { " + " ".join(f"<{uri}>" for uri in ordered) + " }"


def build_adoption_query(uris: Iterable[str]) -> str:
    """Select reuse and occurrence counts for each vocabulary."""

    projection = " ".join(f"?{variable}" for _, variable in ADOPTION_PREDICATES)
    optionals = "\n".join(
        f"  OPTIONAL {{ ?vocab voaf:{predicate} ?{variable} }}"
        for predicate, variable in ADOPTION_PREDICATES
    )
    return (
        f"{VOAF_PREFIX}\n"
        f"SELECT ?vocab {projection}\n"
        "WHERE {\n"
        f"  {_values_clause(uris)}\n"
        "  ?vocab a voaf:Vocabulary .\n"
        f"{optionals}\n"
        "}\n"
    )


def build_design_query(uris: Iterable[str]) -> str:
    """Count distinct related vocabularies per relationship predicate."""

    projection = "\n".join(
        f"       (COUNT(DISTINCT ?{predicate}) AS ?{count})" for predicate, count in DESIGN_PREDICATES
    )
    optionals = "\n".join(
        f"  OPTIONAL {{ ?vocab voaf:{predicate} ?{predicate} }}" for predicate, _ in DESIGN_PREDICATES
    )
    return (
        f"{VOAF_PREFIX}\n"
        "SELECT ?vocab\n"
        f"{projection}\n"
        "WHERE {\n"
        f"  {_values_clause(uris)}\n"
        "  ?vocab a voaf:Vocabulary .\n"
        f"{optionals}\n"
        "}\n"
        "GROUP BY ?vocab\n"
    )


__all__ = [
    "ADOPTION_PREDICATES",
    "DESIGN_PREDICATES",
    "VOAF_PREFIX",
    "build_adoption_query",
    "build_design_query",
    "is_embeddable_iri",
    "unique_uris",
]
