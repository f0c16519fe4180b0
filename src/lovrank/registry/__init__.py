"""Access to the Linked Open Vocabularies registry."""

from .client import FetchResult, LOVClient, RegistryRequestError
from .queries import build_adoption_query, build_design_query, unique_uris

__all__ = [
    "FetchResult",
    "LOVClient",
    "RegistryRequestError",
    "build_adoption_query",
    "build_design_query",
    "unique_uris",
]
