"""Connectivity ranking of LOV keyword-search results."""

from .aggregator import merge_metadata
from .metadata import FacetFetch, fetch_adoption_metrics, fetch_design_metrics
from .phases import KeywordSearchPhase, MetadataPhase, ScoringPhase
from .pipeline import SEARCH_FAILED_MESSAGE, RankingPipeline, SearchFailedError, search_and_rank
from .scoring import adoption_convergence, connectivity_score, design_convergence, parse_count
from .session import SEARCH_CANCELLED_MESSAGE, Failed, Idle, PipelineState, SearchSession, Searching, Succeeded

__all__ = [
    "FacetFetch",
    "Failed",
    "Idle",
    "KeywordSearchPhase",
    "MetadataPhase",
    "PipelineState",
    "RankingPipeline",
    "SEARCH_CANCELLED_MESSAGE",
    "SEARCH_FAILED_MESSAGE",
    "ScoringPhase",
    "SearchFailedError",
    "SearchSession",
    "Searching",
    "Succeeded",
    "adoption_convergence",
    "connectivity_score",
    "design_convergence",
    "fetch_adoption_metrics",
    "fetch_design_metrics",
    "merge_metadata",
    "parse_count",
    "search_and_rank",
]
