"""Search Linked Open Vocabularies and rank the hits by connectivity evidence."""

from .config import RegistrySettings, get_settings
from .models import AdoptionMetrics, DesignMetrics, RankedEntry, VocabularyEntry
from .ranking import RankingPipeline, SearchFailedError, SearchSession, search_and_rank

__all__ = [
    "AdoptionMetrics",
    "DesignMetrics",
    "RankedEntry",
    "RankingPipeline",
    "RegistrySettings",
    "SearchFailedError",
    "SearchSession",
    "VocabularyEntry",
    "get_settings",
    "search_and_rank",
]
