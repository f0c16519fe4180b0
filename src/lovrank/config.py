"""Configuration for the LOV connectivity search."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AnyHttpUrl, Field, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    """Settings model driven by environment variables.

    Environment variables are prefixed with ``LOVRANK_``. For example, set
    ``LOVRANK_SPARQL_ENDPOINT=http://localhost:3030/lov/sparql`` to query a local
    mirror of the registry graph.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOVRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    search_api_url: AnyHttpUrl = Field(
        default="https://lov.linkeddata.es/dataset/lov/api/v2/vocabulary/search",
        description="Keyword search endpoint of the LOV API v2.",
    )
    sparql_endpoint: AnyHttpUrl = Field(
        default="https://lov.linkeddata.es/dataset/lov/sparql",
        description="SPARQL endpoint exposing the LOV relationship graph.",
    )
    sparql_result_format: str = Field(
        default="json",
        description="Value sent as the ``format`` parameter of SPARQL requests.",
    )
    request_timeout_seconds: Optional[PositiveFloat] = Field(
        default=None,
        description="Total timeout applied to each registry request. Unset keeps the aiohttp default.",
    )
    retry_attempts: PositiveInt = Field(
        default=1,
        description="Attempts per request for transport failures (1 disables retries).",
    )


@lru_cache(maxsize=1)
def get_settings() -> RegistrySettings:
    """Return a cached ``RegistrySettings`` instance."""

    return RegistrySettings()


__all__ = ["RegistrySettings", "get_settings"]
