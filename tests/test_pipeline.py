from __future__ import annotations

import asyncio
from typing import List

import pytest

from lovrank.ranking import RankingPipeline, SearchFailedError, search_and_rank
from lovrank.registry.client import FetchResult
from stubs import StubRegistryClient, binding

A = "http://example.org/a#"
B = "http://example.org/b#"
C = "http://example.org/c#"


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["", "   ", "\t\n"])
async def test_blank_term_makes_no_calls(term: str) -> None:
    client = StubRegistryClient(search_rows=[{"uri": A}])

    results = await RankingPipeline(client).rank(term)

    assert results == []
    assert client.call_count == 0


@pytest.mark.asyncio
async def test_search_and_rank_short_circuits_blank_term() -> None:
    assert await search_and_rank("  ") == []


@pytest.mark.asyncio
async def test_no_hits_skips_metadata_queries() -> None:
    client = StubRegistryClient(search_rows=[])

    results = await RankingPipeline(client).rank("zzzz")

    assert results == []
    assert client.search_calls == ["zzzz"]
    assert client.sparql_calls == []


@pytest.mark.asyncio
async def test_hit_without_metadata_gets_zero_defaults() -> None:
    client = StubRegistryClient(search_rows=[{"uri": A, "title": "Alpha"}])

    (item,) = await RankingPipeline(client).rank("alpha")

    assert item.adoption.reused_by_vocabularies == "0"
    assert item.adoption.occurrences_in_datasets == "0"
    assert list(item.design.counts()) == [0, 0, 0, 0, 0, 0]
    assert item.connectivity_score == 0


@pytest.mark.asyncio
async def test_ranks_by_connectivity_score() -> None:
    # A: design ln(7) and adoption ln(3), about 1.61 combined.
    # B: adoption ln(20) only, about 1.20 combined. C: nothing.
    client = StubRegistryClient(
        search_rows=[{"uri": C}, {"uri": B}, {"uri": A}],
        adoption_rows=[binding(vocab=A, reusedByVocabs=2), binding(vocab=B, reusedByVocabs=19)],
        design_rows=[binding(vocab=A, extendsCount=6)],
    )

    results = await RankingPipeline(client).rank("example")

    assert [item.uri for item in results] == [A, B, C]
    assert results[0].connectivity_score > results[1].connectivity_score > results[2].connectivity_score == 0
    assert len(client.sparql_calls) == 2
    for query in client.sparql_calls:
        assert all(f"<{uri}>" in query for uri in (A, B, C))


@pytest.mark.asyncio
async def test_equal_scores_keep_search_order_and_uri_less_hits_are_kept() -> None:
    client = StubRegistryClient(
        search_rows=[{"uri": C}, {"title": "No uri"}, {"uri": A}, {"uri": B}],
        design_rows=[binding(vocab=B, reliesOnCount=3)],
    )

    results = await RankingPipeline(client).rank("example")

    assert [item.uri for item in results] == [B, C, None, A]
    assert results[2].entry.title == "No uri"
    for query in client.sparql_calls:
        assert "<None>" not in query


@pytest.mark.asyncio
async def test_degraded_calls_are_reported_in_diagnostics() -> None:
    client = StubRegistryClient(search_rows=[{"uri": A}], sparql_error="SPARQL failed: 502")
    pipeline = RankingPipeline(client)

    results = await pipeline.rank("alpha")

    assert [item.connectivity_score for item in results] == [0.0]
    assert pipeline.last_call_degraded
    assert pipeline.last_diagnostics == {
        "search": None,
        "adoption": "SPARQL failed: 502",
        "design": "SPARQL failed: 502",
    }


@pytest.mark.asyncio
async def test_unreachable_search_looks_empty_but_is_distinguishable() -> None:
    client = StubRegistryClient(search_error="connection refused")
    pipeline = RankingPipeline(client)

    assert await pipeline.rank("alpha") == []
    assert pipeline.last_diagnostics == {"search": "connection refused"}
    assert client.sparql_calls == []


@pytest.mark.asyncio
async def test_unexpected_error_surfaces_as_search_failed() -> None:
    class ExplodingClient(StubRegistryClient):
        async def execute_sparql(self, query: str) -> FetchResult:
            raise KeyError("bindings")

    pipeline = RankingPipeline(ExplodingClient(search_rows=[{"uri": A}]))

    with pytest.raises(SearchFailedError, match="Search failed"):
        await pipeline.rank("alpha")


@pytest.mark.asyncio
async def test_metadata_queries_run_concurrently() -> None:
    started: List[str] = []
    both_started = asyncio.Event()
    release = asyncio.Event()

    class GatedClient(StubRegistryClient):
        async def execute_sparql(self, query: str) -> FetchResult:
            started.append("design" if "GROUP BY" in query else "adoption")
            if len(started) == 2:
                both_started.set()
            await release.wait()
            return await super().execute_sparql(query)

    client = GatedClient(search_rows=[{"uri": A}])
    task = asyncio.create_task(RankingPipeline(client).rank("alpha"))

    # A sequential implementation would park on the first query forever.
    await asyncio.wait_for(both_started.wait(), timeout=2)
    assert sorted(started) == ["adoption", "design"]
    assert not task.done()

    release.set()
    results = await asyncio.wait_for(task, timeout=2)
    assert [item.uri for item in results] == [A]


@pytest.mark.asyncio
async def test_malformed_uris_are_kept_but_not_queried() -> None:
    bad = "http://example.org/bad uri>"
    client = StubRegistryClient(
        search_rows=[{"uri": bad}, {"uri": A}],
        adoption_rows=[binding(vocab=A, reusedByDatasets=4)],
    )

    results = await RankingPipeline(client).rank("example")

    assert [item.uri for item in results] == [A, bad]
    assert all(bad not in query for query in client.sparql_calls)


@pytest.mark.asyncio
async def test_oversized_counts_rank_first_instead_of_failing() -> None:
    client = StubRegistryClient(
        search_rows=[{"uri": B}, {"uri": A}],
        adoption_rows=[binding(vocab=A, occurrences="9" * 400)],
        design_rows=[binding(vocab=B, extendsCount="9" * 400)],
    )

    pipeline = RankingPipeline(client)
    results = await pipeline.rank("huge")

    assert [item.uri for item in results] == [B, A]
    assert [item.connectivity_score for item in results] == [1.0, 1.0]
    assert not pipeline.last_call_degraded
