"""CLI entrypoint for searching and ranking LOV vocabularies."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import List, Optional

from .config import get_settings
from .models import RankedEntry
from .ranking import SearchFailedError, search_and_rank
from .render import render_error, render_results, render_suggestions


def _configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


def run(term: str) -> List[RankedEntry]:
    """Execute one search synchronously."""

    return asyncio.run(search_and_rank(term, get_settings()))


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""

    parser = argparse.ArgumentParser(description="Search LOV vocabularies ranked by connectivity evidence")
    parser.add_argument("term", nargs="*", help="Free-text search term (e.g. metadata, person, organization)")
    parser.add_argument("--limit", type=int, default=None, help="Show only the first N ranked vocabularies")
    parser.add_argument("--json", action="store_true", help="Print the ranked list as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    term = " ".join(args.term).strip()
    if not term:
        render_suggestions()
        return 0

    try:
        results = run(term)
    except SearchFailedError as exc:
        render_error(str(exc))
        return 1

    if args.limit is not None:
        results = results[: max(args.limit, 0)]
    if args.json:
        print(json.dumps([item.to_dict() for item in results], indent=2))
    else:
        render_results(results, term=term)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
