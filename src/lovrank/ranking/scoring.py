"""Connectivity scoring from design and adoption convergence.

The score combines two kinds of evidence gathered from the LOV graph:

* design convergence, the vocabulary-to-vocabulary links (extends, equivalences,
  reliance, used-by, specialisation, generalisation), and
* adoption convergence, the reuse and occurrence counts in published datasets.

Every count enters through ``log(1 + x)`` so that a handful of very popular
vocabularies do not flatten the rest of the ranking. The weighted sum is divided
by a fixed normaliser and clamped to ``[0, 1]``.
"""

from __future__ import annotations

import math
import re
from typing import Any

from ..models import AdoptionMetrics, DesignMetrics

DESIGN_WEIGHT = 0.6
ADOPTION_WEIGHT = 0.4
SCORE_NORMALIZER = 15.0
OCCURRENCE_SCALE = 1000.0

_LEADING_INT = re.compile(r"^\s*\+?(\d+)")
# Longer digit runs are already far beyond float range; reading them is pointless.
_MAX_DIGITS = 400


def parse_count(value: Any) -> int:
    """Read a registry count as a non-negative integer.

    Strings are read up to the first non-digit (``"12.7"`` is 12). Anything that
    does not start with a digit, and any negative number, counts as 0.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if not math.isfinite(value) or value < 0:
            return 0
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    digits = match.group(1)
    if len(digits) > _MAX_DIGITS:
        return 10**_MAX_DIGITS
    return int(digits)


def _log_term(count: int, scale: float = 1.0) -> float:
    """Return ``log(1 + count / scale)``; counts beyond float range give ``inf``."""

    try:
        return math.log1p(float(count) / scale)
    except OverflowError:
        return math.inf


def design_convergence(design: DesignMetrics) -> float:
    return sum(_log_term(parse_count(count)) for count in design.counts())


def adoption_convergence(adoption: AdoptionMetrics) -> float:
    return (
        _log_term(parse_count(adoption.reused_by_vocabularies))
        + _log_term(parse_count(adoption.reused_by_datasets))
        + _log_term(parse_count(adoption.occurrences_in_datasets), OCCURRENCE_SCALE)
    )


def connectivity_score(adoption: AdoptionMetrics, design: DesignMetrics) -> float:
    """Return the normalised connectivity score in ``[0, 1]``."""

    total = DESIGN_WEIGHT * design_convergence(design) + ADOPTION_WEIGHT * adoption_convergence(adoption)
    return min(1.0, max(0.0, total / SCORE_NORMALIZER))


__all__ = [
    "ADOPTION_WEIGHT",
    "DESIGN_WEIGHT",
    "OCCURRENCE_SCALE",
    "SCORE_NORMALIZER",
    "adoption_convergence",
    "connectivity_score",
    "design_convergence",
    "parse_count",
]
