"""Weighted aggregation of child scores into a parent score.

Used twice per level: items -> group (before capping) and groups ->
category (after capping). The overall level is an unweighted mean.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def weighted_mean(
    children: Iterable[T],
    weight_of: Callable[[T], float],
    score_of: Callable[[T], float],
) -> float:
    """Weighted mean of ``score_of(child)``; 0.0 when the total weight is 0.

    ``weight_of`` must return already-resolved weights (see
    ``ScoringConfig.resolve_weight``).
    """
    total_weight = 0.0
    weighted_sum = 0.0
    for child in children:
        weight = weight_of(child)
        total_weight += weight
        weighted_sum += score_of(child) * weight

    if total_weight == 0.0:
        return 0.0
    return weighted_sum / total_weight


def simple_mean(scores: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for no scores."""
    values = list(scores)
    if not values:
        return 0.0
    return sum(values) / len(values)
