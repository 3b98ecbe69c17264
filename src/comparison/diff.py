"""Baseline vs comparison diff of two scoring results.

Matches categories, groups and items by id and reports per-track deltas.
Nodes present on one side only are reported as not comparable (with
their one-sided scores) instead of producing a delta.

Output as a nested dataset for reporting.
Deterministic -- no I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

from src.models.common import Track
from src.models.results import (
    CategoryResult,
    GroupResult,
    ItemResult,
    OverallResult,
)
from src.scoring.explain import round_half_up

# Deltas smaller than this (in points) are shown as unchanged.
SIGNIFICANT_DELTA = 1.0
# Deltas smaller than this are rendered as a dash.
DISPLAY_DELTA = 0.5

NodeT = TypeVar("NodeT")


class ComparisonStatus(StrEnum):
    """Whether a node exists on both sides of the comparison."""

    COMPARABLE = "COMPARABLE"
    ONLY_IN_BASELINE = "ONLY_IN_BASELINE"
    ONLY_IN_COMPARISON = "ONLY_IN_COMPARISON"


class Direction(StrEnum):
    UP = "UP"
    DOWN = "DOWN"
    SAME = "SAME"


@dataclass(frozen=True)
class ScoreDelta:
    """Change of one score from baseline to comparison."""

    baseline: float
    comparison: float
    delta: float
    direction: Direction

    @classmethod
    def between(cls, baseline: float, comparison: float) -> ScoreDelta:
        delta = comparison - baseline
        if delta >= SIGNIFICANT_DELTA:
            direction = Direction.UP
        elif delta <= -SIGNIFICANT_DELTA:
            direction = Direction.DOWN
        else:
            direction = Direction.SAME
        return cls(
            baseline=baseline,
            comparison=comparison,
            delta=delta,
            direction=direction,
        )

    @property
    def significant(self) -> bool:
        return self.direction != Direction.SAME

    def to_dict(self) -> dict:
        return {
            "baseline": self.baseline,
            "comparison": self.comparison,
            "delta": self.delta,
            "direction": self.direction.value,
        }


def format_delta(delta: float) -> str:
    """Render a delta as ``+12%`` / ``-3%``, or a dash when negligible."""
    if abs(delta) < DISPLAY_DELTA:
        return "—"
    sign = "+" if delta > 0 else ""
    return f"{sign}{round_half_up(delta)}%"


@dataclass(frozen=True)
class ItemComparison:
    """One item on both sides (or one side only)."""

    id: str
    name: str
    track: Track
    status: ComparisonStatus
    baseline_score: float | None
    comparison_score: float | None
    delta: ScoreDelta | None

    @property
    def comparable(self) -> bool:
        return self.status == ComparisonStatus.COMPARABLE

    @property
    def changed(self) -> bool:
        """Missing on one side, or moved by at least one point."""
        return self.delta is None or self.delta.significant

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "track": self.track.value,
            "status": self.status.value,
            "baseline_score": self.baseline_score,
            "comparison_score": self.comparison_score,
            "delta": self.delta.to_dict() if self.delta else None,
        }


@dataclass(frozen=True)
class GroupComparison:
    """One group on both sides (or one side only)."""

    id: str
    name: str
    status: ComparisonStatus
    baseline: GroupResult | None
    comparison: GroupResult | None
    operational: ScoreDelta | None
    design: ScoreDelta | None
    excluded_in_baseline: bool = False
    excluded_in_comparison: bool = False
    items: list[ItemComparison] = field(default_factory=list)

    @property
    def comparable(self) -> bool:
        return self.status == ComparisonStatus.COMPARABLE

    def changed_items(self) -> list[ItemComparison]:
        return [i for i in self.items if i.changed]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "baseline": _scores(self.baseline),
            "comparison": _scores(self.comparison),
            "operational": self.operational.to_dict() if self.operational else None,
            "design": self.design.to_dict() if self.design else None,
            "excluded_in_baseline": self.excluded_in_baseline,
            "excluded_in_comparison": self.excluded_in_comparison,
            "items": [i.to_dict() for i in self.items],
        }


@dataclass(frozen=True)
class CategoryComparison:
    """One category on both sides (or one side only)."""

    id: str
    name: str
    status: ComparisonStatus
    baseline: CategoryResult | None
    comparison: CategoryResult | None
    operational: ScoreDelta | None
    design: ScoreDelta | None
    groups: list[GroupComparison] = field(default_factory=list)

    @property
    def comparable(self) -> bool:
        return self.status == ComparisonStatus.COMPARABLE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "baseline": _scores(self.baseline),
            "comparison": _scores(self.comparison),
            "operational": self.operational.to_dict() if self.operational else None,
            "design": self.design.to_dict() if self.design else None,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass(frozen=True)
class ResultComparison:
    """Complete comparison dataset for reporting."""

    operational: ScoreDelta
    design: ScoreDelta
    categories: list[CategoryComparison]

    def to_dict(self) -> dict:
        return {
            "operational": self.operational.to_dict(),
            "design": self.design.to_dict(),
            "categories": [c.to_dict() for c in self.categories],
        }


def compare_results(
    baseline: OverallResult,
    comparison: OverallResult,
    *,
    baseline_excluded: Collection[str] = frozenset(),
    comparison_excluded: Collection[str] = frozenset(),
) -> ResultComparison:
    """Diff two results node by node.

    Order follows the baseline; nodes that only exist in the comparison
    are appended in comparison order.
    """
    categories = [
        _compare_category(node_id, b, c, baseline_excluded, comparison_excluded)
        for node_id, b, c in _pair_by_id(
            baseline.categories, comparison.categories, lambda n: n.id
        )
    ]
    return ResultComparison(
        operational=ScoreDelta.between(
            baseline.overall_operational_score, comparison.overall_operational_score
        ),
        design=ScoreDelta.between(
            baseline.overall_design_score, comparison.overall_design_score
        ),
        categories=categories,
    )


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _pair_by_id(
    baseline: Sequence[NodeT],
    comparison: Sequence[NodeT],
    id_of: Callable[[NodeT], str],
) -> Iterator[tuple[str, NodeT | None, NodeT | None]]:
    by_id = {id_of(node): node for node in comparison}
    seen: set[str] = set()
    for node in baseline:
        node_id = id_of(node)
        seen.add(node_id)
        yield node_id, node, by_id.get(node_id)
    for node in comparison:
        node_id = id_of(node)
        if node_id not in seen:
            seen.add(node_id)
            yield node_id, None, node


def _status(baseline: object | None, comparison: object | None) -> ComparisonStatus:
    if baseline is not None and comparison is not None:
        return ComparisonStatus.COMPARABLE
    if baseline is not None:
        return ComparisonStatus.ONLY_IN_BASELINE
    return ComparisonStatus.ONLY_IN_COMPARISON


def _track_deltas(
    baseline: GroupResult | CategoryResult | None,
    comparison: GroupResult | CategoryResult | None,
) -> tuple[ScoreDelta | None, ScoreDelta | None]:
    if baseline is None or comparison is None:
        return None, None
    return (
        ScoreDelta.between(baseline.operational_score, comparison.operational_score),
        ScoreDelta.between(baseline.design_score, comparison.design_score),
    )


def _scores(node: GroupResult | CategoryResult | None) -> dict | None:
    if node is None:
        return None
    return {
        "operational_score": node.operational_score,
        "design_score": node.design_score,
        "is_capped": node.is_capped,
    }


def _compare_category(
    node_id: str,
    baseline: CategoryResult | None,
    comparison: CategoryResult | None,
    baseline_excluded: Collection[str],
    comparison_excluded: Collection[str],
) -> CategoryComparison:
    operational, design = _track_deltas(baseline, comparison)
    groups = [
        _compare_group(group_id, b, c, baseline_excluded, comparison_excluded)
        for group_id, b, c in _pair_by_id(
            baseline.groups if baseline else [],
            comparison.groups if comparison else [],
            lambda n: n.id,
        )
    ]
    named = baseline or comparison
    return CategoryComparison(
        id=node_id,
        name=named.name if named else "",
        status=_status(baseline, comparison),
        baseline=baseline,
        comparison=comparison,
        operational=operational,
        design=design,
        groups=groups,
    )


def _compare_group(
    node_id: str,
    baseline: GroupResult | None,
    comparison: GroupResult | None,
    baseline_excluded: Collection[str],
    comparison_excluded: Collection[str],
) -> GroupComparison:
    operational, design = _track_deltas(baseline, comparison)
    items = [
        _compare_item(item_id, b, c)
        for item_id, b, c in _pair_by_id(
            baseline.items if baseline else [],
            comparison.items if comparison else [],
            lambda n: n.id,
        )
    ]
    named = baseline or comparison
    return GroupComparison(
        id=node_id,
        name=named.name if named else "",
        status=_status(baseline, comparison),
        baseline=baseline,
        comparison=comparison,
        operational=operational,
        design=design,
        excluded_in_baseline=node_id in baseline_excluded,
        excluded_in_comparison=node_id in comparison_excluded,
        items=items,
    )


def _compare_item(
    node_id: str,
    baseline: ItemResult | None,
    comparison: ItemResult | None,
) -> ItemComparison:
    named = baseline or comparison
    delta = None
    if baseline is not None and comparison is not None:
        delta = ScoreDelta.between(baseline.score, comparison.score)
    return ItemComparison(
        id=node_id,
        name=named.name,
        track=named.track,
        status=_status(baseline, comparison),
        baseline_score=baseline.score if baseline else None,
        comparison_score=comparison.score if comparison else None,
        delta=delta,
    )
