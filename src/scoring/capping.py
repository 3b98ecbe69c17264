"""Capping evaluator: ceilings for groups and categories with deficient items.

A group cannot report a high score while one of its items is badly
failing. For each track independently:

* "low" items are those scoring strictly below ``LOW_SCORE_THRESHOLD`` (50);
* the group ceiling is the minimum ``group_cap`` over the low items
  (the category ceiling likewise from ``category_cap``);
* the track score becomes ``min(aggregate, group ceiling)`` and is
  flagged capped only when that actually lowered the number and the
  ceiling is below 100.

Low items (on either track) that carry any cap below 100 are recorded as
capping items for explanation. A category containing at least one group
with a capping item is ceilinged at the fixed ``CATEGORY_CEILING`` (85) on both
tracks and flagged.

Deterministic, no I/O, never raises for missing data.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.models.common import Track
from src.models.results import CappingGroup, CappingItem, GroupResult, ItemResult

# A cap of 100 imposes nothing.
UNCAPPED = 100.0
# Items scoring strictly below this are "low".
LOW_SCORE_THRESHOLD = 50.0
# Category-wide ceiling, independent of any item's category_cap.
CATEGORY_CEILING = 85.0


@dataclass(frozen=True)
class TrackCapping:
    """Outcome of the group-level rule for one track."""

    score: float
    capped: bool
    group_ceiling: float = UNCAPPED
    category_ceiling: float = UNCAPPED


@dataclass(frozen=True)
class GroupCapping:
    """Outcome of the group-level rule for both tracks."""

    operational: TrackCapping
    design: TrackCapping
    capping_items: tuple[CappingItem, ...]

    @property
    def is_capped(self) -> bool:
        return self.operational.capped or self.design.capped

    def for_track(self, track: Track) -> TrackCapping:
        if track == Track.OPERATIONAL:
            return self.operational
        return self.design


@dataclass(frozen=True)
class CategoryCapping:
    """Outcome of the category-level rule."""

    operational_score: float
    design_score: float
    capped: bool
    capping_groups: tuple[CappingGroup, ...]


class CappingEvaluator:
    """Applies the group- and category-level capping rules."""

    # ---------------------------------------------------------------
    # Group level
    # ---------------------------------------------------------------

    def is_low(self, score: float) -> bool:
        return score < LOW_SCORE_THRESHOLD

    def low_items(self, items: list[ItemResult], track: Track) -> list[ItemResult]:
        """Items on ``track`` scoring below the low threshold, in item order."""
        return [i for i in items if i.track == track and self.is_low(i.score)]

    def evaluate_track(
        self,
        aggregate_score: float,
        low_items: list[ItemResult],
    ) -> TrackCapping:
        """Apply the ceiling from ``low_items`` to one track's aggregate."""
        if not low_items:
            return TrackCapping(score=aggregate_score, capped=False)

        group_ceiling = min(i.group_cap for i in low_items)
        category_ceiling = min(i.category_cap for i in low_items)
        capped = aggregate_score > group_ceiling and group_ceiling < UNCAPPED

        return TrackCapping(
            score=min(aggregate_score, group_ceiling),
            capped=capped,
            group_ceiling=group_ceiling,
            category_ceiling=category_ceiling,
        )

    def evaluate_group(
        self,
        operational_score: float,
        design_score: float,
        items: list[ItemResult],
    ) -> GroupCapping:
        """Apply the group-level rule to both tracks of one group."""
        low_operational = self.low_items(items, Track.OPERATIONAL)
        low_design = self.low_items(items, Track.DESIGN)

        capping_items = tuple(
            _to_capping_item(i)
            for i in low_operational + low_design
            if i.group_cap < UNCAPPED or i.category_cap < UNCAPPED
        )

        return GroupCapping(
            operational=self.evaluate_track(operational_score, low_operational),
            design=self.evaluate_track(design_score, low_design),
            capping_items=capping_items,
        )

    # ---------------------------------------------------------------
    # Category level
    # ---------------------------------------------------------------

    def triggers_category_cap(self, group: GroupResult) -> bool:
        """True when any low item in ``group`` carries a cap below 100."""
        return any(
            self.is_low(i.score)
            and (i.group_cap < UNCAPPED or i.category_cap < UNCAPPED)
            for i in group.items
        )

    def evaluate_category(
        self,
        operational_score: float,
        design_score: float,
        groups: list[GroupResult],
    ) -> CategoryCapping:
        """Apply the fixed category ceiling when any group triggers it."""
        capping_groups = tuple(
            CappingGroup(
                id=g.id,
                name=g.name,
                code=g.code,
                operational_score=g.operational_score,
                design_score=g.design_score,
                capping_items=g.capping_items,
            )
            for g in groups
            if self.triggers_category_cap(g)
        )

        if not capping_groups:
            return CategoryCapping(
                operational_score=operational_score,
                design_score=design_score,
                capped=False,
                capping_groups=(),
            )

        return CategoryCapping(
            operational_score=min(operational_score, CATEGORY_CEILING),
            design_score=min(design_score, CATEGORY_CEILING),
            capped=True,
            capping_groups=capping_groups,
        )


def _to_capping_item(item: ItemResult) -> CappingItem:
    return CappingItem(
        id=item.id,
        name=item.name,
        code=item.code,
        track=item.track,
        kind=item.kind,
        score=item.score,
        group_cap=item.group_cap,
        category_cap=item.category_cap,
    )
