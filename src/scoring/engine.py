"""Hierarchy walker: the scoring engine entry point.

Walks the fixed hierarchy bottom-up:

1. items      -> leaf scores
2. items      -> group score per track (weighted), then group capping
3. groups     -> category score per track (weighted, from capped group
                 scores), then the category-wide ceiling
4. categories -> overall score per track (unweighted mean)

Excluded groups are dropped before step 2 and contribute neither score
nor weight anywhere. The computation is a pure function of
``(framework, answers, excluded group ids, config)``.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass

from src.models.common import Track
from src.models.framework import AnswerMap, Category, Framework, Group, Item
from src.models.results import (
    CategoryResult,
    GroupResult,
    ItemResult,
    OverallResult,
)
from src.scoring import leaf
from src.scoring.aggregate import simple_mean, weighted_mean
from src.scoring.capping import CappingEvaluator
from src.scoring.config import ScoringConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupAggregate:
    """A group's pre-cap track scores, before the capping rule runs."""

    group: Group
    items: tuple[ItemResult, ...]
    operational_score: float
    design_score: float


class ScoringEngine:
    """Computes capped, aggregated scores for a framework and answer set."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()
        self._capping = CappingEvaluator()

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def compute(
        self,
        framework: Framework,
        answers: AnswerMap,
        excluded_group_ids: Collection[str] = frozenset(),
    ) -> OverallResult:
        """Score every category, group and item of ``framework``."""
        excluded = frozenset(excluded_group_ids)
        categories = [
            self.score_category(category, answers, excluded) for category in framework
        ]

        result = OverallResult(
            overall_operational_score=simple_mean(c.operational_score for c in categories),
            overall_design_score=simple_mean(c.design_score for c in categories),
            categories=categories,
        )
        logger.debug(
            "Scored %d categories, %d groups, %d items (%d excluded groups): "
            "operational=%.2f design=%.2f",
            len(categories),
            sum(len(c.groups) for c in categories),
            sum(len(g.items) for c in categories for g in c.groups),
            len(excluded),
            result.overall_operational_score,
            result.overall_design_score,
        )
        return result

    # ---------------------------------------------------------------
    # Category level
    # ---------------------------------------------------------------

    def score_category(
        self,
        category: Category,
        answers: AnswerMap,
        excluded: frozenset[str] = frozenset(),
    ) -> CategoryResult:
        groups = [
            self.score_group(group, answers)
            for group in category.groups
            if group.id not in excluded
        ]

        def track_score(track: Track) -> float:
            return weighted_mean(
                groups,
                weight_of=lambda g: g.weight_for(track),
                score_of=lambda g: g.score_for(track),
            )

        capping = self._capping.evaluate_category(
            track_score(Track.OPERATIONAL),
            track_score(Track.DESIGN),
            groups,
        )
        if capping.capped:
            logger.debug(
                "Category %s ceilinged by %d group(s)",
                category.code or category.id,
                len(capping.capping_groups),
            )

        return CategoryResult(
            id=category.id,
            name=category.name,
            code=category.code,
            icon=category.icon,
            operational_score=capping.operational_score,
            design_score=capping.design_score,
            is_capped=capping.capped,
            capping_groups=list(capping.capping_groups),
            groups=groups,
        )

    # ---------------------------------------------------------------
    # Group level
    # ---------------------------------------------------------------

    def aggregate_group(self, group: Group, answers: AnswerMap) -> GroupAggregate:
        """Score the items of ``group`` and aggregate them per track."""
        items = tuple(self.score_item(item, answers) for item in group.items)
        weighted = [
            (result, self._config.resolve_weight(item.weight))
            for result, item in zip(items, group.items)
        ]

        def track_score(track: Track) -> float:
            return weighted_mean(
                (pair for pair in weighted if pair[0].track == track),
                weight_of=lambda pair: pair[1],
                score_of=lambda pair: pair[0].score,
            )

        return GroupAggregate(
            group=group,
            items=items,
            operational_score=track_score(Track.OPERATIONAL),
            design_score=track_score(Track.DESIGN),
        )

    def score_group(self, group: Group, answers: AnswerMap) -> GroupResult:
        aggregate = self.aggregate_group(group, answers)
        capping = self._capping.evaluate_group(
            aggregate.operational_score,
            aggregate.design_score,
            list(aggregate.items),
        )
        operational = capping.for_track(Track.OPERATIONAL)
        design = capping.for_track(Track.DESIGN)
        if capping.is_capped:
            logger.debug(
                "Group %s capped: operational %.2f -> %.2f, design %.2f -> %.2f",
                group.code or group.id,
                aggregate.operational_score,
                operational.score,
                aggregate.design_score,
                design.score,
            )

        return GroupResult(
            id=group.id,
            name=group.name,
            code=group.code,
            description=group.description,
            operational_score=operational.score,
            design_score=design.score,
            operational_weight=self._config.resolve_weight(
                group.weight_for(Track.OPERATIONAL)
            ),
            design_weight=self._config.resolve_weight(group.weight_for(Track.DESIGN)),
            is_capped=capping.is_capped,
            capping_items=list(capping.capping_items),
            applied_operational_group_cap=operational.group_ceiling,
            applied_operational_category_cap=operational.category_ceiling,
            applied_design_group_cap=design.group_ceiling,
            applied_design_category_cap=design.category_ceiling,
            items=list(aggregate.items),
        )

    # ---------------------------------------------------------------
    # Item level
    # ---------------------------------------------------------------

    def score_item(self, item: Item, answers: AnswerMap) -> ItemResult:
        return ItemResult(
            id=item.id,
            name=item.name,
            code=item.code,
            track=item.track,
            kind=item.kind,
            score=leaf.score_item(item, answers),
            group_cap=self._config.resolve_cap(item.group_cap),
            category_cap=self._config.resolve_cap(item.category_cap),
            standards=list(item.standards),
        )


def compute_results(
    framework: Framework,
    answers: AnswerMap,
    excluded_group_ids: Collection[str] = frozenset(),
    config: ScoringConfig | None = None,
) -> OverallResult:
    """Compute the full scoring result. See ``ScoringEngine.compute``."""
    return ScoringEngine(config=config).compute(framework, answers, excluded_group_ids)
