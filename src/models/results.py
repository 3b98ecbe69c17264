"""Computed scoring results.

Results are immutable records built fresh on every computation; nothing
here is persisted by the engine. Scores are percentages in [0, 100] for
well-formed input (out-of-range percentage answers pass through).
"""

from pydantic import Field

from src.models.common import ItemKind, Track, TrustScoreBase


class ItemResult(TrustScoreBase, frozen=True):
    """An item with its resolved score and the caps it carries."""

    id: str
    name: str
    code: str = ""
    track: Track
    kind: ItemKind
    score: float
    group_cap: float
    category_cap: float
    standards: list[str] = Field(default_factory=list)


class CappingItem(TrustScoreBase, frozen=True):
    """A low-scoring item that imposes a ceiling on its group or category."""

    id: str
    name: str
    code: str = ""
    track: Track
    kind: ItemKind
    score: float
    group_cap: float
    category_cap: float


class GroupResult(TrustScoreBase, frozen=True):
    """A group after aggregation and capping."""

    id: str
    name: str
    code: str = ""
    description: str | None = None
    operational_score: float = 0.0
    design_score: float = 0.0
    operational_weight: float = 1.0
    design_weight: float = 1.0
    is_capped: bool = False
    capping_items: list[CappingItem] = Field(default_factory=list)
    applied_operational_group_cap: float = 100.0
    applied_operational_category_cap: float = 100.0
    applied_design_group_cap: float = 100.0
    applied_design_category_cap: float = 100.0
    items: list[ItemResult] = Field(default_factory=list)

    def score_for(self, track: Track) -> float:
        if track == Track.OPERATIONAL:
            return self.operational_score
        return self.design_score

    def weight_for(self, track: Track) -> float:
        if track == Track.OPERATIONAL:
            return self.operational_weight
        return self.design_weight

    def capping_items_for(self, track: Track) -> list[CappingItem]:
        """Capping items on ``track``, in item order."""
        return [item for item in self.capping_items if item.track == track]


class CappingGroup(TrustScoreBase, frozen=True):
    """A group whose low items triggered the category-wide ceiling."""

    id: str
    name: str
    code: str = ""
    operational_score: float
    design_score: float
    capping_items: list[CappingItem] = Field(default_factory=list)


class CategoryResult(TrustScoreBase, frozen=True):
    """A category after aggregating its (already capped) groups."""

    id: str
    name: str
    code: str = ""
    icon: str | None = None
    operational_score: float = 0.0
    design_score: float = 0.0
    is_capped: bool = False
    capping_groups: list[CappingGroup] = Field(default_factory=list)
    groups: list[GroupResult] = Field(default_factory=list)

    def score_for(self, track: Track) -> float:
        if track == Track.OPERATIONAL:
            return self.operational_score
        return self.design_score


class OverallResult(TrustScoreBase, frozen=True):
    """The complete result of one computation."""

    overall_operational_score: float = 0.0
    overall_design_score: float = 0.0
    categories: list[CategoryResult] = Field(default_factory=list)

    def score_for(self, track: Track) -> float:
        if track == Track.OPERATIONAL:
            return self.overall_operational_score
        return self.overall_design_score
