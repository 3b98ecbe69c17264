"""Pydantic schemas for the assessment framework and its answers.

The framework is a fixed four-level hierarchy:

    Category ("pillar") -> Group ("mechanism") -> Item ("metric")

plus the overall level computed from all categories. Every model here is
frozen: weights and caps cannot change while a computation is running.

An answer map is keyed by item id. An item with no entry is unanswered.
"""

from collections.abc import Mapping

from pydantic import Field

from src.models.common import (
    EntityId,
    ItemKind,
    Percentage,
    Track,
    TrustScoreBase,
    new_uuid7,
)

# Number of configuration presets a group can offer per track.
CONFIGURATION_SLOTS = 5


class ConfigurationPreset(TrustScoreBase, frozen=True):
    """A named preset a group offers for one track (e.g. "Basic", "Hardened")."""

    label: str
    description: str = ""


class Item(TrustScoreBase, frozen=True):
    """A single leaf evaluation question.

    ``weight``, ``group_cap`` and ``category_cap`` may be left unset
    (``None``); the engine then applies its configured defaults.
    """

    id: EntityId = Field(default_factory=new_uuid7)
    name: str
    code: str = ""
    description: str | None = None
    track: Track
    kind: ItemKind = ItemKind.BOOLEAN
    weight: float | None = Field(default=1.0, ge=0.0)
    group_cap: Percentage | None = 100.0
    category_cap: Percentage | None = 100.0
    standards: list[str] = Field(default_factory=list)
    percentage_choices: list[Percentage | None] = Field(
        default_factory=list,
        max_length=CONFIGURATION_SLOTS,
    )

    def choice(self, index: int) -> float | None:
        """Return the preset value for ``index``, or None when undefined."""
        if 0 <= index < len(self.percentage_choices):
            return self.percentage_choices[index]
        return None


class Group(TrustScoreBase, frozen=True):
    """A mechanism: related items scored together within a category."""

    id: EntityId = Field(default_factory=new_uuid7)
    name: str
    code: str = ""
    description: str | None = None
    operational_weight: float | None = Field(default=1.0, ge=0.0)
    design_weight: float | None = Field(default=1.0, ge=0.0)
    items: list[Item] = Field(default_factory=list)
    operational_configurations: list[ConfigurationPreset] = Field(
        default_factory=list,
        max_length=CONFIGURATION_SLOTS,
    )
    design_configurations: list[ConfigurationPreset] = Field(
        default_factory=list,
        max_length=CONFIGURATION_SLOTS,
    )

    def items_on(self, track: Track) -> list[Item]:
        """Items on ``track``, in framework order."""
        return [item for item in self.items if item.track == track]

    def weight_for(self, track: Track) -> float | None:
        """The configured weight this group carries into its category on ``track``."""
        if track == Track.OPERATIONAL:
            return self.operational_weight
        return self.design_weight


class Category(TrustScoreBase, frozen=True):
    """A pillar: top-level grouping of the framework."""

    id: EntityId = Field(default_factory=new_uuid7)
    name: str
    code: str = ""
    description: str | None = None
    icon: str | None = None
    groups: list[Group] = Field(default_factory=list)


class Answer(TrustScoreBase, frozen=True):
    """A recorded response to one item.

    Only one field is meaningful, selected by the item's kind. The
    percentage is deliberately not range-checked here; see
    ``src.answers.validation`` for the write-time checks.
    """

    answered_boolean: bool = False
    answered_percentage: float | None = None


Framework = list[Category]
AnswerMap = Mapping[str, Answer]


def iter_items(framework: Framework):
    """Yield ``(category, group, item)`` for every item, in framework order."""
    for category in framework:
        for group in category.groups:
            for item in group.items:
                yield category, group, item


def find_group(framework: Framework, group_id: str) -> Group | None:
    """Look up a group by id; returns *None* if not found."""
    for category in framework:
        for group in category.groups:
            if group.id == group_id:
                return group
    return None
