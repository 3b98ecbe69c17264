"""Helpers that turn capping metadata into display text.

Consumers (web UI, report generator) show a badge on capped groups and
categories with a tooltip listing the items responsible, e.g.::

    Operational score capped by:
    • MFA enforced (0%)
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from src.models.common import Track
from src.models.results import CappingItem, CategoryResult, GroupResult

_TRACK_LABELS: dict[Track, str] = {
    Track.OPERATIONAL: "Operational",
    Track.DESIGN: "Design",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def is_track_capped(group: GroupResult, track: Track) -> bool:
    """True when ``group`` has at least one capping item on ``track``."""
    return bool(group.capping_items_for(track))


def format_capping_tooltip(items: Sequence[CappingItem], label: str) -> str:
    """Render the capping tooltip; empty string when nothing caps the score."""
    if not items:
        return ""
    lines = "\n".join(f"• {item.name} ({round_half_up(item.score)}%)" for item in items)
    return f"{label} score capped by:\n{lines}"


def group_capping_tooltip(group: GroupResult, track: Track) -> str:
    return format_capping_tooltip(group.capping_items_for(track), _TRACK_LABELS[track])


def category_capping_tooltip(category: CategoryResult, track: Track) -> str:
    """Tooltip listing every capping item of the groups that ceilinged ``category``."""
    items = [
        item
        for group in category.capping_groups
        for item in group.capping_items
        if item.track == track
    ]
    return format_capping_tooltip(items, _TRACK_LABELS[track])
