"""Group configuration presets.

A group may offer up to five presets per track (e.g. "None", "Basic",
"Hardened"). Each item on that track defines the percentage it reaches
under each preset. Applying a preset answers those items in one step:
percentage items take the value directly, boolean items answer yes when
the value is above 50.
"""

from __future__ import annotations

import logging

from src.models.common import ItemKind, Track
from src.models.framework import (
    CONFIGURATION_SLOTS,
    Answer,
    AnswerMap,
    Framework,
    Group,
    find_group,
)

logger = logging.getLogger(__name__)

# Boolean items answer "yes" for preset values strictly above this.
BOOLEAN_PRESET_THRESHOLD = 50.0


def configuration_answers(
    group: Group,
    track: Track,
    choice_index: int,
) -> dict[str, Answer]:
    """Answers implied by preset ``choice_index`` for ``group`` on ``track``.

    Items without a value for that preset are skipped.
    """
    if not 0 <= choice_index < CONFIGURATION_SLOTS:
        raise ValueError(
            f"choice_index must be between 0 and {CONFIGURATION_SLOTS - 1}, "
            f"got {choice_index}"
        )

    answers: dict[str, Answer] = {}
    for item in group.items_on(track):
        value = item.choice(choice_index)
        if value is None:
            continue
        if item.kind is ItemKind.BOOLEAN:
            answers[item.id] = Answer(answered_boolean=value > BOOLEAN_PRESET_THRESHOLD)
        else:
            answers[item.id] = Answer(
                answered_boolean=value == 100.0,
                answered_percentage=value,
            )
    return answers


def apply_configuration(
    answers: AnswerMap,
    framework: Framework,
    group_id: str,
    track: Track,
    choice_index: int,
) -> tuple[dict[str, Answer], int]:
    """Merge the preset's answers into ``answers``.

    Returns:
        The merged answer map and the number of items updated.
    """
    group = find_group(framework, group_id)
    if group is None:
        raise ValueError(f"Group not found: {group_id}")

    preset_answers = configuration_answers(group, track, choice_index)
    merged = dict(answers)
    merged.update(preset_answers)
    logger.info(
        "Applied configuration %d (%s) to %d items of group %s",
        choice_index,
        track.value,
        len(preset_answers),
        group.code or group.id,
    )
    return merged, len(preset_answers)
