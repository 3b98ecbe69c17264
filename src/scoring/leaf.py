"""Leaf scorer: resolve one item's answer into a 0-100 score.

Absence of data is a score of 0, never an error. Percentage answers are
passed through unclamped.
"""

from __future__ import annotations

from typing import assert_never

from src.models.common import ItemKind
from src.models.framework import Answer, AnswerMap, Item

FULL_SCORE = 100.0
NO_SCORE = 0.0


def score_answer(kind: ItemKind, answer: Answer | None) -> float:
    """Score a single answer for an item of the given kind."""
    if answer is None:
        return NO_SCORE

    if kind is ItemKind.BOOLEAN:
        return FULL_SCORE if answer.answered_boolean else NO_SCORE
    if kind is ItemKind.PERCENTAGE:
        if answer.answered_percentage is None:
            return NO_SCORE
        return float(answer.answered_percentage)
    assert_never(kind)


def score_item(item: Item, answers: AnswerMap) -> float:
    """Score ``item`` from the answer map (unanswered -> 0)."""
    return score_answer(item.kind, answers.get(item.id))
