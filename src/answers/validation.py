"""Write-time validation of answers against their item's kind.

The scoring engine is total and accepts whatever it is given; this is the
strict gate a caller runs before storing an answer.
"""

from __future__ import annotations

from typing import assert_never

from src.models.common import ItemKind
from src.models.framework import Answer, Framework, Item, iter_items


class AnswerValidationError(ValueError):
    """Raised when an answer does not fit the item it is recorded against."""


def validate_answer(item: Item, answer: Answer) -> Answer:
    """Check ``answer`` against ``item.kind``; returns the answer unchanged.

    * boolean items must not carry a percentage value;
    * percentage items require a value between 0 and 100.
    """
    if item.kind is ItemKind.BOOLEAN:
        if answer.answered_percentage is not None:
            raise AnswerValidationError("Boolean items cannot have percentage values")
        return answer
    if item.kind is ItemKind.PERCENTAGE:
        value = answer.answered_percentage
        if value is None or not 0.0 <= value <= 100.0:
            raise AnswerValidationError(
                "Percentage items require a value between 0 and 100"
            )
        return answer
    assert_never(item.kind)


def validate_answer_for(framework: Framework, item_id: str, answer: Answer) -> Answer:
    """Look up ``item_id`` in ``framework`` and validate ``answer`` against it."""
    for _category, _group, item in iter_items(framework):
        if item.id == item_id:
            return validate_answer(item, answer)
    raise AnswerValidationError("Item not found")
