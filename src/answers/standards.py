"""Standards compliance auto-fill.

Items list the external standards they map to (e.g. "ISO 27001"). Claiming
compliance with a standard answers every such item at full compliance.
"""

from __future__ import annotations

import logging

from src.models.common import ItemKind
from src.models.framework import Answer, AnswerMap, Framework, Item, iter_items

logger = logging.getLogger(__name__)


def available_standards(framework: Framework) -> list[str]:
    """Sorted unique standard identifiers referenced by any item."""
    standards: set[str] = set()
    for _category, _group, item in iter_items(framework):
        standards.update(item.standards)
    return sorted(standards)


def full_compliance_answer(item: Item) -> Answer:
    if item.kind is ItemKind.PERCENTAGE:
        return Answer(answered_boolean=True, answered_percentage=100.0)
    return Answer(answered_boolean=True)


def compliance_answers(framework: Framework, standard: str) -> dict[str, Answer]:
    """Full-compliance answers for every item that lists ``standard``."""
    answers = {
        item.id: full_compliance_answer(item)
        for _category, _group, item in iter_items(framework)
        if standard in item.standards
    }
    logger.info("Found %d items with standard %s", len(answers), standard)
    return answers


def apply_standard_compliance(
    answers: AnswerMap,
    framework: Framework,
    standard: str,
) -> dict[str, Answer]:
    """Return ``answers`` with the compliance answers for ``standard`` merged in."""
    merged = dict(answers)
    merged.update(compliance_answers(framework, standard))
    return merged
