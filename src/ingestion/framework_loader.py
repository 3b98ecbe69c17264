"""Load framework definitions and answer sets from JSON.

Two framework layouts are accepted:

1. Nested (build-time generator output): a list of pillars, each with
   ``mechanisms``, each with ``metrics``.
2. Flat: ``{"pillars": [...], "mechanisms": [...], "metrics": [...]}``
   where mechanisms reference their pillar by ``pillarCode`` and metrics
   reference their mechanism by ``mechanismCode``. Orphaned references
   are skipped with a warning.

Entries without an ``id`` get a stable id built from the code path
(``"<pillar>/<mechanism>/<metric>"``), so repeated loads of the same file
produce identical ids.

Caps are loaded as written. A ``mechanismCap`` or ``pillarCap`` of ``0`` stays
``0``; legacy exports that used ``0`` for "no cap" should be scored with
``ZeroCapPolicy.DEFAULT_TO_UNCAPPED`` (``ZERO_CAP_POLICY`` setting).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.models.framework import (
    CONFIGURATION_SLOTS,
    Answer,
    Category,
    ConfigurationPreset,
    Framework,
    Group,
    Item,
)

logger = logging.getLogger(__name__)


class FrameworkLoadError(ValueError):
    """Raised when a framework or answer document cannot be loaded."""


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _get(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key among ``keys`` (camelCase first, then snake_case)."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _as_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _standards(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return [str(s).strip() for s in value if str(s).strip()]


def _presets(value: Any) -> list[ConfigurationPreset]:
    if not value:
        return []
    return [
        ConfigurationPreset(label=p.get("label", ""), description=p.get("description", ""))
        for p in value[:CONFIGURATION_SLOTS]
    ]


def _node_key(raw: Mapping[str, Any], index: int) -> str:
    return str(raw.get("code") or index)


# ---------------------------------------------------------------------------
# Node builders
# ---------------------------------------------------------------------------


def _build_item(raw: Mapping[str, Any], path: str) -> Item:
    choices = [
        _as_float(raw.get(f"percentageChoice{i}", raw.get(f"percentage_choice_{i}")))
        for i in range(CONFIGURATION_SLOTS)
    ]
    while choices and choices[-1] is None:
        choices.pop()

    return Item(
        id=str(_get(raw, "id", default=path)),
        name=raw.get("name", ""),
        code=raw.get("code", ""),
        description=raw.get("description"),
        track=str(_get(raw, "type", "track", default="operational")).lower(),
        kind=str(_get(raw, "metricType", "kind", default="boolean")).lower(),
        weight=_as_float(_get(raw, "weight", default=1.0)),
        group_cap=_as_float(_get(raw, "mechanismCap", "group_cap")),
        category_cap=_as_float(_get(raw, "pillarCap", "category_cap")),
        standards=_standards(raw.get("standards")),
        percentage_choices=choices,
    )


def _build_group(
    raw: Mapping[str, Any],
    path: str,
    raw_items: list[Mapping[str, Any]],
) -> Group:
    items = [
        _build_item(m, f"{path}/{_node_key(m, i)}") for i, m in enumerate(raw_items)
    ]
    return Group(
        id=str(_get(raw, "id", default=path)),
        name=raw.get("name", ""),
        code=raw.get("code", ""),
        description=raw.get("description"),
        operational_weight=_as_float(_get(raw, "operationalWeight", "operational_weight", default=1.0)),
        design_weight=_as_float(_get(raw, "designWeight", "design_weight", default=1.0)),
        items=items,
        operational_configurations=_presets(
            _get(raw, "operationalConfigurations", "operational_configurations")
        ),
        design_configurations=_presets(
            _get(raw, "designConfigurations", "design_configurations")
        ),
    )


def _build_category(
    raw: Mapping[str, Any],
    path: str,
    groups: list[Group],
) -> Category:
    return Category(
        id=str(_get(raw, "id", default=path)),
        name=raw.get("name", ""),
        code=raw.get("code", ""),
        description=raw.get("description"),
        icon=raw.get("icon"),
        groups=groups,
    )


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------


def _parse_nested(pillars: list[Mapping[str, Any]]) -> Framework:
    framework: Framework = []
    for p_index, pillar in enumerate(pillars):
        p_path = _node_key(pillar, p_index)
        groups = [
            _build_group(
                mech,
                f"{p_path}/{_node_key(mech, m_index)}",
                list(_get(mech, "metrics", "items", default=[])),
            )
            for m_index, mech in enumerate(_get(pillar, "mechanisms", "groups", default=[]))
        ]
        framework.append(_build_category(pillar, p_path, groups))
    return framework


def _parse_flat(data: Mapping[str, Any]) -> Framework:
    pillars = list(data.get("pillars", []))
    mechanisms = list(data.get("mechanisms", []))
    metrics = list(data.get("metrics", []))

    pillar_codes = {p.get("code") for p in pillars}
    metrics_by_mechanism: dict[str, list[Mapping[str, Any]]] = {}
    mechanisms_by_pillar: dict[str, list[Mapping[str, Any]]] = {}

    for mech in mechanisms:
        pillar_code = mech.get("pillarCode", mech.get("pillar_code"))
        if pillar_code not in pillar_codes:
            logger.warning(
                "Mechanism %s references unknown pillar: %s", mech.get("code"), pillar_code
            )
            continue
        mechanisms_by_pillar.setdefault(pillar_code, []).append(mech)

    known_mechanisms = {
        m.get("code") for group in mechanisms_by_pillar.values() for m in group
    }
    orphaned = 0
    for metric in metrics:
        mech_code = metric.get("mechanismCode", metric.get("mechanism_code"))
        if mech_code not in known_mechanisms:
            logger.warning(
                "Metric %s references unknown mechanism: %s", metric.get("code"), mech_code
            )
            orphaned += 1
            continue
        metrics_by_mechanism.setdefault(mech_code, []).append(metric)

    if orphaned:
        logger.warning("Skipped %d orphaned metrics", orphaned)

    nested = [
        {
            **pillar,
            "mechanisms": [
                {**mech, "metrics": metrics_by_mechanism.get(mech.get("code"), [])}
                for mech in mechanisms_by_pillar.get(pillar.get("code"), [])
            ],
        }
        for pillar in pillars
    ]
    return _parse_nested(nested)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_framework(data: Any) -> Framework:
    """Build the category hierarchy from decoded JSON in either layout."""
    try:
        if isinstance(data, list):
            framework = _parse_nested(data)
        elif isinstance(data, dict) and "pillars" in data:
            framework = _parse_flat(data)
        else:
            raise FrameworkLoadError(
                "Framework must be a list of pillars or an object with 'pillars'"
            )
    except ValidationError as exc:
        raise FrameworkLoadError(f"Invalid framework definition: {exc}") from exc

    logger.info(
        "Loaded framework: %d pillars, %d mechanisms, %d metrics",
        len(framework),
        sum(len(c.groups) for c in framework),
        sum(len(g.items) for c in framework for g in c.groups),
    )
    return framework


def _read_json(path: str | Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FrameworkLoadError(f"Cannot read {path}: {exc}") from exc


def load_framework(path: str | Path) -> Framework:
    """Load a framework JSON file."""
    return parse_framework(_read_json(path))


def _build_answer(raw: Any) -> Answer:
    if not isinstance(raw, Mapping):
        raise FrameworkLoadError(f"Answer record must be an object, got {raw!r}")
    return Answer(
        answered_boolean=bool(_get(raw, "answer", "answered_boolean", default=False)),
        answered_percentage=_as_float(_get(raw, "answerValue", "answered_percentage")),
    )


def parse_answers(data: Any) -> dict[str, Answer]:
    """Build an answer map from response records.

    Accepts a list of ``{"metricId", "answer", "answerValue"}`` records or
    a mapping keyed by item id.
    """
    try:
        if isinstance(data, list):
            answers: dict[str, Answer] = {}
            for record in data:
                if not isinstance(record, Mapping):
                    raise FrameworkLoadError(
                        f"Answer record must be an object, got {record!r}"
                    )
                item_id = _get(record, "metricId", "item_id", "id")
                if item_id is None:
                    logger.warning("Skipping response without a metric id")
                    continue
                answers[str(item_id)] = _build_answer(record)
            return answers
        if isinstance(data, dict):
            return {str(k): _build_answer(v) for k, v in data.items()}
    except ValidationError as exc:
        raise FrameworkLoadError(f"Invalid answer record: {exc}") from exc
    raise FrameworkLoadError("Answers must be a list of records or an object keyed by id")


def load_answers(path: str | Path) -> dict[str, Answer]:
    """Load an answer JSON file."""
    return parse_answers(_read_json(path))
