"""Shared pytest fixtures for the TrustScore test suite.

Provides:
- scenario_framework / scenario_answers: one category, one group, a
  failing capped boolean item and a 90% percentage item (operational 45)
- mixed_framework: two categories with both tracks, caps and standards
- nested_framework_data / flat_framework_data: raw JSON documents in the
  two layouts accepted by the loader
"""

import pytest

from src.models.common import ItemKind, Track
from src.models.framework import (
    Answer,
    Category,
    ConfigurationPreset,
    Group,
    Item,
)


@pytest.fixture
def scenario_framework() -> list[Category]:
    """One category with one group holding items A (boolean) and B (percentage)."""
    return [
        Category(
            id="cat-1",
            name="Security",
            code="SEC",
            groups=[
                Group(
                    id="grp-1",
                    name="Access control",
                    code="AC",
                    operational_weight=1.0,
                    design_weight=1.0,
                    items=[
                        Item(
                            id="item-a",
                            name="MFA enforced",
                            track=Track.OPERATIONAL,
                            kind=ItemKind.BOOLEAN,
                            weight=1.0,
                            group_cap=80.0,
                        ),
                        Item(
                            id="item-b",
                            name="Accounts reviewed",
                            track=Track.OPERATIONAL,
                            kind=ItemKind.PERCENTAGE,
                            weight=1.0,
                        ),
                    ],
                ),
            ],
        ),
    ]


@pytest.fixture
def scenario_answers() -> dict[str, Answer]:
    return {
        "item-a": Answer(answered_boolean=False),
        "item-b": Answer(answered_percentage=90.0),
    }


@pytest.fixture
def mixed_framework() -> list[Category]:
    """Two categories, three groups, both tracks, with standards and presets."""
    return [
        Category(
            id="cat-sec",
            name="Security",
            code="SEC",
            icon="shield",
            groups=[
                Group(
                    id="grp-enc",
                    name="Encryption",
                    code="ENC",
                    operational_weight=2.0,
                    design_weight=1.0,
                    operational_configurations=[
                        ConfigurationPreset(label="None"),
                        ConfigurationPreset(label="Basic"),
                        ConfigurationPreset(label="Hardened"),
                    ],
                    items=[
                        Item(
                            id="enc-rest",
                            name="Encryption at rest",
                            track=Track.OPERATIONAL,
                            kind=ItemKind.BOOLEAN,
                            group_cap=60.0,
                            category_cap=70.0,
                            standards=["ISO 27001", "SOC 2"],
                            percentage_choices=[0.0, 40.0, 100.0],
                        ),
                        Item(
                            id="enc-transit",
                            name="TLS coverage",
                            track=Track.OPERATIONAL,
                            kind=ItemKind.PERCENTAGE,
                            standards=["ISO 27001"],
                            percentage_choices=[0.0, 60.0, 100.0],
                        ),
                        Item(
                            id="enc-design",
                            name="Key management designed",
                            track=Track.DESIGN,
                            kind=ItemKind.BOOLEAN,
                            standards=["SOC 2"],
                        ),
                    ],
                ),
                Group(
                    id="grp-log",
                    name="Logging",
                    code="LOG",
                    items=[
                        Item(
                            id="log-central",
                            name="Central log store",
                            track=Track.OPERATIONAL,
                            kind=ItemKind.BOOLEAN,
                        ),
                        Item(
                            id="log-retention",
                            name="Retention policy coverage",
                            track=Track.DESIGN,
                            kind=ItemKind.PERCENTAGE,
                            standards=["ISO 27001"],
                        ),
                    ],
                ),
            ],
        ),
        Category(
            id="cat-priv",
            name="Privacy",
            code="PRV",
            groups=[
                Group(
                    id="grp-min",
                    name="Data minimisation",
                    code="MIN",
                    items=[
                        Item(
                            id="min-inventory",
                            name="Data inventory",
                            track=Track.OPERATIONAL,
                            kind=ItemKind.BOOLEAN,
                        ),
                        Item(
                            id="min-design",
                            name="Privacy by design review",
                            track=Track.DESIGN,
                            kind=ItemKind.BOOLEAN,
                        ),
                    ],
                ),
            ],
        ),
    ]


@pytest.fixture
def nested_framework_data() -> list[dict]:
    """Framework JSON in the nested (generator output) layout."""
    return [
        {
            "code": "SEC",
            "name": "Security",
            "icon": "shield",
            "mechanisms": [
                {
                    "code": "AC",
                    "name": "Access control",
                    "operationalWeight": 2,
                    "designWeight": 1,
                    "operationalConfigurations": [
                        {"label": "None"},
                        {"label": "Hardened", "description": "All controls on"},
                    ],
                    "metrics": [
                        {
                            "code": "MFA",
                            "name": "MFA enforced",
                            "type": "operational",
                            "metricType": "boolean",
                            "weight": 2,
                            "mechanismCap": 80,
                            "pillarCap": 90,
                            "standards": "ISO 27001, SOC 2",
                            "percentageChoice0": 0,
                            "percentageChoice1": 100,
                        },
                        {
                            "code": "REV",
                            "name": "Accounts reviewed",
                            "type": "design",
                            "metricType": "percentage",
                            "standards": ["NIST CSF"],
                        },
                    ],
                },
            ],
        },
    ]


@pytest.fixture
def flat_framework_data() -> dict:
    """Framework JSON in the flat layout, with one orphan of each kind."""
    return {
        "pillars": [
            {"code": "SEC", "name": "Security"},
            {"code": "PRV", "name": "Privacy"},
        ],
        "mechanisms": [
            {"code": "AC", "name": "Access control", "pillarCode": "SEC"},
            {"code": "MIN", "name": "Minimisation", "pillarCode": "PRV"},
            {"code": "GHOST", "name": "Ghost", "pillarCode": "NOPE"},
        ],
        "metrics": [
            {"code": "MFA", "name": "MFA", "mechanismCode": "AC", "type": "operational"},
            {"code": "INV", "name": "Inventory", "mechanismCode": "MIN", "type": "design"},
            {"code": "LOST", "name": "Lost", "mechanismCode": "GHOST"},
        ],
    }
