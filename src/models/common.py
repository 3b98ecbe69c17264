"""Shared types, enums, and base models used across TrustScore domain models."""

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def new_uuid7() -> str:
    """Generate a new time-sortable UUID v7 as a string id."""
    return str(uuid7())


# --- Reusable annotated types ---

EntityId = Annotated[str, Field(min_length=1, description="Framework entity id.")]
Percentage = Annotated[float, Field(ge=0.0, le=100.0, description="Value in [0, 100].")]


# --- Shared enums ---


class Track(StrEnum):
    """The two parallel scoring tracks, scored independently at every level."""

    OPERATIONAL = "operational"
    DESIGN = "design"


class ItemKind(StrEnum):
    """How an item's answer maps to a 0-100 score."""

    BOOLEAN = "boolean"
    PERCENTAGE = "percentage"


# --- Base model ---


class TrustScoreBase(BaseModel):
    """Base model with common configuration for all TrustScore Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
