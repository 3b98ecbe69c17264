"""Scoring engine configuration.

Weight and cap defaulting used by the engine. Defaults reproduce the
established scoring behaviour of the framework. The capping rule constants
themselves are fixed; see ``src.scoring.capping``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from src.models.common import TrustScoreBase


class ZeroWeightPolicy(StrEnum):
    """How an explicit weight of zero is interpreted during aggregation.

    DEFAULT_TO_ONE treats ``0`` exactly like an unset weight, which is how
    existing frameworks have always been scored. EXCLUDE makes a
    zero-weight child contribute nothing (it is still displayed).
    """

    DEFAULT_TO_ONE = "DEFAULT_TO_ONE"
    EXCLUDE = "EXCLUDE"


class ZeroCapPolicy(StrEnum):
    """How an explicit item cap of zero is interpreted.

    HONOR applies 0 as a real ceiling. DEFAULT_TO_UNCAPPED treats 0 like an
    unset cap, matching frameworks exported with ``0`` meaning "no cap".
    """

    HONOR = "HONOR"
    DEFAULT_TO_UNCAPPED = "DEFAULT_TO_UNCAPPED"


class ScoringConfig(TrustScoreBase, frozen=True):
    """Configuration for the scoring and capping engine."""

    default_weight: float = Field(default=1.0, gt=0.0)
    default_cap: float = Field(default=100.0, ge=0.0, le=100.0)

    zero_weight_policy: ZeroWeightPolicy = ZeroWeightPolicy.DEFAULT_TO_ONE
    zero_cap_policy: ZeroCapPolicy = ZeroCapPolicy.HONOR

    def resolve_weight(self, weight: float | None) -> float:
        """Apply the configured defaulting to a raw child weight."""
        if weight is None:
            return self.default_weight
        if weight == 0.0 and self.zero_weight_policy == ZeroWeightPolicy.DEFAULT_TO_ONE:
            return self.default_weight
        return weight

    def resolve_cap(self, cap: float | None) -> float:
        """Apply the configured default to a raw item cap."""
        if cap is None:
            return self.default_cap
        if cap == 0.0 and self.zero_cap_policy == ZeroCapPolicy.DEFAULT_TO_UNCAPPED:
            return self.default_cap
        return cap
