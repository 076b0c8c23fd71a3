"""Metric model: one normalized statistic usable in weighted scoring."""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional

STAT = "stat"
HISTORY = "history"
SEED = "seed"

# Seed metric domain: seeds 1-16, inverted so seed 1 scores highest.
SEED_MIN = 1
SEED_MAX = 16
SEED_MISSING = 8.5


@dataclass(frozen=True)
class MetricSpec:
    """Declares where a metric's values come from."""

    id: str
    label: str
    dataset_key: str
    value_field: str
    invert: bool = False


@dataclass(frozen=True)
class Metric:
    """A resolved, queryable statistic.

    ``exact_index`` is keyed by the team string exactly as it appears in the
    source dataset; ``normalized_index`` by
    :func:`~madness_sim.data.normalize.normalize_team_name` keys.  ``min`` and
    ``max`` are the bounds observed at build time (``inf``/``-inf`` when the
    dataset had no usable rows).
    """

    id: str
    label: str
    exact_index: Dict[str, float] = field(default_factory=dict)
    normalized_index: Dict[str, float] = field(default_factory=dict)
    min: float = math.inf
    max: float = -math.inf
    kind: str = STAT
    invert: bool = False

    @property
    def missing_value(self) -> Optional[float]:
        """Value used when a team cannot be found in either index."""
        if self.kind == HISTORY:
            return 0
        if self.kind == SEED:
            return SEED_MISSING
        return None

    @property
    def is_empty(self) -> bool:
        return not self.exact_index and not self.normalized_index

    def normalize(self, value: Optional[float]) -> float:
        """Map a raw value onto [0, 1]."""
        if self.kind == HISTORY:
            if value is None or not self.max:
                return 0.0
            return value / self.max

        if self.kind == SEED:
            if value is None:
                return 0.5
            inverted = (SEED_MAX + 1) - value
            return (inverted - SEED_MIN) / (SEED_MAX - SEED_MIN)

        if (
            value is None
            or not math.isfinite(self.min)
            or not math.isfinite(self.max)
            or self.max == self.min
        ):
            return 0.5
        base = (value - self.min) / (self.max - self.min)
        return 1.0 - base if self.invert else base

    def to_dict(self) -> dict:
        """Summary logged by the generator (``--verbose``); the indices are omitted."""
        return {
            "id": self.id,
            "label": self.label,
            "kind": self.kind,
            "invert": self.invert,
            "teams": len(self.normalized_index),
            "min": self.min if math.isfinite(self.min) else None,
            "max": self.max if math.isfinite(self.max) else None,
        }
