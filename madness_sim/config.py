"""Metric registry and simulation configuration."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .models.metric import MetricSpec

METRIC_SPECS: Tuple[MetricSpec, ...] = (
    MetricSpec("winPct", "Winning %", "winningPercentage", "Pct"),
    MetricSpec("scoringDefense", "Opp PPG (lower better)", "scoringDefense", "OPP PPG", invert=True),
    MetricSpec("fgPct", "FG%", "fieldGoalPercentage", "FG%"),
    MetricSpec("threePG", "3PG", "threePointersPerGame", "3PG"),
    MetricSpec("rpg", "RPG", "reboundsPerGame", "RPG"),
    MetricSpec("atr", "Assist/Turnover Ratio", "assistTurnoverRatio", "Ratio"),
    MetricSpec("history", "Historical Titles", "historicalWinners", "Titles"),
    MetricSpec("seed", "Seeding", "bracket", "Seed"),
)

METRIC_IDS: Tuple[str, ...] = tuple(spec.id for spec in METRIC_SPECS)
RANDOMNESS = "randomness"
ALL_METRIC_IDS: Tuple[str, ...] = METRIC_IDS + (RANDOMNESS,)

DEFAULT_WEIGHT = 50
# 2025 pairing: West vs South, East vs Midwest
DEFAULT_FINAL_FOUR: Tuple[Tuple[str, str], ...] = (("West", "South"), ("East", "Midwest"))


def _default_weights() -> Dict[str, int]:
    return {metric_id: DEFAULT_WEIGHT for metric_id in METRIC_IDS}


@dataclass
class SimulationConfig:
    """User-facing simulation settings.

    Holds what the UI sliders and toggles used to keep in browser storage:
    which metrics are enabled, their weights, and the randomness weight.
    Callers persist it with :meth:`to_dict` / :meth:`from_dict`.
    """

    enabled: List[str] = field(default_factory=lambda: list(ALL_METRIC_IDS))
    weights: Dict[str, int] = field(default_factory=_default_weights)
    randomness: int = 0
    final_four: Tuple[Tuple[str, str], ...] = DEFAULT_FINAL_FOUR
    random_seed: Optional[int] = None

    def __post_init__(self):
        unknown = [m for m in self.enabled if m not in ALL_METRIC_IDS]
        if unknown:
            raise ValueError(f"Unknown metric ids: {unknown}")

        for metric_id, weight in self.weights.items():
            if metric_id not in METRIC_IDS:
                raise ValueError(f"Unknown metric id in weights: {metric_id}")
            if not 0 <= weight <= 100:
                raise ValueError(f"Weight for {metric_id} must be between 0 and 100, got {weight}")

        if not 0 <= self.randomness <= 100:
            raise ValueError(f"Randomness must be between 0 and 100, got {self.randomness}")

        self.final_four = tuple((str(a), str(b)) for a, b in self.final_four)
        if len(self.final_four) != 2:
            raise ValueError("Final Four must have exactly 2 region pairings")

    def active_specs(self) -> List[MetricSpec]:
        """Registry entries for the enabled metrics, in registry order."""
        enabled = set(self.enabled)
        return [spec for spec in METRIC_SPECS if spec.id in enabled]

    def effective_weights(self) -> Dict[str, int]:
        """
        Weights passed to the scorer.

        Only enabled metrics are included; randomness is forced to 0 when its
        toggle is off.
        """
        weights = {spec.id: self.weights.get(spec.id, 0) for spec in self.active_specs()}
        weights[RANDOMNESS] = self.randomness if RANDOMNESS in self.enabled else 0
        return weights

    def to_dict(self) -> dict:
        return {
            "enabled": list(self.enabled),
            "weights": dict(self.weights),
            "randomness": self.randomness,
            "final_four": [list(pair) for pair in self.final_four],
            "random_seed": self.random_seed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """Create config from dictionary.

        ``enabled`` may also be stored as ``{"enabled": [...]}``.  A
        ``randomness`` entry inside ``weights`` is accepted as the randomness
        weight.
        """
        enabled = data.get("enabled", list(ALL_METRIC_IDS))
        if isinstance(enabled, dict):
            enabled = enabled.get("enabled", list(ALL_METRIC_IDS))

        weights = _default_weights()
        raw_weights = dict(data.get("weights", {}))
        randomness = raw_weights.pop(RANDOMNESS, None)
        weights.update({k: int(v) for k, v in raw_weights.items()})
        if "randomness" in data:
            randomness = data["randomness"]

        return cls(
            enabled=list(enabled),
            weights=weights,
            randomness=int(randomness or 0),
            final_four=tuple(tuple(p) for p in data.get("final_four", DEFAULT_FINAL_FOUR)),
            random_seed=data.get("random_seed"),
        )
