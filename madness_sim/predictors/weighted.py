"""Weighted composite-strength predictor."""

from typing import Dict, List, Optional, Sequence

import numpy as np

from ..data.team_name_resolver import AliasTable, TeamNameResolver
from ..models.metric import Metric
from .base import BasePredictor

RANDOMNESS = "randomness"


def score_team(
    team: Optional[str],
    metrics: Sequence[Metric],
    weights: Dict[str, float],
    aliases: Optional[AliasTable] = None,
) -> float:
    """
    Weighted average of a team's normalized metric values.

    Args:
        team: Team display name
        metrics: Active metrics
        weights: Metric id -> weight (0-100); the randomness entry is ignored

    Returns:
        Score in [0, 1]; 0 when no metric has a positive weight
    """
    resolver = TeamNameResolver(aliases)
    total_weight = 0.0
    weighted_sum = 0.0
    for metric in metrics:
        weight = weights.get(metric.id, 0) or 0
        if weight <= 0:
            continue
        value = resolver.resolve(metric, team).value
        weighted_sum += metric.normalize(value) * weight
        total_weight += weight

    if total_weight == 0:
        return 0.0
    return weighted_sum / total_weight


class WeightedMetricPredictor(BasePredictor):
    """Scores teams by a user-weighted average of normalized metrics."""

    def __init__(
        self,
        metrics: List[Metric],
        weights: Dict[str, float],
        rng: Optional[np.random.Generator] = None,
        random_seed: Optional[int] = None,
        aliases: Optional[AliasTable] = None,
    ):
        """
        Initialize weighted predictor.

        Args:
            metrics: Active metrics
            weights: Metric id -> weight, plus an optional ``randomness`` entry
            rng: Random generator to draw from (takes precedence over random_seed)
            random_seed: Seed for a new generator; None seeds from OS entropy
            aliases: Alias table used for name resolution
        """
        if rng is None:
            rng = np.random.default_rng(random_seed)
        super().__init__("weighted_metrics", randomness=weights.get(RANDOMNESS, 0), rng=rng)
        self.metrics = list(metrics)
        self.weights = dict(weights)
        self.aliases = aliases
        self._cache: Dict[Optional[str], float] = {}

    def score_team(self, team: Optional[str]) -> float:
        # Metrics and weights are fixed for the predictor's lifetime.
        if team not in self._cache:
            self._cache[team] = score_team(team, self.metrics, self.weights, self.aliases)
        return self._cache[team]

    def get_model_scores(self, team: Optional[str]) -> Dict[str, float]:
        """Per-metric normalized values for a team, for reporting."""
        resolver = TeamNameResolver(self.aliases)
        return {m.id: round(m.normalize(resolver.resolve(m, team).value), 3) for m in self.metrics}
