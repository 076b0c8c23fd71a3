"""Bracket generator: builds metrics from a configuration and simulates."""

import logging
from typing import Dict, List, Optional

import numpy as np

from .config import SimulationConfig
from .data.metric_builder import build_metrics
from .data.team_name_resolver import AliasTable
from .models.bracket import Bracket
from .models.matchup import Round
from .models.metric import Metric
from .predictors.weighted import WeightedMetricPredictor
from .simulation.bracket_simulator import (
    SimulationResult,
    simulate_field,
    simulate_tournament,
    top_n_by_winning_pct,
)

logger = logging.getLogger(__name__)


class BracketGenerator:
    """Generates tournament bracket simulations."""

    def __init__(self, config: Optional[SimulationConfig] = None, aliases: Optional[AliasTable] = None):
        """
        Initialize bracket generator.

        Args:
            config: Enabled metrics, weights and randomness
            aliases: Alias table for name resolution (defaults to the curated table)
        """
        self.config = config or SimulationConfig()
        self.aliases = aliases

    def build_metrics(self, stats: Dict[str, object], bracket: Optional[Bracket] = None) -> List[Metric]:
        """Build fresh metrics for the enabled registry entries."""
        metrics = build_metrics(self.config.active_specs(), stats, bracket)
        for metric in metrics:
            logger.debug("Metric summary: %s", metric.to_dict())
        return metrics

    def create_predictor(
        self, metrics: List[Metric], rng: Optional[np.random.Generator] = None
    ) -> WeightedMetricPredictor:
        return WeightedMetricPredictor(
            metrics,
            self.config.effective_weights(),
            rng=rng,
            random_seed=self.config.random_seed,
            aliases=self.aliases,
        )

    def generate(
        self,
        stats: Dict[str, object],
        bracket: Bracket,
        rng: Optional[np.random.Generator] = None,
    ) -> SimulationResult:
        """
        Simulate the full tournament.

        Args:
            stats: Dataset key -> parsed JSON (see ``DataLoader.load_stats``)
            bracket: Tournament topology
            rng: Optional generator; otherwise seeded from ``config.random_seed``

        Returns:
            SimulationResult for this run; nothing is shared with earlier runs
        """
        metrics = self.build_metrics(stats, bracket)
        logger.info(
            "Simulating with metrics %s (randomness %d)",
            [m.id for m in metrics],
            self.config.effective_weights()["randomness"],
        )
        predictor = self.create_predictor(metrics, rng)
        return simulate_tournament(bracket, predictor, self.config.final_four)

    def generate_field(
        self,
        stats: Dict[str, object],
        size: int = 64,
        rng: Optional[np.random.Generator] = None,
    ) -> List[Round]:
        """
        Simulate an open field of the top teams by winning percentage.

        No bracket is passed in this mode; the seed metric reads the loaded
        ``bracket`` dataset if there is one, and otherwise every team gets
        the default seed.
        """
        field_teams = top_n_by_winning_pct(stats.get("winningPercentage"), size)
        metrics = self.build_metrics(stats)
        predictor = self.create_predictor(metrics, rng)
        return simulate_field(field_teams, predictor)
