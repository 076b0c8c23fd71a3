"""Unit tests for weighted scoring and the randomness blend."""

import numpy as np
import pytest

from madness_sim.config import METRIC_SPECS
from madness_sim.data.metric_builder import build_history_titles_metric, build_metric, build_seed_metric
from madness_sim.predictors.base import BasePredictor
from madness_sim.predictors.weighted import WeightedMetricPredictor, score_team

from conftest import build_bracket

SPECS = {spec.id: spec for spec in METRIC_SPECS}


class FixedPredictor(BasePredictor):
    """Predictor with hand-set strengths."""

    def __init__(self, strengths, randomness=0, rng=None):
        super().__init__("fixed", randomness=randomness, rng=rng)
        self.strengths = strengths

    def score_team(self, team):
        return self.strengths.get(team, 0.0)


@pytest.fixture
def metrics():
    win_pct = build_metric(
        SPECS["winPct"],
        [{"data": [{"Team": "Duke", "Pct": "0.900"}, {"Team": "Alabama", "Pct": "0.700"}, {"Team": "Iona", "Pct": "0.500"}]}],
    )
    defense = build_metric(
        SPECS["scoringDefense"],
        [{"Team": "Duke", "OPP PPG": "60.0"}, {"Team": "Alabama", "OPP PPG": "80.0"}],
    )
    history = build_history_titles_metric(["Duke (35-4)"] * 5)
    return [win_pct, defense, history]


class TestScoreTeam:
    def test_all_zero_weights_score_zero(self, metrics):
        weights = {"winPct": 0, "scoringDefense": 0, "history": 0, "randomness": 0}
        assert score_team("Duke", metrics, weights) == 0
        assert score_team("Unknown U", metrics, {}) == 0

    def test_weighted_average(self, metrics):
        weights = {"winPct": 100, "scoringDefense": 50, "history": 0}
        # Alabama: winPct 0.5, defense 0.0 -> (0.5 * 100 + 0 * 50) / 150
        assert score_team("Alabama", metrics, weights) == pytest.approx(50 / 150)

    def test_best_team_scores_one(self, metrics):
        weights = {"winPct": 30, "scoringDefense": 30, "history": 40}
        assert score_team("Duke", metrics, weights) == pytest.approx(1.0)

    def test_missing_team_uses_fallbacks(self, metrics):
        weights = {"winPct": 50, "scoringDefense": 0, "history": 50}
        # winPct missing -> neutral 0.5, history missing -> 0 titles
        assert score_team("Unknown U", metrics, weights) == pytest.approx(0.25)

    def test_score_within_unit_interval(self, metrics):
        weights = {"winPct": 17, "scoringDefense": 83, "history": 5}
        for team in ("Duke", "Alabama", "Iona", "Nobody", None):
            assert 0.0 <= score_team(team, metrics, weights) <= 1.0

    def test_randomness_weight_is_not_a_metric(self, metrics):
        assert score_team("Duke", metrics, {"randomness": 100}) == 0

    def test_seed_metric_scoring(self):
        seed = build_seed_metric(build_bracket())
        assert score_team("East 1", [seed], {"seed": 100}) == 1.0
        assert score_team("East 16", [seed], {"seed": 100}) == 0.0
        assert score_team("Not Seeded", [seed], {"seed": 100}) == pytest.approx(0.5)


class TestPlay:
    def test_higher_score_wins(self):
        predictor = FixedPredictor({"A": 0.2, "B": 0.8})
        matchup = predictor.play("A", "B")
        assert matchup.winner == "B"
        assert matchup.loser == "A"
        assert (matchup.score_a, matchup.score_b) == (0.2, 0.8)

    def test_tie_goes_to_side_a(self):
        predictor = FixedPredictor({"A": 0.5, "B": 0.5})
        assert predictor.play("A", "B").winner == "A"
        assert predictor.play("B", "A").winner == "B"

    def test_scores_rounded_to_three_places(self):
        predictor = FixedPredictor({"A": 0.123456, "B": 0.98771})
        matchup = predictor.play("A", "B")
        assert matchup.score_a == 0.123
        assert matchup.score_b == 0.988

    def test_none_side(self):
        predictor = FixedPredictor({"A": 0.1})
        matchup = predictor.play("A", None)
        assert matchup.winner == "A"
        assert matchup.loser is None

    def test_full_randomness_uses_draws_only(self):
        predictor = FixedPredictor({"A": 1.0, "B": 0.0}, randomness=100, rng=np.random.default_rng(7))
        draws = np.random.default_rng(7).random(2)
        matchup = predictor.play("A", "B")
        assert matchup.score_a == round(float(draws[0]), 3)
        assert matchup.score_b == round(float(draws[1]), 3)

    def test_partial_randomness_blend(self):
        predictor = FixedPredictor({"A": 1.0, "B": 0.0}, randomness=25, rng=np.random.default_rng(3))
        draws = np.random.default_rng(3).random(2)
        matchup = predictor.play("A", "B")
        assert matchup.score_a == round(0.75 * 1.0 + 0.25 * float(draws[0]), 3)
        assert matchup.score_b == round(0.25 * float(draws[1]), 3)

    @pytest.mark.parametrize("randomness,expected", [(-10, 0.0), (0, 0.0), (40, 0.4), (250, 1.0), (None, 0.0)])
    def test_randomness_is_clamped(self, randomness, expected):
        assert FixedPredictor({}, randomness=randomness).randomness == expected

    def test_play_round_preserves_order(self):
        predictor = FixedPredictor({"A": 0.9, "B": 0.1, "C": 0.2, "D": 0.8})
        results = predictor.play_round([("A", "B"), ("C", "D")])
        assert [m.winner for m in results] == ["A", "D"]


class TestWeightedMetricPredictor:
    def test_seeded_runs_repeat(self, metrics):
        weights = {"winPct": 50, "scoringDefense": 50, "history": 50, "randomness": 60}
        first = WeightedMetricPredictor(metrics, weights, random_seed=11)
        second = WeightedMetricPredictor(metrics, weights, random_seed=11)
        pairs = [("Duke", "Iona"), ("Alabama", "Duke"), ("Iona", "Alabama")] * 5
        assert first.play_round(pairs) == second.play_round(pairs)

    def test_deterministic_without_randomness(self, metrics):
        weights = {"winPct": 100, "randomness": 0}
        results = {
            WeightedMetricPredictor(metrics, weights, random_seed=seed).play("Iona", "Duke").winner
            for seed in range(10)
        }
        assert results == {"Duke"}

    def test_model_scores(self, metrics):
        predictor = WeightedMetricPredictor(metrics, {"winPct": 100}, random_seed=0)
        scores = predictor.get_model_scores("Alabama")
        assert scores == {"winPct": 0.5, "scoringDefense": 0.0, "history": 0.0}
