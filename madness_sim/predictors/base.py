"""Base predictor interface for bracket simulation."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

import numpy as np

from ..models.matchup import Matchup, Round


class BasePredictor(ABC):
    """Abstract base class for all scoring models.

    Subclasses supply a deterministic per-team strength in [0, 1].  The base
    class blends it with a uniform draw per side and decides the matchup.
    """

    def __init__(self, name: str, randomness: float = 0.0, rng: Optional[np.random.Generator] = None):
        """
        Initialize predictor.

        Args:
            name: Name of the predictor model
            randomness: Randomness weight on a 0-100 scale
            rng: Random generator; a fresh OS-seeded generator when omitted
        """
        self.name = name
        self.randomness = min(1.0, max(0.0, (randomness or 0) / 100.0))
        self.rng = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def score_team(self, team: Optional[str]) -> float:
        """
        Deterministic strength of a team.

        Args:
            team: Team display name (None for an empty bracket slot)

        Returns:
            Score in [0, 1]
        """
        pass

    def blend(self, deterministic: float) -> float:
        """Mix a deterministic score with one fresh uniform draw."""
        draw = float(self.rng.random())
        return (1.0 - self.randomness) * deterministic + self.randomness * draw

    def play(self, team_a: Optional[str], team_b: Optional[str]) -> Matchup:
        """
        Decide a single matchup.

        Side A wins ties.
        """
        final_a = self.blend(self.score_team(team_a))
        final_b = self.blend(self.score_team(team_b))
        a_wins = final_a >= final_b
        return Matchup(
            team_a=team_a,
            team_b=team_b,
            score_a=round(final_a, 3),
            score_b=round(final_b, 3),
            winner=team_a if a_wins else team_b,
            loser=team_b if a_wins else team_a,
        )

    def play_round(self, pairs: Iterable[Tuple[Optional[str], Optional[str]]]) -> Round:
        """Decide every matchup of a round, in bracket order."""
        return [self.play(a, b) for a, b in pairs]
