"""Matchup model: the atomic unit of simulation output."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Matchup:
    """A decided game between side A and side B.

    Scores are the blended comparison scores, rounded to 3 decimal places.
    Either side may be None when a bracket slot could not be filled.
    """

    team_a: Optional[str]
    team_b: Optional[str]
    score_a: float
    score_b: float
    winner: Optional[str]
    loser: Optional[str]

    def to_dict(self) -> dict:
        """Convert matchup to dictionary."""
        return {
            "a": self.team_a,
            "b": self.team_b,
            "sa": self.score_a,
            "sb": self.score_b,
            "winner": self.winner,
            "loser": self.loser,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Matchup":
        return cls(
            team_a=data.get("a"),
            team_b=data.get("b"),
            score_a=data.get("sa", 0.0),
            score_b=data.get("sb", 0.0),
            winner=data.get("winner"),
            loser=data.get("loser"),
        )


Round = List[Matchup]
