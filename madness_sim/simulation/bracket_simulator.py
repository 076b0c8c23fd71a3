"""
Single-elimination bracket simulation.

Each region plays four rounds from the fixed 1-vs-16 opening pairings down
to a region champion.  The four champions meet in a Final Four whose
cross-region pairing comes from configuration, and the two semifinal
winners play the Championship.

Every matchup is decided exactly once by the predictor; each round is a
fresh list built from the winners of the previous one at positions
(0, 1), (2, 3), ...  Empty bracket slots travel through as None sides and
are scored by the metrics' missing-value fallbacks, so the simulation
always runs to a champion.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..data.metric_builder import merge_pages, parse_number
from ..models.bracket import Bracket, Region
from ..models.matchup import Matchup, Round
from ..predictors.base import BasePredictor

logger = logging.getLogger(__name__)

# Standard region opening round (seed matchups in bracket order)
FIRST_ROUND_MATCHUPS = [
    (1, 16), (8, 9), (5, 12), (4, 13),
    (6, 11), (3, 14), (7, 10), (2, 15),
]

REGION_ROUND_NAMES = ["Round of 64", "Round of 32", "Sweet 16", "Elite 8"]
ROUND_NAMES = REGION_ROUND_NAMES + ["Final Four", "Championship"]

Pair = Tuple[Optional[str], Optional[str]]


@dataclass
class RegionResult:
    """Rounds played inside one region."""

    name: str
    rounds: List[Round]
    champion: Optional[str]


@dataclass
class SimulationResult:
    """Full result tree of one tournament simulation."""

    regions: Dict[str, RegionResult] = field(default_factory=dict)
    final_four: Round = field(default_factory=list)
    championship: Round = field(default_factory=list)

    @property
    def champion(self) -> Optional[str]:
        return self.championship[0].winner if self.championship else None

    @property
    def region_champions(self) -> Dict[str, Optional[str]]:
        return {name: result.champion for name, result in self.regions.items()}

    def all_matchups(self) -> List[Matchup]:
        games = [m for region in self.regions.values() for rnd in region.rounds for m in rnd]
        return games + list(self.final_four) + list(self.championship)

    def to_dict(self) -> dict:
        """Plain nested structure for JSON serialization."""
        return {
            "regionalRounds": {
                name: [[m.to_dict() for m in rnd] for rnd in result.rounds]
                for name, result in self.regions.items()
            },
            "regionChampions": self.region_champions,
            "finalFour": [m.to_dict() for m in self.final_four],
            "championship": [m.to_dict() for m in self.championship],
            "champion": self.champion,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationResult":
        """Rebuild a result from :meth:`to_dict` output."""
        regions = {}
        for name, rounds in data.get("regionalRounds", {}).items():
            parsed = [[Matchup.from_dict(m) for m in rnd] for rnd in rounds]
            champion = parsed[-1][0].winner if parsed and parsed[-1] else None
            regions[name] = RegionResult(name=name, rounds=parsed, champion=champion)
        return cls(
            regions=regions,
            final_four=[Matchup.from_dict(m) for m in data.get("finalFour", [])],
            championship=[Matchup.from_dict(m) for m in data.get("championship", [])],
        )


def first_round_pairs(region: Region) -> List[Pair]:
    """Opening-round pairs for a region; empty seed slots become None."""
    return [(region.team_by_seed(a), region.team_by_seed(b)) for a, b in FIRST_ROUND_MATCHUPS]


def next_round_pairs(results: Round) -> List[Pair]:
    """
    Pair consecutive winners of a round.

    Winners of matchups 0 and 1 meet in next-round matchup 0, 2 and 3 in
    matchup 1, and so on.  An odd trailing winner gets a None opponent.
    """
    winners = [m.winner for m in results]
    pairs = []
    for i in range(0, len(winners), 2):
        pairs.append((winners[i], winners[i + 1] if i + 1 < len(winners) else None))
    return pairs


def simulate_region(region: Region, predictor: BasePredictor) -> RegionResult:
    """
    Play one region from the Round of 64 through the Elite 8.

    Args:
        region: 16-team region
        predictor: Decides every matchup

    Returns:
        RegionResult with four rounds and the region champion
    """
    rounds: List[Round] = [predictor.play_round(first_round_pairs(region))]
    while len(rounds) < len(REGION_ROUND_NAMES):
        rounds.append(predictor.play_round(next_round_pairs(rounds[-1])))

    final_round = rounds[-1]
    champion = final_round[0].winner if final_round else None
    logger.debug("Region %s champion: %s", region.name, champion)
    return RegionResult(name=region.name, rounds=rounds, champion=champion)


def simulate_tournament(
    bracket: Bracket,
    predictor: BasePredictor,
    final_four_pairs: Sequence[Tuple[str, str]] = (("West", "South"), ("East", "Midwest")),
) -> SimulationResult:
    """
    Play the whole tournament.

    Args:
        bracket: Four-region bracket topology
        predictor: Decides every matchup
        final_four_pairs: Region-name pairs for the two national semifinals

    Returns:
        SimulationResult with regional rounds, Final Four and Championship
    """
    problems = bracket.validate()
    if problems:
        logger.warning("Simulating incomplete bracket: %s", "; ".join(problems))

    result = SimulationResult()
    for region in bracket.regions:
        result.regions[region.name] = simulate_region(region, predictor)

    champions = result.region_champions
    semifinals = []
    for left, right in final_four_pairs:
        for name in (left, right):
            if name not in champions:
                logger.warning("Final Four pairing names unknown region %r", name)
        semifinals.append((champions.get(left), champions.get(right)))

    result.final_four = predictor.play_round(semifinals)
    result.championship = predictor.play_round(next_round_pairs(result.final_four))
    logger.info("Champion: %s", result.champion)
    return result


def top_n_by_winning_pct(paged_winning_pct, n: int = 64, value_field: str = "Pct") -> List[str]:
    """
    Rank teams by winning percentage and keep the top ``n``.

    Ties keep the dataset's order.
    """
    rows = []
    for row in merge_pages(paged_winning_pct):
        if not isinstance(row, dict):
            continue
        pct = parse_number(row.get(value_field))
        if row.get("Team") and pct is not None:
            rows.append((row["Team"], pct))
    rows.sort(key=lambda r: r[1], reverse=True)
    return [team for team, _ in rows[:n]]


def pair_seeds_for_round_one(teams: Sequence[str]) -> List[Pair]:
    """Pair an ordered field 1 vs N, 2 vs N-1, ..."""
    count = len(teams)
    return [(teams[i], teams[count - 1 - i]) for i in range(count // 2)]


def simulate_field(teams: Sequence[str], predictor: BasePredictor) -> List[Round]:
    """
    Play an open field (no regions) down to one champion.

    Args:
        teams: Field ordered best first, e.g. from :func:`top_n_by_winning_pct`
        predictor: Decides every matchup

    Returns:
        List of rounds; the last holds the championship matchup
    """
    if len(teams) < 2:
        return []
    rounds: List[Round] = [predictor.play_round(pair_seeds_for_round_one(teams))]
    while len(rounds[-1]) > 1:
        rounds.append(predictor.play_round(next_round_pairs(rounds[-1])))
    return rounds
