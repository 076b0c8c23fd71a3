"""Bracket model for the 64-team tournament structure."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

SEED_RANGE = range(1, 17)


def _parse_seed(value) -> Optional[int]:
    """Parse a seed cell (int or numeric string) into 1-16, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if isinstance(value, int) and value in SEED_RANGE:
        return value
    return None


@dataclass(frozen=True)
class BracketEntry:
    """One seeded team in a region."""

    team: str
    seed: int

    def to_dict(self) -> dict:
        return {"team": self.team, "seed": self.seed}


@dataclass(frozen=True)
class Region:
    """A 16-team sub-bracket."""

    name: str
    teams: Tuple[BracketEntry, ...]

    def team_by_seed(self, seed: int) -> Optional[str]:
        """Get the team holding a seed, or None if the slot is empty."""
        for entry in self.teams:
            if entry.seed == seed:
                return entry.team
        return None

    def seed_of(self, team: str) -> Optional[int]:
        for entry in self.teams:
            if entry.team == team:
                return entry.seed
        return None

    def to_dict(self) -> dict:
        return {"name": self.name, "teams": [e.to_dict() for e in self.teams]}

    @classmethod
    def from_dict(cls, data: dict) -> "Region":
        """Build a region, dropping slots without a team name or a valid 1-16 seed."""
        teams = []
        for t in data.get("teams") or []:
            if not isinstance(t, dict) or not isinstance(t.get("team"), str) or not t["team"].strip():
                continue
            seed = _parse_seed(t.get("seed"))
            if seed is None:
                logger.warning("Region %s: dropping %r with invalid seed %r", data.get("name"), t["team"], t.get("seed"))
                continue
            teams.append(BracketEntry(team=t["team"], seed=seed))
        return cls(name=data.get("name", ""), teams=tuple(teams))


@dataclass(frozen=True)
class Bracket:
    """Represents the complete tournament bracket topology."""

    # Tournament structure constants
    REGIONS = ("East", "West", "South", "Midwest")
    SEEDS = tuple(SEED_RANGE)

    regions: Tuple[Region, ...]

    def region(self, name: str) -> Optional[Region]:
        for region in self.regions:
            if region.name == name:
                return region
        return None

    @property
    def teams(self) -> List[BracketEntry]:
        return [entry for region in self.regions for entry in region.teams]

    def seed_for_team(self, team: str) -> Tuple[str, Optional[int]]:
        """
        Find which region and seed a team was placed at.

        Returns:
            (region_name, seed), or ("", None) if the team is not in the bracket
        """
        for region in self.regions:
            seed = region.seed_of(team)
            if seed is not None:
                return region.name, seed
        return "", None

    def validate(self) -> List[str]:
        """
        Check the bracket shape without raising.

        Returns:
            List of problems; empty when the bracket is a complete 4 x 16 field
        """
        problems = []
        if len(self.regions) != len(self.REGIONS):
            problems.append(f"Expected {len(self.REGIONS)} regions, got {len(self.regions)}")

        for region in self.regions:
            seeds = [entry.seed for entry in region.teams]
            missing = sorted(set(self.SEEDS) - set(seeds))
            if missing:
                problems.append(f"Region {region.name} missing seeds: {missing}")
            duplicates = sorted({s for s in seeds if seeds.count(s) > 1})
            if duplicates:
                problems.append(f"Region {region.name} has duplicate seeds: {duplicates}")
        return problems

    def to_dict(self) -> dict:
        return {"regions": [r.to_dict() for r in self.regions]}

    @classmethod
    def from_dict(cls, data: dict) -> "Bracket":
        """Create bracket from the ``{"regions": [...]}`` topology document."""
        regions = (data.get("regions") or []) if isinstance(data, dict) else []
        return cls(regions=tuple(Region.from_dict(r) for r in regions if isinstance(r, dict)))

    @classmethod
    def from_seed_lists(cls, regions: Dict[str, List[str]]) -> "Bracket":
        """Build a bracket from ``{region: [seed 1 team, seed 2 team, ...]}``."""
        return cls(
            regions=tuple(
                Region(
                    name=name,
                    teams=tuple(BracketEntry(team=team, seed=i + 1) for i, team in enumerate(teams)),
                )
                for name, teams in regions.items()
            )
        )
