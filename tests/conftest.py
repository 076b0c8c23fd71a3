"""Shared fixtures for simulator tests."""

import pytest

from madness_sim.models.bracket import Bracket

REGIONS = ("East", "West", "South", "Midwest")


def build_bracket(regions=REGIONS) -> Bracket:
    """Four regions of placeholder teams named '<Region> <seed>'."""
    return Bracket.from_seed_lists({r: [f"{r} {seed}" for seed in range(1, 17)] for r in regions})


def win_pct_pages(bracket: Bracket, page_size: int = 16) -> list:
    """Paginated winning-percentage dataset where lower seeds win more."""
    rows = [
        {"Rank": i + 1, "Team": entry.team, "W-L": "20-10", "Pct": f"{1.0 - entry.seed * 0.05:.3f}"}
        for i, entry in enumerate(bracket.teams)
    ]
    return [{"page": n + 1, "data": rows[i:i + page_size]} for n, i in enumerate(range(0, len(rows), page_size))]


@pytest.fixture
def bracket():
    return build_bracket()


@pytest.fixture
def stats(bracket):
    return {
        "winningPercentage": win_pct_pages(bracket),
        "historicalWinners": [
            {"Year": 2024, "Champion (Record)": "UConn (37-3)"},
            {"Year": 2023, "Champion (Record)": "UConn (31-8)"},
            {"Year": 2000, "Champion (Record)": "Michigan State (32-7)"},
        ],
        "bracket": bracket.to_dict(),
    }
