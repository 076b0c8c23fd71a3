"""NCAA team statistics fetcher.

Downloads the per-stat leaderboards and the championship history from the
public NCAA stats API and writes them as the JSON files the simulator
reads.  The simulator never calls this module; it only consumes the files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional

import requests

from ...utils.rate_limiter import RateLimiter
from ..loader import DataLoader
from ..metric_builder import extract_champion_name
from ..normalize import strip_record_suffix

logger = logging.getLogger(__name__)


class StatSource(NamedTuple):
    key: str
    name: str
    endpoint: str
    file_name: str
    pages: int = 8


STATS_CONFIG: List[StatSource] = [
    StatSource("assistTurnoverRatio", "Assist/Turnover Ratio", "474", "assist-turnover-ratio.json"),
    StatSource("assistsPerGame", "Assists Per Game", "216", "assists-per-game.json"),
    StatSource("benchPoints", "Bench Points Per Game", "1284", "bench-points-per-game.json"),
    StatSource("blocksPerGame", "Blocks Per Game", "214", "blocks-per-game.json"),
    StatSource("effectiveFieldGoalPercentage", "Effective Field Goal Percentage", "1288",
               "effective-field-goal-percentage.json"),
    StatSource("fastbreakPoints", "FastBreak Points", "1285", "fastbreak-points.json"),
    StatSource("fieldGoalPercentage", "Field Goal Percentage", "148", "field-goal-percentage.json"),
    StatSource("fieldGoalPercentageDefense", "Field Goal Percentage Defense", "149",
               "field-goal-percentage-defense.json"),
    StatSource("foulsPerGame", "Fouls Per Game", "286", "fouls-per-game.json"),
    StatSource("freeThrowAttemptsPerGame", "Free Throw Attempts Per Game", "638",
               "free-throw-attempts-per-game.json"),
    StatSource("freeThrowPercentage", "Free Throw Percentage", "150", "free-throw-percentage.json"),
    StatSource("freeThrowsMadePerGame", "Free Throws Made Per Game", "633", "free-throws-made-per-game.json"),
    StatSource("reboundMargin", "Rebound Margin", "151", "rebound-margin.json"),
    StatSource("defensiveReboundsPerGame", "Defensive Rebounds Per Game", "859",
               "defensive-rebounds-per-game.json"),
    StatSource("offensiveReboundsPerGame", "Offensive Rebounds Per Game", "857",
               "offensive-rebounds-per-game.json"),
    StatSource("reboundsPerGame", "Rebounds Per Game", "932", "rebounds-per-game.json"),
    StatSource("scoringDefense", "Scoring Defense", "146", "scoring-defense.json"),
    StatSource("scoringMargin", "Scoring Margin", "147", "scoring-margin.json"),
    StatSource("scoringOffense", "Scoring Offense", "145", "scoring-offense.json"),
    StatSource("stealsPerGame", "Steals Per Game", "215", "steals-per-game.json"),
    StatSource("threePointAttemptsPerGame", "Three Point Attempts Per Game", "625",
               "three-point-attempts-per-game.json"),
    StatSource("threePointPercentage", "Three Point Percentage", "152", "three-point-percentage.json"),
    StatSource("threePointPercentageDefense", "Three Point Percentage Defense", "518",
               "three-point-percentage-defense.json"),
    StatSource("threePointersPerGame", "Three Pointers Per Game", "153", "three-pointers-per-game.json"),
    StatSource("turnoverMargin", "Turnover Margin", "519", "turnover-margin.json"),
    StatSource("turnoversForcedPerGame", "Turnovers Forced Per Game", "931", "turnovers-forced-per-game.json"),
    StatSource("turnoversPerGame", "Turnovers Per Game", "217", "turnovers-per-game.json"),
    StatSource("winningPercentage", "Winning Percentage", "168", "winning-percentage.json"),
]

HISTORY_FILE = "historical-winners.json"


class NCAAStatsScraper:
    """Fetches NCAA stat leaderboards and championship history into JSON files."""

    BASE_URL = "https://ncaa-api.henrygd.me/stats/basketball-men/d1/current/team"
    HISTORY_URL = "https://ncaa-api.henrygd.me/history/basketball-men/d1"

    def __init__(self, min_delay: float = 0.25, timeout: int = 30):
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)",
            }
        )
        self.rate_limiter = RateLimiter(min_delay)
        self.timeout = timeout

    def _get_json(self, url: str):
        self.rate_limiter.wait()
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_stat_pages(self, endpoint: str, pages: int = 8) -> List:
        """
        Fetch every page of one stat leaderboard.

        Page 1 lives at ``{BASE_URL}/{endpoint}``, later pages at
        ``.../p{n}``.  A page that fails is logged and skipped.

        Returns:
            Page envelopes in page order (list responses are concatenated)
        """
        stat_url = f"{self.BASE_URL}/{endpoint}"
        collected: List = []
        for i in range(pages):
            url = stat_url if i == 0 else f"{stat_url}/p{i + 1}"
            logger.info("Fetching %s", url)
            try:
                data = self._get_json(url)
            except (requests.RequestException, ValueError) as exc:
                logger.error("Error fetching %s: %s", url, exc)
                continue
            if isinstance(data, list):
                collected.extend(data)
            else:
                collected.append(data)
        return collected

    def fetch_championship_history(self) -> List[Dict]:
        """
        Fetch the championship history and tally titles per school.

        Returns:
            ``[{"Team": name, "Titles": count}, ...]`` in first-seen order
        """
        history = self._get_json(self.HISTORY_URL)
        if isinstance(history, dict):
            history = history.get("data", [])

        counts: Dict[str, int] = {}
        for record in history if isinstance(history, list) else []:
            name = extract_champion_name(record)
            if not name:
                continue
            name = strip_record_suffix(name)
            counts[name] = counts.get(name, 0) + 1
        return [{"Team": team, "Titles": titles} for team, titles in counts.items()]

    def fetch_all(
        self,
        output_dir: str,
        keys: Optional[Iterable[str]] = None,
        pages: Optional[int] = None,
        include_history: bool = True,
    ) -> Dict[str, Path]:
        """
        Fetch the configured stats and write one JSON file per stat.

        Args:
            output_dir: Destination directory (created if missing)
            keys: Restrict to these dataset keys
            pages: Override the per-stat page count
            include_history: Also fetch the championship history

        Returns:
            Dataset key -> written path
        """
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        wanted = set(keys) if keys else None

        written: Dict[str, Path] = {}
        for stat in STATS_CONFIG:
            if wanted is not None and stat.key not in wanted:
                continue
            data = self.fetch_stat_pages(stat.endpoint, pages or stat.pages)
            path = out / stat.file_name
            DataLoader.save_json(data, path)
            logger.info("Saved %d pages of %s to %s", len(data), stat.name, path)
            written[stat.key] = path

        if include_history:
            try:
                history = self.fetch_championship_history()
            except (requests.RequestException, ValueError) as exc:
                logger.error("Error fetching historical winners: %s", exc)
            else:
                path = out / HISTORY_FILE
                DataLoader.save_json(history, path)
                logger.info("Saved historical winners for %d teams to %s", len(history), path)
                written["historicalWinners"] = path

        return written
