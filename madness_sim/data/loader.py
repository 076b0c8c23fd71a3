"""Data loader for stat datasets, bracket topology, configs and results."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..config import SimulationConfig
from ..models.bracket import Bracket

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Dataset key -> file base name under the data directory
STAT_FILES: Dict[str, str] = {
    "assistTurnoverRatio": "assist-turnover-ratio",
    "assistsPerGame": "assists-per-game",
    "benchPoints": "bench-points-per-game",
    "blocksPerGame": "blocks-per-game",
    "defensiveReboundsPerGame": "defensive-rebounds-per-game",
    "effectiveFieldGoalPercentage": "effective-field-goal-percentage",
    "fastbreakPoints": "fastbreak-points",
    "fieldGoalPercentageDefense": "field-goal-percentage-defense",
    "fieldGoalPercentage": "field-goal-percentage",
    "foulsPerGame": "fouls-per-game",
    "freeThrowAttemptsPerGame": "free-throw-attempts-per-game",
    "freeThrowPercentage": "free-throw-percentage",
    "freeThrowsMadePerGame": "free-throws-made-per-game",
    "offensiveReboundsPerGame": "offensive-rebounds-per-game",
    "reboundMargin": "rebound-margin",
    "reboundsPerGame": "rebounds-per-game",
    "scoringDefense": "scoring-defense",
    "scoringMargin": "scoring-margin",
    "scoringOffense": "scoring-offense",
    "stealsPerGame": "steals-per-game",
    "threePointAttemptsPerGame": "three-point-attempts-per-game",
    "threePointPercentageDefense": "three-point-percentage-defense",
    "threePointPercentage": "three-point-percentage",
    "threePointersPerGame": "three-pointers-per-game",
    "turnoverMargin": "turnover-margin",
    "turnoversForcedPerGame": "turnovers-forced-per-game",
    "turnoversPerGame": "turnovers-per-game",
    "winningPercentage": "winning-percentage",
    "historicalWinners": "historical-winners",
    "bracket": "bracket-2025",
}


class DataLoader:
    """Loads datasets from and saves results to JSON files."""

    @staticmethod
    def load_json(file_path: PathLike):
        with open(file_path, "r") as f:
            return json.load(f)

    @staticmethod
    def save_json(data, file_path: PathLike) -> None:
        path = Path(file_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def stat_path(data_dir: PathLike, key: str) -> Path:
        """Resolve a dataset key (or a bare file base name) to its JSON path."""
        return Path(data_dir) / f"{STAT_FILES.get(key, key)}.json"

    @staticmethod
    def load_stat(data_dir: PathLike, key: str):
        """
        Load one dataset.

        Args:
            data_dir: Directory holding the fetched JSON files
            key: Key in ``STAT_FILES`` or a file base name

        Returns:
            Parsed JSON
        """
        return DataLoader.load_json(DataLoader.stat_path(data_dir, key))

    @staticmethod
    def load_stats(data_dir: PathLike, keys: Optional[Iterable[str]] = None) -> Dict[str, object]:
        """
        Load every requested dataset that exists.

        Missing or unparseable files are logged and left out; the metrics
        built from them come out neutral.
        """
        stats = {}
        for key in keys if keys is not None else STAT_FILES:
            path = DataLoader.stat_path(data_dir, key)
            if not path.exists():
                logger.warning("Dataset %s not found at %s", key, path)
                continue
            try:
                stats[key] = DataLoader.load_json(path)
            except ValueError as e:
                logger.warning("Dataset %s at %s is not valid JSON, skipping: %s", key, path, e)
        logger.debug("Loaded %d datasets from %s", len(stats), data_dir)
        return stats

    @staticmethod
    def load_bracket(file_path: PathLike) -> Bracket:
        """Load the ``{"regions": [...]}`` bracket topology."""
        return Bracket.from_dict(DataLoader.load_json(file_path))

    @staticmethod
    def load_config(file_path: PathLike) -> SimulationConfig:
        return SimulationConfig.from_dict(DataLoader.load_json(file_path))

    @staticmethod
    def save_config(config: SimulationConfig, file_path: PathLike) -> None:
        DataLoader.save_json(config.to_dict(), file_path)
