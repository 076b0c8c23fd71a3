"""Build normalized metrics from raw per-stat datasets.

The stat files are written page by page by the fetcher, so a dataset is
either a list of ``{"data": [...]}`` page envelopes or a flat list of rows.
Every builder here is best-effort: unusable rows are dropped, missing
datasets produce an empty (neutral) metric, and nothing raises.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections import Counter
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from ..models.bracket import Bracket
from ..models.metric import HISTORY, SEED, SEED_MAX, SEED_MIN, STAT, Metric, MetricSpec
from .normalize import normalize_team_name, strip_record_suffix

logger = logging.getLogger(__name__)

# Champion name fields, most specific first.  Nothing outside this list is
# inspected: a record without any of them carries no title.
CHAMPION_FIELDS = (
    "Champion (Record)",
    "champion",
    "Champion",
    "winner",
    "Winner",
    "team",
    "Team",
    "champ",
    "champion_team",
    "winner_team",
)
NESTED_NAME_FIELDS = ("team", "name", "school")


def merge_pages(paged) -> List:
    """
    Flatten a paginated dataset into one row list.

    Accepts either a list of page objects (``[{"data": [...]}, ...]``) or a
    list of rows.  Anything else flattens to an empty list.
    """
    if not isinstance(paged, list):
        return []
    has_pages = any(isinstance(p, dict) and isinstance(p.get("data"), list) for p in paged)
    if not has_pages:
        return list(paged)
    rows = []
    for page in paged:
        if isinstance(page, dict) and isinstance(page.get("data"), list):
            rows.extend(page["data"])
    return rows


def parse_number(value) -> Optional[float]:
    """
    Parse a stat cell into a float.

    Numbers pass through; strings have every ``%`` removed before parsing
    (``"45.3%"`` → 45.3).  Booleans, non-finite values and anything
    unparseable return None.

    Parsing is strict: the whole cell must be a number, so ``"1,234"`` or
    ``"12.5 (T)"`` is unparseable rather than read up to its first
    non-numeric character.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.replace("%", "").strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _clean_team(value) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def build_metric(spec: MetricSpec, paged_dataset) -> Metric:
    """
    Build a stat metric from a paginated dataset.

    Args:
        spec: Metric declaration; ``spec.value_field`` names the column read
        paged_dataset: Page envelopes or flat rows, each with a ``Team`` field

    Returns:
        Metric with exact/normalized indices and observed bounds
    """
    rows = [r for r in merge_pages(paged_dataset) if isinstance(r, dict)]
    frame = pd.DataFrame.from_records(rows)

    if frame.empty or "Team" not in frame.columns or spec.value_field not in frame.columns:
        logger.debug("Metric %s: no usable '%s' column", spec.id, spec.value_field)
        return Metric(id=spec.id, label=spec.label, kind=STAT, invert=spec.invert)

    parsed = pd.DataFrame(
        {
            "team": frame["Team"].map(_clean_team),
            "value": frame[spec.value_field].map(parse_number),
        }
    ).dropna()

    skipped = len(frame) - len(parsed)
    if skipped:
        logger.debug("Metric %s: skipped %d of %d rows", spec.id, skipped, len(frame))

    exact_index: Dict[str, float] = {}
    normalized_index: Dict[str, float] = {}
    for team, value in zip(parsed["team"], parsed["value"]):
        exact_index[team] = float(value)
        normalized_index[normalize_team_name(team)] = float(value)

    if parsed.empty:
        lo, hi = math.inf, -math.inf
    else:
        lo, hi = float(parsed["value"].min()), float(parsed["value"].max())

    return Metric(
        id=spec.id,
        label=spec.label,
        exact_index=exact_index,
        normalized_index=normalized_index,
        min=lo,
        max=hi,
        kind=STAT,
        invert=spec.invert,
    )


def extract_champion_name(record) -> Optional[str]:
    """
    Pull the champion's name out of one history record.

    A bare string is the name itself.  For objects, ``CHAMPION_FIELDS`` is
    tried in order; a nested object contributes its team/name/school field.
    """
    if isinstance(record, str):
        return record.strip() or None
    if not isinstance(record, dict):
        return None
    for key in CHAMPION_FIELDS:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, dict):
            for sub in NESTED_NAME_FIELDS:
                nested = value.get(sub)
                if isinstance(nested, str) and nested.strip():
                    return nested.strip()
    return None


def _titles_in_record(record) -> float:
    # Pre-tallied rows ({"Team": ..., "Titles": n}) carry their own count.
    if isinstance(record, dict):
        titles = parse_number(record.get("Titles"))
        if titles is not None:
            return titles
    return 1


def tally_champions(records: Iterable) -> Counter:
    """Count titles per normalized champion name."""
    counts: Counter = Counter()
    for record in records:
        name = extract_champion_name(record)
        if not name:
            continue
        key = normalize_team_name(strip_record_suffix(name))
        if key:
            counts[key] += _titles_in_record(record)
    return counts


def build_history_titles_metric(history_data, label: str = "Historical Titles") -> Metric:
    """
    Build the championship-count metric.

    Teams absent from the history have zero titles, so ``min`` is fixed at 0
    and a missed lookup resolves to 0 rather than to a neutral value.
    """
    if isinstance(history_data, dict) and isinstance(history_data.get("data"), list):
        records = history_data["data"]
    elif isinstance(history_data, list):
        records = history_data
    else:
        logger.warning("Historical winners dataset has no record list; titles metric is empty")
        records = []

    counts = tally_champions(records)
    logger.info(
        "Built historical titles metric: %d records, %d distinct champions",
        len(records),
        len(counts),
    )
    if counts:
        top = ", ".join(f"{name}({count:g})" for name, count in counts.most_common(10))
        logger.debug("Top champions: %s", top)

    return Metric(
        id=HISTORY,
        label=label,
        normalized_index={k: float(v) for k, v in counts.items()},
        min=0,
        max=float(max(counts.values())) if counts else 1,
        kind=HISTORY,
    )


def build_seed_metric(bracket: Union[Bracket, dict, None], label: str = "Seeding") -> Metric:
    """
    Build the seeding metric from the bracket itself.

    Bounds are the fixed seed domain (1-16), not the observed seeds; a team
    missing from the bracket resolves to the midpoint seed 8.5.
    """
    if isinstance(bracket, dict):
        bracket = Bracket.from_dict(bracket)

    seeds: Dict[str, float] = {}
    if bracket is not None:
        for entry in bracket.teams:
            seeds[normalize_team_name(entry.team)] = entry.seed
    logger.debug("Loaded %d team seeds", len(seeds))

    return Metric(
        id=SEED,
        label=label,
        normalized_index=seeds,
        min=SEED_MIN,
        max=SEED_MAX,
        kind=SEED,
    )


def build_metrics(
    specs: Iterable[MetricSpec],
    stats: Dict[str, object],
    bracket: Optional[Bracket] = None,
) -> List[Metric]:
    """
    Build every metric in ``specs`` from the loaded datasets.

    Args:
        specs: Metric declarations, usually the enabled subset of the registry
        stats: Dataset key -> parsed JSON
        bracket: Bracket topology; feeds the seed metric when given

    Returns:
        Metrics in the order of ``specs``
    """
    metrics = []
    for spec in specs:
        dataset = stats.get(spec.dataset_key)
        if spec.id == SEED:
            source = bracket if bracket is not None else dataset
            if source is None:
                logger.warning("No bracket available for seed metric; all teams get the default seed")
            metrics.append(build_seed_metric(source, label=spec.label))
            continue

        if dataset is None:
            logger.warning("Dataset '%s' for metric %s is missing; metric is neutral", spec.dataset_key, spec.id)
        if spec.id == HISTORY:
            metrics.append(build_history_titles_metric(dataset, label=spec.label))
        else:
            metrics.append(build_metric(spec, dataset))
    return metrics
