"""
Team name resolution across datasets.

The per-stat tables, the championship history and the bracket all spell
schools differently:

  Bracket:          "Michigan St."
  History:          "Michigan State (30-7)"
  Stat tables:      "Michigan St."

Resolution of a display name against a metric tries, in order:

1. The literal string in the metric's exact index
2. The normalized key in the metric's normalized index
3. One alias hop from the normalized key, then the normalized index
4. The metric's own missing-value fallback

The alias table is a curated, directed edge list.  It is neither reflexive
nor transitive: a lookup follows at most one edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.bracket import Bracket
from ..models.metric import Metric
from .normalize import normalize_team_name

# ---------------------------------------------------------------------------
# Alias edges: (key as spelled in the bracket/stat tables, key as spelled in
# the championship history).  Both sides are normalized when the table is
# built, so entries may be written as display names.
# ---------------------------------------------------------------------------

NAME_ALIASES: Tuple[Tuple[str, str], ...] = (
    # St. vs State
    ("michigan st", "michigan state"),
    ("iowa st", "iowa state"),
    ("utah st", "utah state"),
    ("oklahoma st", "oklahoma state"),
    ("mississippi st", "mississippi state"),
    ("norfolk st", "norfolk state"),
    ("colorado st", "colorado state"),
    # Saint vs St
    ("st johns", "saint johns"),
    ("st marys", "saint marys"),
    ("st josephs", "saint josephs"),
    # Abbreviations
    ("ole miss", "mississippi"),
    ("uconn", "connecticut"),
    ("byu", "brigham young"),
    ("lsu", "louisiana state"),
    ("tcu", "texas christian"),
    ("smu", "southern methodist"),
    ("unlv", "nevada las vegas"),
    ("uncw", "unc wilmington"),
    ("siue", "siu edwardsville"),
    ("unc", "north carolina"),
    ("nc state", "north carolina state"),
)


class AliasTable:
    """Directed ``source_key -> canonical_key`` edges, resolved one hop at a time."""

    def __init__(self, edges: Iterable[Tuple[str, str]] = NAME_ALIASES):
        self._edges: Dict[str, str] = {}
        for source, canonical in edges:
            source_key = normalize_team_name(source)
            canonical_key = normalize_team_name(canonical)
            if source_key and canonical_key:
                self._edges[source_key] = canonical_key

    def get(self, key: str) -> Optional[str]:
        """Return the canonical key for ``key``, or None if there is no edge."""
        return self._edges.get(key)

    def edges(self) -> List[Tuple[str, str]]:
        return list(self._edges.items())

    def add(self, source: str, canonical: str) -> "AliasTable":
        """Return a new table with one more edge; this table is unchanged."""
        return AliasTable(self.edges() + [(source, canonical)])

    def __contains__(self, key: str) -> bool:
        return key in self._edges

    def __len__(self) -> int:
        return len(self._edges)


DEFAULT_ALIASES = AliasTable()


@dataclass
class MatchResult:
    """Result of resolving a team name against one metric."""

    value: Optional[float]
    key: str  # index key that produced the value ("" on fallback)
    method: str  # "exact", "normalized", "alias", "fallback"

    @property
    def found(self) -> bool:
        return self.method != "fallback"


class TeamNameResolver:
    """
    Resolves display names to metric values.

    Thread-safe for reads after construction.
    """

    def __init__(self, aliases: Optional[AliasTable] = None):
        self.aliases = aliases if aliases is not None else DEFAULT_ALIASES

    def candidate_keys(self, name: Optional[str]) -> List[Tuple[str, str]]:
        """
        Build the ordered lookup chain for a display name.

        Returns:
            List of (method, key) pairs: the literal string, the normalized
            key and, when an edge exists, the aliased key
        """
        if not name:
            return []
        norm = normalize_team_name(name)
        chain = [("exact", name), ("normalized", norm)]
        aliased = self.aliases.get(norm)
        if aliased:
            chain.append(("alias", aliased))
        return chain

    def resolve(self, metric: Metric, name: Optional[str]) -> MatchResult:
        """
        Resolve a team's value in a metric.

        Args:
            metric: Metric to look the team up in
            name: Team name as it appears in any dataset (may be None)

        Returns:
            MatchResult; on a miss the value is ``metric.missing_value``
        """
        for method, key in self.candidate_keys(name):
            index = metric.exact_index if method == "exact" else metric.normalized_index
            value = index.get(key)
            if value is not None:
                return MatchResult(value, key, method)
        return MatchResult(metric.missing_value, "", "fallback")


_DEFAULT_RESOLVER = TeamNameResolver()


def resolve_team_value(
    metric: Metric, name: Optional[str], aliases: Optional[AliasTable] = None
) -> Optional[float]:
    """Look up a team's raw value in a metric, falling back per metric kind."""
    resolver = _DEFAULT_RESOLVER if aliases is None else TeamNameResolver(aliases)
    return resolver.resolve(metric, name).value


def audit_aliases(
    bracket: Bracket, metric: Metric, aliases: Optional[AliasTable] = None
) -> List[Dict]:
    """
    Report how every bracket team resolves against a metric.

    Rows are sorted by resolved value (highest first), then team name, so
    teams that silently fell back to the default cluster at the bottom.
    """
    resolver = TeamNameResolver(aliases)
    rows = []
    for entry in bracket.teams:
        norm = normalize_team_name(entry.team)
        result = resolver.resolve(metric, entry.team)
        rows.append(
            {
                "team": entry.team,
                "normalized": norm,
                "alias": resolver.aliases.get(norm) or "",
                "value": result.value,
                "method": result.method,
            }
        )
    rows.sort(key=lambda r: (-(r["value"] or 0), r["team"]))
    return rows
