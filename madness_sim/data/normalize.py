"""Shared team name normalization used across all datasets.

Every dataset spells schools a little differently (``"Michigan St."`` in the
bracket, ``"Michigan State"`` in the championship history, ``"UConn (37-3)"``
in a champion record).  The normalized key produced here is the join key
between those datasets; anything the key cannot reconcile is handled by the
alias table in :mod:`madness_sim.data.team_name_resolver`.
"""

from __future__ import annotations

import re

_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_TRAILING_RECORD_RE = re.compile(r"\s*\([^)]*\)\s*$")
_PUNCTUATION_RE = re.compile(r"[.'’&-]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_team_name(name) -> str:
    """Convert a display name to the normalized key used for cross-dataset joins.

    Steps:
    1. Lowercase
    2. Drop every parenthesized group (``"(37-3)"``, ``"(FL)"``)
    3. Delete ``.``, ``'``, ``’``, ``&`` and ``-``
    4. Collapse whitespace runs and strip

    The function is total: ``None`` and empty input return ``""``.  Applying
    it twice gives the same key as applying it once.

    Examples::

        >>> normalize_team_name("Michigan St.")
        'michigan st'
        >>> normalize_team_name("St. John's (NY)")
        'st johns'
        >>> normalize_team_name("Texas A&M")
        'texas am'
    """
    if not name:
        return ""
    s = str(name).lower()
    s = _PARENTHETICAL_RE.sub("", s)
    s = _PUNCTUATION_RE.sub("", s)
    s = _WHITESPACE_RE.sub(" ", s)
    return s.strip()


def strip_record_suffix(name: str) -> str:
    """Strip a trailing season record from a champion string.

    Example: ``UConn (37-3)`` → ``UConn``
    """
    if not name:
        return ""
    return _TRAILING_RECORD_RE.sub("", str(name)).strip()
