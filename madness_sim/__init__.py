"""Weighted-metric March Madness bracket simulator."""

__version__ = "0.1.0"
