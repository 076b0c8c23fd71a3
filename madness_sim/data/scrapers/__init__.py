"""Scraper exports."""

from .ncaa_stats import STATS_CONFIG, NCAAStatsScraper, StatSource

__all__ = [
    "NCAAStatsScraper",
    "STATS_CONFIG",
    "StatSource",
]
