"""Team scoring models."""

from .base import BasePredictor
from .weighted import WeightedMetricPredictor, score_team

__all__ = ["BasePredictor", "WeightedMetricPredictor", "score_team"]
