"""Bracket, matchup and metric models."""
