"""Bracket simulation."""
