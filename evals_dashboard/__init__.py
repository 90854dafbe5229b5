"""Evaluations dashboard: submissions sync, review stats and contributor leaderboard."""

__version__ = "0.1.0"
