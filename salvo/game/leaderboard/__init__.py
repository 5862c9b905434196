"""Leaderboard persistence for human victories."""

from salvo.game.leaderboard.repository import DISPLAY_CAP, RETENTION_CAP, LeaderboardRepository

__all__ = ["DISPLAY_CAP", "RETENTION_CAP", "LeaderboardRepository"]
