"""Leaderboard server: a JSON HTTP API over SQLite and a WebSocket scoreboard endpoint over Redis."""

__version__ = "0.1.0a0"