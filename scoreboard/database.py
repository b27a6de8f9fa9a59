"""SQLite storage for users and leaderboards."""

from __future__ import annotations

import aiosqlite

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT,
    user_name TEXT,
    created_at TEXT NOT NULL,
    phone_number TEXT,
    encrypted_password TEXT,
    is_anonymous INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS leaderboards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS leaderboard_members (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    leaderboard INTEGER NOT NULL REFERENCES leaderboards(id),
    player_alias TEXT,
    player TEXT NOT NULL REFERENCES users(id)
);
"""

_URL_PREFIX = "sqlite://"


async def create_schema(db: aiosqlite.Connection) -> None:
    """Create the tables the service needs, if they are missing."""
    await db.executescript(SCHEMA)
    await db.commit()


def _path_from_url(url: str) -> str:
    if url.startswith(_URL_PREFIX):
        url = url[len(_URL_PREFIX):]
    return url or ":memory:"


async def open_database(url: str) -> aiosqlite.Connection:
    """Open the database at ``url`` (a path or sqlite:// URL) with its schema."""
    db = await aiosqlite.connect(_path_from_url(url))
    try:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        await create_schema(db)
    except BaseException:
        await db.close()
        raise
    return db