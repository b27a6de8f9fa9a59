"""Leaderboards and their members."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping

import aiosqlite


@dataclass
class LeaderboardMember:
    """A player's membership of a leaderboard."""

    id: int
    leaderboard: int
    player_alias: str | None
    player: uuid.UUID

    @classmethod
    def _from_row(cls, row: Mapping[str, Any]) -> LeaderboardMember:
        return cls(
            id=row["id"],
            leaderboard=row["leaderboard"],
            player_alias=row["player_alias"],
            player=uuid.UUID(str(row["player"])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "leaderboard": self.leaderboard,
            "player_alias": self.player_alias,
            "player": str(self.player),
        }


@dataclass
class Leaderboard:
    """A named leaderboard."""

    id: int
    name: str

    @classmethod
    async def create(cls, name: str, db: aiosqlite.Connection) -> Leaderboard:
        """Insert a new leaderboard and return it."""
        cursor = await db.execute("INSERT INTO leaderboards(name) VALUES(?)", (name,))
        board_id = cursor.lastrowid
        await cursor.close()
        await db.commit()
        return cls(id=board_id, name=name)

    async def add_member(self, player_id: uuid.UUID | str, db: aiosqlite.Connection) -> None:
        """Add a player to the board's members."""
        player = str(uuid.UUID(str(player_id)))
        await db.execute(
            "INSERT INTO leaderboard_members(player, leaderboard) VALUES(?, ?)",
            (player, self.id),
        )
        await db.commit()

    async def get_members(self, db: aiosqlite.Connection) -> list[LeaderboardMember]:
        """Return every member of this board."""
        async with db.execute(
            "SELECT * FROM leaderboard_members WHERE leaderboard = ? ORDER BY id",
            (self.id,),
        ) as cursor:
            rows = await cursor.fetchall()
            columns = [column[0] for column in cursor.description]
        return [LeaderboardMember._from_row(dict(zip(columns, row))) for row in rows]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}