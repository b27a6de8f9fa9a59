"""Scoreboards and player scores kept in a Redis key-value store."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

import redis.asyncio as aioredis

DEFAULT_REDIS_URL = "redis://[::1]:6379"
NIL_UUID = uuid.UUID(int=0)
_U64_MAX = 2**64 - 1

_T = TypeVar("_T")


@dataclass(frozen=True)
class Score:
    """A single score entry; a non-negative 64-bit integer."""

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("score must be an integer")
        if not 0 <= self.value <= _U64_MAX:
            raise ValueError(f"score out of range: {self.value}")


@dataclass
class User:
    """A player and the scores they have earned."""

    id: uuid.UUID = NIL_UUID
    scores: list[Score] = field(default_factory=list)

    @classmethod
    def from_id(cls, id: uuid.UUID) -> User:
        return cls(id=id)

    def add_score(self, score: int) -> None:
        self.scores.append(Score(score))

    def total_score(self) -> int:
        """Return the sum of all the user's scores."""
        return sum(score.value for score in self.scores)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "scores": [{"value": score.value} for score in self.scores],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            id=uuid.UUID(data["id"]),
            scores=[Score(item["value"]) for item in data["scores"]],
        )


@dataclass
class ScoreBoard:
    """A board holding a set of players."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    users: list[User] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"id": str(self.id), "users": [user.to_dict() for user in self.users]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoreBoard:
        return cls(
            id=uuid.UUID(data["id"]),
            users=[User.from_dict(item) for item in data["users"]],
        )


class DbClient:
    """Stores users and scoreboards as JSON values in Redis."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    @classmethod
    async def connect(cls, url: str = DEFAULT_REDIS_URL) -> DbClient:
        """Open a connection to Redis and check that it answers."""
        connection = aioredis.from_url(url)
        await connection.ping()
        return cls(connection)

    async def _set(self, key: str, value: dict[str, Any]) -> None:
        await self._connection.set(key, json.dumps(value))

    async def _get(self, key: str, parse: Callable[[dict[str, Any]], _T]) -> _T | None:
        raw = await self._connection.get(key)
        if raw is None:
            return None
        try:
            return parse(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            return None

    async def set_scoreboard(self, scoreboard: ScoreBoard) -> None:
        await self._set(f"scoreboard:{scoreboard.id}", scoreboard.to_dict())

    async def get_scoreboard(self, id: uuid.UUID) -> ScoreBoard | None:
        """Return the stored scoreboard, or None if there is none."""
        return await self._get(f"scoreboard:{id}", ScoreBoard.from_dict)

    async def set_user(self, user: User) -> None:
        await self._set(f"user:{user.id}", user.to_dict())

    async def get_user(self, id: uuid.UUID) -> User | None:
        """Return the stored user, or None if there is none."""
        return await self._get(f"user:{id}", User.from_dict)