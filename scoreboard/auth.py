"""User accounts and sign-up helpers."""

from __future__ import annotations

import base64
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

import aiosqlite

_NIL_UUID = uuid.UUID(int=0)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _parse_timestamp(value: str | datetime) -> datetime:
    stamp = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.astimezone(timezone.utc)


@dataclass
class User:
    """An account stored in the users table."""

    id: uuid.UUID = _NIL_UUID
    email: str | None = None
    user_name: str | None = None
    created_at: datetime = _EPOCH
    phone_number: str | None = None
    encrypted_password: str | None = None
    is_anonymous: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> User:
        """Build a user from a row of the users table."""
        return cls(
            id=uuid.UUID(str(row["id"])),
            email=row["email"],
            user_name=row["user_name"],
            created_at=_parse_timestamp(row["created_at"]),
            phone_number=row["phone_number"],
            encrypted_password=row["encrypted_password"],
            is_anonymous=bool(row["is_anonymous"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "email": self.email,
            "user_name": self.user_name,
            "created_at": self.created_at.isoformat().replace("+00:00", "Z"),
            "phone_number": self.phone_number,
            "encrypted_password": self.encrypted_password,
            "is_anonymous": self.is_anonymous,
        }


async def create_anon_user(db: aiosqlite.Connection) -> User:
    """Insert an anonymous user and return it as stored."""
    user_id = str(uuid.uuid4())
    created_at = datetime.now(timezone.utc).isoformat()
    await db.execute(
        "INSERT INTO users(id, created_at, is_anonymous) VALUES(?, ?, 1)",
        (user_id, created_at),
    )
    await db.commit()
    async with db.execute("SELECT * FROM users WHERE id = ?", (user_id,)) as cursor:
        row = await cursor.fetchone()
        columns = [column[0] for column in cursor.description]
    return User.from_row(dict(zip(columns, row)))


def gen_random_string(n: int) -> str:
    """Return a URL-safe base64 string encoding ``n`` copies of one random byte."""
    if n < 0:
        raise ValueError("length must not be negative")
    byte = secrets.token_bytes(1)
    return base64.urlsafe_b64encode(byte * n).decode("ascii")