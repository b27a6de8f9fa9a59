"""HTTP handlers for the REST part of the service."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from .auth import create_anon_user
from .board import Leaderboard

if TYPE_CHECKING:
    from .app import AppState


@dataclass
class CreateBoardPayload:
    """Body of a request to create a leaderboard."""

    name: str = ""

    @classmethod
    def _from_json(cls, data: Any) -> CreateBoardPayload:
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise HTTPException(
                422, "Failed to deserialize the JSON body into the target type"
            )
        return cls(name=data["name"])


def _state(request: Request) -> AppState:
    return request.app.state.scoreboard


def _is_json(content_type: str) -> bool:
    media = content_type.split(";", 1)[0].strip().lower()
    return media == "application/json" or (
        media.startswith("application/") and media.endswith("+json")
    )


async def _json_body(request: Request) -> Any:
    if not _is_json(request.headers.get("content-type", "")):
        raise HTTPException(
            415, "Expected request with `Content-Type: application/json`"
        )
    raw = await request.body()
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise HTTPException(400, "Failed to parse the request body as JSON") from exc


async def anon_sign_up(request: Request) -> JSONResponse:
    """Sign up as an anonymous user."""
    user = await create_anon_user(_state(request).pool)
    return JSONResponse(user.to_dict(), status_code=201)


async def create_board(request: Request) -> JSONResponse:
    """Create a leaderboard."""
    payload = CreateBoardPayload._from_json(await _json_body(request))
    board = await Leaderboard.create(payload.name, _state(request).pool)
    return JSONResponse(board.to_dict(), status_code=201)


async def get_leaderboards(request: Request) -> JSONResponse:
    """Return every leaderboard."""
    pool = _state(request).pool
    async with pool.execute("SELECT * FROM leaderboards ORDER BY id") as cursor:
        rows = await cursor.fetchall()
        columns = [column[0] for column in cursor.description]
    boards = [dict(zip(columns, row)) for row in rows]
    return JSONResponse(
        [Leaderboard(id=row["id"], name=row["name"]).to_dict() for row in boards]
    )