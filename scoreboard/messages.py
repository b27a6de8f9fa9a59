"""Messages exchanged with clients over the web socket."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Union

from .errors import ClientError, UnsupportedMethodError
from .store import DbClient, ScoreBoard

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class AddMember:
    """Ask for a player to be added to a board."""

    name: str


@dataclass(frozen=True)
class DeleteMember:
    """Ask for a player to be removed from a board."""

    name: str


@dataclass(frozen=True)
class UpdateScore:
    """Ask for a player's score to be changed."""

    name: str
    score: int


@dataclass(frozen=True)
class CreateScoreBoard:
    """Ask for a new, empty scoreboard."""


@dataclass(frozen=True)
class GetScoreBoard:
    """Ask for the scoreboard with the given id."""

    id: uuid.UUID


ClientMessage = Union[AddMember, DeleteMember, UpdateScore, CreateScoreBoard, GetScoreBoard]


@dataclass(frozen=True)
class CreateScoreBoardResponse:
    """Reply carrying the id of a newly created scoreboard."""

    id: uuid.UUID

    def to_dict(self) -> dict[str, Any]:
        return {"method": "createScoreBoard", "body": {"id": str(self.id)}}


@dataclass(frozen=True)
class GetScoreBoardResponse:
    """Reply carrying a stored scoreboard."""

    scoreboard: ScoreBoard

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": "getScoreBoard",
            "body": {"scoreboard": self.scoreboard.to_dict()},
        }


ClientResponse = Union[CreateScoreBoardResponse, GetScoreBoardResponse]


def _body(method: str, body: Any, present: bool) -> dict[str, Any]:
    if not present:
        raise ValueError(f"{method}: missing field `body`")
    if not isinstance(body, dict):
        raise ValueError(f"{method}: body must be an object")
    return body


def _field(method: str, body: dict[str, Any], key: str) -> Any:
    if key not in body:
        raise ValueError(f"{method}: missing field `{key}`")
    return body[key]


def _string(method: str, body: dict[str, Any], key: str) -> str:
    value = _field(method, body, key)
    if not isinstance(value, str):
        raise ValueError(f"{method}: `{key}` must be a string")
    return value


def _parse_add_member(body: Any, present: bool) -> AddMember:
    fields = _body("addMember", body, present)
    return AddMember(_string("addMember", fields, "name"))


def _parse_delete_member(body: Any, present: bool) -> DeleteMember:
    fields = _body("deleteMember", body, present)
    return DeleteMember(_string("deleteMember", fields, "name"))


def _parse_update_score(body: Any, present: bool) -> UpdateScore:
    fields = _body("updateScore", body, present)
    name = _string("updateScore", fields, "name")
    score = _field("updateScore", fields, "score")
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError("updateScore: `score` must be an unsigned integer")
    if not 0 <= score <= _U64_MAX:
        raise ValueError(f"updateScore: `score` out of range: {score}")
    return UpdateScore(name, score)


def _parse_create_scoreboard(body: Any, present: bool) -> CreateScoreBoard:
    if present and body is not None:
        raise ValueError("createScoreBoard: body must be empty")
    return CreateScoreBoard()


def _parse_get_scoreboard(body: Any, present: bool) -> GetScoreBoard:
    fields = _body("getScoreBoard", body, present)
    raw_id = _field("getScoreBoard", fields, "id")
    if not isinstance(raw_id, str):
        raise ValueError("getScoreBoard: `id` must be a string")
    try:
        board_id = uuid.UUID(raw_id)
    except ValueError as exc:
        raise ValueError(f"getScoreBoard: invalid id {raw_id!r}") from exc
    return GetScoreBoard(board_id)


_PARSERS: dict[str, Callable[[Any, bool], ClientMessage]] = {
    "addMember": _parse_add_member,
    "deleteMember": _parse_delete_member,
    "updateScore": _parse_update_score,
    "createScoreBoard": _parse_create_scoreboard,
    "getScoreBoard": _parse_get_scoreboard,
}


def parse_client_message(text: str | bytes) -> ClientMessage:
    """Decode a JSON message sent by a client; raise ValueError if it is malformed."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("message must be a JSON object")
    if "method" not in data:
        raise ValueError("missing field `method`")
    method = data["method"]
    parser = _PARSERS.get(method) if isinstance(method, str) else None
    if parser is None:
        raise ValueError(f"unknown method: {method!r}")
    return parser(data.get("body"), "body" in data)


async def handle_message(message: ClientMessage, client: DbClient) -> ClientResponse:
    """Carry out a client's request and return the reply to send back."""
    match message:
        case CreateScoreBoard():
            board = ScoreBoard()
            await client.set_scoreboard(board)
            return CreateScoreBoardResponse(board.id)
        case GetScoreBoard(id=board_id):
            scoreboard = await client.get_scoreboard(board_id)
            if scoreboard is None:
                raise ClientError.not_found("Scoreboard not found")
            return GetScoreBoardResponse(scoreboard)
        case _:
            raise UnsupportedMethodError()