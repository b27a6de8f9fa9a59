# scoreboard

A small leaderboard server. It offers a JSON HTTP API for anonymous sign-up
and for leaderboards, stored in SQLite, and a WebSocket endpoint for creating
and fetching live scoreboards kept in Redis.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
scoreboard [--host HOST] [--port PORT]
```

`--host` defaults to `::1` and `--port` to `5000`. On start the server reads a
`.env` file if one is present, connects to Redis at `redis://[::1]:6379`, and
opens the SQLite database named by the `DATABASE_URL` environment variable,
which must be set. `DATABASE_URL` may be a file path or a `sqlite://` URL
(`sqlite://` alone opens an in-memory database); the tables are created if
they are missing.

## HTTP API

All routes live under `/api/v1`:

| Method | Path                       | Result                                   |
|--------|----------------------------|------------------------------------------|
| POST   | `/auth/sign-up/anonymous`  | `201` with the new anonymous user        |
| POST   | `/leaderboard`             | `201` with the new leaderboard           |
| GET    | `/leaderboards`            | `200` with all leaderboards, by id       |

A user is returned as an object with `id`, `email`, `user_name`,
`created_at`, `phone_number`, `encrypted_password` and `is_anonymous`.
A leaderboard is returned as `{"id": <int>, "name": <string>}`.

Creating a leaderboard takes a JSON body such as `{"name": "Leaderboard123"}`
sent with `Content-Type: application/json`. A request without a JSON content
type is answered with `415`, a body that is not valid JSON with `400`, and a
body without a string `name` with `422`.

Errors from the service itself, the database or Redis are answered with
status `500` and `{"error": "An unknown error occured"}`.

## WebSocket

Connect to `/ws` and send JSON text messages of the form
`{"method": ..., "body": ...}`:

```
{"method": "createScoreBoard"}
{"method": "getScoreBoard", "body": {"id": "<uuid>"}}
```

Replies use the same shape:

```
{"method": "createScoreBoard", "body": {"id": "<uuid>"}}
{"method": "getScoreBoard", "body": {"scoreboard": {"id": "<uuid>", "users": []}}}
```

Text messages that cannot be parsed, and binary messages, are ignored. If a
request fails (an unknown scoreboard id, a method the server does not carry
out, or a Redis error) the server closes the socket with code `1011`.

## What the server does not do

The methods `addMember`, `deleteMember` and `updateScore` are recognised by
`scoreboard.messages.parse_client_message`, but the server does not carry
them out: sending one closes the socket. Leaderboard membership
(`Leaderboard.add_member`, `Leaderboard.get_members`) is available only
through the library, not through the HTTP API. There is no sign-up other than
anonymous, and no sign-in or authentication of requests.

## Using it as a library

Player scores kept in Redis (`scoreboard.store`):

```python
from scoreboard.store import User

user = User()
user.add_score(20)
user.add_score(200)
assert user.total_score() == 220
```

`DbClient.connect(url)` opens a Redis connection; `set_user`, `get_user`,
`set_scoreboard` and `get_scoreboard` store and fetch `User` and `ScoreBoard`
values as JSON, the getters returning `None` when nothing is stored.

Users and leaderboards kept in SQLite:

```python
from scoreboard.auth import create_anon_user
from scoreboard.board import Leaderboard
from scoreboard.database import open_database

async def demo():
    db = await open_database("sqlite://")
    user = await create_anon_user(db)
    board = await Leaderboard.create("My leaderboard", db)
    await board.add_member(user.id, db)
    members = await board.get_members(db)
    await db.close()
    return members
```

`scoreboard.messages.handle_message(message, client)` carries out a parsed
WebSocket message against a `DbClient`, and `scoreboard.app.router(state)`
builds the Starlette application from an `AppState` holding a `DbClient` and
an open database.