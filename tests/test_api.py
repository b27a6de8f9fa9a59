import contextlib
import uuid

import httpx
import pytest
import pytest_asyncio
from starlette.applications import Starlette
from starlette.routing import Route

from scoreboard.api import CreateBoardPayload, anon_sign_up, create_board, get_leaderboards
from scoreboard.app import AppState
from scoreboard.database import open_database


@pytest_asyncio.fixture
async def db():
    connection = await open_database(":memory:")
    yield connection
    await connection.close()


@contextlib.asynccontextmanager
async def _client(state, *, signup=None, board=None, boards=None):
    routes = []
    if signup is not None:
        routes.append(Route("/signup", signup, methods=["POST"]))
    if board is not None:
        routes.append(Route("/board", board, methods=["POST"]))
    if boards is not None:
        routes.append(Route("/boards", boards, methods=["GET"]))
    app = Starlette(routes=routes)
    app.state.scoreboard = state
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def test_payload_default_name():
    assert CreateBoardPayload().name == ""


@pytest.mark.asyncio
async def test_sign_up_anonymously(db):
    state = AppState(client=None, pool=db)
    async with _client(state, signup=anon_sign_up) as http:
        response = await http.post("/signup")
    assert response.status_code == 201
    body = response.json()
    assert body["is_anonymous"] is True
    assert body["email"] is None
    assert uuid.UUID(body["id"]).version == 4


@pytest.mark.asyncio
async def test_sign_up_stores_user(db):
    state = AppState(client=None, pool=db)
    async with _client(state, signup=anon_sign_up) as http:
        response = await http.post("/signup")
    user_id = response.json()["id"]
    async with db.execute("SELECT is_anonymous FROM users WHERE id = ?", (user_id,)) as cursor:
        row = await cursor.fetchone()
    assert row[0] == 1


@pytest.mark.asyncio
async def test_create_board(db):
    state = AppState(client=None, pool=db)
    async with _client(state, board=create_board) as http:
        response = await http.post("/board", json={"name": "Leaderboard123"})
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Leaderboard123"
    async with db.execute("SELECT name FROM leaderboards WHERE id = ?", (body["id"],)) as cursor:
        row = await cursor.fetchone()
    assert row[0] == "Leaderboard123"


@pytest.mark.asyncio
async def test_create_board_requires_json_content_type(db):
    state = AppState(client=None, pool=db)
    async with _client(state, board=create_board) as http:
        response = await http.post(
            "/board", content=b'{"name":"x"}', headers={"Content-Type": "text/plain"}
        )
    assert response.status_code == 415


@pytest.mark.asyncio
async def test_create_board_rejects_invalid_json(db):
    state = AppState(client=None, pool=db)
    async with _client(state, board=create_board) as http:
        response = await http.post(
            "/board", content=b"{oops", headers={"Content-Type": "application/json"}
        )
    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"name": 3}, ["name"]])
async def test_create_board_rejects_wrong_shape(db, payload):
    state = AppState(client=None, pool=db)
    async with _client(state, board=create_board) as http:
        response = await http.post("/board", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_leaderboards_empty(db):
    state = AppState(client=None, pool=db)
    async with _client(state, boards=get_leaderboards) as http:
        response = await http.get("/boards")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_leaderboards_lists_created(db):
    state = AppState(client=None, pool=db)
    async with _client(state, board=create_board, boards=get_leaderboards) as http:
        first = (await http.post("/board", json={"name": "one"})).json()
        second = (await http.post("/board", json={"name": "two"})).json()
        response = await http.get("/boards")
    assert response.json() == [first, second]
    assert [board["name"] for board in response.json()] == ["one", "two"]