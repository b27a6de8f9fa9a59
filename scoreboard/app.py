"""The web application: shared state, routes and the server entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sqlite3
from dataclasses import dataclass
from typing import Any

import aiosqlite
import uvicorn
from dotenv import load_dotenv
from redis.exceptions import RedisError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route, WebSocketRoute
from starlette.websockets import WebSocket, WebSocketDisconnect

from . import api
from .errors import Error
from .database import open_database
from .messages import handle_message, parse_client_message
from .store import DbClient

DEFAULT_HOST = "::1"
DEFAULT_PORT = 5000

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Connections shared by every request."""

    client: DbClient
    pool: aiosqlite.Connection

    @classmethod
    async def create(cls) -> AppState:
        """Connect to Redis and to the database named by DATABASE_URL."""
        client = await DbClient.connect()
        pool = await open_database(os.environ["DATABASE_URL"])
        return cls(client, pool)

    @classmethod
    async def with_pool(cls, pool: aiosqlite.Connection) -> AppState:
        """Connect to Redis and use an already open database."""
        client = await DbClient.connect()
        return cls(client, pool)


async def _serve_socket(websocket: WebSocket, client: DbClient) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return
        text = message.get("text")
        if text is None:
            continue
        try:
            parsed = parse_client_message(text)
        except ValueError as exc:
            logger.debug("ignoring malformed message: %s", exc)
            continue
        response = await handle_message(parsed, client)
        await websocket.send_text(json.dumps(response.to_dict()))


async def ws_handler(websocket: WebSocket) -> None:
    """Answer client messages on a web socket until it closes or a request fails."""
    state: AppState = websocket.app.state.scoreboard
    await websocket.accept()
    try:
        await _serve_socket(websocket, state.client)
    except WebSocketDisconnect:
        return
    except (Error, RedisError) as exc:
        logger.info("closing web socket: %s", exc)
        await websocket.close(code=1011)


async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("request failed: %s", exc)
    return JSONResponse({"error": "An unknown error occured"}, status_code=500)


def router(state: AppState) -> Starlette:
    """Build the application serving the API and the web socket."""
    api_routes = [
        Route("/auth/sign-up/anonymous", api.anon_sign_up, methods=["POST"]),
        Route("/leaderboard", api.create_board, methods=["POST"]),
        Route("/leaderboards", api.get_leaderboards, methods=["GET"]),
    ]
    handlers: dict[Any, Any] = {
        Error: _internal_error,
        sqlite3.Error: _internal_error,
        RedisError: _internal_error,
    }
    app = Starlette(
        routes=[
            WebSocketRoute("/ws", ws_handler),
            Mount("/api/v1", routes=api_routes),
        ],
        exception_handlers=handlers,
    )
    app.state.scoreboard = state
    return app


async def _serve(host: str, port: int) -> None:
    state = await AppState.create()
    try:
        server = uvicorn.Server(uvicorn.Config(router(state), host=host, port=port))
        print(f"Listening on port {port}")
        await server.serve()
    finally:
        await state.pool.close()


def main(argv: list[str] | None = None) -> None:
    """Run the scoreboard server."""
    parser = argparse.ArgumentParser(prog="scoreboard", description="Run the scoreboard server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)
    load_dotenv()
    asyncio.run(_serve(args.host, args.port))