[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scoreboard"
version = "0.1.0a0"
description = "Leaderboard and live scoreboard server with a JSON HTTP API and a WebSocket endpoint"
requires-python = ">=3.11"
keywords = ["leaderboard", "scoreboard", "websocket", "redis", "starlette", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "starlette",
    "redis",
    "aiosqlite",
    "uvicorn",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "httpx",
]

[project.scripts]
scoreboard = "scoreboard.app:main"

[tool.hatch.build.targets.wheel]
packages = ["scoreboard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
