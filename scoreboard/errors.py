"""Error types raised by the scoreboard service."""

from __future__ import annotations

from enum import Enum


class ClientErrorKind(str, Enum):
    """What went wrong with a client's request."""

    NOT_FOUND = "NotFound"
    UNSUPPORTED_METHOD = "UnsupportedMethod"


class Error(Exception):
    """Base class for every error raised by the service."""


class UnsupportedMethodError(Error):
    """Raised when a client sends a method the server does not handle."""

    def __init__(self, message: str = "The method sent is not supported") -> None:
        super().__init__(message)
        self.message = message


class ClientError(Error):
    """An error caused by the client, reported back to it."""

    def __init__(self, message: str, kind: ClientErrorKind | str) -> None:
        super().__init__(message)
        self.message = message
        self.kind = ClientErrorKind(kind)

    @classmethod
    def not_found(cls, message: str) -> ClientError:
        """Build an error for a resource that does not exist."""
        return cls(message, ClientErrorKind.NOT_FOUND)

    def to_dict(self) -> dict[str, str]:
        """Return the JSON-ready form of the error."""
        return {"kind": self.kind.value, "message": self.message}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ClientError(message={self.message!r}, kind={self.kind.value!r})"