"""
Errors raised by the availability library.
"""

from __future__ import annotations

from typing import Optional


class AvailabilityError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class DeserializeError(AvailabilityError):
    """A manifest document could not be parsed."""

    def __init__(self, source: str, details: Optional[str] = None) -> None:
        self.source = source
        super().__init__(f"Can't deserialize manifest {source}", details)


class SerializeError(AvailabilityError):
    """A manifest could not be serialized."""

    def __init__(self, source: str, details: Optional[str] = None) -> None:
        self.source = source
        super().__init__(f"Can't serialize manifest {source}", details)


class TransportError(AvailabilityError):
    """The HTTP request itself failed (connection, timeout, ...)."""

    def __init__(self, url: str, details: Optional[str] = None) -> None:
        self.url = url
        super().__init__(f"Request to {url} failed", details)


class BadResponseError(AvailabilityError):
    """The server answered with a non-success status code."""

    def __init__(self, status: int, url: str) -> None:
        self.status = status
        self.url = url
        super().__init__(f"HTTP error {status} on url {url}")

    @property
    def not_found(self) -> bool:
        return self.status == 404


class LocalIOError(AvailabilityError):
    """A local filesystem operation failed."""

    def __init__(self, path, operation: str, details: Optional[str] = None) -> None:
        self.path = path
        self.operation = operation
        super().__init__(f"I/O error while {operation} {path}", details)
