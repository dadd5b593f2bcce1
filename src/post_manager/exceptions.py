"""Exceptions raised by the post manager."""

from typing import Sequence, Tuple

__all__ = [
    "PostManagerError",
    "ClientError",
    "HttpError",
    "DecodeError",
    "TransportError",
    "ValidationError",
    "StoreClosedError",
]


class PostManagerError(Exception):
    """Generic base exception used for this library."""


class ClientError(PostManagerError):
    """Raised when a call to the posts API does not succeed."""


class HttpError(ClientError):
    """Raised when the server answers with a status the operation does not accept."""

    def __init__(self, status_code: int, operation: str = "request") -> None:
        super().__init__(f"{operation} failed with HTTP {status_code}")
        self.status_code = status_code
        self.operation = operation


class DecodeError(ClientError):
    """Raised when a response body does not have the expected shape."""


class TransportError(ClientError):
    """Raised when the request fails before any response is received."""


class ValidationError(PostManagerError):
    """Raised when required fields are empty before submission."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(f"Required fields are empty: {', '.join(self.missing)}")


class StoreClosedError(PostManagerError):
    """Raised when an action is started on a store that was closed."""
