"""Errors raised by strict-request."""

from __future__ import annotations


class StrictRequestError(Exception):
    """Base exception for all strict-request failures."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.cause = cause

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        if self.method is None or self.url is None:
            return str(self.args[0])
        return f"{self.method} {self.url}: {self.args[0]}"


class ConstructionError(StrictRequestError, ValueError):
    """Raised when a request cannot be built from the given method and URL."""


class TransportError(StrictRequestError):
    """Raised for transport-level failures like DNS, TCP and protocol errors."""


class RequestTimeoutError(StrictRequestError, TimeoutError):
    """Raised when a request exceeds its configured timeout."""

    def __init__(
        self,
        message: str,
        *,
        timeout: float | None = None,
        method: str | None = None,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, method=method, url=url, cause=cause)
        self.timeout = timeout
