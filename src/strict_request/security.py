"""Request validation and log redaction helpers."""

from __future__ import annotations

from typing import Iterable

import httpx

from .exceptions import ConstructionError


SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "proxy-authorization",
    "x-api-key",
}

_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def sanitize_headers(headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Return header pairs with sensitive values redacted for logging."""
    redacted: list[tuple[str, str]] = []
    for key, value in headers:
        if key.lower() in SENSITIVE_HEADERS:
            redacted.append((key, "[REDACTED]"))
        else:
            redacted.append((key, value))
    return redacted


def validate_method(method: str) -> str:
    """Validate an HTTP method token and return it upper-cased."""
    if not isinstance(method, str) or not method:
        raise ConstructionError("HTTP method must be a non-empty string", method=method or None)
    if not set(method) <= _TOKEN_CHARS:
        raise ConstructionError(f"Invalid HTTP method: {method!r}", method=method)
    return method.upper()


def validate_url(url: str | httpx.URL, *, method: str | None = None) -> httpx.URL:
    """Parse ``url`` and make sure it is absolute."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConstructionError(str(exc), method=method, url=str(url), cause=exc) from exc
    if not parsed.scheme or not parsed.host:
        raise ConstructionError("URL must include scheme and host", method=method, url=str(url))
    return parsed
