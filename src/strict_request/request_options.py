"""Per-request options for strict requests."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import IO, Iterable, Mapping, Union

RequestBody = Union[bytes, IO[bytes], Iterable[bytes]]

BYTES_PER_MB = 1_000_000


@dataclass(frozen=True)
class RequestOptions:
    allow_redirects: bool = False
    allow_https_redirects: bool = False
    allow_www_redirects: bool = False
    body: IO[bytes] | Iterable[bytes] | None = None
    body_bytes: bytes | None = None
    headers: Mapping[str, str] | None = None
    max_size_mb: float = 0
    timeout_ms: int = 0

    def resolve_body(self) -> RequestBody | None:
        """Return the request body, preferring ``body_bytes`` over ``body``."""
        if self.body_bytes is not None:
            return self.body_bytes
        return self.body

    def range_header(self) -> str | None:
        """Return the ``Range`` header value capping the response size, if any."""
        if self.max_size_mb <= 0:
            return None
        return f"bytes=0-{math.floor(self.max_size_mb * BYTES_PER_MB)}"

    def timeout_seconds(self) -> float | None:
        """Return the timeout in seconds, or None when no timeout is set.

        The value bounds each transport phase (connect, read, write and pool
        acquisition) and applies afresh to every redirect hop. It is not an
        overall deadline: a server that keeps sending a byte before each read
        expires never times out.
        """
        if self.timeout_ms <= 0:
            return None
        return self.timeout_ms / 1000
