#!/usr/bin/env python3
"""Manual check: exercise strict requests against public websites."""

from __future__ import annotations

import logging
import sys

import strict_request
from strict_request import RequestOptions, StrictRequestError

passed: list[str] = []
failed: list[tuple[str, str]] = []


def ok(name: str, detail: object = None) -> None:
    print(f"  PASS  {name}  -> {detail}")
    passed.append(name)


def fail(name: str, reason: str) -> None:
    print(f"  FAIL  {name}  -> {reason[:200]}")
    failed.append((name, reason))


def run(name: str, fn) -> None:
    try:
        fn()
    except StrictRequestError as e:
        fail(name, f"{type(e).__name__}: {e}")
    except AssertionError as e:
        fail(name, str(e) or "assertion failed")


def check_range_cap() -> None:
    response = strict_request.get("https://example.com", RequestOptions(max_size_mb=0.000015))
    assert response.status_code in {200, 206}, response.status_code
    ok("range cap", f"{response.status_code} {len(response.content)} bytes")


def check_redirect_blocked() -> None:
    response = strict_request.get("http://wikipedia.org", RequestOptions(timeout_ms=5000))
    assert response.is_redirect, response.status_code
    ok("redirect blocked", f"{response.status_code} -> {response.headers.get('Location')}")


def check_https_upgrade() -> None:
    options = RequestOptions(allow_https_redirects=True, timeout_ms=5000)
    response = strict_request.get("http://example.com", options)
    ok("https upgrade", f"{response.status_code} {response.url}")


def check_timeout() -> None:
    try:
        strict_request.get("https://httpbin.org/delay/5", RequestOptions(timeout_ms=100))
    except strict_request.RequestTimeoutError as e:
        ok("timeout", e)
        return
    fail("timeout", "request did not time out")


def main() -> int:
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)
    run("range cap", check_range_cap)
    run("redirect blocked", check_redirect_blocked)
    run("https upgrade", check_https_upgrade)
    run("timeout", check_timeout)

    print(f"\n{len(passed)} passed, {len(failed)} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
