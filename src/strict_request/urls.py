"""URL equivalence helpers.

Two URLs are considered identical when they only differ by scheme, by a
``www.`` label right after the scheme, or by a single trailing slash.
"""

from __future__ import annotations

import string

SCHEME_SEPARATOR = "://"
WWW_PREFIX = "www."

_SCHEME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def _scheme_end(url: str) -> int:
    """Return the index of the scheme separator, or -1 when there is no scheme."""
    index = url.find(SCHEME_SEPARATOR)
    if index <= 0:
        return -1
    if not all(char in _SCHEME_CHARS for char in url[:index]):
        return -1
    return index


def url_scheme(url: str) -> str:
    """Return the lower-cased scheme of ``url`` or an empty string."""
    index = _scheme_end(url)
    if index < 0:
        return ""
    return url[:index].lower()


def normalize_url(url: str) -> str:
    """Return the form of ``url`` used for equivalence checks."""
    index = _scheme_end(url)
    if index >= 0:
        url = url[index:]

    marker = SCHEME_SEPARATOR + WWW_PREFIX
    if url.startswith(marker):
        url = SCHEME_SEPARATOR + url[len(marker) :]

    if url.endswith("/"):
        url = url[:-1]
    return url


def is_identical_url(a: str, b: str) -> bool:
    return normalize_url(a) == normalize_url(b)


def is_same_url_different_scheme(a: str, b: str) -> bool:
    """Return True when ``a`` and ``b`` are identical apart from their scheme.

    The scheme must actually differ, e.g. ``http://`` against ``https://``.
    """
    return is_identical_url(a, b) and url_scheme(a) != url_scheme(b)
