"""Redirect-interception policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import httpx

from .request_options import RequestOptions
from .urls import is_identical_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedirectPolicy:
    """Decide whether a redirect hop is followed.

    Every hop is checked against the original request, i.e. the first entry
    of the chain, never against the hop right before it.
    """

    allow_all: bool = False
    allow_https: bool = False
    allow_www: bool = False

    @classmethod
    def from_options(cls, options: RequestOptions) -> "RedirectPolicy":
        return cls(
            allow_all=options.allow_redirects,
            allow_https=options.allow_https_redirects,
            allow_www=options.allow_www_redirects,
        )

    def should_follow(self, redirect: httpx.Request, via: Sequence[httpx.Request]) -> bool:
        """Return True to follow ``redirect``; ``via`` holds the requests sent so far."""
        if self.allow_all:
            return True
        if not via:
            return False

        original = via[0].url
        candidate = redirect.url
        equivalent = is_identical_url(str(candidate), str(original))

        if self.allow_https and equivalent and original.scheme == "http" and candidate.scheme == "https":
            logger.debug("Following scheme upgrade redirect %s -> %s", original, candidate)
            return True

        if self.allow_www and equivalent:
            logger.debug("Following equivalent redirect %s -> %s", original, candidate)
            return True

        logger.debug("Not following redirect %s -> %s", original, candidate)
        return False

    __call__ = should_follow
