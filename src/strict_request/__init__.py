"""HTTP requests with a size cap, a timeout and strict redirect handling."""

from __future__ import annotations

import logging

from .client import StrictRequestClient, delete, get, post, put, strict_request
from .exceptions import (
    ConstructionError,
    RequestTimeoutError,
    StrictRequestError,
    TransportError,
)
from .redirects import RedirectPolicy
from .request_options import RequestOptions
from .urls import is_identical_url, is_same_url_different_scheme

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConstructionError",
    "RedirectPolicy",
    "RequestOptions",
    "RequestTimeoutError",
    "StrictRequestClient",
    "StrictRequestError",
    "TransportError",
    "delete",
    "get",
    "is_identical_url",
    "is_same_url_different_scheme",
    "post",
    "put",
    "strict_request",
]
