"""Strict request dispatcher built on httpx."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from .exceptions import RequestTimeoutError, TransportError
from .redirects import RedirectPolicy
from .request_options import RequestOptions
from .security import sanitize_headers, validate_method, validate_url

logger = logging.getLogger(__name__)


def _resolve_request_options(options: RequestOptions | None) -> RequestOptions:
    return options or RequestOptions()


def _build_header_items(request_options: RequestOptions) -> list[tuple[str, str]]:
    items: list[tuple[str, str]] = []
    range_value = request_options.range_header()
    if range_value is not None:
        items.append(("Range", range_value))
    if request_options.headers:
        for key, value in request_options.headers.items():
            items.append((str(key), str(value)))
    return items


class StrictRequestClient:
    """Send requests with a size cap, a timeout and a per-hop redirect policy.

    Timeout and redirect decisions are passed along with every request, the
    underlying ``httpx.Client`` is never reconfigured between calls.
    """

    default_max_redirects = 10

    def __init__(
        self,
        *,
        max_redirects: int = default_max_redirects,
        headers: Mapping[str, str] | None = None,
        httpx_client: httpx.Client | None = None,
    ) -> None:
        if max_redirects < 0:
            raise ValueError("max_redirects must be non-negative")
        if httpx_client is not None and headers is not None:
            raise ValueError("headers only apply to a client created by StrictRequestClient")
        self.max_redirects = max_redirects
        self._httpx = httpx_client or httpx.Client(
            headers=headers,
            timeout=None,
            follow_redirects=False,
            trust_env=False,
        )

    def __enter__(self) -> "StrictRequestClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._httpx.close()

    def build_request(self, method: str, url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Request:
        request_options = _resolve_request_options(options)
        method = validate_method(method)
        target = validate_url(url, method=method)

        timeout_seconds = request_options.timeout_seconds()
        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if timeout_seconds is not None:
            timeout = httpx.Timeout(timeout_seconds)

        return self._httpx.build_request(
            method,
            target,
            content=request_options.resolve_body(),
            headers=_build_header_items(request_options),
            timeout=timeout,
        )

    def request(self, method: str, url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
        """Send a request and return the final response.

        A redirect the policy rejects is not an error: the 3xx response is
        returned as is and the caller should inspect its status code. A 307
        or 308 is never followed when the body is a stream, since the stream
        cannot be sent twice.

        Raises:
            ConstructionError: the method or URL is malformed.
            RequestTimeoutError: the configured timeout expired.
            TransportError: any other failure reported by httpx.
        """
        request_options = _resolve_request_options(options)
        request = self.build_request(method, url, request_options)
        policy = RedirectPolicy.from_options(request_options)

        logger.debug(
            "Sending %s %s headers=%s",
            request.method,
            request.url,
            sanitize_headers(request.headers.multi_items()),
        )
        try:
            response = self._send_handling_redirects(
                request,
                policy,
                replayable_body=isinstance(request_options.resolve_body(), (bytes, type(None))),
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                "Request timed out",
                timeout=request_options.timeout_seconds(),
                method=request.method,
                url=str(request.url),
                cause=exc,
            ) from exc
        except (httpx.RequestError, httpx.StreamError) as exc:
            raise TransportError(
                str(exc) or type(exc).__name__,
                method=request.method,
                url=str(request.url),
                cause=exc,
            ) from exc

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return response

    def _send_handling_redirects(
        self,
        request: httpx.Request,
        policy: RedirectPolicy,
        *,
        replayable_body: bool,
    ) -> httpx.Response:
        history: list[httpx.Response] = []
        via: list[httpx.Request] = [request]

        response = self._httpx.send(request, follow_redirects=False)
        while response.next_request is not None:
            next_request = response.next_request
            if not policy.should_follow(next_request, via):
                break
            # 307 and 308 resend the body, which a consumed stream cannot do.
            if next_request.method == request.method and not replayable_body:
                logger.debug("Not following redirect to %s with a streamed body", next_request.url)
                break
            if len(history) >= self.max_redirects:
                logger.warning("Stopped after %d redirects for %s", self.max_redirects, request.url)
                raise httpx.TooManyRedirects(
                    f"Stopped after {self.max_redirects} redirects",
                    request=next_request,
                )
            history.append(response)
            via.append(next_request)
            response = self._httpx.send(next_request, follow_redirects=False)
            response.history = list(history)
        return response

    def get(self, url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
        return self.request("GET", url, options)

    def post(self, url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
        return self.request("POST", url, options)

    def put(self, url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
        return self.request("PUT", url, options)

    def delete(self, url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
        return self.request("DELETE", url, options)


def strict_request(method: str, url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
    """Send one request on a short-lived client."""
    with StrictRequestClient() as client:
        return client.request(method, url, options)


def get(url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
    return strict_request("GET", url, options)


def post(url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
    return strict_request("POST", url, options)


def put(url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
    return strict_request("PUT", url, options)


def delete(url: str | httpx.URL, options: RequestOptions | None = None) -> httpx.Response:
    return strict_request("DELETE", url, options)
