# Overview: HTTP client for the back-office API with composable response middleware.

"""
API client

ApiClient owns one httpx.Client. Cross-cutting response handling is
expressed as middleware: callables (request, call_next) -> response,
composed around the underlying transport by MiddlewareTransport. Nothing is
installed globally; each ApiClient gets exactly the middleware it is built
with.

Stock middleware:
- refresh_and_retry(refresh, statuses=(419,)): on a matching status, call
  refresh() once (e.g. re-fetch a CSRF cookie) and replay the request.
- on_session_expired(callback, statuses=(401,)): call callback(response)
  (e.g. route the user to the login screen); the response passes through.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx


logger = logging.getLogger(__name__)

CallNext = Callable[[httpx.Request], httpx.Response]
Middleware = Callable[[httpx.Request, CallNext], httpx.Response]


class ApiError(Exception):
    """Non-2xx response (status=0 when the request never got a response)."""

    def __init__(self, status: int, message: str, payload: Optional[dict] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.payload = payload or {}


class ApiValidationError(ApiError):
    """422 response with a {field: [message, ...]} map."""

    def __init__(self, message: str, errors: dict[str, list[str]], payload: Optional[dict] = None):
        super().__init__(422, message, payload)
        self.errors = errors

    @property
    def first_error(self) -> str:
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return self.message


class MiddlewareTransport(httpx.BaseTransport):
    """Runs middleware (outermost first) around an inner transport."""

    def __init__(self, inner: httpx.BaseTransport, middleware: list[Middleware]):
        self.inner = inner
        self.middleware = list(middleware)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        def dispatch(index: int, req: httpx.Request) -> httpx.Response:
            if index == len(self.middleware):
                return self.inner.handle_request(req)
            return self.middleware[index](req, lambda r: dispatch(index + 1, r))

        return dispatch(0, request)

    def close(self) -> None:
        self.inner.close()


def refresh_and_retry(refresh: Callable[[], Any], statuses: tuple[int, ...] = (419,)) -> Middleware:
    def middleware(request: httpx.Request, call_next: CallNext) -> httpx.Response:
        response = call_next(request)
        if response.status_code not in statuses:
            return response
        logger.info("Got %s for %s %s; refreshing and retrying once", response.status_code, request.method, request.url)
        response.read()
        response.close()
        refresh()
        return call_next(request)

    return middleware


def on_session_expired(callback: Callable[[httpx.Response], Any], statuses: tuple[int, ...] = (401,)) -> Middleware:
    def middleware(request: httpx.Request, call_next: CallNext) -> httpx.Response:
        response = call_next(request)
        if response.status_code in statuses:
            logger.warning("Session expired (%s) on %s %s", response.status_code, request.method, request.url)
            callback(response)
        return response

    return middleware


class ApiClient:
    """
    HTTP client wrapper with JSON envelope handling.

    Args:
        base_url: API origin, e.g. "http://127.0.0.1:5000"
        transport: inner httpx transport (default: real network)
        middleware: response middleware, outermost first
        headers: default headers (e.g. Authorization, X-CSRF-TOKEN)
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        middleware: Optional[list[Middleware]] = None,
        headers: Optional[dict] = None,
        timeout: float = 30.0,
    ):
        inner = transport or httpx.HTTPTransport()
        self.client = httpx.Client(
            base_url=base_url.rstrip("/"),
            transport=MiddlewareTransport(inner, middleware or []),
            headers={"Accept": "application/json", **(headers or {})},
            timeout=timeout,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def request(self, method: str, path: str, **kwargs) -> dict:
        """
        Send a request and return the decoded JSON body of a 2xx response.

        Raises:
            ApiValidationError: 422 with a field error map
            ApiError: any other non-2xx status, or a transport failure (status=0)
        """
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Request %s %s failed: %s", method, path, e)
            raise ApiError(0, "Network error") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if response.is_success:
            return body

        message = body.get("message") or f"Request failed with status {response.status_code}"
        if response.status_code == 422:
            raise ApiValidationError(message, body.get("errors") or {}, body)
        raise ApiError(response.status_code, message, body)

    def get(self, path: str, params: Optional[dict] = None) -> dict:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[dict] = None) -> dict:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Optional[dict] = None) -> dict:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Optional[dict] = None) -> dict:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> dict:
        return self.request("DELETE", path)
