"""Remote client for the Graph-style REST API.

Owns everything the commands delegate:
- execute-with-retry (429/503/504 and transport errors, honoring Retry-After)
- collection paging via `@odata.nextLink`
- mapping service errors to `RemoteServiceError`

Commands never retry, page or classify errors themselves.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Iterator

import httpx

from core.config import AppSettings
from core.domain.errors import RemoteServiceError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({429, 503, 504})


def _safe_retry_after_seconds(response: httpx.Response | None) -> float | None:
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def _error_from_response(response: httpx.Response) -> RemoteServiceError:
    code: str | None = None
    message = response.reason_phrase or "request failed"
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        err = payload["error"]
        if isinstance(err.get("code"), str):
            code = err["code"]
        if isinstance(err.get("message"), str) and err["message"]:
            message = err["message"]
    return RemoteServiceError(
        message,
        status_code=response.status_code,
        code=code,
        url=str(response.request.url) if response.request else None,
    )


class GraphClient:
    """Thin synchronous client over an authenticated `httpx.Client`."""

    def __init__(
        self,
        http: httpx.Client,
        settings: AppSettings | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._http = http
        self._settings = settings or AppSettings()
        self._sleep = sleep

    def _backoff(self, attempt: int, response: httpx.Response | None) -> float:
        retry_after = _safe_retry_after_seconds(response)
        if retry_after is not None:
            return retry_after
        base = self._settings.retry_backoff_seconds * (2**attempt)
        return base + random.uniform(0.0, 0.35) * self._settings.retry_backoff_seconds

    def execute(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request, retrying transient failures.

        Returns the final response, successful or not. Transport errors that
        outlive the retry budget become `RemoteServiceError`.
        """

        max_retries = self._settings.max_retries
        for attempt in range(max_retries + 1):
            logger.debug("%s %s params=%s (attempt %d)", method, url, params, attempt + 1)
            try:
                response = self._http.request(method, url, params=params, headers=headers)
            except httpx.TransportError as exc:
                if attempt >= max_retries:
                    raise RemoteServiceError(f"{type(exc).__name__}: {exc}", url=url) from exc
                delay = self._backoff(attempt, None)
                logger.warning("Transport error on %s (%s); retrying in %.2fs", url, exc, delay)
                self._sleep(delay)
                continue

            if response.status_code in RETRYABLE_STATUS and attempt < max_retries:
                delay = self._backoff(attempt, response)
                logger.warning(
                    "HTTP %d on %s; retrying in %.2fs (%d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    max_retries,
                )
                self._sleep(delay)
                continue
            return response

        raise AssertionError("unreachable")  # pragma: no cover

    def get_json(self, url: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
        response = self.execute("GET", url, params=params)
        if response.is_error:
            raise _error_from_response(response)
        return response.json()

    def get_json_or_none(self, url: str, *, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Like `get_json` but a 404 yields None."""

        response = self.execute("GET", url, params=params)
        if response.status_code == 404:
            logger.debug("404 on %s", url)
            return None
        if response.is_error:
            raise _error_from_response(response)
        return response.json()

    def iter_collection(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Iterator[dict[str, Any]]:
        """Yield every item of a collection, following `@odata.nextLink`.

        Items are yielded in the order the service returns them.
        """

        next_url: str | None = url
        next_params = params
        while next_url:
            response = self.execute("GET", next_url, params=next_params, headers=headers)
            if response.is_error:
                raise _error_from_response(response)
            payload = response.json()
            for item in payload.get("value") or []:
                if isinstance(item, dict):
                    yield item
            next_url = payload.get("@odata.nextLink")
            # nextLink already carries the query string.
            next_params = None
