"""Horizons HTTP client.

Issues observer-table ephemeris requests against the JPL Horizons API
(or a pass-through proxy of it) and returns the decoded JSON body.
Failures are classified by :class:`FailureKind` so that batch callers can
log them and move on to the next designator.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Any

import httpx

from horizonsjax.constants import GEOCENTER, HORIZONS_API_URL
from horizonsjax.horizons._query import QueryWindow
from horizonsjax.horizons._rate_limiter import RateLimitConfig, RateLimiter
from horizonsjax.horizons._types import FailureKind

logger = logging.getLogger(__name__)

_ENV_VAR = "HORIZONSJAX_BASE_URL"
_DEFAULT_TIMEOUT = 60.0


def _validate_base_url(base_url: str) -> str:
    """Return *base_url* if it is an absolute http(s) URL.

    Raises:
        ValueError: If the URL is malformed or not absolute http(s).
    """
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as err:
        raise ValueError(f"Invalid Horizons base URL {base_url!r}: {err}") from err
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(
            f"Horizons base URL must be an absolute http(s) URL, got {base_url!r}"
        )
    return base_url


class HorizonsRequestError(RuntimeError):
    """A Horizons request that did not produce a usable ephemeris body.

    Args:
        kind: Failure classification.
        designator: Designator of the failed request.
        message: Human-readable description.
    """

    def __init__(self, kind: FailureKind, designator: str, message: str) -> None:
        super().__init__(f"[{kind}] {designator}: {message}")
        self.kind = kind
        self.designator = designator


class HorizonsClient:
    """Horizons API client.

    Every request carries the fixed observer parameters (observer table,
    geocentric center, astrometric RA/Dec only) plus the designator and
    time window of a :class:`QueryWindow`. There is no retry and no
    response caching: one call, one outbound request.

    Args:
        base_url: Endpoint URL. Defaults to ``$HORIZONSJAX_BASE_URL`` if set,
            otherwise the public Horizons API. Point this at a local proxy
            to reuse its forwarding.
        center: Horizons observer center code. Default: ``"500@399"``.
        timeout: Per-request timeout in seconds.
        rate_limit: Rate limit configuration shared by all requests made
            through this client.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.

    Raises:
        ValueError: If the endpoint is not an absolute http(s) URL.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        center: str = GEOCENTER,
        timeout: float = _DEFAULT_TIMEOUT,
        rate_limit: RateLimitConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = _validate_base_url(
            base_url or os.environ.get(_ENV_VAR) or HORIZONS_API_URL
        )
        self._center = center
        self._client = httpx.Client(
            timeout=timeout, follow_redirects=True, transport=transport
        )
        config = rate_limit if rate_limit is not None else RateLimitConfig()
        self._rate_limiter = RateLimiter(config)

    @property
    def base_url(self) -> str:
        """The endpoint requests are sent to."""
        return self._base_url

    @property
    def center(self) -> str:
        """The observer center code sent with every request."""
        return self._center

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> HorizonsClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ========================================
    # Queries
    # ========================================

    def fetch_ephemeris(self, window: QueryWindow) -> dict[str, Any] | None:
        """Fetch the ephemeris for *window*, returning ``None`` on failure.

        Network errors, non-success statuses and undecodable bodies are
        logged and reported as ``None`` so that the caller can treat the
        designator as having no trajectory and continue.

        Args:
            window: Designator and time span to request.

        Returns:
            The decoded response body, or ``None`` if the request failed.
        """
        try:
            return self.query_raw(window)
        except HorizonsRequestError as err:
            logger.error(
                "Failed to fetch ephemeris for %s (%s): %s",
                err.designator,
                err.kind,
                err,
            )
            return None

    def query_raw(self, window: QueryWindow) -> dict[str, Any]:
        """Fetch the ephemeris for *window*, raising on failure.

        Args:
            window: Designator and time span to request.

        Returns:
            The decoded response body. It is guaranteed to hold a string
            ``result`` field.

        Raises:
            HorizonsRequestError: If the request fails for any reason.
        """
        params = window.to_params(center=self._center)
        response = self._execute_get(window.designator, params)
        return self._decode_body(window.designator, response)

    # ========================================
    # Internal helpers
    # ========================================

    def _wait_for_rate_limit(self) -> None:
        """Wait for rate limit clearance before making a request."""
        wait = self._rate_limiter.acquire()
        if wait > 0:
            logger.debug("Rate limit reached; sleeping %.2f s", wait)
            time.sleep(wait)

    def _execute_get(self, designator: str, params: dict[str, str]) -> httpx.Response:
        """Execute an HTTP GET request and return the successful response."""
        self._wait_for_rate_limit()
        logger.info("Requesting Horizons ephemeris for %s", designator)
        try:
            response = self._client.get(self._base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as err:
            raise HorizonsRequestError(
                FailureKind.UPSTREAM_STATUS,
                designator,
                f"HTTP status {err.response.status_code}",
            ) from err
        except (httpx.HTTPError, httpx.InvalidURL) as err:
            raise HorizonsRequestError(
                FailureKind.NETWORK, designator, str(err) or type(err).__name__
            ) from err
        return response

    def _decode_body(self, designator: str, response: httpx.Response) -> dict[str, Any]:
        """Decode a response body and check that it carries a result table."""
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as err:
            raise HorizonsRequestError(
                FailureKind.DECODE, designator, f"body is not valid JSON: {err}"
            ) from err

        if not isinstance(body, dict) or not isinstance(body.get("result"), str):
            detail = body.get("error") if isinstance(body, dict) else None
            message = "body has no 'result' text field"
            if detail:
                message = f"{message} (service error: {detail})"
            raise HorizonsRequestError(FailureKind.DECODE, designator, message)
        return body
