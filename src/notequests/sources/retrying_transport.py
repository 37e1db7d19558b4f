"""httpx transport wrapper with retry, backoff, and rate-limit handling."""

from __future__ import annotations

import logging
import random
import threading
import time

import httpx

_LOG = logging.getLogger(__name__)

# Status codes considered transient and eligible for automatic retry.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})


class RetryingTransport(httpx.BaseTransport):
    """Wraps an httpx transport with automatic retry on transient failures.

    Retries transport-level errors and 502 / 503 / 504 responses with
    exponential backoff plus jitter. On 429 every request sharing this
    transport pauses until the ``Retry-After`` deadline has passed.
    """

    def __init__(
        self,
        *,
        transport: httpx.BaseTransport | None = None,
        max_retries: int = 3,
    ) -> None:
        self._transport = transport or httpx.HTTPTransport()
        self._max_retries = max_retries

        self._rate_limit_lock = threading.Lock()
        self._rate_limit_pause_until = 0.0

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        for attempt in range(self._max_retries + 1):
            self._wait_for_rate_limit()

            try:
                response = self._transport.handle_request(request)
            except httpx.TransportError:
                if attempt >= self._max_retries:
                    raise
                self._sleep_backoff(attempt)
                continue

            if response.status_code == 429:
                self._apply_rate_limit_pause(self._parse_retry_after(response))
                if attempt < self._max_retries:
                    response.close()
                    continue
                return response

            if response.status_code in _RETRYABLE_STATUS_CODES and attempt < self._max_retries:
                response.close()
                self._sleep_backoff(attempt)
                continue

            return response

        raise httpx.TransportError("Request failed after retries")  # pragma: no cover

    def close(self) -> None:
        self._transport.close()

    # ------------------------------------------------------------------
    # Rate-limit helpers
    # ------------------------------------------------------------------

    def _apply_rate_limit_pause(self, retry_after: float) -> None:
        with self._rate_limit_lock:
            until = time.monotonic() + max(0.0, retry_after)
            if until > self._rate_limit_pause_until:
                self._rate_limit_pause_until = until

    def _wait_for_rate_limit(self) -> None:
        with self._rate_limit_lock:
            remaining = self._rate_limit_pause_until - time.monotonic()
        if remaining > 0:
            _LOG.warning("Rate limited by note server, pausing %.1fs", remaining)
            time.sleep(remaining)

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return 1.0
        try:
            return max(0.0, float(raw))
        except ValueError:
            return 1.0

    @staticmethod
    def _sleep_backoff(attempt: int) -> None:
        seconds = min(4.0, float(2**attempt)) + random.uniform(0.0, 0.25)
        _LOG.warning("Retrying note server request (attempt %d)", attempt + 1)
        time.sleep(seconds)
