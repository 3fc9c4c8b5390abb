"""Solana RPC client construction for account fetching.

Public RPC endpoints throttle getProgramAccounts heavily, so the client is
built on an httpx transport that backs off and retries throttled or
temporarily unavailable responses. A server-sent Retry-After (in seconds)
takes precedence over the linear backoff, up to ``max_delay``.
"""

import logging
import time
from typing import Callable

import httpx
from solana.rpc.api import Client as SolanaHTTPClient  # type: ignore[import-untyped]

LOGGER = logging.getLogger("blockbuster.rpc")

RETRY_STATUSES = frozenset({429, 502, 503, 504})

_DEFAULT_MAX_RETRIES = 5


def retry_after_seconds(response: httpx.Response) -> float | None:
    """Parse a delta-seconds Retry-After header; HTTP dates are ignored."""
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        delay = float(value.strip())
    except ValueError:
        return None
    return delay if delay >= 0 else None


class BackoffTransport(httpx.BaseTransport):
    """Retries requests that the RPC node rejected as throttled or unavailable."""

    def __init__(
        self,
        wrapped: httpx.BaseTransport | None = None,
        max_retries: int = _DEFAULT_MAX_RETRIES,
        backoff: float = 2.0,
        max_delay: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._wrapped = wrapped or httpx.HTTPTransport()
        self._max_retries = max_retries
        self._backoff = backoff
        self._max_delay = max_delay
        self._sleep = sleep

    def _delay(self, response: httpx.Response, attempt: int) -> float:
        hinted = retry_after_seconds(response)
        delay = hinted if hinted is not None else (attempt + 1) * self._backoff
        return min(delay, self._max_delay)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            response = self._wrapped.handle_request(request)
            if response.status_code not in RETRY_STATUSES or attempt >= self._max_retries:
                return response
            delay = self._delay(response, attempt)
            response.close()
            LOGGER.debug(
                "%s from %s, retry %d in %.1fs",
                response.status_code,
                request.url.host,
                attempt + 1,
                delay,
            )
            self._sleep(delay)
            attempt += 1

    def close(self) -> None:
        self._wrapped.close()


def new_rpc_client(
    url: str,
    timeout: float = 30,
    max_retries: int = _DEFAULT_MAX_RETRIES,
) -> SolanaHTTPClient:
    """Build a Solana RPC client whose HTTP session retries throttled calls."""
    client = SolanaHTTPClient(url, timeout=timeout)
    client._provider.session = httpx.Client(
        timeout=timeout,
        transport=BackoffTransport(max_retries=max_retries),
    )
    return client
