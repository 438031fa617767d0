"""
HTTP transport for a single Steam origin.

Wraps an httpx.AsyncClient with fixed headers, per-attempt timeouts,
failure classification and retry with exponential backoff. Nothing
outside this module touches httpx directly.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt

from psy_mantis.config import TransportConfig, get_settings
from psy_mantis.logger import get_logger
from psy_mantis.steam.http.errors import (
    ConfigurationError,
    Forbidden,
    NotFound,
    RateLimited,
    ServerError,
    Timeout,
    TransportError,
    Unauthorized,
    UnclassifiedTransportError,
)

Sleep = Callable[[float], Awaitable[Any]]

HEADERS = {
    "User-Agent": "psy-mantis-engine/1.0 (+https://github.com/gabr-moragarm/psy-mantis-engine)",
    "Accept": "application/json",
}

_TERMINAL_STATUSES: dict[int, type[TransportError]] = {
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
}


def parse_retry_after(value: str | None) -> int | None:
    """Parse a Retry-After header given in whole seconds."""
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        # HTTP-date form is not honored
        return None
    return seconds if seconds >= 0 else None


def classify(error: Exception, *, attempts: int = 1) -> TransportError:
    """
    Map a low-level httpx failure to exactly one transport error kind.

    Args:
        error: The exception raised while sending or checking a request
        attempts: Attempt number on which the failure happened

    Returns:
        TransportError: The classified error, with ``error`` as its cause
    """
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code

        if status in _TERMINAL_STATUSES:
            return _TERMINAL_STATUSES[status](
                cause=error, status_code=status, attempts=attempts
            )

        if status == 429:
            return RateLimited(
                retry_after=parse_retry_after(error.response.headers.get("Retry-After")),
                cause=error,
                attempts=attempts,
            )

        if 500 <= status < 600:
            return ServerError(
                f"Server error: {status}", cause=error, status_code=status, attempts=attempts
            )

        return UnclassifiedTransportError(
            f"Unexpected HTTP status: {status}",
            cause=error,
            status_code=status,
            attempts=attempts,
        )

    if isinstance(error, (httpx.TimeoutException, httpx.NetworkError)):
        return Timeout(cause=error, attempts=attempts)

    return UnclassifiedTransportError(
        f"{error.__class__.__name__}: {error}", cause=error, attempts=attempts
    )


def backoff_delay(
    attempt: int,
    *,
    base_backoff: float,
    jitter: bool,
    retry_after: int | None = None,
) -> float:
    """
    Compute the wait before the attempt following ``attempt``.

    A server supplied ``retry_after`` is used as is. Otherwise the delay
    doubles with each attempt, optionally scaled by a random factor
    in [0.8, 1.2].
    """
    if retry_after is not None:
        return float(retry_after)

    delay = base_backoff * (2 ** (attempt - 1))
    return delay * random.uniform(0.8, 1.2) if jitter else delay


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, TransportError) and error.retryable


class Transport:
    """
    Performs GET requests against one fixed origin.

    Safe to share between concurrent tasks: the only state is the
    connection pool, and each call keeps its attempt count locally.

    Example:
        >>> async with Transport("https://store.steampowered.com") as transport:
        ...     body = await transport.get("/api/appdetails", {"appids": 570})
    """

    def __init__(
        self,
        base_url: str,
        config: TransportConfig | None = None,
        *,
        sleep: Sleep | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            base_url: Origin every request path is resolved against
            config: Timeouts and retry policy (uses settings if None)
            sleep: Coroutine used to wait between attempts
            http_transport: Custom httpx transport, mostly for tests

        Raises:
            ConfigurationError: If base_url is not a non-empty string
                or the STEAM_HTTP_* settings are invalid
        """
        if not isinstance(base_url, str) or not base_url.strip():
            raise ConfigurationError(
                f"Base URL (base_url) must be a non-empty string (given: {base_url!r})"
            )

        self.base_url = base_url.strip()
        if config is None:
            try:
                config = get_settings().transport
            except PydanticValidationError as e:
                raise ConfigurationError(f"Invalid transport settings: {e}") from e

        self.config = config
        self._sleep = sleep or asyncio.sleep
        self._http_transport = http_transport
        self._client: httpx.AsyncClient | None = None
        self._logger = get_logger(
            self.__class__.__name__,
            component="transport",
            base_url=self.base_url,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(
                    self.config.read_timeout,
                    connect=self.config.open_timeout,
                ),
                follow_redirects=True,
                headers=HEADERS,
                transport=self._http_transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """
        GET ``path`` with retries and return the decoded JSON body.

        Args:
            path: Path relative to the base URL
            params: Query parameters

        Returns:
            The decoded JSON body, or None for an empty body

        Raises:
            TransportError: The classified failure, once retries are exhausted
                or immediately for terminal kinds
        """
        retrying = AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(self.config.max_retries + 1),
            wait=self._wait_for,
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry_attempt,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    body = await self._request(
                        path, params, attempts=attempt.retry_state.attempt_number
                    )
        except TransportError as e:
            self._logger.error(
                "Request failed",
                path=path,
                error=e.__class__.__name__,
                status_code=e.status_code,
                attempts=e.attempts,
            )
            raise

        return body

    async def _request(
        self,
        path: str,
        params: Mapping[str, Any] | None,
        *,
        attempts: int,
    ) -> Any:
        """Send a single attempt and decode its body."""
        # Params are not logged: they carry the API key.
        self._logger.debug("Making request", path=path, attempt=attempts)

        try:
            response = await self.client.get(path, params=dict(params) if params else None)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise classify(e, attempts=attempts) from e

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise UnclassifiedTransportError(
                "Response was not valid JSON",
                cause=e,
                status_code=response.status_code,
                attempts=attempts,
            ) from e

    def _wait_for(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        retry_after = error.retry_after if isinstance(error, RateLimited) else None
        return backoff_delay(
            retry_state.attempt_number,
            base_backoff=self.config.base_backoff,
            jitter=self.config.jitter,
            retry_after=retry_after,
        )

    def _log_retry_attempt(self, retry_state: RetryCallState) -> None:
        """Log retry attempts for observability."""
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self._logger.warning(
            "Retrying request",
            attempt=retry_state.attempt_number,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
            error=error.__class__.__name__ if error else None,
        )
