"""
Error taxonomy for the Steam HTTP layer.

Transport failures are classified into a small, fixed set of kinds.
Retryable kinds are flagged on the class; the transport decides
whether to retry, the client never does.
"""

from typing import ClassVar


class SteamError(Exception):
    """Base exception for all psy-mantis Steam failures."""


class ConfigurationError(SteamError, ValueError):
    """Raised when a client or transport is built with invalid input."""


class NormalizationError(SteamError):
    """Raised when an upstream record has a value of an unusable type."""

    def __init__(self, message: str, *, record: str | None = None) -> None:
        super().__init__(message)
        self.record = record


class TransportError(SteamError):
    """
    Base exception for classified request failures.

    Attributes:
        cause: The low-level exception that triggered the classification
        status_code: HTTP status of the failed response, if any
        attempts: Attempt number (1-indexed) on which the failure happened
    """

    default_message: ClassVar[str] = "Transport error"
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
        status_code: int | None = None,
        attempts: int = 1,
    ) -> None:
        super().__init__(message or self.default_message)
        self.cause = cause
        self.status_code = status_code
        self.attempts = attempts
        if cause is not None:
            self.__cause__ = cause


class Unauthorized(TransportError):
    """HTTP 401: the API key was rejected."""

    default_message = "Unauthorized"


class Forbidden(TransportError):
    """HTTP 403."""

    default_message = "Forbidden"


class NotFound(TransportError):
    """HTTP 404: the endpoint itself rejected the request."""

    default_message = "Not Found"


class ServerError(TransportError):
    """HTTP 5xx."""

    default_message = "Server error"
    retryable = True


class Timeout(TransportError):
    """Connect/read timeout or connection failure."""

    default_message = "Timeout"
    retryable = True


class RateLimited(TransportError):
    """
    HTTP 429.

    Attributes:
        retry_after: Seconds the server asked us to wait, if it said so
    """

    default_message = "Rate limited"
    retryable = True

    def __init__(
        self,
        message: str | None = None,
        *,
        retry_after: int | None = None,
        cause: BaseException | None = None,
        status_code: int | None = 429,
        attempts: int = 1,
    ) -> None:
        super().__init__(message, cause=cause, status_code=status_code, attempts=attempts)
        self.retry_after = retry_after


class UnclassifiedTransportError(TransportError):
    """Any failure that matches no known status or connectivity pattern."""

    default_message = "Unclassified transport error"
