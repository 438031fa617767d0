"""
HTTP layer for Steam APIs.

The transport classifies failures and retries transient ones;
the client composes one transport per origin and normalizes
responses.
"""

from psy_mantis.steam.http.client import SteamClient
from psy_mantis.steam.http.errors import (
    ConfigurationError,
    Forbidden,
    NormalizationError,
    NotFound,
    RateLimited,
    ServerError,
    SteamError,
    Timeout,
    TransportError,
    Unauthorized,
    UnclassifiedTransportError,
)
from psy_mantis.steam.http.transport import Transport, backoff_delay, classify

__all__ = [
    # Errors
    "ConfigurationError",
    "Forbidden",
    "NormalizationError",
    "NotFound",
    "RateLimited",
    "ServerError",
    "SteamError",
    "Timeout",
    "TransportError",
    "Unauthorized",
    "UnclassifiedTransportError",
    # Components
    "SteamClient",
    "Transport",
    "backoff_delay",
    "classify",
]
