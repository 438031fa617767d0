"""
Client for the Steam Web API and the Steam Store API.

Composes one Transport per origin and normalizes the raw JSON
envelopes into the records defined in psy_mantis.steam.contracts.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from psy_mantis.config import Settings, TransportConfig, get_settings
from psy_mantis.logger import get_logger
from psy_mantis.steam.contracts import AppDetails, OwnedGame, PlayerSummary, SteamRecord
from psy_mantis.steam.http.errors import ConfigurationError, NormalizationError
from psy_mantis.steam.http.transport import Sleep, Transport

R = TypeVar("R", bound=SteamRecord)

WEB_API_URL = "https://api.steampowered.com"
STORE_URL = "https://store.steampowered.com"

PATHS = {
    "player_summaries": "/ISteamUser/GetPlayerSummaries/v0002/",
    "owned_games": "/IPlayerService/GetOwnedGames/v0001/",
    "app_details": "/api/appdetails",
}


def _dig(payload: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(payload, Mapping):
            return None
        payload = payload.get(key)
    return payload


def _normalize(model: type[R], raw: Mapping[str, Any]) -> R:
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise NormalizationError(
            f"Could not normalize {model.__name__}: {e}",
            record=model.__name__,
        ) from e


def _normalize_all(model: type[R], items: Any) -> list[R]:
    if not isinstance(items, list):
        return []
    return [_normalize(model, item) for item in items if isinstance(item, Mapping)]


class SteamClient:
    """
    Client for player, library and store lookups.

    Transport errors propagate unchanged: retries happen in the
    transport, never here.

    Example:
        >>> async with SteamClient(api_key) as client:
        ...     players = await client.player_summaries("76561197960435530")
        ...     details = await client.app_details(570, country_code="US")
    """

    def __init__(
        self,
        api_key: str,
        config: TransportConfig | None = None,
        *,
        sleep: Sleep | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: Steam Web API key
            config: Transport configuration shared by both origins
            sleep: Coroutine used to wait between retry attempts
            http_transport: Custom httpx transport, mostly for tests

        Raises:
            ConfigurationError: If api_key is missing or blank
        """
        if not isinstance(api_key, str) or not api_key.strip():
            raise ConfigurationError(
                f"API key (api_key) is required (given: {api_key!r})"
            )

        self._api_key = api_key
        self._web_api = Transport(
            WEB_API_URL, config, sleep=sleep, http_transport=http_transport
        )
        self._store = Transport(STORE_URL, config, sleep=sleep, http_transport=http_transport)
        self._logger = get_logger(self.__class__.__name__, component="client")

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "SteamClient":
        """Build a client from STEAM_* environment settings."""
        if settings is None:
            try:
                settings = get_settings()
            except PydanticValidationError as e:
                raise ConfigurationError(f"Invalid settings: {e}") from e
        kwargs.setdefault("config", settings.transport)
        return cls(settings.require_steam_api_key(), **kwargs)

    async def aclose(self) -> None:
        """Close both transports."""
        await self._web_api.aclose()
        await self._store.aclose()

    async def __aenter__(self) -> "SteamClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def player_summaries(self, *user_ids: str | int) -> list[PlayerSummary]:
        """
        Fetch player summaries for the given Steam IDs.

        Args:
            *user_ids: One or more 64-bit Steam IDs

        Returns:
            list[PlayerSummary]: One record per player the API returned
        """
        self._logger.debug("Fetching player summaries", count=len(user_ids))

        body = await self._web_api.get(
            PATHS["player_summaries"],
            {"key": self._api_key, "steamids": ",".join(str(u) for u in user_ids)},
        )

        return _normalize_all(PlayerSummary, _dig(body, "response", "players"))

    async def owned_games(self, user_id: str | int) -> list[OwnedGame]:
        """
        Fetch the games owned by a user.

        A private profile yields an empty list.
        """
        self._logger.debug("Fetching owned games", steam_id=str(user_id))

        body = await self._web_api.get(
            PATHS["owned_games"],
            {"key": self._api_key, "steamid": str(user_id)},
        )

        return _normalize_all(OwnedGame, _dig(body, "response", "games"))

    async def app_details(
        self,
        app_id: str | int,
        *,
        country_code: str | None = None,
    ) -> AppDetails | None:
        """
        Fetch store details for an app.

        Args:
            app_id: Steam application ID
            country_code: Country used for pricing (store default if None)

        Returns:
            AppDetails | None: None when the app has no store page
        """
        params: dict[str, Any] = {"appids": str(app_id)}
        if country_code is not None:
            params["cc"] = country_code

        self._logger.debug("Fetching app details", app_id=str(app_id))

        body = await self._store.get(PATHS["app_details"], params)
        data = _dig(body, str(app_id), "data")

        if not isinstance(data, Mapping):
            self._logger.info("App details not available", app_id=str(app_id))
            return None

        return _normalize(AppDetails, data)
