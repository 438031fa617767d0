"""
Data contracts for Steam Store API responses.

The /api/appdetails endpoint returns {app_id: {success: bool, data: {...}}};
these models describe the normalized ``data`` object.
"""

from decimal import Decimal
from typing import Any

from pydantic import Field, field_validator

from psy_mantis.steam.contracts.base import SteamRecord, only_mappings, only_present


class Price(SteamRecord):
    """Price information. Every field is None for free or unpriced apps."""

    currency: str | None = Field(default=None, description="Currency code (e.g., USD, EUR)")
    initial_cents: int | None = Field(default=None, validation_alias="initial")
    final_cents: int | None = Field(default=None, validation_alias="final")
    discount_percent: int | None = None

    @property
    def final_amount(self) -> Decimal | None:
        """Convert final price from cents to currency units."""
        if self.final_cents is None:
            return None
        return Decimal(self.final_cents) / 100


class Genre(SteamRecord):
    """Game genre."""

    id: str = ""
    name: str = Field(default="", validation_alias="description")


class Screenshot(SteamRecord):
    """Game screenshot."""

    id: str = ""
    full_url: str = Field(default="", validation_alias="path_full")


class AppDetails(SteamRecord):
    """Store page data for one app."""

    app_id: str = Field(default="", validation_alias="steam_appid")
    kind: str = Field(default="", validation_alias="type", description="game, dlc, demo, ...")
    name: str = ""
    thumbnail_url: str = Field(default="", validation_alias="capsule_image")
    publishers: tuple[str, ...] = ()
    developers: tuple[str, ...] = ()
    price: Price = Field(default_factory=Price, validation_alias="price_overview")
    genres: tuple[Genre, ...] = ()
    screenshots: tuple[Screenshot, ...] = ()

    @field_validator("genres", "screenshots", mode="before")
    @classmethod
    def skip_malformed_entries(cls, v: Any) -> Any:
        return only_mappings(v)

    @field_validator("publishers", "developers", mode="before")
    @classmethod
    def skip_missing_names(cls, v: Any) -> Any:
        return only_present(v)

    @property
    def genre_names(self) -> list[str]:
        """Extract genre names as simple list."""
        return [g.name for g in self.genres]
