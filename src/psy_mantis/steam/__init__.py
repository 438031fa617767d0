"""
Steam integration: HTTP layer and normalized records.
"""

from psy_mantis.steam.contracts import (
    AppDetails,
    Genre,
    OwnedGame,
    PlayerSummary,
    Price,
    Screenshot,
)
from psy_mantis.steam.http import SteamClient

__all__ = [
    "AppDetails",
    "Genre",
    "OwnedGame",
    "PlayerSummary",
    "Price",
    "Screenshot",
    "SteamClient",
]
