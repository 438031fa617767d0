"""
Normalized records for Steam API responses.

Every record is a frozen Pydantic model whose fields all have
defaults, so a sparse upstream payload still yields a full record.
"""

from psy_mantis.steam.contracts.base import SteamRecord
from psy_mantis.steam.contracts.store import AppDetails, Genre, Price, Screenshot
from psy_mantis.steam.contracts.web_api import OwnedGame, PlayerSummary

__all__ = [
    "AppDetails",
    "Genre",
    "OwnedGame",
    "PlayerSummary",
    "Price",
    "Screenshot",
    "SteamRecord",
]
