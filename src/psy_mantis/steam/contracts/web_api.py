"""
Data contracts for Steam Web API responses.

Endpoints:
    ISteamUser/GetPlayerSummaries/v0002/
    IPlayerService/GetOwnedGames/v0001/
"""

from pydantic import Field, NonNegativeInt

from psy_mantis.steam.contracts.base import SteamRecord


class PlayerSummary(SteamRecord):
    """Public profile data for one Steam account."""

    steam_id: str = Field(default="", validation_alias="steamid")
    display_name: str = Field(default="", validation_alias="personaname")
    avatar_url: str = Field(default="", validation_alias="avatar")
    last_logoff: int = Field(
        default=0, validation_alias="lastlogoff", description="Epoch seconds"
    )
    persona_state: int = Field(
        default=0, validation_alias="personastate", description="0 = offline"
    )
    created_at: int = Field(
        default=0, validation_alias="timecreated", description="Epoch seconds"
    )


class OwnedGame(SteamRecord):
    """A game in a user's library. Playtimes are in minutes."""

    app_id: str = Field(default="", validation_alias="appid")
    playtime_total: NonNegativeInt = Field(default=0, validation_alias="playtime_forever")
    playtime_last_two_weeks: NonNegativeInt = Field(default=0, validation_alias="playtime_2weeks")
    playtime_windows: NonNegativeInt = Field(
        default=0, validation_alias="playtime_windows_forever"
    )
    playtime_mac: NonNegativeInt = Field(default=0, validation_alias="playtime_mac_forever")
    playtime_linux: NonNegativeInt = Field(default=0, validation_alias="playtime_linux_forever")
    playtime_handheld: NonNegativeInt = Field(
        default=0, validation_alias="playtime_deck_forever"
    )
    last_played_at: int = Field(
        default=0, validation_alias="rtime_last_played", description="Epoch seconds"
    )

    @property
    def played_recently(self) -> bool:
        """Check if the game was played in the last two weeks."""
        return self.playtime_last_two_weeks > 0
