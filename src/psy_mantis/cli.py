"""
Command-line interface for Psycho Mantis Engine.

Provides commands to check configuration and run Steam lookups manually.
"""

import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from psy_mantis.config import get_settings
from psy_mantis.logger import get_logger, setup_logging


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(mode="json"), indent=2))


async def cmd_player_summaries(steam_ids_str: str) -> None:
    """Look up player summaries for comma-separated Steam IDs."""
    from psy_mantis.steam.http import SteamClient

    steam_ids = [x.strip() for x in steam_ids_str.split(",") if x.strip()]
    logger = get_logger(__name__, component="cli")
    logger.info("Looking up players", count=len(steam_ids))

    async with SteamClient.from_settings() as client:
        players = await client.player_summaries(*steam_ids)

    print_json(
        CLIOutput(
            success=True,
            command="player-summaries",
            data=[p.model_dump() for p in players],
        )
    )


async def cmd_owned_games(steam_id: str) -> None:
    """Look up the games owned by a Steam user."""
    from psy_mantis.steam.http import SteamClient

    logger = get_logger(__name__, component="cli")
    logger.info("Looking up owned games", steam_id=steam_id)

    async with SteamClient.from_settings() as client:
        games = await client.owned_games(steam_id)

    print_json(
        CLIOutput(
            success=True,
            command="owned-games",
            data=[g.model_dump() for g in games],
        )
    )


async def cmd_app_details(app_id: str, country: str | None = None) -> None:
    """Look up store details for an app."""
    from psy_mantis.steam.http import SteamClient

    logger = get_logger(__name__, component="cli")
    logger.info("Looking up app details", app_id=app_id, country=country)

    async with SteamClient.from_settings() as client:
        details = await client.app_details(app_id, country_code=country)

    print_json(
        CLIOutput(
            success=details is not None,
            command="app-details",
            data=details.model_dump() if details else None,
            error=None if details else f"No store page for app_id={app_id}",
        )
    )


async def cmd_test_config() -> None:
    """Test configuration loading."""
    settings = get_settings()

    output = CLIOutput(
        success=True,
        command="test-config",
        data={
            "environment": settings.environment,
            "log_level": settings.logging.level,
            "transport": settings.transport.model_dump(),
            "api_key_configured": settings.steam.api_key is not None,
        },
    )
    print_json(output)


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
Psycho Mantis Engine CLI
========================

Usage: psy-mantis <command> [arguments]

Commands:
  test-config                    Test configuration loading
  player-summaries <steam_ids>   Player profiles (comma-separated IDs)
  owned-games <steam_id>         Games owned by a user
  app-details <app_id>           Store details for an app

Options:
  --cc <country>                 Country code for app-details pricing

Examples:
  psy-mantis app-details 570 --cc US
"""
    print(usage)


def _option(name: str) -> str | None:
    if name in sys.argv:
        idx = sys.argv.index(name)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return None


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    # Loggers are fetched after configuration so they pick up LOG_* settings.
    setup_logging()
    logger = get_logger(__name__, component="cli")
    command = sys.argv[1]

    try:
        if command == "test-config":
            asyncio.run(cmd_test_config())

        elif command == "player-summaries":
            if len(sys.argv) < 3:
                print("Error: steam_ids required (comma-separated)")
                sys.exit(1)
            asyncio.run(cmd_player_summaries(sys.argv[2]))

        elif command == "owned-games":
            if len(sys.argv) < 3:
                print("Error: steam_id required")
                sys.exit(1)
            asyncio.run(cmd_owned_games(sys.argv[2]))

        elif command == "app-details":
            if len(sys.argv) < 3:
                print("Error: app_id required")
                sys.exit(1)
            asyncio.run(cmd_app_details(sys.argv[2], _option("--cc")))

        elif command in ("help", "--help", "-h"):
            print_usage()

        else:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error", error=str(e))
        output = CLIOutput(
            success=False,
            command=command,
            error=str(e),
        )
        print_json(output)
        sys.exit(1)


if __name__ == "__main__":
    main()
