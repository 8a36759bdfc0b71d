import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from rl_session.cli._logging import configure_logging
from rl_session.cli._output import print_error, print_watch_location
from rl_session.config import SessionSettings, create_config, load_session_settings
from rl_session.domain.errors import ConfigurationError, WatchSourceError
from rl_session.domain.result import Err
from rl_session.engine import run
from rl_session.publish.webhook import DiscordWebhookPublisher

logger = logging.getLogger(__name__)

SESSION_TITLE = "Starting new session"
SESSION_DESCRIPTION = (
    "The bot will try to single out the people that plays multiple times in the session, on either team.\n"
    "Please make sure to install Bakkesmod and make _Auto replay uploader_ do export to the filepath "
    "specified by you or the program.\n"
    "Stats are in the form: accumulated (last game)\n"
)

app = typer.Typer(help="Track scores while playing Rocket League and publish the running tally to Discord.")


@app.callback()
def main_callback() -> None:
    """Rocket League session tracker."""


_LocationOpt = Annotated[Path | None, typer.Option("--location", "-l", help="Location to look for replays.")]
_WebhookOpt = Annotated[
    str | None, typer.Option("--webhook", "-w", help="The webhook API link from Discord channel integrations.")
]
_NoDiscordOpt = Annotated[
    bool, typer.Option("--no-discord", "-n", help="Run without discord and print messages to stdout.")
]
_ConfigOpt = Annotated[Path, typer.Option("--config", help="YAML configuration file")]
_VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")]


@app.command(name="run")
def run_cmd(
    location: _LocationOpt = None,
    webhook: _WebhookOpt = None,
    no_discord: _NoDiscordOpt = False,
    config_file: _ConfigOpt = Path("rl_session.yaml"),
    verbose: _VerboseOpt = False,
) -> None:
    """Watch the replay folder and publish the session tally after every game."""
    configure_logging(verbose=verbose)

    try:
        settings = load_session_settings(create_config(str(config_file), location=location, webhook_url=webhook))
        _check_publisher(settings, no_discord=no_discord)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_watch_location(str(settings.location))
    try:
        asyncio.run(_run_session(settings, no_discord=no_discord))
    except WatchSourceError as e:
        print_error(f"{e}. Please supply a path to the replay folder")
        raise typer.Exit(code=1) from e
    except KeyboardInterrupt:
        logger.info("Session stopped by user")


def _check_publisher(settings: SessionSettings, *, no_discord: bool) -> None:
    if settings.webhook_url is None and not no_discord:
        raise ConfigurationError("You must either provide a webhook with --webhook or run with --no-discord")


async def _run_session(settings: SessionSettings, *, no_discord: bool) -> None:
    if not settings.location.is_dir():
        raise WatchSourceError(f"Location was not valid: {settings.location}")
    if no_discord or settings.webhook_url is None:
        await run(settings.location, extension=settings.extension)
        return

    async with DiscordWebhookPublisher(
        settings.webhook_url, username=settings.username, timeout=settings.timeout
    ) as publisher:
        announced = await publisher.announce(SESSION_TITLE, SESSION_DESCRIPTION)
        if isinstance(announced, Err):
            logger.warning("Could not announce session: %s", announced.error.message)
        await run(settings.location, publisher, extension=settings.extension)
