"""
Command-line interface for spotify-cli.

This module implements the CLI using Click, with rich-click for the
help output colors.

Commands:
    spotify-cli status                      Print "<title> - <artist> (0:42 / 3:30)"
    spotify-cli status --json               Print the full status as JSON
    spotify-cli status --progress           Print a single field
    spotify-cli repeat [off|context|track]  Set the repeat state, or cycle it
    spotify-cli shuffle [enabled|disabled]  Set the shuffle state, or toggle it
    spotify-cli play-from --url <url>       Play a sharing URL
    spotify-cli play-from --uri <uri>       Play a track or episode URI
    spotify-cli convert <url>               Print the URI of a sharing URL (offline)

Global Options:
    --verbose                               Debug output on the console
    --config <path>                         Use another config.yaml

Configuration:
    Commands that talk to Spotify need client_id and client_secret in
    ~/.config/spotify-cli/config.yaml (or SPOTIFY_CLIENT_ID and
    SPOTIFY_CLIENT_SECRET). The first run opens the browser to authorize
    the application; the token is cached in token.json next to the config.

Exit Codes:
    0 success, 1 configuration error, 2 usage error, 3 Spotify error,
    4 other spotify-cli error (e.g. invalid URL), 130 interrupted.
"""

import functools
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "spotify-cli status": [
        {
            "name": "Output",
            "options": ["--json"],
        },
        {
            "name": "Display",
            "options": [
                "--id", "--url", "--uri", "--title", "--artist",
                "--progress", "--duration", "--is-playing",
                "--repeat-state", "--shuffle-state", "--device", "--playing-type",
            ],
        },
    ],
}

from spotify_cli import __version__
from spotify_cli.core import (
    Config,
    ConfigError,
    SpotifyCliError,
    SpotifyError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spotify_cli.core.exceptions import InvalidRepeatStateError, InvalidShuffleStateError
from spotify_cli.spotify import (
    CurrentlyPlaying,
    RepeatState,
    ShuffleState,
    SpotifyClient,
    parse_playable_url,
    play_from_uri,
    play_from_url,
    share_url_to_uri,
)
from spotify_cli.spotify.repeat_state import REPEAT_STATE_TOKENS
from spotify_cli.spotify.shuffle_state import SHUFFLE_STATE_TOKENS

logger = get_logger(__name__)


# =============================================================================
# Parameter Types
# =============================================================================

class RepeatStateParamType(click.ParamType):
    """Click parameter accepting o/off, c/context, t/track in any case."""

    name = "|".join(REPEAT_STATE_TOKENS)

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> RepeatState:
        if isinstance(value, RepeatState):
            return value
        try:
            return RepeatState.from_token(value)
        except InvalidRepeatStateError as e:
            self.fail(e.message, param, ctx)


class ShuffleStateParamType(click.ParamType):
    """Click parameter accepting e/enabled/on, d/disabled/off in any case."""

    name = "|".join(SHUFFLE_STATE_TOKENS)

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> ShuffleState:
        if isinstance(value, ShuffleState):
            return value
        try:
            return ShuffleState.from_token(value)
        except InvalidShuffleStateError as e:
            self.fail(e.message, param, ctx)


REPEAT_STATE = RepeatStateParamType()
SHUFFLE_STATE = ShuffleStateParamType()


# =============================================================================
# Error Handling
# =============================================================================

def handle_error(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator mapping spotify-cli errors to messages and exit codes.

    The message goes to stderr; the traceback only to the log file
    (or the console with --verbose).
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            click.echo(click.style(f"Configuration error: {e.message}", fg="red"), err=True)
            sys.exit(1)
        except SpotifyError as e:
            click.echo(click.style(f"Spotify error: {e.message}", fg="red"), err=True)
            if e.is_auth_error:
                click.echo("Check client_id, client_secret and redirect_uri in config.yaml", err=True)
            logger.debug(f"Spotify error: {e.message} {e.details}", exc_info=True)
            sys.exit(3)
        except SpotifyCliError as e:
            click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
            logger.debug(f"Error: {e.message} {e.details}", exc_info=True)
            sys.exit(4)
        except KeyboardInterrupt:
            click.echo(click.style("\nInterrupted by user", fg="yellow"), err=True)
            sys.exit(130)
    return wrapper


# =============================================================================
# Commands
# =============================================================================

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug output on the console"
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Path to config file (default: ~/.config/spotify-cli/config.yaml)"
)
@click.version_option(__version__, prog_name="spotify-cli")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path]) -> None:
    """
    spotify-cli: Control Spotify playback from the terminal.

    \b
    EXAMPLES:
        spotify-cli status                 # Song - Artist (1:02 / 3:45)
        spotify-cli repeat                 # off -> context -> track -> off
        spotify-cli shuffle disabled
        spotify-cli play-from --url "https://open.spotify.com/track/..."
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the full status as JSON")
@click.option("--id", "show_id", is_flag=True, help="Print the id")
@click.option("--url", "show_url", is_flag=True, help="Print the sharing URL")
@click.option("--uri", "show_uri", is_flag=True, help="Print the URI")
@click.option("--title", "show_title", is_flag=True, help="Print the title")
@click.option("--artist", "show_artist", is_flag=True, help="Print the artist (or show) name")
@click.option("--progress", "show_progress", is_flag=True, help="Print the progress")
@click.option("--duration", "show_duration", is_flag=True, help="Print the duration")
@click.option("--is-playing", "show_is_playing", is_flag=True, help="Print whether playback is running")
@click.option("--repeat-state", "show_repeat_state", is_flag=True, help="Print the repeat state")
@click.option("--shuffle-state", "show_shuffle_state", is_flag=True, help="Print the shuffle state")
@click.option("--device", "show_device", is_flag=True, help="Print the device name")
@click.option("--playing-type", "show_playing_type", is_flag=True, help="Print the playing type")
@click.pass_context
@handle_error
def status(ctx: click.Context, **flags: bool) -> None:
    """
    Print the current status.

    The API quickly forgets the song if it has not been playing for a while.
    """
    selected = [name for name, value in flags.items() if value]
    if len(selected) > 1:
        raise click.UsageError("Only one display option can be used at a time")

    curr = CurrentlyPlaying.fetch(_connect(ctx))
    snapshot = curr.snapshot

    printers: dict[str, Callable[[], Any]] = {
        "as_json": curr.to_json,
        "show_id": curr.id,
        "show_url": curr.generate_url,
        "show_uri": curr.uri,
        "show_title": lambda: snapshot.title,
        "show_artist": lambda: snapshot.artist,
        "show_progress": lambda: snapshot.progress_str,
        "show_duration": lambda: snapshot.duration_str,
        "show_is_playing": lambda: str(snapshot.is_playing).lower(),
        "show_repeat_state": lambda: snapshot.repeat_state,
        "show_shuffle_state": lambda: snapshot.shuffle_state,
        "show_device": lambda: snapshot.device,
        "show_playing_type": lambda: snapshot.playing_type,
    }

    if selected:
        click.echo(printers[selected[0]]())
    else:
        click.echo(curr.display())


@cli.command()
@click.argument("state", type=REPEAT_STATE, required=False)
@click.pass_context
@handle_error
def repeat(ctx: click.Context, state: Optional[RepeatState]) -> None:
    """
    Set the repeat state, or cycle it when STATE is omitted.

    STATE accepts off, context or track (or o, c, t).
    """
    curr = CurrentlyPlaying.fetch(_connect(ctx))
    new_state = curr.cycle_repeat() if state is None else curr.repeat(state)
    click.echo(f"Repeat: {new_state}")


@cli.command()
@click.argument("state", type=SHUFFLE_STATE, required=False)
@click.pass_context
@handle_error
def shuffle(ctx: click.Context, state: Optional[ShuffleState]) -> None:
    """
    Set the shuffle state, or toggle it when STATE is omitted.

    STATE accepts enabled or disabled (or e, d, on, off).
    """
    curr = CurrentlyPlaying.fetch(_connect(ctx))
    new_state = curr.toggle_shuffle() if state is None else curr.shuffle(state)
    click.echo(f"Shuffle: {new_state}")


@cli.command("play-from")
@click.option("--url", type=str, default=None, metavar="<spotify-url>", help="Play a sharing URL")
@click.option("--uri", type=str, default=None, metavar="<spotify-uri>", help="Play a track or episode URI")
@click.pass_context
@handle_error
def play_from(ctx: click.Context, url: Optional[str], uri: Optional[str]) -> None:
    """Play a track, episode, album, artist, playlist or show."""
    if bool(url) == bool(uri):
        raise click.UsageError("Use exactly one of --url or --uri")

    client = _connect(ctx)
    if url:
        ref = play_from_url(client, url)
        click.echo(f"Playing {ref.uri}")
    else:
        play_from_uri(client, uri)
        click.echo(f"Playing {uri}")


@cli.command()
@click.argument("url")
@click.option(
    "--playable",
    is_flag=True,
    help="Only accept track and episode URLs"
)
@handle_error
def convert(url: str, playable: bool) -> None:
    """
    Print the URI of a sharing URL.

    Works offline; no configuration is needed.
    """
    if playable:
        click.echo(parse_playable_url(url).uri)
    else:
        click.echo(share_url_to_uri(url))


# =============================================================================
# Helpers
# =============================================================================

def _load_configuration(config_path: Optional[Path]) -> Config:
    """
    Load and validate configuration.

    Raises:
        ConfigError: If configuration is invalid or missing.
    """
    return load_config(config_path)


def _connect(ctx: click.Context) -> SpotifyClient:
    """
    Load configuration, set up logging and authorize the Spotify client.

    Logging is shut down when the click context closes.

    Raises:
        ConfigError: If configuration is invalid or missing.
        SpotifyError: If authorization fails.
    """
    options = ctx.find_object(dict) or {}
    config = _load_configuration(options.get("config_path"))

    level = "DEBUG" if options.get("verbose") else config.logging.level
    setup_logging(config.logging.file, level)
    ctx.call_on_close(shutdown_logging)

    logger.debug(f"spotify-cli {__version__} starting: {ctx.command_path}")

    if not SpotifyClient.is_initialized():
        SpotifyClient.init(
            client_id=config.spotify.client_id,
            client_secret=config.spotify.client_secret,
            redirect_uri=config.spotify.redirect_uri,
            cache_path=config.token_path
        )
    return SpotifyClient()


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `spotify-cli` from the command line.
    """
    cli(obj={})


if __name__ == "__main__":
    main()
