"""
spotify-cli: Control Spotify playback from the terminal.

This package wraps the Spotify Web API for the few operations that are
worth a shell command: showing what is playing, cycling the repeat mode,
toggling shuffle and playing a sharing URL.

Modules:
    core/       - Configuration, logging, exceptions
    spotify/    - API client, repeat/shuffle states, URL conversion,
                  current playback
    utils/      - Duration formatting
    cli.py      - Command-line interface

Usage:
    Command Line:
        spotify-cli status
        spotify-cli repeat
        spotify-cli shuffle disabled
        spotify-cli play-from --url "https://open.spotify.com/album/..."
        spotify-cli convert "https://open.spotify.com/track/..."

    Python API:
        from spotify_cli.core import load_config, setup_logging
        from spotify_cli.spotify import SpotifyClient, CurrentlyPlaying

        config = load_config()
        setup_logging(config.logging.file, config.logging.level)

        SpotifyClient.init(
            config.spotify.client_id,
            config.spotify.client_secret,
            config.spotify.redirect_uri,
            config.token_path
        )
        CurrentlyPlaying.fetch(SpotifyClient()).cycle_repeat()

Dependencies:
    - spotipy: Spotify API client and OAuth
    - click: CLI framework
    - rich-click: CLI colors
    - pyyaml: Configuration file parsing
    - python-dotenv: .env credentials
    - colorama, tqdm: Console logging
"""

__version__ = "0.1.0"
__author__ = "spotify-cli"
__license__ = "MIT"

# Convenience imports for common usage
from spotify_cli.core import (
    Config,
    ConfigError,
    InvalidURLError,
    NoActiveDeviceError,
    SpotifyCliError,
    SpotifyError,
    get_logger,
    load_config,
    setup_logging,
)
from spotify_cli.spotify import (
    CurrentlyPlaying,
    RepeatState,
    ShuffleState,
    SpotifyClient,
    share_url_to_uri,
)
from spotify_cli.utils import format_duration

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotifyCliError",
    "ConfigError",
    "SpotifyError",
    "NoActiveDeviceError",
    "InvalidURLError",
    # Spotify
    "SpotifyClient",
    "CurrentlyPlaying",
    "RepeatState",
    "ShuffleState",
    "share_url_to_uri",
    # Utils
    "format_duration",
]
