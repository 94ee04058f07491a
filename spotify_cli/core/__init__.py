"""
Core module for spotify-cli.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console and file outputs

Usage:
    from spotify_cli.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotifyCliError, ConfigError, InvalidURLError
    )
"""

from spotify_cli.core.config import (
    Config,
    ConfigFile,
    LoggingConfig,
    SpotifyConfig,
    get_config_dir,
    get_config_path,
    load_config,
)
from spotify_cli.core.exceptions import (
    ConfigError,
    InvalidRepeatStateError,
    InvalidShuffleStateError,
    InvalidURLError,
    NoActiveDeviceError,
    NotPlayableError,
    SpotifyCliError,
    SpotifyError,
)
from spotify_cli.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "ConfigFile",
    "SpotifyConfig",
    "LoggingConfig",
    "get_config_dir",
    "get_config_path",
    "load_config",
    # Exceptions
    "SpotifyCliError",
    "ConfigError",
    "SpotifyError",
    "NoActiveDeviceError",
    "NotPlayableError",
    "InvalidRepeatStateError",
    "InvalidShuffleStateError",
    "InvalidURLError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
