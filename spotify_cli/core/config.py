"""
Configuration management for spotify-cli.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Spotify API credentials (client_id, client_secret)
    - OAuth redirect URI registered in the Spotify Developer Dashboard
    - Logging level and log file location

Configuration File Location:
    $XDG_CONFIG_HOME/spotify-cli/config.yaml, falling back to
    ~/.config/spotify-cli/config.yaml. The OAuth token cache
    (token.json) lives in the same directory.

Environment Overrides:
    SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET and SPOTIFY_REDIRECT_URI
    take precedence over the file. A .env file in the current directory
    is loaded first.

Example config.yaml:
    spotify:
      client_id: "your_client_id_here"
      client_secret: "your_client_secret_here"
      redirect_uri: "http://localhost:8000/callback"

    logging:
      level: "WARNING"
      file: null  # Defaults to <config dir>/logs/spotify-cli.log
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from spotify_cli.core.exceptions import ConfigError


APP_NAME = "spotify-cli"
CONFIG_FILENAME = "config.yaml"
TOKEN_FILENAME = "token.json"
LOG_FILENAME = "spotify-cli.log"

DEFAULT_REDIRECT_URI = "http://localhost:8000/callback"
DEFAULT_LOG_LEVEL = "WARNING"

ENV_PREFIX = "SPOTIFY_"


class ConfigFile(Enum):
    """Files stored in the config directory."""
    CONFIG = CONFIG_FILENAME
    TOKEN = TOKEN_FILENAME


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify API credentials configuration.

    These credentials are obtained from the Spotify Developer Dashboard:
    https://developer.spotify.com/dashboard

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
        redirect_uri: The redirect URI registered for the application.
                      Used by the OAuth authorization code flow.
    """
    client_id: str
    client_secret: str
    redirect_uri: str


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging configuration.

    Attributes:
        level: Console log level name (DEBUG, INFO, WARNING, ERROR).
        file: Path of the rotating log file.
    """
    level: str
    file: Path


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable.

    Attributes:
        spotify: Spotify API credentials.
        logging: Logging settings.
        token_path: Path of the OAuth token cache file.
    """
    spotify: SpotifyConfig
    logging: LoggingConfig
    token_path: Path


def get_config_dir() -> Path:
    """
    Return the spotify-cli config directory, creating it if needed.

    Uses $XDG_CONFIG_HOME when set, else ~/.config.
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        config_home = Path(base).expanduser()
    else:
        config_home = Path.home() / ".config"

    config_dir = config_home / APP_NAME
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(
            f"Can't open or create config directory: {config_dir}",
            details={"directory": str(config_dir), "original_error": str(e)}
        ) from e
    return config_dir


def get_config_path(config_file: ConfigFile) -> Path:
    """
    Get the path of a file stored in the config directory.

    The config file is created empty when missing so that users can
    find where to put their credentials. The token file is left to
    spotipy, which writes it after the first authorization.

    Args:
        config_file: Which file to locate.

    Returns:
        Absolute path to the file.

    Raises:
        ConfigError: If the directory or file cannot be created.
    """
    path = get_config_dir() / config_file.value

    if config_file is ConfigFile.CONFIG and not path.exists():
        try:
            path.touch()
        except OSError as e:
            raise ConfigError(
                f"Can't open or create config file: {path}",
                details={"file_path": str(path), "original_error": str(e)}
            ) from e

    return path


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml and the environment.

    Args:
        config_path: Optional explicit path to config file.
                     If None, uses config.yaml in the config directory.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If the file cannot be read, has invalid YAML syntax,
                     or the credentials are missing from both the file
                     and the environment.

    Behavior:
        1. Load .env into the process environment (existing vars win)
        2. Read and parse YAML content (an empty file is an empty dict)
        3. Overlay SPOTIFY_* environment variables
        4. Validate credentials and apply defaults
        5. Create and return frozen Config object
    """
    load_dotenv(find_dotenv(usecwd=True))

    if config_path is None:
        config_path = get_config_path(ConfigFile.CONFIG)

    raw_config = _read_yaml(config_path)

    spotify_section = _get_section(raw_config, "spotify", config_path)
    logging_section = _get_section(raw_config, "logging", config_path)

    spotify_config = _parse_spotify_config(_apply_env_overrides(spotify_section), config_path)
    logging_config = _parse_logging_config(logging_section)

    return Config(
        spotify=spotify_config,
        logging=logging_config,
        token_path=get_config_dir() / TOKEN_FILENAME
    )


def _read_yaml(config_path: Path) -> dict[str, Any]:
    """Read config_path and return its top-level mapping."""
    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # Freshly created config files are empty
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return raw_config


def _get_section(raw_config: dict[str, Any], name: str, config_path: Path) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name, "file_path": str(config_path)}
        )
    return section


def _apply_env_overrides(spotify_section: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the spotify section with SPOTIFY_* variables applied."""
    merged = dict(spotify_section)
    for key in ("client_id", "client_secret", "redirect_uri"):
        value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if value:
            merged[key] = value
    return merged


def _parse_spotify_config(spotify_section: dict[str, Any], config_path: Path) -> SpotifyConfig:
    """
    Parse and validate the Spotify configuration section.

    Raises:
        ConfigError: If client_id or client_secret is missing or empty,
                     or redirect_uri is not a string.
    """
    client_id = spotify_section.get("client_id", "")
    client_secret = spotify_section.get("client_secret", "")
    redirect_uri = spotify_section.get("redirect_uri", DEFAULT_REDIRECT_URI)

    for field_name, value in (("client_id", client_id), ("client_secret", client_secret)):
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(
                f"'spotify.{field_name}' must be a non-empty string "
                f"(set it in {config_path} or {ENV_PREFIX}{field_name.upper()})",
                details={"field": f"spotify.{field_name}", "file_path": str(config_path)}
            )

    if not isinstance(redirect_uri, str) or not redirect_uri.strip():
        raise ConfigError(
            "'spotify.redirect_uri' must be a non-empty string",
            details={"field": "spotify.redirect_uri", "file_path": str(config_path)}
        )

    return SpotifyConfig(
        client_id=client_id.strip(),
        client_secret=client_secret.strip(),
        redirect_uri=redirect_uri.strip()
    )


def _parse_logging_config(logging_section: dict[str, Any]) -> LoggingConfig:
    """
    Parse the logging section, applying defaults.

    Raises:
        ConfigError: If level is not a known logging level name,
                     or file is not a string.
    """
    level = logging_section.get("level", DEFAULT_LOG_LEVEL)
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigError(
            f"'logging.level' must be a logging level name, got {level!r}",
            details={"field": "logging.level", "value": level}
        )

    raw_file = logging_section.get("file")
    if raw_file is None:
        log_file = get_config_dir() / "logs" / LOG_FILENAME
    elif isinstance(raw_file, str) and raw_file.strip():
        log_file = Path(raw_file.strip()).expanduser().resolve()
    else:
        raise ConfigError(
            "'logging.file' must be a string path or null",
            details={"field": "logging.file"}
        )

    return LoggingConfig(level=level.upper(), file=log_file)
