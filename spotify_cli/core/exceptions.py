"""
Exception classes for spotify-cli.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message and an optional details
dictionary, so the CLI can print the message and log the context.

Exception Hierarchy:
    SpotifyCliError (base)
        ConfigError - Configuration file issues
        SpotifyError - Spotify Web API issues
            NoActiveDeviceError - Nothing is currently playing
            NotPlayableError - Current item has no Spotify id (local file)
        InvalidRepeatStateError - Unrecognized repeat state token or API value
        InvalidShuffleStateError - Unrecognized shuffle state token
        InvalidURLError - Sharing URL failed validation
"""


class SpotifyCliError(Exception):
    """
    Base exception for all spotify-cli errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all spotify-cli errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., URL, token).

    Example:
        try:
            # some operation
        except SpotifyCliError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': Sharing URL that failed to parse
                     - 'token': Command-line token that failed to parse
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotifyCliError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config.yaml has invalid YAML syntax
        - client_id or client_secret missing from both file and environment
        - A section has the wrong type (e.g., 'spotify' is a list)

    Example:
        raise ConfigError(
            "'spotify.client_id' must be a non-empty string",
            details={'file_path': '/home/me/.config/spotify-cli/config.yaml'}
        )
    """
    pass


class SpotifyError(SpotifyCliError):
    """
    Raised when there's an issue with the Spotify Web API.

    Common causes:
        - Invalid or expired credentials (CRITICAL)
        - Premium account required for playback control
        - Network connectivity issues

    Attributes:
        is_auth_error: True if this is an authentication error.

    Example:
        raise SpotifyError(
            "Unable to control playback: set repeat state",
            details={'http_status': 403}
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_auth_error: bool = False
    ) -> None:
        """
        Initialize Spotify error with the authentication flag.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            is_auth_error: Set to True if this is an authentication failure.
        """
        super().__init__(message, details)
        self.is_auth_error = is_auth_error


class NoActiveDeviceError(SpotifyError):
    """
    Raised when the Web API reports no current playback.

    Within a few seconds of pausing, the active device becomes inactive
    and unknown to the API, so this is the usual outcome of running a
    command while nothing is playing.
    """

    def __init__(self, message: str = "No active device found", details: dict | None = None) -> None:
        super().__init__(message, details)


class NotPlayableError(SpotifyError):
    """Raised when the current item has no Spotify id (e.g. a local file)."""

    def __init__(
        self,
        message: str = "Current playing media must be a Spotify track or episode",
        details: dict | None = None
    ) -> None:
        super().__init__(message, details)


class InvalidRepeatStateError(SpotifyCliError):
    """
    Raised when a repeat state token or API value is not recognized.

    Example:
        raise InvalidRepeatStateError(
            "Invalid repeat state: 'xyz'",
            details={'token': 'xyz'}
        )
    """
    pass


class InvalidShuffleStateError(SpotifyCliError):
    """Raised when a shuffle state token is not recognized."""
    pass


class InvalidURLError(SpotifyCliError):
    """
    Raised when a sharing URL fails structural or domain validation,
    or names an unsupported or disallowed resource kind.

    All URL failures share this single error kind; the offending URL
    is always available in details['url'].

    Example:
        raise InvalidURLError(
            "Invalid Spotify URL: https://example.com/track/abc",
            details={'url': 'https://example.com/track/abc', 'reason': 'domain'}
        )
    """
    pass
