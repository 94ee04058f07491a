"""
Spotify API client singleton for spotify-cli.

This module provides a singleton wrapper around the spotipy library,
ensuring that only one authenticated Spotify client exists for the
lifetime of a command.

Singleton Pattern:
    SpotifyClient must be initialized once with init(), and subsequent
    calls to SpotifyClient() return the same instance. Calling init()
    twice raises an error.

Authentication:
    Playback control needs a user token, so the OAuth authorization
    code flow (spotipy.oauth2.SpotifyOAuth) is always used. The token
    is cached in token.json in the config directory; the browser is
    only opened when no valid cached token exists.

Usage:
    from spotify_cli.spotify.client import SpotifyClient

    SpotifyClient.init(
        client_id=config.spotify.client_id,
        client_secret=config.spotify.client_secret,
        redirect_uri=config.spotify.redirect_uri,
        cache_path=config.token_path
    )

    client = SpotifyClient()
    playback = client.current_playback()
"""

from pathlib import Path
from typing import Any, Callable

import requests
import spotipy
from spotipy.cache_handler import CacheFileHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from spotify_cli.core.exceptions import NoActiveDeviceError, SpotifyError
from spotify_cli.core.logger import get_logger

logger = get_logger(__name__)


SCOPES = (
    "user-read-playback-state",     # see player state
    "user-modify-playback-state",   # control player stuff
    "user-read-currently-playing",  # see player state
)

REQUEST_TIMEOUT = 10


class SpotifyClientMeta(type):
    """
    Metaclass implementing the singleton pattern for SpotifyClient.

    This metaclass ensures:
    1. SpotifyClient cannot be instantiated before init() is called
    2. init() can only be called once
    3. After init(), SpotifyClient() always returns the same instance

    Attributes:
        _instance: The singleton SpotifyClient instance, or None.
        _initialized: Flag indicating whether init() has been called.
    """

    _instance: "SpotifyClient | None" = None
    _initialized: bool = False

    def __call__(cls) -> "SpotifyClient":
        """
        Get the SpotifyClient singleton instance.

        Raises:
            SpotifyError: If init() has not been called yet.
        """
        if cls._instance is None:
            raise SpotifyError(
                "SpotifyClient not initialized. Call SpotifyClient.init() first.",
                is_auth_error=True
            )
        return cls._instance

    def init(
        cls,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        cache_path: Path,
        open_browser: bool = True
    ) -> "SpotifyClient":
        """
        Initialize the SpotifyClient singleton.

        Args:
            client_id: Spotify application client ID from Developer Dashboard.
            client_secret: Spotify application client secret.
            redirect_uri: Redirect URI registered for the application.
            cache_path: Where spotipy caches the OAuth token.
            open_browser: Open the authorization page automatically when
                          no cached token exists. If False, the URL is
                          printed and the redirect URL must be pasted.

        Returns:
            The initialized SpotifyClient singleton instance.

        Raises:
            SpotifyError: If init() has already been called.
            SpotifyError: If authorization fails (invalid credentials,
                          denied consent, network error).

        Behavior:
            1. Check that init() hasn't been called before
            2. Build SpotifyOAuth with a CacheFileHandler at cache_path
            3. Obtain an access token (cached, refreshed or prompted)
            4. Create spotipy.Spotify and store it as singleton
        """
        if cls._initialized:
            raise SpotifyError(
                "SpotifyClient.init() has already been called. "
                "Use SpotifyClient() to get the existing instance.",
                is_auth_error=True
            )

        try:
            auth_manager = SpotifyOAuth(
                client_id=client_id,
                client_secret=client_secret,
                redirect_uri=redirect_uri,
                scope=" ".join(SCOPES),
                cache_handler=CacheFileHandler(cache_path=str(cache_path)),
                open_browser=open_browser
            )

            # Prompts for authorization only when the cache has no usable token
            auth_manager.get_access_token(as_dict=False)

            spotify_instance = spotipy.Spotify(
                auth_manager=auth_manager,
                requests_timeout=REQUEST_TIMEOUT
            )
        except SpotifyOauthError as e:
            raise SpotifyError(
                f"Spotify authorization failed: {e}",
                details={"original_error": str(e)},
                is_auth_error=True
            ) from e
        except (spotipy.SpotifyException, requests.exceptions.RequestException) as e:
            raise SpotifyError(
                f"Could not connect to Spotify: {e}",
                details={"original_error": str(e)},
                is_auth_error=True
            ) from e

        logger.debug(f"Spotify client authorized, token cache: {cache_path}")

        instance = super().__call__(spotify_instance)
        cls._instance = instance
        cls._initialized = True
        return instance

    def is_initialized(cls) -> bool:
        """Check if the SpotifyClient has been initialized."""
        return cls._initialized

    def reset(cls) -> None:
        """
        Reset the singleton state (for testing only).

        Clears the singleton instance, allowing init() to be called again.
        """
        cls._instance = None
        cls._initialized = False


class SpotifyClient(metaclass=SpotifyClientMeta):
    """
    Singleton Spotify API client.

    Wraps spotipy.Spotify and converts its exceptions into SpotifyError
    with the action that failed, e.g. "Unable to control playback: set
    repeat state".

    Attributes:
        _spotify: The underlying spotipy.Spotify instance.
    """

    def __init__(self, spotify_instance: spotipy.Spotify) -> None:
        """
        Note:
            Called by the metaclass init() method. Do not call directly.
        """
        self._spotify = spotify_instance

    # =========================================================================
    # Player Operations
    # =========================================================================

    def current_playback(self) -> dict[str, Any] | None:
        """
        Get the current playback state.

        Returns:
            The playback object from the Web API, or None when nothing
            is playing (the API answers 204 No Content).
        """
        return self._call(
            "fetch current playback",
            self._spotify.current_playback,
            additional_types="episode"
        )

    def repeat(self, state: str) -> None:
        """
        Set the repeat mode.

        Args:
            state: Web API repeat string: "off", "context" or "track".
        """
        self._call("set repeat state", self._spotify.repeat, state)

    def shuffle(self, state: bool) -> None:
        """Turn shuffle on (True) or off (False)."""
        self._call("set shuffle state", self._spotify.shuffle, state)

    def start_playback(
        self,
        uris: list[str] | None = None,
        context_uri: str | None = None
    ) -> None:
        """
        Start playback of tracks/episodes (uris) or of a context.

        Args:
            uris: Track or episode URIs to play.
            context_uri: Album, artist, playlist or show URI to play.
        """
        self._call(
            "start playback",
            self._spotify.start_playback,
            context_uri=context_uri,
            uris=uris
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _call(self, action: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Call a spotipy method, wrapping its errors.

        Raises:
            NoActiveDeviceError: If the API reports no active device.
            SpotifyError: For every other API or network failure.
                          is_auth_error is set for HTTP 401.
        """
        logger.debug(f"Spotify API call: {action}")
        try:
            return func(*args, **kwargs)
        except spotipy.SpotifyException as e:
            details = {"action": action, "http_status": e.http_status, "reason": e.reason}
            if e.reason == "NO_ACTIVE_DEVICE":
                raise NoActiveDeviceError(details=details) from e
            raise SpotifyError(
                f"Unable to {action}: {e.msg}",
                details=details,
                is_auth_error=e.http_status == 401
            ) from e
        except (SpotifyOauthError, requests.exceptions.RequestException) as e:
            raise SpotifyError(
                f"Unable to {action}: {e}",
                details={"action": action, "original_error": str(e)},
                is_auth_error=isinstance(e, SpotifyOauthError)
            ) from e
