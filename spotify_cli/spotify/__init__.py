"""
Spotify integration module for spotify-cli.

This module provides all functionality for interacting with the Spotify Web API:
    - SpotifyClient: Singleton API client
    - RepeatState, ShuffleState: Player modes and their API mapping
    - ResourceKind, ResourceRef: Sharing URL / URI conversion
    - PlaybackSnapshot: Data model of the current playback
    - CurrentlyPlaying: Operations on the current playback

Usage:
    from spotify_cli.spotify import (
        SpotifyClient,
        CurrentlyPlaying,
        RepeatState,
        share_url_to_uri
    )

    SpotifyClient.init(client_id, client_secret, redirect_uri, cache_path)
    CurrentlyPlaying.fetch(SpotifyClient()).cycle_repeat()
"""

from spotify_cli.spotify.client import SpotifyClient
from spotify_cli.spotify.models import PlaybackSnapshot
from spotify_cli.spotify.playback import (
    CurrentlyPlaying,
    play_from_uri,
    play_from_url,
)
from spotify_cli.spotify.repeat_state import (
    RepeatState,
    cycle_repeat_state,
    repeat_state_from_external,
    repeat_state_from_token,
    repeat_state_to_external,
)
from spotify_cli.spotify.shuffle_state import ShuffleState
from spotify_cli.spotify.url_convert import (
    PLAYABLE_KINDS,
    ResourceKind,
    ResourceRef,
    parse_playable_url,
    parse_share_url,
    share_url_to_uri,
)

__all__ = [
    # Client
    "SpotifyClient",
    # Models
    "PlaybackSnapshot",
    "RepeatState",
    "ShuffleState",
    "ResourceKind",
    "ResourceRef",
    "PLAYABLE_KINDS",
    # Playback
    "CurrentlyPlaying",
    "play_from_uri",
    "play_from_url",
    # Repeat state
    "cycle_repeat_state",
    "repeat_state_from_token",
    "repeat_state_to_external",
    "repeat_state_from_external",
    # URL conversion
    "parse_share_url",
    "parse_playable_url",
    "share_url_to_uri",
]
