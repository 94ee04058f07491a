"""
Control of the current playback through the Spotify Web API.

CurrentlyPlaying pairs the SpotifyClient with a PlaybackSnapshot taken
when the object is created. Toggle operations (cycle_repeat,
toggle_shuffle) derive the new state from that snapshot.

Usage:
    from spotify_cli.spotify.playback import CurrentlyPlaying

    curr = CurrentlyPlaying.fetch(SpotifyClient())
    curr.cycle_repeat()
"""

import json

from spotify_cli.core.exceptions import NoActiveDeviceError, NotPlayableError
from spotify_cli.core.logger import get_logger
from spotify_cli.spotify.client import SpotifyClient
from spotify_cli.spotify.models import PlaybackSnapshot
from spotify_cli.spotify.repeat_state import RepeatState
from spotify_cli.spotify.shuffle_state import ShuffleState
from spotify_cli.spotify.url_convert import ResourceRef, parse_share_url

logger = get_logger(__name__)


class CurrentlyPlaying:
    """
    The current playback state and the operations that change it.

    Attributes:
        client: Authenticated SpotifyClient.
        snapshot: Playback state at fetch time.
    """

    def __init__(self, client: SpotifyClient, snapshot: PlaybackSnapshot) -> None:
        self.client = client
        self.snapshot = snapshot

    @classmethod
    def fetch(cls, client: SpotifyClient) -> "CurrentlyPlaying":
        """
        Fetch the current playback state.

        Raises:
            NoActiveDeviceError: If nothing is playing. Within a few
                                 seconds of pausing, the active device
                                 becomes unknown to the API.
        """
        data = client.current_playback()
        if not data or not data.get("item"):
            raise NoActiveDeviceError()

        snapshot = PlaybackSnapshot.from_spotify_api(data)
        logger.debug(
            f"Now playing: {snapshot.title} - {snapshot.artist} "
            f"({snapshot.repeat_state}, shuffle {snapshot.shuffle_state})"
        )
        return cls(client, snapshot)

    # =========================================================================
    # Status
    # =========================================================================

    def display(self) -> str:
        """Return "<title> - <artist> (<progress> / <duration>)"."""
        s = self.snapshot
        return f"{s.title} - {s.artist} ({s.progress_str} / {s.duration_str})"

    def to_json(self) -> str:
        return json.dumps(self.snapshot.to_dict())

    def ref(self) -> ResourceRef:
        """
        Return the kind and id of the current item.

        Raises:
            NotPlayableError: If the item is a local file.
        """
        if self.snapshot.ref is None:
            raise NotPlayableError()
        return self.snapshot.ref

    def id(self) -> str:
        return self.ref().id

    def uri(self) -> str:
        return self.ref().uri

    def generate_url(self) -> str:
        return self.ref().url

    # =========================================================================
    # Repeat / Shuffle
    # =========================================================================

    def repeat(self, state: RepeatState) -> RepeatState:
        """Set the repeat state. Returns the state that was sent."""
        self.client.repeat(state.to_api())
        logger.info(f"Repeat set to {state}")
        return state

    def cycle_repeat(self) -> RepeatState:
        """Move to the next repeat state (off -> context -> track -> off)."""
        return self.repeat(self.snapshot.repeat_state.cycle())

    def shuffle(self, state: ShuffleState) -> ShuffleState:
        """Set the shuffle state. Returns the state that was sent."""
        self.client.shuffle(state.to_api())
        logger.info(f"Shuffle set to {state}")
        return state

    def toggle_shuffle(self) -> ShuffleState:
        return self.shuffle(self.snapshot.shuffle_state.toggle())


# =============================================================================
# Play From
# =============================================================================

def play_from_uri(client: SpotifyClient, uri: str) -> None:
    """
    Play a track or episode given its URI.

    The URI is passed to the Web API unchanged; it rejects URIs
    that do not name a playable item.
    """
    client.start_playback(uris=[uri])
    logger.info(f"Playing {uri}")


def play_from_url(client: SpotifyClient, url: str) -> ResourceRef:
    """
    Play whatever a sharing URL names.

    Tracks and episodes are played directly; albums, artists,
    playlists and shows are played as a context.

    Raises:
        InvalidURLError: If the URL fails validation.
    """
    ref = parse_share_url(url)
    if ref.is_playable:
        client.start_playback(uris=[ref.uri])
    else:
        client.start_playback(context_uri=ref.uri)
    logger.info(f"Playing {ref.uri}")
    return ref
