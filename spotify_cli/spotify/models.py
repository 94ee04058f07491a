"""
Data model for the current playback state.

PlaybackSnapshot is an immutable view over the response of
spotipy.Spotify.current_playback(), normalized into local types:
RepeatState, ShuffleState, ResourceRef and timedelta.

Usage:
    from spotify_cli.spotify.models import PlaybackSnapshot

    data = spotify.current_playback()
    snapshot = PlaybackSnapshot.from_spotify_api(data)
    print(snapshot.progress_str, "/", snapshot.duration_str)
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from spotify_cli.spotify.repeat_state import RepeatState
from spotify_cli.spotify.shuffle_state import ShuffleState
from spotify_cli.spotify.url_convert import ResourceKind, ResourceRef
from spotify_cli.utils import format_duration


@dataclass(frozen=True)
class PlaybackSnapshot:
    """
    Immutable representation of what is currently playing.

    Attributes:
        ref: Kind and id of the playing item. None for local files,
             which have no Spotify id.

        title: Track or episode name.
               Example: "Bohemian Rhapsody"

        artist: First track artist, or the show name for episodes.
                Example: "Queen"

        progress: How much of the item has been played.

        duration: Total length of the item.

        volume: Volume percent of the active device (0-100), or None
                when the device does not report it.

        is_playing: Whether playback is running (False when paused).

        repeat_state: Current repeat mode.

        shuffle_state: Current shuffle mode.

        device: Name of the active device.
                Example: "Living Room"

        playing_type: Web API currently_playing_type
                      ("track", "episode", "ad" or "unknown").
    """

    ref: ResourceRef | None
    title: str
    artist: str
    progress: timedelta
    duration: timedelta
    volume: int | None
    is_playing: bool
    repeat_state: RepeatState
    shuffle_state: ShuffleState
    device: str
    playing_type: str

    @classmethod
    def from_spotify_api(cls, data: dict[str, Any]) -> "PlaybackSnapshot":
        """
        Create a PlaybackSnapshot from a current_playback() response.

        Args:
            data: The playback object from the Web API. Its 'item' must
                  be a track or episode object (not None).

        Returns:
            PlaybackSnapshot populated from the response.

        Raises:
            InvalidRepeatStateError: If repeat_state is not a known value.

        Behavior:
            1. Read the item (track or episode) and its id
            2. Take the artist from the first track artist, or the show
               name for episodes
            3. Convert progress_ms and duration_ms to timedelta
            4. Map repeat_state and shuffle_state to local enums
        """
        item = data["item"]
        device = data.get("device") or {}

        item_type = item.get("type", "track")
        if item_type == "episode":
            kind = ResourceKind.EPISODE
            artist = (item.get("show") or {}).get("name", "Unknown Show")
        else:
            kind = ResourceKind.TRACK
            artists = item.get("artists") or []
            artist = artists[0]["name"] if artists else "Unknown Artist"

        item_id = item.get("id")
        ref = ResourceRef(kind=kind, id=item_id) if item_id else None

        return cls(
            ref=ref,
            title=item.get("name", ""),
            artist=artist,
            progress=timedelta(milliseconds=data.get("progress_ms") or 0),
            duration=timedelta(milliseconds=item.get("duration_ms") or 0),
            volume=device.get("volume_percent"),
            is_playing=bool(data.get("is_playing", False)),
            repeat_state=RepeatState.from_api(data.get("repeat_state", "off")),
            shuffle_state=ShuffleState.from_api(bool(data.get("shuffle_state", False))),
            device=device.get("name", ""),
            playing_type=data.get("currently_playing_type", item_type),
        )

    @property
    def progress_str(self) -> str:
        """Progress formatted as M:SS or H:MM:SS."""
        return format_duration(self.progress)

    @property
    def duration_str(self) -> str:
        """Duration formatted as M:SS or H:MM:SS."""
        return format_duration(self.duration)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-serializable dict for `status --json`.

        Durations are whole seconds.
        """
        return {
            "id": self.ref.id if self.ref else None,
            "uri": self.ref.uri if self.ref else None,
            "title": self.title,
            "artist": self.artist,
            "progress": int(self.progress.total_seconds()),
            "duration": int(self.duration.total_seconds()),
            "volume": self.volume,
            "is_playing": self.is_playing,
            "repeat_state": self.repeat_state.to_api(),
            "is_shuffled": self.shuffle_state.to_api(),
            "device": self.device,
            "playing_type": self.playing_type,
        }
