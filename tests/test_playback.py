"""Test CurrentlyPlaying and play-from operations"""

import json

import pytest

from spotify_cli.core.exceptions import InvalidURLError, NoActiveDeviceError, NotPlayableError
from spotify_cli.spotify.playback import CurrentlyPlaying, play_from_uri, play_from_url
from spotify_cli.spotify.repeat_state import RepeatState
from spotify_cli.spotify.shuffle_state import ShuffleState
from spotify_cli.spotify.url_convert import ResourceKind


class TestCurrentlyPlaying:
    """Test status and state changes of the current playback"""

    def test_fetch(self, mock_client):
        curr = CurrentlyPlaying.fetch(mock_client)
        assert curr.snapshot.title == "Test Song"

    @pytest.mark.parametrize("data", [None, {}, {"item": None, "is_playing": False}])
    def test_fetch_nothing_playing(self, mock_client, data):
        mock_client.current_playback.return_value = data
        with pytest.raises(NoActiveDeviceError):
            CurrentlyPlaying.fetch(mock_client)

    def test_display(self, mock_client):
        assert CurrentlyPlaying.fetch(mock_client).display() == "Test Song - Test Artist (1:02 / 3:30)"

    def test_to_json(self, mock_client):
        result = json.loads(CurrentlyPlaying.fetch(mock_client).to_json())
        assert result["uri"] == "spotify:track:4cOdK2wGLETKBW3PvgPWqT"
        assert result["repeat_state"] == "off"

    def test_identifiers(self, mock_client):
        curr = CurrentlyPlaying.fetch(mock_client)
        assert curr.id() == "4cOdK2wGLETKBW3PvgPWqT"
        assert curr.uri() == "spotify:track:4cOdK2wGLETKBW3PvgPWqT"
        assert curr.generate_url() == "https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT"

    def test_local_file_not_playable(self, mock_client, sample_playback_data):
        sample_playback_data["item"]["id"] = None
        curr = CurrentlyPlaying.fetch(mock_client)
        with pytest.raises(NotPlayableError):
            curr.uri()

    def test_cycle_repeat(self, mock_client, sample_playback_data):
        sample_playback_data["repeat_state"] = "track"

        new_state = CurrentlyPlaying.fetch(mock_client).cycle_repeat()

        assert new_state == RepeatState.OFF
        mock_client.repeat.assert_called_once_with("off")

    def test_set_repeat(self, mock_client):
        CurrentlyPlaying.fetch(mock_client).repeat(RepeatState.CONTEXT)
        mock_client.repeat.assert_called_once_with("context")

    def test_toggle_shuffle(self, mock_client):
        new_state = CurrentlyPlaying.fetch(mock_client).toggle_shuffle()

        assert new_state == ShuffleState.ENABLED
        mock_client.shuffle.assert_called_once_with(True)

    def test_set_shuffle(self, mock_client):
        CurrentlyPlaying.fetch(mock_client).shuffle(ShuffleState.DISABLED)
        mock_client.shuffle.assert_called_once_with(False)


class TestPlayFrom:
    """Test play_from_uri and play_from_url"""

    def test_play_from_uri(self, mock_client):
        play_from_uri(mock_client, "spotify:episode:512ojhOuo1ktJprKbVcKyQ")
        mock_client.start_playback.assert_called_once_with(uris=["spotify:episode:512ojhOuo1ktJprKbVcKyQ"])

    def test_play_track_url(self, mock_client):
        ref = play_from_url(mock_client, "https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT?si=x")

        assert ref.kind == ResourceKind.TRACK
        mock_client.start_playback.assert_called_once_with(uris=["spotify:track:4cOdK2wGLETKBW3PvgPWqT"])

    def test_play_album_url_as_context(self, mock_client):
        play_from_url(mock_client, "open.spotify.com/album/1DFixLWuPkv3KT3TnV35m3")
        mock_client.start_playback.assert_called_once_with(context_uri="spotify:album:1DFixLWuPkv3KT3TnV35m3")

    def test_invalid_url_not_sent(self, mock_client):
        with pytest.raises(InvalidURLError):
            play_from_url(mock_client, "https://example.com/track/abc")
        mock_client.start_playback.assert_not_called()
