"""Test configuration and fixtures"""

import pytest
from unittest.mock import Mock, patch

from spotify_cli.spotify.client import SpotifyClient


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temporary directory with no credentials set"""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in ("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "SPOTIFY_REDIRECT_URI"):
        monkeypatch.delenv(name, raising=False)
    with patch("spotify_cli.core.config.load_dotenv"):
        yield tmp_path


@pytest.fixture
def sample_playback_data():
    """current_playback() response for a track"""
    return {
        'device': {
            'id': 'device_123',
            'is_active': True,
            'name': 'Living Room',
            'type': 'Speaker',
            'volume_percent': 65
        },
        'repeat_state': 'off',
        'shuffle_state': False,
        'progress_ms': 62500,  # 1:02
        'is_playing': True,
        'currently_playing_type': 'track',
        'item': {
            'id': '4cOdK2wGLETKBW3PvgPWqT',
            'name': 'Test Song',
            'type': 'track',
            'artists': [
                {'id': 'artist_123', 'name': 'Test Artist'},
                {'id': 'artist_456', 'name': 'Featured Artist'}
            ],
            'album': {'id': 'album_123', 'name': 'Test Album'},
            'duration_ms': 210000,  # 3:30
            'uri': 'spotify:track:4cOdK2wGLETKBW3PvgPWqT'
        }
    }


@pytest.fixture
def sample_episode_data():
    """current_playback() response for a podcast episode"""
    return {
        'device': {'name': 'Phone', 'volume_percent': None},
        'repeat_state': 'context',
        'shuffle_state': True,
        'progress_ms': 3725000,  # 1:02:05
        'is_playing': False,
        'currently_playing_type': 'episode',
        'item': {
            'id': '512ojhOuo1ktJprKbVcKyQ',
            'name': 'Test Episode',
            'type': 'episode',
            'show': {'id': 'show_123', 'name': 'Test Show'},
            'duration_ms': 5400000  # 1:30:00
        }
    }


@pytest.fixture
def mock_client(sample_playback_data):
    """SpotifyClient mock whose current playback is sample_playback_data"""
    client = Mock(spec=SpotifyClient)
    client.current_playback.return_value = sample_playback_data
    return client


@pytest.fixture(autouse=True)
def reset_spotify_client():
    """Reset the SpotifyClient singleton around every test"""
    SpotifyClient.reset()
    yield
    SpotifyClient.reset()
