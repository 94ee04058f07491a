"""Test the command-line interface"""

import json
import logging

import pytest
from unittest.mock import patch

from click.testing import CliRunner

from spotify_cli import __version__
from spotify_cli.cli import cli
from spotify_cli.core.exceptions import ConfigError, SpotifyError
from spotify_cli.core.logger import setup_logging
from spotify_cli.spotify.client import SpotifyClient


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def connect(mock_client):
    with patch("spotify_cli.cli._connect", return_value=mock_client) as connect:
        yield connect


class TestStatus:
    """Test `spotify-cli status`"""

    def test_default_display(self, runner, connect):
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert result.output.strip() == "Test Song - Test Artist (1:02 / 3:30)"

    def test_json(self, runner, connect):
        result = runner.invoke(cli, ["status", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["title"] == "Test Song"

    @pytest.mark.parametrize("flag, expected", [
        ("--id", "4cOdK2wGLETKBW3PvgPWqT"),
        ("--uri", "spotify:track:4cOdK2wGLETKBW3PvgPWqT"),
        ("--url", "https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT"),
        ("--artist", "Test Artist"),
        ("--progress", "1:02"),
        ("--duration", "3:30"),
        ("--is-playing", "true"),
        ("--repeat-state", "Off"),
        ("--shuffle-state", "Disabled"),
        ("--device", "Living Room"),
        ("--playing-type", "track"),
    ])
    def test_single_field(self, runner, connect, flag, expected):
        result = runner.invoke(cli, ["status", flag])
        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_flags_are_exclusive(self, runner, connect):
        result = runner.invoke(cli, ["status", "--title", "--artist"])
        assert result.exit_code == 2
        connect.assert_not_called()

    def test_nothing_playing(self, runner, connect, mock_client):
        mock_client.current_playback.return_value = None
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 3
        assert "No active device found" in result.output


class TestRepeatShuffle:
    """Test `spotify-cli repeat` and `spotify-cli shuffle`"""

    def test_repeat_cycles(self, runner, connect, mock_client):
        result = runner.invoke(cli, ["repeat"])
        assert result.exit_code == 0
        assert "Repeat: Context" in result.output
        mock_client.repeat.assert_called_once_with("context")

    def test_repeat_explicit(self, runner, connect, mock_client):
        result = runner.invoke(cli, ["repeat", "T"])
        assert result.exit_code == 0
        mock_client.repeat.assert_called_once_with("track")

    def test_repeat_invalid_token(self, runner, connect):
        result = runner.invoke(cli, ["repeat", "xyz"])
        assert result.exit_code == 2
        assert "Invalid repeat state" in result.output
        connect.assert_not_called()

    def test_shuffle_toggles(self, runner, connect, mock_client):
        result = runner.invoke(cli, ["shuffle"])
        assert result.exit_code == 0
        assert "Shuffle: Enabled" in result.output
        mock_client.shuffle.assert_called_once_with(True)

    def test_shuffle_explicit(self, runner, connect, mock_client):
        result = runner.invoke(cli, ["shuffle", "disabled"])
        assert result.exit_code == 0
        mock_client.shuffle.assert_called_once_with(False)


class TestPlayFrom:
    """Test `spotify-cli play-from`"""

    def test_url(self, runner, connect, mock_client):
        result = runner.invoke(cli, ["play-from", "--url", "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M"])
        assert result.exit_code == 0
        mock_client.start_playback.assert_called_once_with(context_uri="spotify:playlist:37i9dQZF1DXcBWIGoYBM5M")

    def test_uri(self, runner, connect, mock_client):
        result = runner.invoke(cli, ["play-from", "--uri", "spotify:track:4cOdK2wGLETKBW3PvgPWqT"])
        assert result.exit_code == 0
        mock_client.start_playback.assert_called_once_with(uris=["spotify:track:4cOdK2wGLETKBW3PvgPWqT"])

    @pytest.mark.parametrize("args", [[], ["--url", "a", "--uri", "b"]])
    def test_exactly_one_source(self, runner, connect, args):
        result = runner.invoke(cli, ["play-from", *args])
        assert result.exit_code == 2

    def test_invalid_url(self, runner, connect, mock_client):
        result = runner.invoke(cli, ["play-from", "--url", "https://example.com/track/abc"])
        assert result.exit_code == 4
        assert "Invalid Spotify URL" in result.output
        mock_client.start_playback.assert_not_called()


class TestConvert:
    """Test `spotify-cli convert`, which needs no configuration"""

    def test_convert(self, runner):
        result = runner.invoke(cli, ["convert", "https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT?si=abc"])
        assert result.exit_code == 0
        assert result.output.strip() == "spotify:track:4cOdK2wGLETKBW3PvgPWqT"

    def test_convert_playable_rejects_album(self, runner):
        result = runner.invoke(cli, ["convert", "--playable", "open.spotify.com/album/1DFixLWuPkv3KT3TnV35m3"])
        assert result.exit_code == 4

    def test_convert_invalid(self, runner):
        result = runner.invoke(cli, ["convert", "asdf://open.spotify.com/track/abc"])
        assert result.exit_code == 4
        assert "Invalid Spotify URL" in result.output


class TestErrors:
    """Test exit codes of handled errors"""

    def test_config_error(self, runner):
        with patch("spotify_cli.cli._connect", side_effect=ConfigError("missing client_id")):
            result = runner.invoke(cli, ["status"])
        assert result.exit_code == 1
        assert "Configuration error: missing client_id" in result.output

    def test_auth_error_hint(self, runner):
        with patch("spotify_cli.cli._connect", side_effect=SpotifyError("denied", is_auth_error=True)):
            result = runner.invoke(cli, ["repeat"])
        assert result.exit_code == 3
        assert "client_secret" in result.output

    def test_keyboard_interrupt(self, runner):
        with patch("spotify_cli.cli._connect", side_effect=KeyboardInterrupt):
            result = runner.invoke(cli, ["shuffle"])
        assert result.exit_code == 130

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestConnect:
    """Test configuration, logging and client setup behind the commands"""

    @pytest.fixture
    def credentials(self, config_home, monkeypatch):
        monkeypatch.setenv("SPOTIFY_CLIENT_ID", "env_id")
        monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "env_secret")
        config_dir = config_home / "spotify-cli"
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir

    @pytest.fixture
    def mock_oauth(self):
        with patch("spotify_cli.spotify.client.SpotifyOAuth") as oauth:
            yield oauth

    @pytest.fixture
    def mock_spotify(self, sample_playback_data):
        with patch("spotify_cli.spotify.client.spotipy.Spotify") as spotify:
            spotify.return_value.current_playback.return_value = sample_playback_data
            yield spotify

    def test_verbose_status(self, runner, credentials, mock_oauth, mock_spotify):
        with patch("spotify_cli.cli.setup_logging", wraps=setup_logging) as setup:
            result = runner.invoke(cli, ["--verbose", "status"])

        assert result.exit_code == 0
        assert "Test Song - Test Artist" in result.output
        setup.assert_called_once_with(credentials / "logs" / "spotify-cli.log", "DEBUG")
        assert (credentials / "logs" / "spotify-cli.log").exists()
        assert logging.getLogger().handlers == []

    def test_configured_log_level(self, runner, credentials, mock_oauth, mock_spotify):
        (credentials / "config.yaml").write_text("logging:\n  level: info\n", encoding="utf-8")

        with patch("spotify_cli.cli.setup_logging", wraps=setup_logging) as setup:
            result = runner.invoke(cli, ["status", "--title"])

        assert result.exit_code == 0
        assert setup.call_args.args[1] == "INFO"

    def test_client_initialized_once(self, runner, credentials, mock_oauth, mock_spotify):
        runner.invoke(cli, ["repeat"])
        result = runner.invoke(cli, ["shuffle"])

        assert result.exit_code == 0
        assert SpotifyClient.is_initialized()
        mock_oauth.assert_called_once()
        assert mock_oauth.call_args.kwargs["client_id"] == "env_id"
        assert mock_oauth.call_args.kwargs["cache_handler"].cache_path == str(credentials / "token.json")

    def test_missing_credentials(self, runner, config_home):
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 1
        assert "spotify.client_id" in result.output
