"""Test repeat state cycling, API mapping and token parsing"""

import pytest

from spotify_cli.core.exceptions import InvalidRepeatStateError
from spotify_cli.spotify.repeat_state import (
    RepeatState,
    cycle_repeat_state,
    repeat_state_from_external,
    repeat_state_from_token,
    repeat_state_to_external,
)


class TestRepeatStateCycle:
    """Test the off -> context -> track -> off cycle"""

    def test_cycle_order(self):
        assert RepeatState.OFF.cycle() == RepeatState.CONTEXT
        assert RepeatState.CONTEXT.cycle() == RepeatState.TRACK
        assert RepeatState.TRACK.cycle() == RepeatState.OFF

    @pytest.mark.parametrize("state", list(RepeatState))
    def test_cycle_returns_after_three_steps(self, state):
        assert state.cycle().cycle().cycle() == state
        assert state.cycle() != state

    def test_module_function(self):
        assert cycle_repeat_state(RepeatState.TRACK) == RepeatState.OFF


class TestRepeatStateApi:
    """Test conversion to and from the Web API strings"""

    def test_to_api(self):
        assert RepeatState.OFF.to_api() == "off"
        assert RepeatState.CONTEXT.to_api() == "context"
        assert RepeatState.TRACK.to_api() == "track"

    @pytest.mark.parametrize("state", list(RepeatState))
    def test_round_trip(self, state):
        assert RepeatState.from_api(state.to_api()) == state
        assert repeat_state_from_external(repeat_state_to_external(state)) == state

    @pytest.mark.parametrize("value", ["OFF", "all", "", None])
    def test_unknown_api_value(self, value):
        with pytest.raises(InvalidRepeatStateError) as exc_info:
            RepeatState.from_api(value)
        assert exc_info.value.details["value"] == value


class TestRepeatStateToken:
    """Test command-line token parsing"""

    @pytest.mark.parametrize("token, expected", [
        ("o", RepeatState.OFF),
        ("off", RepeatState.OFF),
        ("c", RepeatState.CONTEXT),
        ("context", RepeatState.CONTEXT),
        ("t", RepeatState.TRACK),
        ("track", RepeatState.TRACK),
    ])
    def test_short_and_long_forms(self, token, expected):
        assert RepeatState.from_token(token) == expected

    def test_case_and_whitespace_ignored(self):
        assert RepeatState.from_token("  OFF ") == RepeatState.OFF
        assert RepeatState.from_token("Context") == RepeatState.CONTEXT
        assert repeat_state_from_token("\tT\n") == RepeatState.TRACK

    @pytest.mark.parametrize("token", ["xyz", "", "of", "tracks", "on"])
    def test_invalid_token(self, token):
        with pytest.raises(InvalidRepeatStateError) as exc_info:
            RepeatState.from_token(token)
        assert "Invalid repeat state" in exc_info.value.message

    @pytest.mark.parametrize("token", ["o", " Context ", "TRACK"])
    def test_repeated_calls_identical(self, token):
        results = {RepeatState.from_token(token) for _ in range(3)}
        assert len(results) == 1

    def test_str_is_display_name(self):
        assert str(RepeatState.CONTEXT) == "Context"
