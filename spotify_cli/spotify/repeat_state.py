"""
Repeat state cycling and Web API conversion.

The Spotify Web API reports and accepts the repeat mode as one of the
strings "off", "context" and "track". RepeatState is the local closed
enumeration of those modes, with:

    - cycle(): the fixed 3-cycle OFF -> CONTEXT -> TRACK -> OFF
    - to_api() / from_api(): explicit mapping tables to the API strings
    - from_token(): the command-line grammar (o/off, c/context, t/track)

Usage:
    from spotify_cli.spotify.repeat_state import RepeatState

    state = RepeatState.from_api(playback["repeat_state"])
    spotify.repeat(state.cycle().to_api())
"""

from enum import Enum

from spotify_cli.core.exceptions import InvalidRepeatStateError


class RepeatState(Enum):
    """Playback loop mode."""

    # No repeat.
    OFF = "off"
    # Repeat the current playlist or album.
    CONTEXT = "context"
    # Repeat the current track.
    TRACK = "track"

    def cycle(self) -> "RepeatState":
        """Return the next repeat state to cycle through."""
        return _NEXT_STATE[self]

    def to_api(self) -> str:
        """Return the Web API representation of this state."""
        return _TO_API[self]

    @classmethod
    def from_api(cls, value: str) -> "RepeatState":
        """
        Convert a Web API repeat_state string to a RepeatState.

        Raises:
            InvalidRepeatStateError: If the API sent an unknown value.
        """
        try:
            return _FROM_API[value]
        except (KeyError, TypeError):
            raise InvalidRepeatStateError(
                f"Unknown repeat state from Spotify: {value!r}",
                details={"value": value}
            ) from None

    @classmethod
    def from_token(cls, token: str) -> "RepeatState":
        """
        Parse a user-facing token such as a command-line argument.

        Accepts the short and long forms (o/off, c/context, t/track),
        case-insensitively, with surrounding whitespace trimmed.

        Raises:
            InvalidRepeatStateError: If the token is not recognized.
        """
        try:
            return _FROM_TOKEN[token.strip().lower()]
        except (KeyError, AttributeError):
            raise InvalidRepeatStateError(
                f"Invalid repeat state: {token!r} (expected off, context or track)",
                details={"token": token}
            ) from None

    def __str__(self) -> str:
        return self.name.capitalize()


_NEXT_STATE = {
    RepeatState.OFF: RepeatState.CONTEXT,
    RepeatState.CONTEXT: RepeatState.TRACK,
    RepeatState.TRACK: RepeatState.OFF,
}

_TO_API = {
    RepeatState.OFF: "off",
    RepeatState.CONTEXT: "context",
    RepeatState.TRACK: "track",
}

_FROM_API = {api_value: state for state, api_value in _TO_API.items()}

_FROM_TOKEN = {
    "o": RepeatState.OFF,
    "off": RepeatState.OFF,
    "c": RepeatState.CONTEXT,
    "context": RepeatState.CONTEXT,
    "t": RepeatState.TRACK,
    "track": RepeatState.TRACK,
}

# Tokens shown in CLI help, in cycle order
REPEAT_STATE_TOKENS = ("off", "context", "track")


def cycle_repeat_state(current: RepeatState) -> RepeatState:
    return current.cycle()


def repeat_state_from_token(token: str) -> RepeatState:
    return RepeatState.from_token(token)


def repeat_state_to_external(state: RepeatState) -> str:
    return state.to_api()


def repeat_state_from_external(value: str) -> RepeatState:
    return RepeatState.from_api(value)
