"""
Shuffle state and its conversion to the Web API boolean.

The Web API represents shuffle as a plain boolean (shuffle_state).
ShuffleState gives it a name for display and command-line parsing.
"""

from enum import Enum

from spotify_cli.core.exceptions import InvalidShuffleStateError


class ShuffleState(Enum):
    """Whether playback order is shuffled."""

    ENABLED = "enabled"
    DISABLED = "disabled"

    def toggle(self) -> "ShuffleState":
        if self is ShuffleState.ENABLED:
            return ShuffleState.DISABLED
        return ShuffleState.ENABLED

    def to_api(self) -> bool:
        return self is ShuffleState.ENABLED

    @classmethod
    def from_api(cls, value: bool) -> "ShuffleState":
        return cls.ENABLED if value else cls.DISABLED

    @classmethod
    def from_token(cls, token: str) -> "ShuffleState":
        """
        Parse a command-line token (e/enabled/on, d/disabled/off).

        Raises:
            InvalidShuffleStateError: If the token is not recognized.
        """
        try:
            return _FROM_TOKEN[token.strip().lower()]
        except (KeyError, AttributeError):
            raise InvalidShuffleStateError(
                f"Invalid shuffle state: {token!r} (expected enabled or disabled)",
                details={"token": token}
            ) from None

    def __str__(self) -> str:
        return self.name.capitalize()


_FROM_TOKEN = {
    "e": ShuffleState.ENABLED,
    "enabled": ShuffleState.ENABLED,
    "on": ShuffleState.ENABLED,
    "d": ShuffleState.DISABLED,
    "disabled": ShuffleState.DISABLED,
    "off": ShuffleState.DISABLED,
}

SHUFFLE_STATE_TOKENS = ("enabled", "disabled")
