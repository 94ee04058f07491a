"""
Convert Spotify sharing URLs to URIs and typed references.

A sharing URL looks like:

    https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT?si=abc

and converts to the canonical URI:

    spotify:track:4cOdK2wGLETKBW3PvgPWqT

The accepted grammar is deliberately narrower than general URL syntax,
so it is parsed by hand rather than with urllib.parse:

    1. Strip a leading "https://" or "http://" (other schemes stay and
       fail the domain check)
    2. Drop everything from the first "?"
    3. Split on "/" into exactly three non-empty segments:
       {domain}/{kind}/{id}
    4. domain must be exactly "open.spotify.com"
    5. kind must be a ResourceKind
    6. id is taken verbatim

Going back from a URI to a URL is not supported.

Usage:
    from spotify_cli.spotify.url_convert import share_url_to_uri

    uri = share_url_to_uri("https://open.spotify.com/album/1DFixLWuPkv3KT3TnV35m3")
"""

from dataclasses import dataclass
from enum import Enum

from spotify_cli.core.exceptions import InvalidURLError


SHARE_DOMAIN = "open.spotify.com"
URI_SCHEME = "spotify"
STRIPPED_SCHEMES = ("https://", "http://")


class ResourceKind(Enum):
    """Kinds of Spotify resource that have sharing URLs."""
    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"
    PLAYLIST = "playlist"
    SHOW = "show"
    EPISODE = "episode"


# Kinds that can be passed to start_playback(uris=...)
PLAYABLE_KINDS = frozenset({ResourceKind.TRACK, ResourceKind.EPISODE})


@dataclass(frozen=True)
class ResourceRef:
    """
    A Spotify resource identified by kind and id.

    Attributes:
        kind: The resource kind.
        id: The opaque base62 Spotify id, never empty.
            Example: "4cOdK2wGLETKBW3PvgPWqT"
    """
    kind: ResourceKind
    id: str

    @property
    def uri(self) -> str:
        """Canonical URI, e.g. "spotify:track:4cOdK2wGLETKBW3PvgPWqT"."""
        return f"{URI_SCHEME}:{self.kind.value}:{self.id}"

    @property
    def url(self) -> str:
        """Sharing URL, e.g. "https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT"."""
        return f"https://{SHARE_DOMAIN}/{self.kind.value}/{self.id}"

    @property
    def is_playable(self) -> bool:
        """True for tracks and episodes, False for contexts like albums."""
        return self.kind in PLAYABLE_KINDS


def parse_share_url(url: str) -> ResourceRef:
    """
    Parse a sharing URL into a ResourceRef.

    Accepts every ResourceKind.

    Args:
        url: Sharing URL, with or without http(s):// and query string.

    Returns:
        ResourceRef with the kind and id from the URL.

    Raises:
        InvalidURLError: On wrong segment count, wrong domain or
                         unrecognized kind.

    Examples:
        parse_share_url("open.spotify.com/show/5CfCWKI5pZ28U0uOzXkDHe")
        # ResourceRef(kind=ResourceKind.SHOW, id="5CfCWKI5pZ28U0uOzXkDHe")
    """
    stripped = url
    for scheme in STRIPPED_SCHEMES:
        if stripped.startswith(scheme):
            stripped = stripped[len(scheme):]
            break

    stripped = stripped.split("?", 1)[0]

    parts = stripped.split("/")
    if len(parts) != 3 or not all(parts):
        raise _invalid(url, "expected open.spotify.com/<kind>/<id>")

    domain, kind_name, resource_id = parts

    if domain != SHARE_DOMAIN:
        raise _invalid(url, f"domain must be {SHARE_DOMAIN}")

    try:
        kind = ResourceKind(kind_name)
    except ValueError:
        raise _invalid(url, f"unknown resource kind '{kind_name}'") from None

    return ResourceRef(kind=kind, id=resource_id)


def share_url_to_uri(url: str) -> str:
    """
    Convert a sharing URL to its canonical URI.

    Examples:
        share_url_to_uri("https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT?si=abc")
        # "spotify:track:4cOdK2wGLETKBW3PvgPWqT"

    Raises:
        InvalidURLError: If the URL fails validation.
    """
    return parse_share_url(url).uri


def parse_playable_url(url: str) -> ResourceRef:
    """
    Parse a sharing URL that must name a track or an episode.

    Raises:
        InvalidURLError: If the URL fails validation or names any
                         other kind (album, artist, playlist, show).
    """
    ref = parse_share_url(url)
    if not ref.is_playable:
        raise _invalid(url, f"'{ref.kind.value}' is not a track or episode")
    return ref


def _invalid(url: str, reason: str) -> InvalidURLError:
    return InvalidURLError(
        f"Invalid Spotify URL: {url} ({reason})",
        details={"url": url, "reason": reason}
    )
