"""Domain entities for scraped title pages and resolved streams.

Pure value objects: no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MediaKind(str, Enum):
    """Kind of title page (derived from the page URL)."""

    MOVIE = "movie"
    SERIES = "series"


class TrackKind(str, Enum):
    """Classification of a side-car track found next to the manifest."""

    SUBTITLE = "subtitle"
    THUMBNAIL = "thumbnail"
    IMAGE_SPRITE = "image_sprite"


@dataclass(frozen=True)
class Episode:
    """A single episode link inside a season block."""

    title: str  # "Episode 3"
    link: str


@dataclass(frozen=True)
class SeasonGroup:
    """A season block with its episodes in document order."""

    title: str
    episodes: list[Episode] = field(default_factory=list)


@dataclass(frozen=True)
class MovieLink:
    """Synthetic single link of a movie page (points at the page itself)."""

    title: str
    link: str


@dataclass(frozen=True)
class TitlePage:
    """Title/listing page info.

    ``links`` holds ``SeasonGroup`` entries for series and exactly one
    ``MovieLink`` for movies.
    """

    title: str
    synopsis: str
    image: str
    kind: MediaKind
    links: list[SeasonGroup] | list[MovieLink] = field(default_factory=list)


@dataclass(frozen=True)
class PlayerDescriptor:
    """Opaque site tokens selecting the embedded player variant."""

    post_id: str
    nume: str
    type_value: str


@dataclass(frozen=True)
class EmbedResolution:
    """Final, directly fetchable iframe URL plus how it was reached."""

    iframe_url: str
    origin: str = ""
    player_id: str = ""
    via_helper: bool = False


@dataclass(frozen=True)
class Track:
    """Subtitle, thumbnail or sprite track attached to a stream."""

    uri: str
    kind: TrackKind
    language: str = "en"
    title: str = "English"
    format: str = "VTT"  # "VTT", "JPG", "PNG"


@dataclass(frozen=True)
class ExtractedLinks:
    """Best-effort link extraction result (partial results allowed)."""

    manifest_url: str | None = None
    subtitles: list[Track] = field(default_factory=list)
    thumbnails: list[Track] = field(default_factory=list)


@dataclass(frozen=True)
class StreamResult:
    """Playable HLS stream with the headers required to fetch it."""

    server: str
    link: str
    type: str = "m3u8"
    subtitles: list[Track] = field(default_factory=list)
    thumbnails: list[Track] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
