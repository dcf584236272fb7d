"""Domain entities -> JSON payloads of the public API."""

from __future__ import annotations

from typing import Any

from reelscrape.domain.entities.media import (
    MovieLink,
    SeasonGroup,
    StreamResult,
    TitlePage,
    Track,
)


def _link(entry: SeasonGroup | MovieLink) -> dict[str, Any]:
    if isinstance(entry, SeasonGroup):
        return {
            "title": entry.title,
            "episodes": [{"title": ep.title, "link": ep.link} for ep in entry.episodes],
        }
    return {"title": entry.title, "link": entry.link}


def present_title_page(page: TitlePage) -> dict[str, Any]:
    return {
        "title": page.title,
        "synopsis": page.synopsis,
        "image": page.image,
        "type": page.kind.value,
        "links": [_link(entry) for entry in page.links],
    }


def present_track(track: Track) -> dict[str, str]:
    return {
        "language": track.language,
        "uri": track.uri,
        "type": track.format,
        "kind": track.kind.value,
        "title": track.title,
    }


def present_stream(stream: StreamResult) -> dict[str, Any]:
    """Stream JSON; ``thumbnails`` only when at least one was found."""
    payload: dict[str, Any] = {
        "server": stream.server,
        "link": stream.link,
        "type": stream.type,
        "subtitles": [present_track(t) for t in stream.subtitles],
        "headers": dict(stream.headers),
    }
    if stream.thumbnails:
        payload["thumbnails"] = [present_track(t) for t in stream.thumbnails]
    return payload
