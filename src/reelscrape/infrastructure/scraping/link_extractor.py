"""Extract the HLS manifest and side-car tracks from decoded player JS.

Every function is best-effort: a missing match yields ``None`` or an empty
list. Whether "no manifest" is fatal is decided by the stream use case.
"""

from __future__ import annotations

import re

from reelscrape.domain.entities.media import ExtractedLinks, Track, TrackKind

# Double quotes only: the index quirk below puts a single quote in the URL.
_FILE_M3U8_RE = re.compile(r'file\s*:\s*"([^"]+\.m3u8[^"]*)"')
# The bare fallback admits the literal ",'.4&" of the index quirk.
_BARE_M3U8_RE = re.compile(
    r"""https?://[^\s"'\\<>]+\.m3u8(?:,'\.4&|[^\s"'\\<>])*"""
)
_VTT_RE = re.compile(r"""https?://[^\s"'\\<>]+?\.vtt""")
_SPRITE_RE = re.compile(r"""https?://[^\s"'\\<>]+?\.(?:jpg|png)""", re.IGNORECASE)
_INDEX_QUIRK_RE = re.compile(r"&i=\d+,'\.4&")
_THUMB_MARKERS = ("thumb", "sprite")

# Two suffix variants are in the wild: upstream players emit strictly
# 3-letter codes, mirror sites also use 2-letter ones.
LANGUAGE_PATTERNS: dict[str, re.Pattern[str]] = {
    "strict": re.compile(r"_([a-zA-Z]{3})\.vtt$"),
    "loose": re.compile(r"_([a-zA-Z]{2,3})\.vtt$"),
}


def _normalize_quotes(js: str) -> str:
    return js.replace("\\'", "'").replace('\\"', '"')


def _unique(urls: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for url in urls:
        if url not in seen:
            seen.add(url)
            out.append(url)
    return out


def _is_thumbnail(url: str) -> bool:
    lowered = url.lower()
    return any(marker in lowered for marker in _THUMB_MARKERS)


def extract_manifest_url(js: str) -> str | None:
    """First ``.m3u8`` URL: ``file:"..."`` literal first, then a bare URL."""
    normalized = _normalize_quotes(js)
    m = _FILE_M3U8_RE.search(normalized)
    if m:
        return m.group(1)
    m = _BARE_M3U8_RE.search(normalized)
    if m:
        return m.group(0)
    return None


def clean_manifest_url(url: str) -> str:
    """Rewrite the broken ``&i=<digits>,'.4&`` index parameter to ``&i=0.4&``."""
    return _INDEX_QUIRK_RE.sub("&i=0.4&", url, count=1)


def subtitle_language(url: str, pattern: str = "strict") -> str | None:
    """Language code from a trailing ``_xxx.vtt`` suffix."""
    m = LANGUAGE_PATTERNS[pattern].search(url)
    return m.group(1) if m else None


def extract_vtt_tracks(
    js: str, language_pattern: str = "strict"
) -> tuple[list[Track], list[Track]]:
    """Split all ``.vtt`` URLs into ``(subtitles, thumbnails)``."""
    subtitles: list[Track] = []
    thumbnails: list[Track] = []
    for url in _unique(_VTT_RE.findall(_normalize_quotes(js))):
        if _is_thumbnail(url):
            thumbnails.append(
                Track(uri=url, kind=TrackKind.THUMBNAIL, title="Thumbnails")
            )
            continue
        code = subtitle_language(url, language_pattern)
        if code:
            subtitles.append(
                Track(uri=url, kind=TrackKind.SUBTITLE, language=code, title=code)
            )
        else:
            subtitles.append(Track(uri=url, kind=TrackKind.SUBTITLE))
    return subtitles, thumbnails


def extract_sprite_images(js: str) -> list[Track]:
    """``.jpg``/``.png`` sprite sheets referenced by the player."""
    tracks: list[Track] = []
    for url in _unique(_SPRITE_RE.findall(_normalize_quotes(js))):
        if not _is_thumbnail(url):
            continue
        tracks.append(
            Track(
                uri=url,
                kind=TrackKind.IMAGE_SPRITE,
                title="Thumbnails",
                format=url.rsplit(".", 1)[-1].upper(),
            )
        )
    return tracks


def extract_links(js: str | None, language_pattern: str = "strict") -> ExtractedLinks:
    """Aggregate manifest, subtitle and thumbnail extraction."""
    if not js:
        return ExtractedLinks()

    manifest = extract_manifest_url(js)
    subtitles, thumbnails = extract_vtt_tracks(js, language_pattern)
    thumbnails.extend(extract_sprite_images(js))
    return ExtractedLinks(
        manifest_url=clean_manifest_url(manifest) if manifest else None,
        subtitles=subtitles,
        thumbnails=thumbnails,
    )
