"""URL helpers shared by extractors, resolvers and use cases."""

from __future__ import annotations

from urllib.parse import urlparse


def normalize_link(base_url: str, link: str) -> str:
    """Make *link* absolute against the site's *base_url*.

    ``/movies/x/`` and ``movies/x/`` both become ``<base>/movies/x/``;
    absolute http(s) links are returned unchanged.
    """
    base = base_url.rstrip("/")
    if link.startswith(base) or link.startswith(("http://", "https://")):
        return link
    sep = "" if link.startswith("/") else "/"
    return f"{base}{sep}{link}"


def origin_of(url: str) -> str:
    """``scheme://host[:port]`` of *url*."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def hostname_of(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def last_path_segment(url: str) -> str:
    """Last non-empty path segment (query and fragment ignored)."""
    segments = [s for s in urlparse(url).path.split("/") if s]
    return segments[-1] if segments else ""


def path_segment(url: str, index: int) -> str:
    """Segment *index* of ``url.split("/")``, empty when out of range.

    For ``https://host/movies/some-title/`` index 4 is ``some-title``.
    """
    parts = url.split("/")
    if 0 <= index < len(parts):
        return parts[index]
    return ""
