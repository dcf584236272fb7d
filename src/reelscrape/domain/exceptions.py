"""Error taxonomy for info/stream resolution."""

from __future__ import annotations


class ReelscrapeError(Exception):
    """Base error for domain/use cases."""


class ValidationError(ReelscrapeError):
    """A required request parameter is missing or blank."""


class NotFoundError(ReelscrapeError):
    """Site profile, player markup, iframe or manifest URL not found."""


class UpstreamError(ReelscrapeError):
    """Network / status / response-shape errors of the upstream site."""
