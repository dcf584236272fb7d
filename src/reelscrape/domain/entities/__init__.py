from .media import (
    EmbedResolution,
    Episode,
    ExtractedLinks,
    MediaKind,
    MovieLink,
    PlayerDescriptor,
    SeasonGroup,
    StreamResult,
    TitlePage,
    Track,
    TrackKind,
)

__all__ = [
    "EmbedResolution",
    "Episode",
    "ExtractedLinks",
    "MediaKind",
    "MovieLink",
    "PlayerDescriptor",
    "SeasonGroup",
    "StreamResult",
    "TitlePage",
    "Track",
    "TrackKind",
]
