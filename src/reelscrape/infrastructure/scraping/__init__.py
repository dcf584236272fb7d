"""Pure extractors: HTML/JS text in, domain entities out (no I/O)."""

from .link_extractor import extract_links
from .packer import unpack_packed_script
from .page_info import extract_title_page
from .player import extract_iframe_url, extract_player_descriptor

__all__ = [
    "extract_iframe_url",
    "extract_links",
    "extract_player_descriptor",
    "extract_title_page",
    "unpack_packed_script",
]
