"""Player markup and admin-ajax reply parsing."""

from __future__ import annotations

import re
from typing import Any

from reelscrape.domain.entities.media import PlayerDescriptor
from reelscrape.infrastructure.common.html_selectors import extract_attr, parse_html

_IFRAME_SRC_RE = re.compile(r"""<iframe[^>]+src=["']([^"']+)["'][^>]*>""", re.IGNORECASE)


def extract_player_descriptor(html: str, selector: str) -> PlayerDescriptor | None:
    """Read ``data-post``/``data-nume``/``data-type`` of the player option.

    Returns ``None`` if the element or any of the three tokens is missing.
    """
    soup = parse_html(html)
    post_id = extract_attr(soup, selector, "data-post")
    nume = extract_attr(soup, selector, "data-nume")
    type_value = extract_attr(soup, selector, "data-type")
    if not (post_id and nume and type_value):
        return None
    return PlayerDescriptor(post_id=post_id, nume=nume, type_value=type_value)


def extract_iframe_url(payload: Any) -> str | None:
    """Iframe URL from the ``doo_player_ajax`` JSON reply.

    ``embed_url`` is either an ``<iframe src="...">`` snippet or a bare URL.
    """
    if not isinstance(payload, dict):
        return None
    embed = payload.get("embed_url")
    if not isinstance(embed, str) or not embed.strip():
        return None
    m = _IFRAME_SRC_RE.search(embed)
    if m:
        return m.group(1)
    return embed.strip()
