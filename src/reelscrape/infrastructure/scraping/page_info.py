"""Title page extraction (title, synopsis, image, seasons/episodes)."""

from __future__ import annotations

from bs4 import Tag

from reelscrape.domain.entities.media import (
    Episode,
    MediaKind,
    MovieLink,
    SeasonGroup,
    TitlePage,
)
from reelscrape.infrastructure.common.html_selectors import (
    child_elements,
    extract_attr,
    extract_own_text,
    extract_text,
    parse_html,
)
from reelscrape.infrastructure.common.urls import path_segment
from reelscrape.infrastructure.config.schema import SiteProfile, SiteSelectors


def _episode_ordinal(numbering: str, position: int) -> str:
    """Second component of a ``"1 - 5"`` numbering, else the 1-based position."""
    parts = numbering.split("-")
    if len(parts) > 1 and parts[1].strip():
        return parts[1].strip()
    return str(position)


def _parse_episodes(season: Tag, selectors: SiteSelectors) -> list[Episode]:
    episodes: list[Episode] = []
    for position, item in enumerate(
        child_elements(season, selectors.episode_list), start=1
    ):
        link = extract_attr(item, selectors.episode_link, "href")
        if not link:
            continue
        numbering = extract_text(item, selectors.episode_number)
        episodes.append(
            Episode(title=f"Episode {_episode_ordinal(numbering, position)}", link=link)
        )
    return episodes


def _parse_seasons(root: Tag, selectors: SiteSelectors) -> list[SeasonGroup]:
    seasons: list[SeasonGroup] = []
    for block in child_elements(root, selectors.seasons):
        label = extract_own_text(block, selectors.season_title)
        episodes = _parse_episodes(block, selectors)
        if label and episodes:
            seasons.append(SeasonGroup(title=label, episodes=episodes))
    return seasons


def extract_title_page(html: str, url: str, site: SiteProfile) -> TitlePage:
    """Build a ``TitlePage`` from the raw page *html* at canonical *url*."""
    soup = parse_html(html)
    selectors = site.selectors

    kind = MediaKind.SERIES if site.series_marker in url else MediaKind.MOVIE
    title = path_segment(url, site.title_segment_index).replace("-", " ")
    synopsis = extract_text(soup, selectors.synopsis)
    image = extract_attr(soup, selectors.image, "href")

    if kind is MediaKind.SERIES:
        links: list[SeasonGroup] | list[MovieLink] = _parse_seasons(soup, selectors)
    else:
        links = [MovieLink(title=title, link=url)]

    return TitlePage(
        title=title,
        synopsis=synopsis,
        image=image,
        kind=kind,
        links=links,
    )
