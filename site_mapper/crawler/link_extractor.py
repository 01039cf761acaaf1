# site_mapper/crawler/link_extractor.py
"""
Extraction of same-host links and asset references from page markup.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Set, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mapper.logger import LOGGER_NAME
from site_mapper.utils import extract_host, request_uri, resolve_url

__all__ = ("TAG_ATTRIBUTES", "scan")

logger = logging.getLogger(LOGGER_NAME)

#: The single attribute read for every tag the scanner looks at.
TAG_ATTRIBUTES: Dict[str, str] = {
    "a": "href",
    "script": "src",
    "img": "src",
    "link": "href",
}


def scan(content: str, base_url: str) -> Tuple[List[str], List[str]]:
    """
    Return ``(links, assets)`` found in *content*, both sorted and unique.

    Links are request URIs of anchors on the host of *base_url*, excluding the
    page itself. Assets are the raw ``src``/``href`` values of scripts, images
    and ``<link>`` tags, whatever host they point to.
    """
    soup = BeautifulSoup(content, "html.parser")
    base_host = extract_host(base_url)
    base_uri = request_uri(base_url)
    links: Set[str] = set()
    assets: Set[str] = set()

    for tag in soup.find_all(list(TAG_ATTRIBUTES)):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(TAG_ATTRIBUTES[tag.name])
        if not isinstance(value, str) or not value:
            continue

        if tag.name != "a":
            assets.add(value)
            continue

        try:
            absolute = resolve_url(base_url, value)
            host = extract_host(absolute)
        except ValueError as exc:
            logger.warning("Skipping unparsable link %r on %s: %s", value, base_url, exc)
            continue
        if host != base_host:
            continue
        uri = request_uri(absolute)
        if uri != base_uri:
            links.add(uri)

    return sorted(links), sorted(assets)
