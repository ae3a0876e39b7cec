"""Parser for the space-weather news RSS feed."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from bs4 import BeautifulSoup

from heliodash.parsers._types import NewsArticle

logger = logging.getLogger(__name__)

MAX_ARTICLES: int = 10

_MEDIA_NS = "{http://search.yahoo.com/mrss/}"
_PUBLISHER_SUFFIX = re.compile(r"\s*-\s*[^-]+$")


def _text(item: ET.Element, tag: str) -> str:
    node = item.find(tag)
    return (node.text or "").strip() if node is not None else ""


def _published(value: str) -> datetime | None:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _image(item: ET.Element, description: str) -> str:
    for tag in (f"{_MEDIA_NS}content", f"{_MEDIA_NS}thumbnail", "enclosure"):
        node = item.find(tag)
        if node is not None and node.get("url"):
            return node.get("url", "")
    if not description:
        return ""
    img = BeautifulSoup(description, "html.parser").find("img", src=True)
    return img["src"] if img is not None else ""


def parse_news(xml: Any, limit: int = MAX_ARTICLES) -> list[NewsArticle]:
    """Parse RSS ``<item>`` elements into articles, newest first.

    Items without a title or link are skipped. The trailing
    `` - Publisher`` suffix is removed from titles.

    Args:
        xml: RSS document text.
        limit: Maximum number of articles returned.

    Returns:
        Articles sorted by publication time, undated ones last.
    """
    if isinstance(xml, (bytes, bytearray)):
        xml = xml.decode("utf-8", errors="replace")
    try:
        root = ET.fromstring(xml or "")
    except ET.ParseError:
        logger.debug("Discarding news feed that is not valid XML")
        return []

    articles = []
    for item in root.iter("item"):
        title = _text(item, "title")
        link = _text(item, "link")
        if not title or not link:
            continue
        source = item.find("source")
        articles.append(
            NewsArticle(
                title=_PUBLISHER_SUFFIX.sub("", title),
                link=link,
                published=_published(_text(item, "pubDate")),
                source=(source.text or "").strip() if source is not None else "",
                source_url=source.get("url", "") if source is not None else "",
                image_url=_image(item, _text(item, "description")),
            )
        )

    dated = sorted((a for a in articles if a.published), key=lambda a: a.published, reverse=True)
    undated = [a for a in articles if a.published is None]
    return (dated + undated)[:limit]
