"""Turn announcement list elements into candidate news records.

Each announcement item renders as two or more lines of text:

    01.03.2024 10:00
    Title of the announcement

The first 16 characters of the first line carry the publication timestamp,
the rest of the text is the title. A malformed timestamp or a missing link
aborts the run: the list page layout changed and partial results would be
misleading. An item with an empty title is skipped.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional

from midnews.ingestion.news_types import TIMESTAMP_FORMAT, NewsRecord, normalize_timestamp
from midnews.rendering.browser import PageElement, PageRenderer

logger = logging.getLogger(__name__)

TIMESTAMP_WIDTH = 16
TIMESTAMP_RE = re.compile(r"^\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}$")


class ExtractionError(Exception):
    """The announcement page could not be turned into records."""
    pass


def parse_timestamp(segment: str) -> datetime:
    raw = segment[:TIMESTAMP_WIDTH].strip()
    if not TIMESTAMP_RE.match(raw):
        raise ExtractionError(f"Malformed publication timestamp {raw!r}")
    try:
        return normalize_timestamp(datetime.strptime(raw, TIMESTAMP_FORMAT))
    except ValueError as e:
        raise ExtractionError(f"Malformed publication timestamp {raw!r}") from e


def parse_element(element: PageElement) -> Optional[NewsRecord]:
    """Parse one list element; returns None for elements that are not news items."""
    text = element.text or ""
    parts = text.split("\n", 1)
    if len(parts) != 2:
        logger.debug(f"Skipping element without a line break: {text[:60]!r}")
        return None

    published_at = parse_timestamp(parts[0])
    title = parts[1].strip()
    if not title:
        logger.warning(f"Skipping item published {published_at:%d.%m.%Y %H:%M} with an empty title")
        return None

    link = element.first_link()
    if not link:
        raise ExtractionError(f"No link found for item {title[:60]!r}")

    return NewsRecord(published_at=published_at, title=title, url=link.strip())


def extract_candidates(elements: Iterable[PageElement]) -> List[NewsRecord]:
    out: List[NewsRecord] = []
    for element in elements:
        record = parse_element(element)
        if record is not None:
            out.append(record)
    return out


def load_announcements(renderer: PageRenderer, *, url: str, content_class: str, item_class: str, timeout: float) -> List[PageElement]:
    """Open the list page and return its announcement elements."""
    try:
        renderer.navigate(url)
        container = renderer.wait_for_visible(content_class, timeout)
        items = container.find_all(item_class)
    except Exception as e:
        raise ExtractionError(f"Failed to load announcement list {url}: {e}") from e
    logger.info(f"Found {len(items)} announcement elements on {url}")
    return items
