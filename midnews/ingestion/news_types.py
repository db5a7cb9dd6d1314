"""Shared news record types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional


TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M"


def normalize_timestamp(ts: datetime) -> datetime:
    """Publication timestamps are compared to the minute."""
    return ts.replace(second=0, microsecond=0, tzinfo=None)


@dataclass(frozen=True)
class NewsRecord:
    """One announcement from the list page.

    `published_at` is the identity key; `content` stays None until the
    article page has been captured.
    """

    published_at: datetime
    title: str
    url: str
    content: Optional[str] = None

    @property
    def sort_key(self) -> datetime:
        return self.published_at

    @property
    def display_time(self) -> str:
        return self.published_at.strftime(TIMESTAMP_FORMAT)

    def with_content(self, content: Optional[str]) -> "NewsRecord":
        return replace(self, content=content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "publication_date": self.published_at.isoformat(timespec="minutes"),
            "title": self.title,
            "url": self.url,
            "content": self.content,
        }
