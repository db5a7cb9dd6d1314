"""Article content capture.

Policy:
- One article at a time, with a randomized pause before each page load.
- Failures never propagate: a record whose page could not be captured keeps
  `content=None` and the batch continues.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlparse

from selenium.common.exceptions import TimeoutException

from midnews.ingestion.news_types import NewsRecord
from midnews.rendering.browser import DEFAULT_WAIT_SECONDS, PageRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentResult:
    markup: Optional[str]
    status: str
    error: Optional[str] = None
    delay_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _validate_fetch_url(url: str) -> Optional[str]:
    """Return error string if URL should not be loaded."""
    try:
        p = urlparse(url)
    except ValueError:
        return "invalid_url"
    if p.scheme not in ("http", "https"):
        return "bad_scheme"
    if not p.netloc:
        return "missing_host"
    return None


def pick_delay_ms(min_ms: int, max_ms: int, rng=random) -> int:
    """Uniform delay in [min_ms, max_ms)."""
    if max_ms <= min_ms:
        return max(0, min_ms)
    return rng.randrange(min_ms, max_ms)


class ContentFetcher:
    def __init__(
        self,
        renderer: PageRenderer,
        *,
        content_class: str,
        timeout: float = DEFAULT_WAIT_SECONDS,
        min_delay_ms: int = 0,
        max_delay_ms: int = 0,
        sleep: Callable[[float], None] = time.sleep,
        rng=random,
    ):
        self.renderer = renderer
        self.content_class = content_class
        self.timeout = timeout
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.sleep = sleep
        self.rng = rng

    def fetch(self, record: NewsRecord) -> ContentResult:
        url = record.url
        err = _validate_fetch_url(url)
        if err:
            logger.warning(f"Refusing to load {url!r}: {err}")
            return ContentResult(markup=None, status="blocked", error=err)

        delay = pick_delay_ms(self.min_delay_ms, self.max_delay_ms, self.rng)
        logger.info(f"Waiting {delay} ms before opening {url}")
        self.sleep(delay / 1000.0)

        try:
            self.renderer.navigate(url)
            element = self.renderer.wait_for_visible(self.content_class, self.timeout)
            markup = element.outer_markup()
        except TimeoutException as e:
            logger.warning(f"Content container did not appear within {self.timeout}s for {url}")
            return ContentResult(markup=None, status="timeout", error=str(e) or "timeout", delay_ms=delay)
        except Exception as e:
            logger.warning(f"Failed to capture content for {url}: {e}", exc_info=True)
            return ContentResult(markup=None, status="error", error=str(e), delay_ms=delay)

        if not markup or not markup.strip():
            logger.warning(f"Empty content container for {url}")
            return ContentResult(markup=None, status="empty", error="empty_markup", delay_ms=delay)
        return ContentResult(markup=markup, status="ok", delay_ms=delay)
