"""One scrape run: list page -> new records -> snapshots -> indexes.

Order of operations:
1. Load the announcement list and parse candidates (fatal on malformed items).
2. Keep candidates whose publication timestamp is not stored yet, ascending.
3. Save those records immediately, so their existence never depends on the
   article fetch.
4. For each record: capture the article page, write the day snapshot/index.
5. Save captured content (last write wins per timestamp).
6. Link any new day directories from the global index.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from midnews.archive.day_index import DayArchive
from midnews.archive.global_index import GlobalIndex
from midnews.config import Config
from midnews.extraction.content import ContentFetcher
from midnews.ingestion.extractor import extract_candidates, load_announcements
from midnews.ingestion.news_types import NewsRecord
from midnews.ingestion.sequencer import sequence_new
from midnews.locking import ProcessLock
from midnews.rendering.browser import PageRenderer, chrome_renderer_from_config
from midnews.storage.news_store import NewsStore, open_store

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    candidates: int = 0
    accepted: List[NewsRecord] = field(default_factory=list)
    archived: List[Path] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    new_days: List[str] = field(default_factory=list)
    skipped: bool = False

    def summary(self) -> str:
        if self.skipped:
            return "run skipped (another run holds the lock)"
        return (
            f"candidates={self.candidates} accepted={len(self.accepted)} "
            f"archived={len(self.archived)} failed={len(self.failed)} new_days={len(self.new_days)}"
        )


class NewsPipeline:
    def __init__(
        self,
        config: Config,
        store: NewsStore,
        renderer_factory: Callable[[], PageRenderer],
        *,
        sleep: Callable[[float], None] = time.sleep,
        rng=random,
    ):
        self.config = config
        self.store = store
        self.renderer_factory = renderer_factory
        self.sleep = sleep
        self.rng = rng
        self.archive = DayArchive(config.base_dir)
        self.global_index = GlobalIndex(config.base_dir)

    def run(self) -> RunReport:
        report = RunReport()
        self.archive.ensure_base_directory()

        with self.renderer_factory() as renderer:
            elements = load_announcements(
                renderer,
                url=self.config.main_page_url,
                content_class=self.config.page_content_class,
                item_class=self.config.announce_item_class,
                timeout=self.config.wait_timeout,
            )
            candidates = extract_candidates(elements)
            report.candidates = len(candidates)

            accepted = sequence_new(candidates, self.store)
            report.accepted = accepted
            if not accepted:
                logger.info("No new announcements")
            else:
                self.store.save_all(accepted)

            fetcher = ContentFetcher(
                renderer,
                content_class=self.config.page_content_class,
                timeout=self.config.wait_timeout,
                min_delay_ms=self.config.random_delay_min,
                max_delay_ms=self.config.random_delay_max,
                sleep=self.sleep,
                rng=self.rng,
            )
            captured: List[NewsRecord] = []
            for record in accepted:
                res = fetcher.fetch(record)
                if not res.ok:
                    report.failed.append(record.url)
                    continue
                record = record.with_content(res.markup)
                captured.append(record)
                path = self.archive.store(record)
                if path is not None:
                    report.archived.append(path)

            if captured:
                self.store.save_all(captured)

        report.new_days = self.global_index.update()
        logger.info(f"Run finished: {report.summary()}")
        return report


def run_once(
    config: Config,
    *,
    store: Optional[NewsStore] = None,
    renderer_factory: Optional[Callable[[], PageRenderer]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunReport:
    """Run the pipeline under the run lock; a locked-out run is skipped."""
    lock = ProcessLock(config.lock_file)
    if not lock.acquire():
        logger.warning("Skipping run: previous run still in progress")
        return RunReport(skipped=True)
    try:
        pipeline = NewsPipeline(
            config,
            store if store is not None else open_store(config),
            renderer_factory or (lambda: chrome_renderer_from_config(config)),
            sleep=sleep,
        )
        return pipeline.run()
    finally:
        lock.release()
