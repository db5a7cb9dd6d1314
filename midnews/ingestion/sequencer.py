"""Decide which extracted candidates are new.

Identity is the publication timestamp, to the minute. A candidate is new when
the store holds no record with that exact timestamp and no earlier candidate
of the same run already claimed it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Set

from midnews.ingestion.news_types import NewsRecord
from midnews.storage.news_store import NewsStore

logger = logging.getLogger(__name__)


class DedupSequencer:
    def __init__(self, store: NewsStore):
        self.store = store
        self._pending: List[NewsRecord] = []
        self._claimed: Set[datetime] = set()

    @property
    def pending(self) -> List[NewsRecord]:
        """Accepted records, ascending by publication timestamp."""
        return list(self._pending)

    def offer(self, candidate: NewsRecord) -> bool:
        ts = candidate.published_at
        if ts in self._claimed:
            logger.info(f"Duplicate timestamp within this run, skipping: {ts:%d.%m.%Y %H:%M}")
            return False
        if self.store.find_by_timestamp(ts):
            logger.info(f"Already stored: {ts:%d.%m.%Y %H:%M}")
            return False
        self._claimed.add(ts)
        self._pending.append(candidate)
        self._pending.sort(key=lambda r: r.sort_key)
        logger.info(f"Accepted new item: {ts:%d.%m.%Y %H:%M}")
        return True


def sequence_new(candidates: Iterable[NewsRecord], store: NewsStore) -> List[NewsRecord]:
    seq = DedupSequencer(store)
    for c in candidates:
        seq.offer(c)
    return seq.pending
