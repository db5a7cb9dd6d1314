"""Structured store interface for news records."""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

from midnews.ingestion.news_types import NewsRecord


class StoreError(Exception):
    """Custom exception for store operations"""
    pass


class NewsStore:
    """Records keyed by publication timestamp; `save_all` is last-write-wins."""

    def find_by_timestamp(self, published_at: datetime) -> List[NewsRecord]:
        raise NotImplementedError

    def save_all(self, records: Sequence[NewsRecord]) -> int:
        raise NotImplementedError

    def find_between(self, start: datetime, end: datetime) -> List[NewsRecord]:
        raise NotImplementedError


def open_store(config) -> NewsStore:
    """Postgres when PG_DSN is configured, otherwise the local SQLite file."""
    if config.pg_dsn:
        from midnews.storage.postgres_news import PostgresNewsStore

        return PostgresNewsStore(config.pg_dsn)
    from midnews.storage.sqlite_news import SQLiteNewsStore

    return SQLiteNewsStore(config.db_path)
