"""Postgres news store (psycopg + plain SQL)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Sequence

import psycopg

from midnews.ingestion.news_types import NewsRecord, normalize_timestamp
from midnews.storage.news_store import NewsStore, StoreError
from midnews.storage.postgres_schema import ensure_postgres_schema

logger = logging.getLogger(__name__)


class PostgresNewsStore(NewsStore):
    def __init__(self, pg_dsn: str, *, ensure_schema: bool = True):
        self.pg_dsn = pg_dsn
        if ensure_schema:
            try:
                ensure_postgres_schema(pg_dsn)
            except psycopg.Error as e:
                raise StoreError(f"Postgres schema setup failed: {e}") from e

    def _connect(self, **kwargs):
        return psycopg.connect(self.pg_dsn, **kwargs)

    def _select(self, sql: str, params) -> List[NewsRecord]:
        try:
            with self._connect() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise StoreError(f"Postgres query failed: {e}") from e
        return [
            NewsRecord(published_at=published_at, title=title, url=url, content=content)
            for url, title, content, published_at in rows
        ]

    def find_by_timestamp(self, published_at: datetime) -> List[NewsRecord]:
        return self._select(
            "SELECT url, title, content, publication_date FROM news WHERE publication_date = %s",
            (normalize_timestamp(published_at),),
        )

    def find_between(self, start: datetime, end: datetime) -> List[NewsRecord]:
        return self._select(
            """
            SELECT url, title, content, publication_date
            FROM news
            WHERE publication_date BETWEEN %s AND %s
            ORDER BY publication_date ASC
            """,
            (normalize_timestamp(start), normalize_timestamp(end)),
        )

    def save_all(self, records: Sequence[NewsRecord]) -> int:
        if not records:
            return 0
        try:
            with self._connect(autocommit=True) as conn:
                with conn.cursor() as cur:
                    for r in records:
                        cur.execute(
                            """
                            INSERT INTO news (url, title, content, publication_date)
                            VALUES (%(url)s, %(title)s, %(content)s, %(publication_date)s)
                            ON CONFLICT (publication_date) DO UPDATE SET
                              url = EXCLUDED.url,
                              title = EXCLUDED.title,
                              content = EXCLUDED.content,
                              updated_at = now()
                            """,
                            {
                                "url": r.url,
                                "title": r.title,
                                "content": r.content,
                                "publication_date": normalize_timestamp(r.published_at),
                            },
                        )
        except psycopg.Error as e:
            raise StoreError(f"Postgres save failed: {e}") from e
        logger.info(f"Saved {len(records)} news records to Postgres")
        return len(records)
