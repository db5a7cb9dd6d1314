"""SQLite-backed news store (default backend)."""

import logging
import sqlite3
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

from midnews.ingestion.news_types import NewsRecord, normalize_timestamp
from midnews.storage.news_store import NewsStore, StoreError

logger = logging.getLogger(__name__)


def _ts(value: datetime) -> str:
    return normalize_timestamp(value).isoformat(timespec="minutes")


class SQLiteNewsStore(NewsStore):
    """News records in a single `news` table keyed by publication_date."""

    def __init__(self, db_path: str = "mid_news.db"):
        self.db_path = db_path
        self.max_retries = 3
        self.retry_delay = 1.0
        self._ensure_db_directory()
        self.init_database()

    def _ensure_db_directory(self):
        db_dir = Path(self.db_path).parent
        db_dir.mkdir(parents=True, exist_ok=True)

    def init_database(self):
        with self.get_connection() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS news (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT NOT NULL,
                    title TEXT NOT NULL,
                    content TEXT,
                    publication_date TEXT NOT NULL UNIQUE,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            conn.execute('CREATE INDEX IF NOT EXISTS idx_news_publication_date ON news (publication_date)')
            conn.commit()

    @contextmanager
    def get_connection(self):
        """Get database connection with retries while the file is locked"""
        conn = None
        for attempt in range(self.max_retries):
            try:
                conn = sqlite3.connect(self.db_path, timeout=30.0, check_same_thread=False)
                conn.row_factory = sqlite3.Row
                conn.execute('PRAGMA journal_mode=WAL;')
                conn.execute('PRAGMA synchronous=NORMAL;')
                break
            except sqlite3.OperationalError as e:
                if conn:
                    conn.close()
                    conn = None
                if "database is locked" in str(e) and attempt < self.max_retries - 1:
                    logger.warning(f"Database locked, retrying in {self.retry_delay}s (attempt {attempt + 1})")
                    time.sleep(self.retry_delay)
                    continue
                raise StoreError(f"Database connection failed: {e}")
        try:
            yield conn
        except sqlite3.Error as e:
            raise StoreError(f"Unexpected database error: {e}")
        finally:
            conn.close()

    def _row_to_record(self, row) -> NewsRecord:
        return NewsRecord(
            published_at=datetime.fromisoformat(row['publication_date']),
            title=row['title'],
            url=row['url'],
            content=row['content'],
        )

    def find_by_timestamp(self, published_at: datetime) -> List[NewsRecord]:
        with self.get_connection() as conn:
            cursor = conn.execute(
                'SELECT * FROM news WHERE publication_date = ?',
                (_ts(published_at),),
            )
            return [self._row_to_record(row) for row in cursor.fetchall()]

    def save_all(self, records: Sequence[NewsRecord]) -> int:
        """Upsert records by publication_date; returns the number written."""
        if not records:
            return 0
        with self.get_connection() as conn:
            for r in records:
                conn.execute(
                    '''
                    INSERT INTO news (url, title, content, publication_date)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT (publication_date) DO UPDATE SET
                        url = excluded.url,
                        title = excluded.title,
                        content = excluded.content,
                        updated_at = CURRENT_TIMESTAMP
                    ''',
                    (r.url, r.title, r.content, _ts(r.published_at)),
                )
            conn.commit()
        logger.info(f"Saved {len(records)} news records")
        return len(records)

    def find_between(self, start: datetime, end: datetime) -> List[NewsRecord]:
        with self.get_connection() as conn:
            cursor = conn.execute(
                '''
                SELECT * FROM news
                WHERE publication_date BETWEEN ? AND ?
                ORDER BY publication_date ASC
                ''',
                (_ts(start), _ts(end)),
            )
            return [self._row_to_record(row) for row in cursor.fetchall()]

    def count(self) -> int:
        with self.get_connection() as conn:
            return int(conn.execute('SELECT COUNT(*) FROM news').fetchone()[0])
