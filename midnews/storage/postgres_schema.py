"""Postgres schema management for the news archive.

Schema creation is idempotent (CREATE IF NOT EXISTS) and runs on every store
start-up.
"""

from __future__ import annotations

from typing import Iterable, Optional

import psycopg


SCHEMA_STATEMENTS: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS news (
      id BIGSERIAL PRIMARY KEY,
      url TEXT NOT NULL,
      title TEXT NOT NULL,
      content TEXT,
      publication_date TIMESTAMP NOT NULL UNIQUE,
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    );
    """,
    # Older deployments created content as NOT NULL
    "ALTER TABLE news ALTER COLUMN content DROP NOT NULL;",
    "CREATE INDEX IF NOT EXISTS idx_news_publication_date ON news (publication_date DESC);",
]


def ensure_postgres_schema(pg_dsn: str, *, statements: Optional[Iterable[str]] = None) -> None:
    """Ensure Postgres schema exists."""
    stmts = list(statements) if statements is not None else SCHEMA_STATEMENTS
    with psycopg.connect(pg_dsn, autocommit=True) as conn:
        with conn.cursor() as cur:
            for s in stmts:
                cur.execute(s)
