"""Per-day snapshot directories.

Layout under the archive root:

    {base}/01-03-2024/1.html        raw article markup, numbered densely
    {base}/01-03-2024/2.html
    {base}/01-03-2024/index.html    header line + one <p> per article, newest first

File numbers are re-derived from the directory contents on every write, so
they survive restarts; overlapping runs are kept apart by the run lock.
"""

from __future__ import annotations

import html
import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Union

from midnews.archive.html_files import read_lines, write_lines_atomic, write_text_atomic
from midnews.ingestion.news_types import NewsRecord

logger = logging.getLogger(__name__)

DAY_DIR_FORMAT = "%d-%m-%Y"
INDEX_NAME = "index.html"
DAY_INDEX_HEADER = '<h1 style="font-weight: bold; text-align: left;">Новости</h1>'


def day_directory_name(published_at: Optional[Union[datetime, date]]) -> str:
    day = published_at or date.today()
    return day.strftime(DAY_DIR_FORMAT)


def is_header(line: str) -> bool:
    return line.lstrip().lower().startswith("<h1")


def entry_line(record: NewsRecord, file_name: str) -> str:
    title = html.escape(record.title, quote=False)
    return f'<p>{record.display_time} - <a href="{file_name}">{title}</a></p>'


def content_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []
    return [p for p in directory.glob("*.html") if p.is_file() and p.name != INDEX_NAME]


def next_file_number(directory: Path) -> int:
    return len(content_files(directory)) + 1


def header_position(lines: List[str]) -> Optional[int]:
    for i, line in enumerate(lines):
        if is_header(line):
            return i
    return None


def prepend_entry(index_path: Path, entry: str, *, header: str = DAY_INDEX_HEADER) -> None:
    """Insert `entry` right after the header; every other line is kept verbatim."""
    lines = read_lines(index_path)
    pos = header_position(lines)
    if pos is None:
        if lines:
            logger.warning(f"{index_path} has no header line; restoring it")
        lines.insert(0, header)
        pos = 0
    lines.insert(pos + 1, entry)
    write_lines_atomic(index_path, lines)


class DayArchive:
    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)

    def ensure_base_directory(self) -> bool:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.error(f"Failed to create archive directory {self.base_dir}: {e}")
            return False

    def day_directory(self, published_at: Optional[datetime]) -> Path:
        return self.base_dir / day_directory_name(published_at)

    def store(self, record: NewsRecord) -> Optional[Path]:
        """Write the record's snapshot and index entry; returns the snapshot path.

        Records without content are not archived.
        """
        if not record.content:
            logger.info(f"No content captured for {record.url}; not archived")
            return None

        directory = self.day_directory(record.published_at)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            file_name = f"{next_file_number(directory)}.html"
            file_path = directory / file_name
            write_text_atomic(file_path, record.content)
            logger.info(f"Saved page to {file_path}")
        except (OSError, UnicodeError) as e:
            logger.warning(f"Failed to write snapshot for {record.url}: {e}")
            return None

        try:
            prepend_entry(directory / INDEX_NAME, entry_line(record, file_name))
            logger.info(f"Added index entry for: {record.title}")
        except (OSError, UnicodeError) as e:
            logger.warning(f"Failed to update {directory / INDEX_NAME} for {record.url}: {e}")
        return file_path
