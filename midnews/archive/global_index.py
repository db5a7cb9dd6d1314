"""Top-level index linking every day directory.

    <h1>НОВОСТИ МИД</h1>
    <p><a href="02-03-2024/index.html">02-03-2024</a></p>
    <p><a href="01-03-2024/index.html">01-03-2024</a></p>

Day directories are enumerated by name, descending lexicographically. That is
not chronological across months or years (`01-04-2024` sorts before
`02-03-2024`); existing archives rely on this ordering so it is kept.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Set, Union

from bs4 import BeautifulSoup

from midnews.archive.day_index import INDEX_NAME
from midnews.archive.html_files import read_lines, write_lines_atomic

logger = logging.getLogger(__name__)

GLOBAL_INDEX_NAME = "mid_news_index.html"
GLOBAL_INDEX_HEADER = "<h1>НОВОСТИ МИД</h1>"
DAY_DIR_RE = re.compile(r"^\d{2}-\d{2}-\d{4}$")


def day_link(day: str) -> str:
    return f"{day}/{INDEX_NAME}"


def entry_line(day: str) -> str:
    return f'<p><a href="{day_link(day)}">{day}</a></p>'


def _header_position(lines: List[str]) -> Optional[int]:
    for i, line in enumerate(lines):
        if "<h1" in line.lower():
            return i
    return None


class GlobalIndex:
    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)
        self.path = self.base_dir / GLOBAL_INDEX_NAME

    def existing_links(self) -> Set[str]:
        if not self.path.exists():
            return set()
        soup = BeautifulSoup("\n".join(read_lines(self.path)), "html.parser")
        return {a["href"] for a in soup.find_all("a", href=True)}

    def day_directories(self) -> List[str]:
        if not self.base_dir.is_dir():
            return []
        days = [
            p.name
            for p in self.base_dir.iterdir()
            if p.is_dir() and DAY_DIR_RE.match(p.name) and (p / INDEX_NAME).is_file()
        ]
        return sorted(days, reverse=True)

    def add_day(self, day: str) -> None:
        """Read-modify-write: one header, new day directly below it."""
        lines = read_lines(self.path)
        pos = _header_position(lines)
        if pos is None:
            lines.insert(0, GLOBAL_INDEX_HEADER)
            pos = 0
        lines.insert(pos + 1, entry_line(day))
        write_lines_atomic(self.path, lines)

    def update(self) -> List[str]:
        """Link every day directory not yet in the index; returns the days added."""
        added: List[str] = []
        try:
            known = self.existing_links()
            new_days = [d for d in self.day_directories() if day_link(d) not in known]
            # Each insert lands right below the header, so walk from the tail
            # to leave the file in descending order.
            for day in reversed(new_days):
                self.add_day(day)
                added.append(day)
        except (OSError, UnicodeError) as e:
            logger.warning(f"Failed to update global index {self.path}: {e}")
            return added
        if added:
            logger.info(f"Global index updated with {len(added)} day(s): {', '.join(added)}")
        else:
            logger.info("Global index already up to date")
        return added
