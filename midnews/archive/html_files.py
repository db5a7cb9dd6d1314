"""Small file helpers shared by the day and global indexes.

Index files are read and written with `surrogateescape`, so bytes that are
not valid UTF-8 in an existing index survive a rewrite unchanged.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Sequence

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def read_lines(path: Path) -> List[str]:
    if not path.exists():
        return []
    return path.read_text(encoding=ENCODING, errors=ERRORS).splitlines()


def write_text_atomic(path: Path, text: str) -> None:
    """Replace `path` in one step so readers never see a half-written file."""
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding=ENCODING, errors=ERRORS, newline="\n") as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def write_lines_atomic(path: Path, lines: Sequence[str]) -> None:
    write_text_atomic(path, "".join(line + "\n" for line in lines))
