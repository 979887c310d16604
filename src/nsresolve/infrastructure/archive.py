"""Archive reader for zip-format classpath entries (.zip, .egg, .whl, .pyz, .jar).

Members are yielded lazily while the archive is open; each comes with a
loader bound to the open handle. Closing the generator closes the archive.
"""

from __future__ import annotations

import functools
import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path

ARCHIVE_SCHEME = "archive:"
_ENTRY_SEP = "!/"


def archive_uri(archive: Path, entry: str) -> str:
    """Virtual path of *entry* inside *archive*: ``archive:<archive>!/<entry>``."""
    return f"{ARCHIVE_SCHEME}{archive}{_ENTRY_SEP}{entry}"


def iter_archive_members(
    archive: Path,
    suffixes: tuple[str, ...] = (".py",),
) -> Iterator[tuple[str, Callable[[], bytes]]]:
    """Yield ``(entry_name, loader)`` for source-bearing members in entry order.

    Raises ``OSError`` / ``zipfile.BadZipFile`` if the archive cannot be read.
    """
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            if info.is_dir() or not info.filename.endswith(suffixes):
                continue
            yield info.filename, functools.partial(zf.read, info)

