"""Locate ``nsresolve.toml``; ``NsSettings`` reads and validates it.

Lookup order: the ``NSRESOLVE_CONFIG`` env var, then a walk up from the
start directory to the filesystem root (the way git finds ``.git/``).
A ``--config`` flag bypasses both; see ``NsSettings.from_cli``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "nsresolve.toml"
CONFIG_ENV_VAR = "NSRESOLVE_CONFIG"


def iter_config_candidates(start: Path | None = None) -> Iterator[Path]:
    """Yield ``nsresolve.toml`` paths from *start* (default: cwd) upward."""
    current = (start or Path.cwd()).resolve()
    yield current / CONFIG_FILENAME
    for parent in current.parents:
        yield parent / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start*, or None.

    An ``NSRESOLVE_CONFIG`` naming a missing file disables the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((c for c in iter_config_candidates(start) if c.is_file()), None)

