"""Symbolic namespace names.

A namespace name is a dotted sequence of identifiers (``pkg.sub.mod``).
Names are independent of where the module is physically stored.
"""

from __future__ import annotations

import keyword
from pathlib import PurePosixPath

INIT_STEM = "__init__"


def is_valid_name(name: object) -> bool:
    """Check whether *name* is a well-formed absolute dotted module name."""
    if not isinstance(name, str) or not name:
        return False
    return all(part.isidentifier() and not keyword.iskeyword(part) for part in name.split("."))


def name_from_relative(relative: str, suffixes: tuple[str, ...] = (".py",)) -> str | None:
    """Derive the dotted name a source file at *relative* would define.

    ``pkg/mod.py`` -> ``pkg.mod``; ``pkg/__init__.py`` -> ``pkg``.
    Returns None if the path does not map onto a valid module name.
    """
    path = PurePosixPath(relative.replace("\\", "/"))
    suffix = next((s for s in suffixes if path.name.endswith(s)), None)
    if suffix is None:
        return None

    stem = path.name[: -len(suffix)]
    parts = [p for p in path.parent.parts if p not in ("", ".")]
    if stem != INIT_STEM:
        parts.append(stem)
    # each segment must be one identifier; "core.test.py" is not module "core.test"
    if not parts or any("." in part for part in parts):
        return None

    name = ".".join(parts)
    return name if is_valid_name(name) else None
