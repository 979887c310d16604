"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, nsresolve.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from nsresolve.domain.rules import DEFAULT_INLINED_PREFIXES
from nsresolve.infrastructure.classpath import DEFAULT_ARCHIVE_SUFFIXES
from nsresolve.infrastructure.scanner import DEFAULT_SKIP_DIRS, DEFAULT_SOURCE_SUFFIXES


class ResolverConfig(BaseModel):
    """[resolver] section."""

    model_config = {"frozen": True}

    # None means "use sys.path"
    classpath: list[str] | None = None
    inlined_prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_INLINED_PREFIXES))
    filter_patterns: list[str] = Field(default_factory=list)
    source_suffixes: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_SUFFIXES))
    archive_suffixes: list[str] = Field(default_factory=lambda: list(DEFAULT_ARCHIVE_SUFFIXES))
    skip_dirs: list[str] = Field(default_factory=lambda: sorted(DEFAULT_SKIP_DIRS))
    test_marker: str = "__test__"
    test_prefix: str = "test"

    @field_validator("source_suffixes", "archive_suffixes")
    @classmethod
    def _suffixes_have_dot(cls, value: list[str]) -> list[str]:
        bad = [s for s in value if not s.startswith(".")]
        if bad:
            msg = f"Suffixes must start with '.': {bad}"
            raise ValueError(msg)
        return value

