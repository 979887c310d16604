"""Loaded-namespace classification rules.

Two rule tables, both plain data:

- ``inlined_prefixes``: literal prefixes written by dependency-relocation
  tools (mranderson, dolly, pip's ``_vendor`` tree) when they copy a
  third-party library into a private namespace.
- ``filter_patterns``: caller-supplied regular expressions, matched with
  ``re.search`` (anywhere in the name, not anchored).
"""

from __future__ import annotations

import re
from functools import cached_property

from pydantic import BaseModel

from nsresolve.domain.types import NamespaceClass

DEFAULT_INLINED_PREFIXES: tuple[str, ...] = (
    # mranderson
    "deps.",
    "mranderson",
    "cider.inlined-deps",
    # dolly
    "eastwood.copieddeps",
    # pip / setuptools vendoring
    "pip._vendor",
    "setuptools._vendor",
    "setuptools.extern",
    "pkg_resources._vendor",
    "pkg_resources.extern",
)


class NamespaceRules(BaseModel):
    """Rule tables for classifying loaded namespace names.

    Invalid regular expressions raise ``re.error`` on first classification.
    """

    model_config = {"frozen": True}

    inlined_prefixes: tuple[str, ...] = DEFAULT_INLINED_PREFIXES
    filter_patterns: tuple[str, ...] = ()

    @cached_property
    def _compiled(self) -> tuple[re.Pattern[str], ...]:
        return tuple(re.compile(p) for p in self.filter_patterns)

    def with_patterns(self, patterns: list[str] | tuple[str, ...] | None) -> NamespaceRules:
        """Return a copy whose filter patterns are extended by *patterns*."""
        if not patterns:
            return self
        merged = (*self.filter_patterns, *patterns)
        return NamespaceRules(inlined_prefixes=self.inlined_prefixes, filter_patterns=merged)

    def with_prefixes(self, prefixes: list[str] | tuple[str, ...]) -> NamespaceRules:
        """Return a copy with additional inlined prefixes (duplicates dropped)."""
        merged = tuple(dict.fromkeys((*self.inlined_prefixes, *prefixes)))
        return NamespaceRules(inlined_prefixes=merged, filter_patterns=self.filter_patterns)

    def validate_patterns(self) -> None:
        """Compile every pattern now; raises ``re.error`` on the first bad one."""
        _ = self._compiled

    def is_inlined(self, name: str) -> bool:
        return any(name.startswith(prefix) for prefix in self.inlined_prefixes)

    def is_internal(self, name: str) -> bool:
        return any(pattern.search(name) for pattern in self._compiled)

    def classify(self, name: str) -> NamespaceClass:
        if self.is_inlined(name):
            return NamespaceClass.INLINED
        if self.is_internal(name):
            return NamespaceClass.INTERNAL
        return NamespaceClass.ORDINARY
