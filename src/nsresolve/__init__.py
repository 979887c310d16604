"""nsresolve — resolve module namespaces against the classpath and the live registry."""

from __future__ import annotations

__version__ = "0.1.0"
