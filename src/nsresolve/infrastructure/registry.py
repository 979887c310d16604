"""Module registry capability — the interpreter's live module table.

The resolution service reads loaded names and exported bindings through
this interface and asks it to require (import) modules. It never edits
``sys.modules`` directly.
"""

from __future__ import annotations

import importlib
import sys
from typing import Any, Protocol


class ModuleRegistry(Protocol):
    """Read-only view of loaded modules plus a require primitive."""

    def list_loaded(self) -> list[str]: ...

    def is_loaded(self, name: str) -> bool: ...

    def exports(self, name: str) -> dict[str, Any]: ...

    def require(self, name: str) -> str: ...


class PythonModuleRegistry:
    """ModuleRegistry over ``sys.modules`` and ``importlib``."""

    def list_loaded(self) -> list[str]:
        # sys.modules may carry None placeholders for failed relative imports
        return [name for name, module in list(sys.modules.items()) if module is not None]

    def is_loaded(self, name: str) -> bool:
        return sys.modules.get(name) is not None

    def exports(self, name: str) -> dict[str, Any]:
        """Bindings defined by module *name* itself (imports are excluded).

        Raises ``KeyError`` if the module is not loaded.
        """
        module = sys.modules.get(name)
        if module is None:
            raise KeyError(name)
        return {
            attr: value
            for attr, value in vars(module).items()
            if getattr(value, "__module__", None) == name
        }

    def require(self, name: str) -> str:
        """Import *name* unless it is already loaded. Import errors propagate."""
        if not self.is_loaded(name):
            importlib.import_module(name)
        return name
