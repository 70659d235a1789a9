"""Static filetype → backend table.

Aliases are matched exactly and case‑sensitively.  Registering two backends
for the same alias is a configuration mistake and fails when the registry is
built, so lookups never need to check for it.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Type

from .interpreters import INTERPRETERS, Interpreter
from .models import SupportLevel


class Registry:
    """Read‑only mapping from filetype alias to backend class."""

    def __init__(self, interpreters: Iterable[Type[Interpreter]]) -> None:
        self._interpreters: List[Type[Interpreter]] = list(interpreters)
        table: Dict[str, Type[Interpreter]] = {}
        for interpreter in self._interpreters:
            for alias in interpreter.supported_languages:
                existing = table.get(alias)
                if existing is not None:
                    raise ValueError(
                        f"Filetype alias {alias!r} registered by both "
                        f"{existing.name} and {interpreter.name}"
                    )
                table[alias] = interpreter
        self._table = table

    def lookup(self, filetype: str) -> Optional[Type[Interpreter]]:
        return self._table.get(filetype)

    def max_support_level(self, filetype: str) -> Optional[SupportLevel]:
        interpreter = self.lookup(filetype)
        return interpreter.max_support_level if interpreter else None

    def names(self) -> List[str]:
        """Display names of the registered backends, in registration order."""
        return [interpreter.name for interpreter in self._interpreters]

    def aliases(self) -> List[str]:
        return sorted(self._table)

    def __contains__(self, filetype: object) -> bool:
        return filetype in self._table


def default_registry() -> Registry:
    return Registry(INTERPRETERS)
