"""Error taxonomy shared by every pipeline stage and backend.

Every failure that reaches the user is a :class:`SniprunError`.  The set is
closed:

* ``UnsupportedLanguageError`` – no backend registered for the filetype.
* ``CompilationError`` – the toolchain build step exited non‑zero.
* ``RuntimeExecutionError`` – the produced artifact exited non‑zero.
* ``InternalError`` – host communication or filesystem faults.  These end
  the affected run but never the dispatcher.

None of these are retried; the session only renders them.
"""

from __future__ import annotations


class SniprunError(Exception):
    """Base class for all failures reported back to the editor."""

    prefix = "Error"

    def __init__(self, details: str = "") -> None:
        super().__init__(details)
        self.details = details

    def __str__(self) -> str:
        return f"{self.prefix}: {self.details}"


class UnsupportedLanguageError(SniprunError):
    prefix = "Unsupported language"

    def __init__(self, filetype: str) -> None:
        super().__init__(filetype)
        self.filetype = filetype


class CompilationError(SniprunError):
    """Build failed; ``details`` holds whatever diagnostics the toolchain gave."""

    prefix = "Compilation error"


class RuntimeExecutionError(SniprunError):
    """The built artifact exited non‑zero; ``details`` holds its stderr."""

    prefix = "Runtime error"


class InternalError(SniprunError):
    prefix = "Internal error"
