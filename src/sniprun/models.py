"""Data model shared by the session, the launcher and the backends.

``RequestContext`` and ``RunRequest`` are pydantic models: the first is the
frozen snapshot of editor state handed to exactly one backend instance, the
second validates the raw arguments of a ``run`` event.  ``ExecutionResult``
is the value passed from the launcher back to the session.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import SniprunError


class SupportLevel(IntEnum):
    """How much surrounding context a backend accepts for a snippet."""

    UNSUPPORTED = 0
    LINE = 1
    BLOCK = 2
    IMPORT = 5
    FILE = 10
    PROJECT = 20
    SYSTEM = 30

    @classmethod
    def parse(cls, value: str) -> "SupportLevel":
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown support level: {value}")


class RequestContext(BaseModel):
    """Editor state captured once per invocation."""

    model_config = ConfigDict(frozen=True)

    filetype: str = ""
    current_line: str = ""
    current_bloc: str = Field(default="", description="Selected text, may be empty.")
    range: Tuple[int, int] = Field(
        default=(-1, -1), description="Inclusive line numbers of the selection."
    )
    filepath: str = ""
    project_root: str = ""
    work_dir: str = ""
    sniprun_root_dir: str = ""

    @classmethod
    def empty(cls, work_dir: str) -> "RequestContext":
        return cls(work_dir=work_dir)


class RunRequest(BaseModel):
    """Arguments of a ``run`` event: inclusive line bounds and the plugin root."""

    start_line: int
    end_line: int
    sniprun_root_dir: str

    @classmethod
    def from_args(cls, args: List[object]) -> "RunRequest":
        values = list(args) + [None] * (3 - len(args))
        return cls(
            start_line=values[0],
            end_line=values[1],
            sniprun_root_dir=values[2],
        )


@dataclass
class ExecutionResult:
    """Either the captured stdout of a run or the error that stopped it."""

    output: Optional[str] = None
    error: Optional[SniprunError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
