"""
Base interface for language backends.

All concrete backends inherit from :class:`Interpreter` and implement
:meth:`add_boilerplate`, :meth:`build` and :meth:`execute`.  An instance
is created for exactly one invocation: it receives a frozen
:class:`~sniprun.models.RequestContext`, owns a private directory under the
cache root and is thrown away once it has produced a result.  The launcher
drives the stages in a fixed order::

    fetch_code -> add_boilerplate -> build -> execute

and stops at the first stage that raises.

No timeouts or resource limits are applied.  The executed code is trusted
by the user who selected it.
"""

from __future__ import annotations

import abc
import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Tuple

from ..models import RequestContext, SupportLevel
from ..workspace import WorkDir

logger = logging.getLogger("sniprun")


@dataclass
class ProcessOutput:
    """Outcome of one toolchain or artifact invocation.

    Attributes
    ----------
    stdout: str
        Standard output captured from the process.
    stderr: str
        Standard error captured from the process.
    exit_code: int
        Exit status of the process.  Zero indicates success.
    duration_ms: int
        Wall‑clock time in milliseconds.
    """

    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class Interpreter(abc.ABC):
    """
    Abstract base class for language backends.

    Subclasses declare their display ``name``, the ``family`` used to
    namespace private directories, the filetype aliases they handle and
    their intrinsic ``max_support_level``.
    """

    name: ClassVar[str] = "Interpreter"
    family: ClassVar[str] = "interpreter"
    supported_languages: ClassVar[Tuple[str, ...]] = ()
    max_support_level: ClassVar[SupportLevel] = SupportLevel.UNSUPPORTED

    def __init__(
        self,
        ctx: RequestContext,
        support_level: Optional[SupportLevel] = None,
    ) -> None:
        """
        Parameters
        ----------
        ctx: RequestContext
            Editor state for this invocation.  Never modified.
        support_level: SupportLevel, optional
            Configured level.  Defaults to :attr:`max_support_level` and may
            not exceed it.
        """
        self.ctx = ctx
        self._support_level = self.max_support_level
        if support_level is not None:
            self.support_level = support_level
        self.code = ""
        self.work_dir = WorkDir(ctx.work_dir).private_dir(self.family)

    @property
    def support_level(self) -> SupportLevel:
        return self._support_level

    @support_level.setter
    def support_level(self, level: SupportLevel) -> None:
        if level > self.max_support_level:
            raise ValueError(
                f"{self.name} supports up to {self.max_support_level.name}, "
                f"got {SupportLevel(level).name}"
            )
        self._support_level = SupportLevel(level)

    def fetch_code(self) -> None:
        """Stage the most specific non‑blank text the support level allows."""
        if _strip_all(self.ctx.current_bloc) and self.support_level >= SupportLevel.BLOCK:
            self.code = self.ctx.current_bloc
        elif _strip_all(self.ctx.current_line) and self.support_level >= SupportLevel.LINE:
            self.code = self.ctx.current_line
        else:
            self.code = ""

    @abc.abstractmethod
    def add_boilerplate(self) -> None:
        """Wrap the staged code into a unit the toolchain can run."""
        raise NotImplementedError

    @abc.abstractmethod
    def build(self) -> None:
        """Write the staged code to disk and produce a runnable artifact.

        Raises
        ------
        CompilationError
            If the toolchain exits non‑zero.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def execute(self) -> str:
        """Run the artifact and return its standard output.

        Raises
        ------
        RuntimeExecutionError
            If the artifact exits non‑zero.
        """
        raise NotImplementedError

    def _write_source(self, path: Path) -> None:
        path.write_text(self.code, encoding="utf-8")

    def _run_subprocess(self, args: list[str]) -> ProcessOutput:
        """
        Invoke a command in the private directory and capture its output.

        Standard input is closed.  ``OSError`` (for instance a missing
        toolchain binary) propagates to the caller.
        """
        start_time = time.perf_counter()
        process = subprocess.Popen(
            args,
            cwd=str(self.work_dir),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
        stdout, stderr = process.communicate()
        duration = int((time.perf_counter() - start_time) * 1000)
        result = ProcessOutput(stdout or "", stderr or "", process.returncode, duration)
        logger.debug(
            "[%s] %s exited with %s after %sms",
            self.name,
            args[0],
            result.exit_code,
            result.duration_ms,
        )
        return result


def _strip_all(text: str) -> str:
    return "".join(text.split())
