"""
Session manager.

The session owns the only state shared between runs: the current
:class:`~sniprun.models.RequestContext` and the host handle.  Events are
handled one at a time by the dispatcher:

* ``run`` captures a fresh context from the host (holding the session lock
  for the capture only), then spawns a thread that drives the launcher.
  The thread hands its result to ``host.schedule`` which formats and
  delivers it, and then resets the context (holding the lock again, for the
  reset only).  The lock is never held while a toolchain runs, so runs
  proceed in parallel.
* ``clean`` wipes the cache directory synchronously.
* anything else is logged and ignored.

Failures outside the language taxonomy (host or filesystem faults) end the
run that hit them.  They are logged and never reach the dispatcher.
"""

from __future__ import annotations

import itertools
import logging
import threading
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from .errors import InternalError
from .formatting import escape_output, format_error
from .host import Host
from .launcher import Launcher
from .models import ExecutionResult, RequestContext, RunRequest
from .workspace import WorkDir

logger = logging.getLogger("sniprun")


class Event(str, Enum):
    RUN = "run"
    CLEAN = "clean"


class Session:
    """Shared session state plus the run/clean operations."""

    def __init__(
        self,
        host: Host,
        work_dir: WorkDir,
        launcher: Optional[Launcher] = None,
    ) -> None:
        self.host = host
        self.work_dir = work_dir
        self.launcher = launcher or Launcher()
        self._lock = threading.Lock()
        self._context = RequestContext.empty(str(work_dir.root))
        self._units: List[threading.Thread] = []
        self._unit_ids = itertools.count()

    @property
    def context(self) -> RequestContext:
        with self._lock:
            return self._context

    def handle_event(self, name: str, args: Sequence[object] = ()) -> None:
        """Dispatch one host event.  Never raises."""
        try:
            event = Event(name)
        except ValueError:
            logger.info("[MAINLOOP] Unknown event received: %r", name)
            return

        try:
            if event is Event.RUN:
                logger.info("[MAINLOOP] Run command received")
                self.run(RunRequest.from_args(list(args)))
            else:
                logger.info("[MAINLOOP] Clean command received")
                self.clean()
        except ValidationError as exc:
            logger.warning("[MAINLOOP] Malformed %s arguments %r: %s", name, args, exc)
        except Exception as exc:
            logger.exception("[MAINLOOP] Failed to handle %s: %s", name, exc)

    def serve(self, events: Iterable[Tuple[str, Sequence[object]]]) -> None:
        for name, args in events:
            self.handle_event(name, args)

    def run(self, request: RunRequest) -> threading.Thread:
        ctx = self._capture(request)
        unit = threading.Thread(
            target=self._run_unit,
            args=(ctx,),
            name=f"sniprun-run-{next(self._unit_ids)}",
            daemon=True,
        )
        self._units = [u for u in self._units if u.is_alive()]
        self._units.append(unit)
        unit.start()
        return unit

    def clean(self) -> None:
        self.work_dir.clean()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for every spawned run to finish."""
        for unit in list(self._units):
            unit.join(timeout)
        self._units = [unit for unit in self._units if unit.is_alive()]

    def _capture(self, request: RunRequest) -> RequestContext:
        with self._lock:
            # Host buffers are 0-based and end-exclusive.
            bloc = self.host.lines(request.start_line - 1, request.end_line)
            self._context = RequestContext(
                filetype=self.host.filetype(),
                current_line=self.host.current_line(),
                current_bloc="\n".join(bloc),
                range=(request.start_line, request.end_line),
                filepath=self.host.filepath(),
                work_dir=str(self.work_dir.root),
                sniprun_root_dir=request.sniprun_root_dir,
            )
            return self._context

    def _reset(self) -> None:
        with self._lock:
            self._context = RequestContext.empty(str(self.work_dir.root))

    def _run_unit(self, ctx: RequestContext) -> None:
        try:
            result = self.launcher.run(ctx)
        except Exception as exc:
            logger.exception("[MAINLOOP] Run aborted: %s", exc)
            result = ExecutionResult(error=InternalError(str(exc)))
        logger.info("[MAINLOOP] Interpreter returned a result")

        try:
            self.host.schedule(lambda: self._deliver(result))
        except Exception as exc:
            logger.exception("[MAINLOOP] Could not schedule delivery: %s", exc)
            self._reset()

    def _deliver(self, result: ExecutionResult) -> None:
        try:
            if result.ok:
                answer = escape_output(result.output or "")
                logger.info("[MAINLOOP] Returning stdout of code run: %s", answer)
                self.host.echo(answer)
            else:
                logger.info("[MAINLOOP] Returning an error")
                self.host.report_error(format_error(result.error))
        except Exception as exc:
            logger.exception("[MAINLOOP] Delivery to host failed: %s", exc)
        finally:
            self._reset()
