"""Editor boundary.

The session talks to the editor only through :class:`Host`.  Query methods
are called on the dispatcher thread.  :meth:`Host.schedule` is the single
point through which results are delivered and may be called from any
thread.
"""

from __future__ import annotations

import threading
from typing import Callable, List


class Host:
    """Protocol for editor hosts."""

    def __init__(self) -> None:
        self._delivery_lock = threading.Lock()

    def filetype(self) -> str:
        raise NotImplementedError

    def current_line(self) -> str:
        raise NotImplementedError

    def lines(self, start: int, end: int) -> List[str]:
        """Lines ``[start, end)`` of the current buffer, 0‑based."""
        raise NotImplementedError

    def filepath(self) -> str:
        raise NotImplementedError

    def echo(self, text: str) -> None:
        raise NotImplementedError

    def report_error(self, message: str) -> None:
        raise NotImplementedError

    def schedule(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the delivery point.

        The default runs it inline, one callback at a time.  Hosts with a
        loop thread of their own hand it to that loop instead.
        """
        with self._delivery_lock:
            callback()
