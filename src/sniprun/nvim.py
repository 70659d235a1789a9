"""Neovim host backed by ``pynvim``.

pynvim sessions are not thread‑safe.  Queries are only issued from the
notification handler, which runs on the loop thread, and deliveries from
worker threads go through :meth:`pynvim.api.Nvim.async_call`.
"""

from __future__ import annotations

import logging
from typing import Callable, List

import pynvim

from .host import Host

logger = logging.getLogger("sniprun")


class NvimHost(Host):
    """Host implementation for a parent Neovim process."""

    def __init__(self, nvim: pynvim.Nvim) -> None:
        super().__init__()
        self.nvim = nvim

    @classmethod
    def attach_parent(cls) -> "NvimHost":
        return cls(pynvim.attach("stdio"))

    def filetype(self) -> str:
        return self.nvim.eval("&filetype")

    def current_line(self) -> str:
        return self.nvim.current.line

    def lines(self, start: int, end: int) -> List[str]:
        return list(self.nvim.current.buffer[start:end])

    def filepath(self) -> str:
        return self.nvim.eval("expand('%:p')")

    def echo(self, text: str) -> None:
        self.nvim.command(f'echo "{text}"')

    def report_error(self, message: str) -> None:
        self.nvim.err_write(message + "\n")

    def schedule(self, callback: Callable[[], None]) -> None:
        self.nvim.async_call(callback)

    def run_loop(self, on_event: Callable[[str, list], None]) -> None:
        """Dispatch RPC notifications until Neovim closes the channel."""

        def on_request(name: str, args: list) -> None:
            logger.info("[MAINLOOP] Ignoring request %r", name)

        self.nvim.run_loop(on_request, on_event)
