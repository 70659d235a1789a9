"""Shared test fixtures."""

from __future__ import annotations

from typing import List

import pytest

from sniprun.host import Host
from sniprun.models import RequestContext
from sniprun.workspace import WorkDir


class FakeHost(Host):
    """In‑memory editor recording everything sent to it."""

    def __init__(self, filetype="python", buffer=None, line="", filepath="/tmp/snippet"):
        super().__init__()
        self.ft = filetype
        self.buffer: List[str] = list(buffer or [])
        self.line = line
        self.path = filepath
        self.echoed: List[str] = []
        self.errors: List[str] = []

    def filetype(self) -> str:
        return self.ft

    def current_line(self) -> str:
        return self.line

    def lines(self, start: int, end: int) -> List[str]:
        return self.buffer[start:end]

    def filepath(self) -> str:
        return self.path

    def echo(self, text: str) -> None:
        self.echoed.append(text)

    def report_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture()
def make_host():
    return FakeHost


@pytest.fixture()
def work_dir(tmp_path):
    return WorkDir(tmp_path / "sniprun")


@pytest.fixture()
def make_ctx(work_dir):
    def _make(**fields):
        fields.setdefault("work_dir", str(work_dir.root))
        return RequestContext(**fields)

    return _make
