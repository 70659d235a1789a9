"""
Backend for Rust snippets.

The snippet is wrapped in ``fn main() { ... }``, written to ``main.rs`` in
the private directory and compiled with ``rustc -O``.  The resulting
binary ``main`` is run with no input.
"""

from __future__ import annotations

from ..errors import CompilationError, RuntimeExecutionError
from ..models import SupportLevel
from .base import Interpreter


class RustOriginal(Interpreter):
    """Compile and run Rust code with the system ``rustc``."""

    name = "Rust_original"
    family = "rust_original"
    supported_languages = ("rust", "rust-lang", "rs")
    max_support_level = SupportLevel.BLOCK

    compiler = "rustc"

    @property
    def main_file_path(self):
        return self.work_dir / "main.rs"

    @property
    def bin_path(self):
        return self.work_dir / "main"

    def add_boilerplate(self) -> None:
        self.code = "fn main() {" + self.code + "}"

    def build(self) -> None:
        self._write_source(self.main_file_path)
        result = self._run_subprocess(
            [self.compiler, "-O", "--out-dir", str(self.work_dir), str(self.main_file_path)]
        )
        if not result.success:
            raise CompilationError(result.stderr)

    def execute(self) -> str:
        result = self._run_subprocess([str(self.bin_path)])
        if not result.success:
            raise RuntimeExecutionError(result.stderr)
        return result.stdout
