"""
Backend for Python 3 snippets.

The selected code is dedented (selections usually come from inside a
function or class body), written to ``main.py`` and byte‑compiled to
``main.pyc`` with the same interpreter that runs sniprun.  A syntax error
therefore surfaces as a compilation error and never reaches ``execute``.
The compiled file is then run directly by that interpreter.
"""

from __future__ import annotations

import sys
import textwrap

from ..errors import CompilationError, RuntimeExecutionError
from ..models import SupportLevel
from .base import Interpreter

_COMPILE = (
    "import py_compile, sys; "
    "py_compile.compile(sys.argv[1], cfile=sys.argv[2], doraise=True)"
)


class PythonOriginal(Interpreter):
    """Run Python code with the current interpreter."""

    name = "Python3_original"
    family = "python3_original"
    supported_languages = ("python", "python3", "py")
    max_support_level = SupportLevel.BLOCK

    def __init__(self, ctx, support_level=None) -> None:
        super().__init__(ctx, support_level)
        self.python = sys.executable
        self.main_file_path = self.work_dir / "main.py"
        self.compiled_path = self.work_dir / "main.pyc"

    def add_boilerplate(self) -> None:
        self.code = textwrap.dedent(self.code)

    def build(self) -> None:
        self._write_source(self.main_file_path)
        result = self._run_subprocess(
            [self.python, "-c", _COMPILE, str(self.main_file_path), str(self.compiled_path)]
        )
        if not result.success:
            raise CompilationError(result.stderr)

    def execute(self) -> str:
        result = self._run_subprocess([self.python, str(self.compiled_path)])
        if not result.success:
            raise RuntimeExecutionError(result.stderr)
        return result.stdout
