"""
Backend for Bash snippets.

The script gets a shebang unless it already has one, is written to
``main.sh`` and checked with ``bash -n``.  Running it is a plain
``bash main.sh`` in the private directory.
"""

from __future__ import annotations

from ..errors import CompilationError, RuntimeExecutionError
from ..models import SupportLevel
from .base import Interpreter


class BashOriginal(Interpreter):
    """Execute Bash scripts in the invocation's private directory."""

    name = "Bash_original"
    family = "bash_original"
    supported_languages = ("bash", "sh", "shell")
    max_support_level = SupportLevel.BLOCK

    shell = "bash"

    @property
    def script_path(self):
        return self.work_dir / "main.sh"

    def add_boilerplate(self) -> None:
        if not self.code.startswith("#!/"):
            self.code = "#!/bin/bash\n" + self.code

    def build(self) -> None:
        self._write_source(self.script_path)
        self.script_path.chmod(0o700)
        result = self._run_subprocess([self.shell, "-n", str(self.script_path)])
        if not result.success:
            raise CompilationError(result.stderr)

    def execute(self) -> str:
        result = self._run_subprocess([self.shell, str(self.script_path)])
        if not result.success:
            raise RuntimeExecutionError(result.stderr)
        return result.stdout
