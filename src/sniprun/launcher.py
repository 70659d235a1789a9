"""Backend selection and pipeline driver."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .errors import SniprunError, UnsupportedLanguageError
from .models import ExecutionResult, RequestContext, SupportLevel
from .registry import Registry, default_registry

logger = logging.getLogger("sniprun")


class Launcher:
    """Pick the backend for a request and run its four stages.

    ``levels`` maps a backend's display name to the support level it should
    run at.  Backends without an entry run at their maximum level, and an
    entry above the maximum is capped.
    """

    def __init__(
        self,
        registry: Optional[Registry] = None,
        levels: Optional[Mapping[str, SupportLevel]] = None,
    ) -> None:
        self.registry = registry or default_registry()
        self.levels = dict(levels or {})

    def select_and_run(self, ctx: RequestContext) -> str:
        interpreter_cls = self.registry.lookup(ctx.filetype)
        if interpreter_cls is None:
            logger.info("[LAUNCHER] No interpreter for filetype %r", ctx.filetype)
            raise UnsupportedLanguageError(ctx.filetype)

        level = min(
            self.levels.get(interpreter_cls.name, interpreter_cls.max_support_level),
            interpreter_cls.max_support_level,
        )
        logger.info(
            "[LAUNCHER] Selected %s at level %s", interpreter_cls.name, level.name
        )
        interpreter = interpreter_cls(ctx, level)
        interpreter.fetch_code()
        interpreter.add_boilerplate()
        interpreter.build()
        return interpreter.execute()

    def run(self, ctx: RequestContext) -> ExecutionResult:
        try:
            return ExecutionResult(output=self.select_and_run(ctx))
        except SniprunError as exc:
            logger.info("[LAUNCHER] Run failed: %s", exc)
            return ExecutionResult(error=exc)
