"""Cache directory layout.

The cache root holds one subdirectory per backend family, and each family
holds one private directory per invocation::

    <root>/
        sniprun.log
        rust_original/<invocation id>/main.rs
        python3_original/<invocation id>/main.py

Private directories are never reused, so two runs of the same backend never
see each other's staged files.  ``clean`` wipes the whole tree, including
directories that in‑flight runs are still using.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import List

logger = logging.getLogger("sniprun")


class WorkDir:
    """The shared cache directory tree."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def family_dir(self, family: str) -> Path:
        return self.root / family

    def private_dir(self, family: str) -> Path:
        """Create and return a fresh directory for a single invocation."""
        path = self.family_dir(family) / uuid.uuid4().hex
        path.mkdir(parents=True)
        return path

    def list_private_dirs(self, family: str) -> List[Path]:
        family_dir = self.family_dir(family)
        if not family_dir.exists():
            return []
        return sorted(p for p in family_dir.iterdir() if p.is_dir())

    def clean(self) -> None:
        """Delete and recreate the root directory."""
        logger.info("[WORKDIR] Cleaning %s", self.root)
        if self.root.exists():
            shutil.rmtree(self.root)
        self.root.mkdir(parents=True, exist_ok=True)
