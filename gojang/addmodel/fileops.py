"""File-system helpers for the generators, with dry-run support."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO


@dataclass
class FileWriter:
    """Writes files and directories, or only reports them when ``dry_run`` is set."""

    dry_run: bool = False
    out: TextIO | None = None

    def _report(self, message: str) -> None:
        print(message, file=self.out or sys.stdout)

    def write(self, path: str | os.PathLike[str], data: str | bytes) -> None:
        """Write ``data`` to ``path``, replacing any existing content."""
        if self.dry_run:
            self._report(f"  [DRY-RUN] Would write to: {os.fspath(path)}")
            return
        if isinstance(data, str):
            data = data.encode("utf-8")
        Path(path).write_bytes(data)

    def mkdir(self, path: str | os.PathLike[str]) -> None:
        """Create ``path`` and any missing parents."""
        if self.dry_run:
            self._report(f"  [DRY-RUN] Would create directory: {os.fspath(path)}")
            return
        os.makedirs(path, mode=0o755, exist_ok=True)


def find_project_root(start: str | os.PathLike[str] | None = None) -> Path:
    """Return the nearest directory at or above ``start`` that holds ``go.mod``."""
    directory = Path(start if start is not None else os.getcwd()).resolve()
    for candidate in (directory, *directory.parents):
        if (candidate / "go.mod").exists():
            return candidate
    raise FileNotFoundError("could not find project root (go.mod not found)")