"""
paths.py

Responsibility: Resolve a command name or invocation path to an executable script.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path


class CommandNotFoundError(FileNotFoundError):
    pass


def _is_executable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def resolve_executable(command: str | Path, search_path: str | None = None) -> Path:
    """
    Return the absolute path of an executable script.

    - A command containing a path separator is checked as given.
    - A bare name is looked up on `search_path` (default: $PATH).
    """
    text = str(command)
    if not text:
        raise CommandNotFoundError("command not found: (empty)")

    if os.sep in text or (os.altsep and os.altsep in text):
        p = Path(text).expanduser()
        if _is_executable_file(p):
            return p.resolve()
        raise CommandNotFoundError(f"command not found: {text}")

    found = shutil.which(text, path=search_path)
    if found is None:
        raise CommandNotFoundError(f"command not found: {text}")
    return Path(found).resolve()
