"""
shell.py

Responsibility: Helpers scripts use to act on their mode flags.

- `run`: execute a command, showing its output only in verbose mode
- `status`: print a progress message only in verbose mode
- `confirm`: prompt only in interactive mode, otherwise take the default
- `elevate`: prefix a command with sudo in elevated mode
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Callable, TextIO

from scriptdoc.settings import Settings, is_truthy

logger = logging.getLogger(__name__)


class ShellError(RuntimeError):
    pass


def run(
    cmd: list[str],
    *,
    settings: Settings,
    cwd: str | Path | None = None,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run a subprocess command, raising a ShellError on failure.

    In verbose mode output goes straight to the terminal; otherwise it is
    captured and only surfaced in the error message.
    """
    child_env = dict(os.environ if env is None else env)
    child_env.update(settings.to_env())

    if settings.verbose:
        logger.info("+ %s", shlex.join(cmd))
        output = {}
    else:
        output = {"stdout": subprocess.PIPE, "stderr": subprocess.STDOUT}

    try:
        return subprocess.run(
            cmd,
            cwd=None if cwd is None else str(cwd),
            env=child_env,
            check=True,
            text=True,
            **output,
        )
    except subprocess.CalledProcessError as e:
        detail = f"\n\n{e.stdout}" if e.stdout else ""
        raise ShellError(f"Command failed ({e.returncode}): {shlex.join(cmd)}{detail}") from e
    except FileNotFoundError as e:
        raise ShellError(f"Command not found: {cmd[0]}") from e


def status(message: str, *, settings: Settings, stream: TextIO | None = None) -> None:
    if settings.verbose:
        print(message, file=stream or sys.stderr)


def confirm(
    message: str,
    *,
    settings: Settings,
    default: bool = False,
    input_func: Callable[[str], str] = input,
) -> bool:
    """
    Ask a yes/no question. Non-interactive runs never prompt and return `default`.
    """
    if not settings.interactive:
        return default
    hint = "[Y/n]" if default else "[y/N]"
    answer = input_func(f"{message} {hint} ").strip()
    if not answer:
        return default
    return is_truthy(answer)


def elevate(cmd: list[str], *, settings: Settings) -> list[str]:
    if not settings.elevated or cmd[:1] == ["sudo"]:
        return list(cmd)
    # Already root: nothing to elevate.
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        return list(cmd)
    return ["sudo", *cmd]
