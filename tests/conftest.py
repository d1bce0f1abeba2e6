"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import stat
import textwrap
from pathlib import Path
from typing import Callable

import pytest

GREET_SOURCE = '''\
#!/usr/bin/env python3
# <doc:greet>
#
# greet: say hello to people.
#
# </doc:greet>

from scriptdoc import Script

script = Script(__file__)


# <doc:hello>
#
# hello [NAME]
#
# Print a greeting.
#
# </doc:hello>
@script.command
def hello(name="world"):
    print(f"hello {name}")


# <doc:fail>
# fail CODE
# </doc:fail>
@script.command
def fail(code):
    return int(code)


@script.command(name="check")
def check_flag(value):
    return value == "yes"


if __name__ == "__main__":
    raise SystemExit(script.main())
'''


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[..., Path]:
    """Write an executable script into tmp_path/bin and return its path."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _make(name: str, source: str, *, dedent: bool = True) -> Path:
        path = bin_dir / name
        path.write_text(textwrap.dedent(source) if dedent else source, encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR)
        return path

    return _make


@pytest.fixture
def greet_script(make_script: Callable[..., Path]) -> Path:
    return make_script("greet", GREET_SOURCE, dedent=False)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("SCRIPTDOC_") or key == "PAGER":
            monkeypatch.delenv(key, raising=False)
