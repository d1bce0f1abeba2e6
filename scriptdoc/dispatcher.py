"""
dispatcher.py

Responsibility: Entry point a script calls with its own path and arguments.

Two terminal modes:
- help mode (no arguments, or `help [TOPIC]`): render documentation, run nothing
- command mode (`COMMAND [ARGS...]`): call the registered command with ARGS

Scripts usually wrap this in a `Script`:

    script = Script(__file__)

    @script.command
    def greet(name="world"):
        print(f"hello {name}")

    if __name__ == "__main__":
        raise SystemExit(script.main())
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
import re
import sys
from pathlib import Path
from typing import Any, Callable

from scriptdoc.extractor import DEFAULT_PREFIX
from scriptdoc.index import DocIndex, load_index
from scriptdoc.paths import resolve_executable
from scriptdoc.registry import Command, CommandRegistry
from scriptdoc.renderer import doc_help, help_from_index, page
from scriptdoc.settings import Settings

logger = logging.getLogger(__name__)

HELP_KEYWORD = "help"

Pager = Callable[[str], None]


class DispatchError(RuntimeError):
    pass


class Script:
    """A script's command registry plus its entry point.

    `settings` is resolved from the environment on `main()` when not given, so
    commands can read the run's mode flags from `script.settings`. `index`
    points at a YAML doc index written by `scriptdoc index`; when set, help is
    rendered from it instead of re-reading the script.
    """

    def __init__(
        self,
        path: str | Path,
        settings: Settings | None = None,
        *,
        index: str | Path | None = None,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self.path = Path(path)
        self.settings = settings
        self.index = None if index is None else Path(index)
        self.prefix = prefix
        self.registry = CommandRegistry()

    def command(self, func: Command | None = None, *, name: str | None = None) -> Any:
        return self.registry.register(func, name=name)

    def main(self, argv: list[str] | None = None, *, pager: Pager | None = None) -> int:
        args = sys.argv[1:] if argv is None else argv
        if self.settings is None:
            self.settings = Settings.from_env()
        index = None
        if self.index is not None and (not args or args[0] == HELP_KEYWORD):
            index = load_index(self.index)
        return doc_execute(
            self.path,
            args,
            registry=self.registry,
            settings=self.settings,
            pager=pager,
            prefix=self.prefix,
            index=index,
        )


def _module_name(path: Path) -> str:
    return "_scriptdoc_" + re.sub(r"\W", "_", path.name)


def load_commands(path: str | Path) -> CommandRegistry:
    """
    Import a script file (any extension) and return its command registry.

    The script is imported under a private module name, so its
    `if __name__ == "__main__"` bootstrap does not run again.
    """
    p = Path(path)
    name = _module_name(p)
    loader = importlib.machinery.SourceFileLoader(name, str(p))
    spec = importlib.util.spec_from_loader(name, loader)
    if spec is None:
        raise DispatchError(f"Cannot load script: {p}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        loader.exec_module(module)
    except Exception as e:  # noqa: BLE001 - surface as DispatchError
        sys.modules.pop(name, None)
        raise DispatchError(f"Failed loading script: {p}") from e

    for value in vars(module).values():
        if isinstance(value, Script):
            return value.registry
    return CommandRegistry.from_namespace(vars(module), name)


def _exit_status(result: Any) -> int:
    if result is None:
        return 0
    if isinstance(result, bool):
        return 0 if result else 1
    if isinstance(result, int):
        return result
    return 0


def doc_execute(
    invocation: str | Path,
    args: list[str],
    *,
    registry: CommandRegistry | None = None,
    settings: Settings | None = None,
    pager: Pager | None = None,
    search_path: str | None = None,
    prefix: str = DEFAULT_PREFIX,
    index: DocIndex | None = None,
) -> int:
    """
    Dispatch a script invocation to help output or to one of its commands.

    Returns the exit status: 0 after help, else the command's status.
    Raises CommandNotFoundError if `invocation` does not resolve, and
    UnknownCommandError if the command is not registered.
    """
    settings = settings or Settings()
    path = resolve_executable(invocation, search_path)

    if not args or args[0] == HELP_KEYWORD:
        topic = args[1] if len(args) > 1 else None
        logger.debug("Help for %s (topic=%r)", path, topic)
        if index is not None:
            text = help_from_index(index, topic)
        else:
            text = doc_help(path, topic, prefix=prefix)
        if pager is not None:
            pager(text)
        else:
            page(text, pager=settings.pager)
        return 0

    if registry is None:
        registry = load_commands(path)
    name, rest = args[0], list(args[1:])
    command = registry.get_or_raise(name)
    logger.debug("Running %s %s %s", path.name, name, rest)
    return _exit_status(command(*rest))
