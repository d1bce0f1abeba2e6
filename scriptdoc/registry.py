"""
registry.py

Responsibility: Map command names to the functions a script exposes.

Scripts register commands explicitly (`@registry.register`), or a registry is
collected from the public functions a loaded script module defines.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

Command = Callable[..., Any]


class UnknownCommandError(LookupError):
    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        hint = f" (available: {', '.join(available)})" if available else ""
        super().__init__(f"Unknown command: {name}{hint}")


class CommandRegistry:
    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, func: Command | None = None, *, name: str | None = None) -> Any:
        """
        Register a command function. Usable as `@register` or `@register(name="x")`.
        """

        def decorator(f: Command) -> Command:
            key = name or f.__name__
            if key in self._commands:
                logger.warning("Command %r overwritten by %s", key, f.__qualname__)
            self._commands[key] = f
            return f

        if func is not None:
            return decorator(func)
        return decorator

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def get_or_raise(self, name: str) -> Command:
        command = self._commands.get(name)
        if command is None:
            raise UnknownCommandError(name, self.names())
        return command

    def names(self) -> list[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    @classmethod
    def from_namespace(cls, namespace: Mapping[str, Any], module_name: str) -> CommandRegistry:
        """
        Collect the public functions defined in `module_name` (imports are skipped).
        """
        registry = cls()
        for attr, value in namespace.items():
            if attr.startswith("_") or not inspect.isfunction(value):
                continue
            if value.__module__ != module_name:
                continue
            registry.register(value, name=attr)
        return registry
