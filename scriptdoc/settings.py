"""
settings.py

Responsibility: Mode flags (interactive, verbose, elevated) and CLI configuration.

Flags are held on an explicit `Settings` object passed to whatever needs them.
Values are layered: defaults, then an optional YAML config file, then the
process environment. `to_env()` exports the flags back as "1"/"" strings so
child scripts see the same modes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

ENV_PREFIX = "SCRIPTDOC_"
FLAGS = ("interactive", "verbose", "elevated")

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


class SettingsError(ValueError):
    pass


def truthy(value: Any) -> str:
    """
    Normalize any value to the canonical boolean string: "1" or "".
    """
    if isinstance(value, bool):
        return "1" if value else ""
    if value is None:
        return ""
    return "1" if str(value).strip().lower() in _TRUTHY else ""


def is_truthy(value: Any) -> bool:
    return truthy(value) == "1"


@dataclass
class Settings:
    """Mode flags for one run, plus the pager used for help output."""

    interactive: bool = True
    verbose: bool = False
    elevated: bool = False
    pager: str | None = None

    def get(self, flag: str) -> bool:
        if flag not in FLAGS:
            raise SettingsError(f"Unknown mode flag: {flag}")
        return bool(getattr(self, flag))

    def set(self, flag: str, value: Any) -> None:
        if flag not in FLAGS:
            raise SettingsError(f"Unknown mode flag: {flag}")
        setattr(self, flag, is_truthy(value))

    def to_env(self) -> dict[str, str]:
        env = {f"{ENV_PREFIX}{flag.upper()}": truthy(getattr(self, flag)) for flag in FLAGS}
        if self.pager:
            env[f"{ENV_PREFIX}PAGER"] = self.pager
        return env

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, *, base: Settings | None = None) -> Settings:
        """
        Read flags from SCRIPTDOC_* variables; unset variables keep `base` values.
        """
        env = os.environ if env is None else env
        out = replace(base) if base is not None else cls()
        for flag in FLAGS:
            key = f"{ENV_PREFIX}{flag.upper()}"
            if key in env:
                out.set(flag, env[key])
        pager = env.get(f"{ENV_PREFIX}PAGER") or env.get("PAGER")
        if pager:
            out.pager = pager
        return out

    @classmethod
    def from_file(cls, path: str | Path) -> Settings:
        """
        Read a YAML mapping with keys `interactive`, `verbose`, `elevated`, `pager`.
        """
        p = Path(path)
        if not p.exists():
            raise SettingsError(f"Config file does not exist: {p}")
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"{p}: config is not valid YAML") from e
        if not isinstance(data, dict):
            raise SettingsError(f"{p}: config must be a mapping/object at the top level.")

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise SettingsError(f"{p}: unknown config keys: {', '.join(unknown)}")

        out = cls()
        for flag in FLAGS:
            if flag in data:
                out.set(flag, data[flag])
        if data.get("pager"):
            out.pager = str(data["pager"])
        return out

    @classmethod
    def load(cls, config_path: str | Path | None = None, env: Mapping[str, str] | None = None) -> Settings:
        base = cls.from_file(config_path) if config_path else cls()
        return cls.from_env(env, base=base)
