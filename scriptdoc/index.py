"""
index.py

Responsibility: Parse a script's documentation once into a `DocIndex` and
store/load it as a YAML data asset.

Unlike the linear scan in `extractor.py`, building an index is strict:
- a block name may occur only once per script
- every opening sentinel must be closed

The renderer can then work from the index without re-reading the script.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from scriptdoc.extractor import DEFAULT_PREFIX, iter_blocks, read_source


class DocFormatError(ValueError):
    pass


@dataclass(frozen=True)
class DocIndex:
    """Documentation blocks of one script, keyed by block name."""

    script: str
    blocks: dict[str, str] = field(default_factory=dict)

    @property
    def description(self) -> str:
        return self.blocks.get(self.script, "")

    @property
    def topics(self) -> list[str]:
        return sorted(name for name in self.blocks if name != self.script)

    def get(self, name: str) -> str:
        return self.blocks.get(name, "")


def build_index(path: str | Path, *, prefix: str = DEFAULT_PREFIX) -> DocIndex:
    """
    Parse every documentation block of `path` into a `DocIndex`.

    Raises DocFormatError on a duplicate block name or an unterminated block.
    """
    p = Path(path)
    blocks: dict[str, str] = {}
    for block in iter_blocks(read_source(p), prefix=prefix):
        if not block.terminated:
            raise DocFormatError(f"{p}: block <doc:{block.name}> is never closed")
        if block.name in blocks:
            raise DocFormatError(f"{p}: block <doc:{block.name}> is defined more than once")
        blocks[block.name] = "\n".join(block.body)

    # Deterministic key order in the dumped asset.
    return DocIndex(script=p.name, blocks=dict(sorted(blocks.items())))


def dump_index(index: DocIndex) -> str:
    data = {"script": index.script, "blocks": index.blocks}
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


def _parse_index_data(data: Any, source: str) -> DocIndex:
    if not isinstance(data, dict):
        raise DocFormatError(f"{source}: doc index must be a mapping at the top level.")

    script = str(data.get("script") or "").strip()
    if not script:
        raise DocFormatError(f"{source}: doc index must define `script`.")

    blocks_raw = data.get("blocks") or {}
    if not isinstance(blocks_raw, dict):
        raise DocFormatError(f"{source}: `blocks` must be a mapping when provided.")

    blocks = {str(k): "" if v is None else str(v) for k, v in blocks_raw.items()}
    return DocIndex(script=script, blocks=blocks)


def load_index(path: str | Path) -> DocIndex:
    """
    Load a YAML doc index written by `dump_index`.
    """
    p = Path(path)
    if not p.exists():
        raise DocFormatError(f"Doc index does not exist: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise DocFormatError(f"{p}: doc index is not valid YAML") from e
    return _parse_index_data(data, str(p))
