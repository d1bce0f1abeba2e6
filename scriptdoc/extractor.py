"""
extractor.py

Responsibility: Locate `<doc:NAME>` ... `</doc:NAME>` comment blocks in script source.

This implementation intentionally stays conservative:
- The scan is a single linear pass; blocks do not nest.
- `doc` only looks at sentinels carrying the requested name.
- A block closes at the first closing sentinel carrying the same name.
- An unterminated block yields whatever body was collected before end of text.

Strict validation (duplicates, unterminated blocks) lives in `index.py`.
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "#"


class ExtractError(ValueError):
    pass


@dataclass(frozen=True)
class DocBlock:
    """A named documentation block with its comment prefix stripped."""

    name: str
    body: list[str] = field(default_factory=list)
    terminated: bool = True


def _sentinel_re(prefix: str, closing: bool) -> re.Pattern[str]:
    slash = "/" if closing else ""
    return re.compile(rf"^\s*{re.escape(prefix)}\s*<{slash}doc:([^>]+)>\s*$")


def _strip_prefix(line: str, prefix: str) -> str:
    """
    Drop leading whitespace, the comment prefix and at most one following space.
    """
    stripped = line.lstrip()
    if stripped.startswith(prefix):
        stripped = stripped[len(prefix) :]
        if stripped.startswith(" "):
            stripped = stripped[1:]
    return stripped.rstrip("\r\n")


def iter_blocks(text: str, *, prefix: str = DEFAULT_PREFIX) -> Iterator[DocBlock]:
    """
    Yield every documentation block in `text`, in source order.
    """
    open_re = _sentinel_re(prefix, closing=False)
    close_re = _sentinel_re(prefix, closing=True)

    current: str | None = None
    body: list[str] = []
    for raw in text.splitlines():
        if current is None:
            m = open_re.match(raw)
            if m:
                current = m.group(1)
                body = []
            continue

        m = close_re.match(raw)
        if m and m.group(1) == current:
            yield DocBlock(name=current, body=body)
            current = None
            continue
        body.append(_strip_prefix(raw, prefix))

    if current is not None:
        logger.debug("Unterminated doc block %r", current)
        yield DocBlock(name=current, body=body, terminated=False)


def block_names(text: str, *, prefix: str = DEFAULT_PREFIX) -> list[str]:
    """
    Return the name of every opening sentinel in `text`, in source order.
    Unlike `iter_blocks`, this also sees sentinels inside other blocks.
    """
    open_re = _sentinel_re(prefix, closing=False)
    names: list[str] = []
    for raw in text.splitlines():
        m = open_re.match(raw)
        if m:
            names.append(m.group(1))
    return names


def read_source(path: str | Path) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ExtractError(f"Cannot read script source: {p}") from e


def extract_block(text: str, name: str, *, prefix: str = DEFAULT_PREFIX) -> list[str]:
    """
    Return the body lines of every `<doc:name>` block in `text`.

    Only sentinels carrying `name` are considered, so other blocks (enclosing
    or unterminated) never hide this one.
    """
    open_re = _sentinel_re(prefix, closing=False)
    close_re = _sentinel_re(prefix, closing=True)

    lines: list[str] = []
    inside = False
    for raw in text.splitlines():
        if not inside:
            m = open_re.match(raw)
            inside = bool(m) and m.group(1) == name
            continue
        m = close_re.match(raw)
        if m and m.group(1) == name:
            inside = False
            continue
        lines.append(_strip_prefix(raw, prefix))
    return lines


def doc(name: str, *paths: str | Path, prefix: str = DEFAULT_PREFIX) -> list[str]:
    """
    Return the body lines of every block called `name` across `paths`.

    With no paths, the running script (`sys.argv[0]`) is scanned. A name that
    does not occur yields an empty list.
    """
    sources = paths or (sys.argv[0],)
    lines: list[str] = []
    for path in sources:
        lines.extend(extract_block(read_source(path), name, prefix=prefix))
    return lines


def doc_topics(path: str | Path, *, prefix: str = DEFAULT_PREFIX) -> list[str]:
    """
    Return the sorted, deduplicated topic names of a script.

    The block named after the file itself is the script description, not a topic.
    """
    p = Path(path)
    names = set(block_names(read_source(p), prefix=prefix))
    names.discard(p.name)
    return sorted(names)
