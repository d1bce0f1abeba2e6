"""
renderer.py

Responsibility: Turn documentation blocks into help text and show it.

Rules:
- Without a topic: the script's own block, then an "Available topics" listing.
- With a topic: only that topic's block.
- The listing is omitted when the script has no topics.

This module intentionally does NOT know about command dispatch.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import TextIO

from jinja2 import Environment, StrictUndefined

from scriptdoc.extractor import DEFAULT_PREFIX, doc, doc_topics
from scriptdoc.index import DocIndex
from scriptdoc.paths import resolve_executable

DEFAULT_PAGER = "less -R"

HELP_TEMPLATE = (
    "{{ description }}\n"
    "{%- if topics %}\n"
    "{%- if description %}\n\n{% endif %}"
    "Available topics:\n"
    "{% for topic in topics %}\n"
    "    {{ topic }}\n"
    "{%- endfor %}\n"
    "{%- endif %}\n"
)


class RenderError(RuntimeError):
    pass


_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)
_help_template = _env.from_string(HELP_TEMPLATE)


def render_help(description: str, topics: list[str]) -> str:
    """
    Render a script description followed by its topic listing.
    """
    if not description.strip() and not topics:
        return ""
    return _help_template.render(description=description.rstrip("\n"), topics=topics)


def render_topic(body: str) -> str:
    text = body.rstrip("\n")
    return f"{text}\n" if text else ""


def doc_help(
    command: str | Path,
    topic: str | None = None,
    *,
    search_path: str | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    """
    Build the help text for `command`, resolved to an executable script.
    """
    path = resolve_executable(command, search_path)
    if topic:
        return render_topic("\n".join(doc(topic, path, prefix=prefix)))

    description = "\n".join(doc(path.name, path, prefix=prefix))
    return render_help(description, doc_topics(path, prefix=prefix))


def help_from_index(index: DocIndex, topic: str | None = None) -> str:
    if topic:
        return render_topic(index.get(topic))
    return render_help(index.description, index.topics)


def page(text: str, *, pager: str | None = None, stream: TextIO | None = None) -> None:
    """
    Show text through a pager when writing to a terminal, else write it directly.
    """
    out = stream or sys.stdout
    if not out.isatty():
        out.write(text)
        out.flush()
        return

    cmd = shlex.split(pager or os.environ.get("PAGER") or DEFAULT_PAGER)
    try:
        subprocess.run(cmd, input=text, text=True, check=True)
    except FileNotFoundError as e:
        raise RenderError(f"Pager not found: {cmd[0]}") from e
    except subprocess.CalledProcessError as e:
        raise RenderError(f"Pager failed ({e.returncode}): {' '.join(cmd)}") from e
