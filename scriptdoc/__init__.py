"""
scriptdoc package

This package implements embedded script documentation and command dispatch.

Key responsibilities are split across modules:
- `extractor.py`: scan script source for `<doc:NAME>` comment blocks and topics
- `index.py`: strict parse into a `DocIndex`, stored as a YAML data asset
- `renderer.py`: help text rendering (Jinja2) and paging
- `registry.py` / `dispatcher.py`: command table and the help/command entry point
- `settings.py` / `shell.py`: mode flags and the helpers gated by them
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

from scriptdoc.dispatcher import Script, doc_execute
from scriptdoc.extractor import doc, doc_topics
from scriptdoc.renderer import doc_help
from scriptdoc.settings import Settings, is_truthy, truthy

__all__ = [
    "__version__",
    "Script",
    "Settings",
    "doc",
    "doc_execute",
    "doc_help",
    "doc_topics",
    "is_truthy",
    "truthy",
]

__version__ = "0.1.0"
