"""
cli.py

Responsibility: CLI entrypoint for scriptdoc.

Subcommands:
- `doc NAME [FILE...]`: print one documentation block
- `topics FILE`: list a script's topics
- `help COMMAND [TOPIC] [--index FILE]`: render a script's help through the pager
- `exec [--index FILE] SCRIPT [ARGS...]`: dispatch like the script's own bootstrap would
- `index SCRIPT [-o OUT]`: write the YAML doc index for a script

This module should orchestrate behavior but keep concerns isolated:
- Extraction: `extractor.py` / `index.py`
- Rendering: `renderer.py`
- Dispatch: `dispatcher.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from scriptdoc import __version__
from scriptdoc.dispatcher import DispatchError, doc_execute
from scriptdoc.extractor import ExtractError, doc, doc_topics
from scriptdoc.index import DocFormatError, build_index, dump_index, load_index
from scriptdoc.paths import CommandNotFoundError, resolve_executable
from scriptdoc.registry import UnknownCommandError
from scriptdoc.renderer import RenderError, doc_help, help_from_index, page
from scriptdoc.settings import Settings, SettingsError
from scriptdoc.shell import ShellError

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 127

# argparse swallows a bare "--", so prefixes starting with it need a name.
PREFIX_ALIASES = {
    "hash": "#",
    "dashes": "--",
    "slashes": "//",
    "semicolon": ";",
    "percent": "%",
}


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)


def doc_cmd(args: argparse.Namespace, settings: Settings) -> int:
    _print_lines(doc(args.name, *args.files, prefix=args.prefix))
    return 0


def topics_cmd(args: argparse.Namespace, settings: Settings) -> int:
    _print_lines(doc_topics(args.file, prefix=args.prefix))
    return 0


def help_cmd(args: argparse.Namespace, settings: Settings) -> int:
    if args.index:
        resolve_executable(args.command_name)
        text = help_from_index(load_index(args.index), args.topic)
    else:
        text = doc_help(args.command_name, args.topic, prefix=args.prefix)
    if args.no_pager:
        sys.stdout.write(text)
    else:
        page(text, pager=settings.pager)
    return 0


def exec_cmd(args: argparse.Namespace, settings: Settings) -> int:
    pager = sys.stdout.write if args.no_pager else None
    index = load_index(args.index) if args.index else None
    return doc_execute(
        args.script,
        list(args.args),
        settings=settings,
        pager=pager,
        prefix=args.prefix,
        index=index,
    )


def index_cmd(args: argparse.Namespace, settings: Settings) -> int:
    path = resolve_executable(args.script) if args.resolve else Path(args.script)
    text = dump_index(build_index(path, prefix=args.prefix))
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8", newline="\n")
        logger.info("Wrote doc index %s", out)
    else:
        sys.stdout.write(text)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="scriptdoc", description="Embedded script documentation and command dispatch")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="YAML config file with mode flags and pager")
    p.add_argument("-v", "--verbose", action="store_true", default=None, help="Verbose mode (status output, debug logging)")
    p.add_argument("--no-interactive", dest="interactive", action="store_false", default=None, help="Never prompt")
    p.add_argument("--elevated", action="store_true", default=None, help="Run privileged commands through sudo")
    p.add_argument("--no-pager", action="store_true", help="Write help text directly to stdout")
    p.add_argument(
        "--prefix",
        default="#",
        type=_comment_prefix,
        help="Comment prefix of documentation lines, or one of: " + ", ".join(PREFIX_ALIASES) + " (default: #)",
    )
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("doc", help="Print a documentation block")
    d.add_argument("name", help="Block name")
    d.add_argument("files", nargs="*", help="Files to scan")
    d.set_defaults(func=doc_cmd)

    t = sub.add_parser("topics", help="List the topics documented in a script")
    t.add_argument("file", help="Script file")
    t.set_defaults(func=topics_cmd)

    h = sub.add_parser("help", help="Show a script's help, or one topic")
    h.add_argument("command_name", metavar="COMMAND", help="Script name or path")
    h.add_argument("topic", nargs="?", default=None, help="Topic name")
    h.add_argument("--index", default=None, help="Render from a YAML doc index instead of the script source")
    h.set_defaults(func=help_cmd)

    e = sub.add_parser("exec", help="Dispatch a script invocation (help or command)")
    e.add_argument("--index", default=None, help="Render help from a YAML doc index instead of the script source")
    e.add_argument("script", help="Script name or path")
    e.add_argument("args", nargs=argparse.REMAINDER, help="Command and arguments")
    e.set_defaults(func=exec_cmd)

    i = sub.add_parser("index", help="Write the YAML doc index of a script")
    i.add_argument("script", help="Script file")
    i.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    i.add_argument("--resolve", action="store_true", help="Look the script up on PATH")
    i.set_defaults(func=index_cmd)

    return p


def _comment_prefix(value: str) -> str:
    value = PREFIX_ALIASES.get(value, value)
    if not value.strip():
        raise argparse.ArgumentTypeError("comment prefix must not be empty")
    return value


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.load(args.config)
    # CLI overrides
    for flag in ("interactive", "verbose", "elevated"):
        value = getattr(args, flag)
        if value is not None:
            settings.set(flag, value)
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not isinstance(args.prefix, str):
        parser.error("--prefix cannot be '--'; use --prefix dashes")

    try:
        settings = _settings_from_args(args)
        logging.basicConfig(
            level=logging.DEBUG if settings.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        return int(args.func(args, settings))
    except (CommandNotFoundError, UnknownCommandError) as e:
        print(f"scriptdoc: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except (ExtractError, DocFormatError, RenderError, SettingsError, DispatchError, ShellError) as e:
        print(f"scriptdoc: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
