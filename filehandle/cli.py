"""Command-line front door for filehandle.

Each subcommand opens a ``FileHandle`` on its path argument and runs one
operation on it. Handle errors exit with their message.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, guess_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from . import config
from .errors import FileHandleError
from .handle import FileHandle
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _octal_mode(value: str) -> int:
    """argparse type for octal permission bits."""
    try:
        parsed = int(value, 8)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid octal mode: {value!r}") from exc
    if parsed < 0 or parsed > 0o7777:
        raise argparse.ArgumentTypeError("mode must be between 0 and 7777")
    return parsed


def decode_text(data: bytes) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def highlight_source(source: str, filename: str, style: str) -> str:
    """Highlight ``source`` for a terminal, guessing the lexer from ``filename``.

    Unknown styles fall back to the configured default.
    """
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = config.DEFAULT_HIGHLIGHT_STYLE
    try:
        lexer = guess_lexer_for_filename(filename, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, TerminalFormatter(style=style))


def _cmd_stat(args: argparse.Namespace) -> None:
    handle = FileHandle.open(args.path)
    print(f"path: {handle.path}")
    print(f"kind: {handle.kind.value}")
    print(f"size: {handle.size}")
    print(f"name: {handle.name}")
    print(f"prefix: {handle.prefix}")
    print(f"suffix: {handle.suffix}")


def _cmd_ls(args: argparse.Namespace) -> None:
    children = FileHandle.open(args.path).children()
    if args.sort:
        children.sort(key=lambda child: child.name)
    for child in children:
        if child.is_dir:
            print(f"{child.name}/")
        else:
            print(f"{child.name}\t{child.size}")


def _cmd_cat(args: argparse.Namespace) -> None:
    handle = FileHandle.open(args.path)
    text = decode_text(handle.read())
    if args.highlight:
        style = args.style if args.style is not None else config.load_highlight_style()
        text = highlight_source(text, handle.name, style)
    sys.stdout.write(text)


def _cmd_mkdir(args: argparse.Namespace) -> None:
    mode = args.mode if args.mode is not None else config.load_dir_mode()
    created = FileHandle.open(args.path).mkdir_all(args.name, mode)
    print(created.path)


def _cmd_rm(args: argparse.Namespace) -> None:
    FileHandle.open(args.path).remove()


def _cmd_rename(args: argparse.Namespace) -> None:
    handle = FileHandle.open(args.path)
    handle.rename(args.name)
    print(handle.path)


def _cmd_mv(args: argparse.Namespace) -> None:
    handle = FileHandle.open(args.source)
    handle.move(args.destination)
    print(handle.path)


def _cmd_cp(args: argparse.Namespace) -> None:
    report = FileHandle.open(args.source).paste(args.destination, dir_mode=config.load_dir_mode())
    for outcome in report.failed:
        print(f"failed: {outcome.relative_path or report.source}: {outcome.error}", file=sys.stderr)
    print(f"copied {len(report.copied)} file(s) to {report.destination}")
    if not report.ok:
        raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filehandle",
        description="Inspect, copy, move and delete files through cached file handles.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: from config, else WARNING).")
    commands = parser.add_subparsers(dest="command", required=True)

    stat_parser = commands.add_parser("stat", help="Show cached metadata for PATH.")
    stat_parser.add_argument("path")
    stat_parser.set_defaults(func=_cmd_stat)

    ls_parser = commands.add_parser("ls", help="List immediate children of directory PATH.")
    ls_parser.add_argument("path")
    ls_parser.add_argument("--sort", action="store_true", help="Sort entries by name.")
    ls_parser.set_defaults(func=_cmd_ls)

    cat_parser = commands.add_parser("cat", help="Print file contents.")
    cat_parser.add_argument("path")
    cat_parser.add_argument("--highlight", action="store_true", help="Syntax-highlight with Pygments.")
    cat_parser.add_argument("--style", default=None, help="Pygments style name.")
    cat_parser.set_defaults(func=_cmd_cat)

    mkdir_parser = commands.add_parser("mkdir", help="Create nested directory NAME under PATH.")
    mkdir_parser.add_argument("path")
    mkdir_parser.add_argument("name")
    mkdir_parser.add_argument("--mode", type=_octal_mode, default=None, help="Octal permission bits.")
    mkdir_parser.set_defaults(func=_cmd_mkdir)

    rm_parser = commands.add_parser("rm", help="Remove a file or directory tree.")
    rm_parser.add_argument("path")
    rm_parser.set_defaults(func=_cmd_rm)

    rename_parser = commands.add_parser("rename", help="Rename PATH to NAME in the same directory.")
    rename_parser.add_argument("path")
    rename_parser.add_argument("name")
    rename_parser.set_defaults(func=_cmd_rename)

    mv_parser = commands.add_parser("mv", help="Move SOURCE to DESTINATION.")
    mv_parser.add_argument("source")
    mv_parser.add_argument("destination")
    mv_parser.set_defaults(func=_cmd_mv)

    cp_parser = commands.add_parser("cp", help="Copy a file or directory tree.")
    cp_parser.add_argument("source")
    cp_parser.add_argument("destination")
    cp_parser.set_defaults(func=_cmd_cp)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run one handle operation.

    ``FileHandleError`` becomes ``SystemExit`` with the error message.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level if args.log_level is not None else config.load_log_level())
    logger.debug("running %s", args.command)
    try:
        args.func(args)
    except FileHandleError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
