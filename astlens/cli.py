"""Command-line front door for astlens.

Parses CLI options, loads the source snapshot, and applies the requested
selection/search actions. Then prints the tree and source panes once.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .config import (
    load_export_indent,
    load_style_name,
    load_summary_max_chars,
    load_theme_name,
    save_style_name,
    save_theme_name,
)
from .errors import ExportError, SnapshotLoadError
from .loader import load_snapshot
from .logging_config import DEFAULT_LOG_PATH, setup_logging
from .session import ViewerSession
from .source_pane.syntax import DEFAULT_STYLE
from .syntax_tree.export import write_export
from .terminal import StdoutSurface
from .tree_pane.details import render_details_rows
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

STDOUT_CONTAINER_ID = "stdout"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((120, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show a syntax tree next to its source with line/node cross-references."
    )
    parser.add_argument("path", help="Source file to inspect.")
    parser.add_argument("--ast", metavar="JSON", help="Use this ESTree JSON file instead of parsing.")
    parser.add_argument("--language", default=None, help="Tree-sitter language (default: from file suffix).")
    parser.add_argument("--line", type=_positive_int, default=None, help="Select the node for this source line.")
    parser.add_argument("--select", metavar="NODE_PATH", default=None, help="Select a node by path, e.g. root.body.0.")
    parser.add_argument("--search", metavar="QUERY", default=None, help="Highlight nodes whose label contains QUERY.")
    parser.add_argument("--collapse-all", action="store_true", help="Start with every node collapsed.")
    parser.add_argument("--export", metavar="OUT", default=None, help="Write the tree as JSON to OUT.")
    parser.add_argument("--details", action="store_true", help="Print details of the selected node after the panes.")
    parser.add_argument("--style", default=None, help="Pygments style name for the source pane.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--stacked", action="store_true", help="Print panes one after another.")
    parser.add_argument("--max-cols", type=_positive_int, default=None, help="Output width (default: terminal width).")
    parser.add_argument("--persist", action="store_true", help="Remember --style/--theme as defaults.")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr.")
    parser.add_argument(
        "--log-file",
        nargs="?",
        const=str(DEFAULT_LOG_PATH),
        default=None,
        help="Also log to a rotating file (default location when no value given).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run the requested actions, and print both panes."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, Path(args.log_file) if args.log_file else None)

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")
    ast_path = Path(args.ast) if args.ast else None
    if ast_path is not None and not ast_path.is_file():
        raise SystemExit(f"Path not found: {ast_path}")

    style = args.style or load_style_name() or DEFAULT_STYLE
    theme_name = args.theme or load_theme_name()
    if args.persist:
        if args.style:
            save_style_name(args.style)
        if args.theme:
            save_theme_name(args.theme)

    try:
        snapshot = load_snapshot(path, language=args.language, ast_path=ast_path)
    except SnapshotLoadError as exc:
        raise SystemExit(str(exc)) from exc

    no_color = args.no_color or not sys.stdout.isatty()
    session = ViewerSession(
        summary_max_chars=load_summary_max_chars(),
        style=style,
        theme=resolve_theme(theme_name, no_color=no_color),
        no_color=no_color,
    )
    max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
    surface = StdoutSurface(max_cols, stacked=args.stacked, no_color=no_color)
    session.attach({STDOUT_CONTAINER_ID: surface}, STDOUT_CONTAINER_ID)
    session.replace_snapshot(snapshot)

    for issue in snapshot.issues:
        location = f"{issue.line}:{issue.column}: " if issue.line is not None else ""
        sys.stderr.write(f"{path}: {location}{issue.message}\n")

    if args.collapse_all:
        session.collapse_all()
    if args.search is not None:
        session.search(args.search)
    if args.select is not None and session.select_by_path(args.select) is None:
        sys.stderr.write(f"No node at path {args.select}\n")
    if args.line is not None and session.select_by_line(args.line) is None:
        sys.stderr.write(f"No node covers line {args.line}\n")

    if args.export is not None:
        try:
            target = write_export(snapshot.root, Path(args.export), indent=load_export_indent())
        except ExportError as exc:
            raise SystemExit(str(exc)) from exc
        sys.stderr.write(f"Exported tree to {target}\n")

    session.render()
    if args.details:
        details = session.selected_details()
        if details is None:
            sys.stderr.write("No node selected\n")
        else:
            sys.stdout.write("\n".join(render_details_rows(details, session.theme)) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
