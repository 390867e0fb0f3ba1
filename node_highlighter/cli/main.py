"""CLI interface for structural node selection."""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import get_app_name, get_app_version, load_pattern_config, set_profile
from ..models.document_kind import DocumentKind
from ..pipeline.file_type import UnsupportedFileType
from ..pipeline.providers import DocumentLoadError, ProviderUnavailable
from ..session.file_library import FileLibrary
from ..session.selection_state import SelectionKindError

logger = logging.getLogger(__name__)


def _open_library(args: argparse.Namespace) -> FileLibrary:
    if args.profile != "default":
        set_profile(args.profile)
    library = FileLibrary(config=load_pattern_config())
    library.open(args.file)
    return library


def _format_node(node) -> str:
    if node.kind == DocumentKind.PDF_LIKE:
        return f"{node.id}\tpage={node.page}\tx={node.x:.1f}\ty={node.y:g}\tsize={node.font_size:.1f}\t{node.text}"
    return f"{node.id}\tx={node.x:g}\t{node.text}"


def _handle_nodes(args: argparse.Namespace) -> int:
    library = _open_library(args)
    document = library.state.document
    if document.kind == DocumentKind.TABULAR:
        for i, sheet in enumerate(document.sheets):
            print(f"{i}\t{sheet.name}\trows={len(sheet.rows)}\tcolumns={sheet.column_count}")
    else:
        for node in document.nodes:
            print(_format_node(node))
    for label in document.skipped:
        print(f"Skipped: {label}", file=sys.stderr)
    return 0


def _handle_select(args: argparse.Namespace) -> int:
    library = _open_library(args)
    state = library.state
    for seed in args.seed:
        state.select_by_seed(seed)
    for node_id in args.exclude or []:
        state.exclude_node(node_id)
    for node_id in state.highlighted_ids():
        print(node_id)
    logger.info(f"{state.highlighted_count()} highlighted, {state.selected_count()} selected")
    return 0


def _handle_columns(args: argparse.Namespace) -> int:
    library = _open_library(args)
    state = library.state
    state.set_active_sheet(args.sheet)
    for column in args.toggle:
        state.toggle_column(args.sheet, column)
    print(" ".join(str(c) for c in state.selected_columns(args.sheet)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="node-highlighter",
        description=f"{get_app_name()} - select one element, propagate to every structurally similar one"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_app_version()}"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--profile",
        type=str,
        default="default",
        help="Configuration profile name (default: default)"
    )
    common.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    nodes = subparsers.add_parser("nodes", parents=[common], help="List extracted structural nodes")
    nodes.add_argument("file", help="PDF, spreadsheet (.xlsx) or block tree (.json) file")
    nodes.set_defaults(handler=_handle_nodes)

    select = subparsers.add_parser("select", parents=[common], help="Propagate a selection from seed nodes")
    select.add_argument("file", help="PDF or block tree (.json) file")
    select.add_argument(
        "--seed",
        action="append",
        required=True,
        help="Seed node id (repeat to add more patterns)"
    )
    select.add_argument(
        "--exclude",
        action="append",
        help="Node id to veto from the result (repeatable)"
    )
    select.set_defaults(handler=_handle_select)

    columns = subparsers.add_parser("columns", parents=[common], help="Toggle spreadsheet columns")
    columns.add_argument("file", help="Spreadsheet (.xlsx) file")
    columns.add_argument("--sheet", type=int, default=0, help="Sheet index (default: 0)")
    columns.add_argument(
        "--toggle",
        type=int,
        action="append",
        required=True,
        help="Column index to toggle (repeatable)"
    )
    columns.set_defaults(handler=_handle_columns)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(message)s"
    )

    try:
        exit_code = args.handler(args)
    except (
        ProviderUnavailable,
        DocumentLoadError,
        UnsupportedFileType,
        SelectionKindError,
        FileNotFoundError,
        ValueError,
    ) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
