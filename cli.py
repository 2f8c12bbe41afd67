#!/usr/bin/env python3
"""
hyprconf CLI

Follows ``source = ...`` and ``include = [...]`` directives in hypr* config
files, and finds config files by their metadata header.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from exporters import to_mermaid, to_ascii, to_json
from hyprconf.errors import IncludeLoadError
from hyprconf.expand import is_directory, is_regular_file
from hyprconf.includes import load_with_includes
from hyprconf.metadata import ConfigMetaSpec, discover_config_files, resolve_config_path
from hyprconf.walker import build_source_graph


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="hyprconf",
        description="Resolve source/include graphs of hypr* config files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hyprconf sources ~/.config/hypr/hyprland.conf          # ASCII tree of sourced files
  hyprconf sources hyprland.conf -f list                 # Visited files, one per line
  hyprconf sources hyprland.conf -f mermaid -o graph.md  # Mermaid output to file
  hyprconf includes hyprbar.conf                         # Merged document as JSON
  hyprconf includes deck.conf --key imports              # Custom include key
  hyprconf discover ~/.config/hypr --type bar            # Files declaring type = bar
        """,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped files and merge steps to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # sources
    sources = subparsers.add_parser(
        "sources",
        help="Walk the source = ... graph from a config file",
    )
    sources.add_argument("file", help="Root config file")
    sources.add_argument(
        "-f", "--format",
        choices=["ascii", "json", "mermaid", "list"],
        default="ascii",
        help="Output format (default: ascii)",
    )
    sources.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )
    sources.add_argument(
        "--orientation",
        choices=["LR", "TD", "TB", "RL", "BT"],
        default="LR",
        help="Mermaid flowchart orientation (default: LR)",
    )
    sources.add_argument(
        "--ignore-missing",
        action="store_true",
        help="Hide sourced paths that do not exist",
    )
    _add_common_options(sources)

    # includes
    includes = subparsers.add_parser(
        "includes",
        help="Load a structured config and merge its includes",
    )
    includes.add_argument("file", help="Root config file")
    includes.add_argument(
        "--key",
        default="include",
        help="Top-level include key (default: include)",
    )
    includes.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation level (default: 2)",
    )
    _add_common_options(includes)

    # discover
    discover = subparsers.add_parser(
        "discover",
        help="Find config files by metadata header",
    )
    discover.add_argument("root", help="Directory to search")
    discover.add_argument(
        "--type",
        dest="config_type",
        required=True,
        help="Config type declared in the metadata header",
    )
    discover.add_argument(
        "--ext",
        nargs="+",
        default=["conf"],
        help="Allowed file extensions (default: conf)",
    )
    discover.add_argument(
        "--fallback",
        default=None,
        help="Preferred path; print the single resolved config path",
    )
    discover.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    return parser.parse_args(args)


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--home",
        type=str,
        default=None,
        help="Home directory used for ~/ and $HOME (default: current user's)",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )


def _run_sources(parsed, home: Optional[Path]) -> str:
    root = Path(parsed.file)
    graph = build_source_graph(root, home)
    include_missing = not parsed.ignore_missing
    base = root.parent

    if parsed.format == "list":
        return "\n".join(str(path) for path in graph.order)
    if parsed.format == "json":
        return to_json(graph, base=base, include_missing=include_missing)
    if parsed.format == "mermaid":
        return to_mermaid(
            graph,
            orientation=parsed.orientation,
            base=base,
            include_missing=include_missing,
        )
    return to_ascii(
        graph,
        base=base,
        style=parsed.ascii_style,
        include_missing=include_missing,
    )


def _run_includes(parsed, home: Optional[Path]) -> str:
    document = load_with_includes(Path(parsed.file), parsed.key, home)
    return json.dumps(document, indent=parsed.indent, default=str)


def _run_discover(parsed) -> str:
    root = Path(parsed.root)
    spec = ConfigMetaSpec.for_type(parsed.config_type, parsed.ext)

    if parsed.fallback is not None:
        return str(resolve_config_path(root, Path(parsed.fallback), spec))

    return "\n".join(str(path) for path in discover_config_files(root, spec))


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if parsed.command in ("sources", "includes"):
        if not is_regular_file(Path(parsed.file)):
            print(f"Error: '{parsed.file}' is not a file", file=sys.stderr)
            return 1
        home = Path(parsed.home).expanduser() if parsed.home else None
    elif not is_directory(Path(parsed.root)):
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return 1

    try:
        if parsed.command == "sources":
            output = _run_sources(parsed, home)
        elif parsed.command == "includes":
            output = _run_includes(parsed, home)
        else:
            output = _run_discover(parsed)
    except IncludeLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
