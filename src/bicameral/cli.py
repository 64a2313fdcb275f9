"""
bicameral.cli - Command-line interface.

Main entry point for the bicameral CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from bicameral import __version__
from bicameral.commands import (
    classify_cmd,
    config_cmd,
    convert_cmd,
    diff_cmd,
    preview_cmd,
    serve_cmd,
)
from bicameral.config import load_config
from bicameral.document import FontSize

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bicameral",
        description="Text and whiteboard views of the same content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bicameral classify "Is this a question?"   # Show content category
  bicameral to-graph notes.txt -o board.json  # Text to whiteboard nodes
  bicameral to-text board.json                # Whiteboard nodes to text
  bicameral diff old.txt new.txt              # Changed paragraphs
  bicameral preview notes.txt -o notes.html   # HTML preview
  bicameral serve notes.txt                   # REST API + preview

Configuration:
  bicameral config path         # Show config file location
  bicameral config show         # View all settings
  bicameral config init         # Create .bicameral.toml here

For detailed command help: bicameral <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"bicameral {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # classify command
    classify_parser = subparsers.add_parser(
        "classify",
        help="Show the content category and color of each line",
    )
    classify_parser.add_argument(
        "text",
        nargs="+",
        help="Lines of text to classify",
    )
    classify_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # to-graph command
    to_graph_parser = subparsers.add_parser(
        "to-graph",
        help="Convert a text file to whiteboard nodes and edges (JSON)",
    )
    to_graph_parser.add_argument(
        "file",
        help="Text file to convert ('-' for stdin)",
    )
    to_graph_parser.add_argument(
        "--font-size",
        choices=[s.value for s in FontSize],
        help="Font size for every node (default: [editor] font_size)",
    )
    to_graph_parser.add_argument(
        "--font-family",
        help="Font family for every node (default: [editor] font_family)",
    )
    to_graph_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write JSON here instead of stdout",
        metavar="PATH",
    )

    # to-text command
    to_text_parser = subparsers.add_parser(
        "to-text",
        help="Convert whiteboard JSON back to text",
    )
    to_text_parser.add_argument(
        "file",
        help="Graph JSON file ('-' for stdin)",
    )
    to_text_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write text here instead of stdout",
        metavar="PATH",
    )

    # diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Show paragraphs that changed between two text files",
    )
    diff_parser.add_argument("old", type=Path, help="Earlier version")
    diff_parser.add_argument("new", type=Path, help="Later version")
    diff_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # preview command
    preview_parser = subparsers.add_parser(
        "preview",
        help="Render a text file as an HTML preview",
    )
    preview_parser.add_argument(
        "file",
        help="Text file to render ('-' for stdin)",
    )
    preview_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write HTML here instead of stdout",
        metavar="PATH",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve an editor session over a REST API",
    )
    serve_parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="Text file to load into the session",
    )
    serve_parser.add_argument(
        "--host",
        help="Interface to bind (default: [server] host)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: [server] port)",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_show = config_subparsers.add_parser("show", help="Show effective configuration")
    config_show.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )
    config_subparsers.add_parser("path", help="Show config file location")
    config_init = config_subparsers.add_parser("init", help="Create a default config file")
    config_init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing file",
    )

    # version command
    subparsers.add_parser("version", help="Show version")

    return parser


def configure_logging(args: argparse.Namespace, config: Dict[str, Any]) -> None:
    """Set the root log level from -v/-q or the [logging] section."""
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    elif getattr(args, "quiet", False):
        level = logging.ERROR
    else:
        name = str(config.get("logging", {}).get("level", "WARNING")).upper()
        level = getattr(logging, name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.settings = load_config(args.config)
        configure_logging(args, args.settings)

        # Dispatch to command handlers
        if args.command == "classify":
            return classify_cmd.run(args)
        elif args.command in ("to-graph", "to-text"):
            return convert_cmd.run(args)
        elif args.command == "diff":
            return diff_cmd.run(args)
        elif args.command == "preview":
            return preview_cmd.run(args)
        elif args.command == "serve":
            return serve_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "version":
            return version_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"bicameral {__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
