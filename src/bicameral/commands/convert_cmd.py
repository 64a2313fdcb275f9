"""
bicameral.commands.convert_cmd - Convert between text and whiteboard JSON.

- to-graph: text file -> ``{"nodes": [...], "edges": [...]}``
- to-text:  graph JSON -> text, one paragraph per line
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from bicameral.commands import read_input, settings_for, write_output
from bicameral.graph.converter import to_graph, to_text
from bicameral.graph.relations import find_dangling_edges
from bicameral.graph.serialize import deserialize_graph, serialize_graph

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace) -> int:
    """Run the to-graph or to-text command."""
    if args.command == "to-graph":
        return _run_to_graph(args)
    elif args.command == "to-text":
        return _run_to_text(args)
    else:
        print(f"Unknown conversion: {args.command}", file=sys.stderr)
        return 1


def _run_to_graph(args: argparse.Namespace) -> int:
    editor = settings_for(args).get("editor", {})
    font_size = args.font_size or editor.get("font_size")
    font_family = args.font_family or editor.get("font_family")

    graph = to_graph(read_input(args.file), font_size, font_family)
    if graph.is_empty:
        print("No content to convert. Please add some text first.", file=sys.stderr)
        return 1

    write_output(json.dumps(serialize_graph(graph.nodes, graph.edges), indent=2), args.output)
    if args.output is not None and not getattr(args, "quiet", False):
        print(f"Wrote {len(graph.nodes)} nodes and {len(graph.edges)} edges to {args.output}")
    return 0


def _run_to_text(args: argparse.Namespace) -> int:
    try:
        payload = json.loads(read_input(args.file))
        nodes, edges = deserialize_graph(payload)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        print(f"Invalid graph file: {e}", file=sys.stderr)
        return 1

    for dangling in find_dangling_edges(nodes, edges):
        logger.warning("Ignoring %s", dangling)

    document = to_text(nodes, edges)
    if document.is_blank:
        print("No content found in whiteboard to convert to text.", file=sys.stderr)
        return 1

    write_output(document.to_text(), args.output)
    return 0
