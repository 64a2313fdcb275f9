"""
bicameral.commands.serve_cmd - Serve an editor session over HTTP.

Requires the ``server`` extra (Flask, flask-cors, Jinja2).
"""

from __future__ import annotations

import argparse
import logging
import sys

from bicameral.commands import read_input, settings_for

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace) -> int:
    """Run the serve command."""
    try:
        from bicameral.server import create_app
    except ImportError:
        print("Error: serve requires additional dependencies.", file=sys.stderr)
        print("Install with: pip install bicameral[server]", file=sys.stderr)
        return 1

    from bicameral.session import EditorSession

    config = settings_for(args)
    server = config.get("server", {})
    host = args.host or server.get("host", "127.0.0.1")
    port = args.port or int(server.get("port", 8080))

    session = EditorSession(config)
    if args.file is not None:
        session.set_text(read_input(args.file))
        logger.info("Loaded %d paragraphs from %s", len(session.document), args.file)

    app = create_app(session, config)
    if not getattr(args, "quiet", False):
        print(f"Serving on http://{host}:{port}/  (Ctrl-C to stop)")
    try:
        app.run(host=host, port=port, debug=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")
    finally:
        session.close()

    return 0
