"""bicameral.server - Flask REST API server.

Provides a thin REST wrapper over the pure functions in
``bicameral.api``, exposing one editor session over HTTP.
"""

from bicameral.server.app import create_app

__all__ = ["create_app"]
