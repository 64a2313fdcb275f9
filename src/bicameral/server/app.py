"""bicameral.server.app - Flask app factory and REST API routes.

This is a THIN REST wrapper. All logic delegates to the pure functions
in ``bicameral.api``; the routes only parse requests and pick status
codes.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from flask_cors import CORS

from bicameral.api import (
    _accept_change,
    _classify_text,
    _comment_change,
    _convert_to_graph,
    _convert_to_text,
    _diff_documents,
    _get_changes,
    _get_document,
    _get_mutation_log,
    _get_notifications,
    _get_status,
    _get_whiteboard,
    _reject_change,
    _set_document,
    _set_style,
    _set_tracking,
    _switch_mode,
    _tick,
    _whiteboard_add_node,
    _whiteboard_connect,
    _whiteboard_delete_edge,
    _whiteboard_delete_node,
    _whiteboard_move_node,
    _whiteboard_relabel_node,
    _whiteboard_undo,
)
from bicameral.session import EditorSession

logger = logging.getLogger(__name__)


def create_app(session: EditorSession, config: dict[str, Any]) -> Flask:
    """Create the Flask application with REST API routes.

    Args:
        session: The editor session the routes operate on.
        config: bicameral configuration dict.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    CORS(app)

    _state: dict[str, Any] = {
        "session": session,
        "config": config,
    }

    def _respond(result: dict[str, Any], error_code: int = 400):
        status_code = 200 if result.get("success") else error_code
        return jsonify(result), status_code

    def _change_exists(change_id: str) -> bool:
        return _state["session"].ledger.get(change_id) is not None

    # ─────────────────────────────────────────────────────────────────
    # Preview
    # ─────────────────────────────────────────────────────────────────

    @app.route("/")
    def index():
        """Serve the HTML preview of the session document."""
        from bicameral.html.preview import PreviewGenerator

        s = _state["session"]
        html = PreviewGenerator(s.document, s.style).generate(changes=s.ledger.changes)
        return html, 200, {"Content-Type": "text/html; charset=utf-8"}

    # ─────────────────────────────────────────────────────────────────
    # Stateless tools
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/classify", methods=["POST"])
    def api_classify():
        """POST /api/classify - Category and color for a line."""
        data = request.get_json(force=True)
        return jsonify(_classify_text(data.get("text", "")))

    @app.route("/api/convert/graph", methods=["POST"])
    def api_convert_graph():
        """POST /api/convert/graph - Text to nodes and edges."""
        data = request.get_json(force=True)
        result = _convert_to_graph(
            data.get("text", ""),
            data.get("font_size"),
            data.get("font_family"),
        )
        return _respond(result)

    @app.route("/api/convert/text", methods=["POST"])
    def api_convert_text():
        """POST /api/convert/text - Nodes and edges back to text."""
        data = request.get_json(force=True)
        return _respond(_convert_to_text(data))

    @app.route("/api/diff", methods=["POST"])
    def api_diff():
        """POST /api/diff - Paragraph diff between old and new text."""
        data = request.get_json(force=True)
        return jsonify(_diff_documents(data.get("old", ""), data.get("new", "")))

    # ─────────────────────────────────────────────────────────────────
    # Session state
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/status")
    def api_status():
        """GET /api/status - Mode, paragraph count, tracking flag, change counts."""
        return jsonify(_get_status(_state["session"]))

    @app.route("/api/document", methods=["GET"])
    def api_get_document():
        """GET /api/document - Current text and style."""
        return jsonify(_get_document(_state["session"]))

    @app.route("/api/document", methods=["PUT"])
    def api_put_document():
        """PUT /api/document - Replace the session text."""
        data = request.get_json(force=True)
        text = data.get("text")
        if text is None:
            return jsonify({"success": False, "error": "text required"}), 400
        return _respond(_set_document(_state["session"], text, data.get("author")), 409)

    @app.route("/api/style", methods=["POST"])
    def api_style():
        """POST /api/style - Alignment, font size, font family."""
        data = request.get_json(force=True)
        result = _set_style(
            _state["session"],
            alignment=data.get("alignment"),
            font_size=data.get("font_size"),
            font_family=data.get("font_family"),
            paragraph=data.get("paragraph"),
        )
        return _respond(result)

    @app.route("/api/mode", methods=["POST"])
    def api_mode():
        """POST /api/mode - Switch between normal and whiteboard mode."""
        data = request.get_json(force=True)
        mode = data.get("mode", "")
        if not mode:
            return jsonify({"success": False, "error": "mode required"}), 400
        return _respond(_switch_mode(_state["session"], mode), 409)

    @app.route("/api/tracking", methods=["POST"])
    def api_tracking():
        """POST /api/tracking - Enable or disable change tracking."""
        data = request.get_json(force=True)
        return jsonify(_set_tracking(_state["session"], bool(data.get("enabled"))))

    @app.route("/api/tick", methods=["POST"])
    def api_tick():
        """POST /api/tick - Let a settled edit become a proposal."""
        return jsonify(_tick(_state["session"]))

    @app.route("/api/notifications")
    def api_notifications():
        """GET /api/notifications - Recent notices."""
        try:
            limit = int(request.args.get("limit", "50"))
        except ValueError:
            return jsonify({"success": False, "error": "limit must be an integer"}), 400
        return jsonify(_get_notifications(_state["session"], limit))

    # ─────────────────────────────────────────────────────────────────
    # Change ledger
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/changes")
    def api_changes():
        """GET /api/changes?status=<status> - Change list, newest first."""
        result = _get_changes(_state["session"], request.args.get("status"))
        if "error" in result:
            return jsonify(result), 400
        return jsonify(result)

    @app.route("/api/changes/<change_id>/accept", methods=["POST"])
    def api_accept_change(change_id: str):
        """POST /api/changes/<id>/accept - Accept a pending change."""
        result = _accept_change(_state["session"], change_id)
        return _respond(result, 400 if _change_exists(change_id) else 404)

    @app.route("/api/changes/<change_id>/reject", methods=["POST"])
    def api_reject_change(change_id: str):
        """POST /api/changes/<id>/reject - Reject and restore the earlier text."""
        result = _reject_change(_state["session"], change_id)
        return _respond(result, 400 if _change_exists(change_id) else 404)

    @app.route("/api/changes/<change_id>/comment", methods=["POST"])
    def api_comment_change(change_id: str):
        """POST /api/changes/<id>/comment - Set the reviewer comment."""
        data = request.get_json(force=True)
        result = _comment_change(_state["session"], change_id, data.get("text", ""))
        return _respond(result, 400 if _change_exists(change_id) else 404)

    # ─────────────────────────────────────────────────────────────────
    # Whiteboard change requests
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/whiteboard")
    def api_whiteboard():
        """GET /api/whiteboard - Current nodes and edges."""
        return jsonify(_get_whiteboard(_state["session"]))

    @app.route("/api/whiteboard/nodes", methods=["POST"])
    def api_whiteboard_add_node():
        """POST /api/whiteboard/nodes - Add a node."""
        data = request.get_json(force=True)
        try:
            x, y = float(data.get("x", 0.0)), float(data.get("y", 0.0))
        except (TypeError, ValueError):
            return jsonify({"success": False, "error": "x and y must be numbers"}), 400
        result = _whiteboard_add_node(
            _state["session"],
            label=data.get("label"),
            x=x,
            y=y,
            category=data.get("category"),
        )
        return _respond(result)

    @app.route("/api/whiteboard/nodes/<node_id>", methods=["PATCH"])
    def api_whiteboard_update_node(node_id: str):
        """PATCH /api/whiteboard/nodes/<id> - Move and/or relabel a node.

        Body fields: ``x`` and ``y`` together move the node, ``label``
        replaces its text.
        """
        data = request.get_json(force=True)
        s = _state["session"]
        result: dict[str, Any] = {"success": False, "error": "x/y or label required"}
        if "x" in data and "y" in data:
            try:
                x, y = float(data["x"]), float(data["y"])
            except (TypeError, ValueError):
                return jsonify({"success": False, "error": "x and y must be numbers"}), 400
            result = _whiteboard_move_node(s, node_id, x, y)
            if not result.get("success"):
                return _respond(result)
        if "label" in data:
            result = _whiteboard_relabel_node(s, node_id, data["label"])
        return _respond(result)

    @app.route("/api/whiteboard/nodes/<node_id>", methods=["DELETE"])
    def api_whiteboard_delete_node(node_id: str):
        """DELETE /api/whiteboard/nodes/<id> - Delete a node and its edges."""
        return _respond(_whiteboard_delete_node(_state["session"], node_id))

    @app.route("/api/whiteboard/edges", methods=["POST"])
    def api_whiteboard_connect():
        """POST /api/whiteboard/edges - Connect two nodes."""
        data = request.get_json(force=True)
        source = data.get("source", "")
        target = data.get("target", "")
        if not source or not target:
            return jsonify({"success": False, "error": "source and target required"}), 400
        return _respond(_whiteboard_connect(_state["session"], source, target))

    @app.route("/api/whiteboard/edges/<edge_id>", methods=["DELETE"])
    def api_whiteboard_delete_edge(edge_id: str):
        """DELETE /api/whiteboard/edges/<id> - Delete an edge."""
        return _respond(_whiteboard_delete_edge(_state["session"], edge_id))

    @app.route("/api/whiteboard/undo", methods=["POST"])
    def api_whiteboard_undo():
        """POST /api/whiteboard/undo - Undo the most recent change request."""
        return _respond(_whiteboard_undo(_state["session"]))

    @app.route("/api/whiteboard/mutations")
    def api_whiteboard_mutations():
        """GET /api/whiteboard/mutations - Change request history."""
        try:
            limit = int(request.args.get("limit", "50"))
        except ValueError:
            return jsonify({"success": False, "error": "limit must be an integer"}), 400
        return jsonify(_get_mutation_log(_state["session"], limit))

    logger.debug("Created app with %d routes", len(list(app.url_map.iter_rules())))
    return app
