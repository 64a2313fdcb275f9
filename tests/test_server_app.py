"""Tests for the Flask REST API server."""

import pytest

from bicameral.server.app import create_app

# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def app(session, config):
    """Create Flask test app around a fresh session."""
    application = create_app(session, config)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def board_client(client):
    """Client whose session is already in whiteboard mode."""
    client.put("/api/document", json={"text": "alpha\nbeta\ngamma"})
    assert client.post("/api/mode", json={"mode": "whiteboard"}).status_code == 200
    return client


def _propose(client, clock, before="one\ntwo", after="one\nTWO"):
    client.post("/api/tracking", json={"enabled": True})
    client.put("/api/document", json={"text": before})
    client.put("/api/document", json={"text": after})
    clock.advance(1000)
    return client.post("/api/tick").get_json()["proposed"]


# ─────────────────────────────────────────────────────────────────────────────
# App factory
# ─────────────────────────────────────────────────────────────────────────────


class TestAppFactory:
    """create_app wiring."""

    def test_returns_flask_instance(self, session, config):
        from flask import Flask

        assert isinstance(create_app(session, config), Flask)

    def test_cors_headers(self, client):
        resp = client.get("/api/status", headers={"Origin": "http://localhost:3000"})
        assert "Access-Control-Allow-Origin" in resp.headers


# ─────────────────────────────────────────────────────────────────────────────
# Stateless tools
# ─────────────────────────────────────────────────────────────────────────────


class TestStatelessTools:
    """classify / convert / diff."""

    def test_classify(self, client):
        data = client.post("/api/classify", json={"text": "Why now?"}).get_json()
        assert data["category"] == "question"
        assert data["color"].startswith("#")

    def test_convert_graph(self, client):
        resp = client.post("/api/convert/graph", json={"text": "a\nb\nc"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert len(data["nodes"]) == 3
        assert len(data["edges"]) == 3
        assert data["nodes"][0]["data"]["originalIndex"] == 0

    def test_convert_graph_empty(self, client):
        resp = client.post("/api/convert/graph", json={"text": "  \n"})
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False

    def test_convert_text(self, client):
        graph = client.post("/api/convert/graph", json={"text": "x\ny"}).get_json()
        resp = client.post("/api/convert/text", json={"nodes": graph["nodes"], "edges": []})
        assert resp.status_code == 200
        assert resp.get_json()["text"] == "x\ny"

    def test_convert_text_invalid(self, client):
        resp = client.post("/api/convert/text", json={"nodes": [{"data": {}}]})
        assert resp.status_code == 400

    def test_diff(self, client):
        data = client.post("/api/diff", json={"old": "a\nb", "new": "a\nB"}).get_json()
        assert data == {"diff": "B", "changed": [{"index": 1, "text": "B"}], "has_changes": True}


# ─────────────────────────────────────────────────────────────────────────────
# Document and modes
# ─────────────────────────────────────────────────────────────────────────────


class TestDocument:
    """GET/PUT /api/document and /api/style."""

    def test_round_trip(self, client):
        assert client.put("/api/document", json={"text": "hello\nworld"}).status_code == 200
        data = client.get("/api/document").get_json()
        assert data["paragraphs"] == ["hello", "world"]
        assert data["mode"] == "normal"
        assert data["style"]["font_family"] == "sans"

    def test_text_required(self, client):
        assert client.put("/api/document", json={}).status_code == 400

    def test_locked_in_whiteboard(self, board_client):
        resp = board_client.put("/api/document", json={"text": "nope"})
        assert resp.status_code == 409

    def test_style(self, client):
        client.put("/api/document", json={"text": "a\nb"})
        resp = client.post("/api/style", json={"alignment": "center", "paragraph": 1})
        assert resp.status_code == 200
        assert resp.get_json()["style"]["alignments"] == {"1": "center"}

    def test_style_invalid(self, client):
        resp = client.post("/api/style", json={"font_size": "gigantic"})
        assert resp.status_code == 400

    def test_style_invalid_leaves_style_untouched(self, client):
        client.put("/api/document", json={"text": "a\nb"})
        resp = client.post(
            "/api/style", json={"alignment": "right", "font_size": "huge", "paragraph": 0}
        )
        assert resp.status_code == 400
        style = client.get("/api/document").get_json()["style"]
        assert style["alignments"] == {}
        assert style["font_sizes"] == {}

    @pytest.mark.parametrize("paragraph", ["1", -1, 1.5, True])
    def test_style_bad_paragraph(self, client, paragraph):
        client.put("/api/document", json={"text": "a\nb"})
        resp = client.post("/api/style", json={"alignment": "center", "paragraph": paragraph})
        assert resp.status_code == 400
        assert "Invalid paragraph index" in resp.get_json()["error"]
        assert client.get("/api/document").get_json()["style"]["alignments"] == {}

    def test_status(self, client):
        client.put("/api/document", json={"text": "a\nb"})
        data = client.get("/api/status").get_json()
        assert data["mode"] == "normal"
        assert data["paragraphs"] == 2

    def test_preview_page(self, client):
        client.put("/api/document", json={"text": "visible <b>text</b>"})
        resp = client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["Content-Type"]
        assert "visible &lt;b&gt;text&lt;/b&gt;" in resp.get_data(as_text=True)


class TestModeSwitch:
    """POST /api/mode."""

    def test_switch_and_back(self, board_client):
        assert board_client.get("/api/status").get_json()["mode"] == "whiteboard"
        resp = board_client.post("/api/mode", json={"mode": "normal"})
        assert resp.status_code == 200
        assert board_client.get("/api/document").get_json()["text"] == "alpha\nbeta\ngamma"

    def test_no_content_conflict(self, client):
        resp = client.post("/api/mode", json={"mode": "whiteboard"})
        assert resp.status_code == 409
        assert resp.get_json()["status"] == "no_content"

    def test_mode_required(self, client):
        assert client.post("/api/mode", json={}).status_code == 400

    def test_unknown_mode(self, client):
        assert client.post("/api/mode", json={"mode": "split"}).status_code == 409

    def test_notifications(self, board_client):
        data = board_client.get("/api/notifications?limit=1").get_json()
        assert data["count"] == 1
        assert data["notifications"][0]["event"] == "conversion.succeeded"

    def test_notifications_bad_limit(self, client):
        resp = client.get("/api/notifications?limit=abc")
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False


# ─────────────────────────────────────────────────────────────────────────────
# Change ledger
# ─────────────────────────────────────────────────────────────────────────────


class TestChanges:
    """Change tracking endpoints."""

    def test_tick_proposes(self, client, clock):
        proposed = _propose(client, clock)
        assert proposed["text"] == "TWO"
        assert proposed["status"] == "pending"
        assert client.get("/api/changes").get_json()["count"] == 1

    def test_tick_without_edits(self, client):
        assert client.post("/api/tick").get_json() == {"proposed": None}

    def test_filter_by_status(self, client, clock):
        _propose(client, clock)
        assert client.get("/api/changes?status=accepted").get_json()["count"] == 0
        assert client.get("/api/changes?status=bogus").status_code == 400

    def test_accept(self, client, clock):
        change_id = _propose(client, clock)["id"]
        resp = client.post(f"/api/changes/{change_id}/accept")
        assert resp.status_code == 200
        assert resp.get_json()["change"]["status"] == "accepted"

    def test_reject_restores_text(self, client, clock):
        change_id = _propose(client, clock)["id"]
        resp = client.post(f"/api/changes/{change_id}/reject")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["restored"] is True
        assert data["text"] == "one\ntwo"
        assert client.post(f"/api/changes/{change_id}/reject").status_code == 400

    def test_comment(self, client, clock):
        change_id = _propose(client, clock)["id"]
        resp = client.post(f"/api/changes/{change_id}/comment", json={"text": "hmm"})
        assert resp.get_json()["change"]["comment"] == "hmm"

    @pytest.mark.parametrize("action", ["accept", "reject", "comment"])
    def test_unknown_change(self, client, action):
        resp = client.post(f"/api/changes/missing/{action}", json={"text": "x"})
        assert resp.status_code == 404
        assert "not found" in resp.get_json()["error"]


# ─────────────────────────────────────────────────────────────────────────────
# Whiteboard change requests
# ─────────────────────────────────────────────────────────────────────────────


class TestWhiteboard:
    """Whiteboard endpoints."""

    def test_requires_whiteboard_mode(self, client):
        resp = client.post("/api/whiteboard/nodes", json={"label": "x"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Whiteboard mode is not active"

    def test_get(self, board_client):
        data = board_client.get("/api/whiteboard").get_json()
        assert len(data["nodes"]) == 3
        assert data["dangling_edges"] == []

    def test_add_node(self, board_client):
        resp = board_client.post("/api/whiteboard/nodes", json={"label": "Why?", "x": 5, "y": 6})
        assert resp.status_code == 200
        node = resp.get_json()["node"]
        assert node["data"]["label"] == "Why?"
        assert node["position"] == {"x": 5.0, "y": 6.0}
        assert "originalIndex" not in node["data"]

    def test_move_and_relabel(self, board_client):
        resp = board_client.patch(
            "/api/whiteboard/nodes/node_2", json={"x": 1, "y": 2, "label": "BETA"}
        )
        assert resp.status_code == 200
        assert board_client.get("/api/whiteboard/mutations").get_json()["count"] == 2
        board_client.post("/api/mode", json={"mode": "normal"})
        assert board_client.get("/api/document").get_json()["text"] == "alpha\nBETA\ngamma"

    def test_patch_needs_fields(self, board_client):
        assert board_client.patch("/api/whiteboard/nodes/node_1", json={}).status_code == 400

    def test_delete_node(self, board_client):
        assert board_client.delete("/api/whiteboard/nodes/node_1").status_code == 200
        assert board_client.delete("/api/whiteboard/nodes/node_1").status_code == 400

    def test_edges(self, board_client):
        board_client.delete("/api/whiteboard/edges/edge_loop")
        resp = board_client.post(
            "/api/whiteboard/edges", json={"source": "node_3", "target": "node_1"}
        )
        assert resp.status_code == 200
        assert board_client.post(
            "/api/whiteboard/edges", json={"source": "node_1", "target": "node_1"}
        ).status_code == 400
        assert board_client.post("/api/whiteboard/edges", json={"source": "node_1"}).status_code == 400

    def test_undo(self, board_client):
        board_client.delete("/api/whiteboard/nodes/node_1")
        assert board_client.post("/api/whiteboard/undo").status_code == 200
        assert len(board_client.get("/api/whiteboard").get_json()["nodes"]) == 3
        assert board_client.post("/api/whiteboard/undo").status_code == 400

    def test_undo_requires_whiteboard_mode(self, board_client):
        board_client.patch("/api/whiteboard/nodes/node_1", json={"x": 1, "y": 2})
        board_client.post("/api/mode", json={"mode": "normal"})
        resp = board_client.post("/api/whiteboard/undo")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Whiteboard mode is not active"

    def test_non_numeric_positions(self, board_client):
        resp = board_client.post("/api/whiteboard/nodes", json={"label": "x", "x": "left"})
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False
        resp = board_client.patch("/api/whiteboard/nodes/node_1", json={"x": None, "y": 2})
        assert resp.status_code == 400
        assert board_client.get("/api/whiteboard/mutations").get_json()["count"] == 0
        assert board_client.get("/api/whiteboard/mutations?limit=x").status_code == 400
