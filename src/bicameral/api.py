"""bicameral.api - Pure functions behind the REST surface.

Every function takes plain values (and the EditorSession where state is
involved) and returns a JSON-compatible dict. Failures are reported as
``{"success": False, "error": ...}``; nothing here raises for bad input.
"""

from __future__ import annotations

from typing import Any

from bicameral.classifier import classify, contrast_text_class
from bicameral.document import Alignment, FontSize, TextDocument
from bicameral.graph.converter import to_graph, to_text
from bicameral.graph.mutations import MutationEntry
from bicameral.graph.serialize import deserialize_graph, serialize_graph, serialize_node
from bicameral.modes import EditorMode, ModeSwitchResult, SwitchStatus
from bicameral.session import EditorSession
from bicameral.tracking.differ import diff_paragraphs, iter_changed_paragraphs
from bicameral.tracking.ledger import ChangeStatus

# ─────────────────────────────────────────────────────────────────────────────
# Serializers
# ─────────────────────────────────────────────────────────────────────────────


def _serialize_mutation_entry(entry: MutationEntry) -> dict[str, Any]:
    """Serialize a MutationEntry to dict format."""
    return {
        "id": entry.id,
        "operation": entry.operation,
        "target_id": entry.target_id,
        "before_state": entry.before_state,
        "after_state": entry.after_state,
        "timestamp": entry.timestamp.isoformat(),
    }


def _serialize_switch_result(result: ModeSwitchResult) -> dict[str, Any]:
    return {
        "success": result.status in (SwitchStatus.SWITCHED, SwitchStatus.UNCHANGED),
        "status": result.status.value,
        "mode": result.mode.value,
        "message": result.message,
    }


def _serialize_document(document: TextDocument) -> dict[str, Any]:
    return {
        "text": document.to_text(),
        "paragraphs": list(document.paragraphs),
    }


# ─────────────────────────────────────────────────────────────────────────────
# Stateless tools
# ─────────────────────────────────────────────────────────────────────────────


def _classify_text(text: str) -> dict[str, Any]:
    """Category and colors for one line of text."""
    category = classify(text)
    return {
        "text": text,
        "category": category.value,
        "color": category.color,
        "text_class": contrast_text_class(category.color),
    }


def _convert_to_graph(
    text: str,
    font_size: str | None = None,
    font_family: str | None = None,
) -> dict[str, Any]:
    """Convert newline-joined text to serialized nodes and edges."""
    graph = to_graph(text or "", font_size, font_family)
    if graph.is_empty:
        return {"success": False, "error": "No content to convert"}

    result: dict[str, Any] = {"success": True}
    result.update(serialize_graph(graph.nodes, graph.edges))
    return result


def _convert_to_text(payload: dict[str, Any]) -> dict[str, Any]:
    """Convert a serialized graph back to text."""
    try:
        nodes, edges = deserialize_graph(payload)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    document = to_text(nodes, edges)
    if document.is_blank:
        return {"success": False, "error": "No content found in graph"}

    result: dict[str, Any] = {"success": True}
    result.update(_serialize_document(document))
    return result


def _diff_documents(old: str, new: str) -> dict[str, Any]:
    """Paragraph diff between two texts."""
    changed = [
        {"index": index, "text": text} for index, text in iter_changed_paragraphs(old, new)
    ]
    return {
        "diff": diff_paragraphs(old, new),
        "changed": changed,
        "has_changes": bool(changed),
    }


# ─────────────────────────────────────────────────────────────────────────────
# Session state
# ─────────────────────────────────────────────────────────────────────────────


def _get_status(session: EditorSession) -> dict[str, Any]:
    return session.status()


def _get_document(session: EditorSession) -> dict[str, Any]:
    result = _serialize_document(session.document)
    result["mode"] = session.mode.value
    result["style"] = session.style.to_dict()
    return result


def _set_document(session: EditorSession, text: str, author: str | None = None) -> dict[str, Any]:
    """Replace the session text (normal mode only)."""
    if session.mode is not EditorMode.NORMAL:
        return {"success": False, "error": "Text can only be edited in normal mode"}
    session.set_text(text, author)
    result: dict[str, Any] = {"success": True}
    result.update(_serialize_document(session.document))
    return result


def _set_style(
    session: EditorSession,
    alignment: str | None = None,
    font_size: str | None = None,
    font_family: str | None = None,
    paragraph: int | None = None,
) -> dict[str, Any]:
    """Apply toolbar style changes.

    alignment and font_size target one paragraph (the caret's paragraph
    unless paragraph is given); font_family is document-wide.
    """
    index = session.current_paragraph if paragraph is None else paragraph
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        return {"success": False, "error": f"Invalid paragraph index: {paragraph!r}"}
    try:
        new_alignment = Alignment(alignment) if alignment is not None else None
        new_size = FontSize(font_size) if font_size is not None else None
    except ValueError as e:
        return {"success": False, "error": str(e)}

    if new_alignment is not None:
        session.style.set_alignment(index, new_alignment)
    if new_size is not None:
        session.style.set_font_size(index, new_size)
    if font_family is not None:
        session.style.font_family = font_family

    session.render()
    return {"success": True, "style": session.style.to_dict()}


def _switch_mode(session: EditorSession, mode: str) -> dict[str, Any]:
    try:
        target = EditorMode(mode)
    except ValueError:
        return {"success": False, "error": f"Unknown mode: {mode}"}
    return _serialize_switch_result(session.switch_mode(target))


def _set_tracking(session: EditorSession, enabled: bool) -> dict[str, Any]:
    session.set_tracking(enabled)
    return {"success": True, "tracking": session.tracker.enabled}


def _tick(session: EditorSession) -> dict[str, Any]:
    """Let the idle debounce fire if its window has elapsed."""
    change = session.tick()
    return {"proposed": change.to_dict() if change is not None else None}


def _get_notifications(session: EditorSession, limit: int = 50) -> dict[str, Any]:
    notices = [n.to_dict() for n in session.notifications.iter_notices()]
    notices = notices[-limit:] if limit > 0 else []
    return {"notifications": notices, "count": len(notices)}


# ─────────────────────────────────────────────────────────────────────────────
# Change ledger
# ─────────────────────────────────────────────────────────────────────────────


def _get_changes(session: EditorSession, status: str | None = None) -> dict[str, Any]:
    """List changes, newest first, optionally filtered by status."""
    try:
        wanted = ChangeStatus(status) if status else None
    except ValueError:
        return {"success": False, "error": f"Unknown status: {status}"}

    changes = [
        c.to_dict() for c in session.ledger.changes if wanted is None or c.status is wanted
    ]
    return {"changes": changes, "count": len(changes)}


def _accept_change(session: EditorSession, change_id: str) -> dict[str, Any]:
    change = session.accept_change(change_id)
    if change is None:
        return {"success": False, "error": f"Change {change_id} not found"}
    return {"success": True, "change": change.to_dict()}


def _reject_change(session: EditorSession, change_id: str) -> dict[str, Any]:
    """Reject a change and restore the text it replaced."""
    existing = session.ledger.get(change_id)
    if existing is not None and existing.status.is_terminal:
        return {"success": False, "error": f"Change {change_id} is already {existing.status.value}"}

    snapshot = session.reject_change(change_id)
    if existing is None:
        return {"success": False, "error": f"Change {change_id} not found"}

    result: dict[str, Any] = {"success": True, "change": existing.to_dict()}
    result["restored"] = snapshot is not None
    result.update(_serialize_document(session.document))
    return result


def _comment_change(session: EditorSession, change_id: str, text: str) -> dict[str, Any]:
    change = session.comment_change(change_id, text)
    if change is None:
        return {"success": False, "error": f"Change {change_id} not found"}
    return {"success": True, "change": change.to_dict()}


# ─────────────────────────────────────────────────────────────────────────────
# Whiteboard change requests
# ─────────────────────────────────────────────────────────────────────────────


def _require_whiteboard(session: EditorSession) -> dict[str, Any] | None:
    if session.mode is not EditorMode.WHITEBOARD:
        return {"success": False, "error": "Whiteboard mode is not active"}
    return None


def _get_whiteboard(session: EditorSession) -> dict[str, Any]:
    board = session.whiteboard
    result: dict[str, Any] = {"mode": session.mode.value}
    result.update(serialize_graph(board.nodes, board.edges))
    result["dangling_edges"] = [str(d) for d in board.dangling_edges()]
    return result


def _whiteboard_add_node(
    session: EditorSession,
    label: str | None = None,
    x: float = 0.0,
    y: float = 0.0,
    category: str | None = None,
) -> dict[str, Any]:
    error = _require_whiteboard(session)
    if error:
        return error
    try:
        kwargs: dict[str, Any] = {"x": x, "y": y, "category": category}
        if label is not None:
            kwargs["label"] = label
        entry = session.whiteboard.add_node(**kwargs)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    node = session.whiteboard.find_node(entry.target_id)
    return {
        "success": True,
        "mutation": _serialize_mutation_entry(entry),
        "node": serialize_node(node) if node is not None else None,
        "message": f"Added node {entry.target_id}",
    }


def _whiteboard_move_node(session: EditorSession, node_id: str, x: float, y: float) -> dict[str, Any]:
    error = _require_whiteboard(session)
    if error:
        return error
    try:
        entry = session.whiteboard.move_node(node_id, x, y)
        return {
            "success": True,
            "mutation": _serialize_mutation_entry(entry),
            "message": f"Moved {node_id}",
        }
    except (ValueError, KeyError) as e:
        return {"success": False, "error": str(e)}


def _whiteboard_relabel_node(session: EditorSession, node_id: str, label: str) -> dict[str, Any]:
    error = _require_whiteboard(session)
    if error:
        return error
    try:
        entry = session.whiteboard.request_label_change(node_id, label)
        return {
            "success": True,
            "mutation": _serialize_mutation_entry(entry),
            "message": f"Updated label of {node_id}",
        }
    except (ValueError, KeyError) as e:
        return {"success": False, "error": str(e)}


def _whiteboard_connect(session: EditorSession, source: str, target: str) -> dict[str, Any]:
    error = _require_whiteboard(session)
    if error:
        return error
    try:
        entry = session.whiteboard.connect(source, target)
        return {
            "success": True,
            "mutation": _serialize_mutation_entry(entry),
            "message": f"Connected {source} -> {target}",
        }
    except (ValueError, KeyError) as e:
        return {"success": False, "error": str(e)}


def _whiteboard_delete_node(session: EditorSession, node_id: str) -> dict[str, Any]:
    error = _require_whiteboard(session)
    if error:
        return error
    try:
        entry = session.whiteboard.delete_node(node_id)
        return {
            "success": True,
            "mutation": _serialize_mutation_entry(entry),
            "message": f"Deleted node {node_id}",
        }
    except (ValueError, KeyError) as e:
        return {"success": False, "error": str(e)}


def _whiteboard_delete_edge(session: EditorSession, edge_id: str) -> dict[str, Any]:
    error = _require_whiteboard(session)
    if error:
        return error
    try:
        entry = session.whiteboard.delete_edge(edge_id)
        return {
            "success": True,
            "mutation": _serialize_mutation_entry(entry),
            "message": f"Deleted edge {edge_id}",
        }
    except (ValueError, KeyError) as e:
        return {"success": False, "error": str(e)}


def _whiteboard_undo(session: EditorSession) -> dict[str, Any]:
    """Undo the most recent whiteboard change request."""
    error = _require_whiteboard(session)
    if error:
        return error
    entry = session.whiteboard.undo_last()
    if entry is None:
        return {"success": False, "error": "No mutations to undo"}

    return {
        "success": True,
        "mutation": _serialize_mutation_entry(entry),
        "message": f"Undid {entry.operation} on {entry.target_id}",
    }


def _get_mutation_log(session: EditorSession, limit: int = 50) -> dict[str, Any]:
    mutations = []
    for entry in session.whiteboard.mutation_log.iter_entries():
        mutations.append(_serialize_mutation_entry(entry))
        if len(mutations) >= limit:
            break

    return {
        "mutations": mutations,
        "count": len(mutations),
    }
