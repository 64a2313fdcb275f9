"""Tests for graph serialization."""

import pytest

from bicameral.graph import GraphNode, Position, to_graph
from bicameral.graph.serialize import (
    deserialize_edge,
    deserialize_graph,
    deserialize_node,
    serialize_graph,
    serialize_node,
)


class TestSerialize:
    """Output shape for the drawing surface."""

    def test_node_shape(self):
        node = GraphNode(
            "node_1",
            label="hello",
            color="#F1F0FB",
            font_size="large",
            font_family="serif",
            original_index=3,
            position=Position(1.5, 2.5),
        )
        assert serialize_node(node) == {
            "id": "node_1",
            "type": "custom",
            "position": {"x": 1.5, "y": 2.5},
            "data": {
                "label": "hello",
                "color": "#F1F0FB",
                "fontSize": "large",
                "fontFamily": "serif",
                "originalIndex": 3,
            },
        }

    def test_original_index_omitted_when_absent(self):
        data = serialize_node(GraphNode("n", label="x"))
        assert "originalIndex" not in data["data"]

    def test_graph_shape(self):
        graph = to_graph("a\nb")
        data = serialize_graph(graph.nodes, graph.edges)
        assert len(data["nodes"]) == 2
        assert data["edges"] == [{"id": "edge_1", "source": "node_1", "target": "node_2"}]


class TestDeserialize:
    """Reading the exchange format back."""

    def test_graph_survives(self):
        graph = to_graph("Why?\nplain\nmaybe")
        nodes, edges = deserialize_graph(serialize_graph(graph.nodes, graph.edges))
        assert [(n.id, n.label, n.color, n.original_index) for n in nodes] == [
            (n.id, n.label, n.color, n.original_index) for n in graph.nodes
        ]
        assert [n.position for n in nodes] == [n.position for n in graph.nodes]
        assert edges == graph.edges

    def test_defaults_for_sparse_node(self):
        node = deserialize_node({"id": "n1"})
        assert node.label == ""
        assert node.position == Position(0.0, 0.0)
        assert node.original_index is None

    def test_missing_id(self):
        with pytest.raises(ValueError):
            deserialize_node({"data": {"label": "x"}})

    def test_bad_position(self):
        with pytest.raises(ValueError):
            deserialize_node({"id": "n1", "position": {"x": "left", "y": 0}})

    def test_edge_needs_endpoints(self):
        with pytest.raises(ValueError):
            deserialize_edge({"id": "e", "source": "a"})

    def test_edge_id_defaulted(self):
        assert deserialize_edge({"source": "a", "target": "b"}).id == "edge_a-b"

    def test_payload_must_be_object(self):
        with pytest.raises(ValueError):
            deserialize_graph(["not", "a", "graph"])
