"""Tests for graph input models and loading."""

import json

import pytest
from pydantic import ValidationError

from cloudcanvas.exceptions import GraphInputError
from cloudcanvas.models import Edge, Graph, Node, load_graph


class TestNode:
    """Test suite for the Node model."""

    def test_field_names(self):
        node = Node(id="a", label="A", kind="aws_vpc", attributes={"x": 1}, container_id="c")

        assert node.kind == "aws_vpc"
        assert node.attributes == {"x": 1}
        assert node.container_id == "c"

    def test_editor_aliases(self):
        """Test the editor's field names are accepted."""
        node = Node.model_validate(
            {"id": "a", "terraformType": "aws_s3_bucket", "config": {"bucket": "b"}, "parentNode": "v"}
        )

        assert node.kind == "aws_s3_bucket"
        assert node.attributes == {"bucket": "b"}
        assert node.container_id == "v"

    def test_container_id_camel_case(self):
        assert Node.model_validate({"id": "a", "containerId": "v"}).container_id == "v"

    def test_optional_fields(self):
        """Test only the id is required and nulls become empty values."""
        node = Node.model_validate({"id": "a", "label": None, "attributes": None})

        assert node.label == ""
        assert node.kind is None
        assert node.attributes == {}
        assert node.container_id is None

    def test_id_required(self):
        with pytest.raises(ValidationError):
            Node.model_validate({"label": "x"})

    def test_frozen(self):
        """Test nodes cannot be modified after creation."""
        node = Node(id="a")
        with pytest.raises(ValidationError):
            node.label = "b"


class TestGraph:
    """Test suite for the Graph model."""

    def test_project_shape(self, project_dict):
        """Test the saved-project shape validates."""
        graph = Graph.model_validate(project_dict)

        assert graph.name == "demo"
        assert [n.id for n in graph.nodes] == ["vpc-1", "ec2-1"]
        assert graph.edges == [Edge(source="ec2-1", target="vpc-1", id="e1")]

    def test_to_project_dict(self, project_dict):
        """Test serialization uses the editor's field names."""
        graph = Graph.model_validate(project_dict).model_copy(
            update={"generated_text": "terraform {}\n"}
        )
        data = graph.to_project_dict()

        assert data["generatedText"] == "terraform {}\n"
        assert data["nodes"][1]["containerId"] == "vpc-1"

    def test_null_collections(self):
        graph = Graph.model_validate({"nodes": None, "edges": None})
        assert graph.nodes == []
        assert graph.edges == []


class TestLoadGraph:
    """Test suite for load_graph()."""

    def test_load_json(self, tmp_path, project_dict):
        path = tmp_path / "diagram.json"
        path.write_text(json.dumps(project_dict), encoding="utf-8")

        graph = load_graph(path)
        assert len(graph.nodes) == 2

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "diagram.yaml"
        path.write_text(
            "nodes:\n"
            "  - id: q\n"
            "    label: Jobs\n"
            "    kind: queue\n"
            "edges: []\n",
            encoding="utf-8",
        )

        graph = load_graph(path)
        assert graph.nodes[0].kind == "queue"

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphInputError) as exc_info:
            load_graph(tmp_path / "nope.json")
        assert exc_info.value.error_code == "GRAPH_INPUT_INVALID"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "diagram.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(GraphInputError, match="not valid JSON/YAML"):
            load_graph(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "diagram.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(GraphInputError, match="must contain a mapping"):
            load_graph(path)

    def test_validation_error(self, tmp_path):
        path = tmp_path / "diagram.json"
        path.write_text(json.dumps({"nodes": [{"label": "no id"}]}), encoding="utf-8")

        with pytest.raises(GraphInputError, match="failed validation"):
            load_graph(path)

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "diagram.yml"
        path.write_text("", encoding="utf-8")
        assert load_graph(path) == Graph()
