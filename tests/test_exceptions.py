"""Tests for the exception hierarchy."""

from cloudcanvas.exceptions import (
    CloudCanvasError,
    GraphInputError,
    KnowledgeBaseError,
    TemplateSyntaxError,
)


class TestCloudCanvasError:
    """Test suite for the base exception."""

    def test_str_includes_details(self):
        """Test the formatted message carries code, context and suggestion."""
        error = CloudCanvasError(
            "Something failed",
            error_code="E1",
            context={"node": "a"},
            cause=ValueError("bad"),
            recovery_suggestion="Try again",
        )
        text = str(error)

        assert text.startswith("[E1] Something failed")
        assert "node=a" in text
        assert "caused by: bad" in text
        assert "suggestion: Try again" in text

    def test_to_dict(self):
        error = CloudCanvasError("Oops")
        assert error.to_dict() == {
            "error_type": "CloudCanvasError",
            "message": "Oops",
            "error_code": None,
            "context": {},
            "cause": None,
            "recovery_suggestion": None,
        }


class TestSubclasses:
    """Test suite for the specific exceptions."""

    def test_template_syntax_error(self):
        error = TemplateSyntaxError("Unclosed block", position=4, block_name="a")

        assert isinstance(error, CloudCanvasError)
        assert error.context == {"position": 4, "block": "a"}
        assert error.error_code == "TEMPLATE_SYNTAX_ERROR"

    def test_knowledge_base_error(self):
        error = KnowledgeBaseError("Bad entry", resource_kind="aws_vpc")

        assert error.resource_kind == "aws_vpc"
        assert error.context["resource_kind"] == "aws_vpc"
        assert error.recovery_suggestion

    def test_graph_input_error(self):
        error = GraphInputError("Bad file", path="/tmp/x.json")

        assert error.context == {"path": "/tmp/x.json"}
        assert error.error_code == "GRAPH_INPUT_INVALID"
