"""Tests for document assembly and export."""

from cloudcanvas.config import GenerationConfig
from cloudcanvas.iac.emitters.terraform import DocumentAssembler, Fragment, write
from cloudcanvas.iac.knowledge_base import ResourceKind


class TestBoilerplate:
    """Test suite for the fixed document header."""

    def test_empty_document_is_boilerplate_only(self):
        """Test an empty graph yields the provider and variable blocks."""
        document = DocumentAssembler().assemble([])

        assert document.startswith("# Terraform configuration generated by CloudCanvas")
        assert 'source  = "hashicorp/aws"' in document
        assert 'provider "aws" {' in document
        assert "# Resources" not in document
        assert "# Outputs" not in document
        assert document.endswith("\n")

    def test_variables_declared(self):
        """Test variables referenced by templates are declared."""
        document = DocumentAssembler().boilerplate()

        for variable in (
            "environment",
            "application_name",
            "aws_region",
            "public_key",
            "db_password",
            "allowed_origins",
            "vpc_id",
            "vpc_cidr_block",
        ):
            assert f'variable "{variable}"' in document

    def test_config_values_rendered(self):
        """Test configured defaults flow into the boilerplate."""
        config = GenerationConfig.model_validate(
            {
                "variables": {"aws_region": "eu-west-1", "allowed_origins": ["https://a.example"]},
                "provider": {"aws_provider_version": "~> 6.0"},
            }
        )
        document = DocumentAssembler(config).boilerplate()

        assert 'default     = "eu-west-1"' in document
        assert 'default     = ["https://a.example"]' in document
        assert 'version = "~> 6.0"' in document
        assert "{{" not in document

    def test_boilerplate_is_deterministic(self):
        """Test the header does not depend on time."""
        assert DocumentAssembler().boilerplate() == DocumentAssembler().boilerplate()


class TestSections:
    """Test suite for section layout."""

    def test_fragments_in_order(self):
        """Test node fragments, then rule fragments, then outputs."""
        nodes = [Fragment("node-a", "a", "a"), Fragment("node-b", "b", "b")]
        rules = [Fragment("rule-1", "a->b", "b_from_a")]
        document = DocumentAssembler().assemble(nodes, rules, ["output-x\n"])

        positions = [
            document.index(marker)
            for marker in (
                "# Resources",
                "node-a",
                "node-b",
                "# Networking Resources based on Connections",
                "rule-1",
                "# Outputs",
                "output-x",
            )
        ]
        assert positions == sorted(positions)

    def test_rules_section_omitted_without_rules(self):
        """Test the connections heading only appears with rule fragments."""
        document = DocumentAssembler().assemble([Fragment("node-a", "a", "a")])
        assert "# Networking Resources based on Connections" not in document


class TestOutputs:
    """Test suite for the outputs section."""

    def test_outputs_per_emitted_kind(self):
        """Test one output per summary attribute, listing every identifier."""
        outputs = DocumentAssembler().build_outputs(
            {ResourceKind.LAMBDA_FUNCTION: ["api", "worker"]}
        )
        text = "".join(outputs)

        assert 'output "lambda_function_arns"' in text
        assert 'output "lambda_function_names"' in text
        assert "[aws_lambda_function.api.arn, aws_lambda_function.worker.arn]" in text

    def test_outputs_follow_knowledge_base_order(self):
        """Test outputs are ordered by kind, not by emission."""
        outputs = DocumentAssembler().build_outputs(
            {ResourceKind.S3_BUCKET: ["assets"], ResourceKind.VPC: ["main"]}
        )
        assert 'output "vpc_ids"' in outputs[0]
        assert any('output "s3_bucket_arns"' in block for block in outputs)

    def test_no_outputs_without_resources(self):
        """Test nothing emitted means no outputs."""
        assert DocumentAssembler().build_outputs({}) == []


class TestWrite:
    """Test suite for writing documents to disk."""

    def test_write_creates_directory(self, tmp_path):
        """Test write() creates the directory and the file."""
        target = tmp_path / "infra" / "dev"
        path = write("terraform {}\n", target)

        assert path == target / "main.tf"
        assert path.read_text(encoding="utf-8") == "terraform {}\n"

    def test_write_custom_filename(self, tmp_path):
        """Test a custom filename is honoured."""
        path = write("x\n", tmp_path, "network.tf")
        assert path.name == "network.tf"
