"""Tests for logging configuration when the package is used as a library."""

import logging

import structlog

import cloudcanvas  # noqa: F401
from cloudcanvas.iac import generate_terraform
from cloudcanvas.iac.rules import PairingRuleRegistry
from cloudcanvas.iac.rules.pairings import register_builtin_rules
from cloudcanvas.logging_config import configure_logging
from cloudcanvas.models import Edge, Node


class TestLibraryLogging:
    """Test suite for structlog output without configure_logging()."""

    def test_structlog_configured_on_import(self):
        """Test importing the package routes structlog through stdlib logging."""
        assert structlog.is_configured()
        config = structlog.get_config()
        assert isinstance(config["logger_factory"], structlog.stdlib.LoggerFactory)

    def test_generation_writes_nothing_to_stdout(self, capsys, caplog):
        """Test rule registration and ignored edges only reach the logging system."""
        caplog.set_level(logging.DEBUG)
        PairingRuleRegistry.clear()
        register_builtin_rules()

        document = generate_terraform(
            [Node(id="ec2-1", label="Web", kind="aws_instance")],
            [Edge(source="ec2-1", target="ghost")],
        )

        captured = capsys.readouterr()
        assert captured.out == ""
        assert 'resource "aws_instance" "web"' in document
        assert any("Ignoring edge" in record.getMessage() for record in caplog.records)


class TestConfigureLogging:
    """Test suite for configure_logging()."""

    def test_keeps_stdlib_logger_factory(self):
        """Test the CLI setup keeps structlog on stdlib logging."""
        configure_logging("DEBUG")
        config = structlog.get_config()
        assert isinstance(config["logger_factory"], structlog.stdlib.LoggerFactory)
