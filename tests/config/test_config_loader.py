"""Tests for configuration loading and validation."""

import pytest
import yaml
from pydantic import ValidationError

from cloudcanvas.config import (
    ConfigError,
    ConfigLoader,
    GenerationConfig,
    create_default_config,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove CLOUDCANVAS_* variables leaking in from the shell."""
    import os

    for key in list(os.environ):
        if key.startswith("CLOUDCANVAS_"):
            monkeypatch.delenv(key)


class TestGenerationConfig:
    """Test suite for the configuration models."""

    def test_defaults(self):
        """Test default values."""
        config = GenerationConfig()

        assert config.provider.aws_provider_source == "hashicorp/aws"
        assert config.variables.aws_region == "us-east-1"
        assert config.variables.allowed_origins == ["*"]
        assert config.ports.application_port == 8080
        assert config.ports.http_port == 80
        assert config.ports.database_port == 5432
        assert config.unique_identifiers is False
        assert config.output_filename == "main.tf"

    @pytest.mark.parametrize("filename", ["out/main.tf", "main.txt", "..\\main.tf"])
    def test_invalid_output_filename(self, filename):
        """Test output filenames must be plain .tf names."""
        with pytest.raises(ValidationError):
            GenerationConfig(output_filename=filename)

    def test_port_range(self):
        """Test ports are range checked."""
        with pytest.raises(ValidationError):
            GenerationConfig.model_validate({"ports": {"http_port": 70000}})

    def test_blank_variable_rejected(self):
        """Test variable defaults cannot be blank."""
        with pytest.raises(ValidationError):
            GenerationConfig.model_validate({"variables": {"environment": "  "}})

    def test_unknown_keys_rejected(self):
        """Test typos in configuration are reported."""
        with pytest.raises(ValidationError):
            GenerationConfig.model_validate({"unique_identifier": True})


class TestConfigLoader:
    """Test suite for ConfigLoader."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test a missing config file is not an error."""
        config = ConfigLoader(tmp_path / "missing.yaml").load()
        assert config == GenerationConfig()

    def test_file_values(self, tmp_path):
        """Test values are read from YAML."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "unique_identifiers: true\nvariables:\n  aws_region: eu-west-1\n",
            encoding="utf-8",
        )
        config = ConfigLoader(path).load()

        assert config.unique_identifiers is True
        assert config.variables.aws_region == "eu-west-1"
        assert config.variables.environment == "dev"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables win over the file."""
        path = tmp_path / "config.yaml"
        path.write_text("ports:\n  application_port: 9000\n", encoding="utf-8")
        monkeypatch.setenv("CLOUDCANVAS_PORTS__APPLICATION_PORT", "3000")
        monkeypatch.setenv("CLOUDCANVAS_VARIABLES__AWS_REGION", "eu-central-1")
        monkeypatch.setenv("CLOUDCANVAS_UNIQUE_IDENTIFIERS", "yes")

        config = ConfigLoader(path).load()

        assert config.ports.application_port == 3000
        assert config.variables.aws_region == "eu-central-1"
        assert config.unique_identifiers is True

    def test_overrides_win(self, tmp_path, monkeypatch):
        """Test explicit overrides have the highest priority."""
        monkeypatch.setenv("CLOUDCANVAS_UNIQUE_IDENTIFIERS", "false")
        config = load_config(tmp_path / "missing.yaml", {"unique_identifiers": True})
        assert config.unique_identifiers is True

    def test_config_path_from_environment(self, tmp_path, monkeypatch):
        """Test CLOUDCANVAS_CONFIG_PATH selects the file."""
        path = tmp_path / "custom.yaml"
        path.write_text("output_filename: infra.tf\n", encoding="utf-8")
        monkeypatch.setenv("CLOUDCANVAS_CONFIG_PATH", str(path))

        assert ConfigLoader().load().output_filename == "infra.tf"

    def test_invalid_yaml(self, tmp_path):
        """Test unparseable YAML raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("variables: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            ConfigLoader(path).load()

    def test_non_mapping(self, tmp_path):
        """Test a YAML list raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            ConfigLoader(path).load()

    def test_validation_failure(self, tmp_path):
        """Test invalid values raise ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("output_filename: main.json\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="validation failed"):
            ConfigLoader(path).load()

    def test_empty_file(self, tmp_path):
        """Test an empty file gives defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert ConfigLoader(path).load() == GenerationConfig()


class TestCreateDefaultConfig:
    """Test suite for create_default_config()."""

    def test_round_trip(self, tmp_path):
        """Test the written file loads back to the defaults."""
        path = tmp_path / "nested" / "config.yaml"
        create_default_config(path)

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["output_filename"] == "main.tf"
        assert ConfigLoader(path).load() == GenerationConfig()
