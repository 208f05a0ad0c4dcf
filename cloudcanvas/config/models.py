"""
Configuration models for Terraform generation.

Provides type-safe configuration using pydantic with validation,
defaults, and schema enforcement.
"""

from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderConfig(BaseModel):
    """Provider and Terraform version declarations written to every document."""

    terraform_required_version: str = Field(
        default=">= 1.8",
        description="Value of terraform.required_version",
    )
    aws_provider_source: str = Field(
        default="hashicorp/aws",
        description="Registry source of the AWS provider",
    )
    aws_provider_version: str = Field(
        default="~> 5.40",
        description="Version constraint of the AWS provider",
    )
    managed_by_tag: str = Field(
        default="CloudCanvas",
        description="Value of the ManagedBy default tag",
    )

    model_config = ConfigDict(extra="forbid")


class VariableDefaults(BaseModel):
    """Default values of the externally supplied Terraform variables."""

    environment: str = Field(default="dev", description="Environment name")
    application_name: str = Field(default="myapp", description="Application name")
    aws_region: str = Field(default="us-east-1", description="AWS region")
    allowed_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="CORS allow-list",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("environment", "application_name", "aws_region")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank variable defaults."""
        if not v.strip():
            raise ValueError("Variable default cannot be blank")
        return v


class PortDefaults(BaseModel):
    """Ports used when inferring security group rules from edges."""

    application_port: Annotated[int, Field(ge=1, le=65535)] = Field(
        default=8080,
        description="Port opened for function-to-compute traffic",
    )
    http_port: Annotated[int, Field(ge=1, le=65535)] = Field(
        default=80,
        description="Port opened for load-balancer-to-instance traffic",
    )
    database_port: Annotated[int, Field(ge=1, le=65535)] = Field(
        default=5432,
        description="Fallback database port when the engine is unknown",
    )

    model_config = ConfigDict(extra="forbid")


class GenerationConfig(BaseModel):
    """Root configuration for the diagram-to-Terraform engine."""

    provider: ProviderConfig = Field(
        default_factory=ProviderConfig,
        description="Provider declaration settings",
    )
    variables: VariableDefaults = Field(
        default_factory=VariableDefaults,
        description="Default values of the generated variables",
    )
    ports: PortDefaults = Field(
        default_factory=PortDefaults,
        description="Ports used by network rule inference",
    )
    unique_identifiers: bool = Field(
        default=False,
        description="Suffix duplicate derived identifiers (_2, _3, ...)",
    )
    output_filename: str = Field(
        default="main.tf",
        description="Filename used when exporting the document",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("output_filename")
    @classmethod
    def validate_output_filename(cls, v: str) -> str:
        """Export filename must be a plain Terraform file name."""
        if "/" in v or "\\" in v:
            raise ValueError("output_filename must not contain path separators")
        if not v.endswith(".tf"):
            raise ValueError("output_filename must end with .tf")
        return v
