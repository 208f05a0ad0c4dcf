"""Diagram-to-Terraform generation engine."""

from .engine import GenerationResult, TerraformGenerationEngine, generate_terraform

__all__ = ["GenerationResult", "TerraformGenerationEngine", "generate_terraform"]
