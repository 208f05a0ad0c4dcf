"""
Configuration management for Terraform generation.

Provides type-safe configuration loading and validation with support
for multiple configuration sources and priority-based merging.
"""

from .loader import ConfigError, ConfigLoader, create_default_config, load_config
from .models import GenerationConfig, PortDefaults, ProviderConfig, VariableDefaults

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "GenerationConfig",
    "PortDefaults",
    "ProviderConfig",
    "VariableDefaults",
    "create_default_config",
    "load_config",
]
