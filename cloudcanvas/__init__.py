"""Cloud Canvas: turn infrastructure diagrams into Terraform."""

from . import logging_config  # noqa: F401

__version__ = "0.1.0"
