"""Terraform emission: dependency-ordered fragments and document assembly."""

from .assembler import DocumentAssembler, write
from .context import EmitterContext
from .emitter import TerraformEmitter
from .fragments import Fragment

__all__ = [
    "DocumentAssembler",
    "EmitterContext",
    "Fragment",
    "TerraformEmitter",
    "write",
]
