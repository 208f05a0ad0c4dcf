"""Infrastructure-as-Code emitters."""

from .terraform import DocumentAssembler, EmitterContext, Fragment, TerraformEmitter, write

__all__ = ["DocumentAssembler", "EmitterContext", "Fragment", "TerraformEmitter", "write"]
