"""Knowledge base entry types."""

from dataclasses import dataclass
from typing import Tuple

from .kinds import ResourceKind


@dataclass(frozen=True)
class OutputSpec:
    """One summary output enumerating an attribute of every emitted resource."""

    name: str
    attribute: str
    description: str


@dataclass(frozen=True)
class KnowledgeBaseEntry:
    """Static description of how one resource kind is rendered.

    Attributes:
        kind: Resource kind this entry describes
        category: Coarse palette grouping (network, compute, ...)
        template: Template body using ``{{name}}`` and ``{{#block}}`` markers
        required_attributes: Attributes every rendering must supply, in order
        optional_attributes: Attributes the template can use when present
        examples: Example configurations shown to the user
        advisories: Best-practice notes for the kind
        outputs: Summary outputs written after all fragments
    """

    kind: ResourceKind
    category: str
    template: str
    required_attributes: Tuple[str, ...]
    optional_attributes: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()
    advisories: Tuple[str, ...] = ()
    outputs: Tuple[OutputSpec, ...] = ()

    @property
    def terraform_type(self) -> str:
        """Terraform resource type emitted by the template."""
        return self.kind.value
