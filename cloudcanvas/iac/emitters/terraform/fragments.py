"""Rendered output fragments."""

from dataclasses import dataclass
from typing import Optional

from ...knowledge_base import ResourceKind


@dataclass(frozen=True)
class Fragment:
    """Text produced for one node or one edge.

    Attributes:
        text: Rendered Terraform (or comment) text, newline-terminated
        origin: Node id, or "source->target" for edge fragments
        identifier: Derived identifier of the node, or the rule identifier
        kind: Resolved kind of the node (UNRECOGNIZED for placeholders and edges)
        is_placeholder: True when the text needs manual completion
    """

    text: str
    origin: str
    identifier: str
    kind: ResourceKind = ResourceKind.UNRECOGNIZED
    is_placeholder: bool = False
    source_id: Optional[str] = None
    target_id: Optional[str] = None

    def __post_init__(self):
        if not self.text.endswith("\n"):
            object.__setattr__(self, "text", self.text + "\n")
