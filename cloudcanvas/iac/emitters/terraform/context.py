"""EmitterContext - per-call state shared by the emitter, rules and assembler.

A fresh context is built for every generation call and nothing in it
outlives the call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ....config import GenerationConfig
from ....models import Node
from ...knowledge_base import ResourceKind


@dataclass
class EmitterContext:
    """Shared context for one generation call.

    Usage:
        context = emitter.build_context(nodes)
        fragments = emitter.emit(nodes, context)
        rules = inference.infer_all(edges, context)
    """

    config: GenerationConfig = field(default_factory=GenerationConfig)

    # Node index (first occurrence wins for duplicate ids)
    nodes_by_id: Dict[str, Node] = field(default_factory=dict)

    # Per-node resolution results
    kinds: Dict[str, ResourceKind] = field(default_factory=dict)
    identifiers: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    # Identifiers actually emitted, per kind, in emission order
    emitted: Dict[ResourceKind, List[str]] = field(default_factory=dict)

    # Degraded inputs
    duplicate_node_ids: List[str] = field(default_factory=list)
    dangling_containers: List[Dict[str, str]] = field(default_factory=list)
    unrecognized: List[Dict[str, str]] = field(default_factory=list)
    identifiers_renamed: int = 0

    def node(self, node_id: Optional[str]) -> Optional[Node]:
        """Look up a node by id; None for unknown or missing ids."""
        if node_id is None:
            return None
        return self.nodes_by_id.get(node_id)

    def kind_of(self, node_id: str) -> ResourceKind:
        return self.kinds.get(node_id, ResourceKind.UNRECOGNIZED)

    def identifier_of(self, node_id: str) -> str:
        return self.identifiers[node_id]

    def record_emitted(self, kind: ResourceKind, identifier: str) -> None:
        """Track an emitted resource for the outputs section."""
        names = self.emitted.setdefault(kind, [])
        if identifier not in names:
            names.append(identifier)
