"""Dependency-ordered Terraform emitter.

Grouping nodes (VPCs) are rendered first, then every other node, each tier
in input order. Every node yields exactly one fragment: matched kinds go
through the knowledge base template, everything else becomes a commented
placeholder that asks for manual completion.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from ....config import GenerationConfig
from ....models import Node
from ...defaults import Clock, DefaultSynthesizer
from ...knowledge_base import KnowledgeBase, ResourceKind, get_knowledge_base, is_grouping
from ...matcher import ResourceMatcher
from ...naming import comment_line, derive_identifier, hcl_string
from ...renderer import render
from ...transformers import IdentifierDeduplicator
from .context import EmitterContext
from .fragments import Fragment

logger = logging.getLogger(__name__)


class TerraformEmitter:
    """Renders nodes into Terraform fragments.

    Usage:
        emitter = TerraformEmitter()
        context = emitter.build_context(nodes)
        fragments = emitter.emit(nodes, context)
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        clock: Optional[Clock] = None,
        config: Optional[GenerationConfig] = None,
    ) -> None:
        """Initialize the emitter.

        Args:
            knowledge_base: Knowledge base to render from (process-wide default)
            clock: Clock for time-derived defaults
            config: Generation settings
        """
        self.knowledge_base = knowledge_base or get_knowledge_base()
        self.matcher = ResourceMatcher(self.knowledge_base)
        self.synthesizer = DefaultSynthesizer(clock)
        self.config = config or GenerationConfig()

        self.stats: Dict[str, Any] = self._new_stats()

    @staticmethod
    def _new_stats() -> Dict[str, Any]:
        return {
            "total_nodes": 0,
            "rendered_nodes": 0,
            "placeholder_nodes": 0,
            "grouping_nodes": 0,
            "unrecognized_kinds": set(),
        }

    def build_context(self, nodes: Sequence[Node]) -> EmitterContext:
        """Index nodes, resolve kinds and derive identifiers.

        Args:
            nodes: Nodes in input order

        Returns:
            Fresh EmitterContext for one generation call
        """
        context = EmitterContext(config=self.config)

        for node in nodes:
            if node.id in context.nodes_by_id:
                context.duplicate_node_ids.append(node.id)
                logger.warning(
                    f"Duplicate node id '{node.id}': only the first occurrence is indexed"
                )
                continue
            context.nodes_by_id[node.id] = node
            context.kinds[node.id] = self.matcher.match(node.kind)

        ordered = self.order_nodes(list(context.nodes_by_id.values()), context)
        derived = [(node.id, derive_identifier(node.label, node.id)) for node in ordered]

        if self.config.unique_identifiers:
            mapping, result = IdentifierDeduplicator().deduplicate(derived)
            context.identifiers.update(mapping)
            context.identifiers_renamed = result.identifiers_renamed
        else:
            context.identifiers.update(dict(derived))

        return context

    def order_nodes(self, nodes: Sequence[Node], context: EmitterContext) -> List[Node]:
        """Grouping-kind nodes first, then the rest, each in input order."""
        grouping = [n for n in nodes if is_grouping(self._kind(n, context))]
        members = [n for n in nodes if not is_grouping(self._kind(n, context))]
        return grouping + members

    def emit(
        self, nodes: Sequence[Node], context: Optional[EmitterContext] = None
    ) -> List[Fragment]:
        """Render every node into exactly one fragment.

        Args:
            nodes: Nodes in input order
            context: Context from build_context(); built here when omitted

        Returns:
            Fragments in emission order
        """
        if context is None:
            context = self.build_context(nodes)

        logger.info(f"Starting Terraform emission for {len(nodes)} nodes")
        self.stats = self._new_stats()

        fragments: List[Fragment] = []
        for node in self.order_nodes(nodes, context):
            self.stats["total_nodes"] += 1
            kind = self._kind(node, context)

            if kind is ResourceKind.UNRECOGNIZED:
                fragments.append(self._emit_placeholder(node, context))
                continue

            if is_grouping(kind):
                self.stats["grouping_nodes"] += 1
            fragments.append(self._emit_resource(node, kind, context))

        self._log_statistics()
        return fragments

    def _kind(self, node: Node, context: EmitterContext) -> ResourceKind:
        if context.nodes_by_id.get(node.id) is node:
            return context.kind_of(node.id)
        return self.matcher.match(node.kind)

    def _identifier(self, node: Node, context: EmitterContext) -> str:
        # Nodes skipped by the index (duplicate ids) derive one from their own label.
        if context.nodes_by_id.get(node.id) is node:
            return context.identifiers[node.id]
        return derive_identifier(node.label, node.id)

    @staticmethod
    def _quoted(data: Dict[str, Any]) -> Dict[str, Any]:
        """String values escaped for the quoted HCL slots they land in."""
        return {
            key: hcl_string(value) if isinstance(value, str) else value
            for key, value in data.items()
        }

    def _emit_resource(
        self, node: Node, kind: ResourceKind, context: EmitterContext
    ) -> Fragment:
        entry = self.knowledge_base.lookup(kind)
        identifier = self._identifier(node, context)

        data = self.synthesizer.fill_defaults(entry, node.attributes, identifier)
        if context.nodes_by_id.get(node.id) is node:
            context.attributes[node.id] = dict(data)

        data = self._quoted(data)
        data.update(self._reserved_keys(node, identifier, context))

        text = render(entry.template, data)
        context.record_emitted(kind, identifier)
        self.stats["rendered_nodes"] += 1
        logger.debug(f"Rendered {kind.value}.{identifier} for node {node.id}")

        return Fragment(text=text, origin=node.id, identifier=identifier, kind=kind)

    def _reserved_keys(
        self, node: Node, identifier: str, context: EmitterContext
    ) -> Dict[str, Any]:
        """Keys every template may reference, including container placement."""
        reserved: Dict[str, Any] = {
            "name": identifier,
            "label": hcl_string(node.label or identifier),
        }

        container = self._resolve_container(node, context)
        if container is None:
            reserved["standalone"] = True
            return reserved

        container_attributes = context.attributes.get(container.id, container.attributes)
        reserved["container_name"] = context.identifiers[container.id]
        reserved["container_label"] = hcl_string(container.label or container.id)
        reserved["container_cidr_block"] = hcl_string(container_attributes.get("cidr_block") or "")
        return reserved

    def _resolve_container(self, node: Node, context: EmitterContext) -> Optional[Node]:
        if not node.container_id:
            return None

        container = context.node(node.container_id)
        if container is None or container.id == node.id:
            reason = "self reference" if container is not None else "unknown node"
        elif not is_grouping(context.kind_of(container.id)):
            reason = "container is not a grouping resource"
        else:
            return container

        context.dangling_containers.append(
            {"node_id": node.id, "container_id": node.container_id, "reason": reason}
        )
        logger.warning(
            f"Node '{node.id}' references container '{node.container_id}' "
            f"({reason}); emitting it unattached"
        )
        return None

    def _emit_placeholder(self, node: Node, context: EmitterContext) -> Fragment:
        identifier = self._identifier(node, context)
        raw_kind = node.kind if node.kind else "(none)"
        configuration = json.dumps(node.attributes, indent=2, default=str)

        lines = [
            f"# Resource: {comment_line(node.label or node.id)}",
            f"# Type: {comment_line(raw_kind)}",
            "# Unrecognized resource kind - manual completion required",
        ]
        config_lines = configuration.splitlines()
        lines.append(f"# Configuration: {config_lines[0]}")
        lines.extend(f"# {line}" for line in config_lines[1:])
        lines.append("# TODO: Add proper Terraform configuration")

        context.unrecognized.append({"node_id": node.id, "kind": raw_kind})
        self.stats["placeholder_nodes"] += 1
        self.stats["unrecognized_kinds"].add(raw_kind)
        logger.debug(f"No knowledge base entry for kind '{raw_kind}' (node {node.id})")

        return Fragment(
            text="\n".join(lines) + "\n",
            origin=node.id,
            identifier=identifier,
            is_placeholder=True,
        )

    def _log_statistics(self) -> None:
        """Log emission statistics."""
        logger.info(
            f"Terraform emission complete: "
            f"{self.stats['rendered_nodes']}/{self.stats['total_nodes']} "
            f"nodes rendered from templates"
        )

        if self.stats["placeholder_nodes"] > 0:
            logger.warning(
                f"{self.stats['placeholder_nodes']} nodes need manual configuration "
                f"(unrecognized kinds: {sorted(self.stats['unrecognized_kinds'])})"
            )

    def get_statistics(self) -> Dict[str, Any]:
        """Return a copy of the emission statistics."""
        stats = dict(self.stats)
        stats["unrecognized_kinds"] = sorted(self.stats["unrecognized_kinds"])
        return stats
