"""Network rule inference: edges to security group rule fragments."""

from typing import Any, Dict, List, Sequence, Set, Tuple

import structlog

from ...models import Edge, Node
from ..emitters.terraform.context import EmitterContext
from ..emitters.terraform.fragments import Fragment
from ..knowledge_base import ResourceKind
from ..naming import comment_line, derive_identifier, hcl_string
from ..renderer import render
from .registry import PairingRuleRegistry, ensure_rules_registered
from .templates import DEFERRED_CONNECTION_TEMPLATE, INGRESS_RULE_TEMPLATE

logger = structlog.get_logger(__name__)


class NetworkRuleInference:
    """Turns each edge into access-rule fragments by its (source, target) kinds."""

    def __init__(self) -> None:
        ensure_rules_registered()
        self.stats: Dict[str, Any] = {
            "total_edges": 0,
            "inferred_edges": 0,
            "deferred_edges": 0,
            "ignored_edges": 0,
            "repeated_edges": 0,
        }

    def infer(self, edge: Edge, source: Node, target: Node, context: EmitterContext) -> Fragment:
        """Build the fragment for one edge whose endpoints both exist.

        Args:
            edge: The edge
            source: Node the edge starts at
            target: Node the edge ends at
            context: Context of the current generation call

        Returns:
            Rule fragment, or a deferred-configuration comment for unknown pairs
        """
        source_kind = context.kind_of(source.id)
        target_kind = context.kind_of(target.id)
        source_name = self._identifier(source, context)
        target_name = self._identifier(target, context)
        origin = f"{edge.source}->{edge.target}"

        rule = PairingRuleRegistry.get_rule(source_kind, target_kind)
        if rule is None:
            self.stats["deferred_edges"] += 1
            logger.debug(
                f"No pairing rule for {self._kind_label(source, source_kind)} -> "
                f"{self._kind_label(target, target_kind)}"
            )
            text = render(
                DEFERRED_CONNECTION_TEMPLATE,
                {
                    "source": source_name,
                    "target": target_name,
                    "source_kind": comment_line(self._kind_label(source, source_kind)),
                    "target_kind": comment_line(self._kind_label(target, target_kind)),
                },
            )
            return Fragment(
                text=text,
                origin=origin,
                identifier=f"{target_name}_from_{source_name}",
                is_placeholder=True,
                source_id=source.id,
                target_id=target.id,
            )

        blocks = []
        base_name = f"{target_name}_from_{source_name}"
        for access_rule in rule.access_rules(source, target, context):
            blocks.append(
                render(
                    INGRESS_RULE_TEMPLATE,
                    {
                        "rule_name": f"{base_name}{access_rule.suffix}",
                        "port": access_rule.port,
                        "target": target_name,
                        "source": source_name,
                        "description": hcl_string(access_rule.description),
                    },
                )
            )

        self.stats["inferred_edges"] += 1
        logger.debug(f"{type(rule).__name__} produced {len(blocks)} rules for {origin}")
        return Fragment(
            text="\n".join(blocks),
            origin=origin,
            identifier=base_name,
            source_id=source.id,
            target_id=target.id,
        )

    def infer_all(self, edges: Sequence[Edge], context: EmitterContext) -> List[Fragment]:
        """Infer fragments for every edge whose endpoints both exist.

        Args:
            edges: Edges in input order
            context: Context of the current generation call

        Returns:
            One fragment per usable edge, in input order; repeats of an
            earlier (source, target) pair are skipped
        """
        fragments = []
        seen: Set[Tuple[str, str]] = set()
        for edge in edges:
            self.stats["total_edges"] += 1
            source = context.node(edge.source)
            target = context.node(edge.target)

            if source is None or target is None:
                self.stats["ignored_edges"] += 1
                logger.warning(
                    f"Ignoring edge {edge.source} -> {edge.target}: endpoint not found"
                )
                continue

            pair = (source.id, target.id)
            if pair in seen:
                self.stats["repeated_edges"] += 1
                logger.debug(f"Skipping repeated edge {edge.source} -> {edge.target}")
                continue
            seen.add(pair)

            fragments.append(self.infer(edge, source, target, context))

        if edges:
            logger.info(
                f"Network rule inference complete: {self.stats['inferred_edges']} inferred, "
                f"{self.stats['deferred_edges']} deferred, "
                f"{self.stats['ignored_edges']} ignored of {self.stats['total_edges']} edges"
            )
        return fragments

    @staticmethod
    def _identifier(node: Node, context: EmitterContext) -> str:
        return context.identifiers.get(node.id) or derive_identifier(node.label, node.id)

    @staticmethod
    def _kind_label(node: Node, kind: ResourceKind) -> str:
        if kind is ResourceKind.UNRECOGNIZED:
            return node.kind or "unknown"
        return kind.value
