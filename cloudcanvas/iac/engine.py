"""Generation engine for converting diagram graphs to Terraform.

One call runs the whole pipeline synchronously:

    nodes -> TerraformEmitter (matcher, defaults, renderer per node)
    edges -> NetworkRuleInference
    fragments -> DocumentAssembler -> text

Each call builds its own emitter state and EmitterContext, so the engine can
be invoked repeatedly, and concurrently, as the diagram changes.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..config import GenerationConfig
from ..models import Edge, Graph, Node
from .defaults import Clock, utc_now
from .emitters.terraform import DocumentAssembler, Fragment, TerraformEmitter, write
from .generation_report import GenerationMetrics, GenerationReport
from .knowledge_base import KnowledgeBase, get_knowledge_base
from .rules import NetworkRuleInference

logger = logging.getLogger(__name__)

NodeInput = Union[Node, Mapping[str, Any]]
EdgeInput = Union[Edge, Mapping[str, Any]]


@dataclass
class GenerationResult:
    """Document and bookkeeping produced by one generation call."""

    document: str
    node_fragments: List[Fragment] = field(default_factory=list)
    rule_fragments: List[Fragment] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    metrics: GenerationMetrics = field(default_factory=GenerationMetrics)


class TerraformGenerationEngine:
    """Turns nodes and edges into one Terraform document."""

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        knowledge_base: Optional[KnowledgeBase] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Generation settings (defaults when omitted)
            knowledge_base: Knowledge base (process-wide default when omitted)
            clock: Clock for time-derived defaults such as bucket names
        """
        self.config = config or GenerationConfig()
        self.knowledge_base = knowledge_base or get_knowledge_base()
        self.clock = clock or utc_now

    def generate(
        self, nodes: Sequence[NodeInput], edges: Sequence[EdgeInput] = ()
    ) -> GenerationResult:
        """Generate a Terraform document.

        Args:
            nodes: Nodes in input order (models or plain dicts)
            edges: Edges in input order (models or plain dicts)

        Returns:
            GenerationResult with the document, fragments and metrics
        """
        node_models = [self._as_node(n) for n in nodes]
        edge_models = [self._as_edge(e) for e in edges]
        logger.info(
            f"Generating Terraform for {len(node_models)} nodes and {len(edge_models)} edges"
        )

        emitter = TerraformEmitter(self.knowledge_base, self.clock, self.config)
        context = emitter.build_context(node_models)
        node_fragments = emitter.emit(node_models, context)

        inference = NetworkRuleInference()
        rule_fragments = inference.infer_all(edge_models, context)

        assembler = DocumentAssembler(self.config, self.knowledge_base)
        outputs = assembler.build_outputs(context.emitted)
        document = assembler.assemble(node_fragments, rule_fragments, outputs)

        metrics = GenerationMetrics(
            nodes_received=len(node_models),
            nodes_rendered=emitter.stats["rendered_nodes"],
            nodes_placeholder=emitter.stats["placeholder_nodes"],
            grouping_nodes=emitter.stats["grouping_nodes"],
            duplicate_node_ids=len(context.duplicate_node_ids),
            dangling_containers=len(context.dangling_containers),
            identifiers_renamed=context.identifiers_renamed,
            edges_received=len(edge_models),
            edges_inferred=inference.stats["inferred_edges"],
            edges_deferred=inference.stats["deferred_edges"],
            edges_ignored=inference.stats["ignored_edges"],
            outputs_generated=len(outputs),
        )
        for item in context.unrecognized:
            node = context.node(item["node_id"])
            metrics.add_unrecognized(item["kind"], node.label if node else item["node_id"])

        return GenerationResult(
            document=document,
            node_fragments=node_fragments,
            rule_fragments=rule_fragments,
            outputs=outputs,
            metrics=metrics,
        )

    def generate_graph(self, graph: Graph) -> GenerationResult:
        """Generate from a Graph model."""
        return self.generate(graph.nodes, graph.edges)

    def export(
        self, result: GenerationResult, output_dir: Path, filename: Optional[str] = None
    ) -> Path:
        """Write a generated document using the configured filename.

        Args:
            result: Result of generate()
            output_dir: Directory to write into
            filename: Overrides config.output_filename

        Returns:
            Path of the written file
        """
        return write(result.document, output_dir, filename or self.config.output_filename)

    def build_report(
        self, result: GenerationResult, output_path: Optional[Path] = None
    ) -> GenerationReport:
        return GenerationReport(
            metrics=result.metrics,
            output_path=output_path,
            timestamp=self.clock().isoformat(),
        )

    @staticmethod
    def _as_node(node: NodeInput) -> Node:
        return node if isinstance(node, Node) else Node.model_validate(dict(node))

    @staticmethod
    def _as_edge(edge: EdgeInput) -> Edge:
        return edge if isinstance(edge, Edge) else Edge.model_validate(dict(edge))


def generate_terraform(
    nodes: Sequence[NodeInput],
    edges: Sequence[EdgeInput] = (),
    config: Optional[GenerationConfig] = None,
    clock: Optional[Clock] = None,
) -> str:
    """Convenience function returning only the generated document.

    Args:
        nodes: Nodes in input order
        edges: Edges in input order
        config: Optional generation settings
        clock: Optional clock for time-derived defaults

    Returns:
        Terraform document text
    """
    engine = TerraformGenerationEngine(config=config, clock=clock)
    return engine.generate(nodes, edges).document
