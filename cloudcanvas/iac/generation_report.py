"""Generation reporting for the diagram-to-Terraform pipeline.

Collects what happened to every node and edge during one generation call
and formats it for the CLI.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class UnrecognizedKindInfo:
    """A kind string that matched no knowledge base entry."""

    kind: str
    count: int
    examples: List[str] = field(default_factory=list)


@dataclass
class GenerationMetrics:
    """Metrics collected during one generation call."""

    # Nodes
    nodes_received: int = 0
    nodes_rendered: int = 0
    nodes_placeholder: int = 0
    grouping_nodes: int = 0
    duplicate_node_ids: int = 0
    dangling_containers: int = 0
    identifiers_renamed: int = 0

    # Edges
    edges_received: int = 0
    edges_inferred: int = 0
    edges_deferred: int = 0
    edges_ignored: int = 0

    # Outputs
    outputs_generated: int = 0

    unrecognized_kinds: Dict[str, UnrecognizedKindInfo] = field(default_factory=dict)

    def add_unrecognized(self, kind: str, label: str) -> None:
        info = self.unrecognized_kinds.setdefault(kind, UnrecognizedKindInfo(kind, 0))
        info.count += 1
        if len(info.examples) < 3:
            info.examples.append(label)

    @property
    def coverage(self) -> float:
        """Percentage of nodes rendered from a template."""
        if self.nodes_received == 0:
            return 100.0
        return self.nodes_rendered / self.nodes_received * 100.0


@dataclass
class GenerationReport:
    """Human-readable summary of a generation call."""

    metrics: GenerationMetrics
    output_path: Optional[Path] = None
    timestamp: str = ""

    def format_report(self) -> str:
        """Format the report as plain text."""
        m = self.metrics
        lines = []
        lines.append("")
        lines.append("=" * 80)
        lines.append("TERRAFORM GENERATION REPORT")
        lines.append("=" * 80)
        if self.timestamp:
            lines.append(f"  Generated at:             {self.timestamp}")
        lines.append("")

        lines.append("NODES")
        lines.append("-" * 80)
        lines.append(f"  Nodes Received:           {m.nodes_received}")
        lines.append(f"  Rendered From Templates:  {m.nodes_rendered}")
        lines.append(f"  Grouping Resources:       {m.grouping_nodes}")
        lines.append(f"  Placeholders:             {m.nodes_placeholder}")
        lines.append(f"  Template Coverage:        {m.coverage:.1f}%")
        lines.append("")

        lines.append("CONNECTIONS")
        lines.append("-" * 80)
        lines.append(f"  Edges Received:           {m.edges_received}")
        lines.append(f"  Rules Inferred:           {m.edges_inferred}")
        lines.append(f"  Manual Configuration:     {m.edges_deferred}")
        lines.append(f"  Ignored (dangling):       {m.edges_ignored}")
        lines.append("")

        if m.unrecognized_kinds:
            lines.append("UNRECOGNIZED KINDS")
            lines.append("-" * 80)
            for info in sorted(
                m.unrecognized_kinds.values(), key=lambda x: x.count, reverse=True
            ):
                lines.append(f"  {info.kind}")
                lines.append(f"    Count: {info.count}")
                if info.examples:
                    lines.append(f"    Examples: {', '.join(info.examples)}")
            lines.append("")

        notes = []
        if m.duplicate_node_ids:
            notes.append(f"{m.duplicate_node_ids} nodes share an id with an earlier node")
        if m.dangling_containers:
            notes.append(f"{m.dangling_containers} nodes reference a missing container")
        if m.identifiers_renamed:
            notes.append(f"{m.identifiers_renamed} identifiers were suffixed to stay unique")
        if notes:
            lines.append("NOTES")
            lines.append("-" * 80)
            lines.extend(f"  - {note}" for note in notes)
            lines.append("")

        lines.append("NEXT STEPS")
        lines.append("-" * 80)
        if self.output_path:
            lines.append(f"  1. Review generated file: {self.output_path}")
        else:
            lines.append("  1. Review the generated configuration")
        lines.append("  2. Run: terraform init")
        lines.append("  3. Run: terraform plan")
        lines.append("")
        lines.append("=" * 80)
        lines.append("")

        return "\n".join(lines)
