# pyright: reportUntypedBaseClass=false
"""Graph input models consumed by the Terraform generation engine.

The canvas editor is the only writer of these objects; the engine reads them
and never mutates them.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..exceptions import GraphInputError

logger = logging.getLogger(__name__)


class Node(BaseModel):
    """
    One user-placed infrastructure component.

    Fields:
        id: Caller-supplied unique identifier, stable for the node's lifetime.
        label: Display name, also the seed of the Terraform identifier.
        kind: Resource-kind string (e.g. "aws_instance"); may be unknown.
        category: Coarse palette grouping, informational only.
        attributes: Open attribute map supplied by the editor.
        container_id: Id of the node that contains this one (e.g. a VPC).
    """

    id: str = Field(..., description="Caller-supplied unique identifier.")
    label: str = Field("", description="Human-readable display name.")
    kind: Optional[str] = Field(
        None,
        description="Resource-kind string.",
        validation_alias=AliasChoices("kind", "terraformType"),
    )
    category: Optional[str] = Field(None, description="Coarse grouping tag.")
    attributes: Dict[str, Any] = Field(
        default_factory=dict,
        description="Attribute name to value.",
        validation_alias=AliasChoices("attributes", "config"),
    )
    container_id: Optional[str] = Field(
        None,
        description="Id of the containing node.",
        alias="containerId",
        validation_alias=AliasChoices("containerId", "container_id", "parentNode"),
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("attributes", mode="before")
    @classmethod
    def none_attributes_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("label", mode="before")
    @classmethod
    def none_label_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class Edge(BaseModel):
    """
    Directed "source needs network reachability to target" relationship.

    Fields:
        source: Id of the node that initiates traffic.
        target: Id of the node that accepts traffic.
        id: Optional editor-assigned edge id.
    """

    source: str = Field(..., description="Source node id.")
    target: str = Field(..., description="Target node id.")
    id: Optional[str] = Field(None, description="Optional edge id.")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Graph(BaseModel):
    """
    A named diagram: the shape exchanged with the Save/Load collaborator.

    Fields:
        name: Project name.
        nodes: Ordered node collection.
        edges: Ordered edge collection.
        generated_text: Last generated Terraform document, stored verbatim.
    """

    name: Optional[str] = Field(None, description="Project name.")
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    generated_text: Optional[str] = Field(
        None,
        alias="generatedText",
        validation_alias=AliasChoices("generatedText", "generated_text"),
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("nodes", "edges", mode="before")
    @classmethod
    def none_to_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_project_dict(self) -> Dict[str, Any]:
        """Serialize to the `{name, nodes, edges, generatedText}` shape."""
        return self.model_dump(mode="json", by_alias=True)


def load_graph(path: Union[str, Path]) -> Graph:
    """Load a graph from a JSON or YAML file.

    Args:
        path: File path; `.json` is parsed as JSON, anything else as YAML

    Returns:
        Validated Graph

    Raises:
        GraphInputError: If the file cannot be read, parsed or validated
    """
    graph_path = Path(path)
    try:
        with open(graph_path, encoding="utf-8") as f:
            if graph_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = YAML(typ="safe").load(f)
    except OSError as e:
        raise GraphInputError(
            f"Cannot read graph file: {e}", path=str(graph_path), cause=e
        ) from e
    except (json.JSONDecodeError, YAMLError) as e:
        raise GraphInputError(
            f"Graph file is not valid JSON/YAML: {e}", path=str(graph_path), cause=e
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise GraphInputError(
            "Graph file must contain a mapping with 'nodes' and 'edges'",
            path=str(graph_path),
        )

    try:
        graph = Graph.model_validate(data)
    except ValidationError as e:
        raise GraphInputError(
            f"Graph file failed validation: {e}", path=str(graph_path), cause=e
        ) from e

    logger.info(
        f"Loaded graph from {graph_path}: {len(graph.nodes)} nodes, "
        f"{len(graph.edges)} edges"
    )
    return graph
