from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest

from cloudcanvas.config import GenerationConfig
from cloudcanvas.models import Edge, Node

FIXED_INSTANT = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


# ============================================================================
# Clock Fixtures
# ============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    """The instant returned by fixed_clock."""
    return FIXED_INSTANT


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant, for deterministic output."""
    return lambda: FIXED_INSTANT


@pytest.fixture
def default_config() -> GenerationConfig:
    return GenerationConfig()


# ============================================================================
# Graph Fixtures
# ============================================================================


@pytest.fixture
def vpc_node() -> Node:
    return Node(
        id="vpc-1",
        label="Main VPC",
        kind="aws_vpc",
        category="network",
        attributes={"cidr_block": "10.20.0.0/16"},
    )


@pytest.fixture
def instance_node() -> Node:
    return Node(
        id="ec2-1",
        label="Web Server",
        kind="aws_instance",
        category="compute",
        container_id="vpc-1",
    )


@pytest.fixture
def database_node() -> Node:
    return Node(
        id="db-1",
        label="Orders DB",
        kind="aws_db_instance",
        category="database",
        attributes={"engine": "mysql"},
    )


@pytest.fixture
def lambda_node() -> Node:
    return Node(id="fn-1", label="Api Handler", kind="aws_lambda_function", category="compute")


@pytest.fixture
def sample_nodes(vpc_node, instance_node, database_node, lambda_node) -> List[Node]:
    """A small architecture listed with the VPC deliberately not first."""
    return [instance_node, lambda_node, vpc_node, database_node]


@pytest.fixture
def sample_edges() -> List[Edge]:
    return [
        Edge(source="ec2-1", target="db-1"),
        Edge(source="fn-1", target="ec2-1"),
    ]


@pytest.fixture
def project_dict() -> Dict[str, Any]:
    """Graph in the editor's saved-project shape."""
    return {
        "name": "demo",
        "nodes": [
            {
                "id": "vpc-1",
                "label": "Main VPC",
                "terraformType": "aws_vpc",
                "config": {"cidr_block": "10.0.0.0/16"},
            },
            {
                "id": "ec2-1",
                "label": "Web Server",
                "terraformType": "aws_instance",
                "parentNode": "vpc-1",
            },
        ],
        "edges": [{"id": "e1", "source": "ec2-1", "target": "vpc-1"}],
    }
