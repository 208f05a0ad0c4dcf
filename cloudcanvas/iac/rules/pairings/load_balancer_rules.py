"""Rules for edges that start at a load balancer."""

from typing import List

from ....models import Node
from ...emitters.terraform.context import EmitterContext
from ...knowledge_base import ResourceKind
from ..base_rule import AccessRule, PairingRule
from ..ports import http_port
from ..registry import pairing_rule


@pairing_rule
class LoadBalancerToInstanceRule(PairingRule):
    """Load balancer forwarding HTTP to a compute instance."""

    SOURCE_KINDS = frozenset({ResourceKind.LOAD_BALANCER})
    TARGET_KINDS = frozenset({ResourceKind.INSTANCE})

    def access_rules(
        self, source: Node, target: Node, context: EmitterContext
    ) -> List[AccessRule]:
        return [
            AccessRule(
                suffix="_ingress",
                port=http_port(context),
                description="HTTP traffic from load balancer",
            )
        ]
