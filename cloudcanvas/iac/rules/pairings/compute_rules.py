"""Rules for edges that start at a compute instance."""

from typing import List

from ....models import Node
from ...emitters.terraform.context import EmitterContext
from ...knowledge_base import ResourceKind
from ..base_rule import AccessRule, PairingRule
from ..ports import target_database_port
from ..registry import pairing_rule


@pairing_rule
class InstanceToDatabaseRule(PairingRule):
    SOURCE_KINDS = frozenset({ResourceKind.INSTANCE})
    TARGET_KINDS = frozenset({ResourceKind.DB_INSTANCE})

    def access_rules(
        self, source: Node, target: Node, context: EmitterContext
    ) -> List[AccessRule]:
        return [
            AccessRule(
                suffix="_ingress",
                port=target_database_port(target, context),
                description="Database traffic from instance",
            )
        ]
