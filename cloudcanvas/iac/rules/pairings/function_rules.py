"""Rules for edges that start at a serverless function."""

from typing import List

from ....models import Node
from ...emitters.terraform.context import EmitterContext
from ...knowledge_base import ResourceKind
from ..base_rule import AccessRule, PairingRule
from ..ports import application_port, target_database_port
from ..registry import pairing_rule


@pairing_rule
class FunctionToInstanceRule(PairingRule):
    """Function calling an application served by a compute instance."""

    SOURCE_KINDS = frozenset({ResourceKind.LAMBDA_FUNCTION})
    TARGET_KINDS = frozenset({ResourceKind.INSTANCE})

    def access_rules(
        self, source: Node, target: Node, context: EmitterContext
    ) -> List[AccessRule]:
        return [
            AccessRule(
                suffix="_ingress",
                port=application_port(context),
                description="Application traffic from function",
            )
        ]


@pairing_rule
class FunctionToDatabaseRule(PairingRule):
    """Function talking to a managed database: application and database ports."""

    SOURCE_KINDS = frozenset({ResourceKind.LAMBDA_FUNCTION})
    TARGET_KINDS = frozenset({ResourceKind.DB_INSTANCE})

    def access_rules(
        self, source: Node, target: Node, context: EmitterContext
    ) -> List[AccessRule]:
        return [
            AccessRule(
                suffix="_ingress",
                port=application_port(context),
                description="Application traffic from function",
            ),
            AccessRule(
                suffix="_ingress_db",
                port=target_database_port(target, context),
                description="Database traffic from function",
            ),
        ]
