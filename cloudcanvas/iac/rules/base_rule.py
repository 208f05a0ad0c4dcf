"""Base class for (source kind, target kind) pairing rules."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, FrozenSet, List

from ...models import Node
from ..emitters.terraform.context import EmitterContext
from ..knowledge_base import ResourceKind


@dataclass(frozen=True)
class AccessRule:
    """One ingress rule implied by an edge.

    Attributes:
        suffix: Appended to ``<target>_from_<source>`` to form the rule identifier
        port: TCP port opened on the target
        description: Human-readable purpose of the rule
    """

    suffix: str
    port: int
    description: str


class PairingRule(ABC):
    """Maps an edge between two resolved kinds to access rules.

    Rules are stateless; ports come from the EmitterContext configuration
    and the endpoint nodes.

    Usage:
        @pairing_rule
        class FunctionToInstanceRule(PairingRule):
            SOURCE_KINDS = frozenset({ResourceKind.LAMBDA_FUNCTION})
            TARGET_KINDS = frozenset({ResourceKind.INSTANCE})

            def access_rules(self, source, target, context):
                return [AccessRule("_ingress", 8080, "...")]
    """

    SOURCE_KINDS: ClassVar[FrozenSet[ResourceKind]] = frozenset()
    TARGET_KINDS: ClassVar[FrozenSet[ResourceKind]] = frozenset()

    @classmethod
    def applies(cls, source_kind: ResourceKind, target_kind: ResourceKind) -> bool:
        """Return True if this rule handles the given kind pair."""
        return source_kind in cls.SOURCE_KINDS and target_kind in cls.TARGET_KINDS

    @abstractmethod
    def access_rules(
        self, source: Node, target: Node, context: EmitterContext
    ) -> List[AccessRule]:
        """Return the ingress rules to open on the target for this edge."""
        raise NotImplementedError
