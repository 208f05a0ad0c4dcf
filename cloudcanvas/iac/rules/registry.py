"""Ordered registry of pairing rules.

Rules are consulted in registration order and the first one whose kind pair
applies wins. Registration happens once, at import; afterwards the registry
is only read.
"""

from typing import List, Optional, Type

import structlog

from ..knowledge_base import ResourceKind
from .base_rule import PairingRule

logger = structlog.get_logger(__name__)


class PairingRuleRegistry:
    """Registry of PairingRule classes with first-match dispatch.

    Usage:
        @pairing_rule
        class MyRule(PairingRule):
            ...

        rule = PairingRuleRegistry.get_rule(source_kind, target_kind)
    """

    _rules: List[Type[PairingRule]] = []

    @classmethod
    def register(cls, rule_class: Type[PairingRule]) -> Type[PairingRule]:
        """Register a rule class (idempotent).

        Args:
            rule_class: Rule class to register

        Returns:
            The rule class (unchanged)
        """
        if rule_class not in cls._rules:
            cls._rules.append(rule_class)
            logger.debug(f"Registered pairing rule {rule_class.__name__}")
        return rule_class

    @classmethod
    def get_rule(
        cls, source_kind: ResourceKind, target_kind: ResourceKind
    ) -> Optional[PairingRule]:
        """Get a rule instance for a kind pair.

        Args:
            source_kind: Resolved kind of the edge source
            target_kind: Resolved kind of the edge target

        Returns:
            Rule instance or None if the pair is not a known pairing
        """
        for rule_class in cls._rules:
            if rule_class.applies(source_kind, target_kind):
                return rule_class()
        return None

    @classmethod
    def get_all_rules(cls) -> List[Type[PairingRule]]:
        """Get all registered rule classes (copy)."""
        return cls._rules.copy()

    @classmethod
    def clear(cls) -> None:
        """Clear all registered rules.

        Primarily for testing.
        """
        cls._rules = []


def pairing_rule(cls: Type[PairingRule]) -> Type[PairingRule]:
    """Decorator to register a pairing rule class."""
    return PairingRuleRegistry.register(cls)


def ensure_rules_registered() -> None:
    """Register the built-in rules if the registry is empty."""
    if not PairingRuleRegistry._rules:
        from .pairings import register_builtin_rules

        register_builtin_rules()
