"""Built-in pairing rules, in dispatch order."""

from ..registry import PairingRuleRegistry
from .compute_rules import InstanceToDatabaseRule
from .function_rules import FunctionToDatabaseRule, FunctionToInstanceRule
from .load_balancer_rules import LoadBalancerToInstanceRule

BUILTIN_RULES = (
    FunctionToInstanceRule,
    FunctionToDatabaseRule,
    InstanceToDatabaseRule,
    LoadBalancerToInstanceRule,
)


def register_builtin_rules() -> None:
    """Register the built-in rules (idempotent); used after a registry clear."""
    for rule_class in BUILTIN_RULES:
        PairingRuleRegistry.register(rule_class)


__all__ = [
    "BUILTIN_RULES",
    "FunctionToDatabaseRule",
    "FunctionToInstanceRule",
    "InstanceToDatabaseRule",
    "LoadBalancerToInstanceRule",
    "register_builtin_rules",
]
