"""Network rule inference from diagram edges."""

from .base_rule import AccessRule, PairingRule
from .inference import NetworkRuleInference
from .registry import PairingRuleRegistry, ensure_rules_registered, pairing_rule

__all__ = [
    "AccessRule",
    "NetworkRuleInference",
    "PairingRule",
    "PairingRuleRegistry",
    "ensure_rules_registered",
    "pairing_rule",
]
