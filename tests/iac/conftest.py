"""Pytest configuration for IaC tests."""

import pytest


@pytest.fixture(autouse=True)
def force_rule_registration():
    """Reset the pairing rule registry before each test.

    Tests may clear the registry or register extra rules; every test starts
    from the built-in rules only.
    """
    from cloudcanvas.iac.rules import PairingRuleRegistry
    from cloudcanvas.iac.rules.pairings import register_builtin_rules

    PairingRuleRegistry.clear()
    register_builtin_rules()

    yield
