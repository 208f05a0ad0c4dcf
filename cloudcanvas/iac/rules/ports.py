"""Port selection for inferred access rules."""

from ...models import Node
from ..defaults import database_port
from ..emitters.terraform.context import EmitterContext


def target_database_port(target: Node, context: EmitterContext) -> int:
    """Port a database target listens on.

    Uses the target's own ``port`` attribute, then the default port of its
    engine, then the configured fallback.
    """
    supplied = target.attributes.get("port")
    if supplied is not None and str(supplied).strip().isdigit():
        return int(supplied)

    merged = context.attributes.get(target.id, target.attributes)
    return database_port(merged.get("engine"), context.config.ports.database_port)


def application_port(context: EmitterContext) -> int:
    return context.config.ports.application_port


def http_port(context: EmitterContext) -> int:
    return context.config.ports.http_port
