"""Built-in knowledge base catalog, one module per resource category."""

from typing import Tuple

from ..entry import KnowledgeBaseEntry
from ..kinds import ResourceKind
from . import compute, database, integration, network, security, storage


def _ordered_entries() -> Tuple[KnowledgeBaseEntry, ...]:
    entries = (
        network.ENTRIES
        + compute.ENTRIES
        + storage.ENTRIES
        + database.ENTRIES
        + security.ENTRIES
        + integration.ENTRIES
    )
    # Iteration order of the knowledge base is the fuzzy-match tie-break order.
    order = {kind: index for index, kind in enumerate(ResourceKind)}
    return tuple(sorted(entries, key=lambda entry: order[entry.kind]))


ALL_ENTRIES = _ordered_entries()

__all__ = ["ALL_ENTRIES"]
