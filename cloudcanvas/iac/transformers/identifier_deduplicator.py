"""Optional pass that makes derived resource identifiers unique.

Labels collapse to identifiers lossily ("Web Server" and "web-server" both
become ``web_server``), so two nodes can end up with the same Terraform
address. The pass is opt-in: by default duplicates are emitted as-is and
left for the user to rename.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass
class DeduplicationResult:
    """Result of an identifier deduplication pass."""

    identifiers_processed: int
    identifiers_renamed: int
    renames: List[Tuple[str, str, str]] = None  # (node_id, old_identifier, new_identifier)

    def __post_init__(self):
        if self.renames is None:
            self.renames = []


class IdentifierDeduplicator:
    """Suffix repeated identifiers with ``_2``, ``_3``, ... in input order."""

    def __init__(self, separator: str = "_") -> None:
        self.separator = separator

    def deduplicate(
        self, assignments: Sequence[Tuple[str, str]]
    ) -> Tuple[Dict[str, str], DeduplicationResult]:
        """Assign unique identifiers.

        The first node keeps the derived identifier; later nodes get the
        lowest free numeric suffix starting at 2. Suffixed names never steal
        an identifier that another node derives directly.

        Args:
            assignments: (node_id, derived_identifier) pairs in emission order

        Returns:
            Tuple of (node_id -> unique identifier, DeduplicationResult)
        """
        derived = {identifier for _, identifier in assignments}
        taken: set = set()
        next_suffix: Dict[str, int] = {}
        mapping: Dict[str, str] = {}
        result = DeduplicationResult(identifiers_processed=0, identifiers_renamed=0)

        for node_id, identifier in assignments:
            result.identifiers_processed += 1

            if identifier not in taken:
                taken.add(identifier)
                mapping[node_id] = identifier
                continue

            suffix = next_suffix.get(identifier, 2)
            candidate = f"{identifier}{self.separator}{suffix}"
            while candidate in taken or candidate in derived:
                suffix += 1
                candidate = f"{identifier}{self.separator}{suffix}"
            next_suffix[identifier] = suffix + 1

            taken.add(candidate)
            mapping[node_id] = candidate
            result.identifiers_renamed += 1
            result.renames.append((node_id, identifier, candidate))
            logger.debug(f"Renamed duplicate identifier {identifier} -> {candidate} ({node_id})")

        if result.identifiers_renamed:
            logger.info(
                f"Identifier deduplication: {result.identifiers_renamed}/"
                f"{result.identifiers_processed} identifiers suffixed"
            )

        return mapping, result
