"""Knowledge base of Terraform templates keyed by resource kind.

The knowledge base is built once per process from the static catalog and is
read-only afterwards. Every template is scanned at load time so authoring
mistakes (malformed blocks, placeholders nothing will ever fill) fail fast
instead of surfacing in generated output.
"""

import logging
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Union

from ...exceptions import KnowledgeBaseError, TemplateSyntaxError
from ..renderer import parse, placeholder_names
from .entry import KnowledgeBaseEntry, OutputSpec
from .kinds import GROUPING_KINDS, KIND_ALIASES, ResourceKind, aliases_for, is_grouping

logger = logging.getLogger(__name__)

# Keys the emitter injects into every data map; templates may always use them.
RESERVED_KEYS: FrozenSet[str] = frozenset(
    {
        "name",
        "label",
        "container_name",
        "container_label",
        "container_cidr_block",
        "standalone",
    }
)


def validate_entry(entry: KnowledgeBaseEntry) -> None:
    """Validate one entry's template against its attribute lists.

    Args:
        entry: Entry to validate

    Raises:
        KnowledgeBaseError: If the entry can never render cleanly
    """
    kind = entry.kind.value

    seen = set()
    for attribute in entry.required_attributes:
        if attribute in seen:
            raise KnowledgeBaseError(
                f"Required attribute '{attribute}' is listed twice", resource_kind=kind
            )
        seen.add(attribute)

    try:
        segments = parse(entry.template)
    except TemplateSyntaxError as e:
        raise KnowledgeBaseError(
            f"Template does not parse: {e.message}", resource_kind=kind, cause=e
        ) from e

    top_level, blocks, inside = placeholder_names(segments)
    required = set(entry.required_attributes)
    known = required | set(entry.optional_attributes) | RESERVED_KEYS

    unfilled = top_level - required - RESERVED_KEYS
    if unfilled:
        raise KnowledgeBaseError(
            f"Placeholders outside blocks must be required or reserved: {sorted(unfilled)}",
            resource_kind=kind,
        )

    unknown_blocks = blocks - known
    if unknown_blocks:
        raise KnowledgeBaseError(
            f"Unknown block names: {sorted(unknown_blocks)}", resource_kind=kind
        )

    for block_name, names in inside.items():
        unknown = names - known
        if unknown:
            raise KnowledgeBaseError(
                f"Unknown placeholders in block '{block_name}': {sorted(unknown)}",
                resource_kind=kind,
            )

    declaration = f'resource "{entry.terraform_type}" "{{{{name}}}}"'
    if declaration not in entry.template:
        raise KnowledgeBaseError(
            f"Template must declare {declaration}", resource_kind=kind
        )


class KnowledgeBase:
    """Immutable mapping of ResourceKind to KnowledgeBaseEntry."""

    def __init__(self, entries: Iterable[KnowledgeBaseEntry]) -> None:
        """Build and validate the knowledge base.

        Args:
            entries: Entries in tie-break order

        Raises:
            KnowledgeBaseError: If any entry is invalid or duplicated
        """
        self._entries: Dict[ResourceKind, KnowledgeBaseEntry] = {}
        for entry in entries:
            if entry.kind is ResourceKind.UNRECOGNIZED:
                raise KnowledgeBaseError(
                    "UNRECOGNIZED cannot have a knowledge base entry",
                    resource_kind=entry.kind.value,
                )
            if entry.kind in self._entries:
                raise KnowledgeBaseError(
                    "Duplicate knowledge base entry", resource_kind=entry.kind.value
                )
            validate_entry(entry)
            self._entries[entry.kind] = entry

        logger.debug(f"Knowledge base loaded with {len(self._entries)} entries")

    def lookup(self, kind: Union[str, ResourceKind]) -> Optional[KnowledgeBaseEntry]:
        """Return the entry for an exact kind string, else None.

        No normalization is applied; use the Resource Matcher for aliases
        and partial matches.
        """
        if not isinstance(kind, ResourceKind):
            kind = ResourceKind.from_value(kind)
        if kind is ResourceKind.UNRECOGNIZED:
            return None
        return self._entries.get(kind)

    def keys(self) -> List[ResourceKind]:
        """Supported kinds in iteration (tie-break) order."""
        return list(self._entries)

    def entries(self) -> List[KnowledgeBaseEntry]:
        return list(self._entries.values())

    def examples_for(self, kind: str) -> List[str]:
        """Example configurations for whatever ``kind`` resolves to."""
        entry = self._resolve(kind)
        return list(entry.examples) if entry else []

    def advisories_for(self, kind: str) -> List[str]:
        """Best-practice notes for whatever ``kind`` resolves to."""
        entry = self._resolve(kind)
        return list(entry.advisories) if entry else []

    def _resolve(self, kind: str) -> Optional[KnowledgeBaseEntry]:
        from ..matcher import ResourceMatcher

        return self.lookup(ResourceMatcher(self).match(kind))

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def __iter__(self) -> Iterator[ResourceKind]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@lru_cache(maxsize=None)
def get_knowledge_base() -> KnowledgeBase:
    """Return the process-wide knowledge base, building it on first use."""
    from .catalog import ALL_ENTRIES

    return KnowledgeBase(ALL_ENTRIES)


def lookup(kind: Union[str, ResourceKind]) -> Optional[KnowledgeBaseEntry]:
    return get_knowledge_base().lookup(kind)


def examples_for(kind: str) -> List[str]:
    return get_knowledge_base().examples_for(kind)


def advisories_for(kind: str) -> List[str]:
    return get_knowledge_base().advisories_for(kind)


__all__ = [
    "GROUPING_KINDS",
    "KIND_ALIASES",
    "RESERVED_KEYS",
    "KnowledgeBase",
    "KnowledgeBaseEntry",
    "OutputSpec",
    "ResourceKind",
    "advisories_for",
    "aliases_for",
    "examples_for",
    "get_knowledge_base",
    "is_grouping",
    "lookup",
    "validate_entry",
]
