"""Resolve free-form resource-kind strings to knowledge base kinds."""

import logging
from typing import Optional

from .knowledge_base import KIND_ALIASES, KnowledgeBase, ResourceKind, get_knowledge_base

logger = logging.getLogger(__name__)


class ResourceMatcher:
    """Matches kind strings against the knowledge base.

    Resolution order:
    1. Exact knowledge base key.
    2. Exact editor alias (``ec2``, ``rds``, ``network``, ...).
    3. First key, in knowledge base order, that the kind contains, or that
       contains the kind's second underscore-delimited segment.
    4. ResourceKind.UNRECOGNIZED.
    """

    def __init__(self, knowledge_base: Optional[KnowledgeBase] = None) -> None:
        self.knowledge_base = knowledge_base or get_knowledge_base()

    def match(self, kind: Optional[str]) -> ResourceKind:
        """Resolve a kind string.

        Args:
            kind: Raw kind string from a node; may be None or empty

        Returns:
            Matched ResourceKind, or ResourceKind.UNRECOGNIZED
        """
        if not kind:
            return ResourceKind.UNRECOGNIZED

        if self.knowledge_base.lookup(kind) is not None:
            return ResourceKind(kind)

        alias = KIND_ALIASES.get(kind)
        if alias is not None and alias in self.knowledge_base:
            logger.debug(f"Kind '{kind}' resolved by alias to {alias.value}")
            return alias

        segments = kind.split("_")
        token = segments[1] if len(segments) > 1 else ""
        for key in self.knowledge_base.keys():
            if key.value in kind or (token and token in key.value):
                logger.debug(f"Kind '{kind}' fuzzy-matched to {key.value}")
                return key

        logger.debug(f"Kind '{kind}' did not match any knowledge base entry")
        return ResourceKind.UNRECOGNIZED


def match(kind: Optional[str]) -> ResourceKind:
    """Resolve a kind string against the process-wide knowledge base."""
    return ResourceMatcher().match(kind)
