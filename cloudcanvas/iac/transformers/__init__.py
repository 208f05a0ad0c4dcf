"""Transformers applied to node data before emission."""

from .identifier_deduplicator import DeduplicationResult, IdentifierDeduplicator

__all__ = ["DeduplicationResult", "IdentifierDeduplicator"]
