"""Minimal template renderer for knowledge base templates.

Grammar:

    {{name}}              scalar placeholder
    {{#name}} ... {{/name}}  conditional block, kept iff data[name] is truthy

Names match ``[A-Za-z_][A-Za-z0-9_]*``; any other ``{{...}}`` text, and
HCL ``${...}`` interpolation, is plain text. Blocks do not nest. Placeholders
whose name is missing from the data are left as literal text.
"""

import json
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Mapping, Optional, Set, Tuple, Union

from ..exceptions import TemplateSyntaxError

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"\{\{([#/]?)([A-Za-z_][A-Za-z0-9_]*)\}\}")


@dataclass(frozen=True)
class TextSegment:
    """Literal template text."""

    text: str


@dataclass(frozen=True)
class PlaceholderSegment:
    """A ``{{name}}`` placeholder; ``raw`` is the original marker text."""

    name: str
    raw: str


@dataclass(frozen=True)
class BlockSegment:
    """A ``{{#name}}...{{/name}}`` conditional block."""

    name: str
    children: Tuple[Union[TextSegment, PlaceholderSegment], ...]


Segment = Union[TextSegment, PlaceholderSegment, BlockSegment]


def parse(template: str) -> Tuple[Segment, ...]:
    """Scan a template into segments in a single left-to-right pass.

    Args:
        template: Template text

    Returns:
        Tuple of top-level segments

    Raises:
        TemplateSyntaxError: On nested, mismatched, unclosed or stray block markers
    """
    segments: List[Segment] = []
    block_name: Optional[str] = None
    block_start = 0
    block_children: List[Union[TextSegment, PlaceholderSegment]] = []
    position = 0

    for match in TAG_PATTERN.finditer(template):
        literal = template[position : match.start()]
        if literal:
            if block_name is None:
                segments.append(TextSegment(literal))
            else:
                block_children.append(TextSegment(literal))

        sigil, name = match.group(1), match.group(2)

        if sigil == "#":
            if block_name is not None:
                raise TemplateSyntaxError(
                    f"Nested block '{name}' inside block '{block_name}' is not supported",
                    position=match.start(),
                    block_name=name,
                )
            block_name = name
            block_start = match.start()
            block_children = []
        elif sigil == "/":
            if block_name is None:
                raise TemplateSyntaxError(
                    f"Closing marker for '{name}' without an open block",
                    position=match.start(),
                    block_name=name,
                )
            if name != block_name:
                raise TemplateSyntaxError(
                    f"Closing marker '{name}' does not match open block '{block_name}'",
                    position=match.start(),
                    block_name=block_name,
                )
            segments.append(BlockSegment(block_name, tuple(block_children)))
            block_name = None
        else:
            placeholder = PlaceholderSegment(name, match.group(0))
            if block_name is None:
                segments.append(placeholder)
            else:
                block_children.append(placeholder)

        position = match.end()

    if block_name is not None:
        raise TemplateSyntaxError(
            f"Block '{block_name}' is never closed",
            position=block_start,
            block_name=block_name,
        )

    tail = template[position:]
    if tail:
        segments.append(TextSegment(tail))

    return tuple(segments)


@lru_cache(maxsize=256)
def _parse_cached(template: str) -> Tuple[Segment, ...]:
    return parse(template)


def format_value(value: Any) -> str:
    """Return the text inserted for a placeholder value.

    Booleans render as HCL literals, ``None`` as an empty string, lists and
    mappings as JSON (which HCL accepts as tuple/object syntax).
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, default=str)
    return str(value)


def _render_scalars(
    children: Tuple[Union[TextSegment, PlaceholderSegment], ...],
    data: Mapping[str, Any],
) -> str:
    parts = []
    for child in children:
        if isinstance(child, TextSegment):
            parts.append(child.text)
        elif child.name in data:
            parts.append(format_value(data[child.name]))
        else:
            parts.append(child.raw)
    return "".join(parts)


def render(template: str, data: Mapping[str, Any]) -> str:
    """Render a template against a data map.

    Args:
        template: Template text
        data: Placeholder and block values

    Returns:
        Rendered text; substituted values are never rescanned

    Raises:
        TemplateSyntaxError: If the template's block markers are malformed
    """
    parts = []
    for segment in _parse_cached(template):
        if isinstance(segment, TextSegment):
            parts.append(segment.text)
        elif isinstance(segment, PlaceholderSegment):
            parts.append(_render_scalars((segment,), data))
        elif data.get(segment.name):
            parts.append(_render_scalars(segment.children, data))
    return "".join(parts)


def placeholder_names(
    segments: Tuple[Segment, ...],
) -> Tuple[Set[str], Set[str], dict]:
    """Collect the names a parsed template refers to.

    Args:
        segments: Output of parse()

    Returns:
        Tuple of (top-level placeholder names, block names,
        mapping of block name to the placeholder names inside it)
    """
    top_level: Set[str] = set()
    blocks: Set[str] = set()
    inside: dict = {}
    for segment in segments:
        if isinstance(segment, PlaceholderSegment):
            top_level.add(segment.name)
        elif isinstance(segment, BlockSegment):
            blocks.add(segment.name)
            names = inside.setdefault(segment.name, set())
            names.update(
                child.name
                for child in segment.children
                if isinstance(child, PlaceholderSegment)
            )
    return top_level, blocks, inside
