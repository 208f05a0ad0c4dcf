"""Identifier and string helpers shared by the emitter and rule inference."""

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def derive_identifier(label: str, fallback: str = "") -> str:
    """Derive a Terraform resource identifier from a display label.

    The label is lower-cased and every run of non-alphanumeric characters
    becomes a single underscore ("Web Server" -> "web_server"). Uniqueness
    is not enforced here.

    Args:
        label: Node display name
        fallback: Used instead of the label when the label is blank

    Returns:
        Identifier safe for use as a Terraform resource name
    """
    source = label if label and label.strip() else fallback
    identifier = _NON_ALNUM_RUN.sub("_", (source or "").lower())

    if identifier and identifier[0].isdigit():
        identifier = f"resource_{identifier}"

    return identifier or "unnamed_resource"


def hcl_string(text: str) -> str:
    """Escape text for use inside a double-quoted HCL string on one line."""
    escaped = (
        str(text)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("${", "$${")
        .replace("%{", "%%{")
    )
    return " ".join(escaped.splitlines())


def comment_line(text: str) -> str:
    """Collapse text onto one line so it can follow a ``#`` comment marker."""
    return " ".join(str(text).splitlines())
