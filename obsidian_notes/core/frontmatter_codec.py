"""Minimal YAML-subset codec for note frontmatter.

Only the shapes Obsidian frontmatter commonly uses are supported: scalars
(strings, integers, floats, booleans, null) and flat sequences of scalars.
Nested mappings are not supported; indented lines that are not sequence items
are ignored when parsing.

Parsing never raises. A block that cannot be understood is treated as if the
note had no frontmatter at all, so one malformed note cannot break a
vault-wide scan and the note body is never altered.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional, Union

from obsidian_notes.core.markdown_structure import extract_tag_links

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool, None]
FrontmatterValue = Union[Scalar, list[Scalar]]

FRONTMATTER_PATTERN = re.compile(
    r"\A---\r?\n(?P<yaml>.*?)^---[ \t]*\r?(?:\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_KEY_LINE = re.compile(r"^(?P<key>[^\s:#\-\"'\[\]{}][^:]*?)\s*:\s*(?P<value>.*?)\s*$")
VALID_KEY = re.compile(r"^[^\s:#\-\"'\[\]{}][^:\r\n]*$")
_ITEM_LINE = re.compile(r"^\s*-\s+(?P<value>.*?)\s*$")
_INTEGER = re.compile(r"^-?\d+$")
_FLOAT = re.compile(r"^-?\d+\.\d+$")
_ESCAPE = re.compile(r"\\(.)")
_ESCAPES = {"n": "\n", "r": "\r", '"': '"', "\\": "\\"}
_SIGNIFICANT_START = tuple("[]{}>|*&!%@`\"'")


class FrontmatterSyntaxError(ValueError):
    """Raised internally when a frontmatter line cannot be interpreted."""


@dataclass
class ParsedFrontmatter:
    """Result of splitting a note into frontmatter and body."""

    frontmatter: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    raw: str = ""

    @property
    def has_frontmatter(self) -> bool:
        return bool(self.raw)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _unescape(value: str) -> str:
    return _ESCAPE.sub(lambda match: _ESCAPES.get(match.group(1), match.group(0)), value)


def _parse_scalar(value: str) -> FrontmatterValue:
    """Coerce a single YAML value.

    Order matters: quoted strings first, then booleans, null, integers, floats,
    inline arrays, and finally the raw string.
    """
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return _unescape(value[1:-1])
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]

    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null" or value == "~":
        return None

    if _INTEGER.match(value):
        return int(value)
    if _FLOAT.match(value):
        return float(value)

    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        if not inner.strip():
            return []
        return [_parse_scalar(item.strip()) for item in inner.split(",")]

    return value


def _parse_block(block: str) -> dict[str, Any]:
    """Parse the lines between the ``---`` delimiters.

    Raises:
        FrontmatterSyntaxError: If a top-level line is neither a key nor an item.
    """
    result: dict[str, Any] = {}
    pending_key: Optional[str] = None
    pending_items: Optional[list[Any]] = None

    for line in re.split(r"\r?\n", block):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        item = _ITEM_LINE.match(line)
        if item is not None:
            if pending_items is not None:
                pending_items.append(_parse_scalar(item.group("value")))
            continue

        if line[0].isspace():
            # Nested mappings and folded scalars are not supported.
            continue

        key_line = _KEY_LINE.match(line)
        if key_line is None:
            raise FrontmatterSyntaxError(f"Unrecognized frontmatter line: {line!r}")

        if pending_key is not None and pending_items is not None:
            result[pending_key] = pending_items

        pending_key = key_line.group("key").strip()
        raw_value = key_line.group("value")
        if raw_value:
            result[pending_key] = _parse_scalar(raw_value)
            pending_items = None
        else:
            pending_items = []

    if pending_key is not None and pending_items is not None:
        result[pending_key] = pending_items

    return result


def _needs_quotes(value: str) -> bool:
    if not value:
        return True
    if (
        ":" in value
        or "#" in value
        or "\n" in value
        or "\r" in value
        or value != value.strip()
        or value.startswith(_SIGNIFICANT_START)
    ):
        return True
    # Strings that would read back as another type must stay strings.
    return not isinstance(_parse_scalar(value), str)


def _format_float(value: float) -> str:
    """Write a float in positional notation so it reads back as a float."""
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    return text if "." in text else f"{text}.0"


def _format_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)

    text = str(value)
    if _needs_quotes(text):
        escaped = (
            text.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
        )
        return f'"{escaped}"'
    return text


def _tag_list(value: Any) -> list[Any]:
    """Normalize a ``tags``/``aliases`` value into a list."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, str) and value.strip():
        return [value]
    return []


def _strip_hash(tag: str) -> str:
    return tag[1:] if tag.startswith("#") else tag


# ==============================================================================
# CODEC
# ==============================================================================


def parse_frontmatter(content: str) -> ParsedFrontmatter:
    """Split ``content`` into frontmatter, body, and the raw frontmatter block.

    Args:
        content: Full note text.

    Returns:
        A :class:`ParsedFrontmatter`. When no valid block starts the text the
        frontmatter is empty, ``raw`` is ``""`` and ``body`` is the whole input.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        return ParsedFrontmatter(frontmatter={}, body=content, raw="")

    raw = match.group(0)
    try:
        frontmatter = _parse_block(match.group("yaml"))
    except ValueError as exc:
        logger.debug("Ignoring unparseable frontmatter: %s", exc)
        return ParsedFrontmatter(frontmatter={}, body=content, raw="")

    return ParsedFrontmatter(frontmatter=frontmatter, body=content[len(raw) :], raw=raw)


def stringify_frontmatter(frontmatter: Optional[dict[str, Any]]) -> str:
    """Render ``frontmatter`` as a ``---`` delimited block.

    Sequences are always written as block sequences, except empty ones which
    render as ``[]``. An empty or missing mapping renders as ``""``.
    """
    if not frontmatter:
        return ""

    lines: list[str] = []
    for key, value in frontmatter.items():
        if isinstance(value, (list, tuple)):
            if not value:
                lines.append(f"{key}: []")
                continue
            lines.append(f"{key}:")
            lines.extend(f"  - {_format_scalar(item)}" for item in value)
        else:
            lines.append(f"{key}: {_format_scalar(value)}")

    return "---\n" + "\n".join(lines) + "\n---\n"


def update_frontmatter(content: str, updates: dict[str, Any]) -> str:
    """Shallow-merge ``updates`` into the note's frontmatter."""
    parsed = parse_frontmatter(content)
    merged = {**parsed.frontmatter, **updates}
    return stringify_frontmatter(merged) + parsed.body


def remove_frontmatter(content: str) -> str:
    return parse_frontmatter(content).body


def get_frontmatter_field(content: str, name: str, default: Any = None) -> Any:
    return parse_frontmatter(content).frontmatter.get(name, default)


def set_frontmatter_property(content: str, key: str, value: Any) -> str:
    """Set a single property; a ``None`` value removes the key."""
    parsed = parse_frontmatter(content)
    frontmatter = dict(parsed.frontmatter)
    if value is None:
        frontmatter.pop(key, None)
    else:
        frontmatter[key] = value
    return stringify_frontmatter(frontmatter) + parsed.body


# ==============================================================================
# TAGS & ALIASES
# ==============================================================================


def add_tags(content: str, tags: list[str]) -> str:
    """Add tags to the frontmatter ``tags`` list.

    A leading ``#`` is removed from each tag and duplicates (exact match) are
    dropped, so repeated calls are idempotent.
    """
    parsed = parse_frontmatter(content)
    existing = _tag_list(parsed.frontmatter.get("tags"))
    merged = list(dict.fromkeys([*existing, *(_strip_hash(tag) for tag in tags)]))
    frontmatter = {**parsed.frontmatter, "tags": merged}
    return stringify_frontmatter(frontmatter) + parsed.body


def remove_tags(content: str, tags: list[str]) -> str:
    """Remove tags from the frontmatter, comparing case-insensitively.

    Content without a ``tags`` value is returned unchanged.
    """
    parsed = parse_frontmatter(content)
    existing = _tag_list(parsed.frontmatter.get("tags"))
    if not existing:
        return content

    to_remove = {_strip_hash(tag).lower() for tag in tags}
    remaining = [tag for tag in existing if str(tag).lower() not in to_remove]
    frontmatter = {**parsed.frontmatter, "tags": remaining}
    return stringify_frontmatter(frontmatter) + parsed.body


def add_aliases(content: str, aliases: list[str]) -> str:
    parsed = parse_frontmatter(content)
    existing = _tag_list(parsed.frontmatter.get("aliases"))
    merged = list(dict.fromkeys([*existing, *aliases]))
    frontmatter = {**parsed.frontmatter, "aliases": merged}
    return stringify_frontmatter(frontmatter) + parsed.body


def get_all_tags(content: str) -> list[str]:
    """Return frontmatter tags followed by inline body tags, without duplicates."""
    parsed = parse_frontmatter(content)
    tags = [str(tag) for tag in _tag_list(parsed.frontmatter.get("tags")) if tag is not None]
    tags.extend(link.target for link in extract_tag_links(parsed.body))
    return list(dict.fromkeys(tags))
