"""Note reading, frontmatter, tag, alias, and section operations."""

from __future__ import annotations

import copy
import logging
from collections import Counter
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Literal, Optional

from obsidian_notes.constants import MAX_FRONTMATTER_BYTES, NOTE_STATS_SUMMARY_LENGTH
from obsidian_notes.core import frontmatter_codec as codec
from obsidian_notes.core.link_operations import load_snapshot
from obsidian_notes.core.markdown_structure import (
    count_words,
    extract_headings,
    insert_under_heading,
    section_under,
    summarize,
)
from obsidian_notes.core.vault_operations import VaultAccessor, normalize_note_path
from obsidian_notes.data_models import AnalysisSettings

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def ensure_supported_frontmatter(metadata: dict[str, Any]) -> None:
    """Validate and sanitize metadata prior to serialization.

    This function mutates ``metadata`` in-place to coerce ``date``/``datetime``
    values into ISO strings. Only scalars and flat lists of scalars can be
    written by the frontmatter codec, and the serialized block is size-limited.

    Args:
        metadata: Mutable dictionary supplied by the caller.

    Raises:
        ValueError: If the metadata is not a mapping, contains invalid keys,
            nested mappings or unsupported types, or exceeds the permitted size.
    """
    if not isinstance(metadata, dict):
        raise ValueError("Frontmatter must be a dictionary of key/value pairs.")

    def _sanitize_scalar(value: Any, path: str) -> Any:
        if isinstance(value, (str, int, float, bool)) or value is None:
            return value
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, Mapping):
            raise ValueError(f"Frontmatter field '{path}' is a nested mapping, which is not supported.")
        raise ValueError(f"Frontmatter field '{path}' uses unsupported type '{type(value).__name__}'.")

    sanitized: dict[str, Any] = {}
    for key, value in metadata.items():
        if not isinstance(key, str) or key != key.strip() or not codec.VALID_KEY.match(key):
            raise ValueError(f"Frontmatter key {key!r} is not a valid property name.")
        if isinstance(value, (list, tuple)):
            sanitized[key] = [
                _sanitize_scalar(item, f"{key}[{index}]") for index, item in enumerate(value)
            ]
        else:
            sanitized[key] = _sanitize_scalar(value, key)

    if len(codec.stringify_frontmatter(sanitized).encode("utf-8")) > MAX_FRONTMATTER_BYTES:
        raise ValueError(
            f"Frontmatter exceeds maximum size of {MAX_FRONTMATTER_BYTES // 1024}KB."
        )

    metadata.clear()
    metadata.update(sanitized)


def _clean_labels(values: list[str], kind: str) -> list[str]:
    cleaned = [value.strip() for value in values if value and value.strip()]
    if not cleaned:
        raise ValueError(f"Must specify at least one non-empty {kind}.")
    return cleaned


def _load(accessor: VaultAccessor, path: str) -> tuple[str, str]:
    note_path = normalize_note_path(path)
    return note_path, accessor.get_file_content(note_path)


def _write_if_changed(accessor: VaultAccessor, path: str, before: str, after: str) -> bool:
    if before == after:
        return False
    accessor.put_file_content(path, after)
    return True


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


def read_note(
    accessor: VaultAccessor,
    path: str,
    include_frontmatter: bool = True,
    include_stats: bool = False,
) -> dict[str, Any]:
    """Read a note, optionally with its parsed frontmatter and statistics.

    Args:
        accessor: Vault accessor.
        path: Note identifier.
        include_frontmatter: When True return the raw content and the parsed
            frontmatter; otherwise only the body.
        include_stats: When True add ``word_count`` and a short summary.

    Returns:
        Dictionary with path, content, and the optional frontmatter/stats entries.
    """
    note_path, content = _load(accessor, path)
    parsed = codec.parse_frontmatter(content)

    payload: dict[str, Any] = {"path": note_path}
    if include_frontmatter:
        payload["frontmatter"] = parsed.frontmatter
        payload["content"] = content
    else:
        payload["content"] = parsed.body

    if include_stats:
        payload["stats"] = {
            "word_count": count_words(content),
            "summary": summarize(content, NOTE_STATS_SUMMARY_LENGTH),
        }

    logger.info("Read note '%s' (stats=%s)", note_path, include_stats)
    return payload


def get_frontmatter(accessor: VaultAccessor, path: str) -> dict[str, Any]:
    note_path, content = _load(accessor, path)
    parsed = codec.parse_frontmatter(content)
    return {
        "path": note_path,
        "frontmatter": parsed.frontmatter,
        "has_frontmatter": parsed.has_frontmatter,
        "status": "read",
    }


def update_note_frontmatter(
    accessor: VaultAccessor,
    path: str,
    updates: dict[str, Any],
) -> dict[str, Any]:
    """Merge new fields into existing frontmatter.

    Args:
        accessor: Vault accessor.
        path: Note identifier.
        updates: Fields to set. Existing fields not mentioned are kept.

    Returns:
        Dictionary with path, status (``updated``/``unchanged``), and fields_updated.

    Raises:
        ValueError: If the updates contain unsupported keys or values.
    """
    if not isinstance(updates, dict):
        raise ValueError("Frontmatter update payload must be a dictionary.")

    sanitized = copy.deepcopy(updates)
    ensure_supported_frontmatter(sanitized)

    note_path, content = _load(accessor, path)
    current = codec.parse_frontmatter(content).frontmatter
    merged = {**current, **sanitized}
    # Compare rendered blocks: ``True == 1`` and ``1 == 1.0`` in Python.
    if codec.stringify_frontmatter(merged) == codec.stringify_frontmatter(current):
        logger.info("Frontmatter update skipped for note '%s' (no changes detected)", note_path)
        return {"path": note_path, "status": "unchanged", "fields_updated": []}

    ensure_supported_frontmatter(merged)
    accessor.put_file_content(note_path, codec.update_frontmatter(content, sanitized))
    changed_fields = sorted(sanitized)
    logger.info("Frontmatter updated for note '%s' (fields=%s)", note_path, ", ".join(changed_fields))
    return {"path": note_path, "status": "updated", "fields_updated": changed_fields}


def set_note_property(
    accessor: VaultAccessor,
    path: str,
    key: str,
    value: Any,
) -> dict[str, Any]:
    """Set or (with ``value=None``) remove a single frontmatter property."""
    if value is not None:
        ensure_supported_frontmatter({key: value})
    elif not key.strip():
        raise ValueError("Property name cannot be empty.")

    note_path, content = _load(accessor, path)
    updated = codec.set_frontmatter_property(content, key, value)
    changed = _write_if_changed(accessor, note_path, content, updated)
    logger.info("Property '%s' %s on note '%s'", key, "removed" if value is None else "set", note_path)
    return {
        "path": note_path,
        "property": key,
        "value": value,
        "status": ("removed" if value is None else "set") if changed else "unchanged",
    }


# ==============================================================================
# TAGS & ALIASES
# ==============================================================================


def get_note_tags(accessor: VaultAccessor, path: str) -> dict[str, Any]:
    """Return frontmatter and inline tags of a note."""
    note_path, content = _load(accessor, path)
    tags = codec.get_all_tags(content)
    return {"path": note_path, "tags": tags, "count": len(tags)}


def add_note_tags(accessor: VaultAccessor, path: str, tags: list[str]) -> dict[str, Any]:
    cleaned = _clean_labels(tags, "tag")
    note_path, content = _load(accessor, path)
    updated = codec.add_tags(content, cleaned)
    changed = _write_if_changed(accessor, note_path, content, updated)
    logger.info("Added tags %s to note '%s' (changed=%s)", cleaned, note_path, changed)
    return {
        "path": note_path,
        "tags_added": [tag.lstrip("#") for tag in cleaned],
        "tags": codec.get_all_tags(updated),
        "status": "updated" if changed else "unchanged",
    }


def remove_note_tags(accessor: VaultAccessor, path: str, tags: list[str]) -> dict[str, Any]:
    """Remove frontmatter tags (case-insensitive). Inline tags are left untouched."""
    cleaned = _clean_labels(tags, "tag")
    note_path, content = _load(accessor, path)
    updated = codec.remove_tags(content, cleaned)
    changed = _write_if_changed(accessor, note_path, content, updated)
    logger.info("Removed tags %s from note '%s' (changed=%s)", cleaned, note_path, changed)
    return {
        "path": note_path,
        "tags_removed": cleaned,
        "tags": codec.get_all_tags(updated),
        "status": "updated" if changed else "unchanged",
    }


def add_note_aliases(accessor: VaultAccessor, path: str, aliases: list[str]) -> dict[str, Any]:
    cleaned = _clean_labels(aliases, "alias")
    note_path, content = _load(accessor, path)
    updated = codec.add_aliases(content, cleaned)
    changed = _write_if_changed(accessor, note_path, content, updated)
    logger.info("Added aliases %s to note '%s' (changed=%s)", cleaned, note_path, changed)
    return {
        "path": note_path,
        "aliases": codec.get_frontmatter_field(updated, "aliases", []),
        "status": "updated" if changed else "unchanged",
    }


def vault_tag_census(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    folder: Optional[str] = None,
) -> dict[str, Any]:
    """Count how many notes use each tag, most used first."""
    snapshot = load_snapshot(accessor, folder, settings, read_cap=settings.tag_scan_cap)
    counts: Counter[str] = Counter()
    for note in snapshot.notes:
        counts.update(codec.get_all_tags(note.raw_content))

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    logger.info("Tag census of '%s': %d unique tags", folder or "/", len(ranked))
    return {
        "folder": folder or "/",
        "files_scanned": len(snapshot.notes),
        "unique_tags": len(ranked),
        "tags": [{"tag": tag, "count": count} for tag, count in ranked],
        "skipped": snapshot.skipped,
        "timed_out": snapshot.timed_out,
    }


# ==============================================================================
# STRUCTURE
# ==============================================================================


def get_note_outline(accessor: VaultAccessor, path: str) -> dict[str, Any]:
    """List body headings; line numbers count from the top of the file."""
    note_path, content = _load(accessor, path)
    parsed = codec.parse_frontmatter(content)
    offset = parsed.raw.count("\n")
    headings = []
    for heading in extract_headings(parsed.body):
        entry = heading.as_payload()
        entry["line"] += offset
        headings.append(entry)
    return {"path": note_path, "headings": headings}


def read_note_section(accessor: VaultAccessor, path: str, heading: str) -> dict[str, Any]:
    """Return the content under a heading.

    Raises:
        ValueError: If the heading does not exist in the note.
    """
    note_path, content = _load(accessor, path)
    section = section_under(codec.parse_frontmatter(content).body, heading)
    if section is None:
        raise ValueError(
            f"Heading '{heading}' not found in note '{note_path}'. "
            "Use `get_note_outline` to inspect the note structure."
        )
    return {"path": note_path, "heading": heading, "content": section}


def insert_note_content_under_heading(
    accessor: VaultAccessor,
    path: str,
    heading: str,
    content: str,
    position: Literal["start", "end"] = "end",
) -> dict[str, Any]:
    """Insert content into a heading's section, or append it when the heading is missing.

    Only the note body is searched and edited; the frontmatter block is kept as is.
    """
    note_path, original = _load(accessor, path)
    parsed = codec.parse_frontmatter(original)
    heading_found = section_under(parsed.body, heading) is not None
    updated = parsed.raw + insert_under_heading(parsed.body, heading, content, position)
    accessor.put_file_content(note_path, updated)
    logger.info(
        "Inserted content under heading '%s' in note '%s' (found=%s, position=%s)",
        heading,
        note_path,
        heading_found,
        position,
    )
    return {
        "path": note_path,
        "heading": heading,
        "heading_found": heading_found,
        "position": position,
        "status": "inserted" if heading_found else "appended",
    }
