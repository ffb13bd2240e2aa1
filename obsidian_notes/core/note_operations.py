"""Note lifecycle operations: create, rewrite, append, prepend, replace, copy, delete."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Literal, Optional

from obsidian_notes.core import frontmatter_codec as codec
from obsidian_notes.core.markdown_structure import (
    insert_after_text,
    insert_before_text,
    iter_lines,
)
from obsidian_notes.core.metadata_operations import ensure_supported_frontmatter
from obsidian_notes.core.vault_operations import (
    NoteNotFoundError,
    VaultAccessor,
    normalize_note_path,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _combine_with_newline(left: str, right: str) -> str:
    """Concatenate two strings with at most one newline between them."""
    if not left:
        return right
    if not right:
        return left
    if not left.endswith("\n") and not right.startswith("\n"):
        return f"{left}\n{right}"
    return left + right


def _timestamp() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _require_note(accessor: VaultAccessor, path: str) -> tuple[str, str]:
    note_path = normalize_note_path(path)
    return note_path, accessor.get_file_content(note_path)


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


def create_note(
    accessor: VaultAccessor,
    path: str,
    content: str,
    frontmatter: Optional[dict[str, Any]] = None,
    overwrite: bool = False,
) -> dict[str, Any]:
    """Create a note, writing ``frontmatter`` above ``content``.

    A ``created`` timestamp is added to the frontmatter unless one is supplied.
    Parent folders are created as needed.

    Args:
        accessor: Vault accessor.
        path: Note identifier for the new note.
        content: Markdown body.
        frontmatter: Optional properties (scalars or lists of scalars).
        overwrite: Replace an existing note instead of failing.

    Returns:
        Dictionary with the note path, the written frontmatter, and status.

    Raises:
        FileExistsError: If the note exists and ``overwrite`` is False.
        ValueError: If the frontmatter contains unsupported keys or values.
    """
    note_path = normalize_note_path(path)
    if not overwrite and accessor.exists(note_path):
        raise FileExistsError(
            f"Note '{note_path}' already exists. Set overwrite=True to replace it."
        )

    metadata = dict(frontmatter or {})
    if not metadata.get("created"):
        metadata["created"] = _timestamp()
    ensure_supported_frontmatter(metadata)

    accessor.put_file_content(note_path, codec.stringify_frontmatter(metadata) + content)
    logger.info("Created note '%s' (overwrite=%s)", note_path, overwrite)
    return {"path": note_path, "frontmatter": metadata, "status": "created"}


def update_note(
    accessor: VaultAccessor,
    path: str,
    content: str,
    preserve_frontmatter: bool = True,
    update_modified: bool = True,
) -> dict[str, Any]:
    """Replace the body of an existing note.

    With ``preserve_frontmatter`` the existing properties are written back above
    the new content, and ``update_modified`` stamps a ``modified`` property.
    Notes without frontmatter are not given one.

    Raises:
        NoteNotFoundError: If the note does not exist.
    """
    note_path, existing = _require_note(accessor, path)

    final = content
    if preserve_frontmatter:
        properties = dict(codec.parse_frontmatter(existing).frontmatter)
        if properties:
            if update_modified:
                properties["modified"] = _timestamp()
            final = codec.stringify_frontmatter(properties) + content

    accessor.put_file_content(note_path, final)
    logger.info("Updated note '%s' (preserve_frontmatter=%s)", note_path, preserve_frontmatter)
    return {"path": note_path, "status": "updated"}


def append_to_note(
    accessor: VaultAccessor,
    path: str,
    content: str,
    ensure_newline: bool = True,
    create_if_missing: bool = False,
) -> dict[str, Any]:
    """Append content to the end of a note.

    Raises:
        NoteNotFoundError: If the note does not exist and ``create_if_missing`` is False.
    """
    note_path = normalize_note_path(path)
    if not accessor.exists(note_path):
        if not create_if_missing:
            raise NoteNotFoundError(
                f"Note '{note_path}' not found. Set create_if_missing=True to create it."
            )
        accessor.put_file_content(note_path, content)
        logger.info("Created note '%s' from appended content", note_path)
        return {"path": note_path, "status": "created"}

    existing = accessor.get_file_content(note_path)
    updated = _combine_with_newline(existing, content) if ensure_newline else existing + content
    accessor.put_file_content(note_path, updated)
    logger.info("Appended content to note '%s'", note_path)
    return {"path": note_path, "status": "appended"}


def prepend_to_note(
    accessor: VaultAccessor,
    path: str,
    content: str,
    ensure_newline: bool = True,
) -> dict[str, Any]:
    """Insert content at the top of the note body, below any frontmatter."""
    note_path, existing = _require_note(accessor, path)
    parsed = codec.parse_frontmatter(existing)
    addition = content
    if ensure_newline and not content.endswith("\n"):
        addition = f"{content}\n"

    accessor.put_file_content(note_path, parsed.raw + addition + parsed.body)
    logger.info("Prepended content to note '%s'", note_path)
    return {"path": note_path, "status": "prepended"}


def replace_in_note(
    accessor: VaultAccessor,
    path: str,
    find: str,
    replace: str,
    replace_all: bool = False,
) -> dict[str, Any]:
    """Replace literal text in a note.

    Raises:
        ValueError: If ``find`` is empty or does not occur in the note.
        NoteNotFoundError: If the note does not exist.
    """
    if not find:
        raise ValueError("Text to find cannot be empty.")

    note_path, existing = _require_note(accessor, path)
    occurrences = existing.count(find)
    if not occurrences:
        raise ValueError(f"Text not found in note '{note_path}'.")

    if replace_all:
        updated = existing.replace(find, replace)
        replacements = occurrences
    else:
        updated = existing.replace(find, replace, 1)
        replacements = 1

    accessor.put_file_content(note_path, updated)
    logger.info("Replaced %d occurrence(s) in note '%s'", replacements, note_path)
    return {"path": note_path, "replacements": replacements, "status": "replaced"}


def insert_relative_to_text(
    accessor: VaultAccessor,
    path: str,
    target_text: str,
    content: str,
    position: Literal["after", "before"] = "after",
) -> dict[str, Any]:
    """Insert a line after or before the first body line containing ``target_text``.

    When no line matches, the content is appended (``after``) or placed at the
    top of the body (``before``). Frontmatter is never searched or edited.
    """
    if not target_text:
        raise ValueError("Target text cannot be empty.")

    note_path, existing = _require_note(accessor, path)
    parsed = codec.parse_frontmatter(existing)
    found = any(target_text in line for line in iter_lines(parsed.body))

    if position == "before":
        body = insert_before_text(parsed.body, target_text, content)
    else:
        body = insert_after_text(parsed.body, target_text, content)
    accessor.put_file_content(note_path, parsed.raw + body)

    if found:
        status = "inserted"
    else:
        status = "prepended" if position == "before" else "appended"
    logger.info("Inserted content %s '%s' in note '%s' (found=%s)", position, target_text, note_path, found)
    return {"path": note_path, "target_found": found, "position": position, "status": status}


def copy_note(
    accessor: VaultAccessor,
    source: str,
    destination: str,
    overwrite: bool = False,
) -> dict[str, Any]:
    """Copy a note's full content to a new path.

    Raises:
        NoteNotFoundError: If the source note does not exist.
        FileExistsError: If the destination exists and ``overwrite`` is False.
        ValueError: If source and destination are the same note.
    """
    source_path = normalize_note_path(source)
    destination_path = normalize_note_path(destination)
    if source_path == destination_path:
        raise ValueError("Source and destination must be different notes.")

    content = accessor.get_file_content(source_path)
    if not overwrite and accessor.exists(destination_path):
        raise FileExistsError(
            f"Destination '{destination_path}' already exists. Set overwrite=True to replace it."
        )

    accessor.put_file_content(destination_path, content)
    logger.info("Copied note '%s' to '%s'", source_path, destination_path)
    return {"source": source_path, "destination": destination_path, "status": "copied"}


def delete_note(accessor: VaultAccessor, path: str, confirm: bool = False) -> dict[str, Any]:
    """Permanently delete a note.

    Raises:
        ValueError: If ``confirm`` is not True.
        NoteNotFoundError: If the note does not exist.
    """
    note_path = normalize_note_path(path)
    if not confirm:
        raise ValueError(f"Deletion of '{note_path}' not confirmed. Set confirm=True to delete it.")

    accessor.delete_file(note_path)
    logger.info("Deleted note '%s'", note_path)
    return {"path": note_path, "status": "deleted"}
