"""Folder listing, structure, and file statistics for a vault."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Optional

from obsidian_notes.constants import (
    DEFAULT_MAX_DEPTH,
    FILE_STATS_MAX_DEPTH,
    LIST_DIRECTORY_LIMIT,
    LIST_FILE_LIMIT,
    STRUCTURE_MAX_DEPTH,
)
from obsidian_notes.core.vault_operations import VaultAccessor, VaultItem

logger = logging.getLogger(__name__)

NO_EXTENSION = "no-extension"


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _clean_folder(path: Optional[str]) -> str:
    return (path or "").strip().strip("/")


def _extension_counts(files: list[VaultItem]) -> Counter[str]:
    return Counter(item.extension or NO_EXTENSION for item in files)


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0] if "/" in path else ""


def _format_tree(children: dict[str, list[str]], parent: str, prefix: str, lines: list[str]) -> None:
    """Render the directories under ``parent`` with box-drawing connectors."""
    entries = children.get(parent, [])
    for index, path in enumerate(entries):
        is_last = index == len(entries) - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{path.rsplit('/', 1)[-1]}/")
        _format_tree(children, path, prefix + ("    " if is_last else "│   "), lines)


# ==============================================================================
# FOLDER OPERATIONS
# ==============================================================================


def list_folder(accessor: VaultAccessor, path: Optional[str] = None) -> dict[str, Any]:
    """List the immediate files and subfolders of a folder.

    Raises:
        NoteNotFoundError: If the folder does not exist.
    """
    folder = _clean_folder(path)
    items = accessor.list_all_files(folder, 1)
    directories = [item.path for item in items if item.type == "directory"]
    files = [item.path for item in items if item.type == "file"]
    return {
        "path": folder or "/",
        "directories": directories,
        "files": files,
        "total_items": len(items),
    }


def list_all_files_report(
    accessor: VaultAccessor,
    path: Optional[str] = None,
    extensions: Optional[list[str]] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> dict[str, Any]:
    """Recursively list files, optionally keeping only the given extensions.

    Extensions compare case-insensitively and may be given with or without a
    leading dot. Directories are always listed. At most 100 directories and
    200 files are returned; ``truncated`` is set when more exist.
    """
    folder = _clean_folder(path)
    items = accessor.list_all_files(folder, max_depth)
    wanted = {ext.strip().lstrip(".").lower() for ext in extensions or [] if ext.strip().lstrip(".")}

    directories = [item.path for item in items if item.type == "directory"]
    files = [
        item
        for item in items
        if item.type == "file" and (not wanted or (item.extension or "").lower() in wanted)
    ]
    truncated = len(directories) > LIST_DIRECTORY_LIMIT or len(files) > LIST_FILE_LIMIT
    if truncated:
        logger.info(
            "Listing of '%s' truncated: %d directories, %d files",
            folder or "/",
            len(directories),
            len(files),
        )

    return {
        "base_path": folder or "/",
        "total_directories": len(directories),
        "total_files": len(files),
        "extension_counts": dict(_extension_counts(files)),
        "directories": directories[:LIST_DIRECTORY_LIMIT],
        "files": [
            {"path": item.path, "extension": item.extension}
            for item in files[:LIST_FILE_LIMIT]
        ],
        "truncated": truncated,
    }


def get_vault_structure(
    accessor: VaultAccessor,
    path: Optional[str] = None,
    max_depth: int = STRUCTURE_MAX_DEPTH,
) -> dict[str, Any]:
    """Render the folder tree (directories only) as indented text.

    Returns:
        Dictionary with the base path, the directory count, and ``tree``, a
        string such as::

            ├── Projects/
            │   └── Alpha/
            └── Journal/
    """
    folder = _clean_folder(path)
    directories = [
        item.path for item in accessor.list_all_files(folder, max_depth) if item.type == "directory"
    ]

    children: dict[str, list[str]] = {}
    for directory in directories:
        children.setdefault(_parent(directory), []).append(directory)

    lines: list[str] = []
    _format_tree(children, folder, "", lines)
    return {
        "path": folder or "/",
        "total_directories": len(directories),
        "tree": "\n".join(lines) if lines else "(empty)",
    }


def get_file_stats(accessor: VaultAccessor, path: Optional[str] = None) -> dict[str, Any]:
    """Count files and folders, with a per-extension breakdown sorted by count."""
    folder = _clean_folder(path)
    items = accessor.list_all_files(folder, FILE_STATS_MAX_DEPTH)
    files = [item for item in items if item.type == "file"]
    counts = _extension_counts(files)
    markdown = counts.get("md", 0)

    return {
        "path": folder or "/",
        "statistics": {
            "total_files": len(files),
            "total_directories": len(items) - len(files),
            "markdown_notes": markdown,
            "other_files": len(files) - markdown,
        },
        "by_extension": dict(counts.most_common()),
    }
