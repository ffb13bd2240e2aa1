"""Link analysis operations exposed to MCP tools."""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from obsidian_notes.constants import DEFAULT_GRAPH_NOTES, MAX_GRAPH_NOTES
from obsidian_notes.core.frontmatter_codec import parse_frontmatter
from obsidian_notes.core.link_graph import (
    Note,
    VaultSnapshot,
    backlinks,
    broken_links,
    build_snapshot,
    graph_export,
    orphan_notes,
    outgoing_links,
)
from obsidian_notes.core.markdown_structure import create_wikilink
from obsidian_notes.core.vault_operations import (
    VaultAccessor,
    normalize_note_path,
    strip_markdown_suffix,
)
from obsidian_notes.data_models import AnalysisSettings

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def load_snapshot(
    accessor: VaultAccessor,
    folder: Optional[str],
    settings: AnalysisSettings,
    read_cap: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> VaultSnapshot:
    """Build a snapshot using the configured depth, worker and deadline limits."""
    return build_snapshot(
        accessor,
        (folder or "").strip("/"),
        max_depth=min(max_depth or settings.max_depth, settings.max_depth),
        read_cap=min(read_cap or settings.read_cap, settings.read_cap),
        max_workers=settings.max_workers,
        timeout=settings.read_timeout,
    )


def _snapshot_payload(snapshot: VaultSnapshot) -> dict[str, Any]:
    return {
        "notes_listed": len(snapshot.paths),
        "notes_read": len(snapshot.notes),
        "timed_out": snapshot.timed_out,
    }


# ==============================================================================
# LINK OPERATIONS
# ==============================================================================


def get_outgoing_links(accessor: VaultAccessor, path: str) -> dict[str, Any]:
    """Return internal links, external links, and tags of a single note.

    Raises:
        NoteNotFoundError: If the note does not exist.
    """
    note_path = normalize_note_path(path)
    note = Note.from_content(note_path, accessor.get_file_content(note_path))
    payload = outgoing_links(note).as_payload()
    logger.info("Collected %d outgoing links from '%s'", payload["total_links"], note_path)
    return payload


def find_backlinks(
    accessor: VaultAccessor,
    path: str,
    settings: AnalysisSettings,
    include_context: bool = False,
) -> dict[str, Any]:
    """Scan the vault for notes linking to ``path``."""
    note_path = normalize_note_path(path)
    snapshot = load_snapshot(accessor, None, settings)
    report = backlinks(note_path, snapshot, include_context=include_context)
    logger.info("Found %d backlinks to '%s'", len(report.backlinks), note_path)
    return {**report.as_payload(include_context=include_context), **_snapshot_payload(snapshot)}


def find_broken_links(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    folder: Optional[str] = None,
) -> dict[str, Any]:
    """Report wikilinks that point at notes missing from the vault."""
    snapshot = load_snapshot(accessor, folder, settings, read_cap=settings.broken_link_scan_cap)
    report = broken_links(snapshot, scan_cap=settings.broken_link_scan_cap)
    logger.info(
        "Broken link scan of '%s': %d files checked, %d broken",
        folder or "/",
        report.files_checked,
        len(report.broken_links),
    )
    return {"folder": folder or "/", **report.as_payload(), **_snapshot_payload(snapshot)}


def find_orphan_notes(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    folder: Optional[str] = None,
    include_unlinked: bool = False,
) -> dict[str, Any]:
    """Report notes that no other note links to."""
    snapshot = load_snapshot(accessor, folder, settings, read_cap=settings.orphan_scan_cap)
    report = orphan_notes(
        snapshot,
        include_unlinked=include_unlinked,
        scan_cap=settings.orphan_scan_cap,
    )
    logger.info(
        "Orphan scan of '%s': %d of %d notes are orphans",
        folder or "/",
        len(report.orphans),
        report.total_notes,
    )
    return {
        "folder": folder or "/",
        "include_unlinked": include_unlinked,
        **report.as_payload(),
        **_snapshot_payload(snapshot),
    }


def get_link_graph_data(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    folder: Optional[str] = None,
    max_notes: int = DEFAULT_GRAPH_NOTES,
) -> dict[str, Any]:
    """Return nodes and edges for graph visualization.

    Raises:
        ValueError: If ``max_notes`` is outside ``1..500``.
    """
    if not 1 <= max_notes <= MAX_GRAPH_NOTES:
        raise ValueError(f"max_notes must be between 1 and {MAX_GRAPH_NOTES}.")

    snapshot = load_snapshot(accessor, folder, settings, read_cap=max_notes)
    report = graph_export(snapshot, max_notes=max_notes)
    logger.info(
        "Graph of '%s': %d nodes, %d edges",
        folder or "/",
        len(report.nodes),
        len(report.edges),
    )
    return {"folder": folder or "/", **report.as_payload(), **_snapshot_payload(snapshot)}


def add_link_to_note(
    accessor: VaultAccessor,
    source: str,
    target: str,
    display_text: Optional[str] = None,
    position: Literal["append", "prepend"] = "append",
    as_list_item: bool = False,
) -> dict[str, Any]:
    """Add a ``[[wikilink]]`` to ``target`` at the start or end of ``source``.

    Prepending keeps an existing frontmatter block at the top of the note.

    Raises:
        NoteNotFoundError: If the source note does not exist.
    """
    source_path = normalize_note_path(source)
    target_note = strip_markdown_suffix(target.strip())
    wikilink = create_wikilink(target_note, display_text)
    line = f"- {wikilink}" if as_list_item else wikilink

    content = accessor.get_file_content(source_path)
    if position == "prepend":
        parsed = parse_frontmatter(content)
        updated = f"{parsed.raw}{line}\n{parsed.body}"
    else:
        separator = "" if not content or content.endswith("\n") else "\n"
        updated = f"{content}{separator}{line}\n"

    accessor.put_file_content(source_path, updated)
    logger.info("Added link %s to '%s' (%s)", wikilink, source_path, position)
    return {
        "source": source_path,
        "target": target_note,
        "link": wikilink,
        "position": position,
        "status": "link_added",
    }
