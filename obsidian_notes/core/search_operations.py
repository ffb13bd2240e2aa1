"""Search and discovery operations for notes.

Content searches read notes through :func:`load_snapshot`, so they obey the
same read cap, worker pool, and deadline as the link analyses. Name searches
only list the vault and never read note content.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from obsidian_notes.constants import (
    CONTEXT_RESULT_LIMIT,
    CONTEXT_SNIPPET_LENGTH,
    RECENT_NOTES_LIMIT,
    SEARCH_RESULT_LIMIT,
    SEARCH_SNIPPETS_PER_NOTE,
    SNIPPET_CONTEXT_CHARS,
)
from obsidian_notes.core import frontmatter_codec as codec
from obsidian_notes.core.link_graph import VaultSnapshot
from obsidian_notes.core.link_operations import load_snapshot
from obsidian_notes.core.markdown_structure import summarize
from obsidian_notes.core.vault_operations import VaultAccessor, note_name, strip_markdown_suffix
from obsidian_notes.data_models import AnalysisSettings

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _clean_query(query: str) -> str:
    trimmed = query.strip()
    if not trimmed:
        raise ValueError("Search query cannot be empty.")
    return trimmed


def _match_positions(text: str, query: str) -> list[int]:
    """Return the start offsets of every case-insensitive occurrence of ``query``."""
    text_lower = text.lower()
    query_lower = query.lower()
    positions: list[int] = []
    start = 0
    while True:
        index = text_lower.find(query_lower, start)
        if index == -1:
            return positions
        positions.append(index)
        start = index + len(query_lower)


def _snippets(text: str, positions: list[int], query_length: int) -> list[str]:
    snippets: list[str] = []
    for position in positions[:SEARCH_SNIPPETS_PER_NOTE]:
        start = max(0, position - SNIPPET_CONTEXT_CHARS)
        end = min(len(text), position + query_length + SNIPPET_CONTEXT_CHARS)
        snippet = text[start:end]
        if start > 0:
            snippet = "..." + snippet
        if end < len(text):
            snippet = snippet + "..."
        snippets.append(snippet)
    return snippets


def _scan_payload(snapshot: VaultSnapshot) -> dict[str, Any]:
    return {
        "notes_searched": len(snapshot.notes),
        "skipped": snapshot.skipped,
        "truncated": snapshot.truncated,
        "timed_out": snapshot.timed_out,
    }


def _markdown_paths(accessor: VaultAccessor, folder: str, max_depth: int) -> list[str]:
    return [
        item.path
        for item in accessor.list_all_files(folder.strip("/"), max_depth)
        if item.type == "file" and (item.extension or "").lower() == "md"
    ]


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def simple_search(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    query: str,
    limit: int = SEARCH_RESULT_LIMIT,
    folder: Optional[str] = None,
) -> dict[str, Any]:
    """Case-insensitive text search across note contents.

    Each result carries the match count and up to three snippets with 100
    characters of context on each side. Results are ordered by match count,
    then by listing order.

    Raises:
        ValueError: If the query is empty or whitespace.
    """
    trimmed = _clean_query(query)
    snapshot = load_snapshot(accessor, folder, settings)

    results: list[dict[str, Any]] = []
    for note in snapshot.notes:
        positions = _match_positions(note.raw_content, trimmed)
        if not positions:
            continue
        results.append(
            {
                "path": note.path,
                "match_count": len(positions),
                "snippets": _snippets(note.raw_content, positions, len(trimmed)),
            }
        )

    results.sort(key=lambda item: item["match_count"], reverse=True)
    logger.info("Text search for '%s' matched %d notes", trimmed, len(results))
    return {
        "query": trimmed,
        "total_results": len(results),
        "showing": min(limit, len(results)),
        "results": results[:limit],
        **_scan_payload(snapshot),
    }


def search_by_tag(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    tags: list[str],
    match_all: bool = True,
    folder: Optional[str] = None,
) -> dict[str, Any]:
    """Find notes carrying the given tags in frontmatter or inline.

    Tags compare case-insensitively and a leading ``#`` is ignored.

    Raises:
        ValueError: If no non-empty tag is given.
    """
    wanted = [tag.strip().lstrip("#") for tag in tags if tag and tag.strip().lstrip("#")]
    if not wanted:
        raise ValueError("Must specify at least one non-empty tag.")
    wanted_lower = [tag.lower() for tag in wanted]

    snapshot = load_snapshot(accessor, folder, settings, read_cap=settings.tag_scan_cap)
    matches: list[str] = []
    for note in snapshot.notes:
        note_tags = {tag.lower() for tag in codec.get_all_tags(note.raw_content)}
        if not note_tags:
            continue
        check = all if match_all else any
        if check(tag in note_tags for tag in wanted_lower):
            matches.append(note.path)

    logger.info("Tag search %s (%s) matched %d notes", wanted, "all" if match_all else "any", len(matches))
    return {
        "searched_tags": wanted,
        "match_mode": "all" if match_all else "any",
        "total_results": len(matches),
        "results": matches,
        **_scan_payload(snapshot),
    }


def find_notes_by_name(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    name: str,
    exact_match: bool = False,
) -> dict[str, Any]:
    """Find notes whose file name contains (or, with ``exact_match``, equals) ``name``.

    Matching is case-insensitive and ignores the ``.md`` suffix.

    Raises:
        ValueError: If ``name`` is empty.
    """
    wanted = strip_markdown_suffix(_clean_query(name)).lower()
    matches = []
    for path in _markdown_paths(accessor, "", settings.max_depth):
        candidate = note_name(path).lower()
        if candidate == wanted or (not exact_match and wanted in candidate):
            matches.append(path)

    return {
        "search_name": name.strip(),
        "match_mode": "exact" if exact_match else "contains",
        "total_results": len(matches),
        "results": matches,
    }


def search_in_folder(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    folder: str,
    query: Optional[str] = None,
    include_subfolders: bool = True,
) -> dict[str, Any]:
    """List the notes of a folder, optionally only those whose content contains ``query``.

    Raises:
        NoteNotFoundError: If the folder does not exist.
    """
    max_depth = settings.max_depth if include_subfolders else 1
    trimmed = query.strip() if query else ""

    if not trimmed:
        results = _markdown_paths(accessor, folder, max_depth)
        scan: dict[str, Any] = {}
    else:
        snapshot = load_snapshot(accessor, folder, settings, max_depth=max_depth)
        results = [note.path for note in snapshot.notes if _match_positions(note.raw_content, trimmed)]
        scan = _scan_payload(snapshot)

    logger.info("Folder search in '%s' for '%s' matched %d notes", folder, trimmed, len(results))
    return {
        "folder": folder,
        "search_query": trimmed or "(all files)",
        "include_subfolders": include_subfolders,
        "total_results": len(results),
        "results": results,
        **scan,
    }


def get_recent_notes(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    folder: Optional[str] = None,
    limit: int = RECENT_NOTES_LIMIT,
) -> dict[str, Any]:
    """Return the most recently modified notes, newest first."""
    entries: list[dict[str, Any]] = []
    for path in _markdown_paths(accessor, folder or "", settings.max_depth):
        try:
            metadata = accessor.get_file_metadata(path)
        except OSError as exc:
            logger.debug("Skipping '%s' while sorting by recency: %s", path, exc)
            continue
        entries.append({"path": path, "modified": metadata["modified"]})

    entries.sort(key=lambda item: item["modified"], reverse=True)
    return {
        "folder": folder or "/",
        "total_files": len(entries),
        "showing": min(limit, len(entries)),
        "results": entries[:limit],
    }


def search_with_context(
    accessor: VaultAccessor,
    settings: AnalysisSettings,
    query: str,
    context_length: int = CONTEXT_SNIPPET_LENGTH,
    limit: int = CONTEXT_RESULT_LIMIT,
) -> dict[str, Any]:
    """Search note contents and describe each hit with a summary and its tags.

    ``score`` is the number of case-insensitive occurrences of the query.

    Raises:
        ValueError: If the query is empty or whitespace.
    """
    trimmed = _clean_query(query)
    snapshot = load_snapshot(accessor, None, settings)

    hits = []
    for note in snapshot.notes:
        score = len(_match_positions(note.raw_content, trimmed))
        if score:
            hits.append((score, note))
    hits.sort(key=lambda hit: hit[0], reverse=True)

    results = [
        {
            "path": note.path,
            "score": score,
            "snippet": summarize(note.body, context_length),
            "tags": codec.get_all_tags(note.raw_content),
        }
        for score, note in hits[:limit]
    ]
    logger.info("Context search for '%s' matched %d notes", trimmed, len(hits))
    return {
        "query": trimmed,
        "total_results": len(hits),
        "showing": len(results),
        "results": results,
        **_scan_payload(snapshot),
    }
