"""Search and discovery MCP tools.

Content searches share the read cap, worker pool, and deadline of the link
analyses and report ``timed_out`` when the deadline cut the scan short.
"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from obsidian_notes.core import search_operations as ops
from obsidian_notes.models import (
    FindNotesByNameInput,
    RecentNotesInput,
    SearchByTagInput,
    SearchInFolderInput,
    SearchWithContextInput,
    SimpleSearchInput,
)
from obsidian_notes.session import VaultSession


def register_search_tools(mcp: FastMCP, session: VaultSession) -> None:
    """Register search tools on ``mcp``."""

    @mcp.tool()
    async def simple_search(
        input: SimpleSearchInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Search note contents for text (case-insensitive), ranked by match count.

        Args:
            input (SimpleSearchInput): Validated input containing:
                - query (str): Text to search for
                - folder (str, optional): Limit the search to a folder
                - limit (int): Maximum notes returned, 1-100 (default: 20)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {
                "vault": str,
                "query": str,
                "total_results": int,
                "showing": int,
                "results": [{"path": str, "match_count": int, "snippets": list[str]}],
                "notes_searched": int,
                "skipped": list[str],
                "truncated": bool,
                "timed_out": bool
            }

        Examples:
            - Use when: Looking for notes that mention a phrase
            - Workflow: simple_search() → read_note() on the best hit
            - Don't use: Filtering by tag → Use search_by_tag()

        Error Handling:
            - ValidationError: Empty query or limit out of range
            - Folder not found → Error with folder path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.simple_search(
            accessor,
            session.analysis,
            input.query,
            limit=input.limit,
            folder=input.folder,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def search_by_tag(
        input: SearchByTagInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Find notes tagged with all (or any) of the given tags.

        Both frontmatter ``tags`` and inline ``#tags`` count. Matching is
        case-insensitive and a leading '#' is optional.

        Args:
            input (SearchByTagInput): Validated input containing:
                - tags (list[str]): Tags to match
                - match_all (bool): Require every tag (default: True)
                - folder (str, optional): Limit the search to a folder
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "searched_tags": list[str], "match_mode": "all" | "any",
             "total_results": int, "results": list[str], ...}

        Error Handling:
            - ValidationError: No non-empty tag given
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.search_by_tag(
            accessor,
            session.analysis,
            input.tags,
            match_all=input.match_all,
            folder=input.folder,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def find_notes_by_name(
        input: FindNotesByNameInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Find notes by file name without reading their content.

        Returns:
            {"vault": str, "search_name": str, "match_mode": "exact" | "contains",
             "total_results": int, "results": list[str]}

        Examples:
            - Use when: You know roughly what a note is called
            - Don't use: Searching inside notes → Use simple_search()
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.find_notes_by_name(
            accessor,
            session.analysis,
            input.name,
            exact_match=input.exact_match,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def search_in_folder(
        input: SearchInFolderInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """List the notes of a folder, optionally filtered by content.

        Args:
            input (SearchInFolderInput): Validated input containing:
                - folder (str): Folder relative to the vault root
                - query (str, optional): Text the notes must contain
                - include_subfolders (bool): Recurse into subfolders (default: True)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "folder": str, "search_query": str,
             "include_subfolders": bool, "total_results": int, "results": list[str]}

        Error Handling:
            - Folder not found → Error with folder path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.search_in_folder(
            accessor,
            session.analysis,
            input.folder,
            query=input.query,
            include_subfolders=input.include_subfolders,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def get_recent_notes(
        input: RecentNotesInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Return the most recently modified notes, newest first.

        Returns:
            {"vault": str, "folder": str, "total_files": int, "showing": int,
             "results": [{"path": str, "modified": str}]}
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.get_recent_notes(
            accessor,
            session.analysis,
            folder=input.folder,
            limit=input.limit,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def search_with_context(
        input: SearchWithContextInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Search note contents and return a summary and the tags of each hit.

        ``score`` counts the occurrences of the query in the note.

        Args:
            input (SearchWithContextInput): Validated input containing:
                - query (str): Text to search for
                - context_length (int): Summary length, 50-500 (default: 150)
                - limit (int): Maximum notes returned, 1-20 (default: 10)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "query": str, "total_results": int, "showing": int,
             "results": [{"path": str, "score": int, "snippet": str, "tags": list[str]}], ...}

        Examples:
            - Use when: Deciding which of several matching notes to open
            - Don't use: Need the exact matching lines → Use simple_search()
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.search_with_context(
            accessor,
            session.analysis,
            input.query,
            context_length=input.context_length,
            limit=input.limit,
        )
        return {"vault": metadata.name, **payload}
