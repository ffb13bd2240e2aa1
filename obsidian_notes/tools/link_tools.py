"""Link analysis MCP tools.

Vault-wide scans are bounded by the ``analysis`` caps of the configuration and
report ``timed_out`` when the read deadline expired before every note was read.
"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from obsidian_notes.core import link_operations as ops
from obsidian_notes.models import (
    AddLinkInput,
    FindBrokenLinksInput,
    FindOrphanNotesInput,
    GetBacklinksInput,
    GetLinkGraphInput,
    GetOutgoingLinksInput,
)
from obsidian_notes.session import VaultSession


def register_link_tools(mcp: FastMCP, session: VaultSession) -> None:
    """Register link analysis tools on ``mcp``."""

    @mcp.tool()
    async def get_outgoing_links(
        input: GetOutgoingLinksInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """List the wikilinks, embeds, external links, and tags of a note.

        Args:
            input (GetOutgoingLinksInput): Validated input containing:
                - path (str): Note path (with or without .md)
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {
                "vault": str,
                "path": str,
                "internal_links": [{"target": str, "display_text": str, "is_embed": bool}],
                "external_links": [{"url": str, "display_text": str}],
                "tags": list[str],
                "total_links": int
            }

        Examples:
            - Use when: Following what a note references
            - Don't use: Who references this note → Use get_backlinks()

        Error Handling:
            - Note not found → NoteNotFoundError with the note path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.get_outgoing_links(accessor, input.path)}

    @mcp.tool()
    async def get_backlinks(
        input: GetBacklinksInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Find notes that link to the given note.

        Links match by bare note name, by full vault path, or by a trailing path
        suffix. Set ``include_context`` to get the lines around each link.

        Args:
            input (GetBacklinksInput): Validated input containing:
                - path (str): Note being linked to
                - include_context (bool): Add surrounding lines (default: False)
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "target": str, "backlinks_count": int,
             "backlinks": [{"source": str, "link_count": int, "contexts": list[str]}],
             "notes_checked": int, "truncated": bool, "timed_out": bool, ...}

        Examples:
            - Use when: Checking what depends on a note before renaming it
            - Workflow: get_backlinks() → read_note() on each source
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.find_backlinks(
            accessor,
            input.path,
            session.analysis,
            include_context=input.include_context,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def find_broken_links(
        input: FindBrokenLinksInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Report wikilinks whose target note does not exist (checks up to 200 notes).

        A link resolves when it names an existing note or attachment, either by
        its full path, by its bare name, or by a trailing part of its path such
        as ``[[sub/Note]]`` for ``folder/sub/Note.md``.

        Args:
            input (FindBrokenLinksInput): Validated input containing:
                - folder (str, optional): Limit the scan to a folder
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "folder": str, "files_checked": int, "broken_links_count": int,
             "broken_links": [{"source": str, "target": str}], "skipped": list[str],
             "truncated": bool, "timed_out": bool, ...}

        Error Handling:
            - Folder not found → NoteNotFoundError with the folder path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.find_broken_links(accessor, session.analysis, folder=input.folder)
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def find_orphan_notes(
        input: FindOrphanNotesInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Report notes that no other note links to (checks up to 300 notes).

        By default only orphans with outgoing links are listed. Set
        ``include_unlinked`` to also list completely isolated notes. At most 100
        orphans are returned.

        Returns:
            {"vault": str, "folder": str, "include_unlinked": bool, "total_notes": int,
             "notes_checked": int, "orphan_count": int,
             "orphans": [{"path": str, "has_outgoing_links": bool}], "truncated": bool, ...}

        Examples:
            - Use when: Tidying a vault and looking for forgotten notes
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.find_orphan_notes(
            accessor,
            session.analysis,
            folder=input.folder,
            include_unlinked=input.include_unlinked,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def get_link_graph_data(
        input: GetLinkGraphInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Export nodes and edges of the note link graph for visualization.

        Args:
            input (GetLinkGraphInput): Validated input containing:
                - folder (str, optional): Limit the graph to a folder
                - max_notes (int): Notes to include, 1-500 (default: 100)
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "folder": str, "node_count": int, "edge_count": int,
             "nodes": [{"id": str, "label": str}],
             "edges": [{"source": str, "target": str}], ...}

        Error Handling:
            - ValidationError: max_notes outside 1-500
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.get_link_graph_data(
            accessor,
            session.analysis,
            folder=input.folder,
            max_notes=input.max_notes,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def add_link_to_note(
        input: AddLinkInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Add a [[wikilink]] to the end of a note, or right after its frontmatter.

        Args:
            input (AddLinkInput): Validated input containing:
                - path (str): Note that receives the link
                - target (str): Note to link to, e.g. "Projects/Alpha"
                - display_text (str, optional): Alias shown instead of the target
                - position (str): "append" (default) or "prepend"
                - as_list_item (bool): Write the link as "- [[...]]" (default: False)
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "source": str, "target": str, "link": str,
             "position": "append" | "prepend", "status": "link_added"}

        Examples:
            - Use when: Adding a "related" link between two notes
            - Don't use: Link belongs under a heading → Use insert_under_heading()

        Error Handling:
            - Source note not found → NoteNotFoundError
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.add_link_to_note(
            accessor,
            input.path,
            input.target,
            display_text=input.display_text,
            position=input.position,
            as_list_item=input.as_list_item,
        )
        return {"vault": metadata.name, **payload}
