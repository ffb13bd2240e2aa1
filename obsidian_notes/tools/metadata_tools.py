"""Note, frontmatter, tag, and section MCP tools.

All tools delegate to core operations in obsidian_notes.core.metadata_operations
and prefix their payload with the resolved vault name.
"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from obsidian_notes.core import metadata_operations as ops
from obsidian_notes.models import (
    AddAliasesInput,
    GetFrontmatterInput,
    GetTagsInput,
    InsertUnderHeadingInput,
    NoteOutlineInput,
    ReadNoteInput,
    ReadSectionInput,
    SetPropertyInput,
    TagsInput,
    UpdateFrontmatterInput,
    VaultTagsInput,
)
from obsidian_notes.session import VaultSession


def register_metadata_tools(mcp: FastMCP, session: VaultSession) -> None:
    """Register note reading, frontmatter, tag, and section tools on ``mcp``."""

    # ==========================================================================
    # NOTES & FRONTMATTER
    # ==========================================================================

    @mcp.tool()
    async def read_note(
        input: ReadNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Read a note with its parsed frontmatter and optional statistics.

        Args:
            input (ReadNoteInput): Validated input containing:
                - path (str): Note path (with or without .md)
                - include_frontmatter (bool): False returns only the body
                - include_stats (bool): Add word_count and a 150-character summary
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "content": str, "frontmatter": dict, "stats": dict}

        Error Handling:
            - Note not found → NoteNotFoundError with the note path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.read_note(
            accessor,
            input.path,
            include_frontmatter=input.include_frontmatter,
            include_stats=input.include_stats,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def get_frontmatter(
        input: GetFrontmatterInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Read frontmatter properties without the markdown body.

        Args:
            input (GetFrontmatterInput): Validated input containing:
                - path (str): Note path (with or without .md)
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "frontmatter": dict, "has_frontmatter": bool, "status": "read"}

        Examples:
            - Use when: Checking status, tags, or dates without loading the whole note
            - Don't use: Need the body too → Use read_note()

        Error Handling:
            - Note not found → NoteNotFoundError with the note path
            - Unparseable frontmatter → empty frontmatter, has_frontmatter False
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.get_frontmatter(accessor, input.path)}

    @mcp.tool()
    async def update_frontmatter(
        input: UpdateFrontmatterInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Merge new fields into a note's frontmatter, creating the block when missing.

        Fields not mentioned are preserved and lists replace existing lists.
        The note is only rewritten when the rendered frontmatter changes, so a
        value changing type (1 → true) counts as an update.

        Args:
            input (UpdateFrontmatterInput): Validated input containing:
                - path (str): Note path (with or without .md)
                - frontmatter (dict): Fields to upsert; scalars or lists of scalars
                - vault (str, optional): Target vault (omit to use active vault)

        Examples:
            - Use when: Marking a note done ({"status": "done"})
            - Use when: Replacing a note's tag list
            - Don't use: Adding one tag to the existing list → Use add_tags()

        Returns:
            {"vault": str, "path": str, "status": "updated" | "unchanged", "fields_updated": list[str]}

        Error Handling:
            - Nested mappings or unsupported types → ValueError with the field name
            - Frontmatter too large (>10KB) → ValueError
            - Note not found → NoteNotFoundError
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.update_note_frontmatter(accessor, input.path, input.frontmatter)
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def set_frontmatter_property(
        input: SetPropertyInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Set one frontmatter property, or remove it by passing a null value.

        Returns:
            {"vault": str, "path": str, "property": str, "value": Any,
             "status": "set" | "removed" | "unchanged"}

        Error Handling:
            - Unsupported value type → ValueError naming the property
            - Note not found → NoteNotFoundError
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.set_note_property(accessor, input.path, input.key, input.value)
        return {"vault": metadata.name, **payload}

    # ==========================================================================
    # TAGS & ALIASES
    # ==========================================================================

    @mcp.tool()
    async def get_tags(
        input: GetTagsInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """List a note's tags: frontmatter tags first, then inline #tags.

        Returns:
            {"vault": str, "path": str, "tags": list[str], "count": int}

        Examples:
            - Use when: Deciding which tags to add or remove
            - Don't use: Vault-wide tag counts → Use get_all_tags_in_vault()
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.get_note_tags(accessor, input.path)}

    @mcp.tool()
    async def add_tags(
        input: TagsInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Add tags to the note's frontmatter. Existing tags are not duplicated.

        Returns:
            {"vault": str, "path": str, "tags_added": list[str], "tags": list[str],
             "status": "updated" | "unchanged"}
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.add_note_tags(accessor, input.path, input.tags)}

    @mcp.tool()
    async def remove_tags(
        input: TagsInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Remove tags from the note's frontmatter (case-insensitive).

        Inline #tags in the body are not touched.

        Args:
            input (TagsInput): Validated input containing:
                - path (str): Note path (with or without .md)
                - tags (list[str]): Tags to remove, with or without '#'
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "tags_removed": list[str], "tags": list[str],
             "status": "updated" | "unchanged"}

        Error Handling:
            - ValidationError: No non-empty tag given
            - Note not found → NoteNotFoundError
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.remove_note_tags(accessor, input.path, input.tags)}

    @mcp.tool()
    async def add_aliases(
        input: AddAliasesInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Add alternative names to the note's ``aliases`` property.

        Aliases already present are skipped.

        Returns:
            {"vault": str, "path": str, "aliases": list[str], "status": "updated" | "unchanged"}

        Examples:
            - Use when: A note is referred to by an abbreviation ("K8s" for "Kubernetes")
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.add_note_aliases(accessor, input.path, input.aliases)}

    @mcp.tool()
    async def get_all_tags_in_vault(
        input: VaultTagsInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Count tag usage across the vault (or a folder), most used first.

        Scans at most 500 notes.

        Returns:
            {"vault": str, "folder": str, "files_scanned": int, "unique_tags": int,
             "tags": [{"tag": str, "count": int}], "skipped": list[str], "timed_out": bool}
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.vault_tag_census(accessor, session.analysis, input.folder)
        return {"vault": metadata.name, **payload}

    # ==========================================================================
    # STRUCTURE
    # ==========================================================================

    @mcp.tool()
    async def get_note_outline(
        input: NoteOutlineInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """List the note's headings with level, text, and 1-based line number.

        Lines inside the frontmatter block are never reported as headings.
        Line numbers count from the top of the file.

        Returns:
            {"vault": str, "path": str, "headings": [{"level": int, "text": str, "line": int}]}

        Examples:
            - Workflow: get_note_outline() → read_note_section() or insert_under_heading()
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.get_note_outline(accessor, input.path)}

    @mcp.tool()
    async def read_note_section(
        input: ReadSectionInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Return the content under a heading, up to the next heading of the same or higher level.

        Args:
            input (ReadSectionInput): Validated input containing:
                - path (str): Note path (with or without .md)
                - heading (str): Heading text, case-insensitive, without '#'
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "heading": str, "content": str}

        Examples:
            - Use when: Reading just the "Tasks" part of a long note
            - Don't use: Whole note → Use read_note()

        Error Handling:
            - Heading not found → ValueError suggesting get_note_outline()
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.read_note_section(accessor, input.path, input.heading)
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def insert_under_heading(
        input: InsertUnderHeadingInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Insert content at the start or end of a heading's section.

        When the heading does not exist the content is appended to the note and
        ``status`` is ``appended``. Frontmatter lines are never matched, and a
        note written with CRLF line endings keeps them.

        Args:
            input (InsertUnderHeadingInput): Validated input containing:
                - path (str): Note path (with or without .md)
                - heading (str): Heading text, case-insensitive, without '#'
                - content (str): Markdown to insert
                - position (str): "end" (default) or "start" of the section
                - vault (str, optional): Target vault (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "heading": str, "heading_found": bool,
             "position": "start" | "end", "status": "inserted" | "appended"}

        Examples:
            - Use when: Adding a task under "## Tasks" in a daily note
            - Don't use: Anchor is plain text, not a heading → Use insert_at_text()
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.insert_note_content_under_heading(
            accessor,
            input.path,
            input.heading,
            input.content,
            position=input.position,
        )
        return {"vault": metadata.name, **payload}
