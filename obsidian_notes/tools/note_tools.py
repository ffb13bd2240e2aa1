"""Note lifecycle MCP tools.

Wraps the operations in ``obsidian_notes.core.note_operations``:
- Create and rewrite notes
- Append or prepend content
- Replace text and insert next to an anchor line
- Copy and delete notes
"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from obsidian_notes.core import note_operations as ops
from obsidian_notes.models import (
    AppendToNoteInput,
    CopyNoteInput,
    CreateNoteInput,
    DeleteNoteInput,
    InsertAtTextInput,
    PrependToNoteInput,
    ReplaceInNoteInput,
    UpdateNoteInput,
)
from obsidian_notes.session import VaultSession


def register_note_tools(mcp: FastMCP, session: VaultSession) -> None:
    """Register note lifecycle tools on ``mcp``."""

    # ==========================================================================
    # CREATE & REWRITE
    # ==========================================================================

    @mcp.tool()
    async def create_note(
        input: CreateNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Create a new note with optional frontmatter (fails if it exists).

        Parent folders are created automatically. A ``created`` timestamp is
        added to the frontmatter unless one is supplied.

        Args:
            input (CreateNoteInput): Validated input containing:
                - path (str): Note path, with or without '.md'
                    Examples: "Projects/Alpha", "Inbox/Idea.md"
                - content (str): Markdown body (may be empty)
                - frontmatter (dict, optional): Properties written above the body
                - overwrite (bool): Replace an existing note (default: False)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "frontmatter": dict, "status": "created"}

        Examples:
            - Use when: Starting a new note, optionally with tags or status
            - Don't use: Changing an existing note → Use update_note() or append_to_note()

        Error Handling:
            - ValidationError: Empty path or path traversal attempt
            - Note exists → Error, set overwrite=True or choose another path
            - Unsupported frontmatter value → Error naming the field
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.create_note(
            accessor,
            input.path,
            input.content,
            frontmatter=input.frontmatter,
            overwrite=input.overwrite,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def update_note(
        input: UpdateNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Replace the body of an existing note, keeping its frontmatter.

        Args:
            input (UpdateNoteInput): Validated input containing:
                - path (str): Existing note path
                - content (str): New markdown body
                - preserve_frontmatter (bool): Keep existing properties (default: True)
                - update_modified (bool): Stamp a 'modified' property (default: True)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "status": "updated"}

        Examples:
            - Use when: Rewriting a note completely
            - Don't use: Adding a line → Use append_to_note() or insert_at_text()

        Error Handling:
            - Note not found → Error, use create_note() instead
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.update_note(
            accessor,
            input.path,
            input.content,
            preserve_frontmatter=input.preserve_frontmatter,
            update_modified=input.update_modified,
        )
        return {"vault": metadata.name, **payload}

    # ==========================================================================
    # INCREMENTAL EDITS
    # ==========================================================================

    @mcp.tool()
    async def append_to_note(
        input: AppendToNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Append content to the end of a note.

        Args:
            input (AppendToNoteInput): Validated input containing:
                - path (str): Note path
                - content (str): Markdown to append
                - ensure_newline (bool): Start on a new line (default: True)
                - create_if_missing (bool): Create the note if absent (default: False)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "status": "appended" | "created"}

        Examples:
            - Use when: Logging an entry or adding a task to a daily note
            - Don't use: Content belongs under a heading → Use insert_under_heading()

        Error Handling:
            - Note not found and create_if_missing=False → Error with note path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.append_to_note(
            accessor,
            input.path,
            input.content,
            ensure_newline=input.ensure_newline,
            create_if_missing=input.create_if_missing,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def prepend_to_note(
        input: PrependToNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Insert content at the top of a note body, below any frontmatter.

        Returns:
            {"vault": str, "path": str, "status": "prepended"}

        Error Handling:
            - Note not found → Error with note path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.prepend_to_note(
            accessor,
            input.path,
            input.content,
            ensure_newline=input.ensure_newline,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def replace_in_note(
        input: ReplaceInNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Find and replace literal text in a note.

        Matching is exact and case-sensitive. Only the first occurrence is
        replaced unless ``replace_all`` is set.

        Args:
            input (ReplaceInNoteInput): Validated input containing:
                - path (str): Note path
                - find (str): Exact text to find
                - replace (str): Replacement (may be empty)
                - replace_all (bool): Replace every occurrence (default: False)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "replacements": int, "status": "replaced"}

        Examples:
            - Use when: Ticking a task ("- [ ] Ship" → "- [x] Ship")
            - Use when: Renaming a term throughout a note (replace_all=True)

        Error Handling:
            - Text not found → Error, nothing is written
            - Note not found → Error with note path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.replace_in_note(
            accessor,
            input.path,
            input.find,
            input.replace,
            replace_all=input.replace_all,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def insert_at_text(
        input: InsertAtTextInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Insert a line after or before the first body line containing some text.

        Frontmatter is never searched. When no line matches, the content is
        appended (``after``) or placed at the top of the body (``before``) and
        ``target_found`` is False.

        Args:
            input (InsertAtTextInput): Validated input containing:
                - path (str): Note path
                - target_text (str): Anchor text, e.g. "## Tasks"
                - content (str): Line(s) to insert
                - position (str): "after" (default) or "before"
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "target_found": bool,
             "position": "after" | "before",
             "status": "inserted" | "appended" | "prepended"}

        Error Handling:
            - Note not found → Error with note path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.insert_relative_to_text(
            accessor,
            input.path,
            input.target_text,
            input.content,
            position=input.position,
        )
        return {"vault": metadata.name, **payload}

    # ==========================================================================
    # COPY & DELETE
    # ==========================================================================

    @mcp.tool()
    async def copy_note(
        input: CopyNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Copy a note, frontmatter included, to a new path.

        Returns:
            {"vault": str, "source": str, "destination": str, "status": "copied"}

        Examples:
            - Use when: Instantiating a template note
            - Workflow: copy_note() → update_frontmatter() on the copy

        Error Handling:
            - Source not found → Error with note path
            - Destination exists → Error, set overwrite=True to replace it
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.copy_note(
            accessor,
            input.path,
            input.destination,
            overwrite=input.overwrite,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def delete_note(
        input: DeleteNoteInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Permanently delete a note. Requires ``confirm=True``.

        Returns:
            {"vault": str, "path": str, "status": "deleted"}

        Error Handling:
            - confirm not set → Error, nothing is deleted
            - Note not found → Error with note path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.delete_note(accessor, input.path, confirm=input.confirm)
        return {"vault": metadata.name, **payload}
