"""Pydantic input models for note lifecycle operations.

Covers creating, rewriting, appending, prepending, replacing text in,
copying, deleting, and inserting relative to text in a note.
"""

from __future__ import annotations

from typing import Any, Literal, Optional
from pydantic import Field, field_validator

from .base import BaseNoteInput, _check_relative


class CreateNoteInput(BaseNoteInput):
    """Input model for create_note tool.

    Parent folders are created automatically. A ``created`` timestamp is added
    to the frontmatter unless one is given.

    Examples:
        >>> CreateNoteInput(path="Projects/Alpha", content="# Alpha\\n")
        >>> CreateNoteInput(path="Inbox/Idea", content="", frontmatter={"tags": ["idea"]})
    """

    content: str = Field(
        "",
        description="Markdown body of the note. May be empty to create a blank note.",
    )
    frontmatter: Optional[dict[str, Any]] = Field(
        None,
        description="Properties written above the body (scalars or lists of scalars).",
        examples=[{"tags": ["project"], "status": "draft"}],
    )
    overwrite: bool = Field(
        False,
        description="Replace the note if it already exists instead of failing.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Alpha", "content": "# Alpha\n\nGoals:\n- Ship v1"},
                {"path": "Inbox/Idea", "content": "", "frontmatter": {"tags": ["idea"]}},
            ]
        }


class UpdateNoteInput(BaseNoteInput):
    """Input model for update_note tool.

    Replaces the note body. Existing frontmatter is kept by default.
    """

    content: str = Field(description="New markdown body for the note.")
    preserve_frontmatter: bool = Field(
        True,
        description="Keep the existing frontmatter block above the new content.",
    )
    update_modified: bool = Field(
        True,
        description="Stamp a 'modified' property when frontmatter is preserved.",
    )


class AppendToNoteInput(BaseNoteInput):
    """Input model for append_to_note tool.

    Examples:
        >>> AppendToNoteInput(path="Daily/2025-10-27", content="- [ ] Call Sam")
    """

    content: str = Field(min_length=1, description="Markdown to add at the end of the note.")
    ensure_newline: bool = Field(
        True,
        description="Start the appended content on its own line.",
    )
    create_if_missing: bool = Field(
        False,
        description="Create the note with this content when it does not exist.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Daily/2025-10-27", "content": "- [ ] Call Sam"},
                {"path": "Inbox/Log", "content": "New entry", "create_if_missing": True},
            ]
        }


class PrependToNoteInput(BaseNoteInput):
    """Input model for prepend_to_note tool. Content goes below any frontmatter."""

    content: str = Field(min_length=1, description="Markdown to add at the top of the body.")
    ensure_newline: bool = Field(
        True,
        description="End the prepended content with a newline.",
    )


class ReplaceInNoteInput(BaseNoteInput):
    """Input model for replace_in_note tool.

    Matching is literal and case-sensitive.

    Examples:
        >>> ReplaceInNoteInput(path="Projects/Alpha", find="TODO", replace="DONE", replace_all=True)
    """

    find: str = Field(min_length=1, description="Exact text to find.")
    replace: str = Field(description="Replacement text. May be empty to delete the match.")
    replace_all: bool = Field(
        False,
        description="Replace every occurrence instead of only the first.",
    )


class DeleteNoteInput(BaseNoteInput):
    """Input model for delete_note tool.

    Deletion is permanent, so ``confirm`` must be set explicitly.
    """

    confirm: bool = Field(
        False,
        description="Must be True to actually delete the note.",
    )


class CopyNoteInput(BaseNoteInput):
    """Input model for copy_note tool.

    Examples:
        >>> CopyNoteInput(path="Templates/Meeting", destination="Meetings/2025-10-27")
    """

    destination: str = Field(
        min_length=1,
        description="Destination note path relative to the vault root, with or without '.md'.",
        examples=["Archive/Alpha", "Meetings/2025-10-27"],
    )
    overwrite: bool = Field(
        False,
        description="Replace the destination note if it already exists.",
    )

    @field_validator('destination')
    @classmethod
    def validate_destination(cls, v: str) -> str:
        cleaned = v.strip().replace("\\", "/")
        if not cleaned or cleaned.lower() == ".md":
            raise ValueError("Destination path cannot be empty.")
        return _check_relative(cleaned, "Destination path")


class InsertAtTextInput(BaseNoteInput):
    """Input model for insert_at_text tool.

    Inserts a new line after or before the first body line containing
    ``target_text``. When no line matches, content is appended (``after``) or
    placed at the top of the body (``before``).
    """

    target_text: str = Field(
        min_length=1,
        description="Text to look for. The first body line containing it is the anchor.",
        examples=["## Tasks", "Action items:"],
    )
    content: str = Field(min_length=1, description="Markdown line(s) to insert.")
    position: Literal["after", "before"] = Field(
        "after",
        description="'after' inserts below the anchor line, 'before' above it.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Alpha", "target_text": "## Tasks", "content": "- [ ] Review"},
                {"path": "Daily/2025-10-27", "target_text": "Evening", "content": "---", "position": "before"},
            ]
        }
