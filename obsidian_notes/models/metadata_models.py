"""Pydantic input models for note, frontmatter, tag, and section operations."""

from __future__ import annotations

from typing import Any, Literal
from pydantic import Field, field_validator

from .base import BaseFolderInput, BaseNoteInput, BaseSectionInput


def _clean_items(values: list[str], kind: str) -> list[str]:
    cleaned = [value.strip() for value in values if value and value.strip()]
    if not cleaned:
        raise ValueError(f"Provide at least one non-empty {kind}.")
    return cleaned


class ReadNoteInput(BaseNoteInput):
    """Input model for read_note tool.

    Examples:
        >>> ReadNoteInput(path="Projects/Roadmap", include_stats=True)
    """

    include_frontmatter: bool = Field(
        True,
        description="Return full content plus parsed frontmatter; False returns only the body.",
    )
    include_stats: bool = Field(
        False,
        description="Add word count and a short summary.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Roadmap"},
                {"path": "Daily/2025-10-27", "include_frontmatter": False, "include_stats": True},
            ]
        }


class GetFrontmatterInput(BaseNoteInput):
    """Input model for get_frontmatter tool."""


class UpdateFrontmatterInput(BaseNoteInput):
    """Input model for update_frontmatter tool.

    Merges fields into the existing frontmatter block, creating it if missing.

    Examples:
        >>> UpdateFrontmatterInput(path="My Note", frontmatter={"status": "active"})
    """

    frontmatter: dict[str, Any] = Field(
        description=(
            "Fields to upsert into frontmatter. Values must be scalars or lists of "
            "scalars. Lists replace existing lists. Other fields are preserved."
        ),
        examples=[
            {"tags": ["python", "mcp"], "status": "active"},
            {"created": "2025-01-01", "publish": True},
        ]
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "My Note", "frontmatter": {"tags": ["python", "mcp"], "status": "active"}},
            ]
        }


class SetPropertyInput(BaseNoteInput):
    """Input model for set_frontmatter_property tool. A null value removes the property."""

    key: str = Field(min_length=1, description="Property name.", examples=["status", "due"])
    value: Any = Field(
        None,
        description="New value (scalar or list of scalars). Null removes the property.",
    )

    @field_validator('key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Property name cannot be empty.")
        return cleaned


class GetTagsInput(BaseNoteInput):
    """Input model for get_tags tool."""


class TagsInput(BaseNoteInput):
    """Input model for add_tags and remove_tags tools.

    Examples:
        >>> TagsInput(path="My Note", tags=["project", "#status/active"])
    """

    tags: list[str] = Field(
        min_length=1,
        description="Tags with or without a leading '#'. Nested tags use '/'.",
        examples=[["project", "status/active"]],
    )

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _clean_items(v, "tag")


class AddAliasesInput(BaseNoteInput):
    """Input model for add_aliases tool."""

    aliases: list[str] = Field(
        min_length=1,
        description="Alternative names for the note.",
        examples=[["Roadmap 2025", "Plan"]],
    )

    @field_validator('aliases')
    @classmethod
    def validate_aliases(cls, v: list[str]) -> list[str]:
        return _clean_items(v, "alias")


class VaultTagsInput(BaseFolderInput):
    """Input model for get_all_tags_in_vault tool."""

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"folder": None, "vault": None},
                {"folder": "Projects"},
            ]
        }


class NoteOutlineInput(BaseNoteInput):
    """Input model for get_note_outline tool."""


class ReadSectionInput(BaseSectionInput):
    """Input model for read_note_section tool."""


class InsertUnderHeadingInput(BaseSectionInput):
    """Input model for insert_under_heading tool.

    Examples:
        >>> InsertUnderHeadingInput(path="Daily", heading="Tasks", content="- [ ] Review")
    """

    content: str = Field(
        min_length=1,
        description="Markdown to insert. Appended to the note if the heading is missing.",
    )
    position: Literal["start", "end"] = Field(
        "end",
        description="Insert right after the heading line or at the end of its section.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Daily/2025-10-27", "heading": "Tasks", "content": "- [ ] Review PR"},
                {"path": "Meeting", "heading": "Notes", "content": "Kickoff", "position": "start"},
            ]
        }
