"""Pydantic input models for link analysis operations.

This module defines input models for:
- Outgoing links and backlinks of a single note
- Vault-wide broken link and orphan scans
- Link graph export
- Adding a wikilink to a note
"""

from __future__ import annotations

from typing import Literal, Optional
from pydantic import Field, field_validator

from obsidian_notes.constants import DEFAULT_GRAPH_NOTES, MAX_GRAPH_NOTES

from .base import BaseFolderInput, BaseNoteInput


class GetOutgoingLinksInput(BaseNoteInput):
    """Input model for get_outgoing_links tool.

    Examples:
        >>> GetOutgoingLinksInput(path="Projects/Roadmap")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Roadmap", "vault": None},
            ]
        }


class GetBacklinksInput(BaseNoteInput):
    """Input model for get_backlinks tool.

    Examples:
        >>> GetBacklinksInput(path="People/Ada", include_context=True)
    """

    include_context: bool = Field(
        False,
        description="Include up to 3 lines around each linking line.",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "People/Ada", "include_context": True, "vault": None},
            ]
        }


class FindBrokenLinksInput(BaseFolderInput):
    """Input model for find_broken_links tool."""

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"folder": None, "vault": None},
                {"folder": "Projects", "vault": "work"},
            ]
        }


class FindOrphanNotesInput(BaseFolderInput):
    """Input model for find_orphan_notes tool.

    By default only orphans that still link out to other notes are reported;
    ``include_unlinked`` also reports notes with no links at all.
    """

    include_unlinked: bool = Field(
        False,
        description=(
            "Also report orphans that have no outgoing links. "
            "Default reports only orphans that link to other notes."
        ),
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"folder": None, "include_unlinked": False},
                {"folder": "Inbox", "include_unlinked": True},
            ]
        }


class GetLinkGraphInput(BaseFolderInput):
    """Input model for get_link_graph_data tool."""

    max_notes: int = Field(
        DEFAULT_GRAPH_NOTES,
        ge=1,
        le=MAX_GRAPH_NOTES,
        description=f"Maximum number of notes included as nodes (1-{MAX_GRAPH_NOTES}).",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"folder": None, "max_notes": 100},
                {"folder": "Projects", "max_notes": 250, "vault": "work"},
            ]
        }


class AddLinkInput(BaseNoteInput):
    """Input model for add_link_to_note tool.

    ``path`` is the note that receives the link.

    Examples:
        >>> AddLinkInput(path="Index", target="Projects/Roadmap", as_list_item=True)
    """

    target: str = Field(
        min_length=1,
        description="Note to link to, as it would appear inside [[...]].",
        examples=["Projects/Roadmap", "Ada"],
    )
    display_text: Optional[str] = Field(
        None,
        description="Optional alias shown instead of the target ([[target|display]]).",
    )
    position: Literal["append", "prepend"] = Field(
        "append",
        description="Add the link at the end of the note or right after its frontmatter.",
    )
    as_list_item: bool = Field(
        False,
        description="Write the link as a '- ' list item.",
    )

    @field_validator('target')
    @classmethod
    def validate_target(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned or any(char in cleaned for char in "[]|"):
            raise ValueError(
                "Link target must be a note name without '[', ']' or '|'. "
                f"Invalid target: '{v}'"
            )
        return cleaned

    @field_validator('display_text')
    @classmethod
    def validate_display_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        cleaned = v.strip()
        if "]]" in cleaned:
            raise ValueError("Display text cannot contain ']]'.")
        return cleaned or None

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Index", "target": "Projects/Roadmap", "as_list_item": True},
                {"path": "Daily/2025-10-27", "target": "Ada", "display_text": "Ada L.", "position": "prepend"},
            ]
        }
