"""Pydantic input models for search and discovery tools."""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator

from .base import BaseFolderInput, VaultScopedInput, _check_relative


def _clean_query(v: str) -> str:
    cleaned = v.strip()
    if not cleaned:
        raise ValueError(
            "Search query cannot be empty or whitespace. "
            "Provide a word or phrase to search for."
        )
    return cleaned


class SimpleSearchInput(BaseFolderInput):
    """Input model for simple_search tool.

    Case-insensitive text search across note contents, ranked by match count.

    Examples:
        >>> SimpleSearchInput(query="quarterly review")
        >>> SimpleSearchInput(query="budget", folder="Projects", limit=5)
    """

    query: str = Field(
        min_length=1,
        description="Text to search for (case-insensitive, literal match).",
        examples=["quarterly review", "TODO"],
    )
    limit: int = Field(
        20,
        ge=1,
        le=100,
        description="Maximum number of notes to return (1-100).",
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        return _clean_query(v)

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "quarterly review"},
                {"query": "budget", "folder": "Projects", "limit": 5},
            ]
        }


class SearchByTagInput(BaseFolderInput):
    """Input model for search_by_tag tool.

    Matches tags from frontmatter and inline ``#tags``, case-insensitively.

    Examples:
        >>> SearchByTagInput(tags=["project", "active"])
        >>> SearchByTagInput(tags=["#idea", "#draft"], match_all=False)
    """

    tags: list[str] = Field(
        min_length=1,
        description="Tags to match, with or without a leading '#'.",
        examples=[["project", "active"], ["#idea"]],
    )
    match_all: bool = Field(
        True,
        description="True requires every tag; False accepts any of them.",
    )

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        cleaned = [tag.strip() for tag in v if tag and tag.strip().lstrip("#")]
        if not cleaned:
            raise ValueError("Must specify at least one non-empty tag.")
        return cleaned


class FindNotesByNameInput(VaultScopedInput):
    """Input model for find_notes_by_name tool. Only file names are compared."""

    name: str = Field(
        min_length=1,
        description="Note name or part of it, with or without '.md'.",
        examples=["Roadmap", "2025-10"],
    )
    exact_match: bool = Field(
        False,
        description="True matches the whole name; False matches any name containing it.",
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_query(v)


class SearchInFolderInput(VaultScopedInput):
    """Input model for search_in_folder tool.

    Without a query every note in the folder is listed.

    Examples:
        >>> SearchInFolderInput(folder="Meetings", query="action items")
        >>> SearchInFolderInput(folder="Inbox", include_subfolders=False)
    """

    folder: str = Field(
        min_length=1,
        description="Folder relative to the vault root.",
        examples=["Meetings", "Projects/2025"],
    )
    query: Optional[str] = Field(
        None,
        description="Optional text the notes must contain (case-insensitive).",
    )
    include_subfolders: bool = Field(
        True,
        description="Also search notes in nested folders.",
    )

    @field_validator('folder')
    @classmethod
    def validate_folder(cls, v: str) -> str:
        cleaned = v.strip().replace("\\", "/").rstrip("/")
        if not cleaned:
            raise ValueError("Folder cannot be empty. Use simple_search() to search the whole vault.")
        return _check_relative(cleaned, "Folder")


class RecentNotesInput(BaseFolderInput):
    """Input model for get_recent_notes tool."""

    limit: int = Field(
        10,
        ge=1,
        le=50,
        description="Number of notes to return, newest first (1-50).",
    )


class SearchWithContextInput(VaultScopedInput):
    """Input model for search_with_context tool.

    Returns a plain-text summary and the tags of each matching note.

    Examples:
        >>> SearchWithContextInput(query="onboarding", context_length=300)
    """

    query: str = Field(
        min_length=1,
        description="Text to search for (case-insensitive).",
        examples=["onboarding", "retrospective"],
    )
    context_length: int = Field(
        150,
        ge=50,
        le=500,
        description="Maximum summary length in characters (50-500).",
    )
    limit: int = Field(
        10,
        ge=1,
        le=20,
        description="Maximum number of notes to return (1-20).",
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        return _clean_query(v)
