"""Base Pydantic models for MCP tool input validation.

Base Models:
- VaultScopedInput: Optional vault name shared by every tool
- BaseNoteInput: Adds the note path used by single-note operations
- BaseFolderInput: Adds the optional folder used by vault-wide scans
- BaseSectionInput: Adds heading validation for section operations
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


def _check_relative(cleaned: str, kind: str) -> str:
    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            f"{kind} cannot contain '.' or '..' path segments. "
            f"Invalid value: '{cleaned}'"
        )
    if cleaned.startswith("/"):
        raise ValueError(
            f"{kind} must be a relative path within the vault. "
            "Do not start with '/'. "
            f"Invalid value: '{cleaned}'"
        )
    return cleaned


class VaultScopedInput(BaseModel):
    """Common ``vault`` field. Omit it to use the session's active vault."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list_vaults()."
            )

        return v.strip() if v else None


class BaseNoteInput(VaultScopedInput):
    """Base model for single-note operations.

    The ``.md`` suffix is optional; dots inside the note name are preserved.
    """

    path: str = Field(
        min_length=1,
        description=(
            "Note path relative to the vault root, with or without '.md'. "
            "Examples: 'Daily Notes/2025-10-27', 'Projects/v1.4 Release'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Daily Notes/2025-10-27", "Projects/Roadmap.md", "README"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the note path for safety and format.

        Enforces:
        - Non-empty path
        - No path traversal attempts (.., .)
        - Relative path only (no absolute paths)
        - Backslashes normalized to forward slashes

        Raises:
            ValueError: If path contains invalid characters or patterns
        """
        cleaned = v.strip().replace("\\", "/")

        if not cleaned or cleaned.lower() == ".md":
            raise ValueError(
                "Note path cannot be empty. "
                "Provide a valid note identifier like 'Daily Notes/2025-10-27'."
            )

        return _check_relative(cleaned, "Note path")


class BaseFolderInput(VaultScopedInput):
    """Base model for vault-wide scans that can be limited to a folder."""

    folder: Optional[str] = Field(
        None,
        description=(
            "Folder to scan, relative to the vault root. "
            "Omit to scan the whole vault."
        ),
        examples=["Projects", "Daily Notes/2025"]
    )

    @field_validator('folder')
    @classmethod
    def validate_folder(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        cleaned = v.strip().replace("\\", "/").rstrip("/")
        if not cleaned:
            return None
        return _check_relative(cleaned, "Folder")


class BaseSectionInput(BaseNoteInput):
    """Base model for heading-based operations."""

    heading: str = Field(
        min_length=1,
        description=(
            "Heading text to match (case-insensitive, without # markers). "
            "Examples: 'Tasks', 'Meeting Notes'. Matches the first occurrence at any level."
        ),
        examples=["Tasks", "Meeting Notes", "Daily Summary"]
    )

    @field_validator('heading')
    @classmethod
    def validate_heading(cls, v: str) -> str:
        """Strip whitespace and leading # markers from the heading.

        Raises:
            ValueError: If heading is empty after stripping
        """
        cleaned = v.strip()

        # Users are supposed to provide heading without #, but we'll be forgiving
        while cleaned.startswith("#"):
            cleaned = cleaned[1:].strip()

        if not cleaned:
            raise ValueError(
                "Heading cannot be empty or just '#' markers. "
                "Provide the actual heading text (e.g., 'Tasks', 'Summary')."
            )

        return cleaned
