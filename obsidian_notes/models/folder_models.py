"""Pydantic input models for folder listing and vault statistics tools."""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator

from .base import VaultScopedInput, _check_relative


class BasePathInput(VaultScopedInput):
    """Optional starting folder. Omit it to start at the vault root."""

    path: Optional[str] = Field(
        None,
        description="Folder relative to the vault root. Omit for the whole vault.",
        examples=["Projects", "Attachments/2025"],
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        cleaned = v.strip().replace("\\", "/").rstrip("/")
        if not cleaned:
            return None
        return _check_relative(cleaned, "Folder")


class ListFilesInput(BasePathInput):
    """Input model for list_files tool. Lists one level only."""


class ListAllFilesInput(BasePathInput):
    """Input model for list_all_files tool.

    Examples:
        >>> ListAllFilesInput(extensions=["md"])
        >>> ListAllFilesInput(path="Attachments", extensions=["png", "pdf"], max_depth=3)
    """

    extensions: Optional[list[str]] = Field(
        None,
        description="File extensions to keep, e.g. ['md', 'pdf']. Omit for all files.",
    )
    max_depth: int = Field(
        10,
        ge=1,
        le=20,
        description="Maximum folder depth to recurse into (1-20).",
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"extensions": ["md"]},
                {"path": "Attachments", "extensions": ["png", "pdf"], "max_depth": 3},
            ]
        }


class VaultStructureInput(BasePathInput):
    """Input model for get_vault_structure tool. Shows folders only."""

    max_depth: int = Field(
        5,
        ge=1,
        le=10,
        description="Maximum folder depth to show (1-10).",
    )


class FileStatsInput(BasePathInput):
    """Input model for get_file_stats tool."""
