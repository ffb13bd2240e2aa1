"""Folder listing and vault statistics MCP tools."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from obsidian_notes.core import folder_operations as ops
from obsidian_notes.models import (
    FileStatsInput,
    ListAllFilesInput,
    ListFilesInput,
    VaultStructureInput,
)
from obsidian_notes.session import VaultSession


def register_folder_tools(mcp: FastMCP, session: VaultSession) -> None:
    """Register folder listing tools on ``mcp``."""

    @mcp.tool()
    async def list_files(
        input: ListFilesInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """List the files and subfolders directly inside a folder.

        Args:
            input (ListFilesInput): Validated input containing:
                - path (str, optional): Folder to list (omit for the vault root)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {"vault": str, "path": str, "directories": list[str],
             "files": list[str], "total_items": int}

        Error Handling:
            - Folder not found → Error with folder path
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.list_folder(accessor, input.path)}

    @mcp.tool()
    async def list_all_files(
        input: ListAllFilesInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Recursively list files, optionally filtered by extension.

        At most 100 directories and 200 files are returned; ``truncated`` is
        True when the folder holds more.

        Args:
            input (ListAllFilesInput): Validated input containing:
                - path (str, optional): Starting folder (omit for the vault root)
                - extensions (list[str], optional): e.g. ["md", "pdf"]
                - max_depth (int): Folder depth, 1-20 (default: 10)
                - vault (str, optional): Vault name (omit to use active vault)

        Returns:
            {
                "vault": str,
                "base_path": str,
                "total_directories": int,
                "total_files": int,
                "extension_counts": {"md": int, ...},
                "directories": list[str],
                "files": [{"path": str, "extension": str | None}],
                "truncated": bool
            }

        Examples:
            - Use when: Finding every PDF or image attachment
            - Don't use: Only need counts → Use get_file_stats()
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.list_all_files_report(
            accessor,
            input.path,
            extensions=input.extensions,
            max_depth=input.max_depth,
        )
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def get_vault_structure(
        input: VaultStructureInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Show the folder tree of the vault (folders only).

        Returns:
            {"vault": str, "path": str, "total_directories": int, "tree": str}
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        payload = ops.get_vault_structure(accessor, input.path, max_depth=input.max_depth)
        return {"vault": metadata.name, **payload}

    @mcp.tool()
    async def get_file_stats(
        input: FileStatsInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """Count files and folders, broken down by extension.

        Returns:
            {"vault": str, "path": str,
             "statistics": {"total_files": int, "total_directories": int,
                            "markdown_notes": int, "other_files": int},
             "by_extension": {"md": int, ...}}
        """
        metadata, accessor = session.accessor_for(input.vault, ctx)
        return {"vault": metadata.name, **ops.get_file_stats(accessor, input.path)}
