"""MCP tool definitions for Obsidian note operations.

Each submodule exposes a ``register_*_tools(mcp, session)`` function that
attaches its ``@mcp.tool()`` functions to a server instance.
"""

from mcp.server.fastmcp import FastMCP

from obsidian_notes.session import VaultSession
from obsidian_notes.tools.folder_tools import register_folder_tools
from obsidian_notes.tools.link_tools import register_link_tools
from obsidian_notes.tools.metadata_tools import register_metadata_tools
from obsidian_notes.tools.note_tools import register_note_tools
from obsidian_notes.tools.search_tools import register_search_tools
from obsidian_notes.tools.vault_tools import register_vault_tools


def register_all_tools(mcp: FastMCP, session: VaultSession) -> None:
    register_vault_tools(mcp, session)
    register_folder_tools(mcp, session)
    register_note_tools(mcp, session)
    register_metadata_tools(mcp, session)
    register_search_tools(mcp, session)
    register_link_tools(mcp, session)


__all__ = [
    "register_all_tools",
    "register_folder_tools",
    "register_link_tools",
    "register_metadata_tools",
    "register_note_tools",
    "register_search_tools",
    "register_vault_tools",
]
