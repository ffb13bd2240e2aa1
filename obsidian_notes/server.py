"""FastMCP server initialization and tool registration."""

import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from obsidian_notes.config import load_vault_configuration
from obsidian_notes.constants import LOG_LEVEL
from obsidian_notes.data_models import VaultConfiguration
from obsidian_notes.session import VaultSession
from obsidian_notes.tools import register_all_tools

# Initialize logger
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def build_server(configuration: VaultConfiguration) -> FastMCP:
    """Create a FastMCP server with every tool bound to ``configuration``."""
    mcp = FastMCP("obsidian_notes")
    register_all_tools(mcp, VaultSession(configuration))
    return mcp


def run_server(config_path: Optional[Path] = None) -> None:
    """Load the vault configuration and start the MCP server with stdio transport."""
    configuration = load_vault_configuration(config_path)
    logger.info("Starting Obsidian notes MCP server (default vault '%s')", configuration.default_vault)
    build_server(configuration).run(transport="stdio")


if __name__ == "__main__":
    run_server()
