"""MCP tools for vault management."""

import logging
from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from obsidian_notes.models import ListVaultsInput, SetActiveVaultInput
from obsidian_notes.session import VaultSession, get_session_key

logger = logging.getLogger(__name__)


def register_vault_tools(mcp: FastMCP, session: VaultSession) -> None:
    """Register vault discovery and selection tools on ``mcp``."""

    @mcp.tool()
    async def list_vaults(
        input: ListVaultsInput,
        ctx: Context | None = None,
    ) -> dict[str, Any]:
        """List configured Obsidian vaults and current session state.

        Primary entry point for vault discovery.

        Args:
            input (ListVaultsInput): Validated input (no fields required)
            ctx (Context, optional): FastMCP context for session state

        Returns:
            {
                "default": str,    # System default vault name
                "active": str,     # Currently active vault (or None)
                "vaults": [{"name": str, "path": str, "description": str, "exists": bool}]
            }

        Examples:
            - Use when: Starting conversation, need to see available vaults
            - Don't use: Already know vault name and just need to switch
        """
        active = None
        if ctx is not None:
            try:
                active = session.get_active_vault(ctx).name
            except ValueError:
                active = None

        payload = {**session.configuration.as_payload(), "active": active}
        if input.include_analysis:
            payload["analysis"] = session.analysis.as_payload()
        return payload

    @mcp.tool()
    async def set_active_vault(
        input: SetActiveVaultInput,
        ctx: Context,
    ) -> dict[str, Any]:
        """Set the active vault for this conversation session.

        All subsequent tool calls that omit the vault parameter use the active vault.

        Args:
            input (SetActiveVaultInput): Validated input containing:
                - vault (str): Friendly vault name from vaults.yaml

        Returns:
            {"vault": str, "path": str, "status": "active"}

        Error Handling:
            - Unknown vault → Error naming the vault, suggest list_vaults()
        """
        metadata = session.set_active_vault(ctx, input.vault)
        logger.info("Active vault for session %s set to '%s'", get_session_key(ctx), metadata.name)
        return {
            "vault": metadata.name,
            "path": str(metadata.path),
            "status": "active",
        }
