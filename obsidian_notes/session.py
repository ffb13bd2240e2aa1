"""Session state management for active vault selection."""

from typing import Dict, Optional
from mcp.server.fastmcp import Context

from obsidian_notes.core.vault_operations import FilesystemVaultAccessor
from obsidian_notes.data_models import AnalysisSettings, VaultConfiguration, VaultMetadata


def get_session_key(ctx: Context) -> int:
    """Produce a stable per-session key for active vault tracking.

    Args:
        ctx: The request context supplied by FastMCP.

    Returns:
        An integer derived from the underlying session object identity. This value
        remains stable for the lifetime of the MCP session.
    """
    return id(ctx.session)


class VaultSession:
    """Resolves vaults for tool calls and remembers each session's active vault."""

    def __init__(self, configuration: VaultConfiguration) -> None:
        self.configuration = configuration
        self._active_vaults: Dict[int, str] = {}

    @property
    def analysis(self) -> AnalysisSettings:
        return self.configuration.analysis

    def set_active_vault(self, ctx: Context, vault_name: str) -> VaultMetadata:
        """Set the active vault for a client session.

        Raises:
            ValueError: If ``vault_name`` is not present in the configuration.
        """
        metadata = self.configuration.get(vault_name)
        self._active_vaults[get_session_key(ctx)] = metadata.name
        return metadata

    def get_active_vault(self, ctx: Context) -> VaultMetadata:
        """Retrieve the active vault for a session, falling back to the default."""
        vault_name = self._active_vaults.get(
            get_session_key(ctx), self.configuration.default_vault
        )
        return self.configuration.get(vault_name)

    def resolve_vault(self, vault: Optional[str], ctx: Optional[Context] = None) -> VaultMetadata:
        """Resolve which vault metadata should be used for an operation.

        Args:
            vault: Optional friendly vault name provided directly by the caller.
            ctx: Optional FastMCP context used to infer the active vault when
                ``vault`` is not supplied.

        Raises:
            ValueError: If the supplied ``vault`` name is not recognized.
        """
        if vault:
            return self.configuration.get(vault)

        if ctx is not None:
            return self.get_active_vault(ctx)

        return self.configuration.get(self.configuration.default_vault)

    def accessor_for(
        self, vault: Optional[str], ctx: Optional[Context] = None
    ) -> tuple[VaultMetadata, FilesystemVaultAccessor]:
        metadata = self.resolve_vault(vault, ctx)
        return metadata, FilesystemVaultAccessor(metadata)
