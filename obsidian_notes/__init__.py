"""Obsidian Notes MCP Server

Frontmatter, note structure, and link graph tools for Obsidian vaults via
Model Context Protocol.
"""

from obsidian_notes.config import load_vault_configuration
from obsidian_notes.data_models import AnalysisSettings, VaultConfiguration, VaultMetadata
from obsidian_notes.session import VaultSession

__version__ = "0.1.0"
__all__ = [
    "AnalysisSettings",
    "VaultConfiguration",
    "VaultMetadata",
    "VaultSession",
    "load_vault_configuration",
]
