"""Data models for vault metadata, analysis settings, and configuration."""

from __future__ import annotations
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from obsidian_notes.constants import (
    BROKEN_LINK_SCAN_CAP,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_WORKERS,
    DEFAULT_READ_CAP,
    DEFAULT_READ_TIMEOUT,
    ORPHAN_SCAN_CAP,
    TAG_SCAN_CAP,
)


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


@dataclass(frozen=True)
class AnalysisSettings:
    """Caps and concurrency limits applied to vault-wide scans."""

    read_cap: int = DEFAULT_READ_CAP
    broken_link_scan_cap: int = BROKEN_LINK_SCAN_CAP
    orphan_scan_cap: int = ORPHAN_SCAN_CAP
    tag_scan_cap: int = TAG_SCAN_CAP
    max_workers: int = DEFAULT_MAX_WORKERS
    read_timeout: float | None = DEFAULT_READ_TIMEOUT
    max_depth: int = DEFAULT_MAX_DEPTH

    def as_payload(self) -> dict[str, Any]:
        return asdict(self)


class VaultConfiguration:
    """Holds vault metadata, analysis settings, and default resolution helpers.

    Built from ``vaults.yaml`` by :func:`obsidian_notes.config.load_vault_configuration`
    and handed to the server explicitly.
    """

    def __init__(
        self,
        default_vault: str,
        vaults: dict[str, VaultMetadata],
        analysis: AnalysisSettings | None = None,
    ) -> None:
        self.default_vault = default_vault
        self.vaults = vaults
        self.analysis = analysis or AnalysisSettings()

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Args:
            name: The name of the vault to retrieve.

        Returns:
            VaultMetadata for the requested vault.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            raise ValueError(f"Unknown vault '{name}'") from exc

    def as_payload(self) -> dict[str, Any]:
        """Return serializable configuration payload.

        Returns:
            Dictionary with default vault name and list of vault metadata.
        """
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }
