"""Configuration loading and vault registry."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from obsidian_notes.constants import CONFIG_PATH, CONFIG_PATH_ENV
from obsidian_notes.data_models import AnalysisSettings, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)

_INTEGER_SETTINGS = (
    "read_cap",
    "broken_link_scan_cap",
    "orphan_scan_cap",
    "tag_scan_cap",
    "max_workers",
    "max_depth",
)


def default_config_path() -> Path:
    """Return the configuration path, honouring ``OBSIDIAN_NOTES_CONFIG``."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def _load_analysis_settings(section: Any) -> AnalysisSettings:
    """Validate the optional ``analysis`` section of the configuration file.

    Raises:
        ValueError: If the section is not a mapping or a value has the wrong type.
    """
    if section is None:
        return AnalysisSettings()
    if not isinstance(section, dict):
        raise ValueError("The 'analysis' section must be a mapping of settings")

    values: dict[str, Any] = {}
    for key in _INTEGER_SETTINGS:
        if key not in section:
            continue
        value = section[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"Analysis setting '{key}' must be a positive integer")
        values[key] = value

    if "read_timeout" in section:
        timeout = section["read_timeout"]
        if timeout is not None and (
            isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
        ):
            raise ValueError("Analysis setting 'read_timeout' must be a positive number or null")
        values["read_timeout"] = float(timeout) if timeout is not None else None

    unknown = sorted(set(section) - set(_INTEGER_SETTINGS) - {"read_timeout"})
    if unknown:
        logger.warning("Ignoring unknown analysis settings: %s", ", ".join(unknown))

    return AnalysisSettings(**values)


def load_vault_configuration(config_path: Optional[Path] = None) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to the path in
            ``OBSIDIAN_NOTES_CONFIG`` or ``vaults.yaml`` next to the package.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata, the configured default vault name, and analysis settings.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    config_path = config_path or default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = Path(raw_path).expanduser()
        try:
            resolved_path = resolved_path.resolve(strict=False)
        except RuntimeError:
            # resolve can raise if underlying filesystem is inaccessible; fall back to expanded path
            pass

        description = (entry.get("description") or "").strip()
        exists = resolved_path.is_dir()
        if not exists:
            logger.warning("Vault '%s' path %s is not an accessible directory", name, resolved_path)

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=description,
            exists=exists,
        )

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    analysis = _load_analysis_settings(raw_config.get("analysis"))
    logger.info(
        "Loaded %d vault(s) from %s (default '%s')",
        len(processed),
        config_path,
        default_vault,
    )
    return VaultConfiguration(default_vault=default_vault, vaults=processed, analysis=analysis)
