"""Vault access: the accessor contract, path normalization, and the filesystem accessor."""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Any, Literal, Optional, Protocol

from obsidian_notes.constants import DEFAULT_MAX_DEPTH
from obsidian_notes.data_models import VaultMetadata

logger = logging.getLogger(__name__)


class VaultAccessError(Exception):
    """Raised when the vault or one of its files cannot be accessed."""


class NoteNotFoundError(VaultAccessError, FileNotFoundError):
    """Raised when a requested note or folder does not exist."""


@dataclass(frozen=True)
class VaultItem:
    """An entry returned by :meth:`VaultAccessor.list_all_files`."""

    path: str
    type: Literal["file", "directory"]
    extension: Optional[str] = None


class VaultAccessor(Protocol):
    """Read/write access to the notes of a single vault.

    Paths are vault-relative and use ``/`` separators.
    """

    def list_all_files(
        self, base_path: str = "", max_depth: int = DEFAULT_MAX_DEPTH
    ) -> list[VaultItem]: ...

    def get_file_content(self, path: str) -> str: ...

    def put_file_content(self, path: str, content: str) -> None: ...

    def exists(self, path: str) -> bool: ...

    def delete_file(self, path: str) -> None: ...

    def get_file_metadata(self, path: str) -> dict[str, Any]: ...


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Args:
        vault: Metadata describing the vault to use.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def normalize_note_path(identifier: str) -> str:
    """Turn a note identifier into a vault-relative markdown path.

    Args:
        identifier: Note identifier supplied by the caller. May include relative
            folder segments or the ``.md`` suffix (in any case).

    Returns:
        A ``/`` separated path ending in ``.md``. Dots inside the name are kept.

    Raises:
        ValueError: If the identifier is empty, contains ``.``/``..`` segments, or
            is absolute.

    Examples:
        >>> normalize_note_path("Folder/My Note")
        'Folder/My Note.md'
        >>> normalize_note_path("v1.4 Notes.MD")
        'v1.4 Notes.md'
    """
    cleaned = identifier.strip().replace("\\", "/")
    if not cleaned:
        raise ValueError("Note path cannot be empty.")
    if cleaned.startswith("/"):
        raise ValueError("Note path must be a relative path within the vault.")

    if cleaned.lower().endswith(".md"):
        cleaned = cleaned[:-3]

    parts = cleaned.split("/")
    if any(part in {"", ".", ".."} for part in parts):
        raise ValueError("Note path cannot contain empty, '.' or '..' segments.")

    return f"{cleaned}.md"


def note_name(path: str) -> str:
    """Return the bare note name: the final path segment without ``.md``."""
    leaf = PurePosixPath(path).name
    return leaf[:-3] if leaf.lower().endswith(".md") else leaf


def strip_markdown_suffix(path: str) -> str:
    return path[:-3] if path.lower().endswith(".md") else path


class FilesystemVaultAccessor:
    """:class:`VaultAccessor` backed by a vault directory on disk.

    Dot-prefixed entries (``.obsidian``, ``.trash``, ``.git``) are not listed.
    """

    def __init__(self, vault: VaultMetadata) -> None:
        self.vault = vault
        self.root = vault.path.resolve(strict=False)

    def _resolve(self, relative: str) -> Path:
        """Resolve a vault-relative path, refusing anything outside the vault.

        Raises:
            ValueError: If the resolved path escapes the vault root.
        """
        candidate = (self.root / relative).resolve(strict=False)
        if not candidate.is_relative_to(self.root):
            raise ValueError(f"Path '{relative}' escapes vault '{self.vault.name}'.")
        return candidate

    def list_all_files(
        self, base_path: str = "", max_depth: int = DEFAULT_MAX_DEPTH
    ) -> list[VaultItem]:
        """List files and directories under ``base_path``, depth-first in name order.

        Raises:
            FileNotFoundError: If the vault directory is not accessible.
            NoteNotFoundError: If ``base_path`` is not a folder of the vault.
        """
        ensure_vault_ready(self.vault)
        root = self._resolve(base_path.strip("/")) if base_path.strip("/") else self.root
        if not root.is_dir():
            raise NoteNotFoundError(f"Folder '{base_path}' not found in vault '{self.vault.name}'.")

        items: list[VaultItem] = []
        self._walk(root, 1, max_depth, items)
        return items

    def _walk(self, folder: Path, depth: int, max_depth: int, items: list[VaultItem]) -> None:
        try:
            entries = sorted(folder.iterdir(), key=lambda entry: entry.name.lower())
        except OSError as exc:
            logger.warning("Could not list folder '%s' in vault '%s': %s", folder, self.vault.name, exc)
            return

        for entry in entries:
            if entry.name.startswith("."):
                continue
            relative = entry.relative_to(self.root).as_posix()
            if entry.is_dir():
                items.append(VaultItem(path=relative, type="directory"))
                if depth < max_depth:
                    self._walk(entry, depth + 1, max_depth, items)
            elif entry.is_file():
                extension = entry.suffix[1:].lower() or None
                items.append(VaultItem(path=relative, type="file", extension=extension))

    def get_file_content(self, path: str) -> str:
        """Read a vault file as UTF-8 text.

        Raises:
            NoteNotFoundError: If the file does not exist.
            VaultAccessError: If the file cannot be read or decoded.
        """
        target = self._resolve(path)
        if not target.is_file():
            raise NoteNotFoundError(f"Note '{path}' not found in vault '{self.vault.name}'.")
        try:
            return target.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise VaultAccessError(f"Note '{path}' is not UTF-8 encoded and cannot be processed.") from exc
        except OSError as exc:
            raise VaultAccessError(f"Note '{path}' could not be read: {exc}") from exc

    def put_file_content(self, path: str, content: str) -> None:
        """Write ``content`` to a vault file, creating parent folders as needed."""
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def delete_file(self, path: str) -> None:
        """Remove a vault file.

        Raises:
            NoteNotFoundError: If the file does not exist.
        """
        target = self._resolve(path)
        if not target.is_file():
            raise NoteNotFoundError(f"Note '{path}' not found in vault '{self.vault.name}'.")
        target.unlink()

    def get_file_metadata(self, path: str) -> dict[str, Any]:
        """Return modification time, size, and (where the platform records it) creation time.

        Raises:
            NoteNotFoundError: If the file does not exist.
        """
        target = self._resolve(path)
        if not target.is_file():
            raise NoteNotFoundError(f"Note '{path}' not found in vault '{self.vault.name}'.")

        stat = target.stat()
        metadata: dict[str, Any] = {
            "modified": datetime.fromtimestamp(stat.st_mtime).isoformat(),
            "size": stat.st_size,
        }
        if platform.system() in ("Darwin", "Windows"):
            metadata["created"] = datetime.fromtimestamp(stat.st_ctime).isoformat()
        elif hasattr(stat, "st_birthtime"):
            metadata["created"] = datetime.fromtimestamp(stat.st_birthtime).isoformat()
        return metadata
