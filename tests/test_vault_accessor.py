"""Tests for the filesystem vault accessor."""

import pytest

from obsidian_notes.core.vault_operations import (
    FilesystemVaultAccessor,
    NoteNotFoundError,
    VaultAccessError,
)
from obsidian_notes.data_models import VaultMetadata


@pytest.fixture
def vault(tmp_path):
    (tmp_path / "a.md").write_text("A", encoding="utf-8")
    (tmp_path / "Sub" / "Deep").mkdir(parents=True)
    (tmp_path / "Sub" / "b.md").write_text("B", encoding="utf-8")
    (tmp_path / "Sub" / "Deep" / "c.md").write_text("C", encoding="utf-8")
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "app.json").write_text("{}", encoding="utf-8")
    return VaultMetadata(name="test", path=tmp_path, description="test vault", exists=True)


class TestListing:
    def test_lists_recursively_in_name_order_and_skips_hidden(self, vault):
        items = FilesystemVaultAccessor(vault).list_all_files()
        assert [(item.path, item.type) for item in items] == [
            ("a.md", "file"),
            ("Sub", "directory"),
            ("Sub/b.md", "file"),
            ("Sub/Deep", "directory"),
            ("Sub/Deep/c.md", "file"),
        ]
        assert items[0].extension == "md"

    def test_depth_limit(self, vault):
        items = FilesystemVaultAccessor(vault).list_all_files(max_depth=1)
        assert [item.path for item in items] == ["a.md", "Sub"]

    def test_base_path(self, vault):
        items = FilesystemVaultAccessor(vault).list_all_files("Sub")
        assert [item.path for item in items] == ["Sub/b.md", "Sub/Deep", "Sub/Deep/c.md"]

    def test_missing_folder(self, vault):
        with pytest.raises(NoteNotFoundError):
            FilesystemVaultAccessor(vault).list_all_files("Nope")

    def test_missing_vault(self, tmp_path):
        missing = VaultMetadata(name="gone", path=tmp_path / "gone", description="", exists=False)
        with pytest.raises(FileNotFoundError):
            FilesystemVaultAccessor(missing).list_all_files()


class TestReadWrite:
    def test_read_note(self, vault):
        assert FilesystemVaultAccessor(vault).get_file_content("Sub/b.md") == "B"

    def test_missing_note_is_file_not_found(self, vault):
        with pytest.raises(NoteNotFoundError) as excinfo:
            FilesystemVaultAccessor(vault).get_file_content("missing.md")
        assert isinstance(excinfo.value, FileNotFoundError)

    def test_non_utf8_note(self, vault):
        (vault.path / "binary.md").write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(VaultAccessError):
            FilesystemVaultAccessor(vault).get_file_content("binary.md")

    def test_paths_cannot_escape_vault(self, vault):
        with pytest.raises(ValueError):
            FilesystemVaultAccessor(vault).get_file_content("../outside.md")

    def test_put_creates_parent_folders(self, vault):
        accessor = FilesystemVaultAccessor(vault)
        accessor.put_file_content("New/Folder/note.md", "hello")
        assert (vault.path / "New" / "Folder" / "note.md").read_text(encoding="utf-8") == "hello"

    def test_exists_and_delete(self, vault):
        accessor = FilesystemVaultAccessor(vault)
        assert accessor.exists("Sub/b.md")
        accessor.delete_file("Sub/b.md")
        assert not accessor.exists("Sub/b.md")
        with pytest.raises(NoteNotFoundError):
            accessor.delete_file("Sub/b.md")

    def test_file_metadata(self, vault):
        metadata = FilesystemVaultAccessor(vault).get_file_metadata("a.md")
        assert metadata["size"] == 1
        assert "T" in metadata["modified"]
