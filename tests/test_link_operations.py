"""Tests for link operations against a vault on disk."""

import pytest

from obsidian_notes.core.link_operations import (
    add_link_to_note,
    find_backlinks,
    find_broken_links,
    find_orphan_notes,
    get_link_graph_data,
    get_outgoing_links,
)
from obsidian_notes.core.vault_operations import FilesystemVaultAccessor, NoteNotFoundError
from obsidian_notes.data_models import AnalysisSettings, VaultMetadata

SETTINGS = AnalysisSettings(read_timeout=None, max_workers=2)


def make_vault(root, notes):
    for name, content in notes.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    metadata = VaultMetadata(name="test", path=root, description="", exists=True)
    return FilesystemVaultAccessor(metadata)


@pytest.fixture
def accessor(tmp_path):
    return make_vault(tmp_path, {"A.md": "[[B]]", "B.md": "", "C.md": "isolated"})


class TestScans:
    def test_broken_links(self, tmp_path):
        accessor = make_vault(tmp_path, {"A.md": "", "B.md": "[[C]]"})
        result = find_broken_links(accessor, SETTINGS)
        assert result["broken_links"] == [{"source": "B.md", "target": "C"}]
        assert result["folder"] == "/"
        assert result["timed_out"] is False

    def test_orphans_default(self, accessor):
        result = find_orphan_notes(accessor, SETTINGS)
        assert [orphan["path"] for orphan in result["orphans"]] == ["A.md"]
        assert result["include_unlinked"] is False

    def test_orphans_include_unlinked(self, accessor):
        result = find_orphan_notes(accessor, SETTINGS, include_unlinked=True)
        assert {orphan["path"] for orphan in result["orphans"]} == {"A.md", "C.md"}

    def test_scan_limited_to_folder(self, tmp_path):
        accessor = make_vault(tmp_path, {"Inbox/A.md": "[[Nowhere]]", "Other/B.md": "[[Gone]]"})
        result = find_broken_links(accessor, SETTINGS, folder="Inbox")
        assert result["broken_links"] == [{"source": "Inbox/A.md", "target": "Nowhere"}]

    def test_missing_folder_raises(self, accessor):
        with pytest.raises(NoteNotFoundError):
            find_orphan_notes(accessor, SETTINGS, folder="Nope")

    def test_backlinks(self, accessor):
        result = find_backlinks(accessor, "B", SETTINGS, include_context=True)
        assert result["target"] == "B.md"
        assert result["backlinks"] == [{"source": "A.md", "link_count": 1, "contexts": ["[[B]]"]}]
        assert result["notes_read"] == 3


class TestGraph:
    def test_graph_data(self, accessor):
        result = get_link_graph_data(accessor, SETTINGS)
        assert result["node_count"] == 3
        assert result["edges"] == [{"source": "A", "target": "B"}]

    @pytest.mark.parametrize("max_notes", [0, 501])
    def test_graph_cap_bounds(self, accessor, max_notes):
        with pytest.raises(ValueError):
            get_link_graph_data(accessor, SETTINGS, max_notes=max_notes)


class TestSingleNote:
    def test_outgoing_links(self, accessor):
        result = get_outgoing_links(accessor, "A")
        assert result["path"] == "A.md"
        assert result["internal_links"][0]["target"] == "B"

    def test_outgoing_links_missing_note(self, accessor):
        with pytest.raises(NoteNotFoundError):
            get_outgoing_links(accessor, "Missing")

    def test_append_link(self, tmp_path, accessor):
        result = add_link_to_note(accessor, "C", "B.md", display_text="Bee", as_list_item=True)
        assert result["link"] == "[[B|Bee]]"
        assert result["status"] == "link_added"
        assert (tmp_path / "C.md").read_text(encoding="utf-8") == "isolated\n- [[B|Bee]]\n"

    def test_prepend_keeps_frontmatter_first(self, tmp_path):
        accessor = make_vault(tmp_path, {"Note.md": "---\ntitle: x\n---\nBody\n"})
        add_link_to_note(accessor, "Note", "Folder/Other", position="prepend")
        assert (tmp_path / "Note.md").read_text(encoding="utf-8") == (
            "---\ntitle: x\n---\n[[Folder/Other]]\nBody\n"
        )
