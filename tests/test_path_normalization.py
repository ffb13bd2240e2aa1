import pytest

from obsidian_notes.core.vault_operations import (
    normalize_note_path,
    note_name,
    strip_markdown_suffix,
)


def test_normalize_preserves_dot_in_basename():
    """Ensure dots within the note name are preserved before the .md suffix."""
    identifier = "v1.4 Release Changelog - Frontmatter Manipulation.md"
    assert normalize_note_path(identifier) == identifier


def test_normalize_preserves_dots_in_nested_paths():
    """Dots inside nested path segments should remain untouched."""
    assert normalize_note_path("Projects/v1.4 Release Notes") == "Projects/v1.4 Release Notes.md"


def test_normalize_handles_uppercase_extension():
    """Existing .MD suffix should be treated case-insensitively."""
    assert normalize_note_path("Docs/Version Overview.MD") == "Docs/Version Overview.md"


def test_normalize_converts_backslashes_and_strips_whitespace():
    assert normalize_note_path("  Daily\\2025-10-27 ") == "Daily/2025-10-27.md"


@pytest.mark.parametrize("identifier", ["../outside", "a/./b", "a//b", "/abs/note", "", "   "])
def test_normalize_rejects_unsafe_identifiers(identifier):
    with pytest.raises(ValueError):
        normalize_note_path(identifier)


def test_note_name_and_suffix_helpers():
    assert note_name("Folder/Sub/My Note.md") == "My Note"
    assert note_name("Folder/image.png") == "image.png"
    assert strip_markdown_suffix("Folder/Note.MD") == "Folder/Note"
