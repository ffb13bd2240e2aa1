import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from obsidian_notes.core.frontmatter_codec import parse_frontmatter
from obsidian_notes.core.note_operations import (
    append_to_note,
    copy_note,
    create_note,
    delete_note,
    insert_relative_to_text,
    prepend_to_note,
    replace_in_note,
    update_note,
)
from obsidian_notes.core.vault_operations import FilesystemVaultAccessor, NoteNotFoundError
from obsidian_notes.data_models import VaultMetadata


class NoteLifecycleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.vault_path = Path(self.tmpdir.name).resolve()
        self.vault = VaultMetadata(
            name="test",
            path=self.vault_path,
            description="test vault",
            exists=True,
        )
        self.accessor = FilesystemVaultAccessor(self.vault)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write_note(self, name: str, content: str) -> Path:
        note_path = self.vault_path / f"{name}.md"
        note_path.parent.mkdir(parents=True, exist_ok=True)
        note_path.write_text(content, encoding="utf-8")
        return note_path

    def _read(self, name: str) -> str:
        return (self.vault_path / f"{name}.md").read_text(encoding="utf-8")

    # Creating

    def test_create_note_writes_frontmatter_and_body(self) -> None:
        result = create_note(self.accessor, "Projects/Alpha", "# Alpha\n", frontmatter={"tags": ["project"]})

        self.assertEqual(result["status"], "created")
        self.assertEqual(result["path"], "Projects/Alpha.md")
        parsed = parse_frontmatter(self._read("Projects/Alpha"))
        self.assertEqual(parsed.frontmatter["tags"], ["project"])
        self.assertIn("created", parsed.frontmatter)
        self.assertEqual(parsed.body, "# Alpha\n")

    def test_create_note_keeps_supplied_created(self) -> None:
        create_note(self.accessor, "Dated", "", frontmatter={"created": "2025-01-01"})
        self.assertEqual(parse_frontmatter(self._read("Dated")).frontmatter["created"], "2025-01-01")

    def test_create_note_refuses_existing_note(self) -> None:
        self._write_note("Existing", "keep me")
        with self.assertRaises(FileExistsError):
            create_note(self.accessor, "Existing", "new")
        self.assertEqual(self._read("Existing"), "keep me")

        create_note(self.accessor, "Existing", "new", overwrite=True)
        self.assertEqual(parse_frontmatter(self._read("Existing")).body, "new")

    def test_create_note_rejects_nested_frontmatter(self) -> None:
        with self.assertRaises(ValueError):
            create_note(self.accessor, "Bad", "", frontmatter={"project": {"status": "x"}})
        self.assertFalse((self.vault_path / "Bad.md").exists())

    # Rewriting

    def test_update_note_preserves_frontmatter_and_stamps_modified(self) -> None:
        self._write_note("Note", "---\nstatus: draft\n---\nold body\n")

        result = update_note(self.accessor, "Note", "new body\n")

        self.assertEqual(result["status"], "updated")
        parsed = parse_frontmatter(self._read("Note"))
        self.assertEqual(parsed.frontmatter["status"], "draft")
        self.assertIn("modified", parsed.frontmatter)
        self.assertEqual(parsed.body, "new body\n")

    def test_update_note_can_drop_frontmatter(self) -> None:
        self._write_note("Note", "---\nstatus: draft\n---\nold\n")
        update_note(self.accessor, "Note", "plain", preserve_frontmatter=False)
        self.assertEqual(self._read("Note"), "plain")

    def test_update_note_does_not_add_frontmatter(self) -> None:
        self._write_note("Plain", "old")
        update_note(self.accessor, "Plain", "new")
        self.assertEqual(self._read("Plain"), "new")

    def test_update_missing_note(self) -> None:
        with self.assertRaises(NoteNotFoundError):
            update_note(self.accessor, "Missing", "x")

    # Incremental edits

    def test_append_adds_newline_between_contents(self) -> None:
        self._write_note("Log", "first")
        result = append_to_note(self.accessor, "Log", "second")
        self.assertEqual(result["status"], "appended")
        self.assertEqual(self._read("Log"), "first\nsecond")

    def test_append_without_newline(self) -> None:
        self._write_note("Log", "first")
        append_to_note(self.accessor, "Log", "-second", ensure_newline=False)
        self.assertEqual(self._read("Log"), "first-second")

    def test_append_creates_missing_note_only_when_asked(self) -> None:
        with self.assertRaises(NoteNotFoundError):
            append_to_note(self.accessor, "Inbox/Log", "entry")

        result = append_to_note(self.accessor, "Inbox/Log", "entry", create_if_missing=True)
        self.assertEqual(result["status"], "created")
        self.assertEqual(self._read("Inbox/Log"), "entry")

    def test_prepend_goes_below_frontmatter(self) -> None:
        self._write_note("Note", "---\nt: x\n---\nbody\n")
        result = prepend_to_note(self.accessor, "Note", "top")
        self.assertEqual(result["status"], "prepended")
        self.assertEqual(self._read("Note"), "---\nt: x\n---\ntop\nbody\n")

    def test_replace_first_or_all(self) -> None:
        self._write_note("Tasks", "- [ ] a\n- [ ] b\n")

        result = replace_in_note(self.accessor, "Tasks", "[ ]", "[x]")
        self.assertEqual(result["replacements"], 1)
        self.assertEqual(self._read("Tasks"), "- [x] a\n- [ ] b\n")

        self._write_note("Tasks", "- [ ] a\n- [ ] b\n")
        result = replace_in_note(self.accessor, "Tasks", "[ ]", "[x]", replace_all=True)
        self.assertEqual(result["replacements"], 2)
        self.assertEqual(self._read("Tasks"), "- [x] a\n- [x] b\n")

    def test_replace_missing_text_leaves_note_alone(self) -> None:
        self._write_note("Tasks", "nothing here")
        with self.assertRaises(ValueError):
            replace_in_note(self.accessor, "Tasks", "absent", "x")
        with self.assertRaises(ValueError):
            replace_in_note(self.accessor, "Tasks", "", "x")
        self.assertEqual(self._read("Tasks"), "nothing here")

    def test_insert_after_and_before_anchor(self) -> None:
        self._write_note("Plan", "## Tasks\n- one\n")

        result = insert_relative_to_text(self.accessor, "Plan", "## Tasks", "- zero")
        self.assertTrue(result["target_found"])
        self.assertEqual(result["status"], "inserted")
        self.assertEqual(self._read("Plan"), "## Tasks\n- zero\n- one\n")

        insert_relative_to_text(self.accessor, "Plan", "## Tasks", "# Plan", position="before")
        self.assertEqual(self._read("Plan"), "# Plan\n## Tasks\n- zero\n- one\n")

    def test_insert_ignores_frontmatter_anchor(self) -> None:
        self._write_note("Note", "---\ntitle: anchor\n---\nbody\n")

        result = insert_relative_to_text(self.accessor, "Note", "anchor", "new")

        self.assertFalse(result["target_found"])
        self.assertEqual(result["status"], "appended")
        content = self._read("Note")
        self.assertTrue(content.startswith("---\ntitle: anchor\n---\nbody\n"))
        self.assertTrue(content.endswith("new"))

    # Copy and delete

    def test_copy_note(self) -> None:
        self._write_note("Templates/Meeting", "---\ntype: meeting\n---\n## Agenda\n")

        result = copy_note(self.accessor, "Templates/Meeting", "Meetings/Today")

        self.assertEqual(result["destination"], "Meetings/Today.md")
        self.assertEqual(self._read("Meetings/Today"), self._read("Templates/Meeting"))

    def test_copy_refuses_existing_destination_and_same_path(self) -> None:
        self._write_note("A", "a")
        self._write_note("B", "b")
        with self.assertRaises(FileExistsError):
            copy_note(self.accessor, "A", "B")
        with self.assertRaises(ValueError):
            copy_note(self.accessor, "A", "A.md")
        with self.assertRaises(NoteNotFoundError):
            copy_note(self.accessor, "Missing", "C")

        copy_note(self.accessor, "A", "B", overwrite=True)
        self.assertEqual(self._read("B"), "a")

    def test_delete_requires_confirmation(self) -> None:
        note_path = self._write_note("Old", "bye")

        with self.assertRaises(ValueError):
            delete_note(self.accessor, "Old")
        self.assertTrue(note_path.exists())

        result = delete_note(self.accessor, "Old", confirm=True)
        self.assertEqual(result["status"], "deleted")
        self.assertFalse(note_path.exists())

        with self.assertRaises(NoteNotFoundError):
            delete_note(self.accessor, "Old", confirm=True)


if __name__ == "__main__":
    unittest.main()
