import unittest
from datetime import date, datetime
from pathlib import Path
from tempfile import TemporaryDirectory

from obsidian_notes.core.frontmatter_codec import parse_frontmatter
from obsidian_notes.core.metadata_operations import (
    add_note_aliases,
    add_note_tags,
    ensure_supported_frontmatter,
    get_frontmatter,
    get_note_outline,
    get_note_tags,
    insert_note_content_under_heading,
    read_note,
    read_note_section,
    remove_note_tags,
    set_note_property,
    update_note_frontmatter,
    vault_tag_census,
)
from obsidian_notes.core.vault_operations import FilesystemVaultAccessor, NoteNotFoundError
from obsidian_notes.data_models import AnalysisSettings, VaultMetadata


class EnsureSupportedFrontmatterTests(unittest.TestCase):
    def test_converts_datetime(self) -> None:
        metadata = {"date": datetime(2025, 1, 1, 12, 0)}
        ensure_supported_frontmatter(metadata)
        self.assertEqual(metadata["date"], "2025-01-01T12:00:00")

    def test_converts_date_inside_list(self) -> None:
        metadata = {"dates": [date(2025, 10, 27), "later"]}
        ensure_supported_frontmatter(metadata)
        self.assertEqual(metadata["dates"], ["2025-10-27", "later"])

    def test_rejects_nested_mapping(self) -> None:
        with self.assertRaises(ValueError):
            ensure_supported_frontmatter({"project": {"status": "active"}})

    def test_rejects_unsupported_types(self) -> None:
        with self.assertRaises(ValueError):
            ensure_supported_frontmatter({"bad": {1, 2}})

    def test_rejects_invalid_keys(self) -> None:
        for key in ("", " padded", "a:b", "-dash"):
            with self.subTest(key=key), self.assertRaises(ValueError):
                ensure_supported_frontmatter({key: "value"})

    def test_rejects_oversized_frontmatter(self) -> None:
        with self.assertRaises(ValueError):
            ensure_supported_frontmatter({"big": "x" * 11_000})


class NoteOperationTests(unittest.TestCase):
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

    def _frontmatter(self, note_path: Path) -> dict:
        return parse_frontmatter(note_path.read_text(encoding="utf-8")).frontmatter

    # Reading

    def test_read_note_with_stats(self) -> None:
        self._write_note("example", "---\ntitle: T\n---\nHello world\n")
        result = read_note(self.accessor, "example", include_stats=True)
        self.assertEqual(result["path"], "example.md")
        self.assertEqual(result["frontmatter"], {"title": "T"})
        self.assertEqual(result["stats"]["word_count"], 2)
        self.assertEqual(result["stats"]["summary"], "Hello world")

    def test_read_note_body_only(self) -> None:
        self._write_note("example", "---\ntitle: T\n---\nHello world\n")
        result = read_note(self.accessor, "example.md", include_frontmatter=False)
        self.assertEqual(result["content"], "Hello world\n")
        self.assertNotIn("frontmatter", result)

    def test_missing_note(self) -> None:
        with self.assertRaises(NoteNotFoundError):
            read_note(self.accessor, "missing")

    def test_get_frontmatter(self) -> None:
        self._write_note("example", "---\nstatus: active\n---\nContent\n")
        result = get_frontmatter(self.accessor, "example")
        self.assertEqual(result["frontmatter"], {"status": "active"})
        self.assertTrue(result["has_frontmatter"])

    # Frontmatter edits

    def test_update_frontmatter_merges_and_reports_unchanged(self) -> None:
        note_path = self._write_note("dated", "---\ncreated: 2025-10-27\n---\nBody\n")
        result = update_note_frontmatter(self.accessor, "dated", {"status": "active"})
        self.assertEqual(result["status"], "updated")
        self.assertEqual(result["fields_updated"], ["status"])
        self.assertEqual(self._frontmatter(note_path), {"created": "2025-10-27", "status": "active"})

        again = update_note_frontmatter(self.accessor, "dated", {"status": "active"})
        self.assertEqual(again["status"], "unchanged")

    def test_update_frontmatter_detects_type_change(self) -> None:
        note_path = self._write_note("typed", "---\nflag: 1\ncount: 2\n---\nBody\n")
        result = update_note_frontmatter(self.accessor, "typed", {"flag": True, "count": 2.0})
        self.assertEqual(result["status"], "updated")
        self.assertEqual(result["fields_updated"], ["count", "flag"])
        frontmatter = self._frontmatter(note_path)
        self.assertIs(frontmatter["flag"], True)
        self.assertIsInstance(frontmatter["count"], float)

    def test_update_frontmatter_rejects_nested_values(self) -> None:
        note_path = self._write_note("plain", "Body\n")
        with self.assertRaises(ValueError):
            update_note_frontmatter(self.accessor, "plain", {"project": {"owner": "alice"}})
        self.assertEqual(note_path.read_text(encoding="utf-8"), "Body\n")

    def test_set_and_remove_property(self) -> None:
        note_path = self._write_note("prop", "Body\n")
        self.assertEqual(set_note_property(self.accessor, "prop", "due", "2025-11-01")["status"], "set")
        self.assertEqual(self._frontmatter(note_path), {"due": "2025-11-01"})

        result = set_note_property(self.accessor, "prop", "due", None)
        self.assertEqual(result["status"], "removed")
        self.assertEqual(note_path.read_text(encoding="utf-8"), "Body\n")

    # Tags & aliases

    def test_add_tags_is_idempotent(self) -> None:
        note_path = self._write_note("tagged", "Body #inline\n")
        first = add_note_tags(self.accessor, "tagged", ["#project"])
        self.assertEqual(first["status"], "updated")
        self.assertEqual(first["tags"], ["project", "inline"])

        second = add_note_tags(self.accessor, "tagged", ["project"])
        self.assertEqual(second["status"], "unchanged")
        self.assertEqual(self._frontmatter(note_path)["tags"], ["project"])

    def test_add_tags_rejects_blank_list(self) -> None:
        self._write_note("tagged", "Body\n")
        with self.assertRaises(ValueError):
            add_note_tags(self.accessor, "tagged", ["  "])

    def test_remove_tags(self) -> None:
        self._write_note("tagged", "---\ntags:\n  - Project\n  - keep\n---\nBody #inline\n")
        result = remove_note_tags(self.accessor, "tagged", ["project"])
        self.assertEqual(result["status"], "updated")
        self.assertEqual(result["tags"], ["keep", "inline"])

    def test_get_note_tags(self) -> None:
        self._write_note("tagged", "---\ntags: solo\n---\n#inline text\n")
        result = get_note_tags(self.accessor, "tagged")
        self.assertEqual(result["tags"], ["solo", "inline"])
        self.assertEqual(result["count"], 2)

    def test_add_aliases(self) -> None:
        self._write_note("aliased", "Body\n")
        result = add_note_aliases(self.accessor, "aliased", ["Plan", "Plan", "Roadmap"])
        self.assertEqual(result["aliases"], ["Plan", "Roadmap"])
        self.assertEqual(add_note_aliases(self.accessor, "aliased", ["Plan"])["status"], "unchanged")

    def test_vault_tag_census(self) -> None:
        self._write_note("one", "---\ntags:\n  - alpha\n---\n#beta\n")
        self._write_note("Sub/two", "#alpha #alpha\n")
        self._write_note("three", "no tags\n")
        result = vault_tag_census(self.accessor, AnalysisSettings(read_timeout=None))
        self.assertEqual(result["files_scanned"], 3)
        self.assertEqual(result["tags"], [{"tag": "alpha", "count": 2}, {"tag": "beta", "count": 1}])

    # Structure

    def test_outline_and_section(self) -> None:
        self._write_note("doc", "# A\n\ntext\n## B\nmore\n# C\n")
        outline = get_note_outline(self.accessor, "doc")
        self.assertEqual([h["line"] for h in outline["headings"]], [1, 4, 6])
        self.assertEqual(read_note_section(self.accessor, "doc", "B")["content"], "more")

    def test_missing_section_raises(self) -> None:
        self._write_note("doc", "# A\ntext\n")
        with self.assertRaises(ValueError):
            read_note_section(self.accessor, "doc", "Missing")

    def test_insert_under_heading(self) -> None:
        note_path = self._write_note("doc", "# Tasks\n- one\n# Notes\n")
        result = insert_note_content_under_heading(self.accessor, "doc", "Tasks", "- two")
        self.assertEqual(result["status"], "inserted")
        self.assertEqual(note_path.read_text(encoding="utf-8"), "# Tasks\n- one\n- two\n\n# Notes\n")

        appended = insert_note_content_under_heading(self.accessor, "doc", "Missing", "tail")
        self.assertEqual(appended["status"], "appended")
        self.assertTrue(note_path.read_text(encoding="utf-8").endswith("\n\ntail"))

    def test_frontmatter_comments_are_not_headings(self) -> None:
        note_path = self._write_note("commented", "---\n# comment\ntitle: T\n---\n# Body\ntext\n")
        outline = get_note_outline(self.accessor, "commented")
        self.assertEqual(outline["headings"], [{"level": 1, "text": "Body", "line": 5}])
        with self.assertRaises(ValueError):
            read_note_section(self.accessor, "commented", "comment")

        result = insert_note_content_under_heading(self.accessor, "commented", "comment", "added")
        self.assertEqual(result["status"], "appended")
        self.assertEqual(
            note_path.read_text(encoding="utf-8"),
            "---\n# comment\ntitle: T\n---\n# Body\ntext\n\n\nadded",
        )


if __name__ == "__main__":
    unittest.main()
