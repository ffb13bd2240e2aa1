"""Tests for Pydantic input models.

This test suite validates the input validation logic for MCP tools,
ensuring that:
- Valid inputs are accepted and normalized correctly
- Invalid inputs raise ValidationError with descriptive messages
- Schema generation produces correct JSON schemas for MCP
"""

import pytest
from pydantic import ValidationError

from obsidian_notes.models import (
    AddLinkInput,
    AppendToNoteInput,
    BaseFolderInput,
    BaseNoteInput,
    CopyNoteInput,
    DeleteNoteInput,
    InsertAtTextInput,
    ListAllFilesInput,
    ListFilesInput,
    RecentNotesInput,
    SearchByTagInput,
    SearchInFolderInput,
    SearchWithContextInput,
    SimpleSearchInput,
    VaultStructureInput,
    FindOrphanNotesInput,
    GetLinkGraphInput,
    GetOutgoingLinksInput,
    InsertUnderHeadingInput,
    ListVaultsInput,
    ReadSectionInput,
    SetActiveVaultInput,
    SetPropertyInput,
    TagsInput,
    UpdateFrontmatterInput,
)


class TestBaseNoteInput:
    """Test suite for BaseNoteInput model validation."""

    def test_valid_simple_path(self):
        model = BaseNoteInput(path="My Note")
        assert model.path == "My Note"
        assert model.vault is None

    def test_valid_nested_path_with_dots(self):
        model = BaseNoteInput(path="Projects/v1.4 Release.md")
        assert model.path == "Projects/v1.4 Release.md"

    def test_backslashes_are_normalized(self):
        model = BaseNoteInput(path="Daily\\2025-10-27")
        assert model.path == "Daily/2025-10-27"

    def test_unicode_in_path(self):
        model = BaseNoteInput(path="Notes/日記 2025-10-27")
        assert model.path == "Notes/日記 2025-10-27"

    def test_vault_with_whitespace_is_stripped(self):
        model = BaseNoteInput(path="My Note", vault="  personal  ")
        assert model.vault == "personal"

    @pytest.mark.parametrize("path", ["", "   ", ".md", "./My Note", "../escape", "a/../b", "/abs"])
    def test_invalid_paths_raise(self, path):
        with pytest.raises(ValidationError):
            BaseNoteInput(path=path)

    def test_empty_vault_string_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            BaseNoteInput(path="My Note", vault="   ")
        assert "vault" in str(exc_info.value).lower()

    def test_validation_error_location(self):
        with pytest.raises(ValidationError) as exc_info:
            GetOutgoingLinksInput(path="")
        assert any(error.get("loc") == ("path",) for error in exc_info.value.errors())

    def test_model_json_schema_generation(self):
        schema = GetOutgoingLinksInput.model_json_schema()
        assert "path" in schema["properties"]
        assert "vault" in schema["properties"]
        assert "description" in schema["properties"]["path"]
        assert "examples" in schema


class TestFolderAndSectionInputs:
    def test_folder_is_optional(self):
        assert BaseFolderInput().folder is None
        assert BaseFolderInput(folder="  ").folder is None

    def test_folder_trailing_slash_is_stripped(self):
        assert FindOrphanNotesInput(folder="Projects/").folder == "Projects"

    @pytest.mark.parametrize("folder", ["/Projects", "../up", "a/./b"])
    def test_invalid_folder(self, folder):
        with pytest.raises(ValidationError):
            BaseFolderInput(folder=folder)

    def test_heading_markers_are_stripped(self):
        model = ReadSectionInput(path="Note", heading="## Tasks ")
        assert model.heading == "Tasks"

    def test_heading_of_only_markers_raises(self):
        with pytest.raises(ValidationError):
            ReadSectionInput(path="Note", heading="###")

    def test_insert_position_literal(self):
        model = InsertUnderHeadingInput(path="Note", heading="Tasks", content="- item")
        assert model.position == "end"
        with pytest.raises(ValidationError):
            InsertUnderHeadingInput(path="Note", heading="Tasks", content="x", position="middle")


class TestLinkInputs:
    def test_graph_defaults_and_bounds(self):
        assert GetLinkGraphInput().max_notes == 100
        assert GetLinkGraphInput(max_notes=500).max_notes == 500
        for bad in (0, 501):
            with pytest.raises(ValidationError):
                GetLinkGraphInput(max_notes=bad)

    def test_orphan_default_excludes_unlinked(self):
        assert FindOrphanNotesInput().include_unlinked is False

    def test_add_link_defaults(self):
        model = AddLinkInput(path="Index", target=" Projects/Roadmap ")
        assert model.target == "Projects/Roadmap"
        assert model.position == "append"
        assert model.as_list_item is False
        assert model.display_text is None

    @pytest.mark.parametrize("target", ["[[Note]]", "Note|Alias", "   "])
    def test_add_link_rejects_wikilink_syntax(self, target):
        with pytest.raises(ValidationError):
            AddLinkInput(path="Index", target=target)


class TestMetadataInputs:
    def test_tags_are_cleaned(self):
        model = TagsInput(path="Note", tags=[" project ", "", "#status/active"])
        assert model.tags == ["project", "#status/active"]

    @pytest.mark.parametrize("tags", [[], ["  "]])
    def test_tags_must_not_be_empty(self, tags):
        with pytest.raises(ValidationError):
            TagsInput(path="Note", tags=tags)

    def test_update_frontmatter_requires_mapping(self):
        with pytest.raises(ValidationError):
            UpdateFrontmatterInput(path="Note", frontmatter=["not", "a", "dict"])

    def test_set_property_value_defaults_to_none(self):
        model = SetPropertyInput(path="Note", key=" status ")
        assert model.key == "status"
        assert model.value is None


class TestVaultInputs:
    def test_set_active_vault_strips(self):
        assert SetActiveVaultInput(vault=" work ").vault == "work"

    def test_set_active_vault_rejects_blank(self):
        with pytest.raises(ValidationError):
            SetActiveVaultInput(vault="  ")

    @pytest.mark.parametrize("vault", ["vaults/work", "C:\\vaults\\work"])
    def test_set_active_vault_rejects_paths(self, vault):
        with pytest.raises(ValidationError):
            SetActiveVaultInput(vault=vault)

    def test_list_vaults_analysis_is_opt_in(self):
        assert ListVaultsInput().include_analysis is False
        assert ListVaultsInput(include_analysis=True).include_analysis is True


class TestNoteInputs:
    def test_copy_destination_is_validated(self):
        model = CopyNoteInput(path="Templates\\Meeting", destination=" Meetings\\Today ")
        assert model.destination == "Meetings/Today"
        with pytest.raises(ValidationError):
            CopyNoteInput(path="A", destination="../outside")
        with pytest.raises(ValidationError):
            CopyNoteInput(path="A", destination="/abs")

    def test_delete_is_unconfirmed_by_default(self):
        assert DeleteNoteInput(path="Old").confirm is False

    def test_insert_position_choices(self):
        assert InsertAtTextInput(path="A", target_text="x", content="y").position == "after"
        with pytest.raises(ValidationError):
            InsertAtTextInput(path="A", target_text="x", content="y", position="middle")

    def test_append_requires_content(self):
        with pytest.raises(ValidationError):
            AppendToNoteInput(path="A", content="")


class TestSearchInputs:
    def test_query_is_stripped_and_required(self):
        assert SimpleSearchInput(query="  budget ").query == "budget"
        with pytest.raises(ValidationError):
            SimpleSearchInput(query="   ")

    @pytest.mark.parametrize("limit", [0, 101])
    def test_simple_search_limit_bounds(self, limit):
        with pytest.raises(ValidationError):
            SimpleSearchInput(query="x", limit=limit)

    def test_context_search_bounds(self):
        with pytest.raises(ValidationError):
            SearchWithContextInput(query="x", context_length=49)
        with pytest.raises(ValidationError):
            SearchWithContextInput(query="x", limit=21)
        with pytest.raises(ValidationError):
            RecentNotesInput(limit=51)

    def test_tags_need_one_real_value(self):
        with pytest.raises(ValidationError):
            SearchByTagInput(tags=["#", " "])
        assert SearchByTagInput(tags=["#idea", ""]).tags == ["#idea"]

    def test_folder_search_requires_folder(self):
        assert SearchInFolderInput(folder="Meetings/").folder == "Meetings"
        with pytest.raises(ValidationError):
            SearchInFolderInput(folder="/")
        with pytest.raises(ValidationError):
            SearchInFolderInput(folder="a/../b")


class TestFolderListingInputs:
    def test_blank_path_means_root(self):
        assert ListFilesInput(path=" / ").path is None

    def test_depth_bounds(self):
        with pytest.raises(ValidationError):
            ListAllFilesInput(max_depth=21)
        with pytest.raises(ValidationError):
            VaultStructureInput(max_depth=11)
        assert VaultStructureInput().max_depth == 5


class TestPydanticIntegration:
    def test_model_dump_produces_dict(self):
        model = GetOutgoingLinksInput(path="My Note", vault="personal")
        assert model.model_dump() == {"vault": "personal", "path": "My Note"}

    def test_extra_fields_are_ignored(self):
        model = GetOutgoingLinksInput(path="My Note", extra_field="ignored")  # type: ignore
        assert not hasattr(model, "extra_field")
