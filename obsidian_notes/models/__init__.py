"""Pydantic input models for MCP tool validation.

Each model represents the input schema of one or more tools, with field-level
validation and descriptive error messages.

Architecture:
- base: Shared vault, note path, folder, and heading validation
- metadata_models: Note reading, frontmatter, tag, alias, and section tools
- link_models: Link analysis and link insertion tools
- note_models: Note create, rewrite, append, prepend, replace, copy, delete, and text-anchored inserts
- search_models: Text, tag, name, folder, recency, and context searches
- folder_models: Folder listings, vault structure, and file statistics
- vault_models: Vault management tools
"""

from .base import BaseFolderInput, BaseNoteInput, BaseSectionInput, VaultScopedInput
from .link_models import (
    AddLinkInput,
    FindBrokenLinksInput,
    FindOrphanNotesInput,
    GetBacklinksInput,
    GetLinkGraphInput,
    GetOutgoingLinksInput,
)
from .metadata_models import (
    AddAliasesInput,
    GetFrontmatterInput,
    GetTagsInput,
    InsertUnderHeadingInput,
    NoteOutlineInput,
    ReadNoteInput,
    ReadSectionInput,
    SetPropertyInput,
    TagsInput,
    UpdateFrontmatterInput,
    VaultTagsInput,
)
from .note_models import (
    AppendToNoteInput,
    CopyNoteInput,
    CreateNoteInput,
    DeleteNoteInput,
    InsertAtTextInput,
    PrependToNoteInput,
    ReplaceInNoteInput,
    UpdateNoteInput,
)
from .search_models import (
    FindNotesByNameInput,
    RecentNotesInput,
    SearchByTagInput,
    SearchInFolderInput,
    SearchWithContextInput,
    SimpleSearchInput,
)
from .folder_models import FileStatsInput, ListAllFilesInput, ListFilesInput, VaultStructureInput
from .vault_models import ListVaultsInput, SetActiveVaultInput

__all__ = [
    # Base models
    "VaultScopedInput",
    "BaseNoteInput",
    "BaseFolderInput",
    "BaseSectionInput",
    # Metadata models
    "ReadNoteInput",
    "GetFrontmatterInput",
    "UpdateFrontmatterInput",
    "SetPropertyInput",
    "GetTagsInput",
    "TagsInput",
    "AddAliasesInput",
    "VaultTagsInput",
    "NoteOutlineInput",
    "ReadSectionInput",
    "InsertUnderHeadingInput",
    # Link models
    "GetOutgoingLinksInput",
    "GetBacklinksInput",
    "FindBrokenLinksInput",
    "FindOrphanNotesInput",
    "GetLinkGraphInput",
    "AddLinkInput",
    # Note models
    "CreateNoteInput",
    "UpdateNoteInput",
    "AppendToNoteInput",
    "PrependToNoteInput",
    "ReplaceInNoteInput",
    "DeleteNoteInput",
    "CopyNoteInput",
    "InsertAtTextInput",
    # Search models
    "SimpleSearchInput",
    "SearchByTagInput",
    "FindNotesByNameInput",
    "SearchInFolderInput",
    "RecentNotesInput",
    "SearchWithContextInput",
    # Folder models
    "ListFilesInput",
    "ListAllFilesInput",
    "VaultStructureInput",
    "FileStatsInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
]
