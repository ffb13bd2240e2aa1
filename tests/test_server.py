"""Tests that the server registers every tool."""

import asyncio
from pathlib import Path

from obsidian_notes.data_models import VaultConfiguration, VaultMetadata
from obsidian_notes.server import build_server

EXPECTED_TOOLS = {
    "list_vaults",
    "set_active_vault",
    "read_note",
    "get_frontmatter",
    "update_frontmatter",
    "set_frontmatter_property",
    "get_tags",
    "add_tags",
    "remove_tags",
    "add_aliases",
    "get_all_tags_in_vault",
    "get_note_outline",
    "read_note_section",
    "insert_under_heading",
    "get_outgoing_links",
    "get_backlinks",
    "find_broken_links",
    "find_orphan_notes",
    "add_link_to_note",
    "get_link_graph_data",
    "list_files",
    "list_all_files",
    "get_vault_structure",
    "get_file_stats",
    "create_note",
    "update_note",
    "append_to_note",
    "prepend_to_note",
    "replace_in_note",
    "insert_at_text",
    "copy_note",
    "delete_note",
    "simple_search",
    "search_by_tag",
    "find_notes_by_name",
    "search_in_folder",
    "get_recent_notes",
    "search_with_context",
}


def test_build_server_registers_all_tools(tmp_path: Path):
    vault = VaultMetadata(name="test", path=tmp_path, description="", exists=True)
    mcp = build_server(VaultConfiguration(default_vault="test", vaults={"test": vault}))
    tools = asyncio.run(mcp.list_tools())
    assert {tool.name for tool in tools} == EXPECTED_TOOLS


def test_every_tool_documents_its_payload(tmp_path: Path):
    vault = VaultMetadata(name="test", path=tmp_path, description="", exists=True)
    mcp = build_server(VaultConfiguration(default_vault="test", vaults={"test": vault}))
    tools = asyncio.run(mcp.list_tools())
    undocumented = [tool.name for tool in tools if "Returns:" not in (tool.description or "")]
    assert undocumented == []
