"""Module-level constants for the Obsidian notes MCP server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_PATH_ENV = "OBSIDIAN_NOTES_CONFIG"

# Limits
MAX_FRONTMATTER_BYTES = 10_240
DEFAULT_MAX_DEPTH = 10
DEFAULT_READ_CAP = 500
BROKEN_LINK_SCAN_CAP = 200
ORPHAN_SCAN_CAP = 300
TAG_SCAN_CAP = 500
ORPHAN_RESULT_LIMIT = 100
MAX_GRAPH_NOTES = 500
DEFAULT_GRAPH_NOTES = 100
BACKLINK_CONTEXT_LINES = 3

# Listing
LIST_DIRECTORY_LIMIT = 100
LIST_FILE_LIMIT = 200
STRUCTURE_MAX_DEPTH = 5
FILE_STATS_MAX_DEPTH = 15

# Search
SEARCH_RESULT_LIMIT = 20
SEARCH_SNIPPETS_PER_NOTE = 3
SNIPPET_CONTEXT_CHARS = 100
RECENT_NOTES_LIMIT = 10
CONTEXT_RESULT_LIMIT = 10
CONTEXT_SNIPPET_LENGTH = 150

# Concurrency
DEFAULT_MAX_WORKERS = 8
DEFAULT_READ_TIMEOUT = 30.0  # seconds

# Summaries
DEFAULT_SUMMARY_LENGTH = 200
NOTE_STATS_SUMMARY_LENGTH = 150

# Logging
LOG_LEVEL = "INFO"
