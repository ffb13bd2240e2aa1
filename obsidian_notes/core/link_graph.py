"""Vault-wide link analysis: backlinks, broken links, orphans, and graph export.

Every analysis works on a :class:`VaultSnapshot`, which is rebuilt for each
request from a :class:`~obsidian_notes.core.vault_operations.VaultAccessor`.
Nothing is cached between calls, so results always reflect the vault as it was
when the snapshot was read.
"""

from __future__ import annotations

import logging
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Optional

from obsidian_notes.constants import (
    BACKLINK_CONTEXT_LINES,
    BROKEN_LINK_SCAN_CAP,
    DEFAULT_GRAPH_NOTES,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_WORKERS,
    DEFAULT_READ_CAP,
    ORPHAN_RESULT_LIMIT,
    ORPHAN_SCAN_CAP,
)
from obsidian_notes.core.frontmatter_codec import parse_frontmatter
from obsidian_notes.core.markdown_structure import (
    Link,
    extract_external_links,
    extract_internal_links,
    extract_tag_links,
    iter_lines,
)
from obsidian_notes.core.vault_operations import (
    VaultAccessor,
    note_name,
    strip_markdown_suffix,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# SNAPSHOT
# ==============================================================================


@dataclass(frozen=True)
class Note:
    """A note read from the vault, split into frontmatter and body."""

    path: str
    raw_content: str
    frontmatter: dict[str, Any] = field(default_factory=dict, compare=False)
    body: str = ""

    @classmethod
    def from_content(cls, path: str, raw_content: str) -> Note:
        parsed = parse_frontmatter(raw_content)
        return cls(path=path, raw_content=raw_content, frontmatter=parsed.frontmatter, body=parsed.body)

    @property
    def internal_links(self) -> list[Link]:
        return extract_internal_links(self.raw_content, self.path)


@dataclass
class VaultSnapshot:
    """Per-request view of the vault.

    Attributes:
        notes: Notes whose content was read, in listing order.
        paths: Every markdown path enumerated, in listing order.
        files: Every file path enumerated, attachments included.
        scanned: Number of reads that completed (successfully or not).
        truncated_at: Index into ``paths`` of the first note whose content was
            not obtained because of the read cap or the deadline.
        skipped: Paths whose read failed.
        timed_out: True when the read deadline expired.
    """

    notes: list[Note]
    paths: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    scanned: int = 0
    truncated_at: Optional[int] = None
    skipped: list[str] = field(default_factory=list)
    timed_out: bool = False

    @classmethod
    def from_notes(cls, notes: list[Note]) -> VaultSnapshot:
        """Build a complete snapshot from notes already in memory."""
        paths = [note.path for note in notes]
        return cls(notes=list(notes), paths=paths, files=list(paths), scanned=len(notes))

    @property
    def truncated(self) -> bool:
        return self.truncated_at is not None


def _read_note(accessor: VaultAccessor, path: str) -> Note:
    return Note.from_content(path, accessor.get_file_content(path))


def build_snapshot(
    accessor: VaultAccessor,
    folder: str = "",
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    read_cap: int = DEFAULT_READ_CAP,
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: Optional[float] = None,
) -> VaultSnapshot:
    """Enumerate the vault and read up to ``read_cap`` markdown notes.

    Reads run on a thread pool of ``max_workers``. A note that fails to read is
    skipped. When ``timeout`` seconds pass before all reads finish, the pending
    reads are cancelled and the notes read so far are returned with
    ``timed_out`` set.

    Args:
        accessor: Source of file listings and note content.
        folder: Vault-relative folder to analyze (empty for the whole vault).
        max_depth: Maximum folder depth to enumerate.
        read_cap: Maximum number of notes whose content is read.
        max_workers: Size of the read thread pool.
        timeout: Deadline in seconds for all reads, or ``None`` for no deadline.

    Returns:
        The populated :class:`VaultSnapshot`.

    Raises:
        Exception: Whatever ``accessor.list_all_files`` raises; without a file
            listing no analysis can run.
    """
    items = accessor.list_all_files(folder, max_depth)
    files = [item.path for item in items if item.type == "file"]
    paths = [
        item.path
        for item in items
        if item.type == "file" and (item.extension or "").lower() == "md"
    ]

    to_read = paths[:read_cap]
    results: dict[int, Note] = {}
    skipped: list[int] = []
    unread: set[int] = set(range(len(to_read), len(paths)))
    timed_out = False

    executor = ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="vault-read")
    try:
        futures: dict[Future[Note], int] = {
            executor.submit(_read_note, accessor, path): index for index, path in enumerate(to_read)
        }
        done, pending = wait(futures, timeout=timeout, return_when=ALL_COMPLETED)
        for future in done:
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as exc:
                logger.debug("Skipping note '%s': %s", to_read[index], exc)
                skipped.append(index)
        if pending:
            timed_out = True
            for future in pending:
                future.cancel()
                unread.add(futures[future])
            logger.warning(
                "Read deadline of %ss expired with %d of %d notes pending",
                timeout,
                len(pending),
                len(to_read),
            )
    finally:
        executor.shutdown(wait=not timed_out, cancel_futures=True)

    snapshot = VaultSnapshot(
        notes=[results[index] for index in sorted(results)],
        paths=paths,
        files=files,
        scanned=len(results) + len(skipped),
        truncated_at=min(unread) if unread else None,
        skipped=[to_read[index] for index in sorted(skipped)],
        timed_out=timed_out,
    )
    logger.info(
        "Snapshot of '%s': %d notes listed, %d read, %d skipped%s",
        folder or "/",
        len(paths),
        len(snapshot.notes),
        len(skipped),
        " (timed out)" if timed_out else "",
    )
    return snapshot


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _normalized_forms(path: str) -> set[str]:
    """Lowercase lookup keys for a note: full path, path without ``.md``, bare name."""
    return {path.lower(), strip_markdown_suffix(path).lower(), note_name(path).lower()}


def _link_key(link: Link) -> str:
    return link.note_name.lower()


# ==============================================================================
# REPORTS
# ==============================================================================


@dataclass
class OutgoingLinks:
    path: str
    internal: list[Link]
    external: list[Link]
    tags: list[Link]

    def as_payload(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "total_links": len(self.internal) + len(self.external) + len(self.tags),
            "internal_links": [
                {"target": link.target, "display_text": link.display_text, "is_embed": link.is_embed}
                for link in self.internal
            ],
            "external_links": [
                {"url": link.target, "display_text": link.display_text} for link in self.external
            ],
            "tags": [link.target for link in self.tags],
        }


@dataclass
class Backlink:
    source: str
    link_count: int
    contexts: list[str] = field(default_factory=list)


@dataclass
class BacklinkReport:
    target: str
    backlinks: list[Backlink]
    notes_checked: int
    truncated: bool = False

    def as_payload(self, include_context: bool = False) -> dict[str, Any]:
        entries: list[dict[str, Any]] = []
        for backlink in self.backlinks:
            entry: dict[str, Any] = {"source": backlink.source, "link_count": backlink.link_count}
            if include_context:
                entry["contexts"] = backlink.contexts
            entries.append(entry)
        return {
            "target": self.target,
            "backlinks_count": len(self.backlinks),
            "backlinks": entries,
            "notes_checked": self.notes_checked,
            "truncated": self.truncated,
        }


@dataclass(frozen=True)
class BrokenLink:
    source: str
    target: str


@dataclass
class BrokenLinkReport:
    files_checked: int
    broken_links: list[BrokenLink]
    skipped: list[str] = field(default_factory=list)
    truncated: bool = False

    def as_payload(self) -> dict[str, Any]:
        return {
            "files_checked": self.files_checked,
            "broken_links_count": len(self.broken_links),
            "broken_links": [{"source": link.source, "target": link.target} for link in self.broken_links],
            "skipped": self.skipped,
            "truncated": self.truncated,
        }


@dataclass(frozen=True)
class OrphanNote:
    path: str
    has_outgoing_links: bool


@dataclass
class OrphanReport:
    total_notes: int
    notes_checked: int
    orphans: list[OrphanNote]
    limit: int = ORPHAN_RESULT_LIMIT

    @property
    def truncated(self) -> bool:
        return len(self.orphans) > self.limit

    def as_payload(self) -> dict[str, Any]:
        return {
            "total_notes": self.total_notes,
            "notes_checked": self.notes_checked,
            "orphan_count": len(self.orphans),
            "orphans": [
                {"path": orphan.path, "has_outgoing_links": orphan.has_outgoing_links}
                for orphan in self.orphans[: self.limit]
            ],
            "truncated": self.truncated,
        }


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str


@dataclass
class GraphReport:
    nodes: list[GraphNode]
    edges: list[GraphEdge]

    def as_payload(self) -> dict[str, Any]:
        return {
            "node_count": len(self.nodes),
            "edge_count": len(self.edges),
            "nodes": [{"id": node.id, "label": node.label} for node in self.nodes],
            "edges": [{"source": edge.source, "target": edge.target} for edge in self.edges],
        }


# ==============================================================================
# ANALYSES
# ==============================================================================


def outgoing_links(note: Note) -> OutgoingLinks:
    """Classify every link leaving ``note``."""
    return OutgoingLinks(
        path=note.path,
        internal=extract_internal_links(note.raw_content, note.path),
        external=extract_external_links(note.raw_content, note.path),
        tags=extract_tag_links(note.raw_content, note.path),
    )


def backlinks(target: str, snapshot: VaultSnapshot, include_context: bool = False) -> BacklinkReport:
    """Find the notes whose internal links point at ``target``.

    A link counts when its note part (without ``#heading``) names the target by
    bare name, by full vault path, or by a trailing part of the path, with or
    without ``.md``. The target never counts as its own backlink.

    Args:
        target: Vault-relative path of the linked note (``.md`` optional).
        snapshot: Vault snapshot to scan.
        include_context: Collect up to three lines containing matching links.
    """
    target_path = target if target.lower().endswith(".md") else f"{target}.md"
    target_key = strip_markdown_suffix(target_path).lower()
    bare_name = note_name(target_path).lower()

    def references(link: Link) -> bool:
        key = strip_markdown_suffix(_link_key(link))
        if not key:
            return False
        return key == bare_name or key == target_key or target_key.endswith(f"/{key}")

    entries: list[Backlink] = []
    for note in snapshot.notes:
        if note.path.lower() == target_path.lower():
            continue
        count = sum(1 for link in note.internal_links if references(link))
        if not count:
            continue

        contexts: list[str] = []
        if include_context:
            for line in iter_lines(note.raw_content):
                if any(references(link) for link in extract_internal_links(line)):
                    contexts.append(line.strip())
                    if len(contexts) >= BACKLINK_CONTEXT_LINES:
                        break
        entries.append(Backlink(source=note.path, link_count=count, contexts=contexts))

    return BacklinkReport(
        target=target_path,
        backlinks=entries,
        notes_checked=len(snapshot.notes),
        truncated=snapshot.truncated,
    )


def broken_links(snapshot: VaultSnapshot, scan_cap: int = BROKEN_LINK_SCAN_CAP) -> BrokenLinkReport:
    """Report internal links whose target matches no file in the vault.

    Every listed note is indexed as its full path, its path without ``.md`` and
    its bare name (all lowercase); attachments are indexed by path and file
    name. A link naming a trailing part of a listed path (``[[sub/B]]`` for
    ``x/sub/B.md``) also resolves. Only the first ``scan_cap`` notes of the
    snapshot are checked.
    """
    existing: set[str] = set()
    for path in snapshot.paths:
        existing.update(_normalized_forms(path))
    for path in snapshot.files:
        lowered = path.lower()
        existing.add(lowered)
        existing.add(lowered.rsplit("/", 1)[-1])
    listed = [path.lower() for path in snapshot.files] + [path.lower() for path in snapshot.paths]

    def resolves(key: str) -> bool:
        if key in existing or f"{key}.md" in existing:
            return True
        return any(path.endswith(f"/{key}.md") or path.endswith(f"/{key}") for path in listed)

    checked = snapshot.notes[:scan_cap]
    found: list[BrokenLink] = []
    for note in checked:
        for link in note.internal_links:
            key = _link_key(link)
            if not key or resolves(key):
                continue
            found.append(BrokenLink(source=note.path, target=link.target))

    logger.debug("Checked %d notes, %d broken links", len(checked), len(found))
    return BrokenLinkReport(
        files_checked=len(checked),
        broken_links=found,
        skipped=list(snapshot.skipped),
        truncated=snapshot.truncated or len(snapshot.notes) > scan_cap,
    )


def orphan_notes(
    snapshot: VaultSnapshot,
    include_unlinked: bool = False,
    scan_cap: int = ORPHAN_SCAN_CAP,
    limit: int = ORPHAN_RESULT_LIMIT,
) -> OrphanReport:
    """Find notes that no other note links to.

    Link targets are collected from the first ``scan_cap`` notes. A note is an
    orphan when neither its bare name (with or without ``.md``) nor its full
    path appears among those targets.

    With ``include_unlinked`` False only orphans that themselves link somewhere
    are reported; fully isolated notes are left out. With True every orphan is
    reported.
    """
    linked_to: set[str] = set()
    has_outgoing: set[str] = set()

    checked = snapshot.notes[:scan_cap]
    for note in checked:
        links = note.internal_links
        if links:
            has_outgoing.add(note.path)
        own_forms = _normalized_forms(note.path)
        for link in links:
            key = _link_key(link)
            if not key or key in own_forms:
                continue
            linked_to.add(key)
            linked_to.add(f"{key}.md")

    orphans: list[OrphanNote] = []
    for path in snapshot.paths:
        name = note_name(path).lower()
        if name in linked_to or f"{name}.md" in linked_to or path.lower() in linked_to:
            continue
        has_links = path in has_outgoing
        if include_unlinked or has_links:
            orphans.append(OrphanNote(path=path, has_outgoing_links=has_links))

    return OrphanReport(
        total_notes=len(snapshot.paths),
        notes_checked=len(checked),
        orphans=orphans,
        limit=limit,
    )


def graph_export(snapshot: VaultSnapshot, max_notes: int = DEFAULT_GRAPH_NOTES) -> GraphReport:
    """Build nodes and edges for the first ``max_notes`` notes of the snapshot.

    Embeds are ignored. Links whose target is outside the capped node set are
    dropped rather than reported. Duplicate edges are collapsed.

    Raises:
        ValueError: If ``max_notes`` is smaller than 1.
    """
    if max_notes < 1:
        raise ValueError("max_notes must be at least 1.")

    capped = snapshot.paths[:max_notes]
    nodes = [GraphNode(id=strip_markdown_suffix(path), label=note_name(path)) for path in capped]

    # Full-path forms take precedence over bare names when names collide.
    resolve: dict[str, str] = {}
    for path, node in zip(capped, nodes):
        resolve.setdefault(path.lower(), node.id)
        resolve.setdefault(node.id.lower(), node.id)
    for path, node in zip(capped, nodes):
        resolve.setdefault(note_name(path).lower(), node.id)

    members = set(capped)
    edges: list[GraphEdge] = []
    seen: set[tuple[str, str]] = set()
    for note in snapshot.notes:
        if note.path not in members:
            continue
        source_id = strip_markdown_suffix(note.path)
        for link in note.internal_links:
            if link.is_embed:
                continue
            target_id = resolve.get(_link_key(link))
            if target_id is None or (source_id, target_id) in seen:
                continue
            seen.add((source_id, target_id))
            edges.append(GraphEdge(source=source_id, target=target_id))

    return GraphReport(nodes=nodes, edges=edges)
