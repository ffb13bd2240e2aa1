"""Regex-based extraction of headings, links, tags, and summaries from markdown."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal, Optional

from obsidian_notes.constants import DEFAULT_SUMMARY_LENGTH

LinkKind = Literal["internal", "external", "tag"]

# Pattern for matching markdown headings (H1-H6) on a single line
HEADING_PATTERN = re.compile(r"^(?P<hashes>#{1,6})\s+(?P<title>.+)$")

# [[target]], [[target|display]], [[target#heading]], [[target#heading|display]], ![[embed]]
WIKILINK_PATTERN = re.compile(
    r"(?P<embed>!?)\[\[(?P<target>[^\]|#]+)(?:#(?P<heading>[^\]|]+))?(?:\|(?P<display>[^\]]+))?\]\]"
)
MARKDOWN_LINK_PATTERN = re.compile(r"(?P<embed>!?)\[(?P<display>[^\]]+)\]\((?P<url>[^)]+)\)")
TAG_PATTERN = re.compile(r"(?<![A-Za-z0-9_])#(?P<tag>[A-Za-z][A-Za-z0-9_/-]*)")

_FRONTMATTER_BLOCK = re.compile(r"\A---\r?\n.*?^---[ \t]*\r?(?:\n|\Z)", re.DOTALL | re.MULTILINE)
_CODE_FENCE = re.compile(r"```.*?```", re.DOTALL)
_INLINE_CODE = re.compile(r"`[^`]+`")
_HEADING_LINE = re.compile(r"^#+\s+.+$", re.MULTILINE)
_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]+\)")
_EMBED = re.compile(r"!\[\[[^\]]*\]\]")
_WIKILINK_TEXT = re.compile(r"\[\[(?P<target>[^\]|]+)(?:\|(?P<display>[^\]]+))?\]\]")
_MARKDOWN_LINK_TEXT = re.compile(r"\[(?P<display>[^\]]+)\]\([^)]+\)")
_EMPHASIS_CHARS = re.compile(r"[#*_~`]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Heading:
    """An ATX heading located in a markdown document."""

    level: int
    text: str
    line_number: int
    raw_line: str

    def as_payload(self) -> dict[str, object]:
        return {
            "level": self.level,
            "text": self.text,
            "line": self.line_number,
        }


@dataclass(frozen=True)
class Link:
    """A link found in note text.

    ``target`` keeps the ``note#heading`` form for internal links that point at
    a heading; use :attr:`note_name` for the bare note reference.
    """

    source: str
    target: str
    display_text: str
    is_embed: bool
    kind: LinkKind

    @property
    def note_name(self) -> str:
        return self.target.split("#", 1)[0].strip()

    @property
    def heading(self) -> Optional[str]:
        if "#" not in self.target or self.kind != "internal":
            return None
        return self.target.split("#", 1)[1]


# ==============================================================================
# HEADINGS & SECTIONS
# ==============================================================================


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text``, accepting both ``\\n`` and ``\\r\\n`` endings."""
    start = 0
    while True:
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        line = text[start:end]
        if line.endswith("\r"):
            line = line[:-1]
        yield line
        start = end + 1


class HeadingScan:
    """Lazy, restartable view over the headings of a document.

    Every iteration rescans the text, so the same object can be consumed
    multiple times.
    """

    def __init__(self, text: str) -> None:
        self._text = text

    def __iter__(self) -> Iterator[Heading]:
        for line_number, line in enumerate(iter_lines(self._text), start=1):
            match = HEADING_PATTERN.match(line)
            if match is None:
                continue
            yield Heading(
                level=len(match.group("hashes")),
                text=match.group("title").strip(),
                line_number=line_number,
                raw_line=line,
            )


def extract_headings(text: str) -> HeadingScan:
    """Return the ATX headings of ``text`` in document order.

    Setext headings (``Title`` underlined with ``===``) are not recognized.
    """
    return HeadingScan(text)


def _section_line_bounds(
    text: str, heading_text: str
) -> Optional[tuple[Heading, int, list[str]]]:
    """Locate a heading and the exclusive end line index of its section."""
    wanted = heading_text.strip().lower()
    headings = list(extract_headings(text))
    lines = list(iter_lines(text))

    for index, heading in enumerate(headings):
        if heading.text.lower() != wanted:
            continue
        end = len(lines)
        for following in headings[index + 1 :]:
            if following.level <= heading.level:
                end = following.line_number - 1
                break
        return heading, end, lines
    return None


def section_under(text: str, heading_text: str) -> Optional[str]:
    """Return the content under ``heading_text``, or ``None`` if no heading matches.

    The match is case-insensitive on the full heading text. The section runs from
    the line after the heading to the next heading of the same or a higher level
    (or the end of the document) and is returned stripped.
    """
    located = _section_line_bounds(text, heading_text)
    if located is None:
        return None
    heading, end, lines = located
    return "\n".join(lines[heading.line_number : end]).strip()


def insert_under_heading(
    text: str,
    heading_text: str,
    new_content: str,
    position: Literal["start", "end"] = "end",
) -> str:
    """Insert ``new_content`` at the start or end of a heading's section.

    When the heading does not exist the content is appended to the end of the
    document, separated by a blank line. A document written with ``\\r\\n``
    keeps ``\\r\\n`` line endings.
    """
    newline = "\r\n" if "\r\n" in text else "\n"
    located = _section_line_bounds(text, heading_text)
    if located is None:
        return f"{text}{newline}{newline}{new_content}"

    heading, end, lines = located
    if position == "start":
        lines[heading.line_number : heading.line_number] = ["", new_content]
    else:
        lines[end:end] = [new_content, ""]
    return newline.join(lines)


def _line_containing(lines: list[str], target_text: str) -> Optional[int]:
    for index, line in enumerate(lines):
        if target_text in line:
            return index
    return None


def insert_after_text(text: str, target_text: str, new_content: str) -> str:
    """Insert ``new_content`` on its own line after the first line containing ``target_text``.

    Without a matching line the content is appended after a blank line.
    """
    newline = "\r\n" if "\r\n" in text else "\n"
    lines = list(iter_lines(text))
    index = _line_containing(lines, target_text)
    if index is None:
        return f"{text}{newline}{newline}{new_content}"
    lines.insert(index + 1, new_content)
    return newline.join(lines)


def insert_before_text(text: str, target_text: str, new_content: str) -> str:
    """Insert ``new_content`` on its own line before the first line containing ``target_text``.

    Without a matching line the content is prepended, followed by a blank line.
    """
    newline = "\r\n" if "\r\n" in text else "\n"
    lines = list(iter_lines(text))
    index = _line_containing(lines, target_text)
    if index is None:
        return f"{new_content}{newline}{newline}{text}"
    lines.insert(index, new_content)
    return newline.join(lines)


# ==============================================================================
# LINKS & TAGS
# ==============================================================================


def extract_internal_links(text: str, source: str = "") -> list[Link]:
    """Extract ``[[wikilinks]]`` and ``![[embeds]]`` in order of appearance."""
    links: list[Link] = []
    for match in WIKILINK_PATTERN.finditer(text):
        target = match.group("target").strip()
        heading = (match.group("heading") or "").strip()
        display = (match.group("display") or "").strip()
        links.append(
            Link(
                source=source,
                target=f"{target}#{heading}" if heading else target,
                display_text=display or target,
                is_embed=match.group("embed") == "!",
                kind="internal",
            )
        )
    return links


def extract_external_links(text: str, source: str = "") -> list[Link]:
    """Extract ``[display](url)`` links whose URL is ``http://`` or ``https://``.

    Other schemes and relative file links are not classified.
    """
    links: list[Link] = []
    for match in MARKDOWN_LINK_PATTERN.finditer(text):
        url = match.group("url").strip()
        if not url.startswith(("http://", "https://")):
            continue
        links.append(
            Link(
                source=source,
                target=url,
                display_text=match.group("display"),
                is_embed=match.group("embed") == "!",
                kind="external",
            )
        )
    return links


def extract_tag_links(text: str, source: str = "") -> list[Link]:
    """Extract inline ``#tags``.

    A tag starts with a letter and may contain letters, digits, ``_``, ``-`` and
    ``/``. A ``#`` directly after a word character (``foo#bar``) is not a tag.
    Fenced code blocks are scanned like any other text; strip them first if
    that matters to the caller.
    """
    return [
        Link(
            source=source,
            target=match.group("tag"),
            display_text=f"#{match.group('tag')}",
            is_embed=False,
            kind="tag",
        )
        for match in TAG_PATTERN.finditer(text)
    ]


def extract_all_links(text: str, source: str) -> list[Link]:
    """Return internal links, then external links, then tags found in ``text``."""
    return [
        *extract_internal_links(text, source),
        *extract_external_links(text, source),
        *extract_tag_links(text, source),
    ]


def create_wikilink(path: str, display_text: Optional[str] = None) -> str:
    """Build a wikilink to ``path``, dropping a trailing ``.md``."""
    link_path = path[:-3] if path.endswith(".md") else path
    if display_text and display_text != link_path:
        return f"[[{link_path}|{display_text}]]"
    return f"[[{link_path}]]"


def create_embed(path: str) -> str:
    return f"![[{path}]]"


# ==============================================================================
# SUMMARIES & STATISTICS
# ==============================================================================


def _link_display(match: re.Match[str]) -> str:
    return (match.group("display") or match.group("target")).strip()


def _strip_frontmatter_and_code(text: str) -> str:
    stripped = _FRONTMATTER_BLOCK.sub("", text, count=1)
    stripped = _CODE_FENCE.sub("", stripped)
    return _INLINE_CODE.sub("", stripped)


def _replace_links_with_text(text: str) -> str:
    replaced = _WIKILINK_TEXT.sub(_link_display, text)
    return _MARKDOWN_LINK_TEXT.sub(lambda match: match.group("display"), replaced)


def summarize(text: str, max_length: int = DEFAULT_SUMMARY_LENGTH) -> str:
    """Produce a plain-text excerpt of at most ``max_length + 3`` characters.

    Frontmatter, code, heading lines, images and embeds are removed; links are
    replaced by their display text. When truncation is needed the excerpt is cut
    at the last space if that space falls within the final 30% of the budget,
    otherwise at exactly ``max_length``; either way ``"..."`` is appended.

    Raises:
        ValueError: If ``max_length`` is negative.
    """
    if max_length < 0:
        raise ValueError("max_length must be zero or greater.")

    cleaned = _strip_frontmatter_and_code(text)
    cleaned = _HEADING_LINE.sub("", cleaned)
    cleaned = _IMAGE.sub("", cleaned)
    cleaned = _EMBED.sub("", cleaned)
    cleaned = _replace_links_with_text(cleaned)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()

    if len(cleaned) <= max_length:
        return cleaned

    truncated = cleaned[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.7:
        return truncated[:last_space] + "..."
    return truncated + "..."


def count_words(text: str) -> int:
    """Count whitespace-delimited words, ignoring frontmatter, code, and markup."""
    plain = _replace_links_with_text(_strip_frontmatter_and_code(text))
    plain = _EMPHASIS_CHARS.sub("", plain)
    return sum(1 for word in _WHITESPACE.split(plain) if word)
