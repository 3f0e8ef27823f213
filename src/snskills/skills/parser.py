"""
Skill parser for snskills.

Splits a skill document into its YAML frontmatter and markdown body, and the
body into sections keyed by level-2 heading.
"""

import re
from pathlib import Path
from typing import Any

import yaml

FRONTMATTER_DELIMITER = "---"
INTRO_SECTION = "intro"
BYTE_ORDER_MARK = "\ufeff"

# Only "## Heading" is a section boundary; "###" and deeper stay in the text
SECTION_HEADING = re.compile(r"^##\s+(\S.*?)\s*$")


class SkillError(Exception):
    """Base error for skill operations."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = path
        super().__init__(f"{message} (at {path})" if path else message)


class SkillParseError(SkillError):
    """Malformed frontmatter in a skill document."""

    pass


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == FRONTMATTER_DELIMITER


def parse_frontmatter(content: str, path: str | Path | None = None) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter from a markdown document.

    Frontmatter is delimited by a line of --- at the very start and a
    matching line after it. Trailing whitespace on a delimiter line and a
    leading UTF-8 byte order mark are ignored. Without a complete block, the
    metadata is empty and the body is the input unchanged.

    Args:
        content: The full document text.
        path: Optional path for error messages.

    Returns:
        Tuple of (metadata dict, body).

    Raises:
        SkillParseError: If the block is not valid YAML or not a mapping.
    """
    lines = content.removeprefix(BYTE_ORDER_MARK).split("\n")
    if not lines or not _is_delimiter(lines[0]):
        return {}, content

    end_index = None
    for i, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            end_index = i
            break

    if end_index is None:
        # No closing delimiter found
        return {}, content

    frontmatter_text = "\n".join(lines[1:end_index])
    body = "\n".join(lines[end_index + 1 :])

    try:
        metadata = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        raise SkillParseError(f"Invalid YAML frontmatter: {e}", path) from e

    if metadata is None:
        return {}, body

    if not isinstance(metadata, dict):
        raise SkillParseError(
            f"Frontmatter must be a YAML mapping, got {type(metadata).__name__}", path
        )

    return metadata, body


def extract_sections(body: str) -> dict[str, str]:
    """Split a markdown body into sections keyed by lowercased heading.

    Content before the first heading goes under "intro" and is only kept
    when non-empty. Every heading produces an entry, even an empty one. When
    a heading repeats, the later content replaces the earlier.

    Args:
        body: Markdown body (frontmatter already removed).

    Returns:
        Mapping of section name to trimmed content.
    """
    sections: dict[str, str] = {}
    current: str | None = None
    buffer: list[str] = []

    def flush() -> None:
        text = "\n".join(buffer).strip()
        if current is None:
            if text:
                sections[INTRO_SECTION] = text
        else:
            sections[current] = text

    for line in body.split("\n"):
        match = SECTION_HEADING.match(line.rstrip("\r"))
        if match:
            flush()
            current = match.group(1).lower()
            buffer = []
        else:
            buffer.append(line)

    flush()
    return sections


def extract_section_names(body: str) -> list[str]:
    """List level-2 heading names in document order, original casing."""
    names = []
    for line in body.split("\n"):
        match = SECTION_HEADING.match(line.rstrip("\r"))
        if match:
            names.append(match.group(1))
    return names


def parse_document(
    content: str, path: str | Path | None = None
) -> tuple[dict[str, Any], dict[str, str], str]:
    """Parse a document into (metadata, sections, body)."""
    metadata, body = parse_frontmatter(content, path)
    return metadata, extract_sections(body), body
