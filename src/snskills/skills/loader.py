"""
Skill loader for snskills.

Loads and fully parses individual skills on demand. Loading is strict: a
missing file, unreadable file, or malformed frontmatter is reported to the
caller immediately.
"""

import logging
from pathlib import Path

from snskills.config import Config
from snskills.skills.discovery import DEFAULT_SKILL_FILENAME, resolve_skill_file
from snskills.skills.models import (
    DEFAULT_ESTIMATED_TIME,
    SkillDocument,
    normalize_metadata,
)
from snskills.skills.parser import SkillError, extract_sections, parse_frontmatter

logger = logging.getLogger(__name__)


class SkillNotFoundError(SkillError):
    """Skill id does not resolve to a file."""

    def __init__(self, skill_id: str, root: Path | None = None):
        self.skill_id = skill_id
        self.root = root
        super().__init__(f"Skill not found: {skill_id}", root)


class SkillLoader:
    """Load full skill documents from a skills root."""

    def __init__(self, root: Path, skill_filename: str = DEFAULT_SKILL_FILENAME):
        """Initialize the loader.

        Args:
            root: Skills root directory.
            skill_filename: Fixed filename inside wrapped skill directories.
        """
        self.root = Path(root)
        self.skill_filename = skill_filename

    @staticmethod
    def from_config(config: Config, root: Path | str | None = None) -> "SkillLoader":
        """Create a SkillLoader from config, optionally overriding the root."""
        return SkillLoader(config.skills.resolve_root(root), config.skills.skill_filename)

    def resolve(self, skill_id: str) -> Path:
        """Resolve a skill id to its file.

        Raises:
            SkillNotFoundError: If nothing resolves.
        """
        file_path = resolve_skill_file(self.root, skill_id, self.skill_filename)
        if file_path is None:
            raise SkillNotFoundError(skill_id, self.root)
        return file_path

    def read_raw(self, skill_id: str) -> str:
        """Read the raw text of a skill file, frontmatter included.

        Raises:
            SkillNotFoundError: If the skill does not exist.
            OSError: If the file exists but cannot be read.
        """
        file_path = self.resolve(skill_id)
        try:
            return file_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise SkillNotFoundError(skill_id, self.root) from e

    def load(self, skill_id: str) -> SkillDocument:
        """Load a skill by id (e.g. "itsm/incident-triage").

        Args:
            skill_id: Skill identifier (category/name).

        Returns:
            Parsed SkillDocument.

        Raises:
            SkillNotFoundError: If the skill does not exist.
            SkillParseError: If the frontmatter is malformed.
            OSError: If the file exists but cannot be read.
        """
        content = self.read_raw(skill_id)
        logger.debug(f"Loaded skill file for {skill_id}")
        return self.parse(content, skill_id)

    def load_multiple(self, skill_ids: list[str]) -> list[SkillDocument]:
        """Load several skills, failing on the first error."""
        return [self.load(skill_id) for skill_id in skill_ids]

    @staticmethod
    def parse(content: str, path: str = "unknown") -> SkillDocument:
        """Parse skill content from markdown with frontmatter.

        Args:
            content: Raw document text.
            path: Skill identifier used for the record.

        Returns:
            Parsed SkillDocument.

        Raises:
            SkillParseError: If the frontmatter is malformed.
        """
        metadata, body = parse_frontmatter(content, path)
        sections = extract_sections(body)

        # YAML allows non-string keys (2024:, on:); the record keys by name
        metadata = {str(key): value for key, value in metadata.items()}

        estimated_time = metadata.get("estimated_time")

        return SkillDocument(
            **normalize_metadata(path, metadata),
            estimated_time=str(estimated_time) if estimated_time else DEFAULT_ESTIMATED_TIME,
            sections=sections,
            raw_content=body,
            metadata=metadata,
            overview=sections.get("overview") or sections.get("description") or "",
            prerequisites=sections.get("prerequisites", ""),
            procedure=sections.get("procedure") or sections.get("steps") or "",
            tool_usage=sections.get("tool usage") or sections.get("tools") or "",
            best_practices=sections.get("best practices", ""),
            troubleshooting=sections.get("troubleshooting", ""),
            examples=sections.get("examples", ""),
        )


def get_instructions(doc: SkillDocument) -> str:
    """Get the procedure text of a skill."""
    return doc.procedure


def tools_for_platform(doc: SkillDocument, platform: str) -> list[str]:
    """List the tools a skill uses on a given platform.

    Claude platforms combine the MCP and native buckets, ChatGPT uses the
    REST bucket, and any other platform gets every bucket.

    Args:
        doc: Loaded skill.
        platform: Platform token (case-insensitive).

    Returns:
        Tool identifiers in bucket order.
    """
    tools = doc.tools
    if not tools:
        return []

    platform = platform.lower()
    if platform in ("claude-code", "claude-desktop"):
        return [*tools.get("mcp", []), *tools.get("native", [])]
    if platform == "chatgpt":
        return list(tools.get("rest", []))

    return [tool for tool_list in tools.values() for tool in tool_list]


def to_prompt(doc: SkillDocument) -> str:
    """Render a condensed, prompt-ready version of a skill."""
    return (
        f"# {doc.name}\n\n"
        f"{doc.description}\n\n"
        f"## Procedure\n{doc.procedure}\n\n"
        f"## Best Practices\n{doc.best_practices}"
    )
