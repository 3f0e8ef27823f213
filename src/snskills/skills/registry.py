"""
Skill registry for snskills.

Discovers every skill under a root directory, keeps a lightweight record per
skill, and answers lookups through in-memory secondary indices. The registry
is rebuilt from the source files on every run; nothing is persisted.
"""

import logging
from pathlib import Path

from snskills.config import Config, get_config
from snskills.skills.discovery import (
    DEFAULT_SKILL_FILENAME,
    SkillEntry,
    iter_skill_entries,
    map_in_order,
)
from snskills.skills.models import RegistryStats, SkillInfo
from snskills.skills.parser import SkillParseError, parse_frontmatter

logger = logging.getLogger(__name__)

ANY_PLATFORM = "any"


class SkillRegistry:
    """Registry of discovered skills.

    Holds one SkillInfo per skill path plus four indices (tag, category,
    platform, complexity) mapping a lowercased key to skill paths in
    first-seen order.

    discover() is a single pass. Calling it again on a populated registry
    appends duplicate index entries; build a fresh registry instead.
    """

    def __init__(
        self,
        root: Path,
        skill_filename: str = DEFAULT_SKILL_FILENAME,
        max_workers: int = 1,
    ):
        """Initialize an empty registry.

        Args:
            root: Skills root directory (one subdirectory per category).
            skill_filename: Fixed filename inside wrapped skill directories.
            max_workers: Threads used to read files during discovery.
        """
        self.root = Path(root)
        self.skill_filename = skill_filename
        self.max_workers = max_workers

        self._skills: dict[str, SkillInfo] = {}
        self._by_tag: dict[str, list[str]] = {}
        self._by_category: dict[str, list[str]] = {}
        self._by_platform: dict[str, list[str]] = {}
        self._by_complexity: dict[str, list[str]] = {}
        self.discovered = False

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    def discover(self) -> None:
        """Discover and index all skills under the root.

        Only frontmatter is parsed. Files that cannot be read or whose
        frontmatter is malformed are skipped with a warning.
        """
        if not self.root.is_dir():
            logger.warning(f"Skills directory does not exist: {self.root}")
            self.discovered = True
            return

        entries = list(iter_skill_entries(self.root, self.skill_filename))
        records = map_in_order(self._read_entry, entries, self.max_workers)

        for record in records:
            if record is None:
                continue
            self._skills[record.path] = record
            self._index_skill(record)

        self.discovered = True
        logger.info(f"Discovered {len(self._skills)} skill(s) in {self.root}")

    def _read_entry(self, entry: SkillEntry) -> SkillInfo | None:
        try:
            content = entry.file_path.read_text(encoding="utf-8")
            metadata, _ = parse_frontmatter(content, entry.file_path)
        except SkillParseError as e:
            logger.warning(f"Could not parse skill {entry.skill_id}: {e}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read skill {entry.skill_id}: {e}")
            return None

        return SkillInfo.from_metadata(entry.skill_id, metadata)

    def _index_skill(self, skill: SkillInfo) -> None:
        """Add a skill to the secondary indices."""
        for tag in dict.fromkeys(t.lower() for t in skill.tags):
            self._by_tag.setdefault(tag, []).append(skill.path)

        self._by_category.setdefault(skill.category.lower(), []).append(skill.path)

        for platform in dict.fromkeys(p.lower() for p in skill.platforms):
            self._by_platform.setdefault(platform, []).append(skill.path)

        self._by_complexity.setdefault(skill.complexity.lower(), []).append(skill.path)

    def _lookup(self, paths: list[str]) -> list[SkillInfo]:
        return [self._skills[path] for path in paths]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find_by_tag(self, tag: str) -> list[SkillInfo]:
        """Find skills carrying a tag (case-insensitive)."""
        return self._lookup(self._by_tag.get(tag.lower(), []))

    def find_by_category(self, category: str) -> list[SkillInfo]:
        """Find skills in a category (case-insensitive)."""
        return self._lookup(self._by_category.get(category.lower(), []))

    def find_by_complexity(self, complexity: str) -> list[SkillInfo]:
        """Find skills at a complexity tier (case-insensitive)."""
        return self._lookup(self._by_complexity.get(complexity.lower(), []))

    def find_by_platform(self, platform: str) -> list[SkillInfo]:
        """Find skills usable on a platform.

        Platform-specific skills come first, followed by skills declared for
        "any" that were not already listed.
        """
        paths = self._by_platform.get(platform.lower(), [])
        any_paths = self._by_platform.get(ANY_PLATFORM, [])
        combined = list(dict.fromkeys([*paths, *any_paths]))
        return self._lookup(combined)

    def search(self, query: str) -> list[SkillInfo]:
        """Search skills by name, description, or tags.

        Case-insensitive substring match. This is a linear scan; the corpus is
        small enough that no inverted index is kept.
        """
        query_lower = query.lower()
        results = []

        for skill in self._skills.values():
            search_text = f"{skill.name} {skill.description} {' '.join(skill.tags)}".lower()
            if query_lower in search_text:
                results.append(skill)

        return results

    def get_all(self) -> list[SkillInfo]:
        """Get all skills in discovery order."""
        return list(self._skills.values())

    def get(self, path: str) -> SkillInfo | None:
        """Get a skill by path, or None if unknown."""
        return self._skills.get(path)

    def get_categories(self) -> list[str]:
        """Get all category names."""
        return list(self._by_category.keys())

    def get_tags(self) -> list[str]:
        """Get all tags."""
        return list(self._by_tag.keys())

    def get_platforms(self) -> list[str]:
        """Get all platforms declared by at least one skill."""
        return list(self._by_platform.keys())

    def get_stats(self) -> RegistryStats:
        """Compute statistics from the current indices."""
        return RegistryStats(
            total_skills=len(self._skills),
            categories=len(self._by_category),
            tags=len(self._by_tag),
            platforms=len(self._by_platform),
            by_category={k: len(v) for k, v in self._by_category.items()},
            by_complexity={k: len(v) for k, v in self._by_complexity.items()},
        )

    def __len__(self) -> int:
        """Get number of skills."""
        return len(self._skills)

    def __contains__(self, path: str) -> bool:
        """Check if a skill path is registered."""
        return path in self._skills

    def __repr__(self) -> str:
        """Representation."""
        return f"<SkillRegistry root={self.root} skills={len(self._skills)}>"


def create_registry(
    root: Path | str | None = None,
    config: Config | None = None,
    discover: bool = True,
) -> SkillRegistry:
    """Create a registry for a skills root.

    Args:
        root: Skills root. Defaults to the configured skills.root.
        config: Configuration to read defaults from. Loaded if not given.
        discover: Run discovery before returning.

    Returns:
        SkillRegistry, discovered unless discover=False.
    """
    if config is None:
        config = get_config()

    registry = SkillRegistry(
        root=config.skills.resolve_root(root),
        skill_filename=config.skills.skill_filename,
        max_workers=config.skills.max_workers,
    )
    if discover:
        registry.discover()
    return registry
