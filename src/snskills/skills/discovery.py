"""
Skill discovery for snskills.

Walks the skills tree and resolves skill identifiers to files. Two on-disk
layouts are supported for the same logical skill:

    <root>/<category>/<name>.md
    <root>/<category>/<name>/SKILL.md

The flat file wins when both exist.
"""

import concurrent.futures
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

DEFAULT_SKILL_FILENAME = "SKILL.md"
SKILL_SUFFIX = ".md"

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class SkillEntry:
    """A resolvable skill on disk."""

    skill_id: str
    category: str
    file_path: Path


def _is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def split_skill_id(skill_id: str) -> tuple[str, str] | None:
    """Split "category/name" into its parts.

    Returns:
        (category, name), or None if the id is not exactly two plain segments.
    """
    parts = skill_id.strip("/").split("/")
    if len(parts) != 2:
        return None
    if any(not part or part in (".", "..") for part in parts):
        return None
    return parts[0], parts[1]


def resolve_skill_file(
    root: Path, skill_id: str, skill_filename: str = DEFAULT_SKILL_FILENAME
) -> Path | None:
    """Resolve a skill id to the file that holds it.

    Args:
        root: Skills root directory.
        skill_id: Identifier of the form "category/name".
        skill_filename: Fixed filename inside a wrapped skill directory.

    Returns:
        Path to the skill file, or None if nothing resolves.
    """
    parts = split_skill_id(skill_id)
    if parts is None:
        return None

    category, name = parts
    category_dir = Path(root) / category

    flat_path = category_dir / f"{name}{SKILL_SUFFIX}"
    if flat_path.is_file():
        return flat_path

    wrapped_path = category_dir / name / skill_filename
    if wrapped_path.is_file():
        return wrapped_path

    return None


def iter_categories(root: Path) -> Iterator[Path]:
    """Yield category directories under root, sorted by name."""
    root = Path(root)
    if not root.is_dir():
        return

    for item in sorted(root.iterdir(), key=lambda p: p.name):
        if item.is_dir() and not _is_hidden(item):
            yield item


def iter_skill_ids(category_dir: Path) -> Iterator[str]:
    """Yield candidate skill names in a category, sorted and de-duplicated.

    Candidates are *.md file stems and subdirectory names. A candidate is not
    guaranteed to resolve; wrapped directories may lack their skill file.
    """
    names: set[str] = set()
    for item in category_dir.iterdir():
        if _is_hidden(item):
            continue
        if item.is_file() and item.suffix == SKILL_SUFFIX:
            names.add(item.stem)
        elif item.is_dir():
            names.add(item.name)

    yield from sorted(names)


def iter_skill_entries(
    root: Path, skill_filename: str = DEFAULT_SKILL_FILENAME
) -> Iterator[SkillEntry]:
    """Yield every resolvable skill under root in canonical order.

    Order is category name, then skill name. Entries whose expected file is
    absent are skipped silently.
    """
    for category_dir in iter_categories(root):
        category = category_dir.name
        for name in iter_skill_ids(category_dir):
            skill_id = f"{category}/{name}"
            file_path = resolve_skill_file(root, skill_id, skill_filename)
            if file_path is None:
                continue
            yield SkillEntry(skill_id=skill_id, category=category, file_path=file_path)


def map_in_order(func: Callable[[T], R], items: Iterable[T], max_workers: int = 1) -> list[R]:
    """Apply func to items, optionally on a thread pool, keeping input order.

    Args:
        func: Function to apply. It should not raise for expected failures.
        items: Inputs.
        max_workers: Thread count; 1 runs sequentially.

    Returns:
        Results in the same order as items.
    """
    items = list(items)
    if max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(func, items))
