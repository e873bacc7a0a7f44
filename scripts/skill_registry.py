#!/usr/bin/env python3
"""
Skill Tree Builder - Skill Registry

Discovers every skill document under the skills directory and builds a
name-indexed registry. Discovery order is the lexicographic order of the
repo-relative paths, so generation and validation never depend on the
filesystem's enumeration order.

The registry is deliberately permissive: missing or inconsistent metadata
is left for the validator to report. Only I/O failures and duplicate names
abort construction.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from skill_frontmatter import parse_frontmatter
from skill_tree_common import ROUTER_ROLE, DuplicateSkillError, RegistryError
from skill_tree_config import SkillTreeConfig


@dataclass(frozen=True)
class SkillDocument:
    """One discovered skill document.

    Attributes:
        path: Repo-relative POSIX path of the document
        name: Declared name, or the containing directory's name
        description: Free-text summary
        category: Category value as written (may be empty or unknown)
        parent: Name of the parent router (may be empty)
        role: Role value ("router" marks a hierarchy root)
        model_invocation_disabled: True only for a literal "true" flag
        content: Raw document text
    """

    path: PurePosixPath
    name: str
    description: str = ""
    category: str = ""
    parent: str = ""
    role: str = ""
    model_invocation_disabled: bool = False
    content: str = field(default="", repr=False)

    @property
    def is_router(self) -> bool:
        return self.role == ROUTER_ROLE

    @property
    def directory(self) -> PurePosixPath:
        """Repo-relative directory containing the document."""
        return self.path.parent

    @classmethod
    def from_content(cls, path: PurePosixPath, content: str) -> "SkillDocument":
        """Build a document record from its text, applying the name fallback."""
        meta = parse_frontmatter(content)
        return cls(
            path=path,
            name=meta.get("name") or path.parent.name,
            description=meta.get("description", ""),
            category=meta.get("category", ""),
            parent=meta.get("parent", ""),
            role=meta.get("role", ""),
            model_invocation_disabled=meta.get("disable_model_invocation") == "true",
            content=content,
        )


class SkillRegistry:
    """Mapping from skill name to SkillDocument, iterated in path order."""

    def __init__(self, root: Path, skills: list[SkillDocument] | None = None) -> None:
        self.root = root
        self._by_name: dict[str, SkillDocument] = {}
        for skill in skills or []:
            self.add(skill)

    def add(self, skill: SkillDocument) -> None:
        """Insert a skill.

        Raises:
            DuplicateSkillError: if another document already uses the name
        """
        existing = self._by_name.get(skill.name)
        if existing is not None:
            raise DuplicateSkillError(f"Duplicate skill name '{skill.name}': {existing.path} and {skill.path}")
        self._by_name[skill.name] = skill

    def get(self, name: str) -> SkillDocument | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[SkillDocument]:
        return iter(sorted(self._by_name.values(), key=lambda s: s.path.as_posix()))

    def names(self) -> list[str]:
        return [skill.name for skill in self]

    def routers(self) -> list[SkillDocument]:
        return [skill for skill in self if skill.is_router]


# =============================================================================
# Discovery
# =============================================================================


def discover_skill_files(root: Path, skills_dir: str, filename: str) -> list[PurePosixPath]:
    """Find every skill document under root/skills_dir, recursively.

    Args:
        root: Repository root
        skills_dir: Skills directory, relative to root
        filename: Document file name to match (e.g. SKILL.md)

    Returns:
        Repo-relative POSIX paths, sorted lexicographically

    Raises:
        RegistryError: if the skills directory is missing or unreadable
    """
    base = root / skills_dir
    if not base.is_dir():
        raise RegistryError(f"Skills directory does not exist: {base}")

    try:
        found = [p for p in base.rglob(filename) if p.is_file()]
    except OSError as e:
        raise RegistryError(f"Could not scan {base}: {e}") from e

    return sorted(
        (PurePosixPath(p.relative_to(root).as_posix()) for p in found),
        key=lambda p: p.as_posix(),
    )


def load_skill(root: Path, rel_path: PurePosixPath) -> SkillDocument:
    """Read and parse one skill document.

    Raises:
        RegistryError: if the file cannot be read or decoded
    """
    file_path = root / rel_path
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RegistryError(f"Could not read {rel_path}: {e}") from e
    return SkillDocument.from_content(rel_path, content)


def build_registry(root: Path, config: SkillTreeConfig) -> SkillRegistry:
    """Scan the skills directory and build the registry.

    Any read failure aborts the whole build; no partial registry is returned.

    Raises:
        RegistryError: on I/O failures
        DuplicateSkillError: when two documents share a name
    """
    registry = SkillRegistry(root)
    for rel_path in discover_skill_files(root, config.skills_dir, config.skill_filename):
        registry.add(load_skill(root, rel_path))
    return registry
