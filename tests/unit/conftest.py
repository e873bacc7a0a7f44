"""Shared fixtures for skill tree tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def skill_text(
    name: str | None = None,
    description: str = "",
    category: str = "",
    parent: str = "",
    role: str = "",
    disable: bool = False,
    body: str = "",
) -> str:
    """Build a SKILL.md document with only the given frontmatter keys."""
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description:
        lines.append(f"description: {description}")
    if category:
        lines.append(f"category: {category}")
    if parent:
        lines.append(f"parent: {parent}")
    if role:
        lines.append(f"role: {role}")
    if disable:
        lines.append("disable-model-invocation: true")
    lines.append("---")
    lines.append("")
    lines.append(body)
    return "\n".join(lines)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Empty repository root with a skills/ directory."""
    (tmp_path / "skills").mkdir()
    return tmp_path


@pytest.fixture
def write_skill(repo: Path) -> Callable[..., Path]:
    """Write skills/<directory>/SKILL.md; the directory defaults to the name."""

    def _write(name: str | None = None, directory: str | None = None, **kwargs: object) -> Path:
        skill_dir = repo / "skills" / (directory or name or "unnamed")
        skill_dir.mkdir(parents=True, exist_ok=True)
        path = skill_dir / "SKILL.md"
        path.write_text(skill_text(name, **kwargs), encoding="utf-8")  # type: ignore[arg-type]
        return path

    return _write
