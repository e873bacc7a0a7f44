#!/usr/bin/env python3
"""
Skill Tree Builder - Configuration

Loads the optional skill-tree.yaml file from the repository root and merges
it over built-in defaults. The defaults reproduce the Sentry skill tree, so
a repository without a config file gets the stock layout.

Example skill-tree.yaml:

    skills_dir: skills
    tree_file: SKILL_TREE.md
    title: Sentry Skill Tree
    quick_navigation:
      - intent: Set up Sentry in a project
        router: sentry-sdk-setup
    sections:
      workflow:
        heading: Workflow
        router: sentry-workflow
        column: Use when
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml
from skill_tree_common import KNOWN_CATEGORIES, ConfigError

CONFIG_FILENAME = "skill-tree.yaml"

DEFAULT_INTRO = (
    "This file maps the full skill structure for the Sentry-for-AI plugin. "
    "Read it to find the right skill for any task, then follow the path to load it."
)


@dataclass(frozen=True)
class SectionConfig:
    """Heading, router link and third column header of one category table."""

    heading: str
    router: str | None
    column: str


@dataclass(frozen=True)
class NavigationEntry:
    """One row of the static quick navigation table."""

    intent: str
    router: str


def _default_sections() -> dict[str, SectionConfig]:
    return {
        "sdk-setup": SectionConfig("SDK Setup", "sentry-sdk-setup", "Platform"),
        "workflow": SectionConfig("Workflow", "sentry-workflow", "Use when"),
        "feature-setup": SectionConfig("Feature Setup", "sentry-feature-setup", "Feature"),
        "internal": SectionConfig("Internal", None, "Purpose"),
    }


def _default_navigation() -> list[NavigationEntry]:
    return [
        NavigationEntry("Set up Sentry in a project", "sentry-sdk-setup"),
        NavigationEntry("Fix issues, review code, debug production", "sentry-workflow"),
        NavigationEntry("Configure a specific Sentry feature", "sentry-feature-setup"),
    ]


@dataclass(frozen=True)
class SkillTreeConfig:
    """Settings for scanning skills and rendering the tree document.

    Attributes:
        skills_dir: Directory (relative to the repo root) scanned for skills
        skill_filename: File name every skill document uses
        tree_file: Generated artifact path (relative to the repo root)
        title: Top-level heading of the tree document
        intro: Paragraph printed under the title
        quick_navigation: Rows of the static quick navigation table
        sections: Per-category table settings, keyed by category
        sdk_setup_prefix: Leading phrase removed from sdk-setup descriptions
    """

    skills_dir: str = "skills"
    skill_filename: str = "SKILL.md"
    tree_file: str = "SKILL_TREE.md"
    title: str = "Sentry Skill Tree"
    intro: str = DEFAULT_INTRO
    quick_navigation: list[NavigationEntry] = field(default_factory=_default_navigation)
    sections: dict[str, SectionConfig] = field(default_factory=_default_sections)
    sdk_setup_prefix: str = "Full Sentry SDK setup for "

    def router_path(self, router: str) -> str:
        """Repo-relative path of a router's skill document."""
        return f"{self.skills_dir}/{router}/{self.skill_filename}"


# =============================================================================
# Loading
# =============================================================================

_STRING_FIELDS = {"skills_dir", "skill_filename", "tree_file", "title", "intro", "sdk_setup_prefix"}


def _require_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{where} must be a string, got {type(value).__name__}")
    return value


def _parse_navigation(raw: Any) -> list[NavigationEntry]:
    if not isinstance(raw, list):
        raise ConfigError("quick_navigation must be a list")
    entries: list[NavigationEntry] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or set(item) != {"intent", "router"}:
            raise ConfigError(f"quick_navigation[{i}] must be a mapping with 'intent' and 'router'")
        entries.append(
            NavigationEntry(
                _require_str(item["intent"], f"quick_navigation[{i}].intent"),
                _require_str(item["router"], f"quick_navigation[{i}].router"),
            )
        )
    return entries


def _parse_sections(raw: Any, defaults: dict[str, SectionConfig]) -> dict[str, SectionConfig]:
    if not isinstance(raw, dict):
        raise ConfigError("sections must be a mapping")
    sections = dict(defaults)
    for category, overrides in raw.items():
        if category not in KNOWN_CATEGORIES:
            raise ConfigError(f"sections: unknown category '{category}' (expected one of {', '.join(KNOWN_CATEGORIES)})")
        if not isinstance(overrides, dict):
            raise ConfigError(f"sections.{category} must be a mapping")
        unknown = set(overrides) - {"heading", "router", "column"}
        if unknown:
            raise ConfigError(f"sections.{category}: unknown key(s) {', '.join(sorted(unknown))}")
        current = sections[category]
        router = overrides.get("router", current.router)
        if router is not None:
            router = _require_str(router, f"sections.{category}.router")
        sections[category] = SectionConfig(
            heading=_require_str(overrides.get("heading", current.heading), f"sections.{category}.heading"),
            router=router or None,
            column=_require_str(overrides.get("column", current.column), f"sections.{category}.column"),
        )
    return sections


def config_from_mapping(data: dict[str, Any]) -> SkillTreeConfig:
    """Build a config from a parsed mapping, rejecting unknown keys.

    Args:
        data: Mapping as loaded from YAML

    Returns:
        SkillTreeConfig with the given values applied over the defaults

    Raises:
        ConfigError: on unknown keys or wrongly typed values
    """
    known = {f.name for f in fields(SkillTreeConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

    config = SkillTreeConfig()
    updates: dict[str, Any] = {}
    for key, value in data.items():
        if key in _STRING_FIELDS:
            updates[key] = _require_str(value, key)
        elif key == "quick_navigation":
            updates[key] = _parse_navigation(value)
        elif key == "sections":
            updates[key] = _parse_sections(value, config.sections)
    return replace(config, **updates)


def load_config(root: Path, config_path: Path | None = None) -> SkillTreeConfig:
    """Load configuration for a repository.

    Uses config_path when given (it must exist), otherwise
    <root>/skill-tree.yaml when present, otherwise the defaults.

    Raises:
        ConfigError: if the file cannot be read or is invalid
    """
    path = config_path if config_path is not None else root / CONFIG_FILENAME
    if config_path is None and not path.is_file():
        return SkillTreeConfig()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SkillTreeConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top-level YAML value must be a mapping")
    return config_from_mapping(data)
