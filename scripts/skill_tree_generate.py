#!/usr/bin/env python3
"""
Skill Tree Builder - Tree Generator

Renders the categorized registry into the SKILL_TREE.md index document:
a static preamble (title, intro, quick navigation table) followed by one
table per category in a fixed order. Rendering is a pure function of the
registry and config, so the output is byte-stable across runs.
"""

from __future__ import annotations

from skill_categorize import CategorizedSkills
from skill_registry import SkillDocument
from skill_tree_common import KNOWN_CATEGORIES
from skill_tree_config import SkillTreeConfig

# Sentence boundary used to cut descriptions down to one column value
SENTENCE_BREAK = ". "


def first_sentence(text: str) -> str:
    """Cut text at the first sentence boundary and drop a trailing period.

    Text without a period is returned whole.
    """
    cut = text.find(SENTENCE_BREAK)
    if cut != -1:
        text = text[:cut]
    if text.endswith("."):
        text = text[:-1]
    return text


def column_value(description: str, category: str, sdk_setup_prefix: str) -> str:
    """Compute the category-specific column value for a table row.

    sdk-setup: "Full Sentry SDK setup for Python. Use when..." -> "Python"
    others: first sentence of the description
    """
    if category == "sdk-setup" and sdk_setup_prefix and description.startswith(sdk_setup_prefix):
        description = description[len(sdk_setup_prefix) :]
    return first_sentence(description)


def _router_link(router: str, config: SkillTreeConfig) -> str:
    return f"[`{router}`]({config.router_path(router)})"


def render_preamble(config: SkillTreeConfig) -> list[str]:
    """Static header lines; not derived from the registry."""
    lines = [
        f"# {config.title}",
        "",
        config.intro,
        "",
        "## Quick Navigation",
        "",
        "| If the user wants to... | Start here |",
        "|---|---|",
    ]
    for entry in config.quick_navigation:
        lines.append(f"| {entry.intent} | {_router_link(entry.router, config)} |")
    return lines


def render_row(skill: SkillDocument, category: str, config: SkillTreeConfig) -> str:
    path = skill.path.as_posix()
    value = column_value(skill.description, category, config.sdk_setup_prefix)
    return f"| [`{skill.name}`]({path}) | {path} | {value} |"


def render_section(category: str, skills: list[SkillDocument], config: SkillTreeConfig) -> list[str]:
    """Heading and table for one category. The header is emitted even with no rows."""
    section = config.sections[category]
    heading = f"## {section.heading}"
    if section.router:
        heading += f" ({_router_link(section.router, config)})"

    lines = [
        "",
        heading,
        "",
        f"| Skill | Path | {section.column} |",
        "|---|---|---|",
    ]
    lines.extend(render_row(skill, category, config) for skill in skills)
    return lines


def generate_skill_tree(categorized: CategorizedSkills, config: SkillTreeConfig) -> str:
    """Render the complete tree document, ending with exactly one newline."""
    lines = render_preamble(config)
    for category in KNOWN_CATEGORIES:
        lines.extend(render_section(category, categorized.bucket(category), config))
    return "\n".join(lines).rstrip("\n") + "\n"
