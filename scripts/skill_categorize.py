#!/usr/bin/env python3
"""
Skill Tree Builder - Categorizer

Partitions the registry into routers and the known category buckets.
Routers land only in the router list whatever their category says; skills
with an empty or unrecognized category land in no generation bucket (the
validator still reports them).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from skill_registry import SkillDocument, SkillRegistry
from skill_tree_common import KNOWN_CATEGORIES


@dataclass
class CategorizedSkills:
    """Registry entries grouped for rendering, each list in registry order."""

    routers: list[SkillDocument] = field(default_factory=list)
    by_category: dict[str, list[SkillDocument]] = field(
        default_factory=lambda: {category: [] for category in KNOWN_CATEGORIES}
    )
    uncategorized: list[SkillDocument] = field(default_factory=list)

    def bucket(self, category: str) -> list[SkillDocument]:
        return self.by_category[category]


def categorize(registry: SkillRegistry) -> CategorizedSkills:
    """Group registry entries into routers and category buckets."""
    result = CategorizedSkills()
    for skill in registry:
        if skill.is_router:
            result.routers.append(skill)
        elif skill.category in result.by_category:
            result.by_category[skill.category].append(skill)
        else:
            result.uncategorized.append(skill)
    return result
