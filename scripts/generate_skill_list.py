#!/usr/bin/env python3
"""
Skill Tree Builder - Skill List Generator

Generates a markdown list of skills from skills/*/SKILL.md frontmatter.
Used by the release workflow to keep the "Included Skills" section current.
Reads only name and description; no hierarchy validation is done.

Usage:
    python scripts/generate_skill_list.py [SKILLS_DIR]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from skill_frontmatter import read_frontmatter
from skill_tree_common import EXIT_ERRORS, EXIT_OK


def first_sentence_with_period(description: str) -> str:
    """Keep everything up to and including the first ". " period."""
    cut = description.find(". ")
    if cut == -1:
        return description
    return description[: cut + 1]


def skill_list_lines(skills_dir: Path, filename: str = "SKILL.md") -> list[str]:
    """One bullet per top-level skill that declares both name and description.

    Raises:
        OSError: if a skill document cannot be read
    """
    lines: list[str] = []
    for skill_file in sorted(skills_dir.glob(f"*/{filename}")):
        if not skill_file.is_file():
            continue
        meta = read_frontmatter(skill_file)
        name = meta.get("name", "")
        description = meta.get("description", "")
        if name and description:
            lines.append(f"- `{name}` - {first_sentence_with_period(description)}")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a markdown list of skills from SKILL.md frontmatter")
    parser.add_argument("skills_dir", nargs="?", type=Path, default=Path("skills"), help="Skills directory (default: skills)")
    args = parser.parse_args(argv)

    try:
        lines = skill_list_lines(args.skills_dir)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERRORS

    for line in lines:
        print(line)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
