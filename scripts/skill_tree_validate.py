#!/usr/bin/env python3
"""
Skill Tree Builder - Hierarchy Validator

Validates the skill hierarchy. Runs five checks per skill, in order:
1. Required fields for the skill's type (router / internal / leaf)
2. Category must be one of the known values (warning only)
3. Parent must exist and be a router
4. Skill must be listed in its parent router's document
5. Breadcrumb links ("> " lines) must resolve to existing files

Each check returns its own ValidationReport; validate_registry() merges
them. No check stops the run, so every defect is reported in one pass.

Usage:
    python scripts/skill_tree_validate.py
    python scripts/skill_tree_validate.py --root /path/to/repo --json

Exit codes:
    0 - No errors (warnings allowed)
    1 - Errors found
"""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Callable
from pathlib import Path

from skill_frontmatter import document_lines
from skill_registry import SkillDocument, SkillRegistry, build_registry
from skill_tree_common import (
    BREADCRUMB_PREFIX,
    DOCUMENT_EXTENSION,
    EXIT_ERRORS,
    KNOWN_CATEGORIES,
    SkillTreeError,
    ValidationReport,
    get_repo_root,
    print_errors,
    print_verbose_results,
    print_warnings,
)
from skill_tree_config import SkillTreeConfig, load_config

# =============================================================================
# Regex Patterns
# =============================================================================

# Markdown link target ending in the document extension: ](path.md)
BREADCRUMB_LINK_PATTERN = re.compile(r"\]\(([^)]+" + re.escape(DOCUMENT_EXTENSION) + r")\)")

# Absolute network URLs are never resolved on disk
URL_PATTERN = re.compile(r"^https?://")

DISABLE_FLAG = "'disable-model-invocation: true'"

CheckFunction = Callable[[SkillDocument, SkillRegistry], ValidationReport]


# =============================================================================
# Check 1: Required fields per skill type
# =============================================================================


def check_required_fields(skill: SkillDocument, registry: SkillRegistry) -> ValidationReport:
    """Routers need nothing; internal skills need the disable flag;
    every other skill needs category, parent and the disable flag.
    Each missing requirement is a separate error."""
    report = ValidationReport()
    file = skill.path.as_posix()

    if skill.is_router:
        report.passed("router role is sufficient", skill.name, file)
    elif skill.category == "internal":
        if not skill.model_invocation_disabled:
            report.error(f"internal skill missing {DISABLE_FLAG}", skill.name, file)
    else:
        if not skill.category:
            report.error("non-router skill missing 'category' field", skill.name, file)
        if not skill.parent:
            report.error("non-router skill missing 'parent' field", skill.name, file)
        if not skill.model_invocation_disabled:
            report.error(f"non-router skill missing {DISABLE_FLAG}", skill.name, file)
    return report


# =============================================================================
# Check 2: Known category (warning)
# =============================================================================


def check_known_category(skill: SkillDocument, registry: SkillRegistry) -> ValidationReport:
    report = ValidationReport()
    if skill.category and not skill.is_router and skill.category not in KNOWN_CATEGORIES:
        report.warning(f"unknown category '{skill.category}'", skill.name, skill.path.as_posix())
    return report


# =============================================================================
# Check 3: Parent exists and is a router
# =============================================================================


def check_parent(skill: SkillDocument, registry: SkillRegistry) -> ValidationReport:
    report = ValidationReport()
    if not skill.parent:
        return report

    file = skill.path.as_posix()
    parent = registry.get(skill.parent)
    if parent is None:
        report.error(f"parent '{skill.parent}' does not exist", skill.name, file)
    elif not parent.is_router:
        report.error(
            f"parent '{skill.parent}' is not a router (role={parent.role or 'none'})",
            skill.name,
            file,
        )
    else:
        report.passed(f"parent '{skill.parent}' is a router", skill.name, file)
    return report


# =============================================================================
# Check 4: Skill is listed in its router's document
# =============================================================================


def check_router_listing(skill: SkillDocument, registry: SkillRegistry) -> ValidationReport:
    """The parent's raw text must contain the skill name as a substring.

    Runs whenever the parent exists, including when its role is wrong.
    """
    report = ValidationReport()
    parent = registry.get(skill.parent) if skill.parent else None
    if parent is None:
        return report

    if skill.name not in parent.content:
        report.error(
            f"not listed in router '{parent.name}' ({parent.path.as_posix()})",
            skill.name,
            skill.path.as_posix(),
        )
    return report


# =============================================================================
# Check 5: Breadcrumb links resolve
# =============================================================================


def extract_breadcrumb_links(content: str) -> list[str]:
    """Return .md link targets found on breadcrumb lines, skipping URLs."""
    links: list[str] = []
    for line in document_lines(content):
        if not line.startswith(BREADCRUMB_PREFIX):
            continue
        for target in BREADCRUMB_LINK_PATTERN.findall(line):
            if URL_PATTERN.match(target):
                continue
            links.append(target)
    return links


def check_breadcrumbs(skill: SkillDocument, registry: SkillRegistry) -> ValidationReport:
    report = ValidationReport()
    file = skill.path.as_posix()
    for link in extract_breadcrumb_links(skill.content):
        resolved = f"{skill.directory.as_posix()}/{link}"
        if not (registry.root / resolved).is_file():
            report.error(f"broken breadcrumb link '{link}' (resolved: {resolved})", skill.name, file)
    return report


# =============================================================================
# Main Validation Function
# =============================================================================

CHECKS: tuple[CheckFunction, ...] = (
    check_required_fields,
    check_known_category,
    check_parent,
    check_router_listing,
    check_breadcrumbs,
)


def validate_skill(skill: SkillDocument, registry: SkillRegistry) -> ValidationReport:
    """Run every check against one skill."""
    report = ValidationReport()
    for check in CHECKS:
        report.merge(check(skill, registry))
    return report


def validate_registry(registry: SkillRegistry) -> ValidationReport:
    """Validate every skill in registry order and merge the findings."""
    report = ValidationReport()
    for skill in registry:
        report.merge(validate_skill(skill, registry))
    return report


def validate_skill_tree(root: Path, config: SkillTreeConfig) -> tuple[SkillRegistry, ValidationReport]:
    """Build the registry for a repository and validate it.

    Raises:
        SkillTreeError: if the registry cannot be built
    """
    registry = build_registry(root, config)
    return registry, validate_registry(registry)


# =============================================================================
# CLI Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for validation only (nothing is generated or written).

    Returns:
        Exit code (0=OK, 1=errors)
    """
    parser = argparse.ArgumentParser(
        description="Validate the skill hierarchy (parents, router listings, breadcrumbs)",
    )
    parser.add_argument("--root", type=Path, default=None, help="Repository root (default: parent of scripts/)")
    parser.add_argument("--config", type=Path, default=None, help="Path to skill-tree.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show PASSED results")
    parser.add_argument("--json", "-j", action="store_true", help="Output results as JSON")
    args = parser.parse_args(argv)

    root = (args.root or get_repo_root()).resolve()
    try:
        config = load_config(root, args.config)
        registry, report = validate_skill_tree(root, config)
    except SkillTreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERRORS

    if args.json:
        print(report.to_json())
        return report.exit_code

    print_warnings(report)
    if args.verbose:
        print_verbose_results(report)
    print(f"Summary: {len(registry)} skills validated, {len(registry.routers())} routers, {len(report.errors)} errors")
    print_errors(report)
    if not report.has_errors:
        print("All checks passed.")
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
