#!/usr/bin/env python3
"""
Skill Tree Builder - Frontmatter Extraction

Parses the metadata block at the top of a skill document:

    ---
    name: sentry-python-sdk
    description: Full Sentry SDK setup for Python. Use when ...
    category: sdk-setup
    parent: sentry-sdk-setup
    disable-model-invocation: true
    ---

The block is the first pair of lines consisting solely of "---". Values are
kept as plain strings; this is a line-based key/value scan, not a YAML load,
so descriptions containing colons survive unchanged.
"""

from __future__ import annotations

import re
from pathlib import Path

FRONTMATTER_MARKER = "---"

# Keys read from the block, after normalize_key()
RECOGNIZED_KEYS = frozenset(
    {
        "name",
        "description",
        "category",
        "parent",
        "role",
        "disable_model_invocation",
    }
)

# A key line: letters, hyphens and underscores followed by a colon
KEY_LINE_PATTERN = re.compile(r"^([A-Za-z_-]+):(.*)$")


def normalize_key(key: str) -> str:
    """Normalize a frontmatter key so hyphenated and underscored spellings match."""
    return key.replace("-", "_")


def document_lines(content: str) -> list[str]:
    """Split a document on newlines only, dropping a trailing carriage return."""
    return [line.removesuffix("\r") for line in content.split("\n")]


def frontmatter_lines(content: str) -> list[str] | None:
    """Return the lines between the opening and closing marker.

    Returns:
        The enclosed lines, or None when the block is absent or unclosed
    """
    lines = document_lines(content)
    start = None
    for i, line in enumerate(lines):
        if line == FRONTMATTER_MARKER:
            start = i
            break
    if start is None:
        return None

    for end in range(start + 1, len(lines)):
        if lines[end] == FRONTMATTER_MARKER:
            return lines[start + 1 : end]
    return None


def parse_frontmatter(content: str) -> dict[str, str]:
    """Extract recognized metadata keys from a skill document.

    Args:
        content: Full document text

    Returns:
        Mapping of normalized key to stripped value. Empty when the
        block is missing or malformed; that is not an error here.
    """
    block = frontmatter_lines(content)
    if block is None:
        return {}

    result: dict[str, str] = {}
    for line in block:
        match = KEY_LINE_PATTERN.match(line)
        if not match:
            continue
        key = normalize_key(match.group(1))
        if key in RECOGNIZED_KEYS:
            result[key] = match.group(2).strip()
    return result


def read_frontmatter(path: Path) -> dict[str, str]:
    """Read a document from disk and extract its metadata.

    Raises:
        OSError: if the file cannot be read
        UnicodeDecodeError: if the file is not valid UTF-8
    """
    return parse_frontmatter(path.read_text(encoding="utf-8"))
