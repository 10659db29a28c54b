"""Markdown parsing utilities for wiki-links."""

import re

# Match [[target]], [[target|display]], [[target#section]], [[target#section|display]]
WIKILINK_PATTERN = re.compile(r"\[\[([^\]|#]+)(?:#[^\]|]+)?(?:\|[^\]]+)?\]\]")


def extract_links(content: str) -> list[str]:
    """Extract all wiki-link targets from content.

    Targets keep their case (identifiers are case-sensitive) and are
    deduplicated in order of first appearance.
    """
    seen = set()
    result = []
    for match in WIKILINK_PATTERN.findall(content):
        target = match.strip()
        if target not in seen:
            seen.add(target)
            result.append(target)
    return result


def format_link(target: str, display: str | None = None) -> str:
    """Render a wiki-link, with optional display text."""
    if display:
        return f"[[{target}|{display}]]"
    return f"[[{target}]]"
