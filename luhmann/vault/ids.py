"""Zettel identifier parsing and arithmetic.

An identifier is a path from the root of the Zettelkasten tree written as
alternating runs of digits and lowercase letters: ``1a2`` is the second child
of ``1a``, which is the first child of ``1``. The tree is never stored; every
relation is derived from the identifier strings themselves.
"""

from __future__ import annotations

import re
from typing import Callable

from ..models import MATCH_RULES

# One maximal run of digits or of lowercase letters
COMPONENT_PATTERN = re.compile(r"[0-9]+|[a-z]+")

NOTE_SUFFIX = ".md"

# Only the trailing letter advances; "z" grows the component instead of carrying
LETTER_SUCCESSORS: dict[str, str] = {
    letter: chr(ord(letter) + 1) for letter in "abcdefghijklmnopqrstuvwxy"
}
LETTER_SUCCESSORS["z"] = "aa"


def parse_components(identifier: str) -> list[str]:
    """Split an identifier into its digit and letter runs.

    Characters that are neither digits nor lowercase letters break a run and
    are dropped, so ``"1a-2"`` parses the same as ``"1a2"``.
    """
    return COMPONENT_PATTERN.findall(identifier)


def is_numeric(component: str) -> bool:
    return component.isascii() and component.isdigit()


def sort_key(identifier: str) -> tuple[tuple[int, int, str], ...]:
    """Sort key following increment order: ``1a2`` < ``1a10``, ``1z`` < ``1aa``."""
    key = []
    for part in parse_components(identifier):
        if is_numeric(part):
            key.append((0, int(part), ""))
        else:
            key.append((1, len(part), part))
    return tuple(key)


def increment_component(component: str) -> str:
    """Return the successor of a single component.

    Numeric components count up without padding (``"09"`` -> ``"10"``).
    Letter components advance their last letter only (``"az"`` -> ``"aaa"``,
    ``"zz"`` -> ``"zaa"``). Anything else comes back unchanged.
    """
    if not component:
        return component
    if is_numeric(component):
        return str(int(component) + 1)

    successor = LETTER_SUCCESSORS.get(component[-1])
    if successor is None:
        return component
    return component[:-1] + successor


def increment_id(identifier: str) -> str:
    """Next identifier at the same depth, under the same parent."""
    parts = parse_components(identifier)
    if not parts:
        return identifier
    last = parts.pop()
    return "".join(parts) + increment_component(last)


def parent_id(identifier: str) -> str:
    """Identifier of the parent note, or ``""`` at the top level."""
    parts = parse_components(identifier)
    if len(parts) <= 1:
        return ""
    return "".join(parts[:-1])


def next_component_kind(identifier: str) -> str:
    """Seed component for the first child one level below ``identifier``.

    Depth alternates between numbers and letters, so a numeric last component
    is followed by ``"a"`` and anything else by ``"1"``.
    """
    parts = parse_components(identifier)
    if parts and is_numeric(parts[-1]):
        return "a"
    return "1"


def first_child_of(parent: str) -> str:
    return parent + next_component_kind(parent)


def first_available_id(start: str, exists: Callable[[str], bool]) -> str:
    """Walk forward from ``start`` until ``exists`` reports a free identifier.

    ``start`` itself is checked first. The walk only ends once the predicate
    returns False for some candidate.
    """
    candidate = start
    while exists(candidate):
        candidate = increment_id(candidate)
    return candidate


def id_pattern(match_rule: str, separator: str) -> re.Pattern[str]:
    """Compile the filename pattern for a match rule."""
    if match_rule == "strict":
        return re.compile(r"^((?:[0-9]+|[a-z]+)+)\Z")
    if match_rule == "separator":
        return re.compile(rf"^((?:[0-9]+|[a-z]+)+){re.escape(separator)}.*", re.DOTALL)
    if match_rule == "fuzzy":
        return re.compile(r"^((?:[0-9]+|[a-z]+)+).*", re.DOTALL)
    raise ValueError(f"Unknown match rule: {match_rule!r} (expected one of {', '.join(MATCH_RULES)})")


def file_to_id(filename: str, match_rule: str = "strict", separator: str = " - ") -> str:
    """Extract the leading identifier from a filename without extension.

    Args:
        filename: Note filename, extension already removed
        match_rule: ``strict`` (filename is only the identifier), ``separator``
            (identifier followed by ``separator`` and a title) or ``fuzzy``
            (identifier followed by anything)
        separator: Literal text between identifier and title

    Returns:
        The identifier, or ``""`` when the filename does not match the rule
    """
    match = id_pattern(match_rule, separator).match(filename)
    if match:
        return match.group(1)
    return ""


def is_zettel_file(name: str, match_rule: str = "strict", separator: str = " - ") -> bool:
    """True for a markdown filename whose stem carries an identifier."""
    if not name.endswith(NOTE_SUFFIX):
        return False
    stem = name[: -len(NOTE_SUFFIX)]
    return file_to_id(stem, match_rule, separator) != ""
