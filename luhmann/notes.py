"""
Note creation: new sibling and child zettels.

The identifier of a new note is the first free slot after (sibling) or below
(child) an existing note. The filename, the wiki-link pointing at the new
note, and the note body all follow the vault settings.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

import frontmatter

from .config import Settings
from .planning import NewNotePlan, NewNoteResult
from .reorganize import Reorganizer, ZettelNotFoundError
from .repository import NoteRepository
from .vault.ids import NOTE_SUFFIX
from .vault.loader import Vault
from .vault.parser import extract_links, format_link

NoteKind = Literal["sibling", "child"]

TITLE_PLACEHOLDER = re.compile(r"{{title}}")
LINK_PLACEHOLDER = re.compile(r"{{link}}")


class TemplateError(ValueError):
    """Template file is unreadable or misses a required placeholder."""


def sibling_id_for(zettel_id: str, vault: Vault) -> str:
    """First free identifier after ``zettel_id`` at the same depth."""
    return Reorganizer(vault.zettels, vault.path).first_available_sibling_after(zettel_id)


def child_id_for(zettel_id: str, vault: Vault) -> str:
    """First free identifier one level below ``zettel_id``."""
    return Reorganizer(vault.zettels, vault.path).first_available_child_of(zettel_id)


def build_note_name(note_id: str, title: str, settings: Settings) -> str:
    """Filename (without extension) for a new note."""
    if settings.titles_in_filenames and title:
        return f"{note_id}{settings.separator}{title}"
    return note_id


def build_link_text(note_id: str, title: str, settings: Settings) -> str:
    """Wiki-link to a new note, optionally showing its title."""
    target = build_note_name(note_id, title, settings)
    display = title if settings.use_link_alias and title else None
    return format_link(target, display)


def title_from_selection(text: str) -> str:
    """Turn selected text into a title: "hello  world" -> "Hello World"."""
    words = text.strip().split()
    return " ".join(word[0].upper() + word[1:] for word in words)


def read_template(vault_path: Path, settings: Settings) -> str:
    template_path = vault_path / settings.template_file.strip()
    try:
        return template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(
            f"Couldn't read template file. Make sure the path and file are valid. "
            f"Current setting: {settings.template_file.strip()}"
        ) from e


def validate_template(content: str, settings: Settings) -> None:
    """Raise TemplateError when a required placeholder is missing."""
    missing = []
    if settings.template_require_title and not TITLE_PLACEHOLDER.search(content):
        missing.append("{{title}}")
    if settings.template_require_link and not LINK_PLACEHOLDER.search(content):
        missing.append("{{link}}")
    if missing:
        raise TemplateError(f"Template missing {' and '.join(missing)} placeholder(s)")


def generate_note_content(template: str | None, title: str, backlink: str) -> str:
    """Note body from a template, or the built-in "# Title" + backlink layout."""
    if template:
        content = TITLE_PLACEHOLDER.sub(lambda _: title, template)
        return LINK_PLACEHOLDER.sub(lambda _: backlink, content)

    content = f"# {title.lstrip()}" if title else ""
    if backlink.strip():
        content = f"{content}\n\n{backlink}" if content else backlink
    return content


def add_alias(content: str, alias: str) -> str:
    """Append ``alias`` to the frontmatter aliases of a note body."""
    post = frontmatter.loads(content)
    aliases = post.metadata.get("aliases") or []
    if isinstance(aliases, str):
        aliases = [aliases]
    aliases.append(alias)
    post.metadata["aliases"] = aliases
    return frontmatter.dumps(post) + "\n"


def plan_new_note(vault: Vault, source_id: str, kind: NoteKind, title: str = "") -> NewNotePlan:
    """
    Compute the note to create next to (sibling) or below (child) a note.

    Pure: reads the template if one is configured but writes nothing.

    Raises:
        ZettelNotFoundError: no note carries ``source_id``
        TemplateError: the template is unreadable or invalid
    """
    settings = vault.settings
    source = vault.get(source_id)
    if source is None:
        raise ZettelNotFoundError(source_id)

    if kind == "sibling":
        note_id = sibling_id_for(source_id, vault)
    else:
        note_id = child_id_for(source_id, vault)

    title = title.strip()
    note_name = build_note_name(note_id, title, settings)
    path = source.path.with_name(note_name + NOTE_SUFFIX)

    template = None
    if settings.uses_template:
        template = read_template(vault.path, settings)
        validate_template(template, settings)

    backlink = format_link(source.name) if settings.insert_link_in_child else ""
    content = generate_note_content(template, title, backlink)
    if settings.add_alias and title:
        content = add_alias(content, title)

    link = build_link_text(note_id, title, settings)
    source_path = source.path if settings.insert_link_in_parent else None

    return NewNotePlan(
        vault_path=vault.path,
        source_id=source_id,
        kind=kind,
        note_id=note_id,
        title=title,
        path=path,
        content=content,
        link=link,
        source_path=source_path,
    )


def execute_new_note_plan(plan: NewNotePlan, repository: NoteRepository) -> NewNoteResult:
    """
    Create the planned note, then link it from the source note.

    The link is appended on its own line unless the source already links to
    the new note. Failing to create the note raises; failing to link it once
    it exists is reported on the result (``success=False``) instead, since
    the new note stays on disk.
    """
    path = repository.create(plan.path, plan.content)
    result = NewNoteResult(created=[path], path=path)

    if plan.source_path is None:
        return result

    try:
        source_text = repository.read(plan.source_path)
        if plan.path.stem not in extract_links(source_text):
            separator = "" if not source_text or source_text.endswith("\n") else "\n"
            repository.write(plan.source_path, f"{source_text}{separator}{plan.link}\n")
            result.linked_from = plan.source_path
    except OSError as e:
        result.success = False
        result.error = f"Created {path.name} but couldn't link it from {plan.source_path.name}: {e}"

    return result
