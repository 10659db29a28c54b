"""Read-only commands: identifiers, parents, children and the tree."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ..config import Settings, load_settings
from ..models import Zettel
from ..notes import child_id_for, sibling_id_for
from ..vault.ids import file_to_id, parent_id
from ..vault.loader import Vault, load_vault


def _load(vault_path: Path, settings: Settings | None) -> Vault:
    return load_vault(vault_path, settings or load_settings(vault_path))


def _label(zettel: Zettel) -> str:
    title = zettel.title
    if title == zettel.name:
        return f"[bold]{escape(zettel.id)}[/bold]  [dim]{escape(zettel.name)}[/dim]"
    return f"[bold]{escape(zettel.id)}[/bold]  {escape(title)}  [dim]{escape(zettel.name)}[/dim]"


def run_id(filename: str, settings: Settings) -> int:
    """Print the identifier carried by a filename."""
    console = Console(stderr=True)

    name = Path(filename).name
    if name.endswith(".md"):
        name = name[:-3]

    zettel_id = file_to_id(name, settings.match_rule, settings.separator)
    if not zettel_id:
        console.print(
            f"Couldn't find an ID in {name!r} (match rule: {settings.match_rule}).",
            style="yellow",
        )
        return 1

    print(zettel_id)
    return 0


def run_next(vault_path: Path, kind: str, zettel_id: str, settings: Settings | None = None) -> int:
    """Print the first free sibling or child identifier of a note."""
    console = Console(stderr=True)
    vault = _load(vault_path, settings)

    if not vault.exists(zettel_id):
        console.print(f"Couldn't find a note for ID {zettel_id!r}.", style="red")
        return 1

    if kind == "sibling":
        print(sibling_id_for(zettel_id, vault))
    else:
        print(child_id_for(zettel_id, vault))
    return 0


def run_parent(vault_path: Path, zettel_id: str, settings: Settings | None = None) -> int:
    """Print the path of a note's parent."""
    console = Console(stderr=True)
    vault = _load(vault_path, settings)

    parent = parent_id(zettel_id)
    if parent == "":
        console.print(f"No parent for {zettel_id!r}: it is at the top level.", style="yellow")
        return 1

    zettel = vault.get(parent)
    if zettel is None:
        console.print(f"Couldn't find a note for parent ID {parent!r}.", style="red")
        return 1

    print(zettel.path)
    return 0


def run_children(vault_path: Path, zettel_id: str, output_json: bool = False, settings: Settings | None = None) -> int:
    """List the direct children of a note."""
    vault = _load(vault_path, settings)
    children = vault.children_of(zettel_id)

    if output_json:
        rows = [{"id": z.id, "title": z.title, "path": str(z.path)} for z in children]
        print(json.dumps(rows, indent=2))
        return 0

    for zettel in children:
        print(f"{zettel.id}\t{zettel.path}")
    return 0


def build_tree(vault: Vault, root_id: str | None = None) -> Tree:
    """Render the identifier hierarchy, from one note or from the top level."""
    if root_id:
        root = vault.get(root_id)
        label = _label(root) if root else f"[bold]{escape(root_id)}[/bold]  [red](missing)[/red]"
        tree = Tree(label)
        parents = [(tree, root_id)]
    else:
        tree = Tree(f"[bold]{escape(vault.path.name)}[/bold]")
        # Notes whose parent is missing hang off the top as well
        tops = vault.roots() + vault.orphans()
        parents = [(tree.add(_label(z)), z.id) for z in tops]

    while parents:
        node, zettel_id = parents.pop()
        for child in vault.children_of(zettel_id):
            parents.append((node.add(_label(child)), child.id))

    return tree


def run_tree(vault_path: Path, root_id: str | None = None, settings: Settings | None = None) -> int:
    """Show the note hierarchy."""
    console = Console()
    vault = _load(vault_path, settings)

    if root_id and not vault.exists(root_id) and not vault.children_of(root_id):
        Console(stderr=True).print(f"Couldn't find a note for ID {root_id!r}.", style="red")
        return 1

    console.print(build_tree(vault, root_id))

    orphans = vault.orphans()
    if orphans and not root_id:
        Console(stderr=True).print(
            f"{len(orphans)} note(s) have no parent note: {', '.join(z.id for z in orphans)}",
            style="yellow",
        )
    for zettel_id, notes in vault.duplicate_ids().items():
        Console(stderr=True).print(
            f"ID {zettel_id!r} is shared by {len(notes)} notes: {', '.join(z.path.name for z in notes)}",
            style="yellow",
        )
    return 0


def run_find(vault_path: Path, query: str, settings: Settings | None = None) -> int:
    """Find notes by title or alias."""
    console = Console(stderr=True)
    vault = _load(vault_path, settings)

    matches = vault.find_by_title(query)
    if not matches:
        console.print(f"No note title matches {query!r}.", style="yellow")
        return 1

    for zettel in matches:
        print(f"{zettel.id}\t{zettel.title}\t{zettel.path}")
    return 0
