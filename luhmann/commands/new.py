"""New note command - create a sibling or child zettel."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from ..config import Settings, load_settings
from ..notes import NoteKind, TemplateError, execute_new_note_plan, plan_new_note, title_from_selection
from ..reorganize import ZettelNotFoundError
from ..repository import FileSystemRepository
from ..vault.loader import load_vault


def run_new(
    vault_path: Path,
    kind: NoteKind,
    source_id: str,
    title: str = "",
    dry_run: bool = False,
    settings: Settings | None = None,
) -> int:
    """Create a note next to or below ``source_id``.

    Args:
        vault_path: Path to the vault directory
        kind: "sibling" or "child"
        source_id: Identifier of the existing note
        title: Free text; normalized like a selection ("my note" -> "My Note")
        dry_run: If True, show what would be done without writing
        settings: Vault settings (loaded from the vault when omitted)

    Returns:
        Exit code
    """
    console = Console(stderr=True)
    settings = settings or load_settings(vault_path)
    vault = load_vault(vault_path, settings)

    # Phase 1: Compute
    try:
        plan = plan_new_note(vault, source_id, kind, title_from_selection(title))
    except ZettelNotFoundError as e:
        console.print(str(e), style="red")
        return 1
    except TemplateError as e:
        console.print(str(e), style="red")
        return 1

    if dry_run:
        console.print("\n[bold]DRY RUN[/bold] - No changes will be made\n")
        console.print(plan.summary(), markup=False)
        return 0

    # Phase 2: Execute
    repository = FileSystemRepository(vault_path, settings)
    try:
        result = execute_new_note_plan(plan, repository)
    except OSError as e:
        console.print(f"Failed to create {plan.path.name}: {e}", style="red", markup=False)
        return 1

    result.log_to_audit(
        vault_path,
        "new-note",
        {"kind": kind, "source_id": source_id, "note_id": plan.note_id},
    )
    print(result.path)

    if not result.success:
        console.print(result.error, style="red", markup=False)
        return 1

    if result.linked_from:
        console.print(f"Linked from {result.linked_from.name}", style="dim")
    return 0
