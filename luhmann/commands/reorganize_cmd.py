"""Reorganization commands - rename, move-down and outdent.

Each command follows the compute / execute split: the rename plan is worked
out against a snapshot of the vault first, so ``--dry-run`` can show it
without touching any file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from rich.console import Console

from ..config import Settings, load_settings
from ..planning import RenamePlan, RenameResult
from ..reorganize import (
    AlreadyTopLevelError,
    RenameFailedError,
    Reorganizer,
    ReorganizeError,
    execute_rename_plan,
)
from ..repository import FileSystemRepository


def _run_plan(
    vault_path: Path,
    settings: Settings | None,
    compute: Callable[[Reorganizer], RenamePlan],
    dry_run: bool,
) -> int:
    console = Console(stderr=True)
    settings = settings or load_settings(vault_path)
    repository = FileSystemRepository(vault_path, settings)

    # Phase 1: Compute - pure, works on a snapshot
    reorganizer = Reorganizer(repository.list_zettels(), vault_path)
    try:
        plan = compute(reorganizer)
    except AlreadyTopLevelError as e:
        console.print(str(e), style="yellow")
        return 1
    except ReorganizeError as e:
        console.print(str(e), style="red")
        return 1

    if dry_run:
        console.print("\n[bold]DRY RUN[/bold] - No changes will be made\n")
        console.print(plan.summary(), markup=False)
        return 0

    if not plan.renames:
        console.print("Nothing to rename.", style="yellow")
        return 0

    # Phase 2: Execute - renames files, stops at the first failure
    try:
        result = execute_rename_plan(plan, repository)
    except RenameFailedError as e:
        partial = RenameResult(renames=e.completed, success=False, error=str(e))
        partial.log_to_audit(vault_path, plan.operation, {"target_id": plan.target_id})
        console.print(str(e), style="red")
        return 1

    result.log_to_audit(vault_path, plan.operation, {"target_id": plan.target_id})
    for rename in result.renames:
        console.print(f"{rename.from_id} -> {rename.to_id}  ({rename.new_path.name})", markup=False)
    console.print(f"{plan.operation}: {len(result.renames)} note(s) renamed", style="green")
    return 0


def run_rename(
    vault_path: Path,
    from_id: str,
    to_id: str,
    dry_run: bool = False,
    settings: Settings | None = None,
) -> int:
    """Give a single note a new identifier."""
    return _run_plan(vault_path, settings, lambda r: r.rename(from_id, to_id), dry_run)


def run_move_down(
    vault_path: Path,
    zettel_id: str,
    dry_run: bool = False,
    settings: Settings | None = None,
) -> int:
    """Move a note and its subtree to the next free identifier."""
    return _run_plan(vault_path, settings, lambda r: r.move_subtree_to_next_available(zettel_id), dry_run)


def run_outdent(
    vault_path: Path,
    zettel_id: str,
    dry_run: bool = False,
    settings: Settings | None = None,
) -> int:
    """Promote a note to be the next sibling of its parent."""
    return _run_plan(vault_path, settings, lambda r: r.outdent(zettel_id), dry_run)
