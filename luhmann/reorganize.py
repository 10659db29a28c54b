"""
Hierarchy reorganization: move notes to new identifiers without collisions.

The tree is implicit in the identifiers, so moving a node means renaming
files. Planning runs against a private working copy of a vault snapshot:
every planned rename is applied to that copy at once, so later existence
checks in the same operation see earlier moves. Execution then replays the
planned renames through a ``NoteRepository``, in order.

Execution is not atomic. If storage refuses a rename halfway through, the
renames already done stay done and ``RenameFailedError`` reports them.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterable

from .models import Rename, Zettel
from .planning import RenamePlan, RenameResult
from .repository import NoteRepository
from .vault.ids import (
    first_available_id,
    first_child_of,
    increment_id,
    parent_id,
    sort_key,
)


class ReorganizeError(Exception):
    """Base class for reorganization failures."""


class ZettelNotFoundError(ReorganizeError):
    def __init__(self, zettel_id: str):
        self.zettel_id = zettel_id
        super().__init__(f"Couldn't find a note for ID {zettel_id!r}")


class AlreadyTopLevelError(ReorganizeError):
    def __init__(self, zettel_id: str):
        self.zettel_id = zettel_id
        super().__init__(f"{zettel_id!r} is already at the top level")


class IdOccupiedError(ReorganizeError):
    def __init__(self, zettel_id: str, path: Path):
        self.zettel_id = zettel_id
        self.path = path
        super().__init__(f"ID {zettel_id!r} is already taken by {path.name}")


class RenameFailedError(ReorganizeError):
    """Storage refused a rename; earlier renames of the same plan were kept."""

    def __init__(self, rename: Rename, completed: list[Rename], cause: BaseException):
        self.rename = rename
        self.completed = list(completed)
        super().__init__(
            f"Failed to rename {rename.old_path.name} -> {rename.new_path.name}: {cause} "
            f"({len(self.completed)} earlier rename(s) were applied and not rolled back)"
        )


class ZettelIndex:
    """Mutable working copy of a snapshot, keyed by identifier."""

    def __init__(self, zettels: Iterable[Zettel]):
        self._zettels: list[Zettel] = list(zettels)

    def copy(self) -> ZettelIndex:
        return ZettelIndex(self._zettels)

    def get(self, zettel_id: str) -> Zettel | None:
        for zettel in self._zettels:
            if zettel.id == zettel_id:
                return zettel
        return None

    def exists(self, zettel_id: str) -> bool:
        return self.get(zettel_id) is not None

    def children_of(self, zettel_id: str) -> list[Zettel]:
        children = [z for z in self._zettels if parent_id(z.id) == zettel_id]
        return sorted(children, key=lambda z: sort_key(z.id))

    def move(self, zettel: Zettel, to_id: str) -> Zettel:
        """Give ``zettel`` a new identifier, keeping the rest of its filename."""
        new_name = to_id + zettel.rest
        moved = replace(zettel, id=to_id, name=new_name, path=zettel.path.with_name(new_name + zettel.path.suffix))
        for position, current in enumerate(self._zettels):
            if current is zettel:
                self._zettels[position] = moved
                break
        return moved

    @property
    def ids(self) -> list[str]:
        return [z.id for z in self._zettels]


class Reorganizer:
    """Plans renames over a snapshot of the vault.

    Each public operation returns the ``RenamePlan`` for that operation only.
    An operation that fails leaves the working copy as it was before the call.
    """

    def __init__(self, zettels: Iterable[Zettel], vault_path: Path):
        self.vault_path = vault_path
        self.index = ZettelIndex(zettels)
        self._renames: list[Rename] = []

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, zettel_id: str) -> bool:
        return self.index.exists(zettel_id)

    def children_of(self, zettel_id: str) -> list[Zettel]:
        return self.index.children_of(zettel_id)

    def first_available_sibling_after(self, zettel_id: str) -> str:
        return first_available_id(increment_id(zettel_id), self.exists)

    def first_available_child_of(self, parent: str) -> str:
        return first_available_id(first_child_of(parent), self.exists)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def rename_node(self, from_id: str, to_id: str) -> Rename:
        """Plan a single rename; the filename keeps everything after the identifier."""
        zettel = self.index.get(from_id)
        if zettel is None:
            raise ZettelNotFoundError(from_id)

        moved = self.index.move(zettel, to_id)
        rename = Rename(from_id=from_id, to_id=to_id, old_path=zettel.path, new_path=moved.path)
        self._renames.append(rename)
        return rename

    def rename(self, from_id: str, to_id: str) -> RenamePlan:
        """Explicit rename that refuses to land on an occupied identifier."""

        def plan() -> None:
            if not self.exists(from_id):
                raise ZettelNotFoundError(from_id)
            if from_id == to_id:
                return
            occupant = self.index.get(to_id)
            if occupant is not None:
                raise IdOccupiedError(to_id, occupant.path)
            self.rename_node(from_id, to_id)

        return self._plan("rename", from_id, plan)

    def move_subtree_to_next_available(self, zettel_id: str) -> RenamePlan:
        """Move a node, children first, to the next free identifier after it."""

        def plan() -> None:
            if not self.exists(zettel_id):
                raise ZettelNotFoundError(zettel_id)
            self._move_subtree(zettel_id)

        return self._plan("move-down", zettel_id, plan)

    def outdent(self, zettel_id: str) -> RenamePlan:
        """Promote a node to the sibling slot right after its parent.

        Whatever occupies that slot is moved down first. The node's direct
        children are re-parented under the node's new identifier, each to the
        first free child slot, before the node itself is renamed.
        """

        def plan() -> None:
            parent = parent_id(zettel_id)
            if parent == "":
                raise AlreadyTopLevelError(zettel_id)
            if not self.exists(zettel_id):
                raise ZettelNotFoundError(zettel_id)

            new_id = increment_id(parent)
            if self.exists(new_id):
                self._move_subtree(new_id)

            children = [child.id for child in self.children_of(zettel_id)]
            for child_id in children:
                self.rename_node(child_id, self.first_available_child_of(new_id))

            self.rename_node(zettel_id, new_id)

        return self._plan("outdent", zettel_id, plan)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _move_subtree(self, zettel_id: str) -> None:
        for child in self.children_of(zettel_id):
            self._move_subtree(child.id)
        self.rename_node(zettel_id, first_available_id(zettel_id, self.exists))

    def _plan(self, operation: str, target_id: str, build: Callable[[], None]) -> RenamePlan:
        saved_index = self.index.copy()
        start = len(self._renames)
        try:
            build()
        except ReorganizeError:
            self.index = saved_index
            del self._renames[start:]
            raise

        return RenamePlan(
            vault_path=self.vault_path,
            operation=operation,
            target_id=target_id,
            renames=self._renames[start:],
        )


def execute_rename_plan(plan: RenamePlan, repository: NoteRepository) -> RenameResult:
    """
    Apply planned renames in order.

    Stops at the first rename storage refuses and raises RenameFailedError
    with the renames completed so far. Nothing is rolled back.
    """
    completed: list[Rename] = []
    for rename in plan.renames:
        try:
            repository.rename(rename.old_path, rename.new_path.name)
        except Exception as e:
            raise RenameFailedError(rename, completed, e) from e
        completed.append(rename)

    return RenameResult(renames=completed)
