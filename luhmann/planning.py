"""
Planning infrastructure for write commands.

Every write command is split into a compute phase, which works out the full
list of changes against an in-memory snapshot without touching the vault,
and an execute phase, which applies them.

This module provides:
- Base classes for separating compute and execute phases
- Plan/Result dataclasses for each write command
- Dry-run capability for all write commands (print the plan, skip execute)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .audit_log import log_operation
from .models import Rename


@dataclass
class BasePlan(ABC):
    """Base class for operation plans (compute output)."""
    vault_path: Path

    @abstractmethod
    def summary(self) -> str:
        """Human-readable summary of what would be done."""
        ...


@dataclass
class BaseResult:
    """Base class for operation results (execute output)."""
    renames: list[Rename] = field(default_factory=list)
    created: list[Path] = field(default_factory=list)
    success: bool = True
    error: str | None = None

    def log_to_audit(self, vault_path: Path, operation: str, metadata: dict[str, Any] | None = None) -> None:
        """Log this result to the audit trail."""
        metadata = dict(metadata or {})
        if self.error:
            metadata["error"] = self.error
        log_operation(vault_path, operation, self.renames, self.created, metadata)


# Rename Plan/Result (rename, move-down, outdent)
@dataclass
class RenamePlan(BasePlan):
    """Ordered identifier renames computed by the reorganizer."""
    operation: str
    target_id: str
    renames: list[Rename] = field(default_factory=list)

    def summary(self) -> str:
        lines = [
            f"{self.operation.capitalize()} Plan for {self.target_id}",
            f"  Renames: {len(self.renames)}",
        ]
        for rename in self.renames:
            lines.append(f"  {rename.from_id} -> {rename.to_id}  ({rename.old_path.name} -> {rename.new_path.name})")
        return "\n".join(lines)


@dataclass
class RenameResult(BaseResult):
    """Result of applying a rename plan."""


# New Note Plan/Result
@dataclass
class NewNotePlan(BasePlan):
    """Plan for creating a sibling or child note."""
    source_id: str
    kind: str  # "sibling" or "child"
    note_id: str
    title: str
    path: Path
    content: str = ""
    link: str = ""  # link to the new note, for the source note
    source_path: Path | None = None  # note that receives the link, if any

    def summary(self) -> str:
        lines = [
            f"New Note Plan ({self.kind} of {self.source_id})",
            f"  Identifier: {self.note_id}",
            f"  Path: {self.path}",
            f"  Size: {len(self.content.encode('utf-8'))} bytes",
        ]
        if self.source_path:
            lines.append(f"  Link {self.link} appended to {self.source_path.name}")
        return "\n".join(lines)


@dataclass
class NewNoteResult(BaseResult):
    """Result of note creation."""
    path: Path | None = None
    linked_from: Path | None = None
