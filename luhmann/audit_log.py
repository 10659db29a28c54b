"""
Audit trail of renames and created notes.

A reorganization that fails halfway keeps the renames it already made, so
the trail is the only place those partial moves are written down. Each
executed write command appends one JSON object per line to
``<vault>/.luhmann/audit.log``.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from .config import CONFIG_DIR
from .models import Rename

AUDIT_LOG_FILE = "audit.log"


@dataclass
class AuditEntry:
    """One executed write command."""
    timestamp: str
    operation: str  # "rename", "move-down", "outdent", "new-note"
    renames: list[Rename] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def error(self) -> str | None:
        return self.metadata.get("error")

    def changes(self) -> list[str]:
        """One line per rename or created note, in the order they happened."""
        lines = [f"{r.from_id} -> {r.to_id}" for r in self.renames]
        lines.extend(f"+ {Path(p).name}" for p in self.created)
        return lines

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "operation": self.operation,
            "renames": [r.to_dict() for r in self.renames],
            "created": list(self.created),
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEntry":
        return cls(
            timestamp=data["timestamp"],
            operation=data["operation"],
            renames=[Rename.from_dict(r) for r in data.get("renames", [])],
            created=list(data.get("created", [])),
            metadata=dict(data.get("metadata", {})),
        )


def get_audit_log_path(vault_path: Path) -> Path:
    return vault_path / CONFIG_DIR / AUDIT_LOG_FILE


def log_operation(
    vault_path: Path,
    operation: str,
    renames: list[Rename] | None = None,
    created: list[Path] | None = None,
    metadata: dict[str, Any] | None = None,
) -> AuditEntry:
    """
    Append an entry for an executed write command.

    Args:
        vault_path: Path to the vault directory
        operation: Command name ("outdent", "new-note", ...)
        renames: Renames actually performed, in order
        created: Paths of notes that were created
        metadata: Extra context such as the target identifier or an error

    Returns:
        The entry that was written
    """
    entry = AuditEntry(
        timestamp=datetime.now(timezone.utc).isoformat(),
        operation=operation,
        renames=list(renames or []),
        created=[str(p) for p in created or []],
        metadata=dict(metadata or {}),
    )

    log_path = get_audit_log_path(vault_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(entry.to_dict()) + "\n")

    return entry


def _parse_line(line: str) -> AuditEntry | None:
    try:
        return AuditEntry.from_dict(json.loads(line))
    except (json.JSONDecodeError, KeyError, TypeError):
        return None


def iter_audit_entries(vault_path: Path) -> Iterator[AuditEntry]:
    """Entries oldest first; lines that don't parse are skipped."""
    log_path = get_audit_log_path(vault_path)
    if not log_path.exists():
        return

    with log_path.open("r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            entry = _parse_line(line)
            if entry is not None:
                yield entry


def read_audit_log(vault_path: Path, last_n: int | None = None) -> list[AuditEntry]:
    """All entries oldest first, or only the last ``last_n`` of them."""
    entries = list(iter_audit_entries(vault_path))
    if last_n is None:
        return entries
    return entries[-last_n:] if last_n > 0 else []
