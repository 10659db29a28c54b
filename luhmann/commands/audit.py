"""Audit log command - show recorded vault changes."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..audit_log import read_audit_log


def run_log(vault_path: Path, last_n: int | None = None, output_json: bool = False) -> int:
    """Print audit log entries, oldest first."""
    console = Console()
    entries = read_audit_log(vault_path, last_n=last_n)

    if output_json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return 0

    if not entries:
        Console(stderr=True).print("Audit log is empty.", style="yellow")
        return 0

    table = Table(title="Vault changes")
    table.add_column("Time", style="dim")
    table.add_column("Operation")
    table.add_column("Changes")
    table.add_column("Error", style="red")

    for entry in entries:
        table.add_row(
            entry.timestamp,
            entry.operation,
            escape("\n".join(entry.changes()) or "-"),
            escape(entry.error or ""),
        )

    console.print(table)
    return 0
