"""Note storage behind the reorganizer and note creation.

The core only needs a handful of capabilities from storage: list the notes,
rename one, create one, and read/write a note's text. ``NoteRepository``
names them; ``FileSystemRepository`` implements them on a vault directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .config import Settings
from .models import Zettel
from .vault.loader import load_vault


@runtime_checkable
class NoteRepository(Protocol):
    """Storage capabilities consumed by the reorganizer and note creation."""

    def list_zettels(self) -> list[Zettel]:
        """Full snapshot of notes, each already mapped to its identifier."""
        ...

    def rename(self, path: Path, new_name: str) -> Path:
        """Rename a note in place (same directory); raise on failure."""
        ...

    def create(self, path: Path, content: str) -> Path:
        ...

    def read(self, path: Path) -> str:
        ...

    def write(self, path: Path, content: str) -> None:
        ...


class FileSystemRepository:
    """Notes as markdown files under a vault directory."""

    def __init__(self, vault_path: Path, settings: Settings):
        self.vault_path = vault_path
        self.settings = settings

    def list_zettels(self) -> list[Zettel]:
        return load_vault(self.vault_path, self.settings).zettels

    def rename(self, path: Path, new_name: str) -> Path:
        target = path.with_name(new_name)
        if target.exists():
            raise FileExistsError(f"Refusing to overwrite existing file: {target}")
        path.rename(target)
        return target

    def create(self, path: Path, content: str) -> Path:
        if path.exists():
            raise FileExistsError(f"Refusing to overwrite existing file: {path}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")
