"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from luhmann.config import Settings
from luhmann.vault.loader import Vault, load_vault


def write_note(vault_path: Path, name: str, content: str | None = None) -> Path:
    """Write ``<name>.md`` under the vault; default body is a title heading."""
    path = vault_path / f"{name}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if content is not None else f"# Note {name}\n", encoding="utf-8")
    return path


def note_names(vault_path: Path) -> set[str]:
    """Stems of all markdown files directly in the vault."""
    return {p.stem for p in vault_path.glob("*.md")}


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def outdent_vault(vault_path: Path) -> Path:
    """Tree 1, 1a, 1a1, 1a2, 1b."""
    for name in ["1", "1a", "1a1", "1a2", "1b"]:
        write_note(vault_path, name)
    return vault_path


@pytest.fixture
def strict_vault(outdent_vault: Path) -> Vault:
    return load_vault(outdent_vault, Settings())
