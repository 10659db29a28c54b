"""Vault loading: snapshot every note that carries an identifier."""

import sys
from dataclasses import dataclass, field
from pathlib import Path

import frontmatter

from ..config import Settings, load_settings
from ..models import Zettel
from .ids import NOTE_SUFFIX, file_to_id, parent_id, sort_key


@dataclass
class Vault:
    """Snapshot of all Zettelkasten notes in a vault directory."""

    path: Path
    settings: Settings = field(default_factory=Settings)
    zettels: list[Zettel] = field(default_factory=list)

    # Lookup table built after loading
    _by_id: dict[str, Zettel] = field(default_factory=dict)

    def __post_init__(self):
        self._build_lookups()

    def _build_lookups(self):
        """Index zettels by identifier; the first one loaded wins on duplicates."""
        self._by_id = {}
        for zettel in self.zettels:
            self._by_id.setdefault(zettel.id, zettel)

    def get(self, zettel_id: str) -> Zettel | None:
        return self._by_id.get(zettel_id)

    def exists(self, zettel_id: str) -> bool:
        return zettel_id in self._by_id

    def children_of(self, zettel_id: str) -> list[Zettel]:
        """Direct children: notes whose identifier minus its last component is ``zettel_id``."""
        children = [z for z in self.zettels if parent_id(z.id) == zettel_id]
        return sorted(children, key=lambda z: sort_key(z.id))

    def roots(self) -> list[Zettel]:
        return sorted((z for z in self.zettels if parent_id(z.id) == ""), key=lambda z: sort_key(z.id))

    def orphans(self) -> list[Zettel]:
        """Notes below the top level whose parent identifier has no note."""
        return [z for z in self.zettels if parent_id(z.id) and not self.exists(parent_id(z.id))]

    def duplicate_ids(self) -> dict[str, list[Zettel]]:
        """Identifiers carried by more than one note."""
        by_id: dict[str, list[Zettel]] = {}
        for zettel in self.zettels:
            by_id.setdefault(zettel.id, []).append(zettel)
        return {zid: notes for zid, notes in by_id.items() if len(notes) > 1}

    def find_by_title(self, query: str) -> list[Zettel]:
        """Case-insensitive substring search over titles and aliases."""
        needle = query.lower().strip()
        result = []
        for zettel in self.zettels:
            haystack = [zettel.title, *zettel.aliases]
            if any(needle in text.lower() for text in haystack):
                result.append(zettel)
        return result

    @property
    def ids(self) -> list[str]:
        return [z.id for z in self.zettels]


def is_ignored(path: Path, vault_path: Path, settings: Settings) -> bool:
    """Hidden paths and the configured system folders are not part of the Zettelkasten."""
    try:
        parts = path.relative_to(vault_path).parts
    except ValueError:
        return True

    if any(part.startswith(".") for part in parts):
        return True
    return bool(parts) and parts[0] in settings.ignore_dirs


def load_zettel(path: Path, settings: Settings) -> Zettel | None:
    """Load a markdown file, or None when its name carries no identifier.

    A note whose body can't be read still occupies its identifier, so it is
    returned without content or frontmatter.
    """
    name = path.stem
    zettel_id = file_to_id(name, settings.match_rule, settings.separator)
    if not zettel_id:
        return None

    try:
        post = frontmatter.load(path)
    except Exception as e:
        print(f"Warning: Failed to parse {path}: {e}", file=sys.stderr)
        return Zettel(path=path, name=name, id=zettel_id)

    fm = post.metadata

    aliases = fm.get("aliases", [])
    if isinstance(aliases, str):
        aliases = [aliases]

    return Zettel(
        path=path,
        name=name,
        id=zettel_id,
        content=post.content,
        frontmatter=fm,
        aliases=[str(a) for a in aliases or []],
    )


def load_vault(vault_path: Path, settings: Settings | None = None) -> Vault:
    """Load all Zettelkasten notes from the vault.

    Args:
        vault_path: Path to the vault directory
        settings: Matching policy; read from the vault config when omitted

    Returns:
        Vault snapshot with zettels ordered by relative path
    """
    settings = settings or load_settings(vault_path)
    zettels = []

    for md_file in sorted(vault_path.rglob(f"*{NOTE_SUFFIX}")):
        if is_ignored(md_file, vault_path, settings):
            continue

        zettel = load_zettel(md_file, settings)
        if zettel is not None:
            zettels.append(zettel)

    return Vault(path=vault_path, settings=settings, zettels=zettels)
