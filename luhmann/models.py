"""Data models for Zettelkasten notes."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, get_args

# How an identifier is found at the start of a filename
MatchRule = Literal[
    "strict",
    "separator",
    "fuzzy",
]

MATCH_RULES: tuple[str, ...] = get_args(MatchRule)


@dataclass
class Zettel:
    """A note whose filename carries a Zettelkasten identifier."""

    path: Path
    name: str  # filename without extension
    id: str  # leading identifier extracted from name
    content: str = ""  # raw markdown after frontmatter
    frontmatter: dict = field(default_factory=dict)
    aliases: list[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        """Title from first H1 header, frontmatter title, or filename."""
        for line in self.content.split("\n"):
            if line.startswith("# "):
                return line[2:].strip()
        fm_title = self.frontmatter.get("title")
        if isinstance(fm_title, str) and fm_title.strip():
            return fm_title.strip()
        return self.name

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")

    @property
    def rest(self) -> str:
        """Everything in the filename after the identifier (separator and title)."""
        return self.name[len(self.id):]


@dataclass(frozen=True)
class Rename:
    """A single identifier change, and the file move that carries it."""

    from_id: str
    to_id: str
    old_path: Path
    new_path: Path

    def to_dict(self) -> dict[str, str]:
        return {
            "from_id": self.from_id,
            "to_id": self.to_id,
            "old_path": str(self.old_path),
            "new_path": str(self.new_path),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Rename":
        return cls(
            from_id=data["from_id"],
            to_id=data["to_id"],
            old_path=Path(data["old_path"]),
            new_path=Path(data["new_path"]),
        )
