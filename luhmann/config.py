"""Vault settings for identifier matching and note creation.

Settings live in ``<vault>/.luhmann/config.toml``. Every key is optional:

    match_rule = "separator"
    separator = " - "
    add_title = true
    insert_link_in_parent = true
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .models import MATCH_RULES

CONFIG_DIR = ".luhmann"
CONFIG_FILE = "config.toml"


@dataclass(frozen=True)
class Settings:
    """Identifier matching policy and note creation options."""

    match_rule: str = "strict"
    separator: str = " - "
    add_title: bool = False  # "1a2 - Title.md" instead of "1a2.md"
    add_alias: bool = False  # add the title to frontmatter aliases
    use_link_alias: bool = False  # [[1a2|Title]] instead of [[1a2]]
    custom_template: bool = False
    template_file: str = ""  # relative to the vault
    template_require_title: bool = True
    template_require_link: bool = True
    insert_link_in_parent: bool = True
    insert_link_in_child: bool = True
    ignore_dirs: tuple[str, ...] = ("_layouts", "templates", "scripts")

    @property
    def titles_in_filenames(self) -> bool:
        """Titles are never appended under the strict rule."""
        return self.add_title and self.match_rule != "strict"

    @property
    def uses_template(self) -> bool:
        return self.custom_template and self.template_file.strip() != ""

    def with_overrides(self, **overrides: Any) -> Settings:
        """Copy with the non-None overrides applied (e.g. from CLI flags)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return _validated(replace(self, **changes))


def get_config_path(vault_path: Path) -> Path:
    return vault_path / CONFIG_DIR / CONFIG_FILE


def _validated(settings: Settings) -> Settings:
    if settings.match_rule not in MATCH_RULES:
        raise ValueError(
            f"match_rule must be one of {', '.join(MATCH_RULES)} (got {settings.match_rule!r})"
        )
    if settings.match_rule == "separator" and not settings.separator:
        raise ValueError("separator must not be empty when match_rule is 'separator'")
    return settings


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build settings from parsed TOML, ignoring unknown keys."""
    defaults = Settings()
    values: dict[str, Any] = {}

    for f in fields(Settings):
        if f.name not in data:
            continue
        raw = data[f.name]
        default = getattr(defaults, f.name)

        if isinstance(default, bool):
            if not isinstance(raw, bool):
                raise ValueError(f"{f.name} must be true or false")
            values[f.name] = raw
        elif isinstance(default, tuple):
            if isinstance(raw, str):
                raw = [raw]
            if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
                raise ValueError(f"{f.name} must be a list of strings")
            values[f.name] = tuple(item.strip() for item in raw if item.strip())
        else:
            if not isinstance(raw, str):
                raise ValueError(f"{f.name} must be a string")
            values[f.name] = raw

    return _validated(replace(defaults, **values))


def load_settings(vault_path: Path) -> Settings:
    """Load vault settings, falling back to defaults when no config exists."""
    import tomllib

    config_path = get_config_path(vault_path)
    if not config_path.exists():
        return Settings()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Failed to parse {config_path}: {e}") from e

    return settings_from_dict(data)
