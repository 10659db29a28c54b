"""Vault settings from .luhmann/config.toml."""

from pathlib import Path

import pytest

from luhmann.config import Settings, get_config_path, load_settings, settings_from_dict


def _write_config(vault_path: Path, text: str) -> None:
    path = get_config_path(vault_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_defaults_without_config(vault_path: Path):
    settings = load_settings(vault_path)

    assert settings == Settings()
    assert settings.match_rule == "strict"
    assert settings.separator == " - "
    assert settings.insert_link_in_parent


def test_loads_values(vault_path: Path):
    _write_config(
        vault_path,
        'match_rule = "separator"\n'
        'separator = "_"\n'
        "add_title = true\n"
        'ignore_dirs = ["attachments"]\n'
        "unknown_key = 1\n",
    )

    settings = load_settings(vault_path)

    assert settings.match_rule == "separator"
    assert settings.separator == "_"
    assert settings.titles_in_filenames
    assert settings.ignore_dirs == ("attachments",)


def test_invalid_toml(vault_path: Path):
    _write_config(vault_path, "match_rule = \n")

    with pytest.raises(ValueError, match="Failed to parse"):
        load_settings(vault_path)


@pytest.mark.parametrize(
    "data,message",
    [
        ({"match_rule": "loose"}, "match_rule must be one of"),
        ({"match_rule": "separator", "separator": ""}, "separator must not be empty"),
        ({"add_title": "yes"}, "add_title must be true or false"),
        ({"separator": 3}, "separator must be a string"),
        ({"ignore_dirs": [1]}, "ignore_dirs must be a list of strings"),
    ],
)
def test_rejects_bad_values(data: dict, message: str):
    with pytest.raises(ValueError, match=message):
        settings_from_dict(data)


def test_titles_in_filenames_never_under_strict():
    assert not Settings(add_title=True).titles_in_filenames
    assert Settings(match_rule="fuzzy", add_title=True).titles_in_filenames


def test_uses_template_needs_a_path():
    assert not Settings(custom_template=True).uses_template
    assert not Settings(template_file="t.md").uses_template
    assert Settings(custom_template=True, template_file="t.md").uses_template


def test_with_overrides_skips_none():
    settings = Settings(match_rule="separator")

    assert settings.with_overrides(match_rule=None, separator=None) is settings
    assert settings.with_overrides(separator=".").separator == "."
    with pytest.raises(ValueError):
        settings.with_overrides(match_rule="loose")
