"""Vault snapshot loading and hierarchy queries."""

from pathlib import Path

from luhmann.config import Settings
from luhmann.vault.loader import load_vault

from conftest import write_note


def test_loads_only_identified_notes(vault_path: Path):
    write_note(vault_path, "1")
    write_note(vault_path, "1a")
    write_note(vault_path, "README")
    write_note(vault_path, "Inbox note")

    vault = load_vault(vault_path, Settings())

    assert sorted(vault.ids) == ["1", "1a"]


def test_skips_hidden_and_system_folders(vault_path: Path):
    write_note(vault_path, "1")
    write_note(vault_path, "templates/2")
    write_note(vault_path, "scripts/3")
    write_note(vault_path, "_layouts/4")
    write_note(vault_path, ".trash/5")
    write_note(vault_path, "archive/6")

    vault = load_vault(vault_path, Settings())

    assert sorted(vault.ids) == ["1", "6"]


def test_separator_rule_reads_titles_from_filenames(vault_path: Path):
    write_note(vault_path, "1 - Start")
    write_note(vault_path, "1a - Follow up")
    write_note(vault_path, "1b")

    vault = load_vault(vault_path, Settings(match_rule="separator", separator=" - "))

    assert sorted(vault.ids) == ["1", "1a"]
    assert vault.get("1a").name == "1a - Follow up"
    assert vault.get("1a").rest == " - Follow up"


def test_children_are_direct_and_in_identifier_order(vault_path: Path):
    for name in ["1", "1a", "1a1", "1a10", "1a2", "1b", "2"]:
        write_note(vault_path, name)

    vault = load_vault(vault_path, Settings())

    assert [z.id for z in vault.children_of("1")] == ["1a", "1b"]
    assert [z.id for z in vault.children_of("1a")] == ["1a1", "1a2", "1a10"]
    assert [z.id for z in vault.children_of("")] == ["1", "2"]
    assert [z.id for z in vault.roots()] == ["1", "2"]


def test_title_and_aliases_from_frontmatter(vault_path: Path):
    write_note(
        vault_path,
        "1",
        "---\naliases: Slip box\n---\n\n# Zettelkasten\n\nBody.\n",
    )
    write_note(vault_path, "2", "---\ntitle: Second\n---\n\nNo heading here.\n")
    write_note(vault_path, "3", "Just text.\n")

    vault = load_vault(vault_path, Settings())

    assert vault.get("1").title == "Zettelkasten"
    assert vault.get("1").aliases == ["Slip box"]
    assert vault.get("2").title == "Second"
    assert vault.get("3").title == "3"


def test_find_by_title_matches_titles_and_aliases(vault_path: Path):
    write_note(vault_path, "1", "---\naliases: [Slip box]\n---\n\n# Zettelkasten\n")
    write_note(vault_path, "2", "# Index cards\n")

    vault = load_vault(vault_path, Settings())

    assert [z.id for z in vault.find_by_title("slip")] == ["1"]
    assert [z.id for z in vault.find_by_title("CARDS")] == ["2"]
    assert vault.find_by_title("nothing") == []


def test_duplicates_and_orphans_are_reported(vault_path: Path):
    write_note(vault_path, "1")
    write_note(vault_path, "a/1")
    write_note(vault_path, "2a")

    vault = load_vault(vault_path, Settings())

    assert list(vault.duplicate_ids()) == ["1"]
    assert [z.id for z in vault.orphans()] == ["2a"]


def test_settings_loaded_from_vault_config(vault_path: Path):
    config_dir = vault_path / ".luhmann"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text('match_rule = "fuzzy"\n', encoding="utf-8")
    write_note(vault_path, "1a_draft")

    vault = load_vault(vault_path)

    assert vault.settings.match_rule == "fuzzy"
    assert vault.ids == ["1a"]


def test_unparseable_note_keeps_its_identifier(vault_path: Path, capsys):
    write_note(vault_path, "2 - Two")
    write_note(vault_path, "3 - Broken", "---\ntitle: [unclosed\n---\n")

    vault = load_vault(vault_path, Settings(match_rule="separator"))

    broken = vault.get("3")
    assert broken is not None
    assert broken.content == ""
    assert broken.frontmatter == {}
    assert broken.title == "3 - Broken"
    assert "Failed to parse" in capsys.readouterr().err
