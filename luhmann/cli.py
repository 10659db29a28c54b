"""CLI entrypoint for luhmann."""

import sys
from pathlib import Path

import click

from . import __version__
from .config import load_settings
from .models import MATCH_RULES


@click.group()
@click.version_option(__version__, prog_name="luhmann")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Path to the vault directory (defaults to the current directory)",
)
@click.option(
    "--match-rule",
    type=click.Choice(list(MATCH_RULES)),
    default=None,
    help="How identifiers are found in filenames (overrides .luhmann/config.toml)",
)
@click.option(
    "--separator",
    type=str,
    default=None,
    help="Text between identifier and title in filenames (overrides .luhmann/config.toml)",
)
@click.pass_context
def cli(ctx: click.Context, vault: Path | None, match_rule: str | None, separator: str | None) -> None:
    """luhmann - Folgezettel identifiers for a Zettelkasten vault.

    Notes are markdown files whose names start with an identifier such as
    1a2: the second child of 1a, which is the first child of 1.
    """
    ctx.ensure_object(dict)
    vault = vault or Path.cwd()

    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="--vault / -v")

    vault = vault.resolve()
    try:
        settings = load_settings(vault).with_overrides(match_rule=match_rule, separator=separator)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["vault"] = vault
    ctx.obj["settings"] = settings


# -----------------------------------------------------------------------------
# Read-only commands
# -----------------------------------------------------------------------------


@cli.command("id")
@click.argument("filename")
@click.pass_context
def id_(ctx: click.Context, filename: str) -> None:
    """Print the identifier in FILENAME under the active match rule.

    Examples:

        luhmann id "1a2 - My Note.md" --match-rule separator

        luhmann --match-rule fuzzy id 1a2_note
    """
    from .commands.show import run_id

    sys.exit(run_id(filename, ctx.obj["settings"]))


@cli.command("next")
@click.argument("kind", type=click.Choice(["sibling", "child"]))
@click.argument("zettel_id")
@click.pass_context
def next_(ctx: click.Context, kind: str, zettel_id: str) -> None:
    """Print the first free sibling or child identifier of ZETTEL_ID."""
    from .commands.show import run_next

    sys.exit(run_next(ctx.obj["vault"], kind, zettel_id, settings=ctx.obj["settings"]))


@cli.command()
@click.argument("zettel_id")
@click.pass_context
def parent(ctx: click.Context, zettel_id: str) -> None:
    """Print the path of the parent note of ZETTEL_ID."""
    from .commands.show import run_parent

    sys.exit(run_parent(ctx.obj["vault"], zettel_id, settings=ctx.obj["settings"]))


@cli.command()
@click.argument("zettel_id")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def children(ctx: click.Context, zettel_id: str, output_json: bool) -> None:
    """List the direct children of ZETTEL_ID."""
    from .commands.show import run_children

    sys.exit(run_children(ctx.obj["vault"], zettel_id, output_json=output_json, settings=ctx.obj["settings"]))


@cli.command()
@click.argument("zettel_id", required=False)
@click.pass_context
def tree(ctx: click.Context, zettel_id: str | None) -> None:
    """Show the note hierarchy, optionally only below ZETTEL_ID."""
    from .commands.show import run_tree

    sys.exit(run_tree(ctx.obj["vault"], zettel_id, settings=ctx.obj["settings"]))


@cli.command()
@click.argument("query")
@click.pass_context
def find(ctx: click.Context, query: str) -> None:
    """Find notes whose title or alias contains QUERY."""
    from .commands.show import run_find

    sys.exit(run_find(ctx.obj["vault"], query, settings=ctx.obj["settings"]))


# -----------------------------------------------------------------------------
# Write commands
# -----------------------------------------------------------------------------


@cli.command()
@click.argument("kind", type=click.Choice(["sibling", "child"]))
@click.argument("zettel_id")
@click.option("--title", "-t", type=str, default="", help="Title of the new note")
@click.option("--dry-run", is_flag=True, help="Show what would be created without writing")
@click.pass_context
def new(ctx: click.Context, kind: str, zettel_id: str, title: str, dry_run: bool) -> None:
    """Create a new sibling or child note of ZETTEL_ID.

    Examples:

        luhmann new child 1a --title "Paper slips"

        luhmann new sibling 1a2 --dry-run
    """
    from .commands.new import run_new

    sys.exit(run_new(ctx.obj["vault"], kind, zettel_id, title=title, dry_run=dry_run, settings=ctx.obj["settings"]))


@cli.command()
@click.argument("from_id")
@click.argument("to_id")
@click.option("--dry-run", is_flag=True, help="Show the rename without applying it")
@click.pass_context
def rename(ctx: click.Context, from_id: str, to_id: str, dry_run: bool) -> None:
    """Give note FROM_ID the free identifier TO_ID."""
    from .commands.reorganize_cmd import run_rename

    sys.exit(run_rename(ctx.obj["vault"], from_id, to_id, dry_run=dry_run, settings=ctx.obj["settings"]))


@cli.command("move-down")
@click.argument("zettel_id")
@click.option("--dry-run", is_flag=True, help="Show the renames without applying them")
@click.pass_context
def move_down(ctx: click.Context, zettel_id: str, dry_run: bool) -> None:
    """Move ZETTEL_ID and its children to the next free identifier.

    Children are moved first, then the note itself.
    """
    from .commands.reorganize_cmd import run_move_down

    sys.exit(run_move_down(ctx.obj["vault"], zettel_id, dry_run=dry_run, settings=ctx.obj["settings"]))


@cli.command()
@click.argument("zettel_id")
@click.option("--dry-run", is_flag=True, help="Show the renames without applying them")
@click.pass_context
def outdent(ctx: click.Context, zettel_id: str, dry_run: bool) -> None:
    """Promote ZETTEL_ID to be the next sibling of its parent.

    A note already in the target slot is moved down first. Direct children
    follow the note to its new identifier.

    Examples:

        luhmann outdent 1a1

        luhmann outdent 1a1 --dry-run
    """
    from .commands.reorganize_cmd import run_outdent

    sys.exit(run_outdent(ctx.obj["vault"], zettel_id, dry_run=dry_run, settings=ctx.obj["settings"]))


@cli.command()
@click.option("--last", "last_n", type=int, default=None, help="Show only the last N entries")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def log(ctx: click.Context, last_n: int | None, output_json: bool) -> None:
    """Show the audit log of renames and created notes."""
    from .commands.audit import run_log

    sys.exit(run_log(ctx.obj["vault"], last_n=last_n, output_json=output_json))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
