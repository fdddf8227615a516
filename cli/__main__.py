"""
vaultmirror Command Line Interface - Main entry point.
"""
from importlib.metadata import PackageNotFoundError, version as dist_version
from pathlib import Path
from typing import Optional

import typer
from rich import print

from cli.commands import dump, edit, import_, status, sync
from cli.session import Session
from core.config import Config, Options
from core.utils import console

app = typer.Typer(
    name="vaultmirror",
    help="Mirror a Vault secret tree to local JSON files and sync it back",
    no_args_is_help=True,
)

# Register command modules
app.add_typer(dump.app, name="dump", help="Dump a store path into local JSON files")
app.add_typer(edit.app, name="edit", help="Edit the local copy of a secret")
app.add_typer(import_.app, name="import", help="Write local JSON files to the store")
app.add_typer(sync.app, name="sync", help="Make a store path match the local tree")
app.add_typer(status.app, name="status", help="Show configuration and dependencies")


@app.callback()
def main(
    ctx: typer.Context,
    workdir: Optional[Path] = typer.Option(
        None, "--workdir", "-C", help="Local tree root (default: VAULTMIRROR_WORKDIR or .)"
    ),
    recursive: bool = typer.Option(
        Config.RECURSIVE, "--recursive/--no-recursive", "-r/-R", help="Descend into sub-directories"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Report changes without making them"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors and reports"),
    keep_mirror: bool = typer.Option(
        False, "--keep-mirror", help="Keep the sync mirror directory after success"
    ),
):
    """
    🔐 vaultmirror - Vault secrets as local JSON files

    Dump a secret tree, edit it locally, and push or sync it back.
    """
    options = Options.from_config(
        workdir=workdir,
        recursive=recursive,
        dry_run=dry_run,
        verbose=verbose,
        quiet=quiet,
        keep_mirror=keep_mirror,
    )
    console.configure(verbose=options.verbose, quiet=options.quiet)
    ctx.obj = Session(options)


@app.command("version")
def version():
    """
    Show vaultmirror version information.
    """
    try:
        current = dist_version("vaultmirror")
    except PackageNotFoundError:
        current = "development"

    print(f"[blue]🔐 vaultmirror[/blue] version [green]{current}[/green]")


if __name__ == "__main__":
    app()
