"""
Dump Command - Copy secrets from the store into the working tree.
"""
import typer

from cli.session import Session, fail
from core.config import Config
from core.errors import VaultMirrorError
from core.mirror.dumper import dump
from core.utils import console

app = typer.Typer()


@app.callback(invoke_without_command=True)
def dump_secrets(
    ctx: typer.Context,
    path: str = typer.Argument(Config.DEFAULT_PATH, help="Store path to dump (directories end in '/')"),
):
    """
    Dump a store path into the working directory as JSON files.
    """
    session: Session = ctx.obj
    try:
        store = session.open_store()
        tree = session.working_tree()
        console.info(f"Dumping {path} into {tree.root}")
        leaves = dump(store, path, tree, recursive=session.options.recursive)
    except VaultMirrorError as e:
        fail(e)

    if session.options.dry_run:
        console.info(f"Would dump {len(leaves)} secret(s) from {path}")
    else:
        console.success(f"Dumped {len(leaves)} secret(s) from {path}")
