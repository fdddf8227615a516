"""
Import Command - Write local JSON files to the store.
"""
import typer

from cli.session import Session, fail
from core.errors import VaultMirrorError
from core.mirror.importer import import_tree
from core.utils import console

app = typer.Typer()


@app.callback(invoke_without_command=True)
def import_secrets(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Secret or directory path to import (directories end in '/')"),
):
    """
    Write the local JSON files under a path to the store.
    """
    session: Session = ctx.obj
    try:
        store = session.open_store()
        leaves = import_tree(store, path, session.working_tree(), recursive=session.options.recursive)
    except VaultMirrorError as e:
        fail(e)

    if session.options.dry_run:
        console.info(f"Would import {len(leaves)} secret(s) under {path}")
    else:
        console.success(f"Imported {len(leaves)} secret(s) under {path}")
