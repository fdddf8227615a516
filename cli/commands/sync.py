"""
Sync Command - Make a store path identical to the local tree.
"""
import typer

from cli.session import Session, fail
from core.config import Config
from core.errors import VaultMirrorError
from core.mirror.reconciler import sync
from core.storage.local import LocalTree
from core.utils import console

app = typer.Typer()


@app.callback(invoke_without_command=True)
def sync_secrets(
    ctx: typer.Context,
    path: str = typer.Argument(Config.DEFAULT_PATH, help="Store directory to sync (ends in '/')"),
):
    """
    Sync a store directory with the working tree, deleting secrets that
    have no local file. Always covers the whole subtree.
    """
    session: Session = ctx.obj
    options = session.options
    if not options.recursive:
        console.warning("sync always covers the whole subtree; ignoring --no-recursive")
    try:
        store = session.open_store()
        result = sync(store, path, LocalTree(options.workdir), options)
    except VaultMirrorError as e:
        fail(e)

    plan = result.plan
    summary = (
        f"{len(plan.added)} added, {len(plan.changed)} changed, "
        f"{len(plan.to_delete)} deleted"
    )
    if options.dry_run:
        console.info(f"Dry run for {path}: {summary}")
    else:
        console.success(f"Synced {path}: {summary}")
