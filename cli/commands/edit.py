import typer

from cli.session import Session, fail
from core.errors import VaultMirrorError
from core.mirror.editor import edit_secret
from core.utils import console
from core.utils.deps import require_programs

app = typer.Typer()


@app.callback(invoke_without_command=True)
def edit(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Secret path to edit (not a directory)"),
):
    """
    Open the local JSON copy of a secret in $EDITOR.

    Changes stay local until pushed with 'import'.
    """
    session: Session = ctx.obj
    options = session.options
    try:
        if not options.dry_run:
            require_programs([options.editor])
        store = session.open_store()
        file = edit_secret(store, path, session.working_tree(), options, session.reporter)
    except VaultMirrorError as e:
        fail(e)

    if not options.dry_run:
        console.info(f"Edited {file}. Run 'vaultmirror import {path}' to push the change.")
