import typer
from rich import print

from cli.session import Session
from core.config import Config
from core.storage.factory import get_store
from core.utils.deps import missing_programs, program_name

app = typer.Typer()


@app.callback(invoke_without_command=True)
def status(ctx: typer.Context):
    """
    Show status of current vaultmirror configuration.
    """
    session: Session = ctx.obj
    options = session.options
    print("[blue]vaultmirror Configuration Status[/blue]")

    print(f"[green]Store:[/green] {Config.STORE}")
    print(f"[green]Default path:[/green] {Config.DEFAULT_PATH}")

    # Check working tree
    if options.workdir.is_dir():
        print(f"[green]Working directory:[/green] {options.workdir.resolve()}")
    else:
        print(f"[yellow]Working directory:[/yellow] {options.workdir} does not exist yet")

    print(f"[green]Mirror directory:[/green] {options.mirror_dir or 'system temp'}")

    # Check external programs
    try:
        programs = [*get_store(Config.STORE).required_programs, options.editor]
    except ValueError as e:
        print(f"[red]Store:[/red] {e}")
        raise typer.Exit(code=1)

    missing = missing_programs(programs)
    for program in programs:
        name = program_name(program)
        if name in missing:
            print(f"[red]Program:[/red] {name} not found on PATH")
        else:
            print(f"[green]Program:[/green] {name} found")

    if missing:
        raise typer.Exit(code=127)
