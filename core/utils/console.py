from rich.console import Console
from rich.markup import escape

console = Console(stderr=True, highlight=False, soft_wrap=True)
# Dry-run reports are the command's output proper
report_console = Console(highlight=False, soft_wrap=True)

_verbose = False
_quiet = False


def configure(verbose: bool = False, quiet: bool = False) -> None:
    global _verbose, _quiet
    _verbose = verbose and not quiet
    _quiet = quiet


def info(msg):
    if not _quiet:
        console.print(f"ℹ️  {escape(str(msg))}", style="blue")


def success(msg):
    if not _quiet:
        console.print(f"✅ {escape(str(msg))}", style="green")


def warning(msg):
    if not _quiet:
        console.print(f"⚠️  {escape(str(msg))}", style="yellow")


def error(msg): console.print(f"❌ {escape(str(msg))}", style="red")


def debug(msg):
    if _verbose:
        console.print(f"🔍 {escape(str(msg))}", style="dim")


def report(msg): report_console.print(msg, markup=False)
