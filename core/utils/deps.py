"""
Dependency Checks - Make sure external programs are on PATH before any
command touches the secret store.
"""

import shlex
import shutil
from typing import Iterable, List

from core.errors import DependencyMissing


def program_name(command: str) -> str:
    """Return the executable of a command line such as ``code --wait``."""
    parts = shlex.split(command)
    return parts[0] if parts else command


def missing_programs(names: Iterable[str]) -> List[str]:
    missing = []
    for name in names:
        program = program_name(name)
        if program and shutil.which(program) is None and program not in missing:
            missing.append(program)
    return missing


def require_programs(names: Iterable[str]) -> None:
    """
    Raises:
        DependencyMissing: naming every program that could not be resolved.
    """
    missing = missing_programs(names)
    if missing:
        raise DependencyMissing(missing)
