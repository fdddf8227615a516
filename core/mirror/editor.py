"""
Path Edit - Open the local copy of one secret in the user's editor.

Editing never writes to the store; push the result with ``import``.
"""

import shlex
import subprocess
from pathlib import Path
from typing import Optional

from core import paths
from core.config import Options
from core.errors import DependencyMissing, InvalidPath
from core.mirror.dumper import dump_leaf
from core.mirror.reporter import DryRunReporter
from core.storage.base import SecretStore
from core.storage.local import LocalTree
from core.utils import console


def edit_secret(
    store: SecretStore,
    path: str,
    tree: LocalTree,
    options: Options,
    reporter: Optional[DryRunReporter] = None,
) -> Path:
    """
    Open the JSON file for a leaf in ``options.editor``.

    The leaf is fetched from the store first when there is no local copy.
    The editor's exit status is ignored.

    Returns:
        Path: The file handed to the editor.

    Raises:
        InvalidPath: for directory paths.
    """
    paths.validate(path)
    if paths.is_directory(path):
        raise InvalidPath(f"Cannot edit a directory path: {path}")

    file = tree.file_for(path)
    if not file.is_file():
        console.info(f"No local copy of {path}, fetching it")
        dump_leaf(store, path, tree)

    if options.dry_run:
        (reporter or DryRunReporter()).report("edit", str(file))
        return file

    command = shlex.split(options.editor) + [str(file)]
    console.debug(f"Running: {' '.join(command)}")
    try:
        subprocess.run(command, check=False)
    except FileNotFoundError:
        raise DependencyMissing([command[0]])
    return file
