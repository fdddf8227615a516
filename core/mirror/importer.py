"""
Importer - Push local JSON files back into the secret store.
"""

from typing import List

from core import paths
from core.errors import InvalidPath, NotFound
from core.storage.base import SecretStore
from core.storage.local import LocalTree
from core.utils import console


def collect(tree: LocalTree, path: str, recursive: bool = True) -> List[str]:
    """
    Find the leaves to import for ``path``.

    A leaf path selects its own file. A directory path selects every JSON
    file below it, or only those directly inside it when not recursive.

    Raises:
        InvalidPath: if a leaf path names a local directory.
        NotFound: if nothing exists locally for ``path``.
    """
    paths.validate(path)
    if paths.is_directory(path):
        if not tree.dir_for(path).is_dir():
            raise NotFound(f"No local directory for {path}: {tree.dir_for(path)}")
        return tree.leaves(path, recursive)

    if tree.file_for(path).is_file():
        return [path]
    if tree.dir_for(path + "/").is_dir():
        raise InvalidPath(f"{path} is a directory; use '{path}/' to import it")
    raise NotFound(f"No local file for {path}: {tree.file_for(path)}")


def import_tree(
    store: SecretStore, path: str, tree: LocalTree, recursive: bool = True
) -> List[str]:
    """
    Write each selected JSON file to its secret path.

    Returns:
        List[str]: The leaf paths written, sorted.
    """
    leaves = collect(tree, path, recursive)
    for leaf in leaves:
        document = tree.read(leaf)
        console.debug(f"Importing {tree.file_for(leaf)} -> {leaf}")
        store.write(leaf, document)
    return leaves
