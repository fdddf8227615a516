"""
Dumper - Materialize a secret store subtree as JSON files.
"""

from typing import List

from core import paths
from core.errors import NotFound
from core.storage.base import SecretStore
from core.storage.local import LocalTree
from core.utils import console


def dump_leaf(store: SecretStore, path: str, tree: LocalTree) -> None:
    """Read one leaf and write its data payload to the tree."""
    document = store.read(path)
    file = tree.write(path, document)
    console.debug(f"Dumped {path} -> {file}")


def dump(
    store: SecretStore,
    path: str,
    tree: LocalTree,
    recursive: bool = True,
    missing_ok: bool = False,
) -> List[str]:
    """
    Copy every leaf below ``path`` from the store into ``tree``.

    Children are visited depth first in listing order, so the same listing
    always produces the same sequence of writes. A leaf path dumps just that
    leaf. When ``recursive`` is off, directory children are skipped.

    Args:
        store: Store to read from
        path: Directory path (``secret/``) or leaf path (``secret/a``)
        tree: Local tree to write into
        recursive: Descend into directory children
        missing_ok: Treat a missing top-level directory as empty

    Returns:
        List[str]: The leaf paths written, in visit order.
    """
    paths.validate(path)
    if not paths.is_directory(path):
        dump_leaf(store, path, tree)
        return [path]

    try:
        children = store.list(path)
    except NotFound:
        if not missing_ok:
            raise
        console.debug(f"Nothing stored under {path}")
        return []

    tree.make_dir(path)
    dumped: List[str] = []
    # Stack of (directory, remaining children) stands in for recursion
    stack = [(path, iter(children))]
    while stack:
        parent, remaining = stack[-1]
        child = next(remaining, None)
        if child is None:
            stack.pop()
            continue

        child_path = paths.join(parent, child)
        if paths.is_directory(child_path):
            if not recursive:
                console.debug(f"Skipping directory {child_path} (not recursive)")
                continue
            tree.make_dir(child_path)
            stack.append((child_path, iter(store.list(child_path))))
        else:
            dump_leaf(store, child_path, tree)
            dumped.append(child_path)

    return dumped
