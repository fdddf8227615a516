"""
Reconciler - Make a secret store subtree match a local source tree.

The store is dumped into a fresh mirror directory, the mirror is compared
with the source tree file by file, and the differences are applied: leaves
missing from the source are deleted, new or changed leaves are written.
Local content always wins.
"""

import json
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from core import paths
from core.config import Options
from core.errors import InvalidPath, LocalIOFailure
from core.mirror.dumper import dump
from core.mirror.reporter import DryRunReporter, DryRunStore
from core.storage.base import SecretStore
from core.storage.local import LocalTree
from core.utils import console


@dataclass
class SyncPlan:
    """What a sync would change in the store."""

    path: str
    added: List[str] = field(default_factory=list)
    changed: List[str] = field(default_factory=list)
    to_delete: List[str] = field(default_factory=list)

    @property
    def to_write(self) -> List[str]:
        return sorted(self.added + self.changed)

    @property
    def in_sync(self) -> bool:
        return not self.added and not self.changed and not self.to_delete

    @property
    def total(self) -> int:
        return len(self.added) + len(self.changed) + len(self.to_delete)


@dataclass
class SyncResult:
    plan: SyncPlan
    applied: bool
    mirror: Optional[Path] = None  # set when the mirror was kept on disk


def _canonical(document: Any) -> str:
    return json.dumps(document, sort_keys=True, separators=(",", ":"))


def diff_trees(mirror: LocalTree, source: LocalTree, path: str) -> SyncPlan:
    """
    Compare the leaves below ``path`` in two local trees.

    Documents are compared in a canonical serialization, so formatting and
    key order never count as a change while ``1``, ``1.0`` and ``true`` stay
    distinct.
    """
    remote_leaves = mirror.leaves(path, recursive=True)
    local_leaves = source.leaves(path, recursive=True)
    remote_set = set(remote_leaves)
    local_set = set(local_leaves)

    plan = SyncPlan(path=path)
    plan.to_delete = [leaf for leaf in remote_leaves if leaf not in local_set]
    for leaf in local_leaves:
        if leaf not in remote_set:
            plan.added.append(leaf)
        elif _canonical(source.read(leaf)) != _canonical(mirror.read(leaf)):
            plan.changed.append(leaf)
    return plan


def apply_plan(
    plan: SyncPlan,
    store: SecretStore,
    source: LocalTree,
    mirror: Optional[LocalTree] = None,
) -> None:
    """Delete, then write, in sorted path order."""
    for leaf in plan.to_delete:
        console.debug(f"Deleting {leaf}")
        store.delete(leaf)
        if mirror is not None:
            mirror.remove(leaf)
    for leaf in plan.to_write:
        console.debug(f"Writing {leaf}")
        store.write(leaf, source.read(leaf))


def _new_mirror(options: Options) -> LocalTree:
    try:
        if options.mirror_dir is not None:
            options.mirror_dir.mkdir(parents=True, exist_ok=True)
        root = tempfile.mkdtemp(
            prefix="vaultmirror-",
            dir=str(options.mirror_dir) if options.mirror_dir is not None else None,
        )
    except OSError as e:
        raise LocalIOFailure(f"Cannot create mirror directory: {e}")
    return LocalTree(Path(root))


def sync(
    store: SecretStore, path: str, source: LocalTree, options: Options
) -> SyncResult:
    """
    Synchronize the store below directory ``path`` with ``source``.

    The whole subtree is always dumped, whatever ``options.recursive`` says,
    since a partial listing would produce a wrong deletion set. The store is
    never re-read after the dump. Re-running after an interruption converges
    on the same end state.

    In dry-run mode every delete and write is reported instead of performed
    and the mirror is kept for inspection. The mirror is also kept when the
    sync fails, or when ``options.keep_mirror`` is set.

    Raises:
        InvalidPath: if ``path`` is not a directory path.
    """
    paths.validate(path)
    if not paths.is_directory(path):
        raise InvalidPath(f"sync needs a directory path ending in '/': {path}")
    if options.dry_run and not isinstance(store, DryRunStore):
        store = DryRunStore(store, DryRunReporter())

    mirror = _new_mirror(options)
    console.debug(f"Mirroring {path} into {mirror.root}")
    completed = False
    try:
        dump(store, path, mirror, recursive=True, missing_ok=True)
        plan = diff_trees(mirror, source, path)
        if plan.in_sync:
            console.info(f"{path} is already in sync")
        apply_plan(plan, store, source, None if options.dry_run else mirror)
        completed = True
    finally:
        if not completed:
            console.warning(f"Sync did not complete; mirror left at {mirror.root}")

    if options.dry_run or options.keep_mirror:
        console.info(f"Mirror kept at {mirror.root}")
        return SyncResult(plan=plan, applied=not options.dry_run, mirror=mirror.root)

    mirror.destroy()
    return SyncResult(plan=plan, applied=True)
