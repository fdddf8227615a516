"""
Per-invocation state shared by the commands: the options built from the
global flags, the dry-run reporter, and the lazily opened store.
"""

from typing import Optional

import typer

from core.config import Config, Options
from core.errors import VaultMirrorError
from core.mirror.reporter import DryRunReporter, DryRunStore, DryRunTree
from core.storage.base import SecretStore
from core.storage.factory import get_store
from core.storage.local import LocalTree
from core.utils import console
from core.utils.deps import require_programs


class Session:
    def __init__(self, options: Options):
        self.options = options
        self.reporter = DryRunReporter()
        self._store: Optional[SecretStore] = None

    def open_store(self) -> SecretStore:
        """
        Create the store on first use, after checking that the programs it
        needs are installed. In dry-run mode the store only reports changes.
        """
        if self._store is None:
            store = get_store(Config.STORE)
            require_programs(store.required_programs)
            if self.options.dry_run:
                store = DryRunStore(store, self.reporter)
            self._store = store
        return self._store

    def working_tree(self) -> LocalTree:
        tree = LocalTree(self.options.workdir)
        if self.options.dry_run:
            return DryRunTree(tree, self.reporter)
        return tree


def fail(e: VaultMirrorError):
    console.error(str(e))
    raise typer.Exit(code=e.exit_code)
