"""
Dry-Run Reporter - Stand-ins for the secret store and a local tree that
report mutating calls instead of performing them.
"""

from pathlib import Path
from typing import Any, Callable, List

from core.storage.base import SecretStore
from core.storage.local import LocalTree
from core.utils import console


class DryRunReporter:
    def __init__(self, emit: Callable[[str], None] = console.report):
        self.emit = emit
        self.lines: List[str] = []

    def report(self, action: str, target: str) -> None:
        line = f"[dry-run] {action} {target}"
        self.lines.append(line)
        self.emit(line)


class DryRunStore(SecretStore):
    """Reads go to the wrapped store, writes and deletes are only reported."""

    def __init__(self, store: SecretStore, reporter: DryRunReporter):
        self.store = store
        self.reporter = reporter
        self.required_programs = store.required_programs

    def list(self, path: str) -> List[str]:
        return self.store.list(path)

    def read(self, path: str) -> Any:
        return self.store.read(path)

    def write(self, path: str, document: Any) -> None:
        self.reporter.report("write", path)

    def delete(self, path: str) -> None:
        self.reporter.report("delete", path)


class DryRunTree(LocalTree):
    """A local tree whose writes and removals are only reported."""

    def __init__(self, tree: LocalTree, reporter: DryRunReporter):
        super().__init__(tree.root)
        self.reporter = reporter

    def write(self, path: str, document: Any) -> Path:
        file = self.file_for(path)
        self.reporter.report("write file", str(file))
        return file

    def make_dir(self, path: str) -> Path:
        directory = self.dir_for(path)
        if not directory.is_dir():
            self.reporter.report("create directory", str(directory))
        return directory

    def remove(self, path: str) -> None:
        self.reporter.report("remove file", str(self.file_for(path)))

    def destroy(self) -> None:
        self.reporter.report("remove directory", str(self.root))
