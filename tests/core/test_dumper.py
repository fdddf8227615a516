import json

import pytest

from core.errors import LocalIOFailure, NotFound, StoreUnavailable
from core.mirror.dumper import dump
from core.mirror.reporter import DryRunReporter, DryRunTree
from core.storage.memory import MemoryStore


def test_dump_recursive_example(store, tree):
    dumped = dump(store, "secret/", tree)

    assert dumped == ["secret/a", "secret/b/c"]
    assert json.loads((tree.root / "secret" / "a.json").read_text()) == {"x": 1}
    assert json.loads((tree.root / "secret" / "b" / "c.json").read_text()) == {"y": 2}
    assert (tree.root / "secret" / "b").is_dir()


def test_dump_non_recursive_skips_directories(store, tree):
    dumped = dump(store, "secret/", tree, recursive=False)

    assert dumped == ["secret/a"]
    assert not (tree.root / "secret" / "b").exists()


def test_dump_single_leaf(store, tree):
    assert dump(store, "secret/b/c", tree) == ["secret/b/c"]
    assert tree.read("secret/b/c") == {"y": 2}
    assert not (tree.root / "secret" / "a.json").exists()


def test_dump_follows_listing_order(tree):
    store = MemoryStore({
        "kv/z": {"n": 1},
        "kv/m/deep/leaf": {"n": 2},
        "kv/a": {"n": 3},
    })
    assert dump(store, "kv/", tree) == ["kv/a", "kv/m/deep/leaf", "kv/z"]


def test_dump_never_deletes(store, tree):
    tree.write("secret/stale", {"old": True})
    dump(store, "secret/", tree)
    assert tree.read("secret/stale") == {"old": True}


def test_dump_missing_directory(store, tree):
    with pytest.raises(NotFound):
        dump(store, "other/", tree)
    assert dump(store, "other/", tree, missing_ok=True) == []


def test_dump_dry_run_writes_nothing(store, tree):
    reporter = DryRunReporter(emit=lambda line: None)
    dump(store, "secret/", DryRunTree(tree, reporter))

    assert list(tree.root.iterdir()) == []
    assert reporter.lines == [
        f"[dry-run] create directory {tree.root / 'secret'}",
        f"[dry-run] write file {tree.root / 'secret' / 'a.json'}",
        f"[dry-run] create directory {tree.root / 'secret' / 'b'}",
        f"[dry-run] write file {tree.root / 'secret' / 'b' / 'c.json'}",
    ]


class FlakyStore(MemoryStore):
    def list(self, path):
        if path == "secret/b/":
            raise StoreUnavailable("dial tcp 127.0.0.1:8200: connect: connection refused")
        return super().list(path)


def test_dump_stops_when_store_drops_mid_walk(tree):
    store = FlakyStore({"secret/a": {"x": 1}, "secret/b/c": {"y": 2}, "secret/z": {"z": 3}})

    with pytest.raises(StoreUnavailable):
        dump(store, "secret/", tree)

    assert (tree.root / "secret" / "a.json").exists()
    assert not (tree.root / "secret" / "z.json").exists()


def test_dump_fails_when_directory_cannot_be_created(store, tree):
    # A plain file sits where the secret/ directory should go
    (tree.root / "secret").write_text("in the way")

    with pytest.raises(LocalIOFailure):
        dump(store, "secret/", tree)

    assert (tree.root / "secret").read_text() == "in the way"
