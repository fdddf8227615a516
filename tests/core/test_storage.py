import json
import subprocess

import pytest

from core.errors import InvalidPath, LocalIOFailure, NotFound, StoreUnavailable, WriteRejected
from core.storage.factory import get_store
from core.storage.memory import MemoryStore
from core.storage.vault_cli import VaultCLIStore


def test_memory_store_lists_children_in_order(store):
    assert store.list("secret/") == ["a", "b/"]
    assert store.list("secret/b/") == ["c"]


def test_memory_store_missing_paths(store):
    with pytest.raises(NotFound):
        store.list("secret/nothing/")
    with pytest.raises(NotFound):
        store.read("secret/nothing")


def test_memory_store_delete_is_idempotent(store):
    store.delete("secret/a")
    store.delete("secret/a")
    assert "secret/a" not in store.secrets
    assert store.mutations == [("delete", "secret/a"), ("delete", "secret/a")]


def test_memory_store_rejects_directory_writes(store):
    with pytest.raises(InvalidPath):
        store.write("secret/", {"x": 1})
    assert "secret/" not in store.secrets
    assert store.mutations == []


def test_memory_store_returns_copies(store):
    document = store.read("secret/a")
    document["x"] = 99
    assert store.read("secret/a") == {"x": 1}


def test_local_tree_write_and_read(tree):
    file = tree.write("secret/b/c", {"y": 2})
    assert file == tree.root / "secret" / "b" / "c.json"
    assert json.loads(file.read_text()) == {"y": 2}
    assert tree.read("secret/b/c") == {"y": 2}
    assert tree.exists("secret/b/")
    assert tree.exists("secret/b/c")


def test_local_tree_write_is_pretty_printed(tree):
    file = tree.write("secret/a", {"x": 1})
    assert file.read_text() == '{\n  "x": 1\n}\n'


def test_local_tree_leaves(tree):
    tree.write("secret/a", {})
    tree.write("secret/b/c", {})
    (tree.root / "secret" / "notes.txt").write_text("ignored")

    assert tree.leaves("secret/") == ["secret/a", "secret/b/c"]
    assert tree.leaves("secret/", recursive=False) == ["secret/a"]
    assert tree.leaves("missing/") == []


def test_local_tree_invalid_json(tree):
    file = tree.root / "secret" / "bad.json"
    file.parent.mkdir(parents=True)
    file.write_text("{not json")
    with pytest.raises(LocalIOFailure):
        tree.read("secret/bad")


def test_local_tree_remove_missing_file(tree):
    tree.remove("secret/never")


def test_get_store():
    assert isinstance(get_store("memory"), MemoryStore)
    assert isinstance(get_store("vault"), VaultCLIStore)
    with pytest.raises(ValueError):
        get_store("s3")


class FakeVault:
    """Replaces subprocess.run and answers with canned results."""

    def __init__(self, returncode=0, stdout="", stderr=""):
        self.result = (returncode, stdout, stderr)
        self.calls = []

    def __call__(self, cmd, input=None, **kwargs):
        self.calls.append((cmd, input))
        returncode, stdout, stderr = self.result
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)


@pytest.fixture
def vault(monkeypatch):
    def install(**kwargs):
        fake = FakeVault(**kwargs)
        monkeypatch.setattr("core.storage.vault_cli.subprocess.run", fake)
        return fake
    return install


def test_vault_list(vault):
    fake = vault(stdout='["a", "b/"]')
    assert VaultCLIStore().list("secret/") == ["a", "b/"]
    assert fake.calls[0][0] == ["vault", "list", "-format=json", "secret/"]


def test_vault_read_keeps_only_data(vault):
    envelope = {"request_id": "1234", "lease_duration": 2764800, "data": {"x": 1}}
    vault(stdout=json.dumps(envelope))
    assert VaultCLIStore().read("secret/a") == {"x": 1}


def test_vault_read_not_found(vault):
    vault(returncode=2, stderr="No value found at secret/nothing")
    with pytest.raises(NotFound):
        VaultCLIStore().read("secret/nothing")


def test_vault_list_empty_output_is_not_found(vault):
    vault(returncode=0, stdout="")
    with pytest.raises(NotFound):
        VaultCLIStore().list("secret/")


def test_vault_unreachable(vault):
    vault(returncode=2, stderr="Get \"https://127.0.0.1:8200/v1/sys\": dial tcp 127.0.0.1:8200: connect: connection refused")
    with pytest.raises(StoreUnavailable):
        VaultCLIStore().list("secret/")


def test_vault_write_sends_document_on_stdin(vault):
    fake = vault()
    VaultCLIStore().write("secret/a", {"x": 1})
    cmd, stdin = fake.calls[0]
    assert cmd == ["vault", "write", "secret/a", "-"]
    assert json.loads(stdin) == {"x": 1}


def test_vault_write_rejected(vault):
    vault(returncode=2, stderr="Error writing data to secret/a: Code: 403. Errors:\n* permission denied")
    with pytest.raises(WriteRejected):
        VaultCLIStore().write("secret/a", {"x": 1})


def test_vault_missing_binary(monkeypatch):
    def boom(*args, **kwargs):
        raise FileNotFoundError("vault")
    monkeypatch.setattr("core.storage.vault_cli.subprocess.run", boom)
    with pytest.raises(StoreUnavailable):
        VaultCLIStore().read("secret/a")


def test_vault_required_programs():
    assert VaultCLIStore("/opt/vault/bin/vault").required_programs == ("/opt/vault/bin/vault",)
