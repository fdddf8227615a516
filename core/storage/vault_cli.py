"""
Vault CLI Store - Secret store backed by the ``vault`` command line client.

Authentication and the server address are whatever the ``vault`` binary
picks up from its own environment (VAULT_ADDR, VAULT_TOKEN, ...).
"""

import json
import subprocess
from typing import Any, List, Optional, Sequence

from core.errors import NotFound, StoreUnavailable, WriteRejected
from core.storage.base import SecretStore
from core.utils import console

_NOT_FOUND_MARKERS = ("no value found",)
_UNAVAILABLE_MARKERS = (
    "connection refused",
    "dial tcp",
    "no such host",
    "i/o timeout",
    "server gave http response to https client",
    "vault is sealed",
)


class VaultCLIStore(SecretStore):
    def __init__(self, binary: str = "vault"):
        self.binary = binary
        self.required_programs = (binary,)

    def _run(self, args: Sequence[str], input_text: Optional[str] = None) -> subprocess.CompletedProcess:
        cmd = [self.binary, *args]
        console.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd, input=input_text, capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise StoreUnavailable(f"Could not start {self.binary}: {e}")

    @staticmethod
    def _failure(res: subprocess.CompletedProcess) -> str:
        return (res.stderr or res.stdout or "").strip() or f"exit code {res.returncode}"

    def _raise_for_read(self, res: subprocess.CompletedProcess, path: str) -> None:
        message = self._failure(res)
        lowered = message.lower()
        if any(marker in lowered for marker in _NOT_FOUND_MARKERS):
            raise NotFound(f"No value found at {path}")
        if any(marker in lowered for marker in _UNAVAILABLE_MARKERS):
            raise StoreUnavailable(message)
        raise StoreUnavailable(f"vault failed on {path}: {message}")

    def _raise_for_write(self, res: subprocess.CompletedProcess, path: str) -> None:
        message = self._failure(res)
        if any(marker in message.lower() for marker in _UNAVAILABLE_MARKERS):
            raise StoreUnavailable(message)
        raise WriteRejected(f"vault rejected change to {path}: {message}")

    def _parse(self, res: subprocess.CompletedProcess, path: str) -> Any:
        try:
            return json.loads(res.stdout)
        except ValueError as e:
            raise StoreUnavailable(f"vault returned non-JSON output for {path}: {e}")

    def list(self, path: str) -> List[str]:
        res = self._run(["list", "-format=json", path])
        if res.returncode != 0:
            self._raise_for_read(res, path)
        # An empty listing prints nothing at all on some versions
        if not res.stdout.strip():
            raise NotFound(f"No value found at {path}")
        names = self._parse(res, path)
        if not names:
            raise NotFound(f"No value found at {path}")
        return [str(name) for name in names]

    def read(self, path: str) -> Any:
        res = self._run(["read", "-format=json", path])
        if res.returncode != 0:
            self._raise_for_read(res, path)
        envelope = self._parse(res, path)
        if not isinstance(envelope, dict) or "data" not in envelope:
            raise NotFound(f"No value found at {path}")
        return envelope["data"]

    def write(self, path: str, document: Any) -> None:
        res = self._run(["write", path, "-"], input_text=json.dumps(document))
        if res.returncode != 0:
            self._raise_for_write(res, path)

    def delete(self, path: str) -> None:
        # vault delete succeeds on absent paths
        res = self._run(["delete", path])
        if res.returncode != 0:
            self._raise_for_write(res, path)
