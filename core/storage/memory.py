import copy
from typing import Any, Dict, List, Optional, Tuple

from core import paths
from core.errors import InvalidPath, NotFound
from core.storage.base import SecretStore


class MemoryStore(SecretStore):
    """
    Secret store kept in a dict of leaf path -> document.
    Useful for dev/testing without touching a real Vault server.
    """

    def __init__(self, secrets: Optional[Dict[str, Any]] = None):
        self.secrets: Dict[str, Any] = {}
        # (operation, path) for every write and delete, in call order
        self.mutations: List[Tuple[str, str]] = []
        for path, document in (secrets or {}).items():
            self.secrets[paths.validate(path)] = copy.deepcopy(document)

    def list(self, path: str) -> List[str]:
        prefix = paths.as_directory(path)
        children: List[str] = []
        for key in sorted(self.secrets):
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            name = rest.split("/", 1)[0] + "/" if "/" in rest else rest
            if name not in children:
                children.append(name)
        if not children:
            raise NotFound(f"No value found at {prefix}")
        return children

    def read(self, path: str) -> Any:
        if path not in self.secrets:
            raise NotFound(f"No value found at {path}")
        return copy.deepcopy(self.secrets[path])

    def write(self, path: str, document: Any) -> None:
        if paths.is_directory(paths.validate(path)):
            raise InvalidPath(f"Cannot write a value to directory path {path}")
        self.mutations.append(("write", path))
        self.secrets[path] = copy.deepcopy(document)

    def delete(self, path: str) -> None:
        self.mutations.append(("delete", path))
        self.secrets.pop(path, None)
