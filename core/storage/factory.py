from core.config import Config
from core.storage.base import SecretStore
from core.storage.memory import MemoryStore
from core.storage.vault_cli import VaultCLIStore


def get_store(name: str) -> SecretStore:
    if name == "vault":
        return VaultCLIStore(binary=Config.VAULT_BIN)
    if name == "memory":
        return MemoryStore()
    raise ValueError(f"Unknown store: {name}")
