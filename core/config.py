import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    WORKDIR = os.getenv("VAULTMIRROR_WORKDIR", ".")
    STORE = os.getenv("VAULTMIRROR_STORE", "vault")
    DEFAULT_PATH = os.getenv("VAULTMIRROR_PATH", "secret/")
    VAULT_BIN = os.getenv("VAULTMIRROR_VAULT_BIN", "vault")
    MIRROR_DIR = os.getenv("VAULTMIRROR_MIRROR_DIR")
    RECURSIVE = _env_flag("VAULTMIRROR_RECURSIVE", "true")
    EDITOR = os.getenv("VISUAL") or os.getenv("EDITOR") or "vi"


@dataclass(frozen=True)
class Options:
    """
    Settings for a single invocation, built once by the CLI and handed to
    every core operation.
    """

    workdir: Path = Path(".")
    recursive: bool = True
    dry_run: bool = False
    verbose: bool = False
    quiet: bool = False
    keep_mirror: bool = False
    mirror_dir: Optional[Path] = None
    editor: str = "vi"

    @classmethod
    def from_config(cls, **overrides) -> "Options":
        values = {
            "workdir": Path(Config.WORKDIR),
            "recursive": Config.RECURSIVE,
            "mirror_dir": Path(Config.MIRROR_DIR) if Config.MIRROR_DIR else None,
            "editor": Config.EDITOR,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
