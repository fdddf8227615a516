import pytest
from dotenv import load_dotenv
from pathlib import Path

from core.storage.local import LocalTree
from core.storage.memory import MemoryStore
from core.utils import console

@pytest.fixture(autouse=True, scope="session")
def load_test_env():
    """
    Automatically load environment variables from `.env.test` for all test sessions.
    """
    env_path = Path(".env.test")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=True)
        print("📦 Test environment loaded from .env.test")
    else:
        print("⚠️  No .env.test file found. Using default environment.")

@pytest.fixture(autouse=True)
def reset_console():
    yield
    console.configure(verbose=False, quiet=False)

@pytest.fixture
def store():
    """A store holding a small two-level tree."""
    return MemoryStore({
        "secret/a": {"x": 1},
        "secret/b/c": {"y": 2},
    })

@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "work"
    root.mkdir()
    return LocalTree(root)
