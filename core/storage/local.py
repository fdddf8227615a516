import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, List

from core import paths
from core.errors import LocalIOFailure, NotFound


class LocalTree:
    """
    A directory of JSON files laid out like the secret hierarchy.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def __repr__(self):
        return f"LocalTree({str(self.root)!r})"

    def file_for(self, path: str) -> Path:
        return paths.local_file(self.root, path)

    def dir_for(self, path: str) -> Path:
        return paths.local_dir(self.root, path)

    def exists(self, path: str) -> bool:
        if paths.is_directory(path):
            return self.dir_for(path).is_dir()
        return self.file_for(path).is_file()

    def read(self, path: str) -> Any:
        file = self.file_for(path)
        if not file.is_file():
            raise NotFound(f"No local file for {path}: {file}")
        try:
            with open(file, "r", encoding="utf-8") as f:
                return json.load(f)
        except ValueError as e:
            raise LocalIOFailure(f"Invalid JSON in {file}: {e}")
        except OSError as e:
            raise LocalIOFailure(f"Cannot read {file}: {e}")

    def write(self, path: str, document: Any) -> Path:
        """
        Write a document as pretty-printed JSON, replacing the whole file.

        Returns:
            Path: The file written.
        """
        file = self.file_for(path)
        try:
            file.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=file.parent, prefix=f".{file.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                    f.write("\n")
                os.replace(tmp_name, file)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise LocalIOFailure(f"Cannot write {file}: {e}")
        return file

    def make_dir(self, path: str) -> Path:
        directory = self.dir_for(path)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LocalIOFailure(f"Cannot create directory {directory}: {e}")
        return directory

    def remove(self, path: str) -> None:
        file = self.file_for(path)
        try:
            file.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise LocalIOFailure(f"Cannot remove {file}: {e}")

    def leaves(self, path: str, recursive: bool = True) -> List[str]:
        """
        List the leaf paths of every ``.json`` file below a directory path,
        sorted. Returns an empty list when the directory does not exist.

        Raises:
            InvalidPath: if a file name cannot be turned into a secret path.
        """
        directory = self.dir_for(path)
        if not directory.is_dir():
            return []
        pattern = "**/*" + paths.SUFFIX if recursive else "*" + paths.SUFFIX
        try:
            files = [f for f in directory.glob(pattern) if f.is_file()]
        except OSError as e:
            raise LocalIOFailure(f"Cannot list {directory}: {e}")
        return sorted(paths.secret_path(self.root, f) for f in files)

    def destroy(self) -> None:
        """Delete the whole tree, root included."""
        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise LocalIOFailure(f"Cannot remove {self.root}: {e}")
