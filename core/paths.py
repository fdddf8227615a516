"""
Secret Paths - Conversions between store paths and local JSON files.

A secret path is slash separated. A trailing slash marks a directory node,
anything else is a leaf. Leaf ``a/b/c`` lives in ``<root>/a/b/c.json`` and
directory ``a/b/`` in ``<root>/a/b``.
"""

from pathlib import Path, PurePosixPath

from core.errors import InvalidPath

SUFFIX = ".json"


def is_directory(path: str) -> bool:
    return path.endswith("/")


def validate(path: str) -> str:
    """
    Check that a secret path is well formed and return it unchanged.

    Raises:
        InvalidPath: for empty paths, absolute paths, or paths with empty,
        ``.`` or ``..`` segments.
    """
    if not path:
        raise InvalidPath("Secret path must not be empty")
    if path.startswith("/"):
        raise InvalidPath(f"Secret path must be relative: {path}")
    segments = path[:-1].split("/") if is_directory(path) else path.split("/")
    for segment in segments:
        if segment in ("", ".", ".."):
            raise InvalidPath(f"Invalid segment in secret path: {path}")
    return path


def as_directory(path: str) -> str:
    """Return ``path`` with exactly one trailing slash."""
    validate(path.rstrip("/") or path)
    return path.rstrip("/") + "/"


def join(parent: str, child: str) -> str:
    """Append a listed child name to a directory path."""
    if not is_directory(parent):
        raise InvalidPath(f"Cannot nest '{child}' under leaf path {parent}")
    return validate(parent + child.lstrip("/"))


def local_file(root: Path, path: str) -> Path:
    """Map a leaf path to its JSON file under ``root``."""
    validate(path)
    if is_directory(path):
        raise InvalidPath(f"Directory path has no file representation: {path}")
    *parents, name = path.split("/")
    return root.joinpath(*parents, name + SUFFIX)


def local_dir(root: Path, path: str) -> Path:
    """Map a directory path to its directory under ``root``."""
    validate(path)
    if not is_directory(path):
        raise InvalidPath(f"Leaf path has no directory representation: {path}")
    return root.joinpath(*path[:-1].split("/"))


def secret_path(root: Path, file: Path) -> str:
    """
    Derive the leaf path of a JSON file under ``root``.

    Raises:
        InvalidPath: if the file is outside ``root``, does not end in
        ``.json``, or leaves an empty name once the suffix is stripped.
    """
    try:
        relative = PurePosixPath(*file.relative_to(root).parts)
    except ValueError:
        raise InvalidPath(f"{file} is not under {root}")
    name = relative.name
    if not name.endswith(SUFFIX):
        raise InvalidPath(f"Not a JSON secret file: {file}")
    stem = name[: -len(SUFFIX)]
    if not stem:
        raise InvalidPath(f"File name gives an empty secret name: {file}")
    return validate(str(relative.with_name(stem)))
