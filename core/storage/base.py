from abc import ABC, abstractmethod
from typing import Any, List, Tuple


class SecretStore(ABC):
    """
    Abstract base class for a hierarchical secret store.

    Paths are slash separated; listed names ending in ``/`` are directories.
    """

    # External programs the implementation needs on PATH
    required_programs: Tuple[str, ...] = ()

    @abstractmethod
    def list(self, path: str) -> List[str]:
        """
        List the children of a directory path.

        Args:
            path (str): Directory path, ending in ``/``.

        Returns:
            list[str]: Child names, directory names ending in ``/``.

        Raises:
            NotFound: if the path has no children.
            StoreUnavailable: if the store cannot be reached.
        """
        pass

    @abstractmethod
    def read(self, path: str) -> Any:
        """
        Read the data payload of a leaf.

        Raises:
            NotFound: if the leaf does not exist.
        """
        pass

    @abstractmethod
    def write(self, path: str, document: Any) -> None:
        """
        Replace the value of a leaf.

        Raises:
            WriteRejected: on authorization or validation failure.
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """
        Delete a leaf. Deleting an absent path is not an error.
        """
        pass
