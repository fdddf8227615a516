"""Exceptions raised by vaultmirror."""


class VaultMirrorError(Exception):
    """Base class for every error the CLI knows how to report."""

    exit_code = 1


class DependencyMissing(VaultMirrorError):
    """A required external program cannot be found on PATH."""

    exit_code = 127

    def __init__(self, programs):
        self.programs = list(programs)
        super().__init__(f"Required program(s) not found: {', '.join(self.programs)}")


class InvalidPath(VaultMirrorError):
    """A secret path does not fit the operation (e.g. editing a directory)."""


class StoreUnavailable(VaultMirrorError):
    """The secret store cannot be reached."""


class NotFound(VaultMirrorError):
    """Nothing exists at the requested secret path."""


class WriteRejected(VaultMirrorError):
    """The secret store refused a write or delete."""


class LocalIOFailure(VaultMirrorError):
    """A local file or directory could not be read or written."""
