"""Errors raised by the scaffold pipeline.

Fatal errors unwind to the pipeline, which stops issuing further stages.
Recoverable conditions are turned into warnings where they happen, so only
ArchiveNotFoundError ever escapes a stage as a recoverable error.
"""
from typing import Optional


class ScaffoldError(Exception):
    """Base class for scaffold failures."""

    def __init__(self, message: str, stage: Optional[str] = None):
        self.stage = stage
        super().__init__(message)


class DestinationExistsError(ScaffoldError):
    """The project directory already exists; nothing was touched."""


class RepositoryInitError(ScaffoldError):
    """Local `git init` failed, so the project cannot be wired to a remote."""


class TemplateFetchError(ScaffoldError):
    """The template repository could not be cloned."""


class ArchiveNotFoundError(ScaffoldError, FileNotFoundError):
    """The overlay archive is absent from the fetched template."""


class ArchiveError(ScaffoldError):
    """The overlay archive exists but cannot be read."""


class InstallError(ScaffoldError):
    """The package manager install exited with a non-zero status."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, stage="install")
