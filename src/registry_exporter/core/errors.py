"""
Error taxonomy for the export pipeline.

Everything derived from ExportError is fatal and aborts the run. Listing
failures raised by a client (RegistryClientError) are downgraded to a
per-category warning by the orchestrator instead.
"""


class ExportError(Exception):
    """Base error for fatal export failures."""


class TargetResolutionError(ExportError):
    """Raised when the export target directory cannot be resolved."""


class HomeResolutionError(TargetResolutionError):
    """Raised when '~' must be expanded but the home directory is unknown."""


class DirectoryCreateError(TargetResolutionError):
    """Raised when the target directory (or an ancestor) cannot be created."""


class TargetNotEmptyError(TargetResolutionError):
    """Raised when the target directory already has entries."""

    def __init__(self, path):
        super().__init__(f"target directory {path} is not empty")
        self.path = path


class SubdirectoryCreateError(ExportError):
    """Raised when a category subdirectory cannot be created."""


class SerializationError(ExportError):
    """Raised when an entity cannot be turned into a config file."""


class FileWriteError(ExportError):
    """Raised when a config file cannot be written to disk."""


class RegistryClientError(Exception):
    """Raised by a registry client when a listing request fails."""
