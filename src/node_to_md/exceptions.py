from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class NodeToMdError(Exception):
    """Base exception for errors in the node_to_md module."""


@dataclass(frozen=True)
class FilesystemAccessError(NodeToMdError):
    """Raised when a directory or file cannot be read, or an output cannot be written."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


@dataclass(frozen=True)
class ConfigurationError(NodeToMdError):
    """Raised when the run configuration is invalid (bad glob, bad repository root)."""

    message: str

    def __str__(self) -> str:
        return self.message
