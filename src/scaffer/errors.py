"""Custom exception types raised by the scaffer pipeline."""

from __future__ import annotations

__all__ = [
    "ArchiveCorrupt",
    "ConfigError",
    "DownloadFailed",
    "InteractionError",
    "ScafferError",
    "TemplateIOError",
    "TemplateNotFound",
    "TextDecodeError",
]


class ScafferError(RuntimeError):
    """Base class for every failure surfaced to the invoking command."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(ScafferError):
    """Raised when a configuration file cannot be read or parsed."""


class TemplateNotFound(ScafferError):
    """Raised when a template reference does not resolve to a directory."""


class DownloadFailed(ScafferError):
    """Raised when a remote template archive cannot be retrieved."""


class ArchiveCorrupt(ScafferError):
    """Raised when a template archive is malformed or cannot be extracted."""


class TemplateIOError(ScafferError):
    """Raised when the filesystem fails while scanning or rendering."""


class TextDecodeError(ScafferError):
    """Raised when a template file cannot be decoded as text during rendering."""


class InteractionError(ScafferError):
    """Raised when the prompting collaborator cannot obtain an answer."""
