"""Exception hierarchy."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class M2SettingsError(Exception):
    """Base class for all m2settings failures."""


class NexusClientError(M2SettingsError):
    """Raised by the REST client when a transport or protocol call fails."""


class NexusConnectionError(M2SettingsError):
    """Raised when a session cannot be established (network or authentication)."""


class InsecureProtocolError(M2SettingsError):
    """Raised when a plain HTTP URL is used while secure mode is on."""


class IncompatibleServerError(M2SettingsError):
    """Raised when the server edition or version is not supported."""

    def __init__(
        self,
        reason: str,
        message: str,
        detail: Any = None,
        constraint: Any = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.detail = detail
        self.constraint = constraint


class EmptyTemplateListError(M2SettingsError):
    """Raised when the server lists no accessible templates."""


class ContentFetchError(M2SettingsError):
    """Raised when template content cannot be read."""


class TemplateNotFoundError(ContentFetchError):
    """Raised when the requested template does not exist."""


class UnresolvedTokenError(M2SettingsError):
    """Raised by a strict interpolator when tokens have no binding."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__(f"Unresolved token(s): {', '.join(keys)}")
        self.keys = keys


class _PathError(M2SettingsError):
    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class BackupError(_PathError):
    """Raised when the existing output file cannot be moved aside."""


class WriteError(_PathError):
    """Raised when the output file cannot be written."""


class DownloadError(M2SettingsError):
    """Final outcome of a failed download, wrapping the most specific cause."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"
