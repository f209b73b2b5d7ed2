"""File I/O operations for writing settings output."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from ..core.errors import BackupError, WriteError
from ..core.models import OutputTarget

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def backup_path_for(path: Path, timestamp_format: str, now: datetime | None = None) -> Path:
    """Sibling path with a formatted timestamp appended to the file name."""
    timestamp = (now or datetime.now()).strftime(timestamp_format)
    return path.with_name(path.name + timestamp)


def backup_file(
    path: Path, timestamp_format: str, now: datetime | None = None
) -> Path | None:
    """Move an existing file aside to a timestamped sibling.

    Args:
        path: File to back up
        timestamp_format: strftime format appended to the file name
        now: Instant used for the timestamp (default: current local time)

    Returns:
        The backup path, or None when there was nothing to back up
    """
    if not path.exists():
        logger.debug("Output file does not exist; skipping backup")
        return None

    target = backup_path_for(path, timestamp_format, now)
    if target == path:
        raise BackupError(f"Backup name is the file itself: {path.absolute()}", path)
    logger.info(f"Backing up: {path.absolute()} to: {target.absolute()}")
    try:
        path.rename(target)
    except OSError as e:
        raise BackupError(f"Failed to backup file: {path.absolute()}", path) from e
    return target


def write_text(path: Path, text: str, encoding: str | None = None) -> None:
    """Write text to a file, replacing any existing content.

    Args:
        path: Destination file path
        text: Text content to write
        encoding: Text encoding (platform default when None)
    """
    try:
        ensure_parent(path)
        with path.open("w", encoding=encoding) as handle:
            handle.write(text)
            handle.flush()
    except (OSError, LookupError, UnicodeError) as e:
        raise WriteError(f"Failed to save content to: {path.absolute()}", path) from e


def write_output(target: OutputTarget, content: str) -> Path | None:
    """Back up the destination if requested, then write *content* to it.

    Returns:
        The backup path, if a backup was made
    """
    backup = None
    if target.backup:
        backup = backup_file(target.path, target.backup_timestamp_format)
    write_text(target.path, content, target.encoding)
    return backup
