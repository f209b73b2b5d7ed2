"""CLI argument parsers and validators."""

from __future__ import annotations

import codecs
from datetime import datetime

import typer


def parse_encoding(value: str | None) -> str | None:
    """Validate a text encoding name; None means platform default."""
    if value is None or not value.strip():
        return None
    try:
        return codecs.lookup(value.strip()).name
    except LookupError as e:
        raise typer.BadParameter(f"Unknown encoding: {value!r}") from e


def parse_timestamp_format(value: str) -> str:
    """Validate a strftime format used for backup file names."""
    try:
        sample = datetime.now().strftime(value)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid timestamp format: {value!r}") from e
    if not sample:
        raise typer.BadParameter("Timestamp format must not be empty")
    if "/" in sample or "\\" in sample:
        raise typer.BadParameter(f"Timestamp format must not produce path separators: {value!r}")
    return value
