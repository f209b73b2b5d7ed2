"""Main CLI application."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import TypeVar

import typer
from pydantic import SecretStr
from typing_extensions import Annotated

from ..console import ConsoleLineReader, PromptSession
from ..core.errors import DownloadError
from ..core.models import OutputTarget
from ..core.settings import Settings
from ..remote.nexus import connect
from ..workflow import DownloadOptions, DownloadWorkflow
from .parsers import parse_encoding, parse_timestamp_format

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = typer.Typer(
    name="m2settings",
    help="Download Maven settings templates from a Nexus repository manager.",
)


@app.callback()
def _main() -> None:
    """Download Maven settings templates from a Nexus repository manager."""


def _pick(value: T | None, fallback: T) -> T:
    return fallback if value is None else value


@app.command()
def download(
    nexus_url: Annotated[
        str | None,
        typer.Option(
            "--nexus-url",
            help="Base URL of the Nexus server (prompted if missing).",
            metavar="URL",
        ),
    ] = None,
    username: Annotated[
        str | None,
        typer.Option(
            "--username",
            help="User to connect as (prompted if missing, default: current user).",
        ),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option(
            "--password",
            help="Password of the user (prompted without echo if missing).",
        ),
    ] = None,
    template_id: Annotated[
        str | None,
        typer.Option(
            "--template-id",
            help="Id of the template to download (chosen from a list if missing).",
            metavar="ID",
        ),
    ] = None,
    secure: Annotated[
        bool | None,
        typer.Option(
            "--secure/--insecure",
            help="Require an HTTPS URL (default: secure).",
        ),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option(
            "--output-file",
            help="File to save content to (default: ~/.m2/settings.xml).",
            metavar="FILE",
        ),
    ] = None,
    encoding: Annotated[
        str | None,
        typer.Option(
            "--encoding",
            help="Text encoding of the saved file (default: platform encoding).",
        ),
    ] = None,
    backup: Annotated[
        bool | None,
        typer.Option(
            "--backup/--no-backup",
            help="Back up an existing file before overwriting (default: backup).",
        ),
    ] = None,
    backup_timestamp_format: Annotated[
        str | None,
        typer.Option(
            "--backup-timestamp-format",
            help="strftime format appended to the backup file name (default: -%Y%m%d%H%M%S).",
            metavar="FORMAT",
        ),
    ] = None,
    strict: Annotated[
        bool | None,
        typer.Option(
            "--strict/--lenient",
            help="Fail when a $[token] has no value instead of leaving it unchanged.",
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            help="HTTP timeout in seconds (default: 30).",
            metavar="SECONDS",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Download a settings template and save it to a local file."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    # Command line values override M2SETTINGS_* environment values
    settings = Settings()

    target = OutputTarget(
        path=_pick(output_file, settings.output_file).expanduser(),
        encoding=parse_encoding(_pick(encoding, settings.encoding)),
        backup=_pick(backup, settings.backup),
        backup_timestamp_format=parse_timestamp_format(
            _pick(backup_timestamp_format, settings.backup_timestamp_format)
        ),
    )
    options = DownloadOptions(
        nexus_url=_pick(nexus_url, settings.nexus_url),
        username=_pick(username, settings.username),
        password=SecretStr(password) if password is not None else settings.password,
        template_id=_pick(template_id, settings.template_id),
        secure=_pick(secure, settings.secure),
        strict=_pick(strict, settings.strict),
        target=target,
    )
    logger.debug(f"Output: {target.path} (backup: {target.backup})")

    workflow = DownloadWorkflow(
        options,
        PromptSession(ConsoleLineReader()),
        partial(connect, timeout=_pick(timeout, settings.timeout)),
    )
    try:
        path = workflow.run()
    except DownloadError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    logger.info(f"Saved: {path.absolute()}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
