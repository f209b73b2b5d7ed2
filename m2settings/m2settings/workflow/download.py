"""Download workflow: prompt, connect, verify, fetch, back up, interpolate, write."""

from __future__ import annotations

import getpass
import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Sequence

from pydantic import BaseModel, Field, SecretStr

from ..compat import REQUIRED_EDITION, VERSION_CONSTRAINT, check_compatible
from ..console import PromptSession
from ..core.errors import (
    DownloadError,
    EmptyTemplateListError,
    InsecureProtocolError,
    NexusClientError,
)
from ..core.models import ConnectionRequest, OutputTarget
from ..remote.client import Connector, Session
from ..rendering import (
    Interpolator,
    TemplateCustomizer,
    UnresolvedPolicy,
    apply_customizers,
    backup_file,
    default_customizers,
    write_text,
)

logger = logging.getLogger(__name__)


class State(str, Enum):
    INIT = "init"
    PROMPTING = "prompting"
    CONNECTING = "connecting"
    VERIFYING = "verifying"
    LISTING = "listing"
    FETCHING_CONTENT = "fetching-content"
    BACKING_UP = "backing-up"
    INTERPOLATING = "interpolating"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


class DownloadOptions(BaseModel):
    """Inputs for a download; unset connection values are prompted for."""

    nexus_url: str | None = Field(default=None, description="Nexus base URL")
    username: str | None = Field(default=None, description="User to connect as")
    password: SecretStr | None = Field(default=None, description="Password of the user")
    template_id: str | None = Field(default=None, description="Template to download")
    secure: bool = Field(default=True, description="Refuse plain HTTP URLs")
    strict: bool = Field(default=False, description="Fail on unresolved tokens")
    target: OutputTarget = Field(default_factory=OutputTarget, description="Output file")
    required_edition: str = REQUIRED_EDITION
    version_constraint: str = VERSION_CONSTRAINT


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def unwrap_cause(cause: BaseException) -> BaseException:
    """Strip up to two levels of transport wrapping for a terser message."""
    for _ in range(2):
        if isinstance(cause, NexusClientError) and cause.__cause__ is not None:
            cause = cause.__cause__
    return cause


class DownloadWorkflow:
    """Runs one download. The session, once opened, is always closed."""

    def __init__(
        self,
        options: DownloadOptions,
        prompts: PromptSession,
        connector: Connector,
        customizers: Sequence[TemplateCustomizer] | None = None,
    ) -> None:
        self.options = options
        self.prompts = prompts
        self.connector = connector
        self.customizers = list(default_customizers() if customizers is None else customizers)
        self.state = State.INIT
        self.backup_path: Path | None = None
        self._session: Session | None = None

    def _fail(self, message: str, cause: BaseException | None = None) -> DownloadError:
        logger.debug(f"Failing: {message}", exc_info=cause)
        return DownloadError(message, unwrap_cause(cause) if cause is not None else None)

    @contextmanager
    def _step(self, state: State, message: str) -> Iterator[None]:
        self.state = state
        try:
            yield
        except DownloadError:
            raise
        except Exception as exc:
            raise self._fail(message, exc) from exc

    def run(self) -> Path:
        """Execute all steps and return the written file path.

        Raises:
            DownloadError: On any failure, wrapping the underlying cause
        """
        try:
            path = self._execute()
        except BaseException:
            self.state = State.FAILED
            raise
        finally:
            self.close()
        self.state = State.DONE
        return path

    def close(self) -> None:
        session, self._session = self._session, None
        if session is None:
            return
        try:
            session.close()
        except Exception:
            logger.debug("Failed to close session; ignoring", exc_info=True)

    def _execute(self) -> Path:
        opts = self.options
        target = opts.target

        # Request details from user interactively for anything missing
        with self._step(State.PROMPTING, "Input aborted"):
            url = opts.nexus_url.strip() if not _blank(opts.nexus_url) else None
            if url is None:
                url = self.prompts.prompt_required("Nexus URL").strip()
            username = opts.username.strip() if not _blank(opts.username) else None
            if username is None:
                username = self.prompts.prompt_with_default("Username", getpass.getuser()).strip()
            if opts.password is not None and opts.password.get_secret_value().strip():
                password = opts.password
            else:
                password = SecretStr(self.prompts.prompt_masked("Password"))

        with self._step(State.CONNECTING, "Connection failed"):
            request = ConnectionRequest(server_url=url, username=username, secret=password)
            if request.protocol == "http":
                message = f"Insecure protocol: {request.server_url}"
                if opts.secure:
                    raise InsecureProtocolError(message)
                logger.warning(message)
            logger.info(f"Connecting to: {request.server_url} (as {request.username})")
            session = self._session = self.connector(request)

        with self._step(State.VERIFYING, "Incompatible server"):
            status = session.status()
            check_compatible(status, opts.required_edition, opts.version_constraint)
            logger.info(f"Connected: {status.app_name} {status.version}")

        template_id = opts.template_id.strip() if not _blank(opts.template_id) else None
        if template_id is None:
            with self._step(State.LISTING, "Unable to list templates"):
                available = session.list_templates()
                if not available:
                    raise EmptyTemplateListError("There are no accessible m2settings templates available")
                ids = [t.id for t in available]
            with self._step(State.PROMPTING, "Input aborted"):
                template_id = self.prompts.prompt_choice("Available Templates", "Select Template", ids)

        with self._step(State.FETCHING_CONTENT, f"Unable to fetch content for templateId: {template_id}"):
            logger.info(f"Fetching content for templateId: {template_id}")
            content = session.fetch_content(template_id)
            logger.debug(f"Content: {content}")

        if target.backup:
            with self._step(State.BACKING_UP, f"Failed to backup file: {target.path.absolute()}"):
                self.backup_path = backup_file(target.path, target.backup_timestamp_format)

        with self._step(State.INTERPOLATING, "Failed to interpolate content"):
            policy = UnresolvedPolicy.FAIL if opts.strict else UnresolvedPolicy.KEEP
            interpolator = Interpolator(unresolved=policy)
            apply_customizers(self.customizers, session, interpolator.context)
            rendered = interpolator.interpolate(content)

        logger.info(f"Saving content to: {target.path.absolute()}")
        with self._step(State.WRITING, f"Failed to save content to: {target.path.absolute()}"):
            write_text(target.path, rendered, target.encoding)

        return target.path
