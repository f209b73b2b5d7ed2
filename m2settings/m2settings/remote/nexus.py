"""Nexus REST client built on httpx."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field

from .. import __version__
from ..core.errors import NexusClientError, NexusConnectionError, TemplateNotFoundError
from ..core.models import ConnectionRequest, ServerStatus, TemplateDescriptor

logger = logging.getLogger(__name__)

STATUS_PATH = "service/local/status"
TEMPLATES_PATH = "service/local/templates/settings"
USER_TOKEN_PATH = "service/siesta/usertoken/current"

DEFAULT_TIMEOUT = 30.0


class UserToken(BaseModel):
    """Credentials pair issued by the Nexus user token feature."""

    name_code: str = Field(..., alias="nameCode")
    pass_code: str = Field(..., alias="passCode")


def _data(payload: Any, path: str) -> Any:
    if not isinstance(payload, dict) or "data" not in payload:
        raise NexusClientError(f"Unexpected response from {path}: missing 'data'")
    return payload["data"]


class NexusSession:
    """Session over a single httpx client; closing it releases the connection pool."""

    def __init__(self, http: httpx.Client) -> None:
        self._http = http
        self._status: ServerStatus | None = None
        self._closed = False

    def _get(self, path: str, accept: str = "application/json") -> httpx.Response:
        try:
            response = self._http.get(path, headers={"Accept": accept})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NexusClientError(
                f"GET {path} failed with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise NexusClientError(f"GET {path} failed") from exc
        return response

    def _get_json(self, path: str) -> Any:
        response = self._get(path)
        try:
            return response.json()
        except ValueError as exc:
            raise NexusClientError(f"Invalid JSON from {path}") from exc

    def status(self) -> ServerStatus:
        if self._status is None:
            data = _data(self._get_json(STATUS_PATH), STATUS_PATH)
            self._status = ServerStatus(
                app_name=data.get("appName", "Nexus"),
                edition=data.get("editionShort", ""),
                version=data.get("version", ""),
            )
        return self._status

    def list_templates(self) -> list[TemplateDescriptor]:
        data = _data(self._get_json(TEMPLATES_PATH), TEMPLATES_PATH)
        try:
            return [TemplateDescriptor(id=item["id"]) for item in data]
        except (KeyError, TypeError) as exc:
            raise NexusClientError(f"Unexpected template listing from {TEMPLATES_PATH}") from exc

    def fetch_content(self, template_id: str) -> str:
        path = f"{TEMPLATES_PATH}/{quote(template_id, safe='')}/content"
        try:
            return self._get(path, accept="*/*").text
        except NexusClientError as exc:
            cause = exc.__cause__
            if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
                raise TemplateNotFoundError(f"No such template: {template_id}") from exc
            raise

    def current_user_token(self) -> UserToken:
        return UserToken.model_validate(self._get_json(USER_TOKEN_PATH))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._http.close()


def connect(
    request: ConnectionRequest,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> NexusSession:
    """Open a session and verify it by reading the server status.

    Args:
        request: Server URL and credentials
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)

    Returns:
        An open session
    """
    http = httpx.Client(
        base_url=request.server_url,
        auth=(request.username, request.secret.get_secret_value()),
        headers={"User-Agent": f"m2settings/{__version__}"},
        timeout=timeout,
        transport=transport,
        follow_redirects=True,
    )
    session = NexusSession(http)
    try:
        session.status()
    except NexusClientError as exc:
        session.close()
        cause = exc.__cause__
        if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code in (401, 403):
            raise NexusConnectionError(
                f"Authentication failed for user: {request.username}"
            ) from exc
        reason = cause if cause is not None else exc
        raise NexusConnectionError(
            f"Unable to connect to: {request.server_url} ({reason})"
        ) from exc
    return session
