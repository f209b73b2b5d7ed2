"""Remote session interfaces consumed by the download workflow."""

from __future__ import annotations

from typing import Protocol

from ..core.models import ConnectionRequest, ServerStatus, TemplateDescriptor


class Session(Protocol):
    """An open, authenticated session against a Nexus server."""

    def status(self) -> ServerStatus: ...

    def list_templates(self) -> list[TemplateDescriptor]: ...

    def fetch_content(self, template_id: str) -> str: ...

    def close(self) -> None: ...


class Connector(Protocol):
    """Opens sessions. Raises NexusConnectionError on network or auth failure."""

    def __call__(self, request: ConnectionRequest) -> Session: ...
