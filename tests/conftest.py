"""Shared test doubles for the m2settings test suite."""

from __future__ import annotations

from typing import Iterable

import pytest

from m2settings.console import PromptSession, StringsCompleter
from m2settings.core.errors import TemplateNotFoundError
from m2settings.core.models import ConnectionRequest, ServerStatus, TemplateDescriptor
from m2settings.remote import UserToken


class ScriptedReader:
    """LineReader that answers prompts from a fixed script, then signals EOF."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.masks: list[str | None] = []
        self.lines: list[str] = []
        self.completers: list[StringsCompleter] = []
        self.removed: list[StringsCompleter] = []

    def read_line(self, prompt: str, mask: str | None = None) -> str:
        self.prompts.append(prompt)
        self.masks.append(mask)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def println(self, text: str = "") -> None:
        self.lines.append(text)

    def add_completer(self, choices: Iterable[str]) -> StringsCompleter:
        completer = StringsCompleter(choices)
        self.completers.append(completer)
        return completer

    def remove_completer(self, completer: StringsCompleter) -> None:
        self.completers.remove(completer)
        self.removed.append(completer)


class FakeSession:
    """In-memory Session with call recording."""

    def __init__(
        self,
        edition: str = "PRO",
        version: str = "2.5",
        contents: dict[str, str] | None = None,
        user_token: UserToken | None = None,
    ) -> None:
        self._status = ServerStatus(app_name="Nexus Professional", edition=edition, version=version)
        self.contents = {"default": "<settings/>"} if contents is None else contents
        self.user_token = user_token
        self.fetched: list[str] = []
        self.listed = 0
        self.closed = 0

    def status(self) -> ServerStatus:
        return self._status

    def list_templates(self) -> list[TemplateDescriptor]:
        self.listed += 1
        return [TemplateDescriptor(id=key) for key in self.contents]

    def fetch_content(self, template_id: str) -> str:
        self.fetched.append(template_id)
        if template_id not in self.contents:
            raise TemplateNotFoundError(f"No such template: {template_id}")
        return self.contents[template_id]

    def current_user_token(self) -> UserToken:
        if self.user_token is None:
            raise RuntimeError("User token feature disabled")
        return self.user_token

    def close(self) -> None:
        self.closed += 1


class FakeConnector:
    """Connector returning a prepared session and recording requests."""

    def __init__(self, session: FakeSession | None = None, error: Exception | None = None) -> None:
        self.session = session or FakeSession()
        self.error = error
        self.requests: list[ConnectionRequest] = []

    def __call__(self, request: ConnectionRequest) -> FakeSession:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.session


@pytest.fixture
def session() -> FakeSession:
    return FakeSession(
        contents={
            "default": "<password>$[userToken.passCode]</password>",
            "ci": "<user>$[env.CI_USER]</user>",
        }
    )


@pytest.fixture
def connector(session: FakeSession) -> FakeConnector:
    return FakeConnector(session)


@pytest.fixture
def reader() -> ScriptedReader:
    return ScriptedReader()


@pytest.fixture
def prompts(reader: ScriptedReader) -> PromptSession:
    return PromptSession(reader)
