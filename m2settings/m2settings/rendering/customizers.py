"""Interpolation context customizers.

A customizer contributes token values before content is interpolated. Each one
is best effort: failures are logged and the remaining customizers still run.
"""

from __future__ import annotations

import getpass
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Protocol

from ..remote.client import Session

logger = logging.getLogger(__name__)

USER_TOKEN_KEY = "userToken"
USER_TOKEN_NAME_CODE_KEY = "userToken.nameCode"
USER_TOKEN_PASS_CODE_KEY = "userToken.passCode"


class TemplateCustomizer(Protocol):
    def customize(self, session: Session, context: dict[str, str]) -> None: ...


class EnvironmentCustomizer:
    """Exposes environment variables as ``env.NAME`` plus ``user.name``/``user.home``."""

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self._environ = environ

    def customize(self, session: Session, context: dict[str, str]) -> None:
        environ = os.environ if self._environ is None else self._environ
        for name, value in environ.items():
            context[f"env.{name}"] = value
        context["user.name"] = getpass.getuser()
        context["user.home"] = str(Path.home())

    def __repr__(self) -> str:
        return "EnvironmentCustomizer()"


class UserTokenCustomizer:
    """Adds the connected user's Nexus user token."""

    def customize(self, session: Session, context: dict[str, str]) -> None:
        fetch: Any = getattr(session, "current_user_token", None)
        if fetch is None:
            raise TypeError(f"Session does not support user tokens: {type(session).__name__}")

        token = fetch()
        context[USER_TOKEN_KEY] = f"{token.name_code}:{token.pass_code}"
        context[USER_TOKEN_NAME_CODE_KEY] = token.name_code
        context[USER_TOKEN_PASS_CODE_KEY] = token.pass_code
        logger.debug(f"Added user token values under: {USER_TOKEN_KEY}")

    def __repr__(self) -> str:
        return "UserTokenCustomizer()"


def default_customizers() -> list[TemplateCustomizer]:
    return [EnvironmentCustomizer(), UserTokenCustomizer()]


def apply_customizers(
    customizers: Iterable[TemplateCustomizer],
    session: Session,
    context: dict[str, str],
) -> dict[str, str]:
    """Run customizers in order against *context*; later values overwrite earlier ones.

    Args:
        customizers: Customizers in registration order
        session: Connected session, passed through read-only
        context: Token values to update in place

    Returns:
        The same context
    """
    for customizer in customizers:
        logger.debug(f"Applying customizer: {customizer!r}")
        try:
            customizer.customize(session, context)
        except Exception:
            logger.warning("Template customization failed; ignoring", exc_info=True)
    return context
