"""Placeholder interpolation for template content."""

from __future__ import annotations

import logging
from enum import Enum

from ..core.errors import UnresolvedTokenError

logger = logging.getLogger(__name__)

START_EXPR = "$["
END_EXPR = "]"


class UnresolvedPolicy(str, Enum):
    """What to do with a token that has no binding."""

    KEEP = "keep"
    FAIL = "fail"


class Interpolator:
    """Replaces ``$[key]`` tokens with values from a mutable context.

    Tokens are scanned left to right and never nest. Substituted values are
    emitted as-is and are not scanned again.
    """

    def __init__(
        self,
        start: str = START_EXPR,
        end: str = END_EXPR,
        unresolved: UnresolvedPolicy = UnresolvedPolicy.KEEP,
    ) -> None:
        if not start or not end:
            raise ValueError("Start and end markers must not be empty")
        self.start = start
        self.end = end
        self.unresolved = unresolved
        self.context: dict[str, str] = {}

    def add_value(self, key: str, value: str) -> None:
        self.context[key] = value

    def interpolate(self, content: str) -> str:
        out: list[str] = []
        missing: list[str] = []
        pos = 0

        while True:
            open_at = content.find(self.start, pos)
            if open_at == -1:
                break
            key_at = open_at + len(self.start)
            close_at = content.find(self.end, key_at)
            if close_at == -1:
                break

            key = content[key_at:close_at]
            out.append(content[pos:open_at])
            if key in self.context:
                out.append(self.context[key])
            else:
                missing.append(key)
                out.append(content[open_at : close_at + len(self.end)])
            pos = close_at + len(self.end)

        out.append(content[pos:])

        if missing:
            if self.unresolved is UnresolvedPolicy.FAIL:
                raise UnresolvedTokenError(list(dict.fromkeys(missing)))
            logger.debug(f"Left {len(missing)} unresolved token(s) unchanged: {missing}")

        return "".join(out)


def interpolate(content: str, context: dict[str, str]) -> str:
    """Interpolate *content* with *context* using the default markers."""
    interpolator = Interpolator()
    interpolator.context.update(context)
    return interpolator.interpolate(content)
