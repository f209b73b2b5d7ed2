"""Interactive prompts for values missing from the command line."""

from __future__ import annotations

import logging

from .reader import LineReader

logger = logging.getLogger(__name__)

MASK_CHAR = "*"


def _parse_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


class PromptSession:
    """Prompts driven by a LineReader.

    Required prompts repeat until a non-blank answer is given. There is no
    retry limit; an interrupted read (EOFError, KeyboardInterrupt) propagates.
    """

    def __init__(self, reader: LineReader) -> None:
        self.reader = reader

    def _read_until_not_blank(self, label: str, mask: str | None) -> str:
        prompt = f"{label}: "
        while True:
            value = self.reader.read_line(prompt, mask)
            # Do not log values read when masked
            if mask is None:
                logger.debug(f"Read value: '{value}'")
            else:
                logger.debug(f"Read masked chars: {len(value)}")
            if value.strip():
                return value

    def prompt_required(self, label: str) -> str:
        """Prompt for a string until a non-blank value is entered."""
        return self._read_until_not_blank(label, None)

    def prompt_masked(self, label: str) -> str:
        """Prompt for a secret without echoing it; never returns blank."""
        return self._read_until_not_blank(label, MASK_CHAR)

    def prompt_with_default(self, label: str, default: str) -> str:
        """Prompt for a string; blank input yields *default* verbatim."""
        value = self.reader.read_line(f"{label} [{default}]: ")
        logger.debug(f"Read value: '{value}'")
        if not value.strip():
            return default
        return value.strip()

    def prompt_choice(self, header: str, label: str, choices: list[str]) -> str:
        """Prompt for one of *choices*, by zero-based index or by literal value.

        Args:
            header: Heading printed above the numbered list
            label: Prompt label
            choices: Ordered choices; duplicates are allowed

        Returns:
            The selected choice
        """
        self.reader.println(f"{header}:")
        for i, choice in enumerate(choices):
            self.reader.println(f"  {i:2d}) {choice}")

        completer = self.reader.add_completer(choices)
        try:
            while True:
                value = self.prompt_required(label).strip()

                index = _parse_int(value)
                if index is not None and 0 <= index < len(choices):
                    value = choices[index]

                if value in choices:
                    return value

                self.reader.println("Invalid selection")
        finally:
            self.reader.remove_completer(completer)
