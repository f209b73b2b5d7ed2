"""Terminal line reading with masking and tab completion."""

from __future__ import annotations

from typing import Iterable, Protocol

from rich.console import Console

try:
    import readline
except ImportError:  # Windows: no tab completion
    readline = None  # type: ignore[assignment]


class StringsCompleter:
    """Completes input against a fixed set of strings."""

    def __init__(self, strings: Iterable[str]) -> None:
        self.strings = sorted(set(strings))

    def candidates(self, text: str) -> list[str]:
        return [s for s in self.strings if s.startswith(text)]


class LineReader(Protocol):
    def read_line(self, prompt: str, mask: str | None = None) -> str: ...

    def println(self, text: str = "") -> None: ...

    def add_completer(self, choices: Iterable[str]) -> StringsCompleter: ...

    def remove_completer(self, completer: StringsCompleter) -> None: ...


class ConsoleLineReader:
    """LineReader backed by a Rich console and readline completion."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._completers: list[StringsCompleter] = []
        if readline is not None:
            # history is meaningless in this context, flip it off
            if hasattr(readline, "set_auto_history"):
                readline.set_auto_history(False)
            readline.parse_and_bind("tab: complete")

    def read_line(self, prompt: str, mask: str | None = None) -> str:
        return self._console.input(prompt, markup=False, emoji=False, password=mask is not None)

    def println(self, text: str = "") -> None:
        self._console.print(text, markup=False, highlight=False, emoji=False)

    def _complete(self, text: str, state: int) -> str | None:
        matches = [c for completer in self._completers for c in completer.candidates(text)]
        return matches[state] if state < len(matches) else None

    def add_completer(self, choices: Iterable[str]) -> StringsCompleter:
        completer = StringsCompleter(choices)
        self._completers.append(completer)
        if readline is not None:
            readline.set_completer(self._complete)
        return completer

    def remove_completer(self, completer: StringsCompleter) -> None:
        if completer in self._completers:
            self._completers.remove(completer)
        if readline is not None and not self._completers:
            readline.set_completer(None)
