from .prompts import PromptSession
from .reader import ConsoleLineReader, LineReader, StringsCompleter

__all__ = ["ConsoleLineReader", "LineReader", "PromptSession", "StringsCompleter"]
