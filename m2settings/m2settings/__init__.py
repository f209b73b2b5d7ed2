"""m2settings - Nexus settings template downloader.

Fetches a Maven settings template from a Nexus repository manager and writes it
to a local settings file with ``$[token]`` placeholders interpolated.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
