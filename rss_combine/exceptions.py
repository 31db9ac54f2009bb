from __future__ import annotations

from pathlib import Path
from typing import Union


class RSSCombineError(Exception):
    """Base class for errors raised while combining feeds."""

    def __init__(self, message: str, path: Union[str, Path, None] = None) -> None:
        super().__init__(message)
        self.path = path


class FeedReadError(RSSCombineError):
    """Raised when an RSS file cannot be opened or read."""


class FeedParseError(RSSCombineError):
    """Raised when an RSS file is not a well-formed RSS document."""


class FeedWriteError(RSSCombineError):
    """Raised when the merged feed cannot be staged or committed to disk."""
