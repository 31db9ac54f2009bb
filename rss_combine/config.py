from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Dict, Optional

from dotenv import dotenv_values, find_dotenv

OUTPUT_ENV = "RSS_COMBINE_OUTPUT"
MAX_ENTRIES_ENV = "RSS_COMBINE_MAX_ENTRIES"


@dataclass
class Settings:
    output: Optional[str] = None  # None → write back to the main RSS file
    max_entries: int = 0


def _environ(dotenv: bool) -> Dict[str, Optional[str]]:
    # Real environment variables win over the .env file
    values: Dict[str, Optional[str]] = {}
    if dotenv:
        values.update(dotenv_values(find_dotenv(usecwd=True)))
    values.update(os.environ)
    return values


def load_settings(*, dotenv: bool = True) -> Settings:
    """
    Read defaults from the environment and a .env file found from the
    current directory upwards.

    Raises ValueError when RSS_COMBINE_MAX_ENTRIES is not a non-negative integer.
    """
    env = _environ(dotenv)

    output = env.get(OUTPUT_ENV) or None

    raw = (env.get(MAX_ENTRIES_ENV) or "").strip()
    max_entries = 0
    if raw:
        try:
            max_entries = int(raw)
        except ValueError:
            raise ValueError(f"{MAX_ENTRIES_ENV} must be an integer, got {raw!r}") from None
        if max_entries < 0:
            raise ValueError(f"{MAX_ENTRIES_ENV} must be zero or positive, got {max_entries}")

    return Settings(output=output, max_entries=max_entries)
