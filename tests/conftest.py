from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from tests.helpers import Item, render_feed


@pytest.fixture
def make_feed(tmp_path: Path):
    def _make(name: str, items: Iterable[Item], **kwargs) -> Path:
        path = tmp_path / name
        path.write_text(render_feed(items, **kwargs), encoding="utf-8")
        return path
    return _make


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("RSS_COMBINE_OUTPUT", raising=False)
    monkeypatch.delenv("RSS_COMBINE_MAX_ENTRIES", raising=False)
