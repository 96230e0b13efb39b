from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure src/ is importable for all tests (CI and local)
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for p in (ROOT, SRC):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from neo_emitter import BaseEventEmitter  # noqa: E402


def pytest_collection_modifyitems(config, items):
    """Default all tests to 'unit' unless explicitly marked otherwise."""
    for item in items:
        marks = {m.name for m in item.iter_markers()}
        if not ("integ" in marks or "unit" in marks):
            item.add_marker(pytest.mark.unit)


class Recorder:
    """Callable that remembers the arguments of every call."""

    def __init__(self, side_effect=None) -> None:
        self.calls: list[tuple[tuple, dict]] = []
        self.side_effect = side_effect

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.side_effect is not None:
            self.side_effect(*args, **kwargs)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def emitter() -> BaseEventEmitter:
    return BaseEventEmitter()


@pytest.fixture
def make_recorder():
    return Recorder
