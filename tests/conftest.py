"""Shared pytest fixtures."""

from __future__ import annotations

import copy
import os

import pytest

from bicameral.config import DEFAULT_CONFIG


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep BICAMERAL_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("BICAMERAL_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    """A private copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def session(config, clock):
    """Editor session with tracking disabled."""
    from bicameral.session import EditorSession

    s = EditorSession(config, clock=clock)
    yield s
    s.close()


@pytest.fixture
def tracked_session(config, clock):
    """Editor session with tracking enabled and a named author."""
    from bicameral.session import EditorSession

    config["tracking"]["enabled"] = True
    config["tracking"]["author"] = "ada"
    s = EditorSession(config, clock=clock)
    yield s
    s.close()
