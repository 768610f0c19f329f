from unittest.mock import MagicMock

import pytest

from arcadesnake.adapters import FrameScheduler, MemoryStorage
from arcadesnake.config import Config
from arcadesnake.engine import GameEngine

_UNSET = object()


class FakeCanvas:
    def __init__(self, width=400, height=400, context=_UNSET):
        self.width = width
        self.height = height
        self.context = MagicMock() if context is _UNSET else context

    def get_context(self):
        return self.context


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def on_game_over():
    return MagicMock()


@pytest.fixture
def make_canvas():
    return FakeCanvas


@pytest.fixture
def make_engine(on_game_over, scheduler, storage, clock):
    def _make(canvas=None, **kwargs):
        kwargs.setdefault("scheduler", scheduler)
        kwargs.setdefault("storage", storage)
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("config", Config(seed=7))
        return GameEngine(canvas if canvas is not None else FakeCanvas(),
                          kwargs.pop("on_game_over", on_game_over), **kwargs)
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()
