import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "hide")

import pytest


class StubRandom:
    """Deterministic stand-in for random.Random: fixed delay, fixed target."""

    def __init__(self, delay_ms=1500, symbol="K"):
        self.delay_ms = delay_ms
        self.symbol = symbol
        self.randrange_calls = []

    def randrange(self, start, stop):
        self.randrange_calls.append((start, stop))
        return self.delay_ms

    def choice(self, seq):
        assert self.symbol in seq
        return self.symbol


@pytest.fixture
def stub_rng():
    return StubRandom()
