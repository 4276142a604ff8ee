"""Shared fixtures."""

import os

# widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from app.state import Keystroke, Outcome


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def build_keystrokes(typed, expected=None, timestamp=0.0):
    """Keystrokes for `typed`, judged against `expected` (all correct when omitted)."""
    expected = typed if expected is None else expected
    return [
        Keystroke(c, Outcome.CORRECT if c == g else Outcome.INCORRECT, timestamp)
        for c, g in zip(typed, expected)
    ]
