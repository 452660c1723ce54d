from __future__ import annotations

import pytest

from models import SearchEvent
from session import SearchSession


class FakeClock:
    """Clock that advances by ``step`` seconds every time it is read."""

    def __init__(self, step: float = 0.0) -> None:
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


class RecordingSession(SearchSession):
    def __init__(self, clock: FakeClock) -> None:
        self.events: list[SearchEvent] = []
        super().__init__(self.events.append, clock=clock)

    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]

    def payload(self, kind: str):
        matches = [event.payload for event in self.events if event.kind == kind]
        assert len(matches) == 1, f"expected one {kind!r} event, got {len(matches)}"
        return matches[0]


@pytest.fixture
def make_session():
    def factory(step: float = 0.0) -> RecordingSession:
        return RecordingSession(FakeClock(step))

    return factory
