from __future__ import annotations

import pytest

from layout_carousel.core.store import StateStore
from layout_carousel.errors import IpcError
from layout_carousel.platform.ipc_adapter import ILayoutIPC, KeyboardLayouts


class MockNiriIPC(ILayoutIPC):
    """In-memory niri: records every request instead of touching a socket."""

    def __init__(self, names=("English (US)", "Russian", "German", "French")):
        self.names = list(names)
        self.requests: list = []
        self.connections = 0
        self.closed = 0
        self.fail = False

    def factory(self) -> MockNiriIPC:
        self.connections += 1
        return self

    def get_keyboard_layouts(self) -> KeyboardLayouts:
        self.requests.append('KeyboardLayouts')
        if self.fail:
            raise IpcError()
        return KeyboardLayouts(names=list(self.names))

    def switch_layout(self, index: int) -> None:
        self.requests.append(('SwitchLayout', index))
        if self.fail:
            raise IpcError()

    @property
    def switched(self) -> list[int]:
        return [r[1] for r in self.requests if isinstance(r, tuple)]

    def close(self) -> None:
        self.closed += 1


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep platformdirs and the niri socket away from the real user session."""
    monkeypatch.setenv('XDG_DATA_HOME', str(tmp_path / 'xdg-data'))
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'xdg-config'))
    monkeypatch.delenv('NIRI_SOCKET', raising=False)


@pytest.fixture
def mock_ipc() -> MockNiriIPC:
    return MockNiriIPC()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tmp_path) -> StateStore:
    return StateStore(path=str(tmp_path / 'state' / 'data'), lock_timeout=0.1)
