"""StateStore — the per-user carousel record on disk."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path

import platformdirs
from filelock import FileLock, Timeout

import layout_carousel.log  # registers TRACE level and logger.trace()
from layout_carousel.core.carousel import CarouselState
from layout_carousel.errors import InvalidRunError, StateLoadError, StateLockError
from layout_carousel.persistence import read_json, save_json
from layout_carousel.platform.ipc_adapter import ILayoutIPC

logger = logging.getLogger(__name__)

APP_NAME = 'layout-carousel-niri'
DATA_FILE = 'data'


def default_data_path() -> str:
    """``<user data dir>/layout-carousel-niri/data``.

    Raises ``InvalidRunError`` when the user has no resolvable home directory.
    """
    try:
        Path.home()
    except (RuntimeError, KeyError) as exc:
        raise InvalidRunError() from exc
    return os.path.join(platformdirs.user_data_dir(APP_NAME, appauthor=False), DATA_FILE)


class StateStore:
    """Loads, saves and lazily creates the carousel state."""

    def __init__(self, path: str | None = None, lock_timeout: float = 1.0):
        self._path = path
        self.lock_timeout = lock_timeout

    @property
    def path(self) -> str:
        if self._path is None:
            self._path = default_data_path()
        return self._path

    def load(self) -> CarouselState:
        """Read the persisted state; raises ``StateLoadError`` if there is none usable."""
        path = self.path
        try:
            data = read_json(path)
        except (OSError, ValueError) as exc:
            raise StateLoadError(f"Cannot read carousel state from {path}: {exc}") from exc
        try:
            return CarouselState.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise StateLoadError(f"Malformed carousel state in {path}: {exc}") from exc

    def save(self, state: CarouselState) -> None:
        save_json(self.path, state.to_dict())
        logger.trace("Saved carousel state to %s", self.path)  # type: ignore[attr-defined]

    def create_default(self, ipc: ILayoutIPC, now: float | None = None) -> CarouselState:
        """Fresh state sized by the layouts niri currently knows about."""
        layouts = ipc.get_keyboard_layouts()
        logger.debug("niri reports %d keyboard layouts: %s", len(layouts), layouts.names)
        return CarouselState.create_default(len(layouts), now=now)

    def load_or_create(self, ipc: ILayoutIPC, now: float | None = None) -> CarouselState:
        try:
            return self.load()
        except StateLoadError as exc:
            logger.debug("%s; creating default state", exc)
            return self.create_default(ipc, now=now)

    @contextmanager
    def lock(self):
        """Advisory lock serializing load-modify-save across invocations."""
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        lock = FileLock(self.path + '.lock', timeout=self.lock_timeout)
        try:
            lock.acquire()
        except Timeout as exc:
            raise StateLockError(
                f"Another layout carousel call is still holding {lock.lock_file}"
            ) from exc
        try:
            yield
        finally:
            lock.release()
