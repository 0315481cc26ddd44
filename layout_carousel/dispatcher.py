"""CommandDispatcher — runs one CLI action against the store and niri."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Callable

import shtab

import layout_carousel.log  # registers TRACE level and logger.trace()
from layout_carousel.core.duration import Duration
from layout_carousel.core.store import StateStore
from layout_carousel.platform.ipc_adapter import ILayoutIPC

logger = logging.getLogger(__name__)

DEFAULT_SHELL = 'bash'


class CommandDispatcher:
    """Maps switch / keypress-duration / reload / completion onto the core.

    ``ipc_factory`` opens a fresh compositor connection; each action that
    needs niri calls it exactly once.  ``clock`` is injectable so tests can
    drive the streak timing.
    """

    def __init__(
        self,
        ipc_factory: Callable[[], ILayoutIPC],
        store: StateStore,
        clock: Callable[[], float] = time.time,
        out=None,
    ):
        self._ipc_factory = ipc_factory
        self.store = store
        self._clock = clock
        self._out = out

    @property
    def out(self):
        return self._out if self._out is not None else sys.stdout

    def switch(self) -> int | None:
        """Advance the carousel; returns the requested layout, or None for a no-op."""
        with self._ipc_factory() as ipc, self.store.lock():
            call_time = self._clock()
            state = self.store.load_or_create(ipc, now=call_time)

            if not state.can_rotate:
                logger.debug("Only %d layout(s) known, nothing to switch", len(state.layout_order))
                return None

            state.advance_timing(call_time)
            target = state.rotate()
            logger.debug("Switching to layout %d (streak %d)", target, state.streak_count)

            ipc.switch_layout(target)
            self.store.save(state)
            return target

    def keypress_duration(self, duration: float | None = None) -> None:
        """Print the current keypress duration, or validate and store a new one."""
        with self._ipc_factory() as ipc, self.store.lock():
            state = self.store.load_or_create(ipc, now=self._clock())
            if duration is None:
                print(f"Current max keypress duration: {state.duration}", file=self.out)
                return

            state.duration = Duration.parse(duration)
            self.store.save(state)
            logger.info("Max keypress duration set to %s", state.duration)

    def reload(self) -> None:
        """Rebuild the state from niri's current layouts, dropping all history."""
        with self._ipc_factory() as ipc, self.store.lock():
            state = self.store.create_default(ipc)
            self.store.save(state)
            logger.info("Carousel reloaded with %d layouts", len(state.layout_order))

    def completion(self, parser: argparse.ArgumentParser, shell: str | None = None) -> None:
        print(shtab.complete(parser, shell=shell or DEFAULT_SHELL), file=self.out)
