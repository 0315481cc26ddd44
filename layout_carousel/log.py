"""Logging levels for lc-niri.

Every keypress starts a fresh process, so stderr stays quiet by default.
``--debug`` adds state fallbacks, chosen layouts and lock handling;
``--trace`` adds the raw niri traffic and each timing/rotation step,
which go out at the TRACE level (5), below DEBUG.

Modules that call ``logger.trace()`` import this module once for its
side effect of registering the level.
"""

from __future__ import annotations

import logging

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


def console_level(debug: bool = False, trace: bool = False) -> int:
    """Threshold for the stderr handler."""
    if trace:
        return TRACE
    if debug:
        return logging.DEBUG
    return logging.WARNING


def logger_level(debug: bool = False, trace: bool = False, log_file: str | None = None) -> int:
    """Threshold for the ``layout_carousel`` logger itself.

    A log file records DEBUG even while the console stays at WARNING.
    """
    if trace:
        return TRACE
    if debug or log_file:
        return logging.DEBUG
    return logging.WARNING
