"""NiriSocket — ILayoutIPC over niri's JSON-lines Unix socket.

Every request is a single JSON document terminated by a newline; niri
answers with one line holding either ``{"Ok": <response>}`` or
``{"Err": "<message>"}``.
"""

from __future__ import annotations

import json
import logging
import os
import socket

import layout_carousel.log  # registers TRACE level and logger.trace()
from layout_carousel.errors import IpcError
from layout_carousel.platform.ipc_adapter import ILayoutIPC, KeyboardLayouts

logger = logging.getLogger(__name__)

SOCKET_ENV = "NIRI_SOCKET"


class NiriSocket(ILayoutIPC):
    """Real niri IPC connection."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._reader = sock.makefile("rb")

    @classmethod
    def connect(cls, path: str | None = None, timeout: float = 1.0) -> NiriSocket:
        """Open a connection to *path*, or to ``$NIRI_SOCKET`` when omitted."""
        path = path or os.environ.get(SOCKET_ENV)
        if not path:
            raise IpcError(f"${SOCKET_ENV} is not set. Is niri running?")

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(timeout)
        try:
            sock.connect(path)
        except OSError as exc:
            sock.close()
            raise IpcError(f"Cannot connect to niri socket at {path}: {exc}") from exc
        logger.debug("Connected to niri socket at %s", path)
        return cls(sock)

    # -- transport ------------------------------------------------------

    def send(self, request):
        """Send one request and return the payload of the ``Ok`` reply."""
        payload = json.dumps(request)
        logger.trace("niri <- %s", payload)  # type: ignore[attr-defined]
        try:
            self._sock.sendall(payload.encode("utf-8") + b"\n")
            raw = self._reader.readline()
        except OSError as exc:
            raise IpcError(f"niri IPC exchange failed: {exc}") from exc
        logger.trace("niri -> %r", raw.rstrip())  # type: ignore[attr-defined]

        if not raw:
            raise IpcError("niri closed the connection without replying")
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise IpcError(f"Malformed reply from niri: {raw.strip()!r}") from exc
        try:
            reply = json.loads(line)
        except json.JSONDecodeError as exc:
            raise IpcError(f"Malformed reply from niri: {line.strip()!r}") from exc

        if isinstance(reply, dict) and "Err" in reply:
            raise IpcError(f"niri rejected the request: {reply['Err']}")
        if not isinstance(reply, dict) or "Ok" not in reply:
            raise IpcError()
        return reply["Ok"]

    def close(self) -> None:
        try:
            self._reader.close()
        finally:
            self._sock.close()

    # -- requests -------------------------------------------------------

    def get_keyboard_layouts(self) -> KeyboardLayouts:
        response = self.send("KeyboardLayouts")
        if not isinstance(response, dict) or not isinstance(response.get("KeyboardLayouts"), dict):
            raise IpcError()

        layouts = response["KeyboardLayouts"]
        names = layouts.get("names")
        if not isinstance(names, list):
            raise IpcError()
        return KeyboardLayouts(names=names, current_idx=layouts.get("current_idx", 0))

    def switch_layout(self, index: int) -> None:
        response = self.send({"Action": {"SwitchLayout": {"layout": {"Index": index}}}})
        if response != "Handled":
            raise IpcError()
