"""Compositor IPC adapters."""

from layout_carousel.platform.ipc_adapter import ILayoutIPC, KeyboardLayouts
from layout_carousel.platform.niri_socket import NiriSocket

__all__ = ['ILayoutIPC', 'KeyboardLayouts', 'NiriSocket']
