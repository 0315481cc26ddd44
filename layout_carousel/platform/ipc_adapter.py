"""ILayoutIPC interface and KeyboardLayouts dataclass."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class KeyboardLayouts:
    names: list[str] = field(default_factory=list)   # 'English (US)', 'Russian', ...
    current_idx: int = 0

    def __len__(self) -> int:
        return len(self.names)


class ILayoutIPC(ABC):
    """One request/response connection to the compositor."""

    @abstractmethod
    def get_keyboard_layouts(self) -> KeyboardLayouts: ...

    @abstractmethod
    def switch_layout(self, index: int) -> None: ...

    def close(self) -> None:
        pass

    def __enter__(self) -> ILayoutIPC:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
