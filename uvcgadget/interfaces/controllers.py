from __future__ import annotations

from typing import List, Protocol


class ControllerSource(Protocol):
    """Lists USB Device Controllers a gadget can be bound to."""
    def available(self) -> List[str]: ...
