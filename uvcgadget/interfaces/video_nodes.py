from __future__ import annotations

from typing import Iterable, Optional, Protocol


class VideoNodeFinder(Protocol):
    """Finds the V4L2 device node (/dev/videoN) whose name matches one of ``names``."""
    def find(self, names: Iterable[str]) -> Optional[str]: ...
