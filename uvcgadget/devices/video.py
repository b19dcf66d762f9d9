from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

DEFAULT_VIDEO_CLASS_DIR = "/sys/class/video4linux"


class SysfsVideoNodeFinder:
    """
    Finds the gadget's V4L2 output node by scanning /sys/class/video4linux/*/name.

    The UVC gadget driver names its video device after the controller or the
    function, so callers pass both; the first node whose name contains any of
    them wins (lowest index first).
    """

    def __init__(
        self,
        class_dir: str | Path = DEFAULT_VIDEO_CLASS_DIR,
        *,
        dev_dir: str | Path = "/dev",
        logger: Optional[logging.Logger] = None,
    ):
        self.class_dir = Path(class_dir)
        self.dev_dir = Path(dev_dir)
        self._log = logger or logging.getLogger(__name__)

    @staticmethod
    def _index(name: str) -> int:
        digits = name[len("video"):]
        return int(digits) if digits.isdigit() else 1 << 30

    def find(self, names: Iterable[str]) -> Optional[str]:
        wanted = [n for n in names if n]
        if not wanted or not self.class_dir.exists():
            return None

        nodes = sorted(
            (p for p in self.class_dir.iterdir() if p.name.startswith("video")),
            key=lambda p: self._index(p.name),
        )
        for node in nodes:
            try:
                label = (node / "name").read_text(encoding="utf-8").strip()
            except OSError:
                self._log.debug("VIDEO_NAME_UNREADABLE node=%s", node.name)
                continue
            if any(w in label for w in wanted):
                return str(self.dev_dir / node.name)
        return None
