from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

DEFAULT_UDC_CLASS_DIR = "/sys/class/udc"


class SysfsControllerSource:
    """
    USB Device Controllers listed under /sys/class/udc (e.g. 'fe980000.usb').

    A missing class directory means the kernel has no gadget-capable controller.
    """

    def __init__(self, class_dir: str | Path = DEFAULT_UDC_CLASS_DIR, *, logger: Optional[logging.Logger] = None):
        self.class_dir = Path(class_dir)
        self._log = logger or logging.getLogger(__name__)

    def available(self) -> List[str]:
        if not self.class_dir.exists():
            self._log.debug("UDC_CLASS_DIR_MISSING path=%s", self.class_dir)
            return []
        return sorted(child.name for child in self.class_dir.iterdir())
