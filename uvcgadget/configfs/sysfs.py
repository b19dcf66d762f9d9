from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import List, Optional

from .base import ConfigTree, TreePath
from .errors import (
    TreeBusyError,
    TreeError,
    TreeExistsError,
    TreeNotEmptyError,
    TreeNotFoundError,
)

DEFAULT_GADGET_ROOT = "/sys/kernel/config/usb_gadget"


class SysfsTree(ConfigTree):
    """
    ConfigTree backed by a real directory (normally the configfs ``usb_gadget`` root).

    Notes:
      - Attribute values are written as given (no newline added) and read back stripped.
        Unbinding writes "\n" to UDC, since an empty write never reaches configfs.
      - Links are created with absolute targets, as configfs resolves them by item.
      - Every OSError is translated into the TreeError family, keeping the failing path.
    """

    def __init__(self, root: str | Path = DEFAULT_GADGET_ROOT, *, logger: Optional[logging.Logger] = None):
        self.root = Path(root)
        self._log = logger or logging.getLogger(__name__)

    def _abs(self, path: TreePath) -> Path:
        return self.root / str(path)

    @staticmethod
    def _translate(e: OSError, path: Path) -> TreeError:
        msg = f"{e.strerror or e} ({path})"
        if e.errno == errno.ENOENT:
            return TreeNotFoundError(msg, path=str(path))
        if e.errno == errno.EEXIST:
            return TreeExistsError(msg, path=str(path))
        if e.errno == errno.ENOTEMPTY:
            return TreeNotEmptyError(msg, path=str(path))
        if e.errno == errno.EBUSY:
            return TreeBusyError(msg, path=str(path))
        return TreeError(msg, path=str(path))

    # --- inspection ---
    def exists(self, path: TreePath) -> bool:
        return os.path.lexists(self._abs(path))

    def is_dir(self, path: TreePath) -> bool:
        return self._abs(path).is_dir()

    def is_link(self, path: TreePath) -> bool:
        return self._abs(path).is_symlink()

    def read(self, path: TreePath) -> str:
        p = self._abs(path)
        try:
            return p.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise self._translate(e, p) from None

    def listdir(self, path: TreePath) -> List[str]:
        p = self._abs(path)
        try:
            return sorted(child.name for child in p.iterdir())
        except OSError as e:
            raise self._translate(e, p) from None

    # --- mutation ---
    def mkdir(self, path: TreePath, *, exist_ok: bool = False) -> None:
        p = self._abs(path)
        self._log.debug("MKDIR path=%s", p)
        try:
            p.mkdir(parents=True, exist_ok=exist_ok)
        except OSError as e:
            raise self._translate(e, p) from None

    def write(self, path: TreePath, value: str) -> None:
        p = self._abs(path)
        self._log.debug("WRITE path=%s value=%r", p, value)
        try:
            p.write_text(value, encoding="utf-8")
        except OSError as e:
            raise self._translate(e, p) from None

    def symlink(self, link: TreePath, target: TreePath) -> None:
        p = self._abs(link)
        t = self._abs(target)
        self._log.debug("SYMLINK link=%s target=%s", p, t)
        try:
            p.symlink_to(t)
        except OSError as e:
            raise self._translate(e, p) from None

    def unlink(self, path: TreePath) -> None:
        p = self._abs(path)
        self._log.debug("UNLINK path=%s", p)
        try:
            p.unlink()
        except OSError as e:
            raise self._translate(e, p) from None

    def rmdir(self, path: TreePath) -> None:
        p = self._abs(path)
        self._log.debug("RMDIR path=%s", p)
        try:
            p.rmdir()
        except OSError as e:
            raise self._translate(e, p) from None
