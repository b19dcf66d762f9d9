from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import List, Union

from .errors import TreeNotFoundError

TreePath = Union[str, PurePosixPath]


class ConfigTree(ABC):
    """
    Abstract view of a configfs-like hierarchy (directories, attributes, links).

    Paths are relative to the tree root (e.g. the ``usb_gadget`` directory).

    Contract:
      - mkdir(path) creates missing parents; raises TreeExistsError unless exist_ok.
      - write(path, value) stores a string attribute; the parent must exist.
      - symlink(link, target) points ``link`` at the tree path ``target``.
      - rmdir(path) removes a directory whose user-created children are gone.
      - unlink(path) removes a symbolic link.
      - Missing paths raise TreeNotFoundError.
    """

    @abstractmethod
    def exists(self, path: TreePath) -> bool: ...

    @abstractmethod
    def is_dir(self, path: TreePath) -> bool: ...

    @abstractmethod
    def is_link(self, path: TreePath) -> bool: ...

    @abstractmethod
    def read(self, path: TreePath) -> str: ...

    @abstractmethod
    def listdir(self, path: TreePath) -> List[str]: ...

    @abstractmethod
    def mkdir(self, path: TreePath, *, exist_ok: bool = False) -> None: ...

    @abstractmethod
    def write(self, path: TreePath, value: str) -> None: ...

    @abstractmethod
    def symlink(self, link: TreePath, target: TreePath) -> None: ...

    @abstractmethod
    def unlink(self, path: TreePath) -> None: ...

    @abstractmethod
    def rmdir(self, path: TreePath) -> None: ...

    def subdirs(self, path: TreePath) -> List[str]:
        """Child directories of ``path`` (links excluded); [] if ``path`` is missing."""
        if not self.is_dir(path):
            return []
        base = PurePosixPath(path)
        return [
            name
            for name in self.listdir(base)
            if self.is_dir(base / name) and not self.is_link(base / name)
        ]

    def read_or(self, path: TreePath, default: str | None = None) -> str | None:
        try:
            return self.read(path)
        except TreeNotFoundError:
            return default
