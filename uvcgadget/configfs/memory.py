from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, List, Tuple

from .base import ConfigTree, TreePath
from .errors import (
    TreeBusyError,
    TreeError,
    TreeExistsError,
    TreeNotEmptyError,
    TreeNotFoundError,
)

ROOT = PurePosixPath(".")


def _key(path: TreePath) -> PurePosixPath:
    parts = [p for p in PurePosixPath(path).parts if p not in ("/", ".")]
    return PurePosixPath(*parts) if parts else ROOT


def _within(candidate: PurePosixPath, top: PurePosixPath) -> bool:
    return candidate == top or top in candidate.parents


class MemoryTree(ConfigTree):
    """
    In-memory ConfigTree with configfs-like removal rules.

    - Directories created by mkdir(exist_ok=False) are *items*: they must be
      removed explicitly with rmdir().
    - Directories created implicitly (missing parents, or mkdir(exist_ok=True))
      behave like configfs default groups and disappear with their parent.
    - rmdir() refuses while the subtree still holds an item directory or a link
      (TreeNotEmptyError), or while a link elsewhere points into it (TreeBusyError).
    - Attributes disappear with their directory.

    Every successful mutation is appended to ``journal`` as (op, path).
    """

    def __init__(self) -> None:
        self._dirs: Dict[PurePosixPath, bool] = {ROOT: False}  # path -> is item
        self._attrs: Dict[PurePosixPath, str] = {}
        self._links: Dict[PurePosixPath, PurePosixPath] = {}
        self.journal: List[Tuple[str, str]] = []

    # --- helpers ---
    def _record(self, op: str, key: PurePosixPath) -> None:
        self.journal.append((op, str(key)))

    def _require_parent_dir(self, key: PurePosixPath) -> None:
        if key.parent not in self._dirs:
            raise TreeNotFoundError(f"No such directory: {key.parent}", path=str(key.parent))

    def snapshot(self) -> dict:
        """Comparable picture of the whole tree (for before/after assertions)."""
        return {
            "dirs": dict(self._dirs),
            "attrs": dict(self._attrs),
            "links": {str(k): str(v) for k, v in self._links.items()},
        }

    def link_target(self, path: TreePath) -> str:
        key = _key(path)
        if key not in self._links:
            raise TreeNotFoundError(f"No such link: {key}", path=str(key))
        return str(self._links[key])

    # --- inspection ---
    def exists(self, path: TreePath) -> bool:
        key = _key(path)
        return key in self._dirs or key in self._attrs or key in self._links

    def is_dir(self, path: TreePath) -> bool:
        return _key(path) in self._dirs

    def is_link(self, path: TreePath) -> bool:
        return _key(path) in self._links

    def read(self, path: TreePath) -> str:
        key = _key(path)
        if key in self._attrs:
            return self._attrs[key]
        if key in self._dirs:
            raise TreeError(f"Is a directory: {key}", path=str(key))
        raise TreeNotFoundError(f"No such attribute: {key}", path=str(key))

    def listdir(self, path: TreePath) -> List[str]:
        key = _key(path)
        if key not in self._dirs:
            raise TreeNotFoundError(f"No such directory: {key}", path=str(key))
        names = set()
        for table in (self._dirs, self._attrs, self._links):
            for p in table:
                if p != ROOT and p.parent == key:
                    names.add(p.name)
        return sorted(names)

    # --- mutation ---
    def mkdir(self, path: TreePath, *, exist_ok: bool = False) -> None:
        key = _key(path)
        if key in self._dirs:
            if exist_ok:
                return
            raise TreeExistsError(f"Directory exists: {key}", path=str(key))
        if key in self._attrs or key in self._links:
            raise TreeExistsError(f"Path exists: {key}", path=str(key))

        for parent in reversed(key.parents):
            if parent in self._dirs:
                continue
            if parent in self._attrs or parent in self._links:
                raise TreeError(f"Not a directory: {parent}", path=str(parent))
            self._dirs[parent] = False

        self._dirs[key] = not exist_ok
        self._record("mkdir", key)

    def write(self, path: TreePath, value: str) -> None:
        key = _key(path)
        self._require_parent_dir(key)
        if key in self._dirs or key in self._links:
            raise TreeError(f"Not an attribute: {key}", path=str(key))
        self._attrs[key] = str(value)
        self._record("write", key)

    def symlink(self, link: TreePath, target: TreePath) -> None:
        key = _key(link)
        dest = _key(target)
        self._require_parent_dir(key)
        if dest not in self._dirs:
            raise TreeNotFoundError(f"Link target missing: {dest}", path=str(dest))
        if self.exists(key):
            raise TreeExistsError(f"Path exists: {key}", path=str(key))
        self._links[key] = dest
        self._record("symlink", key)

    def unlink(self, path: TreePath) -> None:
        key = _key(path)
        if key not in self._links:
            if self.exists(key):
                raise TreeError(f"Not a link: {key}", path=str(key))
            raise TreeNotFoundError(f"No such link: {key}", path=str(key))
        del self._links[key]
        self._record("unlink", key)

    def rmdir(self, path: TreePath) -> None:
        key = _key(path)
        if key == ROOT:
            raise TreeError("Refusing to remove tree root", path=str(key))
        if key not in self._dirs:
            raise TreeNotFoundError(f"No such directory: {key}", path=str(key))

        for p, is_item in self._dirs.items():
            if p != key and is_item and _within(p, key):
                raise TreeNotEmptyError(f"Directory not empty: {key} (holds {p})", path=str(key))
        for p, dest in self._links.items():
            if _within(p, key):
                raise TreeNotEmptyError(f"Directory not empty: {key} (holds link {p})", path=str(key))
            if _within(dest, key):
                raise TreeBusyError(f"Directory busy: {key} (target of {p})", path=str(key))

        for p in [p for p in self._dirs if _within(p, key)]:
            del self._dirs[p]
        for p in [p for p in self._attrs if _within(p, key)]:
            del self._attrs[p]
        self._record("rmdir", key)
