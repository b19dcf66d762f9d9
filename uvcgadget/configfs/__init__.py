# configfs/__init__.py

from .base import ConfigTree, TreePath
from .errors import TreeError, TreeNotFoundError, TreeExistsError, TreeNotEmptyError, TreeBusyError
from .memory import MemoryTree
from .sysfs import SysfsTree, DEFAULT_GADGET_ROOT

__all__ = [
    "ConfigTree", "TreePath",
    "TreeError", "TreeNotFoundError", "TreeExistsError", "TreeNotEmptyError", "TreeBusyError",
    "MemoryTree",
    "SysfsTree", "DEFAULT_GADGET_ROOT",
]
