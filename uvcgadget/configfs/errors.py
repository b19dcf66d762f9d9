from __future__ import annotations


class TreeError(Exception):
    """Base class for configuration-tree failures."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path


class TreeNotFoundError(TreeError):
    pass


class TreeExistsError(TreeError):
    pass


class TreeNotEmptyError(TreeError):
    pass


class TreeBusyError(TreeError):
    pass
