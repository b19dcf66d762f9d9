from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from uvcgadget.configfs.base import TreePath
from uvcgadget.configfs.errors import TreeBusyError, TreeError, TreeNotEmptyError, TreeNotFoundError
from uvcgadget.core.errors import ResourceError

_HINTS = {
    TreeNotEmptyError: "Something else still holds children or links below this node.",
    TreeBusyError: "The node is linked or bound; run 'uvc-gadget stop' or remove the links first.",
}


@contextmanager
def tree_op(action: str, path: TreePath, *, missing_ok: bool = False) -> Iterator[None]:
    """
    Run one tree mutation, translating TreeError into ResourceError.

    missing_ok=True treats TreeNotFoundError as success ("already absent");
    every other failure still propagates.
    """
    try:
        yield
    except TreeNotFoundError as e:
        if missing_ok:
            return
        raise ResourceError(
            f"Failed to {action} '{path}': not found.",
            path=str(path),
            hint="Is configfs mounted and libcomposite loaded?",
            details={"action": action, "error": str(e)},
        ) from None
    except TreeError as e:
        raise ResourceError(
            f"Failed to {action} '{path}'.",
            path=str(path),
            hint=_HINTS.get(type(e), str(e)),
            details={"action": action, "error": str(e)},
        ) from None
