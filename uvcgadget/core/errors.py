# uvcgadget/core/errors.py
from __future__ import annotations


class GadgetError(Exception):
    """
    Base class for all expected operational errors in uvc-gadget.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, scripting, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration / input errors (no tree access yet)
# ---------------------------------------------------------------------------

class ConfigError(GadgetError):
    """
    Gadget profile is missing or inconsistent.

    Examples:
      - gadget.yml / resolutions.yml not found
      - missing identity fields
      - registry entry with an unknown format
    """
    code = "config_error"


class ValidationError(GadgetError):
    """
    Caller supplied a value the descriptor model cannot accept.

    Examples:
      - non-positive width / height
      - empty or non-positive frame interval list
      - frame name already used in either format group
      - unknown format alias
    """
    code = "validation_error"


class PreconditionError(GadgetError):
    """
    Operation requires a lifecycle state that is not present.

    Examples:
      - add() before start() created the function
    """
    code = "precondition_error"


# ---------------------------------------------------------------------------
# External resource errors
# ---------------------------------------------------------------------------

class ResourceError(GadgetError):
    """
    A configfs mutation failed for a reason other than "already in the desired state".

    Examples:
      - gadget root already exists when building
      - permission denied writing an attribute
      - directory still busy / not empty on removal
    """
    code = "resource_error"

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        hint: str | None = None,
        details: dict | None = None,
    ):
        details = dict(details or {})
        if path is not None:
            details.setdefault("path", path)
        super().__init__(message, hint=hint, details=details)
        self.path = path


class DeviceError(GadgetError):
    """
    No USB Device Controller is available to bind the gadget to.

    Examples:
      - /sys/class/udc is empty (no OTG port, dwc2 overlay not loaded)
      - requested controller is not listed
    """
    code = "device_error"
