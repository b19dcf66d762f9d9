# uvcgadget/model/frame.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from uvcgadget.core.errors import ValidationError
from .formats import FORMATS, VideoFormat, derive_fields, fps, resolve_format

_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def _positive_int(value, what: str, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Frame '{name}': {what} must be an integer, got {type(value).__name__}.",
            details={"name": name, what: value},
        )
    if value <= 0:
        raise ValidationError(
            f"Frame '{name}': {what} must be > 0 (got {value}).",
            details={"name": name, what: value},
        )
    return value


@dataclass(frozen=True)
class FrameSpec:
    """
    Requested frame: one resolution at one (default) frame interval.

    intervals: 100 ns units, first entry is the default (and only persisted) one.
    """
    name: str
    fmt: VideoFormat
    width: int
    height: int
    intervals: Tuple[int, ...]

    @classmethod
    def create(
        cls,
        name: str,
        width: int,
        height: int,
        intervals: Sequence[int],
        fmt,
    ) -> "FrameSpec":
        spec = cls(
            name=str(name),
            fmt=resolve_format(fmt),
            width=width,
            height=height,
            intervals=tuple(intervals),
        )
        spec.validate()
        return spec

    @property
    def default_interval(self) -> int:
        return self.intervals[0]

    def validate(self) -> None:
        if not _NAME_RE.match(self.name or ""):
            raise ValidationError(
                f"Invalid frame name '{self.name}'.",
                hint="Use letters, digits, '_', '-' or '.', starting with a letter or digit.",
                details={"name": self.name},
            )
        _positive_int(self.width, "width", self.name)
        _positive_int(self.height, "height", self.name)
        if not self.intervals:
            raise ValidationError(
                f"Frame '{self.name}': at least one frame interval is required.",
                details={"name": self.name},
            )
        for iv in self.intervals:
            _positive_int(iv, "interval", self.name)


@dataclass(frozen=True)
class FrameDescriptor:
    """A validated FrameSpec plus the derived UVC frame fields."""
    spec: FrameSpec
    frame_bytes: int
    min_bitrate: int
    max_bitrate: int

    @classmethod
    def from_spec(cls, spec: FrameSpec) -> "FrameDescriptor":
        spec.validate()
        frame_bytes, min_br, max_br = derive_fields(spec.fmt, spec.width, spec.height, spec.default_interval)
        return cls(spec=spec, frame_bytes=frame_bytes, min_bitrate=min_br, max_bitrate=max_br)

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def fps(self) -> int:
        return fps(self.spec.default_interval)

    def attributes(self) -> Dict[str, str]:
        """configfs attribute name -> value, in write order."""
        return {
            "wWidth": str(self.spec.width),
            "wHeight": str(self.spec.height),
            "dwMinBitRate": str(self.min_bitrate),
            "dwMaxBitRate": str(self.max_bitrate),
            "dwMaxVideoFrameBufferSize": str(self.frame_bytes),
            "dwDefaultFrameInterval": str(self.spec.default_interval),
            "dwFrameInterval": str(self.spec.default_interval),
        }

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "format": FORMATS[self.spec.fmt].label,
            "width": self.spec.width,
            "height": self.spec.height,
            "interval": self.spec.default_interval,
            "fps": self.fps,
            "frame_bytes": self.frame_bytes,
            "min_bitrate": self.min_bitrate,
            "max_bitrate": self.max_bitrate,
        }
