# uvcgadget/model/formats.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple, Union

from uvcgadget.core.errors import ValidationError

#: Frame intervals are expressed in 100 ns units.
INTERVAL_UNITS_PER_SECOND = 10_000_000


class VideoFormat(Enum):
    """Streaming format groups supported by the UVC function."""
    UNCOMPRESSED = "uncompressed"
    MJPEG = "mjpeg"


@dataclass(frozen=True)
class FormatSpec:
    """
    Static description of one streaming format group.

    Attributes:
        fmt: Format group this entry describes.
        label: Human-readable pixel format name.
        group: Container directory under ``streaming/``.
        item: Format directory created inside ``group`` (linked from the header).
        bits_per_pixel: Factor used for the bitrate estimate.
        max_bitrate_factor: dwMaxBitRate = factor * dwMinBitRate.
        frame_bytes: (width, height) -> dwMaxVideoFrameBufferSize.
    """
    fmt: VideoFormat
    label: str
    group: str
    item: str
    bits_per_pixel: int
    max_bitrate_factor: int
    frame_bytes: Callable[[int, int], int]


def _yuy2_frame_bytes(width: int, height: int) -> int:
    return width * height * 2


def _mjpeg_frame_bytes(width: int, height: int) -> int:
    # Placeholder: assumes ~4:1 compression against YUY2, never measured.
    return width * height // 2


FORMATS: Dict[VideoFormat, FormatSpec] = {
    VideoFormat.UNCOMPRESSED: FormatSpec(
        fmt=VideoFormat.UNCOMPRESSED,
        label="YUY2",
        group="uncompressed",
        item="u",
        bits_per_pixel=16,
        max_bitrate_factor=1,
        frame_bytes=_yuy2_frame_bytes,
    ),
    VideoFormat.MJPEG: FormatSpec(
        fmt=VideoFormat.MJPEG,
        label="MJPEG",
        group="mjpeg",
        item="m",
        bits_per_pixel=4,
        max_bitrate_factor=2,
        frame_bytes=_mjpeg_frame_bytes,
    ),
}

ALIASES: Dict[str, VideoFormat] = {
    "yuy2": VideoFormat.UNCOMPRESSED,
    "yuyv": VideoFormat.UNCOMPRESSED,
    "uncompressed": VideoFormat.UNCOMPRESSED,
    "mjpeg": VideoFormat.MJPEG,
    "jpeg": VideoFormat.MJPEG,
}


def resolve_format(value: Union[str, VideoFormat]) -> VideoFormat:
    """Map a format alias (case-insensitive) or VideoFormat to a VideoFormat."""
    if isinstance(value, VideoFormat):
        return value
    fmt = ALIASES.get(str(value).strip().lower())
    if fmt is None:
        raise ValidationError(
            f"Unknown format '{value}'.",
            hint=f"Use one of: {', '.join(sorted(ALIASES))}",
            details={"format": value},
        )
    return fmt


def fps(interval: int) -> int:
    """Frames per second for a frame interval (integer division, reporting only)."""
    return INTERVAL_UNITS_PER_SECOND // int(interval)


def derive_fields(fmt: VideoFormat, width: int, height: int, default_interval: int) -> Tuple[int, int, int]:
    """
    Return (frame_bytes, min_bitrate, max_bitrate) for a frame.

    Bitrate: width * height * bits_per_pixel * 10_000_000 // default_interval.
    """
    spec = FORMATS[fmt]
    bitrate = width * height * spec.bits_per_pixel * INTERVAL_UNITS_PER_SECOND // default_interval
    return spec.frame_bytes(width, height), bitrate, bitrate * spec.max_bitrate_factor
