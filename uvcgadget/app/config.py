from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from uvcgadget.configfs.sysfs import DEFAULT_GADGET_ROOT
from uvcgadget.devices.udc import DEFAULT_UDC_CLASS_DIR
from uvcgadget.devices.video import DEFAULT_VIDEO_CLASS_DIR


def default_metadata_dir() -> Path:
    # <package>/metadata, shipped as package data
    return Path(__file__).resolve().parents[1] / "metadata"


@dataclass(frozen=True)
class GadgetConfig:
    metadata_dir: str
    configfs_root: str = DEFAULT_GADGET_ROOT
    udc_class_dir: str = DEFAULT_UDC_CLASS_DIR
    video_class_dir: str = DEFAULT_VIDEO_CLASS_DIR
    udc: Optional[str] = None
    settle_delay_s: float = 1.0
