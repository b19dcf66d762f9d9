# uvcgadget/runtime/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from uvcgadget.configfs.base import ConfigTree
from uvcgadget.model.formats import VideoFormat, fps

from .guards import tree_op
from .layout import GadgetLayout


class GadgetState(Enum):
    ABSENT = "absent"            # no gadget root
    CONFIGURED = "configured"    # tree present, not bound to a controller
    ENABLED = "enabled"          # tree present and bound (UDC attribute set)


@dataclass(frozen=True)
class FrameState:
    """
    One frame as read back from the tree.

    Fields are None when the attribute is missing or unparsable (partially built tree).
    """
    name: str
    fmt: VideoFormat
    width: Optional[int] = None
    height: Optional[int] = None
    interval: Optional[int] = None

    @property
    def fps(self) -> Optional[int]:
        if not self.interval:
            return None
        return fps(self.interval)


@dataclass(frozen=True)
class GadgetStatus:
    """
    A snapshot of the gadget, recomputed from the tree on every call.
    """
    gadget: str
    state: GadgetState
    function_present: bool = False
    udc: Optional[str] = None
    udc_present: Optional[bool] = None      # None when unbound
    video_node: Optional[str] = None
    frames: Dict[VideoFormat, List[FrameState]] = field(default_factory=dict)

    @property
    def configured(self) -> bool:
        return self.state is not GadgetState.ABSENT

    def frame_names(self) -> List[str]:
        return [f.name for group in self.frames.values() for f in group]

    def find_frame(self, name: str) -> Optional[FrameState]:
        for group in self.frames.values():
            for f in group:
                if f.name == name:
                    return f
        return None


def _read(tree: ConfigTree, path) -> Optional[str]:
    with tree_op("read", path):
        return tree.read_or(path)


def _read_int(tree: ConfigTree, path) -> Optional[int]:
    raw = _read(tree, path)
    if raw is None:
        return None
    try:
        return int(raw.split()[0]) if raw.strip() else None
    except ValueError:
        return None


def bound_udc(tree: ConfigTree, layout: GadgetLayout) -> Optional[str]:
    """Controller name in the UDC attribute, or None when unbound / absent."""
    if not tree.is_dir(layout.root):
        return None
    value = (_read(tree, layout.udc) or "").strip()
    return value or None


def inspect_state(tree: ConfigTree, layout: GadgetLayout) -> GadgetState:
    """Derive the lifecycle state purely from the tree. Never mutates."""
    if not tree.is_dir(layout.root):
        return GadgetState.ABSENT
    if bound_udc(tree, layout):
        return GadgetState.ENABLED
    return GadgetState.CONFIGURED


def read_frames(tree: ConfigTree, layout: GadgetLayout) -> Dict[VideoFormat, List[FrameState]]:
    """Frames per format group with the attributes that could be read back."""
    out: Dict[VideoFormat, List[FrameState]] = {}
    for fmt in VideoFormat:
        fmt_dir = layout.format_dir(fmt)
        frames: List[FrameState] = []
        for name in tree.subdirs(fmt_dir):
            d = fmt_dir / name
            frames.append(
                FrameState(
                    name=name,
                    fmt=fmt,
                    width=_read_int(tree, d / "wWidth"),
                    height=_read_int(tree, d / "wHeight"),
                    interval=_read_int(tree, d / "dwDefaultFrameInterval"),
                )
            )
        out[fmt] = frames
    return out
