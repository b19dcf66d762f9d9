# uvcgadget/cli/commands.py
from __future__ import annotations

import argparse

from uvcgadget.app.manager import GadgetManager
from uvcgadget.core.context import Context
from uvcgadget.interfaces import ControllerSource
from uvcgadget.model.formats import FORMATS, VideoFormat
from uvcgadget.model.frame import FrameDescriptor
from uvcgadget.runtime.state import GadgetState, GadgetStatus

# ---------------- Status printing ----------------

def _fmt_optional(value) -> str:
    return "-" if value is None else str(value)


def print_status(st: GadgetStatus) -> None:
    print(f"Gadget:    {st.gadget}")
    if st.state is GadgetState.ABSENT:
        print("State:     absent (not configured)")
        return

    print(f"State:     {st.state.value}")
    if st.udc:
        gone = "" if st.udc_present else " (controller no longer listed)"
        print(f"UDC:       {st.udc}{gone}")
    else:
        print("UDC:       - (not bound)")
    if st.video_node:
        print(f"Video:     {st.video_node}")
    if not st.function_present:
        print("Function:  missing (partially built tree; run 'uvc-gadget restart')")
        return

    print("Frames:")
    for fmt in VideoFormat:
        spec = FORMATS[fmt]
        frames = st.frames.get(fmt, [])
        print(f"  {spec.label} ({spec.group}/{spec.item}):")
        if not frames:
            print("    (none)")
            continue
        for f in frames:
            size = f"{_fmt_optional(f.width)}x{_fmt_optional(f.height)}"
            print(f"    - {f.name:<12} {size:<10} {_fmt_optional(f.fps):>3} fps  interval={_fmt_optional(f.interval)}")


# ---------------- Commands ----------------

def cmd_start(manager: GadgetManager) -> int:
    print_status(manager.start())
    return 0


def cmd_stop(manager: GadgetManager) -> int:
    print_status(manager.stop())
    return 0


def cmd_restart(manager: GadgetManager) -> int:
    print_status(manager.restart())
    return 0


def cmd_remove(manager: GadgetManager) -> int:
    manager.remove()
    print(f"Gadget '{manager.context.identity.name}' removed")
    return 0


def cmd_status(manager: GadgetManager) -> int:
    print_status(manager.status())
    return 0


def cmd_add(args: argparse.Namespace, manager: GadgetManager) -> int:
    desc = manager.add(args.name, args.width, args.height, args.intervals, args.format)
    print("Added " + _frame_line(desc))
    print(f"State:     {manager.state().value}")
    return 0


def _frame_line(desc: FrameDescriptor) -> str:
    d = desc.as_dict()
    return f"{d['name']} ({d['format']} {d['width']}x{d['height']} @ {d['fps']} fps)"


def cmd_controllers(controllers: ControllerSource) -> int:
    udcs = controllers.available()
    if not udcs:
        print("No USB Device Controllers found.")
        return 0
    print("Available controllers:")
    for name in udcs:
        print(f"  {name}")
    return 0


def cmd_registry(context: Context) -> int:
    print(f"Profile:   {context.metadata_dir}")
    print(f"Gadget:    {context.identity.name} ({context.identity.id_vendor}:{context.identity.id_product})")
    if not context.registry:
        print("Registry:  (empty)")
        return 0
    print("Registry:")
    for spec in context.registry:
        print("  " + _registry_line(FrameDescriptor.from_spec(spec)))
    return 0


def _registry_line(desc: FrameDescriptor) -> str:
    d = desc.as_dict()
    return (
        f"{d['name']:<12} {d['format']:<6} {d['width']}x{d['height']} @ {d['fps']} fps  "
        f"bitrate={d['min_bitrate']}..{d['max_bitrate']} buffer={d['frame_bytes']}"
    )
