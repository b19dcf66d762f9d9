# uvcgadget/cli/args.py
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from uvcgadget.app.config import GadgetConfig, default_metadata_dir
from uvcgadget.configfs.sysfs import DEFAULT_GADGET_ROOT
from uvcgadget.devices.udc import DEFAULT_UDC_CLASS_DIR
from uvcgadget.devices.video import DEFAULT_VIDEO_CLASS_DIR
from uvcgadget.model.formats import ALIASES

PROG = "uvc-gadget"


class GadgetArgumentParser(argparse.ArgumentParser):
    """argparse with usage errors mapped to exit code 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_intervals(value: str) -> List[int]:
    """
    '333333' or '333333,666666' -> [333333, 666666].

    Only integer syntax is checked here; positivity is a model rule (ValidationError).
    """
    parts = [p.strip() for p in str(value).split(",") if p.strip()]
    if not parts:
        raise argparse.ArgumentTypeError("expected one or more comma-separated frame intervals")
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid frame interval list '{value}' (use e.g. 333333,666666)")


def build_parser() -> argparse.ArgumentParser:
    parser = GadgetArgumentParser(
        prog=PROG,
        description="Configure a USB Video Class gadget through configfs.",
        epilog="Example: uvc-gadget add 480p15 640 480 666666 yuyv",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    parser.add_argument("--log-file", default=None, help="Also write a debug log to this file")
    parser.add_argument(
        "--metadata-dir",
        default=str(default_metadata_dir()),
        help="Directory holding gadget.yml and resolutions.yml",
    )
    parser.add_argument("--configfs-root", default=DEFAULT_GADGET_ROOT, help="configfs usb_gadget directory")
    parser.add_argument("--udc-class-dir", default=DEFAULT_UDC_CLASS_DIR, help=argparse.SUPPRESS)
    parser.add_argument("--video-class-dir", default=DEFAULT_VIDEO_CLASS_DIR, help=argparse.SUPPRESS)
    parser.add_argument("--udc", default=None, help="Controller to bind to (default: first available)")
    parser.add_argument(
        "--settle-delay",
        type=float,
        default=1.0,
        help="Seconds to wait between remove and start on restart (default: 1.0)",
    )

    sub = parser.add_subparsers(dest="cmd", metavar="COMMAND")

    sub.add_parser("start", help="Build the gadget (if absent) and bind it to a controller")
    sub.add_parser("stop", help="Unbind the gadget, keep its configuration")
    sub.add_parser("restart", help="Remove the gadget, then start it from the static registry")
    sub.add_parser("remove", aliases=["unload"], help="Unbind and delete the whole gadget")
    sub.add_parser("status", help="Show state and configured frames")

    p_add = sub.add_parser("add", help="Add one frame to a configured or running gadget")
    p_add.add_argument("name", help="Frame name, unique across both formats (e.g. 720p15)")
    p_add.add_argument("width", type=int, help="Width in pixels")
    p_add.add_argument("height", type=int, help="Height in pixels")
    p_add.add_argument(
        "intervals",
        type=parse_intervals,
        help="Frame interval(s) in 100 ns units, comma-separated; first is used (333333 = 30 fps)",
    )
    p_add.add_argument(
        "format",
        help=f"Streaming format: {', '.join(sorted(ALIASES))}",
    )

    sub.add_parser("help", help="Show this help")
    sub.add_parser("controllers", help="List USB Device Controllers")
    sub.add_parser("registry", help="Show the static frame registry and derived fields")

    return parser


def config_from_args(args: argparse.Namespace) -> GadgetConfig:
    return GadgetConfig(
        metadata_dir=str(args.metadata_dir),
        configfs_root=str(args.configfs_root),
        udc_class_dir=str(args.udc_class_dir),
        video_class_dir=str(args.video_class_dir),
        udc=args.udc or None,
        settle_delay_s=float(args.settle_delay),
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
