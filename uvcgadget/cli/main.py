# uvcgadget/cli/main.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from uvcgadget.app.runner import start_run
from uvcgadget.common.logging_config import configure_logging
from uvcgadget.core.context import Context
from uvcgadget.core.errors import GadgetError
from uvcgadget.devices.udc import SysfsControllerSource

from uvcgadget.cli.args import build_parser, config_from_args
from uvcgadget.cli.commands import (
    cmd_add,
    cmd_controllers,
    cmd_registry,
    cmd_remove,
    cmd_restart,
    cmd_start,
    cmd_status,
    cmd_stop,
)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from uvcgadget import __version__
        print(f"uvc-gadget {__version__}")
        return 0

    if args.cmd is None:
        parser.print_help(sys.stderr)
        return 1
    if args.cmd == "help":
        parser.print_help()
        return 0

    configure_logging(verbose=args.verbose, log_file=Path(args.log_file) if args.log_file else None)

    try:
        cfg = config_from_args(args)

        if args.cmd == "registry":
            return cmd_registry(Context.load(cfg.metadata_dir))
        if args.cmd == "controllers":
            return cmd_controllers(SysfsControllerSource(cfg.udc_class_dir))

        manager = start_run(cfg).manager

        if args.cmd == "start":
            return cmd_start(manager)
        if args.cmd == "stop":
            return cmd_stop(manager)
        if args.cmd == "restart":
            return cmd_restart(manager)
        if args.cmd in ("remove", "unload"):
            return cmd_remove(manager)
        if args.cmd == "status":
            return cmd_status(manager)
        if args.cmd == "add":
            return cmd_add(args, manager)

        return 1
    except GadgetError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        if e.hint:
            print(f"Hint: {e.hint}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
