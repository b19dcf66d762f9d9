# uvcgadget/common/logging_config.py
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class LogDefaults:
    console_level: int = logging.WARNING
    verbose_level: int = logging.INFO
    file_level: int = logging.DEBUG
    fmt: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_fmt: str = "%(levelname)s %(name)s: %(message)s"


DEFAULTS = LogDefaults()


def configure_file_logging(app_log_path: Path) -> None:
    """
    Add a file handler to the root logger (idempotent).
    """
    root = logging.getLogger()
    app_log_path.parent.mkdir(parents=True, exist_ok=True)
    target = str(app_log_path.resolve())

    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target:
            return

    fh = logging.FileHandler(app_log_path, encoding="utf-8", delay=True)
    fh.setLevel(DEFAULTS.file_level)
    fh.setFormatter(logging.Formatter(DEFAULTS.fmt))
    root.addHandler(fh)

    if root.level > DEFAULTS.file_level:
        root.setLevel(DEFAULTS.file_level)


def configure_logging(*, verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Console handler on stderr (WARNING, or INFO with verbose) plus an optional file log.
    Calling it again only adjusts the console level.
    """
    root = logging.getLogger()
    level = DEFAULTS.verbose_level if verbose else DEFAULTS.console_level

    console = next(
        (h for h in root.handlers if getattr(h, "_uvcgadget_console", False)),
        None,
    )
    if console is None:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(DEFAULTS.console_fmt))
        console._uvcgadget_console = True  # type: ignore[attr-defined]
        root.addHandler(console)
    console.setLevel(level)

    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)

    if log_file is not None:
        configure_file_logging(Path(log_file))
