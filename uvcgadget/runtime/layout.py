# uvcgadget/runtime/layout.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from uvcgadget.model.formats import FORMATS, VideoFormat
from uvcgadget.model.gadget import ConfigDescriptor, FunctionSettings, GadgetIdentity

STREAMING_SPEEDS = ("fs", "hs", "ss")
CONTROL_SPEEDS = ("fs", "ss")

HEADER = "h"


@dataclass(frozen=True)
class GadgetLayout:
    """
    Where every node of one UVC gadget lives, relative to the usb_gadget root.

    <gadget>/
      UDC, idVendor, ...
      strings/<lang>/
      configs/<config>/            + <function> -> functions/<function>
      os_desc/                     + <config> -> configs/<config>
      functions/<function>/
        control/header/h           <- control/class/{fs,ss}/h
        streaming/header/h         <- streaming/class/{fs,hs,ss}/h
          u -> streaming/uncompressed/u
          m -> streaming/mjpeg/m
        streaming/uncompressed/u/<frame>/
        streaming/mjpeg/m/<frame>/
    """
    gadget: str
    config: str = "c.1"
    function: str = "uvc.usb0"
    language: str = "0x409"

    @classmethod
    def for_profile(
        cls,
        identity: GadgetIdentity,
        config: ConfigDescriptor,
        function: FunctionSettings,
    ) -> "GadgetLayout":
        return cls(
            gadget=identity.name,
            config=config.name,
            function=function.function_name,
            language=identity.language,
        )

    # --- gadget ---
    @property
    def root(self) -> PurePosixPath:
        return PurePosixPath(self.gadget)

    @property
    def udc(self) -> PurePosixPath:
        return self.root / "UDC"

    @property
    def strings(self) -> PurePosixPath:
        return self.root / "strings" / self.language

    @property
    def config_dir(self) -> PurePosixPath:
        return self.root / "configs" / self.config

    @property
    def config_strings(self) -> PurePosixPath:
        return self.config_dir / "strings" / self.language

    @property
    def config_link(self) -> PurePosixPath:
        return self.config_dir / self.function

    @property
    def os_desc(self) -> PurePosixPath:
        return self.root / "os_desc"

    @property
    def os_desc_link(self) -> PurePosixPath:
        return self.os_desc / self.config

    # --- function ---
    @property
    def function_dir(self) -> PurePosixPath:
        return self.root / "functions" / self.function

    @property
    def control_header(self) -> PurePosixPath:
        return self.function_dir / "control" / "header" / HEADER

    def control_class(self, speed: str) -> PurePosixPath:
        return self.function_dir / "control" / "class" / speed

    def control_class_link(self, speed: str) -> PurePosixPath:
        return self.control_class(speed) / HEADER

    @property
    def streaming_header(self) -> PurePosixPath:
        return self.function_dir / "streaming" / "header" / HEADER

    def streaming_class(self, speed: str) -> PurePosixPath:
        return self.function_dir / "streaming" / "class" / speed

    def streaming_class_link(self, speed: str) -> PurePosixPath:
        return self.streaming_class(speed) / HEADER

    def format_dir(self, fmt: VideoFormat) -> PurePosixPath:
        spec = FORMATS[fmt]
        return self.function_dir / "streaming" / spec.group / spec.item

    def header_format_link(self, fmt: VideoFormat) -> PurePosixPath:
        return self.streaming_header / FORMATS[fmt].item

    def frame_dir(self, fmt: VideoFormat, name: str) -> PurePosixPath:
        return self.format_dir(fmt) / name
