# uvcgadget/runtime/builder.py
from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Dict, List, Optional

from uvcgadget.configfs.base import ConfigTree
from uvcgadget.core.errors import ResourceError, ValidationError
from uvcgadget.model.formats import FORMATS, VideoFormat
from uvcgadget.model.frame import FrameDescriptor, FrameSpec
from uvcgadget.model.gadget import ConfigDescriptor, FunctionSettings, GadgetIdentity, OsDescriptor

from .guards import tree_op
from .layout import CONTROL_SPEEDS, STREAMING_SPEEDS, GadgetLayout


class DescriptorTreeBuilder:
    """
    Materializes one UVC gadget in a ConfigTree, in dependency order.

    Responsibilities:
      - create the gadget root, string tables, OS descriptors and configuration
      - create the UVC function with its headers and format groups
      - add frames (validated, derived fields computed)
      - (re)create / remove the link set
      - tear everything down in reverse order, tolerating missing pieces

    It never binds or unbinds a controller; that is lifecycle work (GadgetManager).
    """

    def __init__(self, tree: ConfigTree, layout: GadgetLayout, *, logger: Optional[logging.Logger] = None):
        self._tree = tree
        self._layout = layout
        self._log = logger or logging.getLogger(__name__)

    @property
    def layout(self) -> GadgetLayout:
        return self._layout

    # ------------------------------------------------------------------
    # primitives
    # ------------------------------------------------------------------
    def _mkdir(self, path: PurePosixPath, *, exist_ok: bool = False) -> None:
        with tree_op("create directory", path):
            self._tree.mkdir(path, exist_ok=exist_ok)

    def _write(self, path: PurePosixPath, value) -> None:
        with tree_op("write", path):
            self._tree.write(path, str(value))

    def _link(self, link: PurePosixPath, target: PurePosixPath) -> None:
        with tree_op("link", link):
            self._tree.symlink(link, target)

    def _unlink(self, link: PurePosixPath) -> None:
        with tree_op("unlink", link, missing_ok=True):
            self._tree.unlink(link)

    def _rmdir(self, path: PurePosixPath) -> None:
        with tree_op("remove directory", path, missing_ok=True):
            self._tree.rmdir(path)

    def _subdirs(self, path: PurePosixPath) -> List[str]:
        with tree_op("list", path, missing_ok=True):
            return self._tree.subdirs(path)
        return []

    # ------------------------------------------------------------------
    # gadget
    # ------------------------------------------------------------------
    def create_gadget(
        self,
        identity: GadgetIdentity,
        config: Optional[ConfigDescriptor] = None,
        os_desc: Optional[OsDescriptor] = None,
    ) -> None:
        config = config or ConfigDescriptor()
        os_desc = os_desc or OsDescriptor()
        L = self._layout

        if self._tree.exists(L.root):
            raise ResourceError(
                f"Gadget '{identity.name}' already exists.",
                path=str(L.root),
                hint="Inspect it with 'uvc-gadget status' or remove it with 'uvc-gadget remove'.",
            )

        self._log.info("GADGET_CREATE name=%s vid=%s pid=%s", identity.name, identity.id_vendor, identity.id_product)
        self._mkdir(L.root)

        root_attrs = {
            "idVendor": identity.id_vendor,
            "idProduct": identity.id_product,
            "bcdDevice": identity.bcd_device,
            "bcdUSB": identity.bcd_usb,
            "bDeviceClass": identity.device_class,
            "bDeviceSubClass": identity.device_subclass,
            "bDeviceProtocol": identity.device_protocol,
        }
        for attr, value in root_attrs.items():
            self._write(L.root / attr, value)

        self._mkdir(L.strings)
        self._write(L.strings / "serialnumber", identity.serial_number)
        self._write(L.strings / "manufacturer", identity.manufacturer)
        self._write(L.strings / "product", identity.product)

        self._mkdir(L.config_dir)
        self._write(L.config_dir / "MaxPower", config.max_power_ma)
        self._write(L.config_dir / "bmAttributes", config.bm_attributes)
        self._mkdir(L.config_strings)
        self._write(L.config_strings / "configuration", config.label)

        if os_desc.enabled:
            # os_desc/ is a default group of the gadget item
            self._mkdir(L.os_desc, exist_ok=True)
            self._write(L.os_desc / "use", 1)
            self._write(L.os_desc / "b_vendor_code", os_desc.vendor_code)
            self._write(L.os_desc / "qw_sign", os_desc.qw_sign)
            self._link(L.os_desc_link, L.config_dir)

    # ------------------------------------------------------------------
    # function
    # ------------------------------------------------------------------
    def function_exists(self) -> bool:
        return self._tree.is_dir(self._layout.function_dir)

    def create_function(self, settings: Optional[FunctionSettings] = None) -> None:
        settings = settings or FunctionSettings()
        L = self._layout

        if not self._tree.is_dir(L.root):
            raise ResourceError(
                "Cannot create function: gadget root is missing.",
                path=str(L.root),
                hint="create_gadget() must run first.",
            )

        self._log.info("FUNCTION_CREATE name=%s", settings.function_name)
        self._mkdir(L.function_dir)
        self._write(L.function_dir / "streaming_maxpacket", settings.streaming_maxpacket)
        self._write(L.function_dir / "streaming_maxburst", settings.streaming_maxburst)
        self._write(L.function_dir / "streaming_interval", settings.streaming_interval)

        self._mkdir(L.control_header)
        self._mkdir(L.streaming_header)
        for fmt in VideoFormat:
            self._mkdir(L.format_dir(fmt))

        # class/<speed> directories are default groups of the function
        for speed in CONTROL_SPEEDS:
            self._mkdir(L.control_class(speed), exist_ok=True)
        for speed in STREAMING_SPEEDS:
            self._mkdir(L.streaming_class(speed), exist_ok=True)

    # ------------------------------------------------------------------
    # frames
    # ------------------------------------------------------------------
    def frames(self) -> Dict[VideoFormat, List[str]]:
        """Frame names per format group, as currently present in the tree."""
        return {fmt: self._subdirs(self._layout.format_dir(fmt)) for fmt in VideoFormat}

    def validate_frame(self, spec: FrameSpec) -> FrameDescriptor:
        """
        Check every precondition of add_frame() without touching the tree.
        """
        desc = FrameDescriptor.from_spec(spec)

        for fmt, names in self.frames().items():
            if spec.name in names:
                raise ValidationError(
                    f"Frame name '{spec.name}' already exists in the {FORMATS[fmt].label} group.",
                    hint="Frame names must be unique across both format groups.",
                    details={"name": spec.name, "group": fmt.value},
                )
        return desc

    def add_frame(self, spec: FrameSpec) -> FrameDescriptor:
        desc = self.validate_frame(spec)
        L = self._layout

        fmt_dir = L.format_dir(spec.fmt)
        if not self._tree.is_dir(fmt_dir):
            raise ResourceError(
                f"Format group {FORMATS[spec.fmt].label} is missing.",
                path=str(fmt_dir),
                hint="Run 'uvc-gadget start' to create the function first.",
            )

        frame_dir = L.frame_dir(spec.fmt, spec.name)
        self._mkdir(frame_dir)
        for attr, value in desc.attributes().items():
            self._write(frame_dir / attr, value)

        self._log.info(
            "FRAME_ADDED name=%s fmt=%s size=%dx%d interval=%d fps=%d",
            spec.name,
            spec.fmt.value,
            spec.width,
            spec.height,
            spec.default_interval,
            desc.fps,
        )
        return desc

    # ------------------------------------------------------------------
    # links
    # ------------------------------------------------------------------
    def unlink_all(self) -> None:
        """Remove the link set, outermost first. Missing links are fine."""
        L = self._layout
        self._unlink(L.config_link)
        for speed in STREAMING_SPEEDS:
            self._unlink(L.streaming_class_link(speed))
        for speed in CONTROL_SPEEDS:
            self._unlink(L.control_class_link(speed))
        for fmt in VideoFormat:
            self._unlink(L.header_format_link(fmt))

    def link_all(self) -> None:
        """
        (Re)create the link set: header -> formats, classes -> headers, config -> function.

        Existing links are removed first, so repeated calls converge to the same tree.
        Only format groups holding at least one frame are linked into the header.
        """
        L = self._layout
        self.unlink_all()

        populated = [fmt for fmt, names in self.frames().items() if names]
        if not populated:
            self._log.warning("LINK_NO_FRAMES function=%s", L.function)

        for fmt in populated:
            self._link(L.header_format_link(fmt), L.format_dir(fmt))
        for speed in STREAMING_SPEEDS:
            self._link(L.streaming_class_link(speed), L.streaming_header)
        for speed in CONTROL_SPEEDS:
            self._link(L.control_class_link(speed), L.control_header)
        self._link(L.config_link, L.function_dir)

        self._log.info("LINKS_CREATED formats=%s", ",".join(f.value for f in populated) or "-")

    # ------------------------------------------------------------------
    # teardown
    # ------------------------------------------------------------------
    def teardown(self) -> None:
        """
        Remove the whole gadget in reverse creation order.

        Every step accepts "already absent"; any other failure raises ResourceError
        and leaves the tree as far as it got.
        """
        L = self._layout
        self._log.info("GADGET_TEARDOWN name=%s", L.gadget)

        self.unlink_all()
        self._unlink(L.os_desc_link)

        for fmt in VideoFormat:
            for name in self._subdirs(L.format_dir(fmt)):
                self._rmdir(L.frame_dir(fmt, name))
        for fmt in VideoFormat:
            self._rmdir(L.format_dir(fmt))
        self._rmdir(L.streaming_header)
        self._rmdir(L.control_header)
        self._rmdir(L.function_dir)

        self._rmdir(L.config_strings)
        self._rmdir(L.config_dir)
        self._rmdir(L.strings)
        self._rmdir(L.root)
