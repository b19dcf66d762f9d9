# uvcgadget/model/loader.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml

from uvcgadget.core.errors import ValidationError
from .frame import FrameSpec
from .gadget import ConfigDescriptor, FunctionSettings, GadgetIdentity, OsDescriptor, hex_id


class ProfileLoader:
    """
    Loads the static gadget profile from YAML into typed model classes.

    Loads:
        - gadget.yml       (identity, configuration, OS descriptors, UVC function)
        - resolutions.yml  (static frame registry built on every fresh start)

    After calling load_all(), exposes:
        self.identity  : GadgetIdentity
        self.config    : ConfigDescriptor
        self.os_desc   : OsDescriptor
        self.function  : FunctionSettings
        self.frames    : list[FrameSpec]   (registry order)
    """

    GADGET_FILE = "gadget.yml"
    RESOLUTIONS_FILE = "resolutions.yml"

    def __init__(self, config_dir: str | Path):
        self.config_dir = Path(config_dir)
        self.identity: Optional[GadgetIdentity] = None
        self.config: ConfigDescriptor = ConfigDescriptor()
        self.os_desc: OsDescriptor = OsDescriptor()
        self.function: FunctionSettings = FunctionSettings()
        self.frames: List[FrameSpec] = []

    # ---------------------------------------------------------------------
    # YAML utility
    # ---------------------------------------------------------------------
    def _load_yaml(self, filename: str) -> dict:
        full_path = self.config_dir / filename
        if not full_path.exists():
            raise FileNotFoundError(f"Missing profile file: {full_path}")

        with open(full_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{filename} must contain a mapping at the top level")
        return data

    @staticmethod
    def _section(data: dict, key: str, filename: str, *, required: bool = False) -> dict:
        node = data.get(key)
        if node is None:
            if required:
                raise ValueError(f"{filename} is missing '{key}' root node")
            return {}
        if not isinstance(node, dict):
            raise ValueError(f"{filename} '{key}' must be a mapping")
        return node

    # ---------------------------------------------------------------------
    # Public entry point
    # ---------------------------------------------------------------------
    def load_all(self) -> None:
        """Load gadget.yml and resolutions.yml."""
        self.frames = []
        self._load_gadget()
        self._load_resolutions()

    # ---------------------------------------------------------------------
    # gadget.yml
    # ---------------------------------------------------------------------
    def _load_gadget(self) -> None:
        fn = self.GADGET_FILE
        data = self._load_yaml(fn)

        g = self._section(data, "gadget", fn, required=True)
        for key in ("name", "id_vendor", "id_product"):
            if g.get(key) in (None, ""):
                raise ValueError(f"{fn} gadget is missing '{key}'")

        strings = self._section(g, "strings", fn)
        for key in ("serial_number", "manufacturer", "product"):
            if strings.get(key) in (None, ""):
                raise ValueError(f"{fn} gadget.strings is missing '{key}'")

        defaults = GadgetIdentity(name="", id_vendor="", id_product="",
                                  serial_number="", manufacturer="", product="")
        self.identity = GadgetIdentity(
            name=str(g["name"]),
            id_vendor=hex_id(g["id_vendor"]),
            id_product=hex_id(g["id_product"]),
            bcd_device=hex_id(g.get("bcd_device", defaults.bcd_device)),
            bcd_usb=hex_id(g.get("bcd_usb", defaults.bcd_usb)),
            language=hex_id(g.get("language", defaults.language), width=3),
            device_class=hex_id(g.get("device_class", defaults.device_class), width=2),
            device_subclass=hex_id(g.get("device_subclass", defaults.device_subclass), width=2),
            device_protocol=hex_id(g.get("device_protocol", defaults.device_protocol), width=2),
            serial_number=str(strings["serial_number"]),
            manufacturer=str(strings["manufacturer"]),
            product=str(strings["product"]),
        )

        c = self._section(data, "config", fn)
        cd = ConfigDescriptor()
        max_power = int(c.get("max_power_ma", cd.max_power_ma))
        if max_power <= 0:
            raise ValueError(f"{fn} config.max_power_ma must be > 0")
        self.config = ConfigDescriptor(
            name=str(c.get("name", cd.name)),
            label=str(c.get("label", cd.label)),
            max_power_ma=max_power,
            bm_attributes=hex_id(c.get("bm_attributes", cd.bm_attributes), width=2),
        )

        o = self._section(data, "os_desc", fn)
        od = OsDescriptor()
        self.os_desc = OsDescriptor(
            enabled=bool(o.get("enabled", od.enabled)),
            vendor_code=hex_id(o.get("vendor_code", od.vendor_code), width=2),
            qw_sign=str(o.get("qw_sign", od.qw_sign)),
        )

        f = self._section(data, "function", fn)
        fd = FunctionSettings()
        instance = str(f.get("instance", fd.instance))
        if not instance or "/" in instance:
            raise ValueError(f"{fn} function.instance '{instance}' is not a valid name")
        self.function = FunctionSettings(
            instance=instance,
            streaming_maxpacket=int(f.get("streaming_maxpacket", fd.streaming_maxpacket)),
            streaming_maxburst=int(f.get("streaming_maxburst", fd.streaming_maxburst)),
            streaming_interval=int(f.get("streaming_interval", fd.streaming_interval)),
        )

    # ---------------------------------------------------------------------
    # resolutions.yml
    # ---------------------------------------------------------------------
    def _load_resolutions(self) -> None:
        fn = self.RESOLUTIONS_FILE
        data = self._load_yaml(fn)

        entries = data.get("frames")
        if not isinstance(entries, list):
            raise ValueError(f"{fn} is missing 'frames' list")

        seen: set[str] = set()
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ValueError(f"{fn} frame #{idx} must be a mapping")

            intervals = entry.get("intervals")
            if not isinstance(intervals, list):
                raise ValueError(f"{fn} frame #{idx} 'intervals' must be a list")

            try:
                spec = FrameSpec.create(
                    name=entry.get("name", ""),
                    width=entry.get("width"),
                    height=entry.get("height"),
                    intervals=intervals,
                    fmt=entry.get("format", ""),
                )
            except ValidationError as e:
                raise ValueError(f"{fn} frame #{idx}: {e.message}") from None

            if spec.name in seen:
                raise ValueError(f"{fn} frame name '{spec.name}' is used more than once")
            seen.add(spec.name)
            self.frames.append(spec)
