# uvcgadget/model/gadget.py
from __future__ import annotations

from dataclasses import dataclass


def hex_id(value, *, width: int = 4) -> str:
    """
    Normalize a USB id / BCD value to configfs' '0x....' form.

    Accepts ints (YAML parses unquoted 0x1d6b as int) and strings ("0x1d6b", "1d6b").
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected hex id, got bool {value!r}")
    if isinstance(value, int):
        n = value
    else:
        s = str(value).strip().lower()
        n = int(s[2:] if s.startswith("0x") else s, 16)
    if n < 0 or n >= 16 ** width:
        raise ValueError(f"Value {value!r} does not fit in {width} hex digits")
    return f"0x{n:0{width}x}"


@dataclass(frozen=True)
class GadgetIdentity:
    """
    Static device descriptor written once into the gadget root.

    Attributes:
        name: Gadget directory name under usb_gadget/.
        id_vendor / id_product: '0x....' USB ids.
        bcd_device: Device release number.
        bcd_usb: USB specification release.
        language: String table language id (0x409 = en-US).
        device_class / device_subclass / device_protocol: 0xEF/0x02/0x01 announces
            an Interface Association Descriptor, which UVC hosts expect.
    """
    name: str
    id_vendor: str
    id_product: str
    serial_number: str
    manufacturer: str
    product: str
    bcd_device: str = "0x0100"
    bcd_usb: str = "0x0200"
    language: str = "0x409"
    device_class: str = "0xef"
    device_subclass: str = "0x02"
    device_protocol: str = "0x01"


@dataclass(frozen=True)
class ConfigDescriptor:
    """Default configuration node (configs/<name>)."""
    name: str = "c.1"
    label: str = "UVC"
    max_power_ma: int = 500
    bm_attributes: str = "0x80"


@dataclass(frozen=True)
class OsDescriptor:
    """Microsoft OS descriptor settings (os_desc/)."""
    enabled: bool = True
    vendor_code: str = "0xcd"
    qw_sign: str = "MSFT100"


@dataclass(frozen=True)
class FunctionSettings:
    """UVC function instance (functions/uvc.<instance>) and its streaming endpoint knobs."""
    instance: str = "usb0"
    streaming_maxpacket: int = 2048
    streaming_maxburst: int = 0
    streaming_interval: int = 1

    @property
    def function_name(self) -> str:
        return f"uvc.{self.instance}"
