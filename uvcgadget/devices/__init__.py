from .udc import SysfsControllerSource, DEFAULT_UDC_CLASS_DIR
from .video import SysfsVideoNodeFinder, DEFAULT_VIDEO_CLASS_DIR

__all__ = ["SysfsControllerSource", "DEFAULT_UDC_CLASS_DIR",
           "SysfsVideoNodeFinder", "DEFAULT_VIDEO_CLASS_DIR"]
