from .formats import VideoFormat, FormatSpec, FORMATS, ALIASES, resolve_format, fps
from .frame import FrameSpec, FrameDescriptor
from .gadget import GadgetIdentity, ConfigDescriptor, OsDescriptor, FunctionSettings
from .loader import ProfileLoader

__all__ = ["VideoFormat",
           "FormatSpec",
           "FORMATS",
           "ALIASES",
           "resolve_format",
           "fps",
           "FrameSpec",
           "FrameDescriptor",
           "GadgetIdentity",
           "ConfigDescriptor",
           "OsDescriptor",
           "FunctionSettings",
           "ProfileLoader"]
