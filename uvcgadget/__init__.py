"""
uvc-gadget: build, enable and tear down a USB Video Class gadget through configfs.
"""

__version__ = "0.1.0"
