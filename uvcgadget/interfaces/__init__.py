from .controllers import ControllerSource
from .video_nodes import VideoNodeFinder

__all__ = ["ControllerSource", "VideoNodeFinder"]
