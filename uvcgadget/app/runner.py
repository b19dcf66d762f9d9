from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from uvcgadget.app.config import GadgetConfig
from uvcgadget.app.manager import GadgetManager
from uvcgadget.configfs.base import ConfigTree
from uvcgadget.configfs.sysfs import SysfsTree
from uvcgadget.core.context import Context
from uvcgadget.devices.udc import SysfsControllerSource
from uvcgadget.devices.video import SysfsVideoNodeFinder
from uvcgadget.interfaces import ControllerSource, VideoNodeFinder


@dataclass(frozen=True)
class AppRun:
    manager: GadgetManager
    context: Context
    tree: ConfigTree
    controllers: ControllerSource


def start_run(
    cfg: GadgetConfig,
    *,
    context: Optional[Context] = None,
    tree: Optional[ConfigTree] = None,
    controllers: Optional[ControllerSource] = None,
    video_nodes: Optional[VideoNodeFinder] = None,
) -> AppRun:
    """
    Wire profile, configfs tree and sysfs collaborators into a GadgetManager.

    Every collaborator is injectable (tests pass a MemoryTree and fakes).
    """
    log = logging.getLogger("uvcgadget")

    context = context or Context.load(cfg.metadata_dir)
    tree = tree or SysfsTree(cfg.configfs_root)
    controllers = controllers or SysfsControllerSource(cfg.udc_class_dir)
    video_nodes = video_nodes or SysfsVideoNodeFinder(cfg.video_class_dir)

    manager = GadgetManager(
        context,
        tree=tree,
        controllers=controllers,
        video_nodes=video_nodes,
        udc=cfg.udc,
        settle_delay_s=cfg.settle_delay_s,
        logger=log,
    )
    return AppRun(manager=manager, context=context, tree=tree, controllers=controllers)
