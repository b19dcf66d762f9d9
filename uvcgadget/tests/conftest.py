from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from uvcgadget.app.config import default_metadata_dir
from uvcgadget.configfs import MemoryTree
from uvcgadget.core.context import Context
from uvcgadget.model import ConfigDescriptor, FrameSpec, FunctionSettings, GadgetIdentity, OsDescriptor


class FakeControllers:
    def __init__(self, names=("fe980000.usb",)):
        self.names = list(names)

    def available(self) -> List[str]:
        return list(self.names)


class FakeVideoNodes:
    def __init__(self, node: Optional[str] = "/dev/video0"):
        self.node = node
        self.queries: List[list] = []

    def find(self, names) -> Optional[str]:
        self.queries.append(list(names))
        return self.node


def make_context(*frames: FrameSpec) -> Context:
    return Context(
        identity=GadgetIdentity(
            name="cam",
            id_vendor="0x1d6b",
            id_product="0x0104",
            serial_number="0001",
            manufacturer="Acme",
            product="Acme Cam",
        ),
        config=ConfigDescriptor(),
        os_desc=OsDescriptor(),
        function=FunctionSettings(),
        registry=tuple(frames),
        metadata_dir=Path("."),
    )


@pytest.fixture
def registry() -> tuple:
    return (
        FrameSpec.create("480p", 640, 480, [333333], "yuyv"),
        FrameSpec.create("1080p", 1920, 1080, [333333], "mjpeg"),
    )


@pytest.fixture
def context(registry) -> Context:
    return make_context(*registry)


@pytest.fixture
def packaged_context() -> Context:
    return Context.load(default_metadata_dir())


@pytest.fixture
def tree() -> MemoryTree:
    return MemoryTree()


@pytest.fixture
def controllers() -> FakeControllers:
    return FakeControllers()
