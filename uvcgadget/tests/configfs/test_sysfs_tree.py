from __future__ import annotations

import os
from pathlib import Path

import pytest

from uvcgadget.configfs import (
    SysfsTree,
    TreeExistsError,
    TreeNotEmptyError,
    TreeNotFoundError,
)


@pytest.fixture
def tree(tmp_path: Path) -> SysfsTree:
    return SysfsTree(tmp_path)


def test_write_has_no_newline_and_read_strips(tree: SysfsTree, tmp_path: Path) -> None:
    tree.mkdir("g/strings/0x409")
    tree.write("g/idVendor", "0x1d6b")
    (tmp_path / "g" / "UDC").write_text("fe980000.usb\n")

    assert (tmp_path / "g" / "idVendor").read_text() == "0x1d6b"
    assert tree.read("g/UDC") == "fe980000.usb"
    assert tree.listdir("g") == ["UDC", "idVendor", "strings"]


def test_symlink_uses_absolute_target(tree: SysfsTree, tmp_path: Path) -> None:
    tree.mkdir("g/configs/c.1")
    tree.mkdir("g/functions/uvc.usb0")
    tree.symlink("g/configs/c.1/uvc.usb0", "g/functions/uvc.usb0")

    link = tmp_path / "g/configs/c.1/uvc.usb0"
    assert link.is_symlink()
    assert os.path.isabs(os.readlink(link))
    assert tree.is_link("g/configs/c.1/uvc.usb0")
    assert tree.subdirs("g/configs/c.1") == []

    tree.unlink("g/configs/c.1/uvc.usb0")
    assert not tree.exists("g/configs/c.1/uvc.usb0")


def test_errno_is_translated(tree: SysfsTree) -> None:
    with pytest.raises(TreeNotFoundError) as ei:
        tree.read("missing")
    assert ei.value.path.endswith("missing")

    tree.mkdir("g/sub")
    with pytest.raises(TreeExistsError):
        tree.mkdir("g")
    tree.mkdir("g", exist_ok=True)

    with pytest.raises(TreeNotEmptyError):
        tree.rmdir("g")
    with pytest.raises(TreeNotFoundError):
        tree.unlink("g/none")


def test_rmdir_empty_directory(tree: SysfsTree, tmp_path: Path) -> None:
    tree.mkdir("g")
    tree.rmdir("g")
    assert not (tmp_path / "g").exists()
    assert tree.read_or("g/x") is None
