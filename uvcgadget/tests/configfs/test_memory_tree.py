from __future__ import annotations

import pytest

from uvcgadget.configfs import (
    MemoryTree,
    TreeBusyError,
    TreeError,
    TreeExistsError,
    TreeNotEmptyError,
    TreeNotFoundError,
)


def test_mkdir_write_read_and_listdir() -> None:
    t = MemoryTree()
    t.mkdir("g/strings/0x409")
    t.write("g/idVendor", "0x1d6b")

    assert t.is_dir("g") and t.is_dir("g/strings")
    assert t.read("g/idVendor") == "0x1d6b"
    assert t.listdir("g") == ["idVendor", "strings"]
    assert t.read_or("g/missing") is None
    assert t.read_or("g/missing", "x") == "x"


def test_mkdir_existing_item_raises_unless_exist_ok() -> None:
    t = MemoryTree()
    t.mkdir("g")
    with pytest.raises(TreeExistsError):
        t.mkdir("g")
    t.mkdir("g", exist_ok=True)


def test_write_requires_parent_directory() -> None:
    t = MemoryTree()
    with pytest.raises(TreeNotFoundError):
        t.write("nope/attr", "1")


def test_read_missing_and_directory() -> None:
    t = MemoryTree()
    t.mkdir("g")
    with pytest.raises(TreeNotFoundError):
        t.read("g/absent")
    with pytest.raises(TreeError):
        t.read("g")


def test_symlink_requires_existing_target() -> None:
    t = MemoryTree()
    t.mkdir("a")
    with pytest.raises(TreeNotFoundError):
        t.symlink("a/link", "b")

    t.mkdir("b")
    t.symlink("a/link", "b")
    assert t.is_link("a/link")
    assert t.link_target("a/link") == "b"
    assert t.subdirs("a") == []

    with pytest.raises(TreeExistsError):
        t.symlink("a/link", "b")


def test_unlink_missing_and_non_link() -> None:
    t = MemoryTree()
    t.mkdir("a")
    with pytest.raises(TreeNotFoundError):
        t.unlink("a/none")
    with pytest.raises(TreeError):
        t.unlink("a")


def test_rmdir_refuses_while_items_remain() -> None:
    t = MemoryTree()
    t.mkdir("g/functions/uvc.usb0")
    with pytest.raises(TreeNotEmptyError):
        t.rmdir("g/functions")

    t.rmdir("g/functions/uvc.usb0")
    # implicit parents behave like default groups and go with their owner
    t.rmdir("g")
    assert not t.exists("g")


def test_rmdir_refuses_while_holding_or_targeted_by_link() -> None:
    t = MemoryTree()
    t.mkdir("cfg")
    t.mkdir("fn")
    t.symlink("cfg/fn", "fn")

    with pytest.raises(TreeNotEmptyError):
        t.rmdir("cfg")
    with pytest.raises(TreeBusyError):
        t.rmdir("fn")

    t.unlink("cfg/fn")
    t.rmdir("fn")
    t.rmdir("cfg")
    assert t.listdir(".") == []


def test_rmdir_drops_attributes_and_default_groups() -> None:
    t = MemoryTree()
    t.mkdir("g")
    t.mkdir("g/os_desc", exist_ok=True)
    t.write("g/os_desc/use", "1")
    t.rmdir("g")

    assert not t.exists("g/os_desc/use")
    assert not t.is_dir("g/os_desc")


def test_rmdir_root_and_missing() -> None:
    t = MemoryTree()
    with pytest.raises(TreeError):
        t.rmdir(".")
    with pytest.raises(TreeNotFoundError):
        t.rmdir("nope")


def test_journal_records_only_successful_mutations() -> None:
    t = MemoryTree()
    t.mkdir("g")
    with pytest.raises(TreeExistsError):
        t.mkdir("g")
    t.write("g/a", "1")
    t.read("g/a")

    assert t.journal == [("mkdir", "g"), ("write", "g/a")]


def test_snapshot_is_a_copy() -> None:
    t = MemoryTree()
    t.mkdir("g")
    before = t.snapshot()
    t.write("g/a", "1")
    assert t.snapshot() != before
