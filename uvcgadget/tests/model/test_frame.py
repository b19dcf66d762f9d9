from __future__ import annotations

import pytest

from uvcgadget.core.errors import ValidationError
from uvcgadget.model.formats import VideoFormat
from uvcgadget.model.frame import FrameDescriptor, FrameSpec


def test_create_resolves_alias_and_keeps_interval_order():
    spec = FrameSpec.create("720p", 1280, 720, [333333, 666666], "jpeg")

    assert spec.fmt is VideoFormat.MJPEG
    assert spec.intervals == (333333, 666666)
    assert spec.default_interval == 333333


@pytest.mark.parametrize(
    "width,height",
    [(0, 480), (640, 0), (-1, 480), (640, -480)],
)
def test_non_positive_dimensions_rejected(width, height):
    with pytest.raises(ValidationError):
        FrameSpec.create("bad", width, height, [333333], "yuyv")


def test_empty_intervals_rejected():
    with pytest.raises(ValidationError):
        FrameSpec.create("bad", 640, 480, [], "yuyv")


@pytest.mark.parametrize("intervals", [[0], [333333, -1], [333333, 0]])
def test_non_positive_intervals_rejected(intervals):
    with pytest.raises(ValidationError):
        FrameSpec.create("bad", 640, 480, intervals, "yuyv")


@pytest.mark.parametrize("value", [True, 640.0, "640", None])
def test_non_integer_dimension_rejected(value):
    with pytest.raises(ValidationError):
        FrameSpec.create("bad", value, 480, [333333], "yuyv")


@pytest.mark.parametrize("name", ["", "a/b", "..", ".hidden", "with space"])
def test_names_must_be_single_path_components(name):
    with pytest.raises(ValidationError):
        FrameSpec.create(name, 640, 480, [333333], "yuyv")


def test_unknown_format_rejected_before_other_checks():
    with pytest.raises(ValidationError) as ei:
        FrameSpec.create("ok", 640, 480, [333333], "h264")
    assert "h264" in ei.value.message


def test_descriptor_attributes_write_only_default_interval():
    desc = FrameDescriptor.from_spec(FrameSpec.create("480p", 640, 480, [333333, 666666], "yuy2"))
    attrs = desc.attributes()

    assert list(attrs) == [
        "wWidth",
        "wHeight",
        "dwMinBitRate",
        "dwMaxBitRate",
        "dwMaxVideoFrameBufferSize",
        "dwDefaultFrameInterval",
        "dwFrameInterval",
    ]
    assert attrs["wWidth"] == "640"
    assert attrs["wHeight"] == "480"
    assert attrs["dwDefaultFrameInterval"] == "333333"
    assert attrs["dwFrameInterval"] == "333333"
    assert attrs["dwMaxVideoFrameBufferSize"] == str(640 * 480 * 2)


def test_descriptor_as_dict_reports_fps_and_label():
    desc = FrameDescriptor.from_spec(FrameSpec.create("1080p", 1920, 1080, [333333], "mjpeg"))
    d = desc.as_dict()

    assert d["format"] == "MJPEG"
    assert d["fps"] == 30
    assert d["max_bitrate"] == 2 * d["min_bitrate"]
