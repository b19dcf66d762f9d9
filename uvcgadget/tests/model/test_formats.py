from __future__ import annotations

import pytest

from uvcgadget.core.errors import ValidationError
from uvcgadget.model.formats import (
    FORMATS,
    VideoFormat,
    derive_fields,
    fps,
    resolve_format,
)


@pytest.mark.parametrize("alias", ["yuy2", "YUYV", "Uncompressed", " yuy2 "])
def test_uncompressed_aliases_resolve(alias):
    assert resolve_format(alias) is VideoFormat.UNCOMPRESSED


@pytest.mark.parametrize("alias", ["mjpeg", "JPEG", "MJpeg"])
def test_mjpeg_aliases_resolve(alias):
    assert resolve_format(alias) is VideoFormat.MJPEG


def test_resolve_format_passes_enum_through():
    assert resolve_format(VideoFormat.MJPEG) is VideoFormat.MJPEG


@pytest.mark.parametrize("alias", ["h264", "", "nv12", "yuv"])
def test_unknown_alias_raises_validation_error(alias):
    with pytest.raises(ValidationError) as ei:
        resolve_format(alias)
    assert ei.value.code == "validation_error"
    assert "mjpeg" in (ei.value.hint or "")


def test_uncompressed_1080p30_derived_fields():
    frame_bytes, min_br, max_br = derive_fields(VideoFormat.UNCOMPRESSED, 1920, 1080, 333333)

    assert frame_bytes == 4_147_200
    assert min_br == 1920 * 1080 * 16 * 10_000_000 // 333333
    assert max_br == min_br


def test_mjpeg_1080p30_derived_fields():
    frame_bytes, min_br, max_br = derive_fields(VideoFormat.MJPEG, 1920, 1080, 333333)

    assert frame_bytes == 1_036_800
    assert min_br == 1920 * 1080 * 4 * 10_000_000 // 333333
    assert max_br == 2 * min_br


def test_bitrate_uses_integer_division():
    # 10_000_000 / 3 is not integral
    _, min_br, _ = derive_fields(VideoFormat.UNCOMPRESSED, 1, 1, 3)
    assert min_br == 16 * 10_000_000 // 3


def test_fps_integer_division():
    assert fps(333333) == 30
    assert fps(666666) == 15
    assert fps(166666) == 60
    assert fps(10_000_000) == 1
    assert fps(20_000_000) == 0


def test_format_table_directories():
    assert (FORMATS[VideoFormat.UNCOMPRESSED].group, FORMATS[VideoFormat.UNCOMPRESSED].item) == ("uncompressed", "u")
    assert (FORMATS[VideoFormat.MJPEG].group, FORMATS[VideoFormat.MJPEG].item) == ("mjpeg", "m")
