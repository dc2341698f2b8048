"""Tests for channel layouts, pixels and colour helpers."""

import numpy as np
import pytest


@pytest.mark.parametrize("layout,count", [
    ("monochrome", 1), ("rgb", 3), ("rgba", 4), ("gradient", 1),
])
def test_channel_counts(layout, count):
    from perlinforge.channels import ChannelStack
    stack = ChannelStack(5, 3, layout=layout, rng=1)
    assert len(stack.channels) == count
    for matrix in stack.channels:
        assert matrix.shape == (5, 3)
        assert matrix.dtype == np.uint8


@pytest.mark.parametrize("layout,length", [
    ("monochrome", 1), ("rgb", 3), ("rgba", 4), ("gradient", 3),
])
def test_pixel_length(layout, length):
    from perlinforge.channels import ChannelStack
    stack = ChannelStack(4, 4, layout=layout, rng=2)
    assert len(stack.get_pixel(1, 2)) == length


def test_channels_are_independent():
    from perlinforge.channels import ChannelStack
    stack = ChannelStack(16, 16, layout="rgb", rng=8)
    red, green, blue = stack.channels
    assert not np.array_equal(red, green)
    assert not np.array_equal(green, blue)


def test_gradient_pixels_come_from_ramp():
    from perlinforge.channels import ChannelStack
    stack = ChannelStack(8, 8, layout="gradient",
                         gradient=["#000000", "#FF0000", "#00FF00"], rng=4)
    ramp = {tuple(int(c) for c in row) for row in stack.layout.ramp}
    for x in range(8):
        for y in range(8):
            assert tuple(stack.get_pixel(x, y)) in ramp


def test_gradient_default_stops():
    from perlinforge.channels import ChannelStack
    from perlinforge.color import DEFAULT_GRADIENT
    stack = ChannelStack(2, 2, layout="gradient", rng=1)
    assert stack.layout.stops == DEFAULT_GRADIENT
    assert stack.layout.ramp[0].tolist() == [0x00, 0x57, 0xB7]


def test_out_of_range_pixel():
    from perlinforge.channels import ChannelStack
    from perlinforge.errors import IndexOutOfRange
    stack = ChannelStack(3, 2, rng=1)
    for x, y in [(3, 0), (0, 2), (-1, 0), (0, -1),
                 (1.5, 1), (0, 0.0), (True, 0)]:
        with pytest.raises(IndexOutOfRange):
            stack.get_pixel(x, y)
    assert stack.get_pixel(np.int64(2), np.int64(1)) == stack.get_pixel(2, 1)
    with pytest.raises(IndexError):
        stack.get_rgb(5, 5)


def test_blend_requires_background_and_opacity():
    from perlinforge.channels import ChannelStack
    assert ChannelStack(2, 2, blend={"opacity": 0.5}, rng=1).has_blend is False
    assert ChannelStack(2, 2, rng=1).has_blend is False
    stack = ChannelStack(2, 2, blend={"background": "#000", "opacity": 0.5},
                         rng=1)
    assert stack.has_blend
    assert stack.blend.background_rgb == (0, 0, 0)


def test_fully_transparent_blend_is_background():
    from perlinforge.channels import ChannelStack
    from perlinforge.pixel import RGBA
    stack = ChannelStack(4, 4, layout="monochrome",
                         blend={"background": "#102030", "opacity": 0},
                         rng=6)
    for x in range(4):
        for y in range(4):
            assert stack.get_pixel(x, y) == RGBA(0x10, 0x20, 0x30, 0)


def test_opaque_blend_keeps_foreground():
    from perlinforge.channels import ChannelStack
    from perlinforge.pixel import normalize
    plain = ChannelStack(4, 4, layout="rgba", rng=10)
    blended = ChannelStack(4, 4, layout="rgba", rng=10,
                           blend={"background": "#FFFFFF", "opacity": 1})
    for x in range(4):
        for y in range(4):
            assert blended.get_pixel(x, y) == normalize(plain.get_pixel(x, y))


@pytest.mark.parametrize("kwargs", [
    {"layout": "cmyk"},
    {"layout": "gradient", "gradient": []},
    {"layout": "gradient", "gradient": ["#12345G"]},
    {"blend": {"background": "#FFFFFF", "opacity": 1.5}},
    {"blend": {"background": "white", "opacity": 0.5}},
])
def test_invalid_configuration(kwargs):
    from perlinforge.channels import ChannelStack
    from perlinforge.errors import InvalidConfiguration
    with pytest.raises(InvalidConfiguration):
        ChannelStack(4, 4, rng=1, **kwargs)


@pytest.mark.parametrize("layout,blend,mode", [
    ("monochrome", None, "L"),
    ("rgb", None, "RGB"),
    ("gradient", None, "RGB"),
    ("rgba", None, "RGBA"),
    ("monochrome", {"background": "#FFF", "opacity": 0.5}, "RGBA"),
])
def test_to_image_mode(layout, blend, mode):
    from perlinforge.channels import ChannelStack
    image = ChannelStack(6, 3, layout=layout, blend=blend, rng=1).to_image()
    assert image.mode == mode
    assert image.size == (6, 3)


def test_to_array_is_row_major():
    from perlinforge.channels import ChannelStack
    stack = ChannelStack(5, 3, layout="rgb", rng=12)
    arr = stack.to_array()
    assert arr.shape == (3, 5, 3)
    assert tuple(arr[2, 4]) == tuple(stack.get_pixel(4, 2))


def test_rebuild_redraws_channels():
    from perlinforge.channels import ChannelStack
    stack = ChannelStack(16, 16, layout="monochrome", rng=3)
    before = stack.channels[0]
    stack.build()
    assert not np.array_equal(before, stack.channels[0])


def test_text_forms():
    from perlinforge.channels import ChannelStack
    stack = ChannelStack(3, 3, layout="rgb", rng=5)
    r, g, b = stack.get_pixel(1, 1)
    assert stack.get_rgb(1, 1) == f"rgb({r}, {g}, {b})"
    assert stack.get_rgba(1, 1) == f"rgba({r}, {g}, {b}, 1)"
    assert stack.get_rgba(1, 1, alpha=0.5) == f"rgba({r}, {g}, {b}, 0.5)"
    assert stack.get_mono(1, 1) == f"rgb({r}, {r}, {r})"


# ---------------------------------------------------------------------------
# Pixels
# ---------------------------------------------------------------------------

def test_normalize_fills_from_red():
    from perlinforge.pixel import RGB, RGBA, Mono, normalize
    assert normalize(Mono(7)) == RGBA(7, 7, 7, 255)
    assert normalize(RGB(1, 2, 3)) == RGBA(1, 2, 3, 255)
    assert normalize(RGBA(1, 2, 3, 4)) == RGBA(1, 2, 3, 4)


def test_blend_mixes_and_rounds():
    from perlinforge.pixel import RGB, RGBA, blend
    assert blend(RGB(200, 100, 0), (0, 0, 0), 0.5) == RGBA(100, 50, 0, 128)
    assert blend(RGB(1, 2, 3), (9, 9, 9), 1) == RGBA(1, 2, 3, 255)
    assert blend(RGB(1, 2, 3), (9, 8, 7), 0) == RGBA(9, 8, 7, 0)


def test_pixel_text():
    from perlinforge.pixel import RGB, RGBA, Mono, to_mono, to_rgb, to_rgba
    assert to_mono(Mono(5)) == "rgb(5, 5, 5)"
    assert to_rgb(Mono(9)) == "rgb(9, 9, 9)"
    assert to_rgba(RGB(1, 2, 3)) == "rgba(1, 2, 3, 1)"
    assert to_rgba(RGBA(1, 2, 3, 51)) == "rgba(1, 2, 3, 0.2)"
    assert to_rgba(RGBA(1, 2, 3, 51), alpha=0.75) == "rgba(1, 2, 3, 0.75)"


def test_rgba_alpha_keeps_full_precision():
    from perlinforge.pixel import RGBA, to_rgba
    assert (to_rgba(RGBA(1, 2, 3, 128), alpha=0.123456789)
            == "rgba(1, 2, 3, 0.123456789)")
    assert to_rgba(RGBA(1, 2, 3, 128)) == f"rgba(1, 2, 3, {128 / 255})"
    assert to_rgba(RGBA(1, 2, 3, 128), alpha=0) == "rgba(1, 2, 3, 0)"


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------

def test_hex_to_rgba():
    from perlinforge.color import hex_to_rgb, hex_to_rgba
    assert hex_to_rgba("#0057B7") == (0, 87, 183)
    assert hex_to_rgba("fff") == (255, 255, 255)
    assert hex_to_rgba("#11223344") == (0x11, 0x22, 0x33, 0x44)
    assert hex_to_rgba("#abcd") == (0xAA, 0xBB, 0xCC, 0xDD)
    assert hex_to_rgb("#11223344") == (0x11, 0x22, 0x33)


@pytest.mark.parametrize("code", ["", "#", "#12345", "zzzzzz", "#+1+2+3", None])
def test_hex_to_rgba_rejects_malformed(code):
    from perlinforge.color import hex_to_rgba
    from perlinforge.errors import InvalidConfiguration
    with pytest.raises(InvalidConfiguration):
        hex_to_rgba(code)


def test_single_stop_ramp():
    from perlinforge.color import build_ramp
    ramp = build_ramp(["#336699"], size=256)
    assert ramp.shape == (256, 3)
    assert (ramp == [0x33, 0x66, 0x99]).all()


def test_wrapped_ramp_is_cyclic():
    from perlinforge.color import build_ramp
    ramp = build_ramp(["#000000", "#FFFFFF"], size=256, wrap=True)
    assert ramp[0].tolist() == [0, 0, 0]
    assert ramp[128].tolist() == [255, 255, 255]
    assert ramp[64].tolist() == [128, 128, 128]
    assert ramp[255].tolist() == [2, 2, 2]


def test_unwrapped_ramp_ends_on_last_stop():
    from perlinforge.color import build_ramp
    ramp = build_ramp(["#FF0000", "#00FF00", "#0000FF"], size=256, wrap=False)
    assert ramp[0].tolist() == [255, 0, 0]
    assert ramp[-1].tolist() == [0, 0, 255]


def test_empty_ramp_rejected():
    from perlinforge.color import build_ramp
    from perlinforge.errors import InvalidConfiguration
    with pytest.raises(InvalidConfiguration):
        build_ramp([])
