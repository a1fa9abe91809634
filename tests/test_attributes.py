"""Tests for transform/style matchers and the Color type."""

import numpy as np
import pytest

from attributes import expand_shorthand, match_fill_color, match_rotate, match_translate
from colors import Color, blend_colors, unit_to_rgba
from errors import InvalidColor


def test_shorthand_interleaves_zeros():
    assert expand_shorthand("abc") == "a0b0c0"
    assert match_fill_color("fill:#abc") == Color(0xA0, 0xB0, 0xC0)


def test_shorthand_css_duplicate():
    assert expand_shorthand("abc", "duplicate") == "aabbcc"
    assert match_fill_color("fill:#abc", "duplicate") == Color(0xAA, 0xBB, 0xCC)


def test_six_digit_fill():
    color = match_fill_color("stroke:none; fill: #ff0000")
    assert color.unit() == (1.0, 0.0, 0.0)


def test_fill_of_wrong_length_is_invalid():
    with pytest.raises(InvalidColor):
        match_fill_color("fill:#abcd")


def test_no_fill_color():
    assert match_fill_color(None) is None
    assert match_fill_color("") is None
    assert match_fill_color("stroke:#ff0000") is None


def test_match_translate():
    assert match_translate("translate(10 20)") == (10.0, 20.0)
    assert match_translate("translate(1.5,-2)") == (1.5, -2.0)
    assert match_translate("rotate(45) translate(1 2) translate(3 4)") == (1.0, 2.0)
    assert match_translate("scale(2)") is None
    assert match_translate(None) is None


def test_match_rotate():
    assert match_rotate("rotate(45)") == 45.0
    assert match_rotate("translate(1 2) rotate(-30)") == -30.0
    assert match_rotate("rotate(1.2.3)") is None
    assert match_rotate("") is None


def test_color_from_hex():
    color = Color.from_hex("#FF8000")
    assert (color.r, color.g, color.b) == (255, 128, 0)
    assert color.hex_code == "FF8000"

    with pytest.raises(InvalidColor):
        Color.from_hex("abc")
    with pytest.raises(InvalidColor):
        Color.from_hex("zzzzzz")


def test_hex_code_is_zero_padded():
    assert Color(1, 2, 3).hex_code == "010203"


def test_lighten_and_darken():
    color = Color(200, 100, 50)
    assert color.darken(0.5) == Color(100, 50, 25)
    assert color.darken(1.0) == Color(0, 0, 0)
    assert color.lighten(1.0) == Color(255, 255, 255)
    assert color.lighten(0.0) == color


def test_unit_to_rgba():
    assert unit_to_rgba(1.0, 0.0, 0.5) == (255, 0, 128, 255)


def test_blend_colors():
    background = np.array([[255, 255, 255, 255], [0, 0, 0, 255]], dtype=np.uint8)
    out = blend_colors((255, 0, 0, 255), np.array([1.0, 0.5]), background)
    assert out[0].tolist() == [255, 0, 0, 255]
    assert out[1].tolist() == [128, 0, 0, 255]
