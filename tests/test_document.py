"""Tests for document assembly and drawing."""

import math

import pytest

from backend import RecordingBackend
from colors import Color
from config import RenderOptions
from document import Document
from errors import InvalidAttribute, InvalidColor, MissingAttribute
from shapes import Circle, Path
from tests.conftest import (
    MALFORMED_PATH_SVG,
    MISSING_RADIUS_SVG,
    MIXED_ELEMENTS_SVG,
    TRANSFORMED_SVG,
    UNKNOWN_COMMAND_SVG,
)


def test_assembles_shapes_in_order(circle_and_path_svg):
    document = Document.from_string(circle_and_path_svg)

    assert [type(shape) for shape in document.shapes] == [Circle, Path]
    circle, path = document.shapes
    assert (circle.cx, circle.cy, circle.r) == (5.0, 5.0, 3.0)
    assert circle.color == Color(255, 0, 0)
    assert path.operations == "M0 0 L10 0 L10 10 Z"
    assert path.color == Color(0, 255, 0)
    assert document.metadata.get("xml") is not None


def test_end_to_end_call_sequence(circle_and_path_svg, recorder):
    document = Document.from_string(circle_and_path_svg)
    assert document.draw(recorder) == []

    names = recorder.names()
    colors = [call[1:] for call in recorder.calls if call[0] == "set_source_rgb"]
    assert colors == [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert names.count("arc") == 1
    assert names.count("fill") == 2

    first_fill = names.index("fill")
    assert names.index("set_source_rgb") < names.index("arc") < first_fill
    assert recorder.calls[names.index("arc")] == ("arc", 5.0, 5.0, 3.0, 0.0, 2 * math.pi)

    second_shape = names[first_fill + 1:]
    assert second_shape == [
        "restore", "save", "set_source_rgb", "move_to", "line_to", "line_to",
        "close_path", "close_path", "fill", "restore",
    ]
    assert recorder.depth == 0


def test_unknown_command_does_not_stop_document(recorder):
    document = Document.from_string(UNKNOWN_COMMAND_SVG)
    assert document.draw(recorder) == []
    assert recorder.names().count("fill") == 2


def test_malformed_path_skips_only_that_shape(recorder):
    document = Document.from_string(MALFORMED_PATH_SVG)
    assert document.draw(recorder) == [0]

    names = recorder.names()
    assert names.count("fill") == 1
    assert "new_path" in names
    assert recorder.calls[-3] == ("arc", 10.0, 10.0, 2.0, 0.0, 2 * math.pi)
    assert recorder.depth == 0


def test_missing_required_attribute():
    with pytest.raises(MissingAttribute) as excinfo:
        Document.from_string(MISSING_RADIUS_SVG)
    assert excinfo.value.attribute == "r"


def test_invalid_numeric_attribute():
    svg = '<svg width="10" height="10"><circle cx="abc" cy="1" r="1"/></svg>'
    with pytest.raises(InvalidAttribute):
        Document.from_string(svg)


def test_negative_radius_rejected():
    svg = '<svg width="10" height="10"><circle cx="1" cy="1" r="-1"/></svg>'
    with pytest.raises(InvalidAttribute):
        Document.from_string(svg)


def test_path_requires_d():
    with pytest.raises(MissingAttribute):
        Document.from_string('<svg width="10" height="10"><path style="fill:#000000"/></svg>')


def test_invalid_fill_color():
    svg = '<svg width="10" height="10"><circle cx="1" cy="1" r="1" style="fill:#abcd"/></svg>'
    with pytest.raises(InvalidColor):
        Document.from_string(svg)


def test_transform_and_shorthand_color():
    document = Document.from_string(TRANSFORMED_SVG)
    path = document.shapes[0]

    assert (path.translate.x, path.translate.y) == (10.0, 20.0)
    assert path.rotate.angle == pytest.approx(math.radians(45))
    assert path.color == Color(0xA0, 0xB0, 0xC0)


def test_css_shorthand_option():
    document = Document.from_string(TRANSFORMED_SVG, RenderOptions(color_shorthand="duplicate"))
    assert document.shapes[0].color == Color(0xAA, 0xBB, 0xCC)


def test_only_direct_circle_and_path_children():
    document = Document.from_string(MIXED_ELEMENTS_SVG)

    assert len(document.shapes) == 1
    assert document.is_valid()
    assert any("rect" in warning and "g" in warning for warning in document.validation_warnings)


def test_viewport_and_viewbox():
    document = Document.from_string(MIXED_ELEMENTS_SVG)

    assert (document.viewport_width, document.viewport_height) == (200.0, 100.0)
    assert document.viewbox == (0.0, 0.0, 100.0, 100.0)
    assert document.viewbox_transform() == pytest.approx((1.0, 1.0, 50.0, 0.0))


def test_apply_viewbox(recorder):
    document = Document.from_string(MIXED_ELEMENTS_SVG)
    document.apply_viewbox(recorder, 400, 200)
    assert recorder.calls == [("translate", 100.0, 0.0), ("scale", 2.0, 2.0)]


def test_default_viewport_without_size():
    document = Document.from_string('<svg><circle cx="1" cy="1" r="1"/></svg>')
    assert (document.viewport_width, document.viewport_height) == (100.0, 100.0)
    assert document.viewbox_transform() == (1.0, 1.0, 0.0, 0.0)


def test_missing_svg_root_is_invalid():
    document = Document.from_string("<html><body/></html>")
    assert not document.is_valid()
    assert document.shapes == []
    assert "No root <svg> element found" in document.validation_report()[1]


def test_attribute_quoting_and_entities():
    svg = "<svg width='10' height='10'><path id='a&amp;b' d='M0 0 L5 5 L0 5' style=\"fill:#0000ff\"/></svg>"
    document = Document.from_string(svg)
    assert document.shapes[0].operations == "M0 0 L5 5 L0 5"
    assert document.shapes[0].color == Color(0, 0, 255)
    assert document.svg_tree.children[0].get_attribute("id") == "a&b"


def test_circle_units():
    document = Document.from_string('<svg width="10" height="10"><circle cx="1in" cy="0" r="2px"/></svg>')
    circle = document.shapes[0]
    assert (circle.cx, circle.r) == (96.0, 2.0)


def test_drawing_twice_is_identical(circle_and_path_svg):
    document = Document.from_string(circle_and_path_svg)
    first = RecordingBackend()
    second = RecordingBackend()
    document.draw(first)
    document.draw(second)
    assert first.calls == second.calls
