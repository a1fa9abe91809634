"""Tests for the shape model."""

import math

import pytest

from colors import Color
from shapes import Circle, Path


def test_circle_draw_sequence(recorder):
    circle = Circle(5.0, 5.0, 3.0)
    assert circle.draw(recorder)
    assert recorder.calls == [
        ("save",),
        ("set_source_rgb", 0.0, 0.0, 0.0),
        ("arc", 5.0, 5.0, 3.0, 0.0, 2 * math.pi),
        ("fill",),
        ("restore",),
    ]


def test_translate_is_applied_before_rotate(recorder):
    circle = Circle(0.0, 0.0, 1.0)
    circle.set_rotate(90)
    circle.set_translate(1.0, 2.0)
    circle.draw(recorder)

    assert recorder.names()[:3] == ["save", "translate", "rotate"]
    assert recorder.calls[1] == ("translate", 1.0, 2.0)
    assert recorder.calls[2] == ("rotate", pytest.approx(math.pi / 2))


def test_rotate_stored_in_radians():
    path = Path("M0 0")
    path.set_rotate(180)
    assert path.rotate.angle == pytest.approx(math.pi)


def test_setters_last_write_wins(recorder):
    circle = Circle(0.0, 0.0, 1.0)
    circle.set_color(Color(255, 0, 0))
    circle.set_color(Color(0, 0, 255))
    circle.set_translate(1.0, 1.0)
    circle.set_translate(2.0, 3.0)
    circle.draw(recorder)

    assert ("set_source_rgb", 0.0, 0.0, 1.0) in recorder.calls
    assert ("translate", 2.0, 3.0) in recorder.calls
    assert ("translate", 1.0, 1.0) not in recorder.calls


def test_path_draw_sequence(recorder):
    path = Path("M0 0 L10 0 L10 10 Z")
    path.set_color(Color(0, 255, 0))
    assert path.draw(recorder)
    assert recorder.names() == [
        "save", "set_source_rgb", "move_to", "line_to", "line_to",
        "close_path", "close_path", "fill", "restore",
    ]


def test_malformed_path_is_skipped_and_state_restored(recorder):
    path = Path("M0 0 L1")
    assert not path.draw(recorder)

    assert "fill" not in recorder.names()
    assert recorder.names()[-2:] == ["new_path", "restore"]
    assert recorder.depth == 0


def test_drawing_is_repeatable():
    from backend import RecordingBackend

    path = Path("M0 0 l5 0 a2 2 0 0 1 0 4 z")
    path.set_translate(3.0, 4.0)
    first = RecordingBackend()
    second = RecordingBackend()
    path.draw(first)
    path.draw(second)
    assert first.calls == second.calls


def test_non_finite_arc_argument_skips_shape(recorder):
    huge = "1" * 400
    path = Path(f"M0 0 A5 5 {huge} 0 1 10 0")
    assert not path.draw(recorder)

    assert "fill" not in recorder.names()
    assert recorder.names()[-2:] == ["new_path", "restore"]
    assert recorder.depth == 0


def test_value_error_in_geometry_is_contained(recorder):
    class BrokenCircle(Circle):
        def draw_geometry(self, backend, options):
            raise ValueError("math domain error")

    assert not BrokenCircle(0.0, 0.0, 1.0).draw(recorder)
    assert recorder.depth == 0
