"""Shared test fixtures."""

from __future__ import annotations

import pytest

from backend import RecordingBackend


CIRCLE_AND_PATH_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20">
  <!-- red dot, then a green triangle -->
  <circle cx="5" cy="5" r="3" style="fill:#ff0000"/>
  <path d="M0 0 L10 0 L10 10 Z" style="fill:#00ff00"/>
</svg>'''

TRANSFORMED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="40" height="40">
  <path d="M0 0 h10 v10 h-10 z" transform="translate(10 20) rotate(45)" style="stroke:none;fill:#abc"/>
</svg>'''

UNKNOWN_COMMAND_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20">
  <path d="M0 0 Q1 1 2 2 L5 5 L0 5 Z" style="fill:#0000ff"/>
  <circle cx="10" cy="10" r="2" style="fill:#ff0000"/>
</svg>'''

MALFORMED_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20">
  <path d="M0 0 A5 5 0 0 1" style="fill:#0000ff"/>
  <circle cx="10" cy="10" r="2" style="fill:#ff0000"/>
</svg>'''

MISSING_RADIUS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20">
  <circle cx="10" cy="10"/>
</svg>'''

MIXED_ELEMENTS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100" width="200" height="100">
  <rect x="0" y="0" width="10" height="10"/>
  <circle cx="50" cy="50" r="10"/>
  <g><circle cx="1" cy="1" r="1"/></g>
</svg>'''


@pytest.fixture
def recorder() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def circle_and_path_svg() -> str:
    return CIRCLE_AND_PATH_SVG
