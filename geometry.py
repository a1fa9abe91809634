from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

INCHES_TO_PX = 96.0
CM_TO_PX = INCHES_TO_PX / 2.54
MM_TO_PX = CM_TO_PX / 10
PT_TO_PX = INCHES_TO_PX / 72.0
PC_TO_PX = PT_TO_PX * 12

UNIT_SCALE = {
    '': 1.0,
    'px': 1.0,
    'pt': PT_TO_PX,
    'pc': PC_TO_PX,
    'in': INCHES_TO_PX,
    'cm': CM_TO_PX,
    'mm': MM_TO_PX,
}

TWO_PI = 2.0 * math.pi
FLAG_THRESHOLD = 0.5

number_pattern = re.compile(r'^([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)$')


class Point(NamedTuple):
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> 'Point':
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class ArcCenter:
    cx: float
    cy: float
    start_angle: float
    extent: float
    rx: float
    ry: float

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.extent


def parse_number_with_unit(value: str) -> Optional[tuple[float, str]]:
    if not value or not isinstance(value, str):
        return None

    match = number_pattern.match(value.strip())
    if not match:
        return None

    return (float(match.group(1)), match.group(2).lower())


def normalize_length(value: str) -> Optional[float]:
    """Convert an absolute SVG length ("12", "3mm", "1in") to user units.

    Returns None when the value is not a number or uses a relative unit
    (%, em, ex) that needs a viewport or font to resolve.
    """
    parsed = parse_number_with_unit(value)
    if parsed is None:
        return None

    num_value, unit = parsed
    scale = UNIT_SCALE.get(unit)
    if scale is None:
        return None
    return num_value * scale


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


def endpoint_to_center(x1: float, y1: float, x2: float, y2: float,
                       fa: float, fs: float, rx: float, ry: float,
                       phi: float) -> Optional[ArcCenter]:
    """Convert an SVG endpoint-parameterized arc to center form.

    Implements the conversion from the SVG implementation notes (F.6.5).
    ``phi`` is the x-axis rotation in radians; the flags are read as
    booleans with 0.5 as the threshold. The returned angles live in the
    ellipse's unit-circle frame: a caller translates to the center, rotates
    by ``phi``, scales by the returned radii and draws a unit arc from
    ``start_angle`` through ``extent``.

    Returns None when no arc exists: the endpoints coincide, or a radius
    is zero (SVG then draws a straight line).
    """
    if x1 == x2 and y1 == y2:
        return None

    rx = math.fabs(rx)
    ry = math.fabs(ry)
    if rx == 0.0 or ry == 0.0:
        return None

    large_arc = fa >= FLAG_THRESHOLD
    sweep = fs >= FLAG_THRESHOLD

    dx2 = (x1 - x2) / 2.0
    dy2 = (y1 - y2) / 2.0
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    # endpoint midpoint vector in the unrotated ellipse frame
    x1p = cos_phi * dx2 + sin_phi * dy2
    y1p = -sin_phi * dx2 + cos_phi * dy2

    prx = rx * rx
    pry = ry * ry
    px1 = x1p * x1p
    py1 = y1p * y1p
    # chord too short to square without underflow
    if px1 + py1 == 0.0:
        return None

    radii_check = px1 / prx + py1 / pry
    if radii_check > 1.0:
        scale = math.sqrt(radii_check)
        rx *= scale
        ry *= scale
        prx = rx * rx
        pry = ry * ry

    sign = -1.0 if large_arc == sweep else 1.0
    denominator = prx * py1 + pry * px1
    if denominator == 0.0:
        return None
    sq = (prx * pry - prx * py1 - pry * px1) / denominator
    coef = sign * math.sqrt(max(0.0, sq))
    cx1 = coef * (rx * y1p / ry)
    cy1 = coef * -(ry * x1p / rx)

    cx = (x1 + x2) / 2.0 + (cos_phi * cx1 - sin_phi * cy1)
    cy = (y1 + y2) / 2.0 + (sin_phi * cx1 + cos_phi * cy1)

    ux = (x1p - cx1) / rx
    uy = (y1p - cy1) / ry
    vx = (-x1p - cx1) / rx
    vy = (-y1p - cy1) / ry

    n = math.hypot(ux, uy)
    if n == 0.0:
        return None
    start_sign = -1.0 if uy < 0 else 1.0
    start_angle = start_sign * math.acos(_clamp_unit(ux / n))

    n = math.sqrt((ux * ux + uy * uy) * (vx * vx + vy * vy))
    if n == 0.0:
        return None
    p = ux * vx + uy * vy
    extent_sign = -1.0 if ux * vy - uy * vx < 0 else 1.0
    extent = extent_sign * math.acos(_clamp_unit(p / n))

    if not sweep and extent > 0:
        extent -= TWO_PI
    elif sweep and extent < 0:
        extent += TWO_PI

    # fmod keeps the sign, so the extent still agrees with the sweep flag
    extent = math.fmod(extent, TWO_PI)
    start_angle = math.fmod(start_angle, TWO_PI)

    return ArcCenter(cx, cy, start_angle, extent, rx, ry)


def point_on_arc(arc: ArcCenter, phi: float, angle: float) -> Point:
    """Map a unit-circle angle of ``arc`` back to document coordinates."""
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)
    ex = arc.rx * math.cos(angle)
    ey = arc.ry * math.sin(angle)
    return Point(arc.cx + cos_phi * ex - sin_phi * ey,
                 arc.cy + sin_phi * ex + cos_phi * ey)
