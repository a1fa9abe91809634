from __future__ import annotations
import logging
import math
from typing import Optional, Tuple, List
import numpy as np
from backend import Backend
from colors import blend_colors, unit_to_rgba
from drawing_context import DrawingContext, TransformMatrix

logger = logging.getLogger(__name__)

MAX_ARC_SEGMENTS = 1024


def subdivide_cubic_bezier(p0: Tuple[float, float], p1: Tuple[float, float],
                           p2: Tuple[float, float], p3: Tuple[float, float],
                           tolerance: float = 0.5) -> List[Tuple[float, float]]:
    points = [p0]

    def midpoint(a, b):
        return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)

    def flatness(p0, p1, p2, p3):
        ux = 3 * p1[0] - 2 * p0[0] - p3[0]
        uy = 3 * p1[1] - 2 * p0[1] - p3[1]
        vx = 3 * p2[0] - 2 * p3[0] - p0[0]
        vy = 3 * p2[1] - 2 * p3[1] - p0[1]
        return max(ux * ux + uy * uy, vx * vx + vy * vy)

    def subdivide(p0, p1, p2, p3, depth=0):
        if depth > 10:
            points.append(p3)
            return

        if flatness(p0, p1, p2, p3) < tolerance * tolerance:
            points.append(p3)
            return

        m01 = midpoint(p0, p1)
        m12 = midpoint(p1, p2)
        m23 = midpoint(p2, p3)
        m012 = midpoint(m01, m12)
        m123 = midpoint(m12, m23)
        m0123 = midpoint(m012, m123)

        subdivide(p0, m01, m012, m0123, depth + 1)
        subdivide(m0123, m123, m23, p3, depth + 1)

    subdivide(p0, p1, p2, p3)
    return points


def arc_segment_count(sweep: float, device_radius: float, tolerance: float) -> int:
    if device_radius <= tolerance:
        step = math.pi / 2
    else:
        step = 2 * math.acos(1 - tolerance / device_radius)
    return min(MAX_ARC_SEGMENTS, max(4, int(math.ceil(abs(sweep) / step))))


class RasterBackend(Backend):
    """Backend that fills paths into an RGBA numpy buffer (nonzero winding)."""

    def __init__(self, width: int, height: int,
                 background_color: Tuple[int, int, int] = (255, 255, 255),
                 anti_aliasing: bool = False, tolerance: float = 0.25):
        self.width = width
        self.height = height
        self.anti_aliasing = anti_aliasing
        self.tolerance = tolerance

        self.buffer = np.zeros((height, width, 4), dtype=np.uint8)
        self.buffer[:, :, 0] = background_color[0]
        self.buffer[:, :, 1] = background_color[1]
        self.buffer[:, :, 2] = background_color[2]
        self.buffer[:, :, 3] = 255

        self.context_stack = [DrawingContext()]
        self.subpaths: List[List[Tuple[float, float]]] = []
        self.current_point: Optional[Tuple[float, float]] = None
        self.subpath_start: Optional[Tuple[float, float]] = None

    def _get_current_context(self) -> DrawingContext:
        return self.context_stack[-1]

    def _to_device(self, x: float, y: float) -> Tuple[float, float]:
        return self._get_current_context().transform.transform_point(x, y)

    def save(self):
        self.context_stack.append(self._get_current_context().push())

    def restore(self):
        if len(self.context_stack) > 1:
            self.context_stack.pop()
        else:
            logger.warning("restore() without a matching save() ignored")

    def translate(self, tx, ty):
        self._get_current_context().apply(TransformMatrix.translate(tx, ty))

    def rotate(self, angle):
        self._get_current_context().apply(TransformMatrix.rotate(angle))

    def scale(self, sx, sy):
        self._get_current_context().apply(TransformMatrix.scale(sx, sy))

    def set_source_rgb(self, r, g, b):
        self._get_current_context().fill_color = unit_to_rgba(r, g, b)

    def _start_subpath(self, point: Tuple[float, float]):
        self.subpaths.append([point])
        self.current_point = point
        self.subpath_start = point

    def _line_to_device(self, point: Tuple[float, float]):
        if self.current_point is None:
            self._start_subpath(point)
            return
        self.subpaths[-1].append(point)
        self.current_point = point

    def move_to(self, x, y):
        self._start_subpath(self._to_device(x, y))

    def line_to(self, x, y):
        self._line_to_device(self._to_device(x, y))

    def curve_to(self, x1, y1, x2, y2, x3, y3):
        if self.current_point is None:
            self.move_to(x1, y1)
        points = subdivide_cubic_bezier(self.current_point, self._to_device(x1, y1),
                                        self._to_device(x2, y2), self._to_device(x3, y3),
                                        self.tolerance)
        for point in points[1:]:
            self._line_to_device(point)

    def _arc_points(self, xc, yc, radius, angle1, angle2):
        sweep = angle2 - angle1
        device_radius = abs(radius) * self._get_current_context().transform.max_scale()
        segments = arc_segment_count(sweep, device_radius, self.tolerance)

        for i in range(segments + 1):
            theta = angle1 + sweep * i / segments
            x = xc + radius * math.cos(theta)
            y = yc + radius * math.sin(theta)
            self._line_to_device(self._to_device(x, y))

    def arc(self, xc, yc, radius, angle1, angle2):
        while angle2 < angle1:
            angle2 += 2 * math.pi
        self._arc_points(xc, yc, radius, angle1, angle2)

    def arc_negative(self, xc, yc, radius, angle1, angle2):
        while angle2 > angle1:
            angle2 -= 2 * math.pi
        self._arc_points(xc, yc, radius, angle1, angle2)

    def close_path(self):
        if self.current_point is None:
            return
        self.subpaths[-1].append(self.subpath_start)
        # drawing after a close continues from the sub-path start
        self._start_subpath(self.subpath_start)

    def new_path(self):
        self.subpaths = []
        self.current_point = None
        self.subpath_start = None

    def _edges(self) -> List[Tuple[float, float, float, float]]:
        edges = []
        for points in self.subpaths:
            if len(points) < 2:
                continue
            for i in range(len(points)):
                x0, y0 = points[i - 1]
                x1, y1 = points[i]
                if y0 != y1:
                    edges.append((x0, y0, x1, y1))
        return edges

    def _winding_mask(self, edges, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        winding = np.zeros(xs.shape, dtype=np.int32)
        for x0, y0, x1, y1 in edges:
            cross = (x1 - x0) * (ys - y0) - (y1 - y0) * (xs - x0)
            upward = (y0 <= ys) & (y1 > ys) & (cross > 0)
            downward = (y1 <= ys) & (y0 > ys) & (cross < 0)
            winding += upward.astype(np.int32)
            winding -= downward.astype(np.int32)
        return winding != 0

    def fill(self):
        edges = self._edges()
        color = self._get_current_context().fill_color
        self.new_path()

        if not edges:
            return

        all_x = [x for edge in edges for x in (edge[0], edge[2])]
        all_y = [y for edge in edges for y in (edge[1], edge[3])]
        min_x = max(0, int(math.floor(min(all_x))))
        max_x = min(self.width, int(math.ceil(max(all_x))) + 1)
        min_y = max(0, int(math.floor(min(all_y))))
        max_y = min(self.height, int(math.ceil(max(all_y))) + 1)

        if min_x >= max_x or min_y >= max_y:
            return

        px, py = np.meshgrid(np.arange(min_x, max_x, dtype=np.float64),
                             np.arange(min_y, max_y, dtype=np.float64))

        samples = 2 if self.anti_aliasing else 1
        coverage = np.zeros(px.shape, dtype=np.float64)
        for sy in range(samples):
            for sx in range(samples):
                mask = self._winding_mask(edges, px + (sx + 0.5) / samples, py + (sy + 0.5) / samples)
                coverage += mask
        coverage /= samples * samples

        rows, cols = np.nonzero(coverage > 0)
        if rows.size == 0:
            return

        ys = rows + min_y
        xs = cols + min_x
        self.buffer[ys, xs] = blend_colors(color, coverage[rows, cols], self.buffer[ys, xs])

    def get_rgb_buffer(self) -> np.ndarray:
        return self.buffer[:, :, 0:3].copy()

    def get_rgba_buffer(self) -> np.ndarray:
        return self.buffer.copy()
