from __future__ import annotations
import logging
import math
from backend import Backend
from colors import Color
from config import RenderOptions
from errors import SvgError
from path_interpreter import PathInterpreter

logger = logging.getLogger(__name__)


class Translate:
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def draw(self, backend: Backend):
        backend.translate(self.x, self.y)


class Rotate:
    def __init__(self, angle_degrees: float):
        self.angle = math.radians(angle_degrees)

    def draw(self, backend: Backend):
        backend.rotate(self.angle)


class Shape:
    """A filled element with an optional translate, rotate and fill color.

    ``draw`` brackets everything in save/restore, so the backend state is
    left exactly as found even when the geometry turns out to be malformed.
    """

    kind = 'shape'

    def __init__(self):
        self.translate: Translate | None = None
        self.rotate: Rotate | None = None
        self.color = Color()

    def set_translate(self, x: float, y: float):
        self.translate = Translate(x, y)

    def set_rotate(self, angle_degrees: float):
        self.rotate = Rotate(angle_degrees)

    def set_color(self, color: Color):
        self.color = color

    def handle_transform(self, backend: Backend):
        if self.translate:
            self.translate.draw(backend)
        if self.rotate:
            self.rotate.draw(backend)

    def draw(self, backend: Backend, options: RenderOptions = None) -> bool:
        backend.save()
        try:
            self.handle_transform(backend)
            backend.set_source_rgb(*self.color.unit())
            self.draw_geometry(backend, options or RenderOptions())
            backend.fill()
            return True
        except (SvgError, ArithmeticError, ValueError) as e:
            logger.warning("Skipping %s: %s", self.describe(), e)
            backend.new_path()
            return False
        finally:
            backend.restore()

    def draw_geometry(self, backend: Backend, options: RenderOptions):
        raise NotImplementedError

    def describe(self) -> str:
        return f"<{self.kind}>"


class Circle(Shape):
    kind = 'circle'

    def __init__(self, cx: float, cy: float, r: float):
        super().__init__()
        self.cx = cx
        self.cy = cy
        self.r = r

    def draw_geometry(self, backend: Backend, options: RenderOptions):
        backend.arc(self.cx, self.cy, self.r, 0.0, 2 * math.pi)

    def describe(self) -> str:
        return f"<circle cx={self.cx:g} cy={self.cy:g} r={self.r:g}>"


class Path(Shape):
    kind = 'path'

    def __init__(self, operations: str):
        super().__init__()
        self.operations = operations

    def draw_geometry(self, backend: Backend, options: RenderOptions):
        PathInterpreter(backend, options).run(self.operations)

    def describe(self) -> str:
        preview = self.operations if len(self.operations) <= 40 else self.operations[:37] + '...'
        return f"<path d=\"{preview}\">"
