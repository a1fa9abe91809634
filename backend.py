from __future__ import annotations


class Backend:
    """Primitive drawing calls the shapes are rendered through.

    Semantics follow cairo: transforms compose onto the current user space,
    ``save``/``restore`` bracket the transform and fill color, ``arc`` sweeps
    toward increasing angles and ``arc_negative`` toward decreasing ones, and
    ``fill`` consumes the current path.
    """

    def save(self):
        raise NotImplementedError

    def restore(self):
        raise NotImplementedError

    def translate(self, tx: float, ty: float):
        raise NotImplementedError

    def rotate(self, angle: float):
        raise NotImplementedError

    def scale(self, sx: float, sy: float):
        raise NotImplementedError

    def set_source_rgb(self, r: float, g: float, b: float):
        raise NotImplementedError

    def move_to(self, x: float, y: float):
        raise NotImplementedError

    def line_to(self, x: float, y: float):
        raise NotImplementedError

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float):
        raise NotImplementedError

    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float):
        raise NotImplementedError

    def arc_negative(self, xc: float, yc: float, radius: float, angle1: float, angle2: float):
        raise NotImplementedError

    def close_path(self):
        raise NotImplementedError

    def new_path(self):
        raise NotImplementedError

    def fill(self):
        raise NotImplementedError


class RecordingBackend(Backend):
    def __init__(self):
        self.calls: list[tuple] = []
        self.depth = 0

    def _record(self, name: str, *args):
        self.calls.append((name,) + tuple(args))

    def save(self):
        self.depth += 1
        self._record('save')

    def restore(self):
        self.depth -= 1
        self._record('restore')

    def translate(self, tx, ty):
        self._record('translate', tx, ty)

    def rotate(self, angle):
        self._record('rotate', angle)

    def scale(self, sx, sy):
        self._record('scale', sx, sy)

    def set_source_rgb(self, r, g, b):
        self._record('set_source_rgb', r, g, b)

    def move_to(self, x, y):
        self._record('move_to', x, y)

    def line_to(self, x, y):
        self._record('line_to', x, y)

    def curve_to(self, x1, y1, x2, y2, x3, y3):
        self._record('curve_to', x1, y1, x2, y2, x3, y3)

    def arc(self, xc, yc, radius, angle1, angle2):
        self._record('arc', xc, yc, radius, angle1, angle2)

    def arc_negative(self, xc, yc, radius, angle1, angle2):
        self._record('arc_negative', xc, yc, radius, angle1, angle2)

    def close_path(self):
        self._record('close_path')

    def new_path(self):
        self._record('new_path')

    def fill(self):
        self._record('fill')

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def format_calls(self) -> str:
        lines = []
        for name, *args in self.calls:
            formatted = ', '.join(f"{arg:g}" if isinstance(arg, float) else str(arg) for arg in args)
            lines.append(f"{name}({formatted})")
        return '\n'.join(lines)
