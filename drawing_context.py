from __future__ import annotations
import math


class TransformMatrix:
    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0,
                 d: float = 1.0, e: float = 0.0, f: float = 0.0):
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.e = e
        self.f = f

    @staticmethod
    def identity() -> 'TransformMatrix':
        return TransformMatrix(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def translate(tx: float, ty: float) -> 'TransformMatrix':
        return TransformMatrix(1.0, 0.0, 0.0, 1.0, tx, ty)

    @staticmethod
    def scale(sx: float, sy: float = None) -> 'TransformMatrix':
        if sy is None:
            sy = sx
        return TransformMatrix(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @staticmethod
    def rotate(angle: float) -> 'TransformMatrix':
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return TransformMatrix(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)

    def multiply(self, other: 'TransformMatrix') -> 'TransformMatrix':
        return TransformMatrix(
            self.a * other.a + self.c * other.b,
            self.b * other.a + self.d * other.b,
            self.a * other.c + self.c * other.d,
            self.b * other.c + self.d * other.d,
            self.a * other.e + self.c * other.f + self.e,
            self.b * other.e + self.d * other.f + self.f
        )

    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        new_x = self.a * x + self.c * y + self.e
        new_y = self.b * x + self.d * y + self.f
        return (new_x, new_y)

    def max_scale(self) -> float:
        """Largest length factor the matrix applies to any direction."""
        return max(math.hypot(self.a, self.b), math.hypot(self.c, self.d))

    def copy(self) -> 'TransformMatrix':
        return TransformMatrix(self.a, self.b, self.c, self.d, self.e, self.f)


class DrawingContext:
    def __init__(self):
        self.transform = TransformMatrix.identity()
        self.fill_color = (0, 0, 0, 255)

    def push(self) -> 'DrawingContext':
        new_ctx = DrawingContext()
        new_ctx.transform = self.transform.copy()
        new_ctx.fill_color = self.fill_color
        return new_ctx

    def apply(self, matrix: TransformMatrix):
        # new operations act in the current user space, so they go on the right
        self.transform = self.transform.multiply(matrix)
