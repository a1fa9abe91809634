from __future__ import annotations
import re
import numpy as np
from errors import InvalidColor

hex_pattern = re.compile(r'^[0-9a-fA-F]{6}$')


def _clamp_channel(value: float) -> int:
    return max(0, min(255, int(value)))


class Color:
    def __init__(self, r: int = 0, g: int = 0, b: int = 0):
        self.r = _clamp_channel(r)
        self.g = _clamp_channel(g)
        self.b = _clamp_channel(b)

    @classmethod
    def from_hex(cls, hex_str: str) -> 'Color':
        """Build a color from a six digit hex code, with or without '#'."""
        value = hex_str.strip().lstrip('#')
        if not hex_pattern.match(value):
            raise InvalidColor(hex_str)
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @property
    def hex_code(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    def unit(self) -> tuple[float, float, float]:
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)

    def lighten(self, value: float) -> 'Color':
        return Color(self.r * (1 - value) + value * 255.0,
                     self.g * (1 - value) + value * 255.0,
                     self.b * (1 - value) + value * 255.0)

    def darken(self, value: float) -> 'Color':
        return Color(self.r * (1 - value),
                     self.g * (1 - value),
                     self.b * (1 - value))

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return (self.r, self.g, self.b) == (other.r, other.g, other.b)

    def __hash__(self):
        return hash((self.r, self.g, self.b))

    def __repr__(self):
        return f"Color(#{self.hex_code})"


def unit_to_rgba(r: float, g: float, b: float, alpha: int = 255) -> tuple[int, int, int, int]:
    return (_clamp_channel(round(r * 255)), _clamp_channel(round(g * 255)),
            _clamp_channel(round(b * 255)), alpha)


def blend_colors(foreground: tuple[int, int, int, int], coverage: np.ndarray,
                 background: np.ndarray) -> np.ndarray:
    """Composite ``foreground`` over ``background`` pixels (N x 4, uint8).

    ``coverage`` scales the foreground alpha per pixel (0..1).
    """
    fg_rgb = np.array(foreground[:3], dtype=np.float64)
    fg_alpha = (foreground[3] / 255.0) * np.clip(coverage, 0.0, 1.0)

    bg = background.astype(np.float64)
    bg_rgb = bg[:, 0:3]
    bg_alpha = bg[:, 3] / 255.0

    out_alpha = fg_alpha + bg_alpha * (1 - fg_alpha)
    safe_alpha = np.where(out_alpha == 0, 1.0, out_alpha)

    out_rgb = (fg_rgb[None, :] * fg_alpha[:, None]
               + bg_rgb * (bg_alpha * (1 - fg_alpha))[:, None]) / safe_alpha[:, None]
    out_rgb[out_alpha == 0] = 0

    out = np.empty_like(background)
    out[:, 0:3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    out[:, 3] = np.clip(np.rint(out_alpha * 255), 0, 255).astype(np.uint8)
    return out
