from __future__ import annotations
from dataclasses import dataclass

TOKEN_POLICIES = ('drop', 'warn', 'error')
COLOR_SHORTHANDS = ('interleave', 'duplicate')


@dataclass
class RenderOptions:
    # what to do with argument tokens that are not numbers
    token_policy: str = 'warn'
    # 'interleave' keeps abc -> a0b0c0, 'duplicate' is CSS abc -> aabbcc
    color_shorthand: str = 'interleave'
    # arcs follow the sign of their extent by default; True restores the older
    # output that always traced arcs with arc_negative
    legacy_arc_direction: bool = False
    curve_tolerance: float = 0.25
    anti_aliasing: bool = False
    background: tuple[int, int, int] = (255, 255, 255)

    def __post_init__(self):
        if self.token_policy not in TOKEN_POLICIES:
            raise ValueError(f"token_policy must be one of {TOKEN_POLICIES}, got {self.token_policy!r}")
        if self.color_shorthand not in COLOR_SHORTHANDS:
            raise ValueError(f"color_shorthand must be one of {COLOR_SHORTHANDS}, got {self.color_shorthand!r}")
        if self.curve_tolerance <= 0:
            raise ValueError("curve_tolerance must be positive")
