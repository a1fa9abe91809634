from __future__ import annotations
import re
from typing import Optional
from colors import Color
from tokenizer import parse_token

translate_pattern = re.compile(r'translate\(\s*([0-9.-]+)\s*[,\s]\s*([0-9.-]+)\s*\)')
rotate_pattern = re.compile(r'rotate\(\s*([0-9.-]+)\s*\)')
fill_color_pattern = re.compile(r'fill:\s*#([a-fA-F0-9]+)')


def expand_shorthand(hex_str: str, mode: str = 'interleave') -> str:
    if len(hex_str) != 3:
        return hex_str
    if mode == 'duplicate':
        return ''.join(digit * 2 for digit in hex_str)
    return ''.join(digit + '0' for digit in hex_str)


def match_translate(transform: str) -> Optional[tuple[float, float]]:
    if not transform:
        return None

    match = translate_pattern.search(transform)
    if not match:
        return None

    x = parse_token(match.group(1))
    y = parse_token(match.group(2))
    if x is None or y is None:
        return None
    return (x, y)


def match_rotate(transform: str) -> Optional[float]:
    if not transform:
        return None

    match = rotate_pattern.search(transform)
    if not match:
        return None
    return parse_token(match.group(1))


def match_fill_color(style: str, shorthand: str = 'interleave') -> Optional[Color]:
    """Extract the ``fill:#hex`` color of an inline style.

    Raises InvalidColor when a hex code is present but is neither three
    nor six digits long.
    """
    if not style:
        return None

    match = fill_color_pattern.search(style)
    if not match:
        return None

    return Color.from_hex(expand_shorthand(match.group(1), shorthand))
