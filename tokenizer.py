from __future__ import annotations
from typing import Optional

SEPARATORS = ','


def _is_separator(char: str) -> bool:
    return char in SEPARATORS or char.isspace()


def scan_tokens(text: str) -> list[str]:
    """Split a path argument string into raw number tokens.

    SVG lets numbers run together when the boundary is unambiguous, so
    ``1-2`` is two tokens (``1``, ``-2``) and ``1.5.5`` is ``1.5`` and ``.5``.
    """
    tokens = []
    current = ""
    seen_dot = False

    for char in text:
        if _is_separator(char):
            if current:
                tokens.append(current)
            current = ""
            seen_dot = False
        elif char == '-':
            if current:
                tokens.append(current)
            current = char
            seen_dot = False
        elif char == '.':
            if seen_dot:
                tokens.append(current)
                current = char
            else:
                current += char
                seen_dot = True
        else:
            current += char

    if current:
        tokens.append(current)

    return tokens


def parse_token(token: str) -> Optional[float]:
    try:
        return float(token)
    except ValueError:
        return None


def tokenize(text: str) -> list[float]:
    numbers = []
    for token in scan_tokens(text):
        value = parse_token(token)
        if value is not None:
            numbers.append(value)
    return numbers
