from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional
from backend import Backend
from config import RenderOptions
from errors import MalformedPath
from geometry import Point, endpoint_to_center
from tokenizer import parse_token, scan_tokens

logger = logging.getLogger(__name__)


class CommandKind(Enum):
    MOVE_ABS = 'M'
    MOVE_REL = 'm'
    LINE_ABS = 'L'
    LINE_REL = 'l'
    HLINE_ABS = 'H'
    HLINE_REL = 'h'
    VLINE_ABS = 'V'
    VLINE_REL = 'v'
    CURVE_ABS = 'C'
    CURVE_REL = 'c'
    ARC_ABS = 'A'
    ARC_REL = 'a'
    CLOSE = 'Z'


LETTER_KINDS = {kind.value: kind for kind in CommandKind}
LETTER_KINDS['z'] = CommandKind.CLOSE

RELATIVE_KINDS = {
    CommandKind.MOVE_REL, CommandKind.LINE_REL, CommandKind.HLINE_REL,
    CommandKind.VLINE_REL, CommandKind.CURVE_REL, CommandKind.ARC_REL,
}

# numbers consumed per vertex
ARITY = {
    CommandKind.MOVE_ABS: 2,
    CommandKind.MOVE_REL: 2,
    CommandKind.LINE_ABS: 2,
    CommandKind.LINE_REL: 2,
    CommandKind.HLINE_ABS: 1,
    CommandKind.HLINE_REL: 1,
    CommandKind.VLINE_ABS: 1,
    CommandKind.VLINE_REL: 1,
    CommandKind.CURVE_ABS: 6,
    CommandKind.CURVE_REL: 6,
    CommandKind.ARC_ABS: 7,
    CommandKind.ARC_REL: 7,
    CommandKind.CLOSE: 0,
}


@dataclass
class PathCommand:
    kind: CommandKind
    letter: str
    args: list[float] = field(default_factory=list)

    @property
    def relative(self) -> bool:
        return self.kind in RELATIVE_KINDS

    @property
    def arity(self) -> int:
        return ARITY[self.kind]

    def groups(self) -> list[list[float]]:
        arity = self.arity
        if arity == 0:
            return []
        return [self.args[i:i + arity] for i in range(0, len(self.args), arity)]


def is_command_letter(char: str) -> bool:
    return ('A' <= char <= 'Z') or ('a' <= char <= 'z')


def iter_commands(d: str) -> Iterator[tuple[str, str]]:
    """Pair every command letter of a path string with its argument text.

    A command is only complete once the next letter (or the end of the
    string) is seen, so each letter flushes the pending one.
    """
    pending = None
    buffer = []

    for char in d:
        if is_command_letter(char):
            if pending is not None:
                yield pending, ''.join(buffer)
            elif ''.join(buffer).strip():
                logger.warning("Ignoring path data before first command: %r", ''.join(buffer))
            pending = char
            buffer = []
        else:
            buffer.append(char)

    if pending is not None:
        yield pending, ''.join(buffer)


def parse_arguments(letter: str, text: str, token_policy: str = 'warn') -> list[float]:
    numbers = []
    for token in scan_tokens(text):
        value = parse_token(token)
        if value is not None:
            numbers.append(value)
            continue

        if token_policy == 'error':
            raise MalformedPath(letter, len(numbers), f"invalid number '{token}'")
        if token_policy == 'warn':
            logger.warning("Dropping invalid number '%s' in '%s' command", token, letter)
    return numbers


def build_command(letter: str, text: str, token_policy: str = 'warn') -> Optional[PathCommand]:
    """Turn one (letter, argument text) pair into a PathCommand.

    Returns None for letters outside the supported command set. Raises
    MalformedPath when the argument count does not fit the command.
    """
    kind = LETTER_KINDS.get(letter)
    if kind is None:
        return None

    args = parse_arguments(letter, text, token_policy)
    arity = ARITY[kind]
    count = len(args)

    if arity == 0:
        if count:
            raise MalformedPath(letter, count, "command takes no arguments")
    elif count == 0 or count % arity:
        raise MalformedPath(letter, count, f"expected a multiple of {arity}")

    return PathCommand(kind, letter, args)


def parse_path(d: str, token_policy: str = 'warn') -> list[PathCommand]:
    commands = []
    for letter, text in iter_commands(d):
        command = build_command(letter, text, token_policy)
        if command is None:
            logger.warning("Unknown path command '%s' ignored", letter)
            continue
        commands.append(command)
    return commands


class PathInterpreter:
    def __init__(self, backend: Backend, options: RenderOptions = None):
        self.backend = backend
        self.options = options or RenderOptions()
        self.cursor = Point(0.0, 0.0)
        self.subpath_start = Point(0.0, 0.0)
        self._handlers = {
            CommandKind.MOVE_ABS: self._move,
            CommandKind.MOVE_REL: self._move,
            CommandKind.LINE_ABS: self._line,
            CommandKind.LINE_REL: self._line,
            CommandKind.HLINE_ABS: self._horizontal,
            CommandKind.HLINE_REL: self._horizontal,
            CommandKind.VLINE_ABS: self._vertical,
            CommandKind.VLINE_REL: self._vertical,
            CommandKind.CURVE_ABS: self._curve,
            CommandKind.CURVE_REL: self._curve,
            CommandKind.ARC_ABS: self._arc,
            CommandKind.ARC_REL: self._arc,
            CommandKind.CLOSE: self._close,
        }

    def run(self, d: str) -> Point:
        """Emit the whole path ``d`` and close it; returns the final cursor."""
        self.cursor = Point(0.0, 0.0)
        self.subpath_start = Point(0.0, 0.0)

        for letter, text in iter_commands(d):
            command = build_command(letter, text, self.options.token_policy)
            if command is None:
                logger.warning("Unknown path command '%s' ignored", letter)
                continue
            self.execute(command)

        # fill-only: every path is closed whether or not it ends in Z
        self.backend.close_path()
        return self.cursor

    def execute(self, command: PathCommand):
        self._handlers[command.kind](command)

    def _resolve(self, x: float, y: float, relative: bool) -> Point:
        if relative:
            return self.cursor.offset(x, y)
        return Point(x, y)

    def _line_to(self, target: Point):
        self.backend.line_to(target.x, target.y)
        self.cursor = target

    def _move(self, command: PathCommand):
        groups = command.groups()
        x, y = groups[0]
        target = self._resolve(x, y, command.relative)
        self.backend.move_to(target.x, target.y)
        self.cursor = target
        self.subpath_start = target

        # extra pairs after a moveto are implicit linetos
        for x, y in groups[1:]:
            self._line_to(self._resolve(x, y, command.relative))

    def _line(self, command: PathCommand):
        for x, y in command.groups():
            self._line_to(self._resolve(x, y, command.relative))

    def _horizontal(self, command: PathCommand):
        for (x,) in command.groups():
            if command.relative:
                x += self.cursor.x
            self._line_to(Point(x, self.cursor.y))

    def _vertical(self, command: PathCommand):
        for (y,) in command.groups():
            if command.relative:
                y += self.cursor.y
            self._line_to(Point(self.cursor.x, y))

    def _curve(self, command: PathCommand):
        for x1, y1, x2, y2, x3, y3 in command.groups():
            c1 = self._resolve(x1, y1, command.relative)
            c2 = self._resolve(x2, y2, command.relative)
            end = self._resolve(x3, y3, command.relative)
            self.backend.curve_to(c1.x, c1.y, c2.x, c2.y, end.x, end.y)
            self.cursor = end

    def _arc(self, command: PathCommand):
        for rx, ry, rotation, large_arc, sweep, x, y in command.groups():
            if not all(math.isfinite(value) for value in (rx, ry, rotation, large_arc, sweep, x, y)):
                raise MalformedPath(command.letter, len(command.args), "arc arguments must be finite")
            end = self._resolve(x, y, command.relative)
            phi = math.radians(rotation)
            start = self.cursor

            arc = endpoint_to_center(start.x, start.y, end.x, end.y,
                                     large_arc, sweep, rx, ry, phi)
            if arc is None:
                # zero radius draws a straight line, coincident endpoints draw nothing
                if end != start:
                    self._line_to(end)
                continue

            backend = self.backend
            backend.save()
            backend.translate(arc.cx, arc.cy)
            backend.rotate(phi)
            backend.scale(arc.rx, arc.ry)
            if self.options.legacy_arc_direction or arc.extent < 0:
                backend.arc_negative(0.0, 0.0, 1.0, arc.start_angle, arc.end_angle)
            else:
                backend.arc(0.0, 0.0, 1.0, arc.start_angle, arc.end_angle)
            backend.restore()
            self.cursor = end

    def _close(self, command: PathCommand):
        self.backend.close_path()
        self.cursor = self.subpath_start
