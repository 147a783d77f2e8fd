"""SVG path mini-language: command model, parser and serializer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from .errors import PathDataError

Point = Tuple[float, float]

TOKEN_RE = re.compile(
    r"""
    (?P<command>[MmZzLlHhVvCcSsQqTtAa])
    | (?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)
    | (?P<separator>[\s,]+)
    """,
    re.VERBOSE,
)


class Position(Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class CommandKind(Enum):
    MOVE = "M"
    LINE = "L"
    QUADRATIC_CURVE = "Q"
    SMOOTH_QUADRATIC_CURVE = "T"
    CUBIC_CURVE = "C"
    SMOOTH_CUBIC_CURVE = "S"
    CLOSE = "Z"
    HORIZONTAL_LINE = "H"
    VERTICAL_LINE = "V"
    ELLIPTICAL_ARC = "A"


POINT_BEARING_KINDS = frozenset(
    {
        CommandKind.MOVE,
        CommandKind.LINE,
        CommandKind.QUADRATIC_CURVE,
        CommandKind.SMOOTH_QUADRATIC_CURVE,
        CommandKind.CUBIC_CURVE,
        CommandKind.SMOOTH_CUBIC_CURVE,
    }
)


@dataclass(frozen=True)
class PathCommand:
    kind: CommandKind
    position: Position = Position.ABSOLUTE
    parameters: Tuple[float, ...] = ()

    @property
    def letter(self) -> str:
        letter = self.kind.value
        if self.position is Position.RELATIVE:
            return letter.lower()
        return letter

    @property
    def is_point_bearing(self) -> bool:
        return self.kind in POINT_BEARING_KINDS


def point_group_size(kind: CommandKind) -> int:
    """Number of coordinate pairs sampled together for a command kind."""
    if kind is CommandKind.CUBIC_CURVE:
        return 3
    if kind in (CommandKind.QUADRATIC_CURVE, CommandKind.SMOOTH_CUBIC_CURVE):
        return 2
    return 1


def decode_points(parameters: Sequence[float]) -> List[Point]:
    # a dangling odd value is dropped
    return [
        (parameters[i], parameters[i + 1])
        for i in range(0, len(parameters) - 1, 2)
    ]


def flatten_points(points: Iterable[Point]) -> Tuple[float, ...]:
    return tuple(value for point in points for value in point)


def parse_path_data(path_data: str) -> List[PathCommand]:
    """Parse a path ``d`` string into commands.

    Every command letter starts a new command and collects the numbers that
    follow it, so implicit repeats (``L 1 2 3 4``) stay a single command with
    several coordinate pairs.
    """
    commands: List[PathCommand] = []
    letter: str | None = None
    numbers: List[float] = []

    def flush() -> None:
        if letter is None:
            return
        position = Position.RELATIVE if letter.islower() else Position.ABSOLUTE
        kind = CommandKind(letter.upper())
        commands.append(PathCommand(kind, position, tuple(numbers)))

    pos = 0
    while pos < len(path_data):
        match = TOKEN_RE.match(path_data, pos)
        if match is None:
            raise PathDataError(
                f"Unexpected character {path_data[pos]!r} at offset {pos} in path data"
            )
        pos = match.end()
        if match.group("command"):
            flush()
            letter = match.group("command")
            numbers = []
        elif match.group("number"):
            if letter is None:
                raise PathDataError("Path data must start with a command letter")
            numbers.append(float(match.group("number")))
    flush()
    return commands


def format_number(value: float) -> str:
    if value == 0:
        return "0"
    if float(value).is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def format_path_data(commands: Iterable[PathCommand]) -> str:
    parts: List[str] = []
    for command in commands:
        params = command.parameters
        if command.is_point_bearing:
            pairs = [
                f"{format_number(x)},{format_number(y)}"
                for x, y in decode_points(params)
            ]
            if len(params) % 2:
                pairs.append(format_number(params[-1]))
            body = " ".join(pairs)
        else:
            body = " ".join(format_number(value) for value in params)
        parts.append(f"{command.letter}{body}")
    return " ".join(parts)
