from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence

from .errors import RelativeBeforeAbsoluteError
from .path_data import (
    PathCommand,
    Point,
    Position,
    decode_points,
    flatten_points,
    point_group_size,
)

# Returns replacement parameters, or None to keep the command as it is.
CommandVisitor = Callable[[PathCommand, List[Point], int], Optional[Sequence[float]]]


@dataclass
class Rect:
    min: Point = (math.inf, math.inf)
    max: Point = (-math.inf, -math.inf)

    @property
    def is_empty(self) -> bool:
        return self.min[0] > self.max[0] or self.min[1] > self.max[1]

    @property
    def width(self) -> float:
        return self.max[0] - self.min[0]

    @property
    def height(self) -> float:
        return self.max[1] - self.min[1]

    def extend(self, point: Point) -> None:
        x, y = point
        self.min = (min(self.min[0], x), min(self.min[1], y))
        self.max = (max(self.max[0], x), max(self.max[1], y))


def map_commands(commands: Sequence[PathCommand], visit: CommandVisitor) -> List[PathCommand]:
    """Walk the point-bearing commands of a path.

    ``visit`` receives each point-bearing command, its decoded points and its
    point-group size. Close, horizontal, vertical and arc commands are not
    visited and come back unchanged.
    """
    result: List[PathCommand] = []
    for command in commands:
        if not command.is_point_bearing:
            result.append(command)
            continue
        points = decode_points(command.parameters)
        parameters = visit(command, points, point_group_size(command.kind))
        if parameters is None:
            result.append(command)
        else:
            result.append(replace(command, parameters=tuple(parameters)))
    return result


def bounding_rect(commands: Sequence[PathCommand]) -> Rect:
    """Bounding box of the on-curve points, with relative moves resolved.

    Only the last point of each point group is sampled, so curve control
    points do not widen the box.
    """
    rect = Rect()
    cursor: Optional[Point] = None

    def visit(command: PathCommand, points: List[Point], group_size: int) -> None:
        nonlocal cursor
        for point in points[group_size - 1 :: group_size]:
            if command.position is Position.ABSOLUTE:
                cursor = point
            elif cursor is None:
                raise RelativeBeforeAbsoluteError(
                    f"Relative command {command.letter!r} appears before any absolute position"
                )
            else:
                cursor = (cursor[0] + point[0], cursor[1] + point[1])
            rect.extend(cursor)
        return None

    map_commands(commands, visit)
    return rect


def horizontal_offset(rect: Rect, width: float) -> float:
    return ((rect.width - width) / 2.0) + rect.min[0]


def flip_and_align(commands: Sequence[PathCommand], rect: Rect, width: float) -> List[PathCommand]:
    """Flip a glyph vertically about ``rect`` and centre its advance width.

    Absolute points are moved into the reference frame; relative points only
    have their vertical component negated.
    """
    offset = horizontal_offset(rect, width)

    def visit(command: PathCommand, points: List[Point], _group_size: int) -> Sequence[float]:
        if command.position is Position.ABSOLUTE:
            moved = [(offset + x - rect.min[0], rect.max[1] - y) for x, y in points]
        else:
            moved = [(x, -y) for x, y in points]
        return flatten_points(moved)

    return map_commands(commands, visit)
