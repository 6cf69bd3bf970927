"""Grid coordinates, distance measures and line/path checks."""

from __future__ import annotations

from collections.abc import Container, Sequence
from dataclasses import dataclass
from itertools import pairwise


@dataclass(frozen=True, slots=True)
class Vec2D:
    """An integer grid position or offset."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vec2D) -> Vec2D:
        return Vec2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2D) -> Vec2D:
        return Vec2D(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2D:
        return Vec2D(-self.x, -self.y)

    def __bool__(self) -> bool:
        return self.x != 0 or self.y != 0

    def scaled(self, factor: int) -> Vec2D:
        """Return this vector multiplied by an integer factor."""
        return Vec2D(self.x * factor, self.y * factor)


def squared_distance(a: Vec2D, b: Vec2D) -> int:
    """Squared Euclidean distance between two points."""
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def manhattan_distance(a: Vec2D, b: Vec2D) -> int:
    """Manhattan (taxicab) distance between two points."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def _in_bounds(p: Vec2D, width: int, height: int) -> bool:
    return 0 <= p.x < width and 0 <= p.y < height


def has_line_of_sight(
    start: Vec2D,
    end: Vec2D,
    obstacles: Container[Vec2D],
    width: int,
    height: int,
) -> bool:
    """Trace a Bresenham line and report whether every cell on it is open."""
    x0, y0, x1, y1 = start.x, start.y, end.x, end.y

    steep = abs(y1 - y0) > abs(x1 - x0)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = abs(y1 - y0)
    error = dx // 2
    y = y0
    ystep = 1 if y0 < y1 else -1

    for x in range(x0, x1 + 1):
        p = Vec2D(y, x) if steep else Vec2D(x, y)
        if not _in_bounds(p, width, height) or p in obstacles:
            return False
        error -= dy
        if error < 0:
            y += ystep
            error += dx
    return True


def validate_path(
    path: Sequence[Vec2D],
    obstacles: Container[Vec2D],
    width: int,
    height: int,
) -> bool:
    """Check that a path is non-empty, in bounds, obstacle-free and contiguous."""
    if not path:
        return False
    for step in path:
        if not _in_bounds(step, width, height) or step in obstacles:
            return False
    return all(
        abs(b.x - a.x) <= 1 and abs(b.y - a.y) <= 1 for a, b in pairwise(path)
    )