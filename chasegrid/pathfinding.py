"""A* search over the grid with eight-way movement."""

from __future__ import annotations

import heapq
from collections.abc import Container
from itertools import count

from chasegrid.geometry import Vec2D, manhattan_distance, validate_path

_NEIGHBOUR_OFFSETS = (
    Vec2D(0, 1),
    Vec2D(0, -1),
    Vec2D(1, 0),
    Vec2D(-1, 0),
    Vec2D(1, 1),
    Vec2D(1, -1),
    Vec2D(-1, 1),
    Vec2D(-1, -1),
)


def find_path(
    start: Vec2D,
    goal: Vec2D,
    obstacles: Container[Vec2D],
    width: int,
    height: int,
) -> list[Vec2D]:
    """Find a path from start to goal, both included.

    Returns an empty list when the goal cannot be reached or the resulting
    path does not pass validation.
    """

    def walkable(p: Vec2D) -> bool:
        return 0 <= p.x < width and 0 <= p.y < height and p not in obstacles

    came_from: dict[Vec2D, Vec2D] = {}
    g_cost: dict[Vec2D, int] = {start: 0}
    tie_breaker = count()

    start_h = manhattan_distance(start, goal)
    open_heap: list[tuple[int, int, int, int, Vec2D]] = [
        (start_h, start_h, next(tie_breaker), 0, start)
    ]

    while open_heap:
        _, _, _, g, current = heapq.heappop(open_heap)

        if current == goal:
            path = _reconstruct(came_from, start, goal)
            if path and validate_path(path, obstacles, width, height):
                return path
            return []

        for offset in _NEIGHBOUR_OFFSETS:
            neighbour = current + offset
            if not walkable(neighbour):
                continue
            tentative = g + 1
            known = g_cost.get(neighbour)
            if known is None or tentative < known:
                came_from[neighbour] = current
                g_cost[neighbour] = tentative
                h = manhattan_distance(neighbour, goal)
                heapq.heappush(
                    open_heap, (tentative + h, h, next(tie_breaker), tentative, neighbour)
                )
    return []


def _reconstruct(
    came_from: dict[Vec2D, Vec2D], start: Vec2D, goal: Vec2D
) -> list[Vec2D]:
    path: list[Vec2D] = []
    node = goal
    while node != start:
        path.append(node)
        previous = came_from.get(node)
        if previous is None:
            return []
        node = previous
    path.append(start)
    path.reverse()
    return path