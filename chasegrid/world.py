"""The grid world: bounds, obstacles and safe zones."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from chasegrid.geometry import Vec2D, manhattan_distance
from chasegrid.sprite import Color

_NEIGHBOURS = tuple(
    Vec2D(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if dx or dy
)
_CARDINALS = (Vec2D(1, 0), Vec2D(0, 1), Vec2D(-1, 0), Vec2D(0, -1))

_OBSTACLE_PROBABILITY = 0.06
_EXTEND_PROBABILITY = 0.4
_CORNER_CLEAR_RADIUS = 5
_CENTER_CLEAR_RADIUS = 3


@dataclass
class World:
    """A rectangular grid with walls, scattered obstacles and safe zones."""

    width: int = 60
    height: int = 20
    obstacle_char: str = "#"
    obstacle_color: str = Color.WHITE
    safe_zone_char: str = "~"
    safe_zone_color: str = Color.GREEN
    safe_zone_radius: int = 2
    obstacles: set[Vec2D] = field(default_factory=set)
    safe_zone_centers: list[Vec2D] = field(default_factory=list)

    def initialize_obstacles(self, rng: random.Random) -> None:
        """(Re)build the walls, random obstacles and safe zones."""
        self.obstacles.clear()
        self.safe_zone_centers.clear()
        w, h = self.width, self.height

        for r in range(h):
            self.obstacles.add(Vec2D(0, r))
            self.obstacles.add(Vec2D(w - 1, r))
        for c in range(w):
            self.obstacles.add(Vec2D(c, 0))
            self.obstacles.add(Vec2D(c, h - 1))

        for y in range(2, h - 2):
            for x in range(2, w - 2):
                if rng.random() < _OBSTACLE_PROBABILITY:
                    self.obstacles.add(Vec2D(x, y))
                    if rng.random() < _EXTEND_PROBABILITY and x + 1 < w - 2:
                        self.obstacles.add(Vec2D(x + 1, y))
                    if rng.random() < _EXTEND_PROBABILITY and y + 1 < h - 2:
                        self.obstacles.add(Vec2D(x, y + 1))

        for y in range(1, _CORNER_CLEAR_RADIUS):
            for x in range(1, _CORNER_CLEAR_RADIUS):
                self.obstacles.discard(Vec2D(x, y))
        for y in range(h - _CORNER_CLEAR_RADIUS, h - 1):
            for x in range(w - _CORNER_CLEAR_RADIUS, w - 1):
                self.obstacles.discard(Vec2D(x, y))

        cx, cy = w // 2, h // 2
        for y in range(cy - _CENTER_CLEAR_RADIUS, cy + _CENTER_CLEAR_RADIUS + 1):
            for x in range(cx - _CENTER_CLEAR_RADIUS, cx + _CENTER_CLEAR_RADIUS + 1):
                if 0 < x < w - 1 and 0 < y < h - 1:
                    self.obstacles.discard(Vec2D(x, y))

        self._clean_up_obstacles()

        self.safe_zone_centers.extend(
            [Vec2D(10, 10), Vec2D(w - 10, h - 10), Vec2D(w // 2, 5)]
        )
        for center in self.safe_zone_centers:
            self.obstacles.discard(center)

    def _is_interior(self, p: Vec2D) -> bool:
        return 0 < p.x < self.width - 1 and 0 < p.y < self.height - 1

    def _clean_up_obstacles(self) -> None:
        isolated = [
            obs
            for obs in self.obstacles
            if self._is_interior(obs)
            and sum(obs + d not in self.obstacles for d in _NEIGHBOURS) >= 6
        ]
        self.obstacles.difference_update(isolated)

        dead_end_walls: list[Vec2D] = []
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                cell = Vec2D(x, y)
                if cell in self.obstacles:
                    continue
                blocked = sum(cell + d in self.obstacles for d in _NEIGHBOURS)
                if blocked < 5:
                    continue
                wall = next(
                    (
                        cell + d
                        for d in _CARDINALS
                        if cell + d in self.obstacles and self._is_interior(cell + d)
                    ),
                    None,
                )
                if wall is not None:
                    dead_end_walls.append(wall)
        self.obstacles.difference_update(dead_end_walls)

    def is_walkable(self, pos: Vec2D) -> bool:
        """True if the position is inside the grid and not an obstacle."""
        if not (0 <= pos.x < self.width and 0 <= pos.y < self.height):
            return False
        return pos not in self.obstacles

    def is_in_safe_zone(self, pos: Vec2D) -> bool:
        """True if the position lies within the radius of any safe zone."""
        return any(
            manhattan_distance(pos, center) <= self.safe_zone_radius
            for center in self.safe_zone_centers
        )