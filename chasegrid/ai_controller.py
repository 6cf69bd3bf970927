"""Dispatching per-sprite AI updates and nearest-sprite lookup."""

from __future__ import annotations

import random
from collections.abc import Sequence

from chasegrid.geometry import Vec2D, manhattan_distance, squared_distance
from chasegrid.predator_ai import StuckTracker, update_predator
from chasegrid.prey_ai import update_prey
from chasegrid.sprite import Sprite, SpriteType
from chasegrid.world import World


def find_closest_sprite(
    position: Vec2D,
    candidates: Sequence[Sprite],
    max_dist: int | None = None,
) -> tuple[Sprite | None, int | None]:
    """Return the nearest candidate and its Manhattan distance.

    Nearness is judged by squared Euclidean distance. When there are no
    candidates the result is ``(None, None)``; when the nearest one lies
    beyond ``max_dist`` the sprite is ``None`` but its distance is reported.
    """
    if not candidates:
        return None, None
    closest = min(candidates, key=lambda s: squared_distance(position, s.position))
    distance = manhattan_distance(position, closest.position)
    if max_dist is not None and distance > max_dist:
        return None, distance
    return closest, distance


def _clamp(pos: Vec2D, world: World) -> Vec2D:
    return Vec2D(
        max(0, min(pos.x, world.width - 1)),
        max(0, min(pos.y, world.height - 1)),
    )


def update_sprite_ai(
    sprite: Sprite,
    predators: Sequence[Sprite],
    prey_sprites: Sequence[Sprite],
    world: World,
    tracker: StuckTracker,
    rng: random.Random,
) -> None:
    """Run one AI turn for a sprite and keep it inside the world."""
    if sprite.type is SpriteType.PREDATOR:
        index = next((i for i, p in enumerate(predators) if p is sprite), -1)
        update_predator(sprite, index, prey_sprites, world, tracker, rng)
    elif sprite.type is SpriteType.PREY:
        update_prey(sprite, predators, world, rng)

    sprite.position = _clamp(sprite.position, world)