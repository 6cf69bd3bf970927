"""Prey behaviour: fear, fleeing and seeking safe zones."""

from __future__ import annotations

import random
from collections.abc import Sequence

from chasegrid.geometry import (
    Vec2D,
    has_line_of_sight,
    manhattan_distance,
    squared_distance,
)
from chasegrid.movement import move_randomly
from chasegrid.pathfinding import find_path
from chasegrid.sprite import AIState, Sprite
from chasegrid.world import World

PREY_AWARENESS_RADIUS = 5
MAX_DIST_TO_CONSIDER_SAFE_ZONE = 25
SAFE_ZONE_FEAR_DECAY_MULTIPLIER = 2.0

_EVADE_OFFSETS = (
    Vec2D(0, 1),
    Vec2D(0, -1),
    Vec2D(1, 0),
    Vec2D(-1, 0),
    Vec2D(1, 1),
    Vec2D(1, -1),
    Vec2D(-1, 1),
    Vec2D(-1, -1),
    Vec2D(0, 0),
)


def find_closest_predator(
    prey: Sprite, predators: Sequence[Sprite]
) -> tuple[Sprite | None, int | None]:
    """Return the nearest predator and its Manhattan distance, or (None, None)."""
    if not predators:
        return None, None
    closest = min(predators, key=lambda p: squared_distance(prey.position, p.position))
    return closest, manhattan_distance(prey.position, closest.position)


def update_fear(prey: Sprite, in_radius: bool, has_los: bool, world: World) -> None:
    """Raise fear while a predator is seen, otherwise let it decay."""
    if in_radius and has_los:
        prey.current_fear = min(prey.current_fear + prey.fear_increase_rate, prey.max_fear)
        return
    decay = prey.fear_decrease_rate
    if world.is_in_safe_zone(prey.position):
        decay *= SAFE_ZONE_FEAR_DECAY_MULTIPLIER
    prey.current_fear = max(prey.current_fear - decay, 0.0)


def handle_state_transitions(prey: Sprite, in_radius: bool, has_los: bool) -> None:
    """Switch between wandering and fleeing depending on predator visibility."""
    threatened = in_radius and has_los
    if prey.current_state is AIState.WANDERING and threatened:
        prey.current_state = AIState.FLEEING
    elif prey.current_state is AIState.FLEEING and not threatened:
        prey.current_state = AIState.WANDERING
    else:
        return
    prey.heading_to_safe_zone = False
    prey.current_path.clear()


def find_path_to_safe_zone(prey: Sprite, predator: Sprite | None, world: World) -> bool:
    """Set the prey on the shortest path to a nearby safe zone away from the predator."""
    if predator is None:
        return False

    best_path: list[Vec2D] = []
    predator_dir = predator.position - prey.position

    for center in world.safe_zone_centers:
        if manhattan_distance(prey.position, center) > MAX_DIST_TO_CONSIDER_SAFE_ZONE:
            continue
        path = find_path(prey.position, center, world.obstacles, world.width, world.height)
        if len(path) <= 1 or (best_path and len(path) >= len(best_path)):
            continue
        first_step = path[1] - prey.position
        if first_step.x * predator_dir.x + first_step.y * predator_dir.y <= 0:
            best_path = path

    if not best_path:
        return False
    prey.current_path = best_path
    prey.heading_to_safe_zone = True
    prey.path_follow_step = 0
    return True


def calculate_flee_position(
    prey: Sprite, predator: Sprite | None, world: World, rng: random.Random
) -> Vec2D:
    """Pick the best neighbouring cell to flee to, preferring ones that break sight."""
    if predator is None:
        return prey.position

    options = list(_EVADE_OFFSETS)
    rng.shuffle(options)

    best = Vec2D(0, 0)
    best_plain_dist = -1
    best_hidden_dist = -1
    found_hidden = False

    for offset in options:
        candidate = prey.position + offset.scaled(prey.speed)
        if not world.is_walkable(candidate):
            continue
        dist = manhattan_distance(predator.position, candidate)
        hidden = not has_line_of_sight(
            candidate, predator.position, world.obstacles, world.width, world.height
        )
        if hidden:
            if not found_hidden or dist > best_hidden_dist:
                best = offset
                best_hidden_dist = dist
                found_hidden = True
        elif not found_hidden:
            if dist > best_plain_dist:
                best_plain_dist = dist
                best = offset
            elif dist == best_plain_dist and not best and offset:
                best = offset

    next_pos = prey.position + best.scaled(prey.speed)
    return next_pos if world.is_walkable(next_pos) else prey.position


def update_prey(
    prey: Sprite, predators: Sequence[Sprite], world: World, rng: random.Random
) -> None:
    """Run one turn of prey behaviour and move the prey."""
    predator, distance = find_closest_predator(prey, predators)
    in_radius = predator is not None and distance <= PREY_AWARENESS_RADIUS
    has_los = in_radius and has_line_of_sight(
        prey.position, predator.position, world.obstacles, world.width, world.height
    )

    update_fear(prey, in_radius, has_los, world)
    handle_state_transitions(prey, in_radius, has_los)

    if prey.current_state is not AIState.FLEEING or predator is None:
        move_randomly(prey, world, rng)
        return

    if not prey.heading_to_safe_zone:
        find_path_to_safe_zone(prey, predator, world)

    if prey.heading_to_safe_zone and prey.current_path:
        next_step = prey.current_path[prey.path_follow_step]
        if world.is_walkable(next_step):
            next_pos = next_step
            prey.path_follow_step += 1
            if prey.path_follow_step >= len(prey.current_path):
                prey.current_path.clear()
                prey.heading_to_safe_zone = False
                if (
                    world.is_in_safe_zone(prey.position)
                    and distance > PREY_AWARENESS_RADIUS // 2
                ):
                    prey.current_state = AIState.WANDERING
        else:
            prey.current_path.clear()
            prey.heading_to_safe_zone = False
            next_pos = calculate_flee_position(prey, predator, world, rng)
    else:
        next_pos = calculate_flee_position(prey, predator, world, rng)

    prey.position = next_pos