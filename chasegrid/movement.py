"""Sprite movement: speed, random wandering and path following."""

from __future__ import annotations

import random

from chasegrid.geometry import Vec2D
from chasegrid.sprite import AIState, Sprite, SpriteType
from chasegrid.world import World

MAX_STEPS_IN_DIRECTION = 5
WANDER_TRAIL_LENGTH = 8

_STILL = Vec2D(0, 0)

_PREDATOR_OFFSETS = (
    Vec2D(1, 0),
    Vec2D(0, 1),
    Vec2D(-1, 0),
    Vec2D(0, -1),
    Vec2D(1, 1),
    Vec2D(1, -1),
    Vec2D(-1, 1),
    Vec2D(-1, -1),
    _STILL,
)

_PREY_OFFSETS = (
    Vec2D(0, 1),
    Vec2D(0, -1),
    Vec2D(1, 0),
    Vec2D(-1, 0),
    _STILL,
)


def _is_predator(sprite: Sprite) -> bool:
    return sprite.type is SpriteType.PREDATOR


def effective_speed(sprite: Sprite) -> int:
    """Return the sprite's speed for this turn, spending or recharging stamina."""
    if not _is_predator(sprite):
        return sprite.speed

    if sprite.current_stamina > 0 and sprite.current_state is AIState.SEEKING:
        sprite.current_stamina -= 1
        sprite.stamina_recharge_counter = 0
        return 2

    if sprite.current_stamina < sprite.max_stamina:
        sprite.stamina_recharge_counter += 1
        if sprite.stamina_recharge_counter >= sprite.stamina_recharge_time:
            sprite.current_stamina = sprite.max_stamina
            sprite.stamina_recharge_counter = 0
    return 1


def valid_moves(sprite: Sprite, world: World, speed: int) -> list[Vec2D]:
    """Offsets the sprite may take at the given speed.

    Predators never stay still here and avoid cells on their wander trail.
    """
    if _is_predator(sprite):
        return [
            offset
            for offset in _PREDATOR_OFFSETS
            if offset
            and world.is_walkable(target := sprite.position + offset.scaled(speed))
            and target not in sprite.recent_wander_trail
        ]
    return [
        offset
        for offset in _PREY_OFFSETS
        if world.is_walkable(sprite.position + offset.scaled(speed))
    ]


def follow_path(sprite: Sprite, world: World) -> Vec2D:
    """Advance along the sprite's path and return the next target position."""
    target = sprite.position
    path = sprite.current_path
    if not path:
        return target

    if sprite.path_follow_step < len(path):
        next_step = path[sprite.path_follow_step]
        if world.is_walkable(next_step):
            target = next_step
            sprite.path_follow_step += 1
            if sprite.path_follow_step >= len(path):
                path.clear()
                sprite.turns_since_path_replan = 0
        else:
            path.clear()
            sprite.turns_since_path_replan = 0
    else:
        path.clear()
        sprite.turns_since_path_replan = 0
    return target


def _handle_stun(sprite: Sprite) -> None:
    sprite.stun_duration -= 1
    if sprite.stun_duration <= 0:
        sprite.is_stunned = False
        sprite.current_state = AIState.WANDERING


def _rest(sprite: Sprite) -> None:
    if sprite.current_stamina < sprite.max_stamina:
        sprite.stamina_recharge_counter += 1
        if sprite.stamina_recharge_counter >= 2:
            sprite.current_stamina = min(sprite.current_stamina + 1, sprite.max_stamina)
            sprite.stamina_recharge_counter = 0
    sprite.resting_duration += 1


def _try_continue(sprite: Sprite, world: World) -> Vec2D | None:
    direction = sprite.last_move_direction
    speed = effective_speed(sprite)
    continued = sprite.position + direction.scaled(speed)
    if world.is_walkable(continued):
        sprite.steps_in_current_direction += 1
        return continued
    if _is_predator(sprite) and speed > 1:
        half = sprite.position + direction
        if world.is_walkable(half):
            sprite.steps_in_current_direction += 1
            return half
    return None


def _choose_new_direction(sprite: Sprite, world: World, rng: random.Random) -> Vec2D:
    predator = _is_predator(sprite)
    speed = effective_speed(sprite)
    choices = valid_moves(sprite, world, speed)

    if predator and not choices and speed > 1:
        choices = valid_moves(sprite, world, 1)

    if predator and not choices:
        choices = [
            offset
            for offset in _PREDATOR_OFFSETS
            if world.is_walkable(sprite.position + offset.scaled(speed))
        ]
        if not choices and speed > 1:
            choices = [
                offset
                for offset in _PREDATOR_OFFSETS
                if world.is_walkable(sprite.position + offset)
            ]

    last = sprite.last_move_direction
    if len(choices) > 1 and last:
        opposite = -last
        remaining = [c for c in choices if c != opposite]
        if remaining:
            choices = remaining

    if not choices:
        choices = [_STILL]

    offset = rng.choice(choices)
    potential = sprite.position + offset.scaled(speed)
    if not world.is_walkable(potential) and speed > 1:
        potential = sprite.position + offset

    sprite.last_move_direction = offset
    sprite.steps_in_current_direction = MAX_STEPS_IN_DIRECTION if not offset else 1

    if predator and offset:
        trail = sprite.recent_wander_trail
        if not trail or trail[0] != potential:
            trail.insert(0, potential)
            del trail[WANDER_TRAIL_LENGTH:]
    return potential


def move_randomly(sprite: Sprite, world: World, rng: random.Random) -> None:
    """Move the sprite one biased random-walk step, honouring stun and rest."""
    if sprite.is_stunned:
        _handle_stun(sprite)
        return

    if _is_predator(sprite) and sprite.current_state is AIState.RESTING:
        _rest(sprite)
        return

    potential: Vec2D | None = None
    if (
        sprite.steps_in_current_direction < MAX_STEPS_IN_DIRECTION
        and sprite.last_move_direction
    ):
        potential = _try_continue(sprite, world)

    if potential is None:
        potential = _choose_new_direction(sprite, world, rng)

    sprite.position = Vec2D(
        max(0, min(potential.x, world.width - 1)),
        max(0, min(potential.y, world.height - 1)),
    )