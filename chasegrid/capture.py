"""Capture attempts by predators and prey evasion."""

from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

from chasegrid.geometry import Vec2D
from chasegrid.sprite import AIState, Sprite
from chasegrid.world import World

_FEAR_EVASION_BONUS = 0.15
_MAX_EVASION_CHANCE = 0.9
_STUN_FRAMES = 2
_ESCAPE_SEARCH_RADIUS = 3


@dataclass(frozen=True)
class EvasionMessage:
    """A note that a prey escaped, with where it ended up."""

    position: Vec2D
    text: str

    def __str__(self) -> str:
        return f"{self.text} at position ({self.position.x},{self.position.y})"


@dataclass
class CaptureReport:
    """Outcome of one round of capture checks."""

    captures: int = 0
    evasions: list[EvasionMessage] = field(default_factory=list)

    @property
    def eventful(self) -> bool:
        """True if anything was captured or evaded."""
        return self.captures > 0 or bool(self.evasions)


def _clamp(pos: Vec2D, world: World) -> Vec2D:
    return Vec2D(
        max(0, min(pos.x, world.width - 1)),
        max(0, min(pos.y, world.height - 1)),
    )


def _away(delta: int, rng: random.Random) -> int:
    if delta == 0:
        return rng.choice((-1, 1))
    return 1 if delta > 0 else -1


def calculate_escape_position(
    prey: Sprite, predator: Sprite, world: World, rng: random.Random
) -> Vec2D:
    """Where an evading prey jumps to: two or three cells away from the predator."""
    delta = prey.position - predator.position
    direction = Vec2D(_away(delta.x, rng), _away(delta.y, rng))
    distance = rng.randint(2, 3)
    escape = _clamp(prey.position + direction.scaled(distance), world)
    if world.is_walkable(escape):
        return escape

    for r in range(1, _ESCAPE_SEARCH_RADIUS + 1):
        for y_off in range(-r, r + 1):
            for x_off in range(-r, r + 1):
                if x_off == 0 and y_off == 0:
                    continue
                candidate = _clamp(prey.position + Vec2D(x_off, y_off), world)
                if world.is_walkable(candidate):
                    return candidate
    return prey.position


def attempt_capture(
    predator: Sprite,
    prey: Sprite,
    world: World,
    predator_index: int,
    rng: random.Random,
) -> tuple[bool, EvasionMessage | None]:
    """Try to catch an adjacent prey.

    Returns whether the prey was caught, and a message if it evaded instead.
    An evasion stuns the predator and moves the prey away.
    """
    if predator.is_stunned:
        return False, None

    delta = prey.position - predator.position
    if abs(delta.x) > 1 or abs(delta.y) > 1:
        return False, None

    chance = prey.evasion_chance + (prey.current_fear / prey.max_fear) * _FEAR_EVASION_BONUS
    chance = min(chance, _MAX_EVASION_CHANCE)

    if rng.random() > chance:
        return True, None

    predator.is_stunned = True
    predator.stun_duration = _STUN_FRAMES
    predator.current_state = AIState.STUNNED
    prey.position = calculate_escape_position(prey, predator, world, rng)
    message = EvasionMessage(
        prey.position, f"Prey escaped from Predator {predator_index + 1}"
    )
    return False, message


def process_captures(
    predators: Sequence[Sprite],
    prey_sprites: MutableSequence[Sprite],
    world: World,
    rng: random.Random,
) -> CaptureReport:
    """Check every prey against every predator and remove the caught ones."""
    report = CaptureReport()
    caught: set[int] = set()

    for prey_index, prey in enumerate(prey_sprites):
        for predator_index, predator in enumerate(predators):
            captured, message = attempt_capture(predator, prey, world, predator_index, rng)
            if message is not None:
                report.evasions.append(message)
            if captured:
                caught.add(prey_index)
                break

    if caught:
        prey_sprites[:] = [p for i, p in enumerate(prey_sprites) if i not in caught]
    report.captures = len(caught)
    return report