"""Predator behaviour: hunting, searching, resting and getting unstuck."""

from __future__ import annotations

import random
from collections.abc import Sequence

from chasegrid.geometry import Vec2D, manhattan_distance, squared_distance
from chasegrid.movement import move_randomly
from chasegrid.pathfinding import find_path
from chasegrid.sprite import AIState, Sprite
from chasegrid.world import World

PREDATOR_VISION_RADIUS = 60
REPLAN_PATH_INTERVAL = 2
STUCK_THRESHOLD = 3
POSITION_HISTORY_SIZE = 5
MAX_TRACKED_PREDATORS = 10

_UNSET = Vec2D(-1, -1)

_SMALL_MOVES = (
    Vec2D(1, 0),
    Vec2D(-1, 0),
    Vec2D(0, 1),
    Vec2D(0, -1),
    Vec2D(1, 1),
    Vec2D(-1, -1),
    Vec2D(1, -1),
    Vec2D(-1, 1),
)

_LARGE_MOVES = (
    Vec2D(3, 0),
    Vec2D(-3, 0),
    Vec2D(0, 3),
    Vec2D(0, -3),
    Vec2D(2, 2),
    Vec2D(-2, -2),
    Vec2D(2, -2),
    Vec2D(-2, 2),
)

_WIDE_SEARCH_RADIUS = 5


class StuckTracker:
    """Remembers recent predator positions to detect and break stalls."""

    def __init__(self) -> None:
        self._history: dict[int, list[Vec2D]] = {}
        self._counters: dict[int, int] = {}

    def _record(self, index: int, position: Vec2D) -> list[Vec2D]:
        history = self._history.setdefault(index, [_UNSET] * POSITION_HISTORY_SIZE)
        history[:] = history[1:] + history[:1]
        history[0] = position
        return history

    def check(
        self, predator: Sprite, index: int, world: World, rng: random.Random
    ) -> bool:
        """Record the predator's position; if it has stalled, move it.

        Returns True when the predator was stuck and has been relocated.
        """
        if not 0 <= index < MAX_TRACKED_PREDATORS:
            return False

        history = self._record(index, predator.position)
        stationary = history[0] == history[1]
        oscillating = (
            not stationary and history[0] == history[2] and history[1] == history[3]
        )

        if stationary or oscillating:
            self._counters[index] = self._counters.get(index, 0) + 1
        else:
            self._counters[index] = 0

        counter = self._counters[index]
        if counter <= STUCK_THRESHOLD:
            return False

        predator.current_state = AIState.WANDERING
        predator.current_path.clear()
        predator.recent_wander_trail.clear()

        target = self._find_escape(predator, counter, world, rng)
        if target is None:
            return False

        predator.position = target
        self._counters[index] = 0
        history[:] = [target] * len(history)
        return True

    @staticmethod
    def _find_escape(
        predator: Sprite, counter: int, world: World, rng: random.Random
    ) -> Vec2D | None:
        small = list(_SMALL_MOVES)
        rng.shuffle(small)
        for move in small:
            candidate = predator.position + move.scaled(predator.speed)
            if world.is_walkable(candidate):
                return candidate

        if counter > STUCK_THRESHOLD + 2:
            large = list(_LARGE_MOVES)
            rng.shuffle(large)
            for move in large:
                candidate = predator.position + move
                if world.is_walkable(candidate):
                    return candidate

        if counter > STUCK_THRESHOLD + 5:
            span = range(-_WIDE_SEARCH_RADIUS, _WIDE_SEARCH_RADIUS + 1)
            for dy in span:
                for dx in span:
                    if dx == 0 and dy == 0:
                        continue
                    candidate = predator.position + Vec2D(dx, dy)
                    if world.is_walkable(candidate):
                        return candidate
        return None


def find_closest_prey(
    predator: Sprite, prey_sprites: Sequence[Sprite]
) -> Sprite | None:
    """The nearest prey, or None if there is none within vision range."""
    if not prey_sprites:
        return None
    closest = min(
        prey_sprites, key=lambda p: squared_distance(predator.position, p.position)
    )
    if manhattan_distance(predator.position, closest.position) > PREDATOR_VISION_RADIUS:
        return None
    return closest


def _start_seeking(predator: Sprite, target_prey: Sprite) -> None:
    predator.current_state = AIState.SEEKING
    predator.last_known_prey_position = target_prey.position
    predator.current_path.clear()
    predator.turns_since_path_replan = REPLAN_PATH_INTERVAL


def _start_resting(predator: Sprite) -> None:
    predator.current_state = AIState.RESTING
    predator.resting_duration = 0
    predator.current_path.clear()


def handle_state_transitions(
    predator: Sprite, target_prey: Sprite | None, previous_state: AIState
) -> None:
    """Move the predator between wandering, seeking, searching and resting."""
    state = predator.current_state

    if state is AIState.WANDERING:
        if target_prey is not None:
            _start_seeking(predator, target_prey)
            predator.resting_duration = 0
        elif predator.current_stamina < predator.max_stamina // 2:
            _start_resting(predator)
    elif state is AIState.SEEKING:
        if target_prey is None:
            predator.current_state = AIState.SEARCHING_LKP
        else:
            predator.last_known_prey_position = target_prey.position
            predator.turns_since_path_replan += 1
            if predator.current_stamina <= 0:
                _start_resting(predator)
    elif state is AIState.SEARCHING_LKP:
        if target_prey is not None:
            _start_seeking(predator, target_prey)
        elif (
            predator.position == predator.last_known_prey_position
            or not predator.current_path
        ):
            predator.current_state = AIState.WANDERING
        else:
            predator.turns_since_path_replan += 1
    elif state is AIState.RESTING:
        if target_prey is not None:
            _start_seeking(predator, target_prey)
            predator.resting_duration = 0
        elif (
            predator.current_stamina >= predator.max_stamina
            or predator.resting_duration > predator.max_resting_duration
        ):
            predator.current_state = AIState.WANDERING
            predator.resting_duration = 0
        else:
            predator.resting_duration += 1

    if (
        predator.current_state is not AIState.WANDERING
        and previous_state is AIState.WANDERING
    ):
        predator.recent_wander_trail.clear()


def _needs_replan(predator: Sprite) -> bool:
    return (
        not predator.current_path
        or predator.turns_since_path_replan >= REPLAN_PATH_INTERVAL
    )


def _set_path(predator: Sprite, goal: Vec2D, world: World) -> None:
    predator.current_path = find_path(
        predator.position, goal, world.obstacles, world.width, world.height
    )
    predator.path_follow_step = 0
    predator.turns_since_path_replan = 0


def generate_path(
    predator: Sprite, target_prey: Sprite | None, world: World
) -> None:
    """Plan or refresh the predator's path for its current state."""
    if predator.current_state is AIState.SEEKING and target_prey is not None:
        if not _needs_replan(predator):
            return
        goal = target_prey.position
        if target_prey.last_move_direction:
            predicted = target_prey.position + target_prey.last_move_direction.scaled(
                target_prey.speed
            )
            if world.is_walkable(predicted):
                goal = predicted
        _set_path(predator, goal, world)
    elif predator.current_state is AIState.SEARCHING_LKP:
        if _needs_replan(predator):
            _set_path(predator, predator.last_known_prey_position, world)


def _advance_along_path(predator: Sprite, world: World) -> bool:
    seeking = predator.current_state is AIState.SEEKING
    speed = 2 if seeking and predator.current_stamina > 0 else 1
    path = predator.current_path
    position = predator.position
    steps = 0

    for step in path[predator.path_follow_step : predator.path_follow_step + speed]:
        if manhattan_distance(position, step) == 1 and world.is_walkable(step):
            position = step
            steps += 1
        else:
            path.clear()
            predator.turns_since_path_replan = REPLAN_PATH_INTERVAL
            return False

    if steps == 0:
        return False

    predator.position = position
    predator.path_follow_step += steps
    if seeking and speed > 1:
        predator.current_stamina -= 1
    if predator.path_follow_step >= len(path):
        path.clear()
        predator.turns_since_path_replan = REPLAN_PATH_INTERVAL
    return True


def update_predator(
    predator: Sprite,
    index: int,
    prey_sprites: Sequence[Sprite],
    world: World,
    tracker: StuckTracker,
    rng: random.Random,
) -> None:
    """Run one turn of predator behaviour and move the predator."""
    if predator.is_stunned:
        move_randomly(predator, world, rng)
        return

    target_prey = find_closest_prey(predator, prey_sprites)
    previous_state = predator.current_state

    if tracker.check(predator, index, world, rng):
        return

    handle_state_transitions(predator, target_prey, previous_state)
    generate_path(predator, target_prey, world)

    state = predator.current_state
    if state in (AIState.SEEKING, AIState.SEARCHING_LKP):
        if predator.current_path and _advance_along_path(predator, world):
            return
        move_randomly(predator, world, rng)
    elif state in (AIState.RESTING, AIState.WANDERING):
        move_randomly(predator, world, rng)