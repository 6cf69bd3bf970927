import random

import pytest

from chasegrid.capture import (
    CaptureReport,
    EvasionMessage,
    attempt_capture,
    calculate_escape_position,
    process_captures,
)
from chasegrid.geometry import Vec2D
from chasegrid.sprite import AIState, Sprite, SpriteType
from chasegrid.world import World


class FixedRoll(random.Random):
    """A generator whose uniform draws always return the same value."""

    def __init__(self, roll, seed=0):
        super().__init__(seed)
        self.roll = roll

    def random(self):
        return self.roll


def make_prey(x, y, **kwargs):
    return Sprite(type=SpriteType.PREY, position=Vec2D(x, y), **kwargs)


def make_predator(x, y, **kwargs):
    return Sprite(type=SpriteType.PREDATOR, position=Vec2D(x, y), **kwargs)


@pytest.fixture
def world():
    return World(width=30, height=20)


def test_stunned_predator_cannot_capture(world):
    predator = make_predator(5, 5, is_stunned=True)
    prey = make_prey(6, 5, evasion_chance=0.0)
    assert attempt_capture(predator, prey, world, 0, FixedRoll(0.5)) == (False, None)
    assert prey.position == Vec2D(6, 5)


def test_distant_prey_not_captured(world):
    predator = make_predator(5, 5)
    prey = make_prey(7, 5, evasion_chance=0.0)
    assert attempt_capture(predator, prey, world, 0, FixedRoll(0.5)) == (False, None)
    assert predator.is_stunned is False


def test_adjacent_prey_captured_on_failed_roll(world):
    predator = make_predator(5, 5)
    prey = make_prey(6, 6, evasion_chance=0.0)
    assert attempt_capture(predator, prey, world, 0, FixedRoll(0.5)) == (True, None)


def test_evasion_stuns_predator_and_moves_prey(world):
    predator = make_predator(9, 10)
    prey = make_prey(10, 10, evasion_chance=1.0)
    captured, message = attempt_capture(predator, prey, world, 2, FixedRoll(0.0, seed=4))
    assert captured is False
    assert predator.is_stunned is True
    assert predator.stun_duration == 2
    assert predator.current_state is AIState.STUNNED
    assert message == EvasionMessage(prey.position, "Prey escaped from Predator 3")
    moved = prey.position - Vec2D(10, 10)
    assert moved.x in (2, 3)
    assert abs(moved.y) == moved.x


def test_fear_adds_evasion_bonus(world):
    prey = make_prey(6, 5, evasion_chance=0.0, current_fear=100.0)
    captured, message = attempt_capture(make_predator(5, 5), prey, world, 0, FixedRoll(0.1))
    assert captured is False
    assert message is not None

    prey = make_prey(6, 5, evasion_chance=0.0, current_fear=100.0)
    captured, _ = attempt_capture(make_predator(5, 5), prey, world, 0, FixedRoll(0.2))
    assert captured is True


def test_evasion_chance_is_capped(world):
    prey = make_prey(6, 5, evasion_chance=1.0)
    captured, message = attempt_capture(make_predator(5, 5), prey, world, 0, FixedRoll(0.95))
    assert captured is True
    assert message is None


def test_escape_position_in_open_field(world):
    prey = make_prey(10, 10)
    predator = make_predator(10, 11)
    for seed in range(10):
        pos = calculate_escape_position(prey, predator, world, random.Random(seed))
        assert world.is_walkable(pos)
        assert pos.y < prey.position.y
        assert abs(pos.x - prey.position.x) == prey.position.y - pos.y


def test_escape_position_falls_back_to_nearby_cell(world):
    prey = make_prey(10, 10)
    predator = make_predator(9, 10)
    world.obstacles.update(Vec2D(x, y) for x in (12, 13) for y in range(5, 16))
    pos = calculate_escape_position(prey, predator, world, random.Random(1))
    assert world.is_walkable(pos)
    assert pos != prey.position
    assert max(abs(pos.x - 10), abs(pos.y - 10)) <= 3


def test_escape_position_when_fully_blocked(world):
    prey = make_prey(10, 10)
    predator = make_predator(9, 10)
    world.obstacles.update(
        Vec2D(x, y)
        for x in range(world.width)
        for y in range(world.height)
        if Vec2D(x, y) != prey.position
    )
    pos = calculate_escape_position(prey, predator, world, random.Random(1))
    assert pos == prey.position


def test_process_captures_removes_caught_prey(world):
    predators = [make_predator(5, 5)]
    caught = make_prey(6, 5, evasion_chance=0.0)
    safe = make_prey(20, 15, evasion_chance=0.0)
    prey_sprites = [caught, safe]
    report = process_captures(predators, prey_sprites, world, FixedRoll(0.5))
    assert report.captures == 1
    assert report.evasions == []
    assert report.eventful is True
    assert prey_sprites == [safe]


def test_process_captures_records_evasion(world):
    predators = [make_predator(5, 5)]
    prey = make_prey(6, 5, evasion_chance=1.0)
    prey_sprites = [prey]
    report = process_captures(predators, prey_sprites, world, FixedRoll(0.0))
    assert report.captures == 0
    assert len(report.evasions) == 1
    assert report.evasions[0].position == prey.position
    assert prey_sprites == [prey]
    assert predators[0].is_stunned is True


def test_process_captures_nothing_happens(world):
    prey_sprites = [make_prey(20, 15)]
    report = process_captures([make_predator(2, 2)], prey_sprites, world, FixedRoll(0.0))
    assert report == CaptureReport()
    assert report.eventful is False
    assert len(prey_sprites) == 1


def test_evasion_message_text():
    message = EvasionMessage(Vec2D(3, 4), "Prey escaped from Predator 1")
    assert str(message) == "Prey escaped from Predator 1 at position (3,4)"