"""Sprites (predators and prey), their states and terminal colours."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from chasegrid.geometry import Vec2D


class Color:
    """ANSI colour escape sequences."""

    RESET = "\033[0m"
    BLACK = "\033[30m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_MAGENTA = "\033[95m"
    BRIGHT_CYAN = "\033[96m"


class SpriteType(Enum):
    PREDATOR = auto()
    PREY = auto()


class AIState(Enum):
    WANDERING = auto()
    SEEKING = auto()
    SEARCHING_LKP = auto()
    FLEEING = auto()
    STUNNED = auto()
    RESTING = auto()


@dataclass(eq=False)
class Sprite:
    """A creature on the grid with its movement, stamina and fear state."""

    type: SpriteType
    position: Vec2D = Vec2D()
    size: Vec2D = Vec2D()
    display_char: str = "?"
    color_code: str = Color.WHITE
    speed: int = 1
    last_known_prey_position: Vec2D = Vec2D()
    last_move_direction: Vec2D = Vec2D()
    steps_in_current_direction: int = 0

    max_stamina: int = 5
    current_stamina: int = 5
    stamina_recharge_time: int = 10
    stamina_recharge_counter: int = 0
    resting_duration: int = 0
    max_resting_duration: int = 15

    evasion_chance: float = 0.35
    is_stunned: bool = False
    stun_duration: int = 0

    current_fear: float = 0.0
    max_fear: float = 100.0
    fear_increase_rate: float = 10.0
    fear_decrease_rate: float = 0.5

    heading_to_safe_zone: bool = False

    current_path: list[Vec2D] = field(default_factory=list)
    path_follow_step: int = 0
    turns_since_path_replan: int = 0

    recent_wander_trail: list[Vec2D] = field(default_factory=list)

    current_state: AIState = AIState.WANDERING

    def display_string(self) -> str:
        """The display character wrapped in its colour codes."""
        return f"{self.color_code}{self.display_char}{Color.RESET}"