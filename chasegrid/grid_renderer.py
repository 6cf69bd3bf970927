"""Building the character grid and drawing it with colours and borders."""

from __future__ import annotations

from collections.abc import Sequence

from chasegrid.sprite import AIState, Color, Sprite
from chasegrid.world import World
from chasegrid.geometry import Vec2D

ANSI_MOVE_CURSOR_TO_START = "\033[H"
ANSI_CLEAR_SCREEN = "\033[2J"
ANSI_CLEAR_SCREEN_BELOW = "\033[J"

PATH_CHAR = "."
PREY_CHAR = "Y"

PREDATOR_COLORS = (Color.RED, Color.BRIGHT_MAGENTA, Color.BRIGHT_CYAN)


def _in_bounds(pos: Vec2D, world: World) -> bool:
    return 0 <= pos.x < world.width and 0 <= pos.y < world.height


def prepare_display_grid(
    predators: Sequence[Sprite],
    prey_sprites: Sequence[Sprite],
    world: World,
    show_paths: bool,
) -> list[str]:
    """Lay out obstacles, safe zones, paths, prey and predators as plain rows."""
    grid = [[" "] * world.width for _ in range(world.height)]

    for r, row in enumerate(grid):
        for c in range(world.width):
            cell = Vec2D(c, r)
            if cell in world.obstacles:
                row[c] = world.obstacle_char
            elif world.is_in_safe_zone(cell):
                row[c] = world.safe_zone_char

    if show_paths:
        for sprite in (*predators, *prey_sprites):
            for pos in sprite.current_path:
                if _in_bounds(pos, world) and grid[pos.y][pos.x] in (
                    " ",
                    world.safe_zone_char,
                ):
                    grid[pos.y][pos.x] = PATH_CHAR

    for prey in prey_sprites:
        pos = prey.position
        if _in_bounds(pos, world) and pos not in world.obstacles:
            grid[pos.y][pos.x] = prey.display_char

    for i, predator in enumerate(predators):
        pos = predator.position
        if _in_bounds(pos, world):
            grid[pos.y][pos.x] = chr(ord("1") + i)

    return ["".join(row) for row in grid]


def _prey_cell(
    c: int, r: int, prey_sprites: Sequence[Sprite]
) -> tuple[str, str]:
    prey = next(
        (p for p in prey_sprites if p.position.x == c and p.position.y == r), None
    )
    if (
        prey is not None
        and prey.current_state is AIState.FLEEING
        and prey.current_fear > prey.max_fear * 0.75
    ):
        return Color.BRIGHT_YELLOW, "!"
    return Color.YELLOW, PREY_CHAR


def _predator_cell(ch: str, predators: Sequence[Sprite]) -> tuple[str, str]:
    index = ord(ch) - ord("1")
    if index >= len(predators):
        return Color.RED, ch
    predator = predators[index]
    state = predator.current_state
    if state is AIState.SEEKING:
        return (Color.BRIGHT_RED if predator.current_stamina > 0 else Color.RED), ch
    if state is AIState.RESTING:
        return Color.CYAN, "R"
    if state is AIState.SEARCHING_LKP:
        return Color.MAGENTA, "?"
    if state is AIState.STUNNED:
        return Color.BRIGHT_BLUE, "s"
    color = PREDATOR_COLORS[index] if index < len(PREDATOR_COLORS) else Color.RED
    return color, ch


def _styled_cell(
    ch: str,
    c: int,
    r: int,
    predators: Sequence[Sprite],
    prey_sprites: Sequence[Sprite],
    world: World,
) -> str:
    if ch == world.obstacle_char:
        color, out = world.obstacle_color, ch
    elif ch == world.safe_zone_char:
        color, out = world.safe_zone_color, ch
    elif ch == PATH_CHAR:
        color, out = Color.CYAN, ch
    elif ch == PREY_CHAR:
        color, out = _prey_cell(c, r, prey_sprites)
    elif "1" <= ch <= "9":
        color, out = _predator_cell(ch, predators)
    else:
        return ch
    return f"{color}{out}{Color.RESET}"


def draw_grid(
    rows: Sequence[str],
    predators: Sequence[Sprite],
    prey_sprites: Sequence[Sprite],
    world: World,
    first_frame: bool,
) -> str:
    """Return the terminal text for the grid, bordered and coloured.

    The first frame clears the screen; later frames only home the cursor.
    """
    parts = [
        ANSI_CLEAR_SCREEN + ANSI_MOVE_CURSOR_TO_START
        if first_frame
        else ANSI_MOVE_CURSOR_TO_START
    ]
    border = "+" + "-" * world.width + "+\n"
    parts.append(border)
    for r in range(world.height):
        row = rows[r]
        cells = "".join(
            _styled_cell(row[c], c, r, predators, prey_sprites, world)
            for c in range(world.width)
        )
        parts.append(f"|{cells}|\n")
    parts.append(border)
    return "".join(parts)