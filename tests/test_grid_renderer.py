from chasegrid.geometry import Vec2D
from chasegrid.grid_renderer import (
    ANSI_CLEAR_SCREEN,
    ANSI_MOVE_CURSOR_TO_START,
    PATH_CHAR,
    draw_grid,
    prepare_display_grid,
)
from chasegrid.sprite import AIState, Color, Sprite, SpriteType
from chasegrid.world import World


def _world():
    return World(width=8, height=5, obstacles={Vec2D(0, 0), Vec2D(7, 4)})


def _predator(x, y, state=AIState.WANDERING):
    return Sprite(type=SpriteType.PREDATOR, position=Vec2D(x, y), current_state=state)


def _prey(x, y):
    return Sprite(type=SpriteType.PREY, position=Vec2D(x, y), display_char="Y")


def test_grid_dimensions_and_obstacles():
    world = _world()
    rows = prepare_display_grid([], [], world, False)
    assert len(rows) == world.height
    assert all(len(row) == world.width for row in rows)
    assert rows[0][0] == world.obstacle_char
    assert rows[4][7] == world.obstacle_char
    assert rows[2][3] == " "


def test_safe_zone_cells_marked():
    world = _world()
    world.safe_zone_centers.append(Vec2D(4, 2))
    rows = prepare_display_grid([], [], world, False)
    assert rows[2][4] == world.safe_zone_char
    assert rows[0][0] == world.obstacle_char


def test_sprites_placed_with_predator_numbers():
    world = _world()
    predators = [_predator(1, 1), _predator(2, 1)]
    prey = [_prey(5, 3)]
    rows = prepare_display_grid(predators, prey, world, False)
    assert rows[1][1] == "1"
    assert rows[1][2] == "2"
    assert rows[3][5] == "Y"


def test_predator_drawn_over_prey():
    world = _world()
    rows = prepare_display_grid([_predator(3, 3)], [_prey(3, 3)], world, False)
    assert rows[3][3] == "1"


def test_prey_on_obstacle_not_drawn():
    world = _world()
    rows = prepare_display_grid([], [_prey(0, 0)], world, False)
    assert rows[0][0] == world.obstacle_char


def test_paths_only_when_enabled_and_not_over_obstacles():
    world = _world()
    predator = _predator(1, 2)
    predator.current_path = [Vec2D(0, 0), Vec2D(2, 2), Vec2D(3, 2)]
    hidden = prepare_display_grid([predator], [], world, False)
    shown = prepare_display_grid([predator], [], world, True)
    assert PATH_CHAR not in "".join(hidden)
    assert shown[2][2] == PATH_CHAR
    assert shown[2][3] == PATH_CHAR
    assert shown[0][0] == world.obstacle_char
    assert shown[2][1] == "1"


def test_draw_first_frame_clears_and_borders():
    world = _world()
    rows = prepare_display_grid([], [], world, False)
    text = draw_grid(rows, [], [], world, True)
    border = "+" + "-" * world.width + "+"
    assert text.startswith(ANSI_CLEAR_SCREEN + ANSI_MOVE_CURSOR_TO_START)
    lines = text[len(ANSI_CLEAR_SCREEN + ANSI_MOVE_CURSOR_TO_START):].splitlines()
    assert lines[0] == border
    assert lines[-1] == border
    assert len(lines) == world.height + 2


def test_draw_later_frame_only_homes_cursor():
    world = _world()
    rows = prepare_display_grid([], [], world, False)
    text = draw_grid(rows, [], [], world, False)
    assert text.startswith(ANSI_MOVE_CURSOR_TO_START)
    assert ANSI_CLEAR_SCREEN not in text


def test_draw_colours_obstacles():
    world = _world()
    rows = prepare_display_grid([], [], world, False)
    text = draw_grid(rows, [], [], world, False)
    assert world.obstacle_color + world.obstacle_char + Color.RESET in text


def test_draw_stunned_and_resting_predators():
    world = _world()
    predators = [_predator(1, 1, AIState.STUNNED), _predator(3, 1, AIState.RESTING)]
    rows = prepare_display_grid(predators, [], world, False)
    text = draw_grid(rows, predators, [], world, False)
    assert Color.BRIGHT_BLUE + "s" + Color.RESET in text
    assert Color.CYAN + "R" + Color.RESET in text


def test_draw_seeking_predator_colour_depends_on_stamina():
    world = _world()
    fresh = _predator(1, 1, AIState.SEEKING)
    tired = _predator(3, 1, AIState.SEEKING)
    tired.current_stamina = 0
    predators = [fresh, tired]
    rows = prepare_display_grid(predators, [], world, False)
    text = draw_grid(rows, predators, [], world, False)
    assert Color.BRIGHT_RED + "1" + Color.RESET in text
    assert Color.RED + "2" + Color.RESET in text


def test_draw_terrified_prey_as_exclamation():
    world = _world()
    calm = _prey(2, 3)
    scared = _prey(5, 3)
    scared.current_state = AIState.FLEEING
    scared.current_fear = scared.max_fear
    prey = [calm, scared]
    rows = prepare_display_grid([], prey, world, False)
    text = draw_grid(rows, [], prey, world, False)
    assert Color.BRIGHT_YELLOW + "!" + Color.RESET in text
    assert Color.YELLOW + "Y" + Color.RESET in text