from chasegrid.geometry import Vec2D, validate_path
from chasegrid.pathfinding import find_path


def _borders(width, height):
    walls = set()
    for x in range(width):
        walls.add(Vec2D(x, 0))
        walls.add(Vec2D(x, height - 1))
    for y in range(height):
        walls.add(Vec2D(0, y))
        walls.add(Vec2D(width - 1, y))
    return walls


def test_start_equals_goal_returns_single_point():
    start = Vec2D(3, 3)
    assert find_path(start, start, set(), 10, 10) == [start]


def test_path_on_open_grid_is_valid_and_connects_endpoints():
    start, goal = Vec2D(1, 1), Vec2D(8, 6)
    path = find_path(start, goal, set(), 10, 10)
    assert path[0] == start
    assert path[-1] == goal
    assert validate_path(path, set(), 10, 10)


def test_path_never_longer_than_manhattan_plus_one_on_open_grid():
    start, goal = Vec2D(0, 0), Vec2D(7, 3)
    path = find_path(start, goal, set(), 10, 10)
    assert len(path) <= abs(goal.x - start.x) + abs(goal.y - start.y) + 1
    assert len(set(path)) == len(path)


def test_path_goes_through_gap_in_wall():
    width, height = 12, 9
    obstacles = _borders(width, height)
    gap = Vec2D(6, 6)
    obstacles |= {Vec2D(6, y) for y in range(1, height - 1) if Vec2D(6, y) != gap}
    start, goal = Vec2D(2, 2), Vec2D(10, 2)
    path = find_path(start, goal, obstacles, width, height)
    assert path[0] == start and path[-1] == goal
    assert gap in path
    assert not any(p in obstacles for p in path)
    assert validate_path(path, obstacles, width, height)


def test_goal_on_obstacle_is_unreachable():
    goal = Vec2D(5, 5)
    assert find_path(Vec2D(1, 1), goal, {goal}, 10, 10) == []


def test_walled_off_goal_is_unreachable():
    goal = Vec2D(5, 5)
    ring = {goal + Vec2D(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)} - {goal}
    assert find_path(Vec2D(1, 1), goal, ring, 10, 10) == []


def test_goal_out_of_bounds_is_unreachable():
    assert find_path(Vec2D(1, 1), Vec2D(20, 20), set(), 10, 10) == []


def test_start_out_of_bounds_fails_validation():
    assert find_path(Vec2D(-1, 0), Vec2D(2, 0), set(), 10, 10) == []


def test_consecutive_steps_are_adjacent():
    obstacles = {Vec2D(4, y) for y in range(0, 8)}
    path = find_path(Vec2D(1, 1), Vec2D(8, 1), obstacles, 10, 10)
    assert path
    for a, b in zip(path, path[1:]):
        assert max(abs(a.x - b.x), abs(a.y - b.y)) == 1