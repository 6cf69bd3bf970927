# chasegrid

A small terminal simulation of predators hunting prey on a grid (60×20 by
default).

Predators wander, spot prey within their vision radius, plan routes with A*,
sprint while they have stamina, rest to recover it, and search the last place
they saw their target. Prey build up fear when a predator comes close and can
see them. They flee towards nearby safe zones (drawn as `~`) or away from the
threat, and they have a chance to dodge a capture and stun the attacker.

## Installing

```
pip install .
```

## Running a simulation

The package is a library: you build the world and the sprites yourself and
hand them to `chasegrid.game.Simulation`.

```python
import random

from chasegrid.game import Simulation
from chasegrid.geometry import Vec2D
from chasegrid.sprite import Sprite, SpriteType
from chasegrid.world import World

rng = random.Random(1)
world = World()
world.initialize_obstacles(rng)

predators = [
    Sprite(SpriteType.PREDATOR, position=Vec2D(28, 8), speed=2, display_char="P"),
]
prey = [
    Sprite(SpriteType.PREY, position=Vec2D(50, 10), display_char="Y"),
]

steps = Simulation(predators, prey, world, max_steps=500, rng=rng).run()
```

Pick starting cells for which `world.is_walkable(...)` is true. The centre of
the grid and the safe-zone centres are always kept clear of obstacles.

`Simulation.run()` redraws the grid in place with ANSI escape codes, writing to
standard output unless a `chasegrid.renderer.ConsoleRenderer` with another
stream is passed in. It returns the number of completed steps. Predators are
shown as `1`, `2`, `3` and prey as `Y`; a prey in a panic is shown as `!`. A
resting predator is shown as `R`, one searching the last known position as `?`
and a stunned one as `s`. Obstacles are `#`.

Press `p` while it runs to switch path display on or off; planned routes are
then drawn with `.`. `Simulation.handle_key("p")` does the same from code.

The run ends when every prey has been caught or when `max_steps` is reached.
Pass `frame_delay=0` to skip the pause between frames, and a seeded
`random.Random` as `rng` for reproducible runs.

## The pieces

- `chasegrid.geometry`: `Vec2D`, `squared_distance`, `manhattan_distance`,
  `has_line_of_sight`, `validate_path`
- `chasegrid.world`: `World` with `initialize_obstacles`, `is_walkable`,
  `is_in_safe_zone`
- `chasegrid.pathfinding`: `find_path` (eight-way A*)
- `chasegrid.movement`: `effective_speed`, `valid_moves`, `follow_path`,
  `move_randomly`
- `chasegrid.prey_ai` and `chasegrid.predator_ai`: per-turn behaviour, with
  `StuckTracker` to free stalled predators
- `chasegrid.capture`: `process_captures`, returning a `CaptureReport`
- `chasegrid.ai_controller`: `update_sprite_ai`, `find_closest_sprite`
- `chasegrid.grid_renderer`, `chasegrid.status_display`,
  `chasegrid.renderer`: the text of each frame

```python
from chasegrid.pathfinding import find_path

route = find_path(Vec2D(28, 8), Vec2D(50, 10),
                  world.obstacles, world.width, world.height)
```

## What it does not do

There is no installed command and no ready-made starting layout: the package
does not create a default set of predators and prey, and it does not read a
step limit from the environment. Sprites and `max_steps` are always supplied
by the caller.

## Tests

```
pip install .[test]
pytest
```