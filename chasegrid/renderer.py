"""Drawing full frames of the simulation to a text stream."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from chasegrid.grid_renderer import draw_grid, prepare_display_grid
from chasegrid.sprite import Sprite
from chasegrid.status_display import predator_status, simulation_status
from chasegrid.world import World


class ConsoleRenderer:
    """Writes frames to a terminal stream, remembering the last frame drawn."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.previous_rows: list[str] = []
        self.first_frame = True

    @property
    def stream(self) -> TextIO:
        """The target stream; standard output when none was given."""
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        """Write text to the stream and flush it."""
        self.stream.write(text)
        self.stream.flush()

    def render(
        self,
        predators: Sequence[Sprite],
        prey_sprites: Sequence[Sprite],
        world: World,
        current_step: int,
        max_steps: int,
        show_paths: bool,
    ) -> None:
        """Draw the grid and the status lines for the current state."""
        rows = prepare_display_grid(predators, prey_sprites, world, show_paths)
        frame = draw_grid(rows, predators, prey_sprites, world, self.first_frame)
        self.first_frame = False
        self.write(
            frame
            + simulation_status(predators, prey_sprites, current_step, max_steps)
            + predator_status(predators)
        )
        self.previous_rows = rows