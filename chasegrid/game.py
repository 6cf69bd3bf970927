"""The simulation loop: AI turns, captures, input and rendering."""

from __future__ import annotations

import random
import sys
import time
from collections.abc import MutableSequence

from chasegrid.ai_controller import update_sprite_ai
from chasegrid.capture import CaptureReport, process_captures
from chasegrid.predator_ai import StuckTracker
from chasegrid.renderer import ConsoleRenderer
from chasegrid.sprite import Sprite
from chasegrid.world import World

FRAME_DELAY = 0.1

_HIDE_CURSOR = "\033[?25l"
_SHOW_CURSOR = "\033[?25h"
_CLEAR_LINE_END = "\033[K"
_CLEAR_SCREEN_HOME = "\033[H\033[J"


def _poll_key() -> str | None:
    """Return a pending key press without blocking, if there is one."""
    try:
        import msvcrt
    except ImportError:
        msvcrt = None
    try:
        if msvcrt is not None:
            if msvcrt.kbhit():
                return msvcrt.getwch()
            return None
        if not sys.stdin.isatty():
            return None
        import select

        ready, _, _ = select.select([sys.stdin], [], [], 0)
        if ready:
            return sys.stdin.read(1) or None
    except (OSError, ValueError, AttributeError):
        return None
    return None


class Simulation:
    """Runs predators and prey on a world until the prey are gone or time is up."""

    def __init__(
        self,
        predators: MutableSequence[Sprite],
        prey_sprites: MutableSequence[Sprite],
        world: World,
        max_steps: int,
        renderer: ConsoleRenderer | None = None,
        rng: random.Random | None = None,
        frame_delay: float = FRAME_DELAY,
    ) -> None:
        self.predators = predators
        self.prey_sprites = prey_sprites
        self.world = world
        self.max_steps = max_steps
        self.renderer = renderer if renderer is not None else ConsoleRenderer()
        self.rng = rng if rng is not None else random.Random()
        self.frame_delay = frame_delay
        self.show_paths = False
        self.tracker = StuckTracker()

    def handle_key(self, key: str | None) -> bool:
        """Apply a key press; 'p' toggles path display. True if anything changed."""
        if key in ("p", "P"):
            self.show_paths = not self.show_paths
            return True
        return False

    def _render(self, current_step: int, show_paths: bool) -> None:
        self.renderer.render(
            self.predators,
            self.prey_sprites,
            self.world,
            current_step,
            self.max_steps,
            show_paths,
        )

    def _pause(self) -> None:
        if self.frame_delay > 0:
            time.sleep(self.frame_delay)

    def _report(self, report: CaptureReport, current_step: int, headline: str) -> None:
        self._render(current_step, False)
        lines = [f"\033[{self.world.height + 3};1H"]
        if report.captures > 0:
            lines.append(f"{headline}{_CLEAR_LINE_END}\n")
        lines.extend(f"{message}{_CLEAR_LINE_END}\n" for message in report.evasions)
        self.renderer.write("".join(lines))
        self._pause()

    def _captures(self) -> CaptureReport:
        return process_captures(self.predators, self.prey_sprites, self.world, self.rng)

    def step(self, current_step: int) -> bool:
        """Run one turn for every sprite. Returns False when the run should end."""
        for predator in self.predators:
            update_sprite_ai(
                predator,
                self.predators,
                self.prey_sprites,
                self.world,
                self.tracker,
                self.rng,
            )
            report = self._captures()
            if report.eventful:
                self._report(
                    report,
                    current_step,
                    f"Prey captured! {report.captures} prey caught. "
                    f"{len(self.prey_sprites)} remaining.",
                )
                if not self.prey_sprites:
                    return False

        if not self.prey_sprites:
            return False

        for prey in self.prey_sprites:
            update_sprite_ai(
                prey,
                self.predators,
                self.prey_sprites,
                self.world,
                self.tracker,
                self.rng,
            )

        report = self._captures()
        if report.eventful:
            self._report(report, current_step, "Prey captured after prey movement!")

        if not self.prey_sprites:
            self._render(current_step, False)
            self.renderer.write(f"{_CLEAR_SCREEN_HOME}All prey captured!\n")
            return False
        return True

    def run(self) -> int:
        """Run the whole simulation and return the number of completed steps."""
        current_step = 0
        self.renderer.write(_HIDE_CURSOR)
        try:
            while self.prey_sprites and current_step < self.max_steps:
                if not self.step(current_step):
                    break
                self.handle_key(_poll_key())
                self._render(current_step, self.show_paths)
                self._pause()
                current_step += 1
        finally:
            self.renderer.write(_SHOW_CURSOR)

        if not self.prey_sprites:
            self.renderer.write(
                f"Simulation ended: All prey captured after {current_step} steps.\n"
            )
        else:
            self.renderer.write(
                f"Simulation ended: MAX_STEPS reached after {current_step} steps. "
                f"{len(self.prey_sprites)} prey remaining.\n"
            )
        return current_step