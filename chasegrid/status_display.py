"""Text for the status lines shown under the grid."""

from __future__ import annotations

from collections.abc import Sequence

from chasegrid.sprite import AIState, Color, Sprite

PREDATOR_COLORS = (Color.RED, Color.BRIGHT_MAGENTA, Color.BRIGHT_CYAN)
MAX_LISTED_PREDATORS = 3

_STATE_LABELS = {
    AIState.SEEKING: "SEEKING",
    AIState.SEARCHING_LKP: "SEARCH_LKP",
    AIState.WANDERING: "WANDERING",
    AIState.RESTING: "RESTING",
    AIState.STUNNED: "STUNNED",
}


def simulation_status(
    predators: Sequence[Sprite],
    prey_sprites: Sequence[Sprite],
    current_step: int,
    max_steps: int,
) -> str:
    """Step counter, population, average stamina and fear, and state counts."""
    avg_fear = (
        sum(p.current_fear for p in prey_sprites) / len(prey_sprites)
        if prey_sprites
        else 0.0
    )
    avg_stamina = (
        sum(p.current_stamina for p in predators) / len(predators)
        if predators
        else 0.0
    )
    resting = sum(p.current_state is AIState.RESTING for p in predators)
    stunned = sum(p.current_state is AIState.STUNNED for p in predators)
    return (
        f"{Color.RESET}"
        f"Step: {current_step:4d}/{max_steps}"
        f" | Predators: {len(predators)} (Avg Stam: {avg_stamina:.1f})"
        f" | Prey: {len(prey_sprites)} (Avg Fear: {avg_fear:.1f})\n"
        f"Predator States: Resting: {resting}, Stunned: {stunned}\n"
    )


def predator_status(predators: Sequence[Sprite]) -> str:
    """One coloured entry per predator (at most three) on a single line."""
    entries = []
    for i, predator in enumerate(predators[:MAX_LISTED_PREDATORS]):
        color = PREDATOR_COLORS[i] if i < len(PREDATOR_COLORS) else Color.RED
        label = _STATE_LABELS.get(predator.current_state, "WANDERING")
        pos = predator.position
        entries.append(
            f"{color}Predator {i + 1}: ({pos.x},{pos.y}) [{label}]{Color.RESET}"
        )
    return " | ".join(entries) + "\n"