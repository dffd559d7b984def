"""Delay and sound timers, ticked once per frame by the caller."""

import jax.numpy as jnp
from quirk8.state import EmulatorState


def _tick(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer)


def decrement_timers(state: EmulatorState) -> EmulatorState:
    """Count both timers down by one, stopping at zero.

    Independent of how many instructions ran since the last tick. The sound
    timer going from non-zero to zero is the caller's cue to stop the tone.
    """
    return state.replace(
        delay_timer=_tick(state.delay_timer),
        sound_timer=_tick(state.sound_timer),
    )
