"""Frame pacing: a batch of instructions followed by one timer tick."""

from functools import partial

import jax
import jax.lax
import jax.numpy as jnp

from quirk8.state import EmulatorState
from quirk8.emulator import step
from quirk8.timers import decrement_timers
from quirk8.logging import scan_with_progress

INSTRUCTIONS_PER_FRAME = 10


def run_instruction(state: EmulatorState, _):
    state = step(state)
    return state, state.displayed


@partial(jax.jit, static_argnums=1)
def run_n_instruction(state: EmulatorState, n: int) -> EmulatorState:
    """Execute ``n`` instructions with no frame pacing or timer ticks."""
    state, _ = jax.lax.scan(run_instruction, state, length=n)
    return state


@partial(jax.jit, static_argnums=1)
def run_frame(state: EmulatorState, instructions_per_frame: int = INSTRUCTIONS_PER_FRAME) -> EmulatorState:
    """Run one 60 Hz frame.

    Executes up to ``instructions_per_frame`` instructions. Variants that wait
    for vblank stop after the first draw; the remaining slots are skipped.
    Timers are decremented once at the end.
    """
    waits_for_vblank = state.variant.waits_for_vblank

    def _frame_step(carry, _):
        state, done = carry
        state = jax.lax.cond(done, lambda s: s, step, state)
        if waits_for_vblank:
            done = done | state.displayed
        return (state, done), None

    (state, _), _ = jax.lax.scan(
        _frame_step, (state, jnp.zeros((), dtype=jnp.bool_)), length=instructions_per_frame
    )
    return decrement_timers(state)


@partial(jax.jit, static_argnums=(1, 2, 3))
def run_n_frames(
    state: EmulatorState,
    n: int,
    instructions_per_frame: int = INSTRUCTIONS_PER_FRAME,
    progress: bool = False,
) -> EmulatorState:
    """Run ``n`` frames headless, optionally with a tqdm progress bar."""

    def _frame(state, _):
        return run_frame(state, instructions_per_frame), None

    if progress:
        _frame = scan_with_progress(n)(_frame)

    state, _ = jax.lax.scan(_frame, state, jnp.arange(n))
    return state
