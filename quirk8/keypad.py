"""CHIP-8 keypad: layout tables, live key updates and the FX0A wait.

Keys are addressed by physical index (0-15, row by row on the 4x4 pad).
Programs see hex values; ``KEY_VALUES``/``KEY_INDICES`` convert between the two.

FX0A is a two-state machine stored in ``last_pressed_key``:

* ``Idle`` (-1): nothing latched. If any key is down in ``keypad_prev`` the
  lowest such index is latched.
* ``KeyLatched(k)``: the instruction re-executes until key ``k`` goes from
  down (``keypad_prev``) to up (``keypad``). Its hex value is then written to
  VX and the machine returns to ``Idle``.

Other keys changing while a key is latched have no effect.
"""

import jax.numpy as jnp
from quirk8.constants import KEY_VALUES, KEY_INDICES, NUM_KEYS
from quirk8.state import EmulatorState

IDLE = -1


def key_index_for_value(value) -> jnp.ndarray:
    """Physical index of the key labelled ``value`` (low nibble only)."""
    return KEY_INDICES[jnp.astype(value, jnp.int32) & 0xF]


def key_value_for_index(index) -> jnp.ndarray:
    """Hex value printed on the key at physical ``index``."""
    return KEY_VALUES[index]


def is_key_down(state: EmulatorState, value) -> jnp.ndarray:
    return state.keypad[key_index_for_value(value)]


def set_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    """Update the live state of the key at physical ``index``."""
    if not 0 <= int(index) < NUM_KEYS:
        raise ValueError(f"Key index must be in 0..{NUM_KEYS - 1}, got {index}")
    return state.replace(keypad=state.keypad.at[int(index)].set(bool(pressed)))


def resolve_key_wait(state: EmulatorState, x) -> EmulatorState:
    """Advance the FX0A state machine by one execution of the instruction."""
    latched = jnp.astype(state.last_pressed_key, jnp.int32)
    idle = latched == IDLE
    first_down = jnp.argmax(state.keypad_prev)
    latched = jnp.where(idle & jnp.any(state.keypad_prev), first_down, latched)

    key = jnp.maximum(latched, 0)
    released = (latched != IDLE) & state.keypad_prev[key] & ~state.keypad[key]

    new_V = jnp.where(released, state.V.at[x].set(key_value_for_index(key)), state.V)
    return state.replace(
        V=new_V,
        pc=jnp.where(released, state.pc, state.pc - 2),
        last_pressed_key=jnp.astype(jnp.where(released, IDLE, latched), jnp.int8),
    )
