"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from quirk8.constants import (
    MEMORY_SIZE, PROGRAM_START, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
    NUM_REGISTERS, NUM_KEYS, NUM_FLAGS,
)
from quirk8.variant import Variant


@dataclass
class StackState:
    """Return-address stack for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.int32))


class EmulatorState(PyTreeNode):
    """Complete interpreter state for one emulation session.

    Attributes:
        rng: PRNG key consumed by CXNN
        memory: 4KB address space
        pc: Address of the next instruction
        I: Index register
        V: General purpose registers V0..VF
        stack: Return addresses
        display: Pixel buffer indexed [x, y], always sized for hi-res
        keypad: Live key states by physical index
        keypad_prev: Key states as of the end of the previous instruction
        last_pressed_key: Key latched by FX0A, -1 when idle
        hires_mode: Whether the 128x64 region is active
        flags: XO-CHIP user flag registers
        displayed: Whether the most recent instruction drew a sprite
        variant: Interpreter dialect, static
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.array(PROGRAM_START, dtype=jnp.uint16))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    keypad_prev: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    last_pressed_key: jnp.ndarray = field(default_factory=lambda: jnp.array(-1, dtype=jnp.int8))
    hires_mode: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))
    flags: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_FLAGS, dtype=jnp.uint8))
    displayed: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))
    variant: Variant = field(pytree_node=False, default=Variant.CHIP8)


def create_state(variant: Variant = Variant.CHIP8, rng: Optional[jax.Array] = None) -> EmulatorState:
    """Create a blank state: PC at 0x200, timers zero, stack empty, no font."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    return EmulatorState(rng=rng, variant=Variant(variant))
