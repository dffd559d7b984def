"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from quirk8.state import EmulatorState
from quirk8.decode import DecodedInstruction, first_match
from quirk8.constants import (
    MEMORY_SIZE, NUM_FLAGS, NUM_REGISTERS,
    SMALL_FONT_START, SMALL_FONT_STRIDE, LARGE_FONT_START, LARGE_FONT_STRIDE,
)
from quirk8.keypad import resolve_key_wait
from quirk8.instructions.system import execute_unknown


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I, wrapping at 16 bits."""
    return state.replace(I=state.I + jnp.astype(state.V[instruction.x], jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for a key to be pressed and released, store it in VX."""
    return resolve_key_wait(state, instruction.x)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to the small glyph for the low nibble of VX."""
    digit = jnp.astype(state.V[instruction.x] & 0xF, jnp.uint16)
    return state.replace(I=jnp.astype(SMALL_FONT_START + digit * SMALL_FONT_STRIDE, jnp.uint16))


def execute_large_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX30 - Set I to the large glyph for the low nibble of VX."""
    digit = jnp.astype(state.V[instruction.x] & 0xF, jnp.uint16)
    return state.replace(I=jnp.astype(LARGE_FONT_START + digit * LARGE_FONT_STRIDE, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = (jnp.arange(3) + state.I) % MEMORY_SIZE
    return state.replace(memory=state.memory.at[indices].set(digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    indices = (state.I + jnp.arange(NUM_REGISTERS)) % MEMORY_SIZE
    new_values = jnp.where(register_mask, state.V, state.memory[indices])
    new_memory = state.memory.at[indices].set(new_values)

    if state.variant.load_store_increments_i:
        return state.replace(memory=new_memory, I=jnp.astype(state.I + instruction.x + 1, jnp.uint16))
    return state.replace(memory=new_memory)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    indices = (state.I + jnp.arange(NUM_REGISTERS)) % MEMORY_SIZE
    new_V = jnp.where(register_mask, state.memory[indices], state.V)

    if state.variant.load_store_increments_i:
        return state.replace(V=new_V, I=jnp.astype(state.I + instruction.x + 1, jnp.uint16))
    return state.replace(V=new_V)


def execute_save_flags(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX75 - Save V0 through VX (at most V7) to the user flags."""
    mask = jnp.arange(NUM_FLAGS) <= instruction.x
    return state.replace(flags=jnp.where(mask, state.V[:NUM_FLAGS], state.flags))


def execute_load_flags(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX85 - Restore V0 through VX (at most V7) from the user flags."""
    mask = jnp.arange(NUM_FLAGS) <= instruction.x
    return state.replace(V=state.V.at[:NUM_FLAGS].set(jnp.where(mask, state.flags, state.V[:NUM_FLAGS])))


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch Fxxx instructions on their low byte."""
    nn = instruction.nn
    superchip = state.variant.has_superchip_ops
    user_flags = state.variant.has_user_flags

    index = first_match(
        nn == 0x07,
        nn == 0x0A,
        nn == 0x15,
        nn == 0x18,
        nn == 0x1E,
        nn == 0x29,
        (nn == 0x30) & superchip,
        nn == 0x33,
        nn == 0x55,
        nn == 0x65,
        (nn == 0x75) & user_flags,
        (nn == 0x85) & user_flags,
    )

    return jax.lax.switch(
        index,
        [
            execute_get_delay_timer,
            execute_wait_for_key,
            execute_set_delay_timer,
            execute_set_sound_timer,
            execute_add_to_index,
            execute_font_character,
            execute_large_font_character,
            execute_bcd_conversion,
            execute_store_registers,
            execute_load_registers,
            execute_save_flags,
            execute_load_flags,
            execute_unknown,
        ],
        state, instruction
    )
