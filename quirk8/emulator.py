"""Main CHIP-8 emulator execution engine."""

import jax
import jax.lax
import jax.numpy as jnp
from quirk8.state import EmulatorState
from quirk8.decode import decode
from quirk8.constants import (
    MEMORY_SIZE, PROGRAM_START, MAX_ROM_SIZE,
    SMALL_FONT_START, SMALL_FONT_DATA, LARGE_FONT_START, LARGE_FONT_DATA,
)
from quirk8.logging import get_logger
from quirk8.instructions.system import execute_system_instruction
from quirk8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_register_equal,
    execute_register_not_equal, execute_jump_with_offset,
    execute_key_instruction,
)
from quirk8.instructions.alu import execute_alu_operation
from quirk8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from quirk8.instructions.display import execute_display
from quirk8.instructions.misc import execute_misc_instruction


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Clears ``displayed`` beforehand and snapshots the keypad afterwards so the
    next instruction can see key edges.
    """
    decoded_instruction = decode(instruction)
    state = state.replace(displayed=jnp.zeros((), dtype=jnp.bool_))

    state = jax.lax.switch(
        decoded_instruction.opcode,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_register_equal,
            execute_set,
            execute_add,
            execute_alu_operation,
            execute_register_not_equal,
            execute_set_index,
            execute_jump_with_offset,
            execute_random,
            execute_display,
            execute_key_instruction,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )
    return state.replace(keypad_prev=state.keypad)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def _wrap_pc(pc: jnp.ndarray) -> jnp.ndarray:
    """Send a PC that ran off the end of memory back to the program start."""
    return jnp.where(pc >= MEMORY_SIZE, jnp.uint16(PROGRAM_START), pc)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory."""
    pc = _wrap_pc(state.pc)
    instruction = _pack_u16(state.memory[pc], state.memory[(pc + 1) % MEMORY_SIZE])
    return state.replace(pc=_wrap_pc(pc + 2)), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Fetch and execute one instruction."""
    state, instruction = fetch(state)
    return execute(state, instruction)


def load_font(state: EmulatorState) -> EmulatorState:
    """Copy the glyph tables into low memory.

    The small font is always loaded; SUPER-CHIP and XO-CHIP also get the large one.
    """
    memory = state.memory.at[SMALL_FONT_START:SMALL_FONT_START + len(SMALL_FONT_DATA)].set(SMALL_FONT_DATA)
    if state.variant.has_superchip_ops:
        memory = memory.at[LARGE_FONT_START:LARGE_FONT_START + len(LARGE_FONT_DATA)].set(LARGE_FONT_DATA)
    return state.replace(memory=memory)


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Load ROM data into memory starting at 0x200.

    Bytes that do not fit below the end of memory are dropped.
    """
    rom_data = bytes(rom_data)
    loaded = rom_data[:MAX_ROM_SIZE]
    get_logger().log_rom_loaded(len(rom_data), len(loaded))
    rom_array = jnp.array(list(loaded), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(loaded)].set(rom_array)
    return state.replace(memory=new_memory)
