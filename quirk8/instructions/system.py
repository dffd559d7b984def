"""CHIP-8 system instructions (0x0xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from quirk8.state import EmulatorState
from quirk8.decode import DecodedInstruction, first_match
from quirk8.logging import report_unknown_opcode
from quirk8.stack import pop
from quirk8.instructions.display import execute_scroll_down, execute_scroll_right, execute_scroll_left


def execute_unknown(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Unrecognised opcode: log it and carry on."""
    report_unknown_opcode(state.pc - 2, instruction.raw)
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


def _set_resolution(hires: bool):
    def execute_set_resolution(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        display = state.display
        if state.variant.mode_switch_clears_display:
            display = jnp.zeros_like(display)
        return state.replace(hires_mode=jnp.array(hires, dtype=jnp.bool_), display=display)
    return execute_set_resolution


execute_low_resolution = _set_resolution(False)   # 00FE
execute_high_resolution = _set_resolution(True)   # 00FF


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions.

    Scrolling and resolution switches only exist on SUPER-CHIP and XO-CHIP;
    on CHIP-8 they fall through to the unknown-opcode handler.
    """
    raw = instruction.raw
    superchip = state.variant.has_superchip_ops
    index = first_match(
        raw == 0x00E0,
        raw == 0x00EE,
        ((raw & 0xFFF0) == 0x00C0) & superchip,
        (raw == 0x00FB) & superchip,
        (raw == 0x00FC) & superchip,
        (raw == 0x00FE) & superchip,
        (raw == 0x00FF) & superchip,
    )
    return jax.lax.switch(
        index,
        [
            execute_clear_screen,
            execute_return,
            execute_scroll_down,
            execute_scroll_right,
            execute_scroll_left,
            execute_low_resolution,
            execute_high_resolution,
            execute_unknown,
        ],
        state, instruction
    )
