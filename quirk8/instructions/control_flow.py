"""CHIP-8 control flow instructions."""

import jax
import jax.lax
import jax.numpy as jnp
from quirk8.state import EmulatorState
from quirk8.decode import DecodedInstruction, first_match
from quirk8.stack import push
from quirk8.keypad import is_key_down
from quirk8.instructions.system import execute_unknown


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        condition = condition_fn(state, instruction)
        return jax.lax.cond(
            condition,
            lambda s: s.replace(pc=s.pc + 2),
            lambda s: s,
            state
        )
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y]
)


def register_compare(skip_instruction):
    """5XY0/9XY0 only; any other low nibble is an unknown opcode."""
    def dispatch(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        return jax.lax.cond(instruction.n == 0, skip_instruction, execute_unknown, state, instruction)
    return dispatch


execute_register_equal = register_compare(execute_skip_if_equal_register)
execute_register_not_equal = register_compare(execute_skip_if_not_equal_register)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: is_key_down(state, state.V[inst.x])
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: ~is_key_down(state, state.V[inst.x])
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to NNN + V0, or NNN + VX on SUPER-CHIP.

    Targets past the end of memory are left for fetch to wrap.
    """
    register = instruction.x if state.variant.jump_uses_vx else 0
    offset = jnp.astype(state.V[register], jnp.uint16)
    return state.replace(pc=jnp.astype(instruction.nnn + offset, jnp.uint16))


def execute_key_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch EX9E/EXA1."""
    return jax.lax.switch(
        first_match(instruction.nn == 0x9E, instruction.nn == 0xA1),
        [execute_skip_if_key_pressed, execute_skip_if_key_not_pressed, execute_unknown],
        state, instruction
    )
