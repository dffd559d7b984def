"""CHIP-8 ALU operations (8xxx).

Every operation works on int32 copies of VX and VY and returns
``(result, flag)``. A flag of ``KEEP_FLAG`` leaves VF as it is after the result
has been written; any other value is written to VF last, so the flag wins when
X is F.
"""

import jax
import jax.lax
import jax.numpy as jnp
from quirk8.state import EmulatorState
from quirk8.decode import DecodedInstruction, first_match
from quirk8.instructions.system import execute_unknown

KEEP_FLAG = -1


def _flag(value) -> jnp.ndarray:
    return jnp.astype(value, jnp.int32)


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return vy, _flag(KEEP_FLAG)


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, _flag(KEEP_FLAG)


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, _flag(KEEP_FLAG)


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, _flag(KEEP_FLAG)


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, VF = carry."""
    result = vx + vy
    return result & 0xFF, _flag(result > 0xFF)


def alu_sub_xy(vx, vy):
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    return (vx - vy) & 0xFF, _flag(vx >= vy)


def alu_shift_right(vx, vy):
    """8XY6 - Shift right, VF = bit shifted out."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx, vy):
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    return (vy - vx) & 0xFF, _flag(vy >= vx)


def alu_shift_left(vx, vy):
    """8XYE - Shift left, VF = bit shifted out."""
    return (vx << 1) & 0xFF, (vx >> 7) & 1


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    variant = state.variant

    def _logic(op):
        def logic(vx, vy):
            result, flag = op(vx, vy)
            if variant.logic_resets_vf:
                flag = _flag(0)
            return result, flag
        return logic

    def _shift(op):
        def shift(vx, vy):
            return op(vy if variant.shift_reads_vy else vx, vy)
        return shift

    operations = [
        alu_set, _logic(alu_or), _logic(alu_and), _logic(alu_xor), alu_add,
        alu_sub_xy, _shift(alu_shift_right), alu_sub_yx, _shift(alu_shift_left),
    ]
    n = instruction.n
    index = first_match(*[n == code for code in (0x0, 0x1, 0x2, 0x3, 0x4, 0x5, 0x6, 0x7, 0xE)])

    def _apply(op):
        def apply(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
            vx = jnp.astype(state.V[instruction.x], jnp.int32)
            vy = jnp.astype(state.V[instruction.y], jnp.int32)
            result, flag = op(vx, vy)
            new_V = state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8))
            vf = jnp.where(flag == KEEP_FLAG, new_V[15], jnp.astype(flag, jnp.uint8))
            return state.replace(V=new_V.at[15].set(vf))
        return apply

    return jax.lax.switch(
        index,
        [_apply(op) for op in operations] + [execute_unknown],
        state, instruction
    )
