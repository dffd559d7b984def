"""Tests for ALU operations (8xxx)."""

import jax.numpy as jnp
import numpy as np
import pytest
from quirk8 import execute
from quirk8.instructions.alu import alu_add, alu_sub_xy, alu_sub_yx
from conftest import set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, any_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(any_state, V1=0x42, V2=0x99, VF=0x07)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99
        assert state.V[15] == 0x07

    @pytest.mark.parametrize("opcode,expected", [
        (0x8121, 0xF1),  # OR
        (0x8122, 0x30),  # AND
        (0x8123, 0xC1),  # XOR
    ])
    def test_logic_resets_vf_on_chip8(self, chip8_state, opcode, expected):
        """8XY1/2/3 - CHIP-8 forces VF to 0."""
        state = set_registers(chip8_state, V1=0xF0, V2=0x31, VF=1)

        state = execute(state, opcode)

        assert state.V[1] == expected
        assert state.V[15] == 0

    @pytest.mark.parametrize("opcode,expected", [
        (0x8121, 0xF1),
        (0x8122, 0x30),
        (0x8123, 0xC1),
    ])
    def test_logic_keeps_vf_on_superchip(self, superchip_state, opcode, expected):
        """8XY1/2/3 - Other variants leave VF alone."""
        state = set_registers(superchip_state, V1=0xF0, V2=0x31, VF=1)

        state = execute(state, opcode)

        assert state.V[1] == expected
        assert state.V[15] == 1


class TestArithmetic:
    """Test add and subtract with flags."""

    def test_add_no_carry(self, fresh_state):
        state = set_registers(fresh_state, V1=0x10, V2=0x20)
        state = execute(state, 0x8124)
        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_add_wraps_with_carry(self, fresh_state):
        """8XY4 - 0xFF + 0x01 wraps to 0 with carry."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x01)
        state = execute(state, 0x8124)
        assert state.V[1] == 0x00
        assert state.V[15] == 1

    def test_sub_no_borrow(self, fresh_state):
        state = set_registers(fresh_state, V1=0x30, V2=0x10)
        state = execute(state, 0x8125)
        assert state.V[1] == 0x20
        assert state.V[15] == 1

    def test_sub_with_borrow(self, fresh_state):
        state = set_registers(fresh_state, V1=0x10, V2=0x30)
        state = execute(state, 0x8125)
        assert state.V[1] == 0xE0
        assert state.V[15] == 0

    def test_sub_equal_values(self, fresh_state):
        """8XY5 - Equal operands do not borrow."""
        state = set_registers(fresh_state, V1=0x42, V2=0x42)
        state = execute(state, 0x8125)
        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_reverse_sub(self, fresh_state):
        """8XY7 - VX = VY - VX."""
        state = set_registers(fresh_state, V1=0x10, V2=0x30)
        state = execute(state, 0x8127)
        assert state.V[1] == 0x20
        assert state.V[15] == 1

        state = set_registers(state, V1=0x31, V2=0x30)
        state = execute(state, 0x8127)
        assert state.V[1] == 0xFF
        assert state.V[15] == 0

    def test_flag_wins_when_target_is_vf(self, fresh_state):
        """8FY4 - The flag overwrites the sum when X is F."""
        state = set_registers(fresh_state, VF=0xFF, V1=0x02)
        state = execute(state, 0x8F14)
        assert state.V[15] == 1


class TestExhaustiveFlags:
    """Check every pair of operand values against integer arithmetic."""

    vx, vy = jnp.meshgrid(jnp.arange(256), jnp.arange(256), indexing="ij")

    def test_add_all_pairs(self):
        result, flag = alu_add(self.vx, self.vy)
        total = np.asarray(self.vx) + np.asarray(self.vy)
        np.testing.assert_array_equal(result, total % 256)
        np.testing.assert_array_equal(flag, (total > 255).astype(np.int32))

    def test_sub_xy_all_pairs(self):
        result, flag = alu_sub_xy(self.vx, self.vy)
        vx, vy = np.asarray(self.vx), np.asarray(self.vy)
        np.testing.assert_array_equal(result, (vx - vy) % 256)
        np.testing.assert_array_equal(flag, (vx >= vy).astype(np.int32))

    def test_sub_yx_all_pairs(self):
        result, flag = alu_sub_yx(self.vx, self.vy)
        vx, vy = np.asarray(self.vx), np.asarray(self.vy)
        np.testing.assert_array_equal(result, (vy - vx) % 256)
        np.testing.assert_array_equal(flag, (vy >= vx).astype(np.int32))


class TestShifts:
    """Test the variant split on 8XY6/8XYE."""

    def test_shift_right_reads_vy_on_chip8(self, chip8_state):
        state = set_registers(chip8_state, V1=0x00, V2=0x05)
        state = execute(state, 0x8126)
        assert state.V[1] == 0x02
        assert state.V[15] == 1

    def test_shift_right_in_place_on_superchip(self, superchip_state):
        state = set_registers(superchip_state, V1=0x04, V2=0xFF)
        state = execute(state, 0x8126)
        assert state.V[1] == 0x02
        assert state.V[2] == 0xFF
        assert state.V[15] == 0

    def test_shift_left_reads_vy_on_chip8(self, chip8_state):
        state = set_registers(chip8_state, V1=0x01, V2=0x81)
        state = execute(state, 0x812E)
        assert state.V[1] == 0x02
        assert state.V[15] == 1

    def test_shift_left_in_place_on_superchip(self, superchip_state):
        state = set_registers(superchip_state, V1=0x81, V2=0x00)
        state = execute(state, 0x812E)
        assert state.V[1] == 0x02
        assert state.V[15] == 1

    def test_shift_into_vf(self, superchip_state):
        """8FF6 - Flag is written last."""
        state = set_registers(superchip_state, VF=0x02)
        state = execute(state, 0x8FF6)
        assert state.V[15] == 0


class TestUndefinedALU:
    """Test unknown 8XYN operations."""

    @pytest.mark.parametrize("opcode", [0x8128, 0x8129, 0x812A, 0x812F])
    def test_undefined_is_no_op(self, fresh_state, opcode):
        state = set_registers(fresh_state, V1=0x12, V2=0x34, VF=0x05)
        new_state = execute(state, opcode)
        assert (new_state.V == state.V).all()
