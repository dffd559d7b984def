"""Tests for frame pacing."""

import jax.numpy as jnp
import pytest
from quirk8 import load_rom, run_frame, run_n_frames, run_n_instruction, Variant
from conftest import make_state

# V0 += 1 ten times, then draw, then spin.
COUNTING_ROM = bytes([0x70, 0x01] * 3 + [0xD0, 0x01] + [0x70, 0x01] * 10 + [0x12, 0x1C])


class TestRunFrame:
    @pytest.mark.parametrize("variant", [Variant.CHIP8, Variant.SCHIP1_0])
    def test_draw_ends_frame_on_vblank_variants(self, variant):
        state = load_rom(make_state(variant), COUNTING_ROM)

        state = run_frame(state)

        assert state.V[0] == 3
        assert state.pc == 0x208
        assert state.displayed

    @pytest.mark.parametrize("variant", [Variant.SCHIP1_1, Variant.XOCHIP])
    def test_full_frame_on_other_variants(self, variant):
        state = load_rom(make_state(variant), COUNTING_ROM)

        state = run_frame(state)

        assert state.V[0] == 9
        assert state.pc == 0x214
        assert not state.displayed

    def test_timers_tick_once_per_frame(self, fresh_state):
        state = load_rom(fresh_state, bytes([0x12, 0x00]))
        state = state.replace(delay_timer=jnp.uint8(10), sound_timer=jnp.uint8(1))

        state = run_frame(state)

        assert state.delay_timer == 9
        assert state.sound_timer == 0

    def test_custom_instruction_budget(self, xochip_state):
        state = load_rom(xochip_state, COUNTING_ROM)
        state = run_frame(state, 2)
        assert state.V[0] == 2


class TestRunMany:
    def test_run_n_instruction(self, xochip_state):
        state = load_rom(xochip_state, COUNTING_ROM)
        state = run_n_instruction(state, 5)
        assert state.V[0] == 4
        assert state.pc == 0x20A

    def test_run_n_frames(self, fresh_state):
        state = load_rom(fresh_state, bytes([0x12, 0x00]))
        state = state.replace(delay_timer=jnp.uint8(30))

        state = run_n_frames(state, 12)

        assert state.delay_timer == 18
        assert state.pc == 0x200
