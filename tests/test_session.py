"""Tests for the Session front end."""

import numpy as np
import pytest
from quirk8 import Session, Variant, create


# I = glyph "0"; V0 = V1 = 0; draw 5 rows; V2 = 3; sound timer = V2; spin
DRAW_ROM = bytes([
    0xA0, 0x00,
    0x60, 0x00,
    0x61, 0x00,
    0xD0, 0x15,
    0x62, 0x03,
    0xF2, 0x18,
    0x12, 0x0C,
])


@pytest.fixture
def session():
    session = Session(Variant.CHIP8)
    session.load_font()
    session.load_rom(DRAW_ROM)
    return session


class TestSession:
    def test_initial_state(self):
        session = create(Variant.XOCHIP)
        assert session.state.pc == 0x200
        assert session.get_sound_timer() == 0
        assert not session.hires_mode()
        assert not session.displayed_this_frame()

    def test_variant_by_name(self):
        assert Session("schip1.1").variant is Variant.SCHIP1_1
        assert Session("xo-chip").variant is Variant.XOCHIP
        with pytest.raises(ValueError):
            Session("chip-48")

    def test_step_and_display(self, session):
        for _ in range(4):
            session.step()

        assert session.displayed_this_frame()
        display = session.get_display()
        assert display.shape == (64, 32)
        assert display.dtype == np.uint8
        # Top row of the "0" glyph is 0xF0.
        assert list(display[:8, 0]) == [1, 1, 1, 1, 0, 0, 0, 0]

        session.step()
        assert not session.displayed_this_frame()

    def test_display_is_a_copy(self, session):
        for _ in range(4):
            session.step()
        display = session.get_display()
        display[:] = 0
        assert session.get_display().sum() > 0

    def test_sound_timer(self, session):
        for _ in range(6):
            session.step()
        assert session.get_sound_timer() == 3

        session.decrement_timers()
        assert session.get_sound_timer() == 2

    def test_run_frame(self, session):
        session.run_frame()
        # The draw ends the first CHIP-8 frame.
        assert session.state.pc == 0x208
        session.run_frame()
        assert session.get_sound_timer() == 2

    def test_keypad(self, session):
        session.set_keypad_state(3, True)
        assert session.state.keypad[3]
        session.set_keypad_state(3, False)
        assert not session.state.keypad[3]
        with pytest.raises(ValueError):
            session.set_keypad_state(16, True)

    def test_hires_display_shape(self):
        session = Session(Variant.SCHIP1_1)
        session.load_rom(bytes([0x00, 0xFF]))
        session.step()
        assert session.hires_mode()
        assert session.get_display().shape == (128, 64)

    def test_rejects_empty_frame_budget(self):
        with pytest.raises(ValueError):
            Session(Variant.CHIP8, instructions_per_frame=0)
