"""Stateful front end for hosts (GUI, audio, input) driving one emulation.

The interpreter itself is made of pure functions over ``EmulatorState``.
``Session`` owns one state and exposes the small mutable interface a host
frame loop needs::

    session = Session(Variant.SCHIP1_1)
    session.load_font()
    session.load_rom(rom_bytes)
    while running:
        for index, pressed in host_key_events():
            session.set_keypad_state(index, pressed)
        session.run_frame()
        present(session.get_display())
        audio.set_playing(session.get_sound_timer() > 0)
"""

from typing import Optional, Union

import jax
import numpy as np

from quirk8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, LORES_WIDTH, LORES_HEIGHT
from quirk8.emulator import load_font, load_rom, step
from quirk8.frame import run_frame, INSTRUCTIONS_PER_FRAME
from quirk8.keypad import set_key
from quirk8.logging import get_logger
from quirk8.state import EmulatorState, create_state
from quirk8.timers import decrement_timers
from quirk8.variant import Variant

_step = jax.jit(step)
_decrement_timers = jax.jit(decrement_timers)


class Session:
    """One emulation session with a fixed variant."""

    def __init__(
        self,
        variant: Union[Variant, str] = Variant.CHIP8,
        seed: int = 0,
        instructions_per_frame: int = INSTRUCTIONS_PER_FRAME,
    ):
        """Create a session with PC at 0x200, zeroed timers and an empty stack.

        Args:
            variant: Interpreter dialect, as a ``Variant`` or its name
            seed: Seed for the CXNN random source
            instructions_per_frame: Instruction budget for ``run_frame``
        """
        if isinstance(variant, str):
            variant = Variant.from_name(variant)
        if instructions_per_frame < 1:
            raise ValueError(f"instructions_per_frame must be positive, got {instructions_per_frame}")
        self.variant = Variant(variant)
        self.instructions_per_frame = instructions_per_frame
        self._state = create_state(self.variant, jax.random.PRNGKey(seed))
        get_logger().log_session_start({
            "variant": self.variant.name,
            "seed": seed,
            "instructions_per_frame": instructions_per_frame,
        })

    @property
    def state(self) -> EmulatorState:
        return self._state

    def load_font(self):
        self._state = load_font(self._state)

    def load_rom(self, rom_data: bytes):
        self._state = load_rom(self._state, rom_data)

    def step(self):
        """Execute one instruction."""
        self._state = _step(self._state)

    def run_frame(self):
        """Execute one frame's worth of instructions and tick the timers."""
        self._state = run_frame(self._state, self.instructions_per_frame)

    def decrement_timers(self):
        self._state = _decrement_timers(self._state)

    def set_keypad_state(self, index: int, pressed: bool):
        """Set the key at physical ``index`` (0-15) pressed or released."""
        self._state = set_key(self._state, index, pressed)

    def get_display(self) -> np.ndarray:
        """Copy of the active pixel region as uint8 0/1, shaped (width, height)."""
        width, height = (SCREEN_WIDTH, SCREEN_HEIGHT) if self.hires_mode() else (LORES_WIDTH, LORES_HEIGHT)
        return np.array(self._state.display[:width, :height], dtype=np.uint8)

    def get_sound_timer(self) -> int:
        return int(self._state.sound_timer)

    def displayed_this_frame(self) -> bool:
        """Whether the most recent instruction drew a sprite."""
        return bool(self._state.displayed)

    def hires_mode(self) -> bool:
        return bool(self._state.hires_mode)


def create(variant: Union[Variant, str] = Variant.CHIP8, seed: Optional[int] = None) -> Session:
    """Start a new session."""
    return Session(variant, seed=0 if seed is None else seed)
