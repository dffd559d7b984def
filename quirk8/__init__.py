"""CHIP-8 / SUPER-CHIP / XO-CHIP interpreter core."""

from quirk8.variant import Variant
from quirk8.state import EmulatorState, StackState, create_state
from quirk8.emulator import execute, fetch, step, load_font, load_rom
from quirk8.decode import DecodedInstruction, decode
from quirk8.keypad import set_key
from quirk8.timers import decrement_timers
from quirk8.frame import run_frame, run_n_frames, run_n_instruction
from quirk8.session import Session, create
from quirk8.constants import *

__all__ = [
    "Variant",
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_font",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "set_key",
    "decrement_timers",
    "run_frame",
    "run_n_frames",
    "run_n_instruction",
    "Session",
    "create",
    "PROGRAM_START",
    "MEMORY_SIZE",
    "SMALL_FONT_START",
    "LARGE_FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "LORES_WIDTH",
    "LORES_HEIGHT",
]
