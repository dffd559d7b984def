"""Machine constants shared by every CHIP-8 variant."""

import jax.numpy as jnp

__all__ = [
    "MEMORY_SIZE", "PROGRAM_START", "MAX_ROM_SIZE", "ADDRESS_MASK",
    "STACK_SIZE", "NUM_REGISTERS", "NUM_KEYS", "NUM_FLAGS",
    "LORES_WIDTH", "LORES_HEIGHT", "SCREEN_WIDTH", "SCREEN_HEIGHT",
    "SMALL_FONT_START", "SMALL_FONT_STRIDE", "LARGE_FONT_START", "LARGE_FONT_STRIDE",
    "SMALL_FONT_DATA", "LARGE_FONT_DATA", "KEY_VALUES", "KEY_INDICES",
]

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START
ADDRESS_MASK = 0xFFFF

# Fixed backing buffer for the return stack, far deeper than any real program nests.
STACK_SIZE = 256
NUM_REGISTERS = 16
NUM_KEYS = 16
NUM_FLAGS = 8

# Lo-res is the CHIP-8 native mode; the display buffer is always sized for hi-res.
LORES_WIDTH = 64
LORES_HEIGHT = 32
SCREEN_WIDTH = 128
SCREEN_HEIGHT = 64

SMALL_FONT_START = 0x000
SMALL_FONT_STRIDE = 5
LARGE_FONT_START = 0x050
LARGE_FONT_STRIDE = 10

SMALL_FONT_DATA = jnp.array([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
], dtype=jnp.uint8)

# 8x10 glyphs; A-F follow the XO-CHIP big font.
LARGE_FONT_DATA = jnp.array([
    0x3C, 0x7E, 0xE7, 0xC3, 0xC3, 0xC3, 0xC3, 0xE7, 0x7E, 0x3C,  # 0
    0x18, 0x38, 0x58, 0x18, 0x18, 0x18, 0x18, 0x18, 0x18, 0x3C,  # 1
    0x3E, 0x7F, 0xC3, 0x06, 0x0C, 0x18, 0x30, 0x60, 0xFF, 0xFF,  # 2
    0x3C, 0x7E, 0xC3, 0x03, 0x0E, 0x0E, 0x03, 0xC3, 0x7E, 0x3C,  # 3
    0x06, 0x0E, 0x1E, 0x36, 0x66, 0xC6, 0xFF, 0xFF, 0x06, 0x06,  # 4
    0xFF, 0xFF, 0xC0, 0xC0, 0xFC, 0xFE, 0x03, 0xC3, 0x7E, 0x3C,  # 5
    0x3E, 0x7C, 0xC0, 0xC0, 0xFC, 0xFE, 0xC3, 0xC3, 0x7E, 0x3C,  # 6
    0xFF, 0xFF, 0x03, 0x06, 0x0C, 0x18, 0x30, 0x60, 0x60, 0x60,  # 7
    0x3C, 0x7E, 0xC3, 0xC3, 0x7E, 0x7E, 0xC3, 0xC3, 0x7E, 0x3C,  # 8
    0x3C, 0x7E, 0xC3, 0xC3, 0x7F, 0x3F, 0x03, 0x03, 0x3E, 0x7C,  # 9
    0x7E, 0xFF, 0xC3, 0xC3, 0xC3, 0xFF, 0xFF, 0xC3, 0xC3, 0xC3,  # A
    0xFC, 0xFC, 0xC3, 0xC3, 0xFC, 0xFC, 0xC3, 0xC3, 0xFC, 0xFC,  # B
    0x3C, 0xFF, 0xC3, 0xC0, 0xC0, 0xC0, 0xC0, 0xC3, 0xFF, 0x3C,  # C
    0xFC, 0xFE, 0xC3, 0xC3, 0xC3, 0xC3, 0xC3, 0xC3, 0xFE, 0xFC,  # D
    0xFF, 0xFF, 0xC0, 0xC0, 0xFF, 0xFF, 0xC0, 0xC0, 0xFF, 0xFF,  # E
    0xFF, 0xFF, 0xC0, 0xC0, 0xFF, 0xFF, 0xC0, 0xC0, 0xC0, 0xC0,  # F
], dtype=jnp.uint8)

# Physical keypad, row by row:
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
KEY_VALUES = jnp.array([
    0x1, 0x2, 0x3, 0xC,
    0x4, 0x5, 0x6, 0xD,
    0x7, 0x8, 0x9, 0xE,
    0xA, 0x0, 0xB, 0xF,
], dtype=jnp.uint8)

# Inverse of KEY_VALUES: hex value -> physical index.
KEY_INDICES = jnp.array([
    13, 0, 1, 2,
    4, 5, 6, 8,
    9, 10, 12, 14,
    3, 7, 11, 15,
], dtype=jnp.uint8)
