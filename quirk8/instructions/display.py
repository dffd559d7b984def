"""CHIP-8 display operations: sprite drawing and scrolling."""

import jax.numpy as jnp
from quirk8.state import EmulatorState
from quirk8.decode import DecodedInstruction
from quirk8.constants import MEMORY_SIZE, SCREEN_WIDTH, SCREEN_HEIGHT, LORES_WIDTH, LORES_HEIGHT

# Pre-computed coordinate grids over the full hi-res buffer
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')

SCROLL_COLUMNS = 4


def active_size(state: EmulatorState) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Width and height of the resolution currently in use."""
    width = jnp.where(state.hires_mode, SCREEN_WIDTH, LORES_WIDTH)
    height = jnp.where(state.hires_mode, SCREEN_HEIGHT, LORES_HEIGHT)
    return width, height


def _sprite_bits(state: EmulatorState, row: jnp.ndarray, col: jnp.ndarray, wide) -> jnp.ndarray:
    """Bit of the sprite at I for every (row, col) offset; offsets must be clipped to 0..15."""
    base = jnp.astype(state.I, jnp.int32)
    narrow_byte = jnp.astype(state.memory[(base + row) % MEMORY_SIZE], jnp.int32)
    narrow = (narrow_byte >> (7 - jnp.minimum(col, 7))) & 1

    high = jnp.astype(state.memory[(base + 2 * row) % MEMORY_SIZE], jnp.int32)
    low = jnp.astype(state.memory[(base + 2 * row + 1) % MEMORY_SIZE], jnp.int32)
    wide_bits = (((high << 8) | low) >> (15 - col)) & 1

    return jnp.where(wide, wide_bits, narrow)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    On SUPER-CHIP and XO-CHIP, N=0 draws a 16x16 sprite stored as two bytes per
    row. The start position always wraps; pixels past the edge are clipped or
    wrapped depending on the variant. VF is set when a lit pixel is erased.
    """
    width, height = active_size(state)
    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % width
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % height

    wide = (instruction.n == 0) & state.variant.has_superchip_ops
    sprite_width = jnp.where(wide, 16, 8)
    sprite_height = jnp.where(wide, 16, instruction.n)

    if state.variant.clips_sprites:
        col_offset = xx - sprite_x
        row_offset = yy - sprite_y
    else:
        col_offset = (xx - sprite_x) % width
        row_offset = (yy - sprite_y) % height

    in_sprite = (
        (col_offset >= 0) & (col_offset < sprite_width)
        & (row_offset >= 0) & (row_offset < sprite_height)
        & (xx < width) & (yy < height)
    )
    bits = _sprite_bits(state, jnp.clip(row_offset, 0, 15), jnp.clip(col_offset, 0, 15), wide)
    sprite = (bits == 1) & in_sprite

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[15].set(jnp.astype(collision, jnp.uint8)),
        displayed=jnp.array(True),
    )


def _scroll(state: EmulatorState, dx, dy) -> EmulatorState:
    """Shift the active region by (dx, dy); vacated pixels are cleared."""
    width, height = active_size(state)
    src_x = xx - dx
    src_y = yy - dy
    valid = (src_x >= 0) & (src_x < width) & (src_y >= 0) & (src_y < height)
    shifted = state.display[
        jnp.clip(src_x, 0, SCREEN_WIDTH - 1), jnp.clip(src_y, 0, SCREEN_HEIGHT - 1)
    ] & valid
    active = (xx < width) & (yy < height)
    return state.replace(display=jnp.where(active, shifted, state.display))


def execute_scroll_down(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00CN - Scroll display down N rows."""
    return _scroll(state, 0, instruction.n)


def execute_scroll_right(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00FB - Scroll display right 4 columns."""
    return _scroll(state, SCROLL_COLUMNS, 0)


def execute_scroll_left(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00FC - Scroll display left 4 columns."""
    return _scroll(state, -SCROLL_COLUMNS, 0)
