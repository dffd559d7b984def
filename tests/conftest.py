"""Test configuration and fixtures for quirk8 tests."""

import pytest
import jax.numpy as jnp
from quirk8 import create_state, load_font, Variant


def make_state(variant=Variant.CHIP8):
    return load_font(create_state(variant))


@pytest.fixture
def fresh_state():
    """Provide a fresh CHIP-8 state with the font loaded."""
    return make_state(Variant.CHIP8)


@pytest.fixture
def chip8_state():
    return make_state(Variant.CHIP8)


@pytest.fixture
def legacy_schip_state():
    return make_state(Variant.SCHIP1_0)


@pytest.fixture
def schip_state():
    return make_state(Variant.SCHIP1_1)


@pytest.fixture
def xochip_state():
    return make_state(Variant.XOCHIP)


@pytest.fixture(params=[Variant.SCHIP1_0, Variant.SCHIP1_1, Variant.XOCHIP], ids=lambda v: v.name)
def superchip_state(request):
    """Every variant with the SUPER-CHIP extensions."""
    return make_state(request.param)


@pytest.fixture(params=list(Variant), ids=lambda v: v.name)
def any_state(request):
    return make_state(request.param)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **values):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x10)."""
    V = state.V
    for name, value in values.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)
